"""State/store layer.

Observable containers holding the data fetched from the DX backend:
device & license, telemetry with its bounded history, and the last event
query. Stores never call each other or the network; callers fetch and
then apply results through the store setters.
"""
