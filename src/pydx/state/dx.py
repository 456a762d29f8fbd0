"""Device & licensing store."""

from __future__ import annotations

from pydx.models.device import Dx, DxStatus, License
from pydx.state.store import LoadableState, LoadableStore


class DxState(LoadableState):
    dx: Dx | None = None
    status: DxStatus | None = None
    license: License | None = None


class DxStore(LoadableStore[DxState]):
    """Holds device identity, runtime status and license.

    Each setter replaces its field whole and performs no validation.
    """

    def __init__(self, initial: DxState | None = None, *, name: str = "dx-store") -> None:
        super().__init__(initial if initial is not None else DxState(), name=name)

    def set_dx(self, dx: Dx | None) -> None:
        self.set_state({"dx": dx})

    def set_status(self, status: DxStatus | None) -> None:
        self.set_state({"status": status})

    def set_license(self, license: License | None) -> None:  # noqa: A002
        self.set_state({"license": license})
