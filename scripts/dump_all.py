#!/usr/bin/env python3
"""Dump everything pydx can read from a DX device.

Calls every read-only endpoint and prints the parsed model fields next to
the raw API JSON, which makes unparsed fields easy to spot.

Usage
-----
Point the client at a device and run::

    export DX_BASE_URL="http://192.168.1.20:8080"
    export DX_ACCESS_TOKEN="..."
    python scripts/dump_all.py

Options::

    --json               Output as machine-readable JSON
    --output FILE        Write JSON output to FILE
    --skip-events        Skip the event list and event statistics
    --skip-statistics    Skip the statistics endpoints
    --date YYYY-MM-DD    Day used for summary/trend (default: today)
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from collections.abc import Awaitable, Callable
from datetime import UTC, date, datetime
from pathlib import Path
from typing import Any

from pydantic import BaseModel

from pydx import DxClient, DxConfig, DxError
from pydx.models.statistics import EventLogRequest, PeriodRequest, StatisticsUnit


def _section(title: str) -> str:
    line = "=" * 60
    return f"\n{line}\n  {title}\n{line}"


def _parsed(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, list):
        return [_parsed(item) for item in value]
    return value


def _raw(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return getattr(value, "raw", None)
    if isinstance(value, list):
        return [_raw(item) for item in value]
    return None


async def _dump(
    name: str,
    call: Callable[[], Awaitable[Any]],
    *,
    out: list[str],
    result: dict[str, Any],
) -> None:
    out.append(_section(name.upper()))
    try:
        value = await call()
    except DxError as exc:
        out.append(f"  !! {name} failed: {exc}")
        result[name] = {"error": str(exc)}
        return

    parsed = _parsed(value)
    raw = _raw(value)
    out.append(json.dumps(parsed, indent=2, default=str, ensure_ascii=False))
    if raw:
        out.append(f"\n  -- {name} (raw JSON) --")
        out.append(json.dumps(raw, indent=2, default=str, ensure_ascii=False))
    result[name] = {"parsed": parsed, "raw": raw}


async def main() -> None:
    parser = argparse.ArgumentParser(description="Dump all data pydx can fetch for debugging / development.")
    parser.add_argument("--json", action="store_true", dest="json_mode", help="Output machine-readable JSON")
    parser.add_argument("--output", "-o", help="Write JSON output to FILE instead of stdout")
    parser.add_argument("--skip-events", action="store_true", help="Skip event endpoints")
    parser.add_argument("--skip-statistics", action="store_true", help="Skip statistics endpoints")
    parser.add_argument("--date", default=date.today().isoformat(), help="Day used for summary and trend")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING)

    config = DxConfig.from_env()
    result: dict[str, Any] = {"timestamp": datetime.now(UTC).isoformat(), "api_url": config.api_url}
    out: list[str] = [_section("pydx dump_all"), f"  time    : {result['timestamp']}", f"  api_url : {config.api_url}"]

    async with DxClient(config) as client:
        await _dump("dx", client.get_dx, out=out, result=result)
        await _dump("dx_status", client.get_dx_status, out=out, result=result)
        await _dump("license", client.get_license, out=out, result=result)
        await _dump("metrics", client.get_metrics, out=out, result=result)

        if not args.skip_events:
            await _dump("events", client.get_events, out=out, result=result)
            await _dump("event_statistics", client.get_event_statistics, out=out, result=result)

        if not args.skip_statistics:
            period = PeriodRequest(unit=StatisticsUnit.DAY, date=args.date)
            await _dump("event_log", lambda: client.get_event_log(EventLogRequest()), out=out, result=result)
            await _dump("summary", lambda: client.get_summary(period), out=out, result=result)
            await _dump("trend", lambda: client.get_trend(period), out=out, result=result)
            await _dump("event_types", client.get_event_types, out=out, result=result)

    if not args.json_mode:
        print("\n".join(out))
        if not args.output:
            return

    payload = json.dumps(result, indent=2, default=str, ensure_ascii=False)
    if args.output:
        Path(args.output).write_text(payload, encoding="utf-8")
        print(f"JSON written to {args.output}", file=sys.stderr)
    else:
        print(payload)


if __name__ == "__main__":
    asyncio.run(main())
