#!/usr/bin/env python3
"""Show (and optionally change) climate state for every vehicle on an account.

Logs in, discovers vehicles through :class:`ClimatePlatform`, and reads
each accessory's climate characteristics, printing the raw climate JSON
alongside so unparsed fields are easy to spot.

Usage
-----
Set environment variables and run::

    export TESLA_USERNAME="you@example.com"
    export TESLA_PASSWORD="your-password"
    python scripts/climate_status.py

Options::

    --vehicle ID         Only query this vehicle id (default: all vehicles)
    --set-mode MODE      Send off/heat/cool/auto before reading
    --set-temp CELSIUS   Set the target temperature before reading
    --json               Output machine-readable JSON
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from teslaclimate import (  # noqa: E402
    ClimateAccessory,
    ClimateConfig,
    ClimatePlatform,
    HeatingCoolingMode,
    TeslaClient,
    TeslaError,
)

_MODES = {mode.name.lower(): mode for mode in HeatingCoolingMode}


def _section(title: str) -> str:
    return f"\n{'═' * 60}\n  {title}\n{'═' * 60}"


async def _read_accessory(accessory: ClimateAccessory) -> dict[str, Any]:
    data: dict[str, Any] = {"vehicle_id": accessory.vehicle_id, "name": accessory.name}
    for key, binding in accessory.characteristics().items():
        try:
            value = await binding.get()
        except TeslaError as exc:
            data[key] = f"<{type(exc).__name__}: {exc}>"
            continue
        data[key] = value.name if isinstance(value, HeatingCoolingMode) else value
    return data


async def _apply(accessory: ClimateAccessory, args: argparse.Namespace) -> None:
    if args.set_mode:
        committed = await accessory.set_target_heating_cooling_state(_MODES[args.set_mode])
        print(f"  mode set  : {committed.name if committed is not None else None}", file=sys.stderr)
    if args.set_temp is not None:
        committed_temp = await accessory.set_target_temperature(args.set_temp)
        print(f"  temp set  : {committed_temp}", file=sys.stderr)


async def main() -> int:
    parser = argparse.ArgumentParser(description="Show climate state for vehicles on a Tesla account.")
    parser.add_argument("--vehicle", help="Only query this vehicle id (default: all vehicles)")
    parser.add_argument("--set-mode", choices=sorted(_MODES), help="Target heating/cooling mode to apply first")
    parser.add_argument("--set-temp", type=float, help="Target temperature (°C) to apply first")
    parser.add_argument("--json", action="store_true", dest="json_mode", help="Output machine-readable JSON")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING)

    config = ClimateConfig.from_env().validate()
    result: dict[str, Any] = {"timestamp": datetime.now(UTC).isoformat(), "vehicles": []}

    async with TeslaClient(config) as client:
        platform = ClimatePlatform(config, client)
        accessories = await platform.discover()
        if args.vehicle:
            accessories = [a for a in accessories if a.vehicle_id == args.vehicle]

        for accessory in accessories:
            await _apply(accessory, args)
            platform.cache.invalidate(accessory.vehicle_id)
            entry = await _read_accessory(accessory)
            state = await client.get_climate_state(accessory.vehicle_id)
            entry["raw"] = state.raw if state is not None else None
            result["vehicles"].append(entry)

    if args.json_mode:
        print(json.dumps(result, indent=2, default=str, ensure_ascii=False))
        return 0

    print(_section("teslaclimate status"))
    print(f"  time      : {result['timestamp']}")
    for entry in result["vehicles"]:
        print(_section(f"{entry['name']} ({entry['vehicle_id']})"))
        for key, value in entry.items():
            if key in ("vehicle_id", "name", "raw"):
                continue
            print(f"  {key:<28}: {value}")
        print("  raw:")
        print(json.dumps(entry["raw"], indent=4, default=str, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
