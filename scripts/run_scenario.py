"""CLI for running offline elevator call scenarios defined in JSON configs."""
from __future__ import annotations

import argparse
import json
import logging
from dataclasses import asdict
from pathlib import Path
from typing import Dict, List, Optional

from liftsim import Building, BuildingConfig, Simulation


def build_simulation(config: Dict) -> Simulation:
    building_cfg = dict(config.get("building", {}))
    if "strategy" in config:
        building_cfg.setdefault("strategy", config["strategy"])
    if "timing" in config:
        building_cfg.setdefault("timing", config["timing"])
    building = Building.from_config(BuildingConfig.from_dict(building_cfg))
    return Simulation(building)


def schedule_calls(simulation: Simulation, calls: List[Dict]) -> None:
    for call in sorted(calls, key=lambda c: c.get("time", 0)):
        simulation.schedule_call(call.get("time", 0), call["floor"])


def run_simulation(simulation: Simulation, config: Dict) -> List[Dict]:
    schedule_calls(simulation, config.get("calls", []))
    duration = config.get("duration")
    if duration is None:
        simulation.run_until_idle()
    else:
        simulation.run(duration)
    return [{"event": name, **payload} for name, payload in simulation.event_log]


def save_results(output_path: Optional[Path], data: Dict) -> None:
    if not output_path:
        return
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(json.dumps(data, indent=2))


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("config", type=Path, help="Path to a JSON scenario configuration file")
    parser.add_argument(
        "--output",
        type=Path,
        help="Optional file path to write the event log and metrics as JSON",
    )
    parser.add_argument("--log-level", default="WARNING", help="Logging level (default: WARNING)")
    args = parser.parse_args()

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    config = json.loads(args.config.read_text())
    simulation = build_simulation(config)
    events = run_simulation(simulation, config)

    final_metrics = asdict(simulation.metrics.snapshot(simulation.current_time))
    results = {
        "scenario": config.get("name", args.config.stem),
        "description": config.get("description"),
        "strategy": simulation.building.strategy_name,
        "final_state": simulation.building.snapshot(),
        "final_metrics": final_metrics,
        "events": events,
    }

    save_results(args.output, results)

    print(f"Scenario: {results['scenario']}")
    if results["description"]:
        print(results["description"])
    print(f"Strategy: {results['strategy']}")
    print(f"Simulated time: {simulation.current_time:.1f}s")
    print("Final metrics:")
    for key, value in final_metrics.items():
        print(f"  {key}: {value}")
    if args.output:
        print(f"Saved events to {args.output}")


if __name__ == "__main__":
    main()
