# src/cli/walk_demo.py
"""
Run one walk on the configured grid.

    python -m cli.walk_demo --seed 7
    python -m cli.walk_demo --start 0 0 --goal 7 5 --delay 0 --no-dashboard

Start/goal are lattice indices; they are scaled by grid.spacing before
lookup. Prints a JSON summary on stdout; logs go to stderr.

Returns 0 when the actor reaches the goal and 1 for every other outcome.
Config and start errors are also reported as JSON on stderr.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from env.loader import DEFAULT_CONFIG_PATH, cells_from_grid, load_walk_config
from monitoring.bus import EventBus
from monitoring.dashboard_tui import GridDashboard
from monitoring.logger import JsonFileLogger
from walk.logging_config import configure_logging
from walk.session import WalkSession
from walk.state import WalkPhase, WalkState

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Place an actor and a goal on a grid and walk the shortest path."
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=DEFAULT_CONFIG_PATH,
        help="Path to walk.yaml",
    )
    parser.add_argument("--seed", type=int, default=None, help="Override walk.seed")
    parser.add_argument(
        "--start", type=int, nargs=2, metavar=("X", "Y"), default=None,
        help="Start cell (lattice index); random if omitted",
    )
    parser.add_argument(
        "--goal", type=int, nargs=2, metavar=("X", "Y"), default=None,
        help="Goal cell (lattice index); random if omitted",
    )
    parser.add_argument("--delay", type=float, default=None, help="Override walk.step_delay (seconds)")
    parser.add_argument(
        "--events-log", type=Path, default=None,
        help="Write JSONL events here (overrides logging.events_file)",
    )
    parser.add_argument(
        "--no-dashboard", action="store_true",
        help="Skip the live terminal grid view",
    )
    return parser


def summarize(session: WalkSession, state: WalkState) -> Dict[str, Any]:
    path: List[List[float]] = [list(node.position) for node in state.path]
    return {
        "walk_id": session.walk_id,
        "phase": state.phase.name,
        "start": list(state.start.position) if state.start else None,
        "goal": list(state.goal.position) if state.goal else None,
        "length": len(path) - 1 if path else None,
        "path": path,
        "failure": state.failure,
    }


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = load_walk_config(args.config)
    except (OSError, KeyError, ValueError, yaml.YAMLError) as exc:
        return _fail_to_start("Config could not be loaded", exc)

    if args.seed is not None:
        config.walk.seed = args.seed
    if args.delay is not None:
        config.walk.step_delay = max(args.delay, 0.0)

    configure_logging(config.logging.level, stream=sys.stderr)

    bus = EventBus()
    events_file = args.events_log or config.logging.events_file
    json_log = JsonFileLogger(Path(events_file), bus) if events_file else None

    spacing = config.grid.spacing
    start = tuple(v * spacing for v in args.start) if args.start else None
    goal = tuple(v * spacing for v in args.goal) if args.goal else None

    session = WalkSession(
        cells_from_grid(config.grid),
        bus=bus,
        settings=config.walk,
        spacing=spacing,
        tolerance=config.grid.tolerance,
    )
    dashboard: Optional[GridDashboard] = None

    try:
        graph = session.build()
        if args.no_dashboard:
            state = session.run(start=start, goal=goal)
        else:
            dashboard = GridDashboard(bus, [node.cell for node in graph])
            with dashboard.live_view():
                state = session.run(start=start, goal=goal)
    except (KeyError, ValueError) as exc:
        return _fail_to_start("Walk could not start", exc)
    finally:
        if dashboard is not None:
            dashboard.detach()
        session.close()
        if json_log is not None:
            json_log.close()

    print(json.dumps(summarize(session, state), indent=2, sort_keys=True))
    return 0 if state.phase is WalkPhase.COMPLETED else 1


def _fail_to_start(what: str, exc: Exception) -> int:
    logger.error("%s: %s", what, exc)
    print(json.dumps({"error": str(exc)}), file=sys.stderr)
    return 1


if __name__ == "__main__":
    sys.exit(main())
