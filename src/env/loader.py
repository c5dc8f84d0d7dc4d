from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml

from nav.grid import CellSpec
from .schema import GridConfig, LoggingConfig, WalkConfig, WalkSettings

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

PROJECT_ROOT = Path(__file__).resolve().parents[2]
CONFIG_ROOT = PROJECT_ROOT / "config"
DEFAULT_CONFIG_PATH = CONFIG_ROOT / "walk.yaml"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _load_yaml(path: Path) -> Dict[str, Any]:
    """Load a YAML mapping from `path`."""
    if not path.exists():
        raise FileNotFoundError(f"Missing config file: {path}")
    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Expected mapping at top of {path}, got {type(data)}")
    return data


def _section(raw: Dict[str, Any], name: str, required: bool = False) -> Dict[str, Any]:
    value = raw.get(name)
    if value is None:
        if required:
            raise ValueError(f"walk config must define a '{name}' section.")
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"'{name}' must be a mapping, got {type(value).__name__}")
    return value


def _parse_blocked(raw: Any) -> List[Tuple[int, int]]:
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise ValueError("grid.blocked must be a list of [x, y] pairs")
    blocked: List[Tuple[int, int]] = []
    for item in raw:
        if not isinstance(item, (list, tuple)) or len(item) != 2:
            raise ValueError(f"grid.blocked entry must be [x, y], got {item!r}")
        blocked.append((int(item[0]), int(item[1])))
    return blocked


def _parse_grid(raw: Dict[str, Any]) -> GridConfig:
    try:
        width = int(raw["width"])
        height = int(raw["height"])
    except KeyError as exc:
        raise ValueError(f"grid.{exc.args[0]} is required") from exc

    return GridConfig(
        width=width,
        height=height,
        spacing=float(raw.get("spacing", 1.0)),
        tolerance=float(raw.get("tolerance", 0.1)),
        blocked=_parse_blocked(raw.get("blocked")),
    )


def _parse_walk(raw: Dict[str, Any]) -> WalkSettings:
    seed = raw.get("seed")
    max_steps = raw.get("max_steps")
    return WalkSettings(
        step_delay=float(raw.get("step_delay", 0.5)),
        seed=None if seed is None else int(seed),
        require_reachable=bool(raw.get("require_reachable", False)),
        max_steps=None if max_steps is None else int(max_steps),
    )


def _parse_logging(raw: Dict[str, Any]) -> LoggingConfig:
    return LoggingConfig(
        level=str(raw.get("level", "INFO")).upper(),
        events_file=raw.get("events_file"),
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_walk_config(path: Optional[Path] = None) -> WalkConfig:
    """Main entry point: returns a validated WalkConfig."""
    raw = _load_yaml(path or DEFAULT_CONFIG_PATH)

    config = WalkConfig(
        grid=_parse_grid(_section(raw, "grid", required=True)),
        walk=_parse_walk(_section(raw, "walk")),
        logging=_parse_logging(_section(raw, "logging")),
    )
    validate_walk_config(config)
    return config


def validate_walk_config(config: WalkConfig) -> None:
    """Sanity checks; raises ValueError naming the offending key."""
    grid = config.grid
    if grid.width <= 0 or grid.height <= 0:
        raise ValueError(f"grid.width/height must be positive, got {grid.width}x{grid.height}")
    if grid.spacing <= 0:
        raise ValueError(f"grid.spacing must be positive, got {grid.spacing}")
    if not 0 <= grid.tolerance < grid.spacing / 2:
        raise ValueError(
            f"grid.tolerance must be in [0, spacing/2), got {grid.tolerance}"
        )
    for (x, y) in grid.blocked:
        if not (0 <= x < grid.width and 0 <= y < grid.height):
            raise ValueError(f"grid.blocked cell {(x, y)} is outside the grid")

    walk = config.walk
    if walk.step_delay < 0:
        raise ValueError(f"walk.step_delay must be >= 0, got {walk.step_delay}")
    if walk.max_steps is not None and walk.max_steps <= 0:
        raise ValueError(f"walk.max_steps must be positive, got {walk.max_steps}")

    if config.logging.level not in _LOG_LEVELS:
        raise ValueError(f"Invalid logging.level: {config.logging.level}")


def cells_from_grid(grid: GridConfig) -> List[CellSpec]:
    """
    Expand a GridConfig into CellSpecs, row by row.

    Positions are lattice index * spacing; the payload is a cell label the
    scene can use as a visual handle.
    """
    blocked = set(grid.blocked)
    cells: List[CellSpec] = []
    for y in range(grid.height):
        for x in range(grid.width):
            if (x, y) in blocked:
                continue
            cells.append(
                CellSpec(
                    position=(x * grid.spacing, y * grid.spacing),
                    payload=f"cell-{x}-{y}",
                )
            )
    logger.debug(
        "Generated %d cells (%d blocked) for %dx%d grid",
        len(cells), len(blocked), grid.width, grid.height,
    )
    return cells
