# GridConfig, WalkSettings, LoggingConfig, WalkConfig dataclasses
# src/env/schema.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple


@dataclass
class GridConfig:
    """Rectangular lattice of cells, minus blocked ones."""
    width: int
    height: int
    spacing: float = 1.0       # world units between neighbouring cell centres
    tolerance: float = 0.1     # absorbs float noise in positions
    blocked: List[Tuple[int, int]] = field(default_factory=list)  # lattice (i, j)


@dataclass
class WalkSettings:
    """How the collaborator walks a found path."""
    step_delay: float = 0.5            # seconds between visited cells
    seed: Optional[int] = None         # RNG seed for random placement
    require_reachable: bool = False    # draw goal from the start's component
    max_steps: Optional[int] = None    # A* expansion bound, None = unbounded


@dataclass
class LoggingConfig:
    level: str = "INFO"
    events_file: Optional[str] = None  # JSONL path, None disables


@dataclass
class WalkConfig:
    """Fully resolved config/walk.yaml."""
    grid: GridConfig
    walk: WalkSettings = field(default_factory=WalkSettings)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
