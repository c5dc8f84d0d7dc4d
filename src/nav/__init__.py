# src/nav/__init__.py
"""
Navigation core for gridwalk.

Provides:
- build_graph / NavGraph: 4-connected graph over grid cells
- A* pathfinding: find_path, find_path_between
- Mover: path_to_steps to turn a path into ordered walk steps
"""

from __future__ import annotations

from .grid import (
    Cell,
    CellSpec,
    GridBuildError,
    GridNode,
    NavGraph,
    Position,
    build_graph,
)
from .pathfinder import (
    MAX_STEPS_EXHAUSTED,
    NO_PATH_FOUND,
    PathPreconditionError,
    PathReconstructionError,
    PathfindingResult,
    find_path,
    find_path_between,
    heuristic,
)
from .mover import WalkStep, path_to_steps

__all__ = [
    "Cell",
    "CellSpec",
    "GridBuildError",
    "GridNode",
    "NavGraph",
    "Position",
    "build_graph",
    "MAX_STEPS_EXHAUSTED",
    "NO_PATH_FOUND",
    "PathPreconditionError",
    "PathReconstructionError",
    "PathfindingResult",
    "find_path",
    "find_path_between",
    "heuristic",
    "WalkStep",
    "path_to_steps",
]
