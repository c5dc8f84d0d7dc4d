# src/nav/mover.py
"""
Mover: convert path results into ordered walk steps.

The nav layer only owns:
- path → sequence of WalkSteps
- start/goal flags per step

It does NOT move anything or wait between steps; that's the walk layer's job.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List

from .grid import GridNode, Position
from .pathfinder import PathfindingResult


@dataclass(frozen=True)
class WalkStep:
    """One cell the actor visits, in path order."""

    index: int
    node: GridNode
    is_start: bool
    is_goal: bool

    @property
    def position(self) -> Position:
        return self.node.position

    @property
    def payload(self) -> Any:
        return self.node.payload


def path_to_steps(path_result: PathfindingResult) -> List[WalkStep]:
    """
    Convert a PathfindingResult into WalkSteps.

    Unsuccessful results produce an empty list. A single-node path yields
    one step flagged as both start and goal.
    """
    if not path_result.success or not path_result.path:
        return []

    last = len(path_result.path) - 1
    return [
        WalkStep(index=i, node=node, is_start=(i == 0), is_goal=(i == last))
        for i, node in enumerate(path_result.path)
    ]
