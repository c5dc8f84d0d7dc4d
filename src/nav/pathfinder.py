# src/nav/pathfinder.py
"""
A* pathfinding over NavGraph.

- Manhattan distance heuristic in lattice hops.
- Unit edge cost, 4-directional neighbours.
- Optional max_steps guard for callers that want a hard bound.

All search state (open heap, g-scores, parents, closed set) is local to a
single call, so one NavGraph can serve any number of queries, concurrently
or not.
"""

from __future__ import annotations

import heapq
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set, Tuple

from .grid import GridNode, NavGraph, Position

logger = logging.getLogger(__name__)

NO_PATH_FOUND = "no_path_found"
MAX_STEPS_EXHAUSTED = "max_steps_exhausted"


class PathPreconditionError(ValueError):
    """Caller error: empty graph, or start/goal not owned by the graph."""


class PathReconstructionError(RuntimeError):
    """Parent links are broken; should never happen for a finished search."""


@dataclass
class PathfindingResult:
    """Structured result for a pathfinding attempt."""

    path: List[GridNode] = field(default_factory=list)
    success: bool = False
    reason: str | None = None
    expanded: int = 0

    @property
    def cost(self) -> Optional[int]:
        """Number of edges on the path, or None when nothing was found."""
        if not self.success:
            return None
        return len(self.path) - 1

    def positions(self) -> List[Position]:
        return [node.position for node in self.path]


def heuristic(a: GridNode, b: GridNode) -> int:
    """Manhattan distance between lattice indices."""
    return abs(a.cell[0] - b.cell[0]) + abs(a.cell[1] - b.cell[1])


def find_path(
    graph: NavGraph,
    start: GridNode,
    goal: GridNode,
    max_steps: int | None = None,
) -> PathfindingResult:
    """
    A* search for a shortest path from start to goal on `graph`.

    Heap entries are ordered (f, h, seq): lowest f first, then the node
    closest to the goal, then insertion order. Path length is always
    minimal; among equally short paths this order picks one
    deterministically for a given graph build order.

    Returns a PathfindingResult with:
      - path: start..goal inclusive, or empty when not found
      - success: bool
      - reason: NO_PATH_FOUND / MAX_STEPS_EXHAUSTED when not successful

    Raises PathPreconditionError if the graph is empty or start/goal are
    not nodes of this graph.
    """
    _check_preconditions(graph, start, goal)

    if start is goal:
        return PathfindingResult(path=[start], success=True)

    seq = 0
    h0 = heuristic(start, goal)
    open_heap: List[Tuple[int, int, int, GridNode]] = [(h0, h0, seq, start)]

    came_from: Dict[GridNode, GridNode] = {}
    g_score: Dict[GridNode, int] = {start: 0}
    closed: Set[GridNode] = set()

    expanded = 0

    while open_heap:
        if max_steps is not None and expanded >= max_steps:
            logger.debug("A* gave up after %d expansions", expanded)
            return PathfindingResult(success=False, reason=MAX_STEPS_EXHAUSTED, expanded=expanded)

        _, _, _, current = heapq.heappop(open_heap)
        if current in closed:
            # stale entry superseded by a cheaper push
            continue

        if current is goal:
            path = _reconstruct_path(came_from, start, current)
            logger.debug(
                "A* found path of %d edges after %d expansions", len(path) - 1, expanded
            )
            return PathfindingResult(path=path, success=True, expanded=expanded)

        closed.add(current)
        expanded += 1

        tentative_g = g_score[current] + 1
        for nxt in current.neighbors:
            if nxt in closed:
                continue
            if tentative_g < g_score.get(nxt, float("inf")):
                came_from[nxt] = current
                g_score[nxt] = tentative_g
                h = heuristic(nxt, goal)
                seq += 1
                heapq.heappush(open_heap, (tentative_g + h, h, seq, nxt))

    logger.debug("A* exhausted open set after %d expansions", expanded)
    return PathfindingResult(success=False, reason=NO_PATH_FOUND, expanded=expanded)


def find_path_between(
    graph: NavGraph,
    start: Position,
    goal: Position,
    max_steps: int | None = None,
) -> PathfindingResult:
    """Resolve positions to nodes, then run find_path."""
    if len(graph) == 0:
        raise PathPreconditionError("Cannot search an empty graph")
    try:
        start_node = graph.node_at(start)
        goal_node = graph.node_at(goal)
    except KeyError as exc:
        raise PathPreconditionError(str(exc.args[0])) from exc
    return find_path(graph, start_node, goal_node, max_steps=max_steps)


def _check_preconditions(graph: NavGraph, start: GridNode, goal: GridNode) -> None:
    if len(graph) == 0:
        raise PathPreconditionError("Cannot search an empty graph")
    if not graph.contains(start):
        raise PathPreconditionError(f"Start node {start.position!r} is not part of this graph")
    if not graph.contains(goal):
        raise PathPreconditionError(f"Goal node {goal.position!r} is not part of this graph")


def _reconstruct_path(
    came_from: Dict[GridNode, GridNode],
    start: GridNode,
    current: GridNode,
) -> List[GridNode]:
    """Walk parent links back to start, then reverse."""
    path: List[GridNode] = [current]
    while current is not start:
        parent = came_from.get(current)
        if parent is None:
            raise PathReconstructionError(
                f"Node {current.position!r} has no parent and is not the start node"
            )
        current = parent
        path.append(current)
    path.reverse()
    return path
