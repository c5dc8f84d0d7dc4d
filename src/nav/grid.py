# src/nav/grid.py
"""
NavGraph: undirected 4-connected graph built from grid cells.

This module does not know anything about rendering. It only:
- Turns (position, payload) cell descriptors into GridNodes.
- Connects orthogonal neighbours that sit one grid step apart.

Positions may carry float noise (scene transforms, editor snapping); a
tolerance absorbs that when deciding adjacency.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple, Union

logger = logging.getLogger(__name__)

# (x, y) coordinates, int or float
Position = Tuple[float, float]

# (i, j) integer lattice index
Cell = Tuple[int, int]

DEFAULT_SPACING = 1.0
DEFAULT_TOLERANCE = 0.1

_OFFSETS: Tuple[Cell, ...] = ((1, 0), (-1, 0), (0, 1), (0, -1))


class GridBuildError(ValueError):
    """Raised when cell input cannot form a valid grid (duplicates, bad spacing)."""


@dataclass(frozen=True)
class CellSpec:
    """Input descriptor for one walkable cell."""

    position: Position
    payload: Any = None


@dataclass(eq=False)
class GridNode:
    """
    One traversable grid cell.

    Nodes hash and compare by identity; two nodes with equal positions can
    only come from two different graphs.
    """

    position: Position
    cell: Cell
    payload: Any = None
    neighbors: List["GridNode"] = field(default_factory=list, repr=False)

    @property
    def x(self) -> float:
        return self.position[0]

    @property
    def y(self) -> float:
        return self.position[1]


@dataclass
class NavGraph:
    """
    Node set plus lattice-index lookup.

    Responsibilities:
    - Hold nodes in build order.
    - Resolve positions to nodes.

    It does NOT store any search state.
    """

    spacing: float = DEFAULT_SPACING
    tolerance: float = DEFAULT_TOLERANCE
    # lattice anchor: the (min x, min y) corner of the input cells
    origin: Position = (0.0, 0.0)
    nodes: List[GridNode] = field(default_factory=list)
    _index: Dict[Cell, GridNode] = field(default_factory=dict, repr=False)

    def __len__(self) -> int:
        return len(self.nodes)

    def __iter__(self) -> Iterator[GridNode]:
        return iter(self.nodes)

    def cell_of(self, position: Position) -> Cell:
        """
        Snap a position to its lattice index, counted from `origin`.

        Cell centres sit on whole multiples of `spacing` from the origin,
        so rounding never lands on a .5 tie for in-tolerance input.
        """
        return (
            int(round((position[0] - self.origin[0]) / self.spacing)),
            int(round((position[1] - self.origin[1]) / self.spacing)),
        )

    def get(self, position: Position) -> Optional[GridNode]:
        node = self._index.get(self.cell_of(position))
        if node is None or not _close(node.position, position, self.tolerance):
            return None
        return node

    def node_at(self, position: Position) -> GridNode:
        """Like get(), but raises KeyError for unknown positions."""
        node = self.get(position)
        if node is None:
            raise KeyError(f"No grid node at position {position!r}")
        return node

    def contains(self, node: GridNode) -> bool:
        """True only if `node` is the very object this graph owns for its cell."""
        return self._index.get(node.cell) is node

    def edge_count(self) -> int:
        return sum(len(n.neighbors) for n in self.nodes) // 2

    def clear(self) -> None:
        """Drop all nodes. Callers rebuild with build_graph()."""
        for node in self.nodes:
            node.neighbors.clear()
        self.nodes.clear()
        self._index.clear()


def build_graph(
    cells: Iterable[Union[CellSpec, Tuple[Position, Any]]],
    *,
    spacing: float = DEFAULT_SPACING,
    tolerance: float = DEFAULT_TOLERANCE,
) -> NavGraph:
    """
    Build a NavGraph from cell descriptors.

    Two cells become neighbours iff one axis differs by `spacing` (within
    `tolerance`) and the other axis matches (within `tolerance`).

    Construction is O(n): each node only looks up its 4 lattice offsets in
    the index instead of scanning every other node. The lattice is anchored
    at the lowest x and lowest y of the input, so grids offset from the
    world origin (half-cell centres, for example) index cleanly.

    Raises GridBuildError on non-positive spacing, a tolerance that would
    blur neighbouring cells together, or two cells on the same lattice index.
    """
    if spacing <= 0:
        raise GridBuildError(f"spacing must be positive, got {spacing}")
    if tolerance < 0 or tolerance >= spacing / 2:
        raise GridBuildError(
            f"tolerance must be in [0, spacing/2), got {tolerance} for spacing {spacing}"
        )

    specs = [raw if isinstance(raw, CellSpec) else CellSpec(*raw) for raw in cells]
    origin: Position = (0.0, 0.0)
    if specs:
        origin = (
            min(spec.position[0] for spec in specs),
            min(spec.position[1] for spec in specs),
        )

    graph = NavGraph(spacing=spacing, tolerance=tolerance, origin=origin)

    for spec in specs:
        position = (spec.position[0], spec.position[1])
        cell = graph.cell_of(position)
        existing = graph._index.get(cell)
        if existing is not None:
            raise GridBuildError(
                f"Duplicate cell at {position!r} (already have {existing.position!r})"
            )
        node = GridNode(position=position, cell=cell, payload=spec.payload)
        graph._index[cell] = node
        graph.nodes.append(node)

    for node in graph.nodes:
        i, j = node.cell
        for di, dj in _OFFSETS:
            other = graph._index.get((i + di, j + dj))
            if other is not None and _is_orthogonal_step(node, other, spacing, tolerance):
                node.neighbors.append(other)

    logger.debug(
        "Built nav graph: %d nodes, %d edges (spacing=%s, tolerance=%s)",
        len(graph.nodes),
        graph.edge_count(),
        spacing,
        tolerance,
    )
    return graph


def _is_orthogonal_step(a: GridNode, b: GridNode, spacing: float, tolerance: float) -> bool:
    dx = abs(a.x - b.x)
    dy = abs(a.y - b.y)
    if dy <= tolerance:
        return abs(dx - spacing) <= tolerance
    if dx <= tolerance:
        return abs(dy - spacing) <= tolerance
    return False


def _close(a: Position, b: Position, tolerance: float) -> bool:
    return abs(a[0] - b[0]) <= tolerance and abs(a[1] - b[1]) <= tolerance
