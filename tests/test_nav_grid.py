# tests/test_nav_grid.py
"""
Unit tests for nav.grid.build_graph.

Covers:
- Orthogonal-only, unit-distance adjacency
- Symmetry
- Float noise tolerance and non-unit spacing
- Empty input, duplicates, bad parameters
- Position lookup
"""

from __future__ import annotations

from typing import List

import pytest

from nav.grid import CellSpec, GridBuildError, build_graph


def lattice(width: int, height: int, spacing: float = 1.0) -> List[CellSpec]:
    return [
        CellSpec(position=(x * spacing, y * spacing), payload=f"{x},{y}")
        for y in range(height)
        for x in range(width)
    ]


def test_neighbors_are_orthogonal_unit_steps() -> None:
    graph = build_graph(lattice(4, 3))

    for node in graph:
        for nxt in node.neighbors:
            dx = abs(node.x - nxt.x)
            dy = abs(node.y - nxt.y)
            assert (dx, dy) in ((1.0, 0.0), (0.0, 1.0))
            assert nxt is not node


def test_adjacency_is_symmetric() -> None:
    graph = build_graph(lattice(5, 5))

    for a in graph:
        for b in graph:
            assert (b in a.neighbors) == (a in b.neighbors)


def test_neighbor_counts_on_3x3() -> None:
    graph = build_graph(lattice(3, 3))

    assert len(graph.node_at((0, 0)).neighbors) == 2
    assert len(graph.node_at((1, 0)).neighbors) == 3
    assert len(graph.node_at((1, 1)).neighbors) == 4
    # 3 rows * 2 + 3 cols * 2
    assert graph.edge_count() == 12


def test_no_diagonal_links() -> None:
    graph = build_graph([((0, 0), "a"), ((1, 1), "b")])

    assert graph.edge_count() == 0


def test_gap_is_not_bridged() -> None:
    graph = build_graph([((0, 0), "a"), ((2, 0), "b")])

    assert graph.node_at((0, 0)).neighbors == []


def test_float_noise_within_tolerance_still_connects() -> None:
    cells = [
        ((0.0, 0.0), "a"),
        ((1.04, -0.03), "b"),
        ((1.02, 0.97), "c"),
    ]
    graph = build_graph(cells, tolerance=0.1)

    a = graph.node_at((0.0, 0.0))
    b = graph.node_at((1.04, -0.03))
    c = graph.node_at((1.02, 0.97))
    assert b in a.neighbors
    assert c in b.neighbors
    assert c not in a.neighbors


def test_noise_beyond_tolerance_breaks_link() -> None:
    graph = build_graph([((0.0, 0.0), "a"), ((1.3, 0.0), "b")], tolerance=0.1)

    assert graph.edge_count() == 0


def test_large_spacing() -> None:
    graph = build_graph(lattice(3, 2, spacing=300.0), spacing=300.0, tolerance=0.1)

    corner = graph.node_at((0.0, 0.0))
    assert {n.position for n in corner.neighbors} == {(300.0, 0.0), (0.0, 300.0)}
    assert graph.node_at((600.0, 300.0)).cell == (2, 1)


def test_half_offset_grid_connects() -> None:
    graph = build_graph([CellSpec(position=(x + 0.5, 0.5)) for x in range(3)])

    assert len(graph) == 3
    assert graph.edge_count() == 2
    assert graph.origin == (0.5, 0.5)
    assert [graph.node_at((x + 0.5, 0.5)).cell for x in range(3)] == [(0, 0), (1, 0), (2, 0)]


def test_cell_centred_large_spacing_grid_connects() -> None:
    cells = [CellSpec(position=(150.0 + 300.0 * k, 150.0), payload=k) for k in range(4)]
    graph = build_graph(cells, spacing=300.0, tolerance=0.1)

    assert graph.edge_count() == 3
    assert graph.node_at((750.0, 150.0)).payload == 2
    middle = graph.node_at((450.0, 150.0))
    assert {n.payload for n in middle.neighbors} == {0, 2}


def test_noise_around_half_steps_still_connects() -> None:
    graph = build_graph([((0.49, 0.0), "a"), ((1.51, 0.0), "b")], tolerance=0.1)

    assert graph.edge_count() == 1


def test_empty_input_yields_empty_graph() -> None:
    graph = build_graph([])

    assert len(graph) == 0
    assert graph.edge_count() == 0


def test_duplicate_coordinates_rejected() -> None:
    with pytest.raises(GridBuildError):
        build_graph([((0, 0), "a"), ((0, 0), "b")])


def test_near_duplicate_coordinates_rejected() -> None:
    with pytest.raises(GridBuildError):
        build_graph([((1.0, 1.0), "a"), ((1.05, 0.98), "b")])


@pytest.mark.parametrize(
    "spacing, tolerance",
    [(0.0, 0.1), (-1.0, 0.1), (1.0, -0.1), (1.0, 0.5)],
)
def test_invalid_parameters_rejected(spacing: float, tolerance: float) -> None:
    with pytest.raises(GridBuildError):
        build_graph(lattice(2, 2), spacing=spacing, tolerance=tolerance)


def test_node_lookup() -> None:
    graph = build_graph(lattice(2, 2))

    node = graph.node_at((1, 1))
    assert node.payload == "1,1"
    assert graph.get((5, 5)) is None
    assert graph.contains(node)
    with pytest.raises(KeyError):
        graph.node_at((5, 5))


def test_contains_is_identity_based() -> None:
    g1 = build_graph(lattice(2, 2))
    g2 = build_graph(lattice(2, 2))

    assert not g1.contains(g2.node_at((0, 0)))


def test_payload_defaults_to_none_for_bare_positions() -> None:
    graph = build_graph([CellSpec(position=(0, 0))])

    assert graph.node_at((0, 0)).payload is None


def test_clear_drops_nodes_and_links() -> None:
    graph = build_graph(lattice(3, 3))
    node = graph.node_at((1, 1))

    graph.clear()

    assert len(graph) == 0
    assert node.neighbors == []
    assert graph.get((1, 1)) is None
