# src/nav/topology.py
"""
networkx views over a NavGraph.

Used by the walk layer to pick goals inside the actor's component and by
tests as an independent shortest-path oracle. The A* core does not
depend on this module.
"""

from __future__ import annotations

from typing import List, Set

import networkx as nx

from .grid import GridNode, NavGraph


def to_networkx(graph: NavGraph) -> nx.Graph:
    """
    Undirected nx.Graph keyed by lattice index.

    Each nx node carries:
      - node: the GridNode
      - position: its (x, y) position
    """
    g = nx.Graph()
    for node in graph:
        g.add_node(node.cell, node=node, position=node.position)
    for node in graph:
        for nxt in node.neighbors:
            g.add_edge(node.cell, nxt.cell)
    return g


def connected_components(graph: NavGraph) -> List[Set[GridNode]]:
    """Connected components as sets of GridNodes, largest first."""
    g = to_networkx(graph)
    components = [
        {g.nodes[cell]["node"] for cell in comp}
        for comp in nx.connected_components(g)
    ]
    components.sort(key=len, reverse=True)
    return components


def component_of(graph: NavGraph, node: GridNode) -> Set[GridNode]:
    g = to_networkx(graph)
    return {g.nodes[cell]["node"] for cell in nx.node_connected_component(g, node.cell)}


def is_reachable(graph: NavGraph, a: GridNode, b: GridNode) -> bool:
    """True if b can be reached from a along neighbour edges."""
    if not graph.contains(a) or not graph.contains(b):
        return False
    return nx.has_path(to_networkx(graph), a.cell, b.cell)
