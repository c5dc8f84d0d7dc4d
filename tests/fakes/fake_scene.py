# tests/fakes/fake_scene.py

from __future__ import annotations

from typing import List, Optional, Tuple

from nav.grid import GridNode, Position


class RecordingScene:
    """
    In-memory SceneView for walk tests.

    Records every call as (method, position-or-reason) so tests can assert
    on order, and keeps the latest actor/goal/failure for quick checks.
    """

    def __init__(self) -> None:
        self.calls: List[Tuple[str, object]] = []
        self.actor: Optional[Position] = None
        self.goal: Optional[Position] = None
        self.highlighted: List[Position] = []
        self.goal_reached = False
        self.failures: List[str] = []

    def place_actor(self, node: GridNode) -> None:
        self.calls.append(("place_actor", node.position))
        self.actor = node.position

    def place_goal(self, node: GridNode) -> None:
        self.calls.append(("place_goal", node.position))
        self.goal = node.position

    def highlight(self, node: GridNode) -> None:
        self.calls.append(("highlight", node.position))
        self.highlighted.append(node.position)

    def move_actor(self, node: GridNode) -> None:
        self.calls.append(("move_actor", node.position))
        self.actor = node.position

    def mark_goal_reached(self, node: GridNode) -> None:
        self.calls.append(("mark_goal_reached", node.position))
        self.goal_reached = True

    def report_failure(self, reason: str) -> None:
        self.calls.append(("report_failure", reason))
        self.failures.append(reason)


class FakeSleep:
    """Records requested delays instead of sleeping."""

    def __init__(self) -> None:
        self.delays: List[float] = []

    def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)
