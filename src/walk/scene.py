# src/walk/scene.py
"""
Scene side of a walk.

SceneView is what WalkSession talks to when it wants something shown:
actor and goal markers, highlighted path cells, the final "goal reached"
state, or a failure message. EventBusScene implements it by publishing
MonitoringEvents, so any number of views (terminal dashboard, JSONL log,
tests) can follow along without WalkSession knowing about them.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Protocol

from monitoring.bus import EventBus
from monitoring.events import EventType
from monitoring.logger import log_event
from nav.grid import GridNode


class SceneView(Protocol):
    """Presentation collaborator driven by WalkSession."""

    def place_actor(self, node: GridNode) -> None:
        ...

    def place_goal(self, node: GridNode) -> None:
        ...

    def highlight(self, node: GridNode) -> None:
        ...

    def move_actor(self, node: GridNode) -> None:
        ...

    def mark_goal_reached(self, node: GridNode) -> None:
        ...

    def report_failure(self, reason: str) -> None:
        ...


def node_payload(node: GridNode) -> Dict[str, Any]:
    """JSON-safe description of a node for event payloads."""
    return {
        "position": [node.position[0], node.position[1]],
        "cell": [node.cell[0], node.cell[1]],
        "payload": None if node.payload is None else str(node.payload),
    }


class EventBusScene:
    """SceneView that turns every call into a MonitoringEvent."""

    MODULE = "walk.scene"

    def __init__(self, bus: EventBus, correlation_id: Optional[str] = None) -> None:
        self._bus = bus
        self.correlation_id = correlation_id

    def _emit(self, event_type: EventType, message: str, payload: Dict[str, Any]) -> None:
        log_event(
            bus=self._bus,
            module=self.MODULE,
            event_type=event_type,
            message=message,
            payload=payload,
            correlation_id=self.correlation_id,
        )

    def place_actor(self, node: GridNode) -> None:
        self._emit(EventType.ACTOR_PLACED, "Actor placed", node_payload(node))

    def place_goal(self, node: GridNode) -> None:
        self._emit(EventType.GOAL_PLACED, "Goal placed", node_payload(node))

    def highlight(self, node: GridNode) -> None:
        self._emit(EventType.CELL_HIGHLIGHTED, "Path cell highlighted", node_payload(node))

    def move_actor(self, node: GridNode) -> None:
        self._emit(EventType.ACTOR_MOVED, "Actor moved", node_payload(node))

    def mark_goal_reached(self, node: GridNode) -> None:
        self._emit(EventType.GOAL_REACHED, "Actor reached the goal", node_payload(node))

    def report_failure(self, reason: str) -> None:
        self._emit(EventType.WALK_FAILED, "Walk failed", {"reason": reason})
