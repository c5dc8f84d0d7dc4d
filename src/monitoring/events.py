# path: src/monitoring/events.py
"""
Event and command schemas for walk monitoring.

This module defines:
- EventType enum (what the walk layer reports)
- MonitoringEvent (structured event record)
- ControlCommandType / ControlCommand (restart / cancel buttons)

All events are JSON-serializable via `.to_dict()` and are intended
for use with monitoring.bus.EventBus and monitoring.logger.JsonFileLogger.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, asdict, field
from enum import Enum, auto
from typing import Any, Dict, Optional


# ============================================================
# Event Types
# ============================================================

class EventType(Enum):
    """Typed events emitted by a WalkSession and its scene."""

    # WalkPhase transitions (IDLE, PLACING_START, ..., COMPLETED)
    PHASE_CHANGE = auto()

    # Placement
    ACTOR_PLACED = auto()
    GOAL_PLACED = auto()

    # Search outcome
    PATH_FOUND = auto()
    PATH_NOT_FOUND = auto()

    # Animation
    CELL_HIGHLIGHTED = auto()
    ACTOR_MOVED = auto()
    GOAL_REACHED = auto()
    WALK_FAILED = auto()

    # Graph (re)built
    GRID_BUILT = auto()

    # Control surface
    CONTROL_COMMAND = auto()

    # Generic log messages
    LOG = auto()


# ============================================================
# Monitoring Event Structure
# ============================================================

@dataclass
class MonitoringEvent:
    """
    Runtime event emitted by the walk layer.

    All payload values must be JSON-safe (positions go out as lists).
    """

    module: str                 # e.g. "walk.session", "walk.scene"
    event_type: EventType
    message: str
    payload: Dict[str, Any] = field(default_factory=dict)
    correlation_id: Optional[str] = None  # groups events of one walk
    ts: float = field(default_factory=time.time)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-safe dict for loggers."""
        data = asdict(self)
        data["event_type"] = self.event_type.name
        return data


# ============================================================
# Control Commands
# ============================================================

class ControlCommandType(Enum):
    """Commands a UI (buttons, keys, scripts) can send to a WalkSession."""

    RESTART = auto()       # rebuild the grid, back to IDLE
    CANCEL_WALK = auto()   # stop animating after the current step


@dataclass
class ControlCommand:
    """
    External command for a WalkSession.

    Sent through EventBus.publish_command().
    """

    cmd: ControlCommandType
    args: Dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def restart() -> "ControlCommand":
        return ControlCommand(ControlCommandType.RESTART)

    @staticmethod
    def cancel_walk() -> "ControlCommand":
        return ControlCommand(ControlCommandType.CANCEL_WALK)
