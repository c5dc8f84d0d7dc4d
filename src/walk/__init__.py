# src/walk/__init__.py
"""
Walk layer: drives a scene through placement, search and a timed walk.

Exports:
    - WalkSession: one grid, one actor, one goal at a time
    - WalkPhase / WalkState: phase state machine
    - SceneView / EventBusScene: presentation collaborator
"""

from __future__ import annotations

from .scene import EventBusScene, SceneView
from .session import CANCELLED, MISSING_PAYLOAD, WalkSession
from .state import InvalidPhaseTransition, WalkPhase, WalkState

__all__ = [
    "EventBusScene",
    "SceneView",
    "CANCELLED",
    "MISSING_PAYLOAD",
    "WalkSession",
    "InvalidPhaseTransition",
    "WalkPhase",
    "WalkState",
]
