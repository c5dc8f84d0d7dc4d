# src/walk/state.py

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Dict, FrozenSet, List, Optional

from nav.grid import GridNode


class WalkPhase(Enum):
    """
    Phases of one walk, in the order a normal run visits them:

        IDLE -> PLACING_START -> PLACING_GOAL -> SEARCHING -> ANIMATING -> COMPLETED

    SEARCHING and ANIMATING may end in FAILED instead. Every phase may go
    back to IDLE (restart).
    """

    IDLE = auto()
    PLACING_START = auto()
    PLACING_GOAL = auto()
    SEARCHING = auto()
    ANIMATING = auto()
    COMPLETED = auto()
    FAILED = auto()


_TRANSITIONS: Dict[WalkPhase, FrozenSet[WalkPhase]] = {
    WalkPhase.IDLE: frozenset({WalkPhase.PLACING_START}),
    WalkPhase.PLACING_START: frozenset({WalkPhase.PLACING_GOAL}),
    WalkPhase.PLACING_GOAL: frozenset({WalkPhase.SEARCHING}),
    WalkPhase.SEARCHING: frozenset({WalkPhase.ANIMATING, WalkPhase.FAILED}),
    WalkPhase.ANIMATING: frozenset({WalkPhase.COMPLETED, WalkPhase.FAILED}),
    WalkPhase.COMPLETED: frozenset(),
    WalkPhase.FAILED: frozenset(),
}


class InvalidPhaseTransition(RuntimeError):
    """Raised when a WalkState is asked to jump to a phase it cannot reach."""

    def __init__(self, current: WalkPhase, target: WalkPhase) -> None:
        super().__init__(f"Cannot move from {current.name} to {target.name}")
        self.current = current
        self.target = target


def can_transition(current: WalkPhase, target: WalkPhase) -> bool:
    return target is WalkPhase.IDLE or target in _TRANSITIONS[current]


@dataclass
class WalkState:
    """
    Mutable snapshot of one walk.

    Fields
    ------
    phase:
        Current WalkPhase.
    start / goal:
        Nodes picked during placement, None before that.
    path:
        Nodes of the found path; empty until SEARCHING succeeds.
    step_index:
        Index into `path` of the cell the actor stands on. -1 before the
        walk starts.
    failure:
        Short machine-readable reason once the walk ends in FAILED.
    history:
        Every phase entered, in order, starting with IDLE.
    """

    phase: WalkPhase = WalkPhase.IDLE
    start: Optional[GridNode] = None
    goal: Optional[GridNode] = None
    path: List[GridNode] = field(default_factory=list)
    step_index: int = -1
    failure: Optional[str] = None
    history: List[WalkPhase] = field(default_factory=lambda: [WalkPhase.IDLE])

    @property
    def finished(self) -> bool:
        return self.phase in (WalkPhase.COMPLETED, WalkPhase.FAILED)

    @property
    def current_node(self) -> Optional[GridNode]:
        if 0 <= self.step_index < len(self.path):
            return self.path[self.step_index]
        return self.start

    def transition(self, target: WalkPhase) -> None:
        """Move to `target`, raising InvalidPhaseTransition if not allowed."""
        if not can_transition(self.phase, target):
            raise InvalidPhaseTransition(self.phase, target)
        self.phase = target
        self.history.append(target)

    def reset(self) -> None:
        """Back to IDLE with placement and path cleared."""
        self.transition(WalkPhase.IDLE)
        self.start = None
        self.goal = None
        self.path = []
        self.step_index = -1
        self.failure = None
