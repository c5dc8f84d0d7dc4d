# src/walk/session.py
"""
WalkSession: place an actor and a goal on a grid, find a path, walk it.

Flow for one walk (see WalkPhase):

    build()                    -> NavGraph from cells
    place_actor_and_goal()     -> PLACING_START, PLACING_GOAL
    search()                   -> SEARCHING, then FAILED if no path
    animate()                  -> ANIMATING, then COMPLETED or FAILED

run() chains all of it. restart() throws the graph away, rebuilds it from
the same cells and returns to IDLE; the RESTART control command does the
same, deferred until the current animation step if a walk is in flight.

The session owns timing (step_delay, injectable sleep) and the phase
state. Pathfinding itself is nav.find_path and never sees any of this.
"""

from __future__ import annotations

import logging
import random
import threading
import time
import uuid
from typing import Callable, List, Optional, Sequence

from env.schema import WalkSettings
from monitoring.bus import EventBus
from monitoring.events import ControlCommand, ControlCommandType, EventType
from monitoring.logger import log_event
from nav.grid import (
    DEFAULT_SPACING,
    DEFAULT_TOLERANCE,
    CellSpec,
    GridNode,
    NavGraph,
    Position,
    build_graph,
)
from nav.mover import path_to_steps
from nav.pathfinder import PathfindingResult, find_path
from nav.topology import component_of

from .scene import EventBusScene, SceneView, node_payload
from .state import WalkPhase, WalkState

logger = logging.getLogger(__name__)

MISSING_PAYLOAD = "missing_payload"
CANCELLED = "cancelled"


class WalkSession:
    """
    One grid, one actor, one goal at a time.

    Parameters
    ----------
    cells:
        Cell descriptors; kept so restart() can rebuild the graph.
    scene:
        SceneView to drive. Defaults to EventBusScene(bus) when a bus is
        given.
    settings:
        WalkSettings (step delay, seed, reachability, A* bound).
    bus:
        Optional EventBus for phase/path events and control commands.
    rng:
        random.Random used for placement; seeded from settings.seed when
        not given.
    sleep:
        Called with step_delay between steps. Tests pass a no-op.
    """

    MODULE = "walk.session"

    def __init__(
        self,
        cells: Sequence[CellSpec],
        scene: Optional[SceneView] = None,
        *,
        settings: Optional[WalkSettings] = None,
        spacing: float = DEFAULT_SPACING,
        tolerance: float = DEFAULT_TOLERANCE,
        bus: Optional[EventBus] = None,
        rng: Optional[random.Random] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if scene is None:
            if bus is None:
                raise ValueError("WalkSession needs a scene or an event bus")
            scene = EventBusScene(bus)

        self.cells: List[CellSpec] = list(cells)
        self.scene = scene
        self.settings = settings or WalkSettings()
        self.spacing = spacing
        self.tolerance = tolerance
        self.bus = bus
        self.rng = rng or random.Random(self.settings.seed)
        self._sleep = sleep

        self.graph: Optional[NavGraph] = None
        self.state = WalkState()
        self.last_result: Optional[PathfindingResult] = None
        self.walk_id = self._new_walk_id()

        self._cancel = threading.Event()
        self._restart_pending = False

        if bus is not None:
            bus.subscribe_commands(self._on_command)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def build(self) -> NavGraph:
        """Build (or rebuild) the graph from self.cells."""
        self.graph = build_graph(self.cells, spacing=self.spacing, tolerance=self.tolerance)
        logger.info(
            "Grid built: %d cells, %d edges", len(self.graph), self.graph.edge_count()
        )
        self._publish(
            EventType.GRID_BUILT,
            "Grid built",
            {"nodes": len(self.graph), "edges": self.graph.edge_count()},
        )
        return self.graph

    def restart(self) -> None:
        """Clear and regenerate the graph, then return to IDLE."""
        if self.graph is not None:
            self.graph.clear()
        self._cancel.clear()
        self._restart_pending = False
        self.last_result = None
        self.walk_id = self._new_walk_id()
        if isinstance(self.scene, EventBusScene):
            self.scene.correlation_id = self.walk_id
        self.build()
        self.state.reset()
        self._publish_phase()

    def close(self) -> None:
        """Stop listening for control commands."""
        if self.bus is not None:
            self.bus.unsubscribe_commands(self._on_command)

    # ------------------------------------------------------------------
    # Walk steps
    # ------------------------------------------------------------------

    def place_actor_and_goal(
        self,
        start: Optional[Position] = None,
        goal: Optional[Position] = None,
    ) -> None:
        """
        Pick start and goal nodes and show them.

        Positions that are given are resolved with NavGraph.node_at (KeyError
        if unknown). Missing ones are drawn at random; a random goal is
        always distinct from the start and, with require_reachable, lies in
        the start's connected component.
        """
        graph = self.graph if self.graph is not None else self.build()
        if isinstance(self.scene, EventBusScene):
            self.scene.correlation_id = self.walk_id
        self._cancel.clear()

        self._enter(WalkPhase.PLACING_START)
        try:
            if start is not None:
                start_node = graph.node_at(start)
            else:
                if len(graph) == 0:
                    raise ValueError("Cannot place an actor on an empty grid")
                start_node = self.rng.choice(graph.nodes)
            self.state.start = start_node
            self.scene.place_actor(start_node)

            self._enter(WalkPhase.PLACING_GOAL)
            if goal is not None:
                goal_node = graph.node_at(goal)
            else:
                goal_node = self._pick_goal(graph, start_node)
            self.state.goal = goal_node
            self.scene.place_goal(goal_node)
        except (KeyError, ValueError):
            # back to IDLE so the caller can retry with other positions
            self.state.reset()
            self._publish_phase()
            raise

        logger.info("Actor at %s, goal at %s", start_node.position, goal_node.position)

    def search(self) -> PathfindingResult:
        """Run A* from the placed start to the placed goal."""
        if self.graph is None or self.state.start is None or self.state.goal is None:
            raise RuntimeError("search() called before place_actor_and_goal()")

        self._enter(WalkPhase.SEARCHING)
        result = find_path(
            self.graph,
            self.state.start,
            self.state.goal,
            max_steps=self.settings.max_steps,
        )
        self.last_result = result

        if result.success:
            self.state.path = list(result.path)
            logger.info("Path found: %d steps (%d expansions)", result.cost, result.expanded)
            self._publish(
                EventType.PATH_FOUND,
                "Path found",
                {
                    "length": result.cost,
                    "expanded": result.expanded,
                    "path": [list(p) for p in result.positions()],
                },
            )
        else:
            logger.error("No path from %s to %s (%s)",
                         self.state.start.position, self.state.goal.position, result.reason)
            self._publish(
                EventType.PATH_NOT_FOUND,
                "No path found",
                {"reason": result.reason, "expanded": result.expanded},
            )
            self._fail(result.reason or "no_path_found")

        return result

    def animate(self) -> WalkState:
        """
        Walk the found path one cell at a time.

        Each step highlights the cell and moves the actor onto it, then waits
        step_delay before the next one. A cell without a payload, or a
        CANCEL_WALK command, stops the walk in FAILED.
        """
        if self.last_result is None or not self.last_result.success:
            raise RuntimeError("animate() needs a successful search() first")

        self._enter(WalkPhase.ANIMATING)
        steps = path_to_steps(self.last_result)

        for step in steps:
            if self._cancel.is_set():
                logger.warning("Walk cancelled at step %d", step.index)
                self._fail(CANCELLED)
                break
            if step.payload is None:
                logger.error("Path cell %s has no visual handle; stopping walk", step.position)
                self._fail(MISSING_PAYLOAD)
                break

            self.scene.highlight(step.node)
            self.scene.move_actor(step.node)
            self.state.step_index = step.index

            if not step.is_goal:
                self._sleep(self.settings.step_delay)
        else:
            self.scene.mark_goal_reached(steps[-1].node)
            self._enter(WalkPhase.COMPLETED)
            logger.info("Actor reached the goal at %s", steps[-1].position)

        if self._restart_pending:
            self.restart()

        return self.state

    def run(
        self,
        start: Optional[Position] = None,
        goal: Optional[Position] = None,
    ) -> WalkState:
        """Place, search and, if a path exists, animate. Returns the final state."""
        if self.state.phase is not WalkPhase.IDLE:
            self.restart()

        self.place_actor_and_goal(start=start, goal=goal)
        result = self.search()
        if result.success:
            self.animate()
        return self.state

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _pick_goal(self, graph: NavGraph, start: GridNode) -> GridNode:
        if self.settings.require_reachable:
            pool = component_of(graph, start)
        else:
            pool = set(graph.nodes)
        pool.discard(start)
        if not pool:
            raise ValueError(f"No goal candidates distinct from start {start.position}")
        # sort by build order so a seeded rng gives the same goal every time
        candidates = [n for n in graph.nodes if n in pool]
        return self.rng.choice(candidates)

    def _on_command(self, cmd: ControlCommand) -> None:
        self._publish(EventType.CONTROL_COMMAND, f"Command {cmd.cmd.name}", {"cmd": cmd.cmd.name})
        if cmd.cmd is ControlCommandType.CANCEL_WALK:
            # only a walk in flight can be cancelled
            if self.state.phase in (WalkPhase.SEARCHING, WalkPhase.ANIMATING):
                self._cancel.set()
            else:
                logger.info("Ignoring CANCEL_WALK in phase %s", self.state.phase.name)
        elif cmd.cmd is ControlCommandType.RESTART:
            if self.state.phase is WalkPhase.ANIMATING:
                self._restart_pending = True
                self._cancel.set()
            else:
                self.restart()

    def _enter(self, phase: WalkPhase) -> None:
        self.state.transition(phase)
        logger.debug("Walk %s -> %s", self.walk_id, phase.name)
        self._publish_phase()

    def _fail(self, reason: str) -> None:
        self.state.failure = reason
        self.scene.report_failure(reason)
        self._enter(WalkPhase.FAILED)

    def _publish_phase(self) -> None:
        payload = {"phase": self.state.phase.name}
        node = self.state.current_node
        if node is not None:
            payload["actor"] = node_payload(node)
        self._publish(EventType.PHASE_CHANGE, f"Phase {self.state.phase.name}", payload)

    def _publish(self, event_type: EventType, message: str, payload: dict) -> None:
        if self.bus is None:
            return
        log_event(
            bus=self.bus,
            module=self.MODULE,
            event_type=event_type,
            message=message,
            payload=payload,
            correlation_id=self.walk_id,
        )

    @staticmethod
    def _new_walk_id() -> str:
        return uuid.uuid4().hex[:12]
