#tests/test_monitoring_dashboard_tui.py
"""
Smoke tests for monitoring.dashboard_tui.GridDashboard.

Covers:
- Event updates patch internal state
- Grid text shows actor, goal, path and gaps
- Layout builds cleanly
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console

from monitoring.bus import EventBus
from monitoring.dashboard_tui import GLYPH_ACTOR, GLYPH_EMPTY, GLYPH_GOAL, GLYPH_PATH, GridDashboard
from monitoring.events import EventType, MonitoringEvent
from nav.grid import CellSpec
from walk.session import WalkSession


def make_event(event_type: EventType, payload: dict) -> MonitoringEvent:
    return MonitoringEvent(module="test", event_type=event_type, message="", payload=payload)


def quiet_console() -> Console:
    return Console(file=StringIO(), width=80)


def test_dashboard_tracks_events_and_renders() -> None:
    bus = EventBus()
    cells = [(x, y) for y in range(2) for x in range(3) if (x, y) != (1, 1)]
    dashboard = GridDashboard(bus, cells, console=quiet_console())

    bus.publish(make_event(EventType.PHASE_CHANGE, {"phase": "ANIMATING"}))
    bus.publish(make_event(EventType.ACTOR_PLACED, {"cell": [0, 0]}))
    bus.publish(make_event(EventType.GOAL_PLACED, {"cell": [2, 0]}))
    bus.publish(make_event(EventType.PATH_FOUND, {"length": 2, "expanded": 2}))
    bus.publish(make_event(EventType.CELL_HIGHLIGHTED, {"cell": [0, 0]}))
    bus.publish(make_event(EventType.CELL_HIGHLIGHTED, {"cell": [1, 0]}))
    bus.publish(make_event(EventType.ACTOR_MOVED, {"cell": [1, 0]}))

    state = dashboard._state  # type: ignore[attr-defined]
    assert state["phase"] == "ANIMATING"
    assert state["actor"] == (1, 0)
    assert state["start"] == (0, 0)
    assert state["path_length"] == 2
    assert state["highlighted"] == {(0, 0), (1, 0)}

    rows = dashboard.render_grid().plain.splitlines()
    # top row is y == 1 with a gap in the middle
    assert rows[0][2:4] == GLYPH_EMPTY
    assert rows[1] == GLYPH_PATH + GLYPH_ACTOR + GLYPH_GOAL

    layout = dashboard._build_layout()  # type: ignore[attr-defined]
    assert layout is not None


def test_idle_phase_resets_view() -> None:
    bus = EventBus()
    dashboard = GridDashboard(bus, [(0, 0), (1, 0)], console=quiet_console())
    bus.publish(make_event(EventType.WALK_FAILED, {"reason": "cancelled"}))
    assert dashboard._state["failure"] == "cancelled"  # type: ignore[attr-defined]

    bus.publish(make_event(EventType.PHASE_CHANGE, {"phase": "IDLE"}))

    assert dashboard._state["failure"] is None  # type: ignore[attr-defined]
    assert dashboard._state["highlighted"] == set()  # type: ignore[attr-defined]


def test_dashboard_follows_real_session_inside_live_view() -> None:
    bus = EventBus()
    cells = [CellSpec(position=(x, y), payload="c") for y in range(2) for x in range(2)]
    session = WalkSession(cells, bus=bus, sleep=lambda _: None)
    graph = session.build()
    dashboard = GridDashboard(bus, [n.cell for n in graph], console=quiet_console())

    with dashboard.live_view():
        state = session.run(start=(0, 0), goal=(1, 1))
    dashboard.detach()

    assert dashboard._state["phase"] == "COMPLETED"  # type: ignore[attr-defined]
    assert dashboard._state["goal_reached"]  # type: ignore[attr-defined]
    assert dashboard._state["actor"] == (1, 1)  # type: ignore[attr-defined]
    assert len(dashboard._state["highlighted"]) == len(state.path)  # type: ignore[attr-defined]


def test_empty_grid_renders_placeholder() -> None:
    dashboard = GridDashboard(EventBus(), [], console=quiet_console())

    assert dashboard.render_grid().plain == "<empty grid>"
