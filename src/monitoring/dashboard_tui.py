# rich-based TUI view of a walk
#src/monitoring/dashboard_tui.py
"""
Terminal view of a walk.

A lightweight terminal UI (using `rich`) that subscribes to the monitoring
EventBus and renders:

- The grid:
    - walkable cells, gaps where no cell exists
    - highlighted path cells
    - actor and goal markers

- Walk status:
    - Phase
    - Start / goal
    - Path length and expansions
    - Failure reason (if any)

It keeps only a small state dict, patched from events, and re-renders it
into an attached rich.live.Live on every event.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, Optional, Set, Tuple

from rich.console import Console
from rich.layout import Layout
from rich.live import Live
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .bus import EventBus
from .events import EventType, MonitoringEvent

Cell = Tuple[int, int]

GLYPH_EMPTY = "  "
GLYPH_CELL = "· "
GLYPH_PATH = "o "
GLYPH_ACTOR = "A "
GLYPH_GOAL = "G "


def _cell_from(payload: Dict[str, Any]) -> Optional[Cell]:
    cell = payload.get("cell")
    if not cell:
        return None
    return int(cell[0]), int(cell[1])


class GridDashboard:
    """
    Live terminal view bound to an EventBus.

    `cells` are the lattice indices of walkable cells; the view spans their
    bounding box and leaves blanks where no cell exists.
    """

    def __init__(self, bus: EventBus, cells: Iterable[Cell], console: Optional[Console] = None) -> None:
        self._bus = bus
        self._console = console or Console()
        self.cells: Set[Cell] = set(cells)
        self.live: Optional[Live] = None

        self._state: Dict[str, Any] = {}
        self._reset_state()

        self._bus.subscribe(self._on_event)

    def _reset_state(self) -> None:
        self._state = {
            "phase": "IDLE",
            "actor": None,
            "start": None,
            "goal": None,
            "highlighted": set(),
            "path_length": None,
            "expanded": None,
            "failure": None,
            "goal_reached": False,
        }

    # --------------------------------------------------------
    # Event handler
    # --------------------------------------------------------

    def _on_event(self, event: MonitoringEvent) -> None:
        et = event.event_type
        payload = event.payload

        if et == EventType.PHASE_CHANGE:
            phase = payload.get("phase", "IDLE")
            if phase == "IDLE":
                self._reset_state()
            self._state["phase"] = phase

        elif et == EventType.ACTOR_PLACED:
            cell = _cell_from(payload)
            self._state["actor"] = cell
            self._state["start"] = cell

        elif et == EventType.GOAL_PLACED:
            self._state["goal"] = _cell_from(payload)

        elif et == EventType.PATH_FOUND:
            self._state["path_length"] = payload.get("length")
            self._state["expanded"] = payload.get("expanded")

        elif et == EventType.PATH_NOT_FOUND:
            self._state["expanded"] = payload.get("expanded")

        elif et == EventType.CELL_HIGHLIGHTED:
            cell = _cell_from(payload)
            if cell is not None:
                self._state["highlighted"].add(cell)

        elif et == EventType.ACTOR_MOVED:
            self._state["actor"] = _cell_from(payload)

        elif et == EventType.GOAL_REACHED:
            self._state["goal_reached"] = True

        elif et == EventType.WALK_FAILED:
            self._state["failure"] = payload.get("reason", "unknown")

        if self.live is not None:
            self.live.update(self._build_layout())

    # --------------------------------------------------------
    # Rendering helpers
    # --------------------------------------------------------

    def render_grid(self) -> Text:
        """Grid as text, highest row first so +y points up."""
        txt = Text()
        if not self.cells:
            txt.append("<empty grid>")
            return txt

        xs = [c[0] for c in self.cells]
        ys = [c[1] for c in self.cells]
        actor = self._state["actor"]
        goal = self._state["goal"]
        highlighted = self._state["highlighted"]

        for y in range(max(ys), min(ys) - 1, -1):
            for x in range(min(xs), max(xs) + 1):
                cell = (x, y)
                if cell == actor:
                    txt.append(GLYPH_ACTOR, style="bold cyan")
                elif cell == goal:
                    style = "bold green" if self._state["goal_reached"] else "bold yellow"
                    txt.append(GLYPH_GOAL, style=style)
                elif cell in highlighted:
                    txt.append(GLYPH_PATH, style="magenta")
                elif cell in self.cells:
                    txt.append(GLYPH_CELL, style="dim")
                else:
                    txt.append(GLYPH_EMPTY)
            txt.append("\n")
        return txt

    def _render_status_panel(self) -> Panel:
        table = Table.grid(pad_edge=False)
        table.add_column(justify="left")

        length = self._state["path_length"]
        expanded = self._state["expanded"]
        table.add_row(f"[bold]Phase:[/bold] {self._state['phase']}")
        table.add_row(f"[bold]Start:[/bold] {self._state['start'] or '-'}")
        table.add_row(f"[bold]Goal:[/bold] {self._state['goal'] or '-'}")
        table.add_row(f"[bold]Path length:[/bold] {length if length is not None else '-'}")
        table.add_row(f"[bold]Expanded:[/bold] {expanded if expanded is not None else '-'}")

        failure = self._state["failure"]
        if failure:
            table.add_row("")
            table.add_row(f"[bold red]Failure:[/bold red] {failure}")
        elif self._state["goal_reached"]:
            table.add_row("")
            table.add_row("[bold green]Goal reached.[/bold green]")

        return Panel(table, title="Walk", border_style="cyan")

    def _build_layout(self) -> Layout:
        layout = Layout()
        layout.split_row(
            Layout(Panel(self.render_grid(), title="Grid", border_style="green"), name="grid", ratio=2),
            Layout(self._render_status_panel(), name="status", ratio=1),
        )
        return layout

    # --------------------------------------------------------
    # Live binding
    # --------------------------------------------------------

    def live_view(self, refresh_per_second: float = 8.0) -> Live:
        """
        Create a Live bound to this dashboard.

        Use as a context manager around a blocking walk:

            with dashboard.live_view():
                session.run()
        """
        self.live = Live(
            self._build_layout(),
            console=self._console,
            refresh_per_second=refresh_per_second,
        )
        return self.live

    def detach(self) -> None:
        self._bus.unsubscribe(self._on_event)
        self.live = None
