# JSONL logger subscribing to EventBus
"""
Structured event logging for walks.

Provides:
- JsonFileLogger: subscribes to an EventBus and writes MonitoringEvents as JSONL.
- log_event: build a MonitoringEvent and publish it in one call.

Usage:

    bus = EventBus()
    sink = JsonFileLogger(Path("logs/walk_events.log"), bus)

    log_event(
        bus=bus,
        module="walk.session",
        event_type=EventType.LOG,
        message="Walk started",
        payload={"start": [0, 0]},
    )
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from .bus import EventBus
from .events import EventType, MonitoringEvent

logger = logging.getLogger(__name__)


class JsonFileLogger:
    """
    One JSON object per line, UTF-8, parent directory created on demand.

    Write failures are reported through `logging` and never raised into the
    publishing code path.
    """

    def __init__(self, path: Path, bus: EventBus) -> None:
        self._path = path
        self._bus = bus
        path.parent.mkdir(parents=True, exist_ok=True)
        self._file = path.open("a", encoding="utf-8")
        bus.subscribe(self._on_event)

    @property
    def path(self) -> Path:
        return self._path

    def _on_event(self, event: MonitoringEvent) -> None:
        line = json.dumps(event.to_dict(), ensure_ascii=False)
        try:
            self._file.write(line + "\n")
            self._file.flush()
        except OSError:
            logger.warning("Could not write event to %s", self._path, exc_info=True)

    def close(self) -> None:
        """Unsubscribe and close the file. Call at shutdown."""
        self._bus.unsubscribe(self._on_event)
        if not self._file.closed:
            self._file.close()

    def __enter__(self) -> "JsonFileLogger":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


def log_event(
    bus: EventBus,
    module: str,
    event_type: EventType,
    message: str,
    payload: Optional[Dict[str, Any]] = None,
    correlation_id: Optional[str] = None,
) -> MonitoringEvent:
    """Create a MonitoringEvent, publish it, and return it."""
    event = MonitoringEvent(
        module=module,
        event_type=event_type,
        message=message,
        payload=payload or {},
        correlation_id=correlation_id,
    )
    bus.publish(event)
    return event
