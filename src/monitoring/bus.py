# EventBus for walk events and control commands
"""
In-process pub/sub for walk monitoring.

- Subscribers receive MonitoringEvent objects (dashboard, JSONL logger, tests).
- Command handlers receive ControlCommand objects (WalkSession).
"""

from __future__ import annotations

import logging
from threading import Lock
from typing import Callable, List

from .events import MonitoringEvent, ControlCommand

logger = logging.getLogger(__name__)


SubscriberFn = Callable[[MonitoringEvent], None]
CommandHandlerFn = Callable[[ControlCommand], None]


class EventBus:
    """
    Thread-safe event bus.

    Each publish iterates over a snapshot of the subscriber list, so
    subscribers may call back into the bus. A failing subscriber is
    logged and does not stop delivery to the others.
    """

    def __init__(self) -> None:
        self._subscribers: List[SubscriberFn] = []
        self._cmd_handlers: List[CommandHandlerFn] = []
        self._lock = Lock()

    # --------------------------------------------------------
    # Monitoring events
    # --------------------------------------------------------

    def subscribe(self, fn: SubscriberFn) -> None:
        with self._lock:
            self._subscribers.append(fn)

    def unsubscribe(self, fn: SubscriberFn) -> None:
        """Safe to call even if `fn` is not subscribed."""
        with self._lock:
            if fn in self._subscribers:
                self._subscribers.remove(fn)

    def publish(self, event: MonitoringEvent) -> None:
        with self._lock:
            subscribers = list(self._subscribers)

        for fn in subscribers:
            try:
                fn(event)
            except Exception:
                logger.exception("Event subscriber %r failed on %s", fn, event.event_type.name)

    # --------------------------------------------------------
    # Control commands
    # --------------------------------------------------------

    def subscribe_commands(self, fn: CommandHandlerFn) -> None:
        with self._lock:
            self._cmd_handlers.append(fn)

    def unsubscribe_commands(self, fn: CommandHandlerFn) -> None:
        with self._lock:
            if fn in self._cmd_handlers:
                self._cmd_handlers.remove(fn)

    def publish_command(self, cmd: ControlCommand) -> None:
        with self._lock:
            handlers = list(self._cmd_handlers)

        for fn in handlers:
            try:
                fn(cmd)
            except Exception:
                logger.exception("Command handler %r failed on %s", fn, cmd.cmd.name)

    def clear(self) -> None:
        """Drop all subscribers and handlers. Mostly for tests."""
        with self._lock:
            self._subscribers.clear()
            self._cmd_handlers.clear()
