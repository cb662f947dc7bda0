"""Event bus used as the mediator's diagnostic sink."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Protocol


@dataclass
class Event:
    event_type: str
    dispatch_id: str
    operation: str
    provider: str | None = None
    ts: str = ""
    payload: dict[str, Any] = field(default_factory=dict)


EventHandler = Callable[[Event], Any]


class EventBus(Protocol):
    def emit(self, event: Event) -> None: ...
    def on(self, event_type: str, handler: EventHandler) -> None: ...
    def off(self, event_type: str, handler: EventHandler) -> None: ...
    def on_all(self, handler: EventHandler) -> None: ...


class InMemoryEventBus:
    """In-memory event bus that keeps every emitted event in ``history``.

    Handlers run synchronously on the emitting thread, in subscription order,
    global handlers first.
    """

    def __init__(self) -> None:
        self._handlers: dict[str, list[EventHandler]] = {}
        self._global_handlers: list[EventHandler] = []
        self._history: list[Event] = []

    def emit(self, event: Event) -> None:
        self._history.append(event)

        handlers = list(self._global_handlers)
        handlers.extend(self._handlers.get(event.event_type, ()))

        for handler in handlers:
            handler(event)

    def on(self, event_type: str, handler: EventHandler) -> None:
        self._handlers.setdefault(event_type, []).append(handler)

    def off(self, event_type: str, handler: EventHandler) -> None:
        if event_type in self._handlers:
            try:
                self._handlers[event_type].remove(handler)
            except ValueError:
                pass

    def on_all(self, handler: EventHandler) -> None:
        self._global_handlers.append(handler)

    @property
    def history(self) -> list[Event]:
        return list(self._history)

    def events_of(self, event_type: str) -> list[Event]:
        return [e for e in self._history if e.event_type == event_type]

    def clear_history(self) -> None:
        self._history.clear()


class NullEventBus:
    """Discards every event."""

    def emit(self, event: Event) -> None:
        return None

    def on(self, event_type: str, handler: EventHandler) -> None:
        return None

    def off(self, event_type: str, handler: EventHandler) -> None:
        return None

    def on_all(self, handler: EventHandler) -> None:
        return None
