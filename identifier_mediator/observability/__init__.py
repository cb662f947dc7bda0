"""Observability module: diagnostic events and logging setup."""

from identifier_mediator.observability.event_bus import (
    Event,
    EventBus,
    InMemoryEventBus,
    NullEventBus,
)
from identifier_mediator.observability.logging import configure_logging, get_logger

__all__ = [
    "Event",
    "EventBus",
    "InMemoryEventBus",
    "NullEventBus",
    "configure_logging",
    "get_logger",
]
