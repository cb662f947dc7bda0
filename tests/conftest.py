"""Shared test fixtures."""

from __future__ import annotations

from typing import Any, Callable

import pytest

from identifier_mediator.core.clock import FixedClock
from identifier_mediator.core.id_generator import SequentialIdGenerator
from identifier_mediator.core.types import IdentifierSelector
from identifier_mediator.observability.event_bus import InMemoryEventBus
from identifier_mediator.provider.base import AbstractIdentifierProvider


class FakeObject:
    """Repository object that counts persist calls."""

    def __init__(self, label: str = "item-1") -> None:
        self.label = label
        self.persist_calls = 0

    def persist(self) -> None:
        self.persist_calls += 1

    def __repr__(self) -> str:
        return f"<FakeObject {self.label}>"


class FakeContext:
    """Unit of work that records flushes into the shared journal."""

    def __init__(self, journal: list[tuple] | None = None) -> None:
        self.journal = journal if journal is not None else []
        self.flushes = 0

    def flush(self) -> None:
        self.flushes += 1
        self.journal.append(("context", "flush"))


class RecordingProvider(AbstractIdentifierProvider):
    """Provider double that appends every call to a shared journal.

    ``results`` maps an operation name to its return value, ``errors`` maps
    an operation name to the exception it raises.
    """

    def __init__(
        self,
        name: str,
        journal: list[tuple],
        *,
        supports: bool | Callable[[IdentifierSelector], bool] = True,
        results: dict[str, Any] | None = None,
        errors: dict[str, BaseException] | None = None,
    ) -> None:
        super().__init__()
        self.name = name
        self.journal = journal
        self._supports = supports
        self.results = results or {}
        self.errors = errors or {}
        self.supports_calls: list[IdentifierSelector] = []

    def supports(self, selector: IdentifierSelector) -> bool:
        self.supports_calls.append(selector)
        if callable(self._supports):
            return self._supports(selector)
        return self._supports

    def _call(self, operation: str, *args: Any) -> Any:
        self.journal.append((self.name, operation, *args))
        if operation in self.errors:
            raise self.errors[operation]
        return self.results.get(operation)

    def mint(self, context, obj):
        return self._call("mint", obj)

    def reserve(self, context, obj, identifier=None):
        return self._call("reserve", obj, identifier)

    def register(self, context, obj, identifier=None):
        return self._call("register", obj, identifier)

    def lookup(self, context, obj, identifier_type=None):
        return self._call("lookup", obj, identifier_type)

    def resolve(self, context, identifier):
        return self._call("resolve", identifier)

    def delete(self, context, obj, identifier=None):
        return self._call("delete", obj, identifier)


def prefix_support(prefix: str) -> Callable[[IdentifierSelector], bool]:
    def check(selector: IdentifierSelector) -> bool:
        if isinstance(selector, str):
            return selector.startswith(prefix)
        return getattr(selector, "scheme", None) == prefix.rstrip(":")

    return check


def calls(journal: list[tuple], operation: str | None = None) -> list[str]:
    """Provider names from the journal, optionally for one operation."""
    return [
        entry[0]
        for entry in journal
        if entry[0] != "context" and (operation is None or entry[1] == operation)
    ]


@pytest.fixture
def journal() -> list[tuple]:
    return []


@pytest.fixture
def ctx(journal) -> FakeContext:
    return FakeContext(journal)


@pytest.fixture
def obj() -> FakeObject:
    return FakeObject()


@pytest.fixture
def event_bus() -> InMemoryEventBus:
    return InMemoryEventBus()


@pytest.fixture
def fixed_clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def id_generator() -> SequentialIdGenerator:
    return SequentialIdGenerator()
