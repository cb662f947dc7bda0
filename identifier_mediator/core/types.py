"""Core data types shared by the mediator and its providers."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Protocol, Union


# ---------------------------------------------------------------------------
# Identifiers
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Identifier:
    """A persistent identifier value tagged with its scheme.

    Subclasses double as type selectors: ``lookup(ctx, obj, DOI)`` asks for
    the DOI of an object without knowing its value.
    """

    scheme: ClassVar[str] = "id"

    value: str

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Handle(Identifier):
    scheme: ClassVar[str] = "hdl"


@dataclass(frozen=True)
class DOI(Identifier):
    scheme: ClassVar[str] = "doi"


IdentifierType = type[Identifier]

# What ``supports`` is asked about: an identifier string or a type selector.
IdentifierSelector = Union[str, IdentifierType]


# ---------------------------------------------------------------------------
# External collaborators
# ---------------------------------------------------------------------------

class RepositoryObject(Protocol):
    """An object owned by the host repository that can carry identifiers."""

    def persist(self) -> None: ...


class UnitOfWork(Protocol):
    """The host's session/transaction handle, threaded through every call."""

    def flush(self) -> None: ...


# ---------------------------------------------------------------------------
# Dispatch bookkeeping
# ---------------------------------------------------------------------------

class Operation(str, Enum):
    MINT = "mint"
    RESERVE = "reserve"
    REGISTER = "register"
    LOOKUP = "lookup"
    LOOKUP_ALL = "lookup_all"
    RESOLVE = "resolve"
    DELETE = "delete"


class DispatchPolicy(str, Enum):
    FAIL_FAST = "fail_fast"
    FAIL_ISOLATED = "fail_isolated"
    FIRST_MATCH = "first_match"


class OutcomeStatus(str, Enum):
    INVOKED = "invoked"
    SKIPPED = "skipped"
    FAILED = "failed"
    MATCHED = "matched"
    EMPTY = "empty"


@dataclass
class ProviderOutcome:
    provider: str
    operation: Operation
    status: OutcomeStatus
    error: BaseException | None = None


@dataclass
class DispatchReport:
    """Per-call record of what each provider did."""

    dispatch_id: str = ""
    operation: Operation | None = None
    policy: DispatchPolicy | None = None
    outcomes: list[ProviderOutcome] = field(default_factory=list)
    persisted: bool = False

    @property
    def failures(self) -> list[ProviderOutcome]:
        return [o for o in self.outcomes if o.status == OutcomeStatus.FAILED]

    @property
    def invoked(self) -> list[str]:
        return [
            o.provider for o in self.outcomes if o.status != OutcomeStatus.SKIPPED
        ]


def provider_name(provider: object) -> str:
    name = getattr(provider, "name", None)
    if isinstance(name, str) and name:
        return name
    return type(provider).__name__
