"""In-memory identifier provider for testing and prototyping."""

from __future__ import annotations

import itertools
from dataclasses import dataclass
from typing import Any

from identifier_mediator.core.errors import (
    AuthorizationError,
    IdentifierError,
    IdentifierNotFoundError,
    IdentifierNotResolvableError,
)
from identifier_mediator.core.types import (
    Handle,
    IdentifierSelector,
    IdentifierType,
    RepositoryObject,
    UnitOfWork,
)
from identifier_mediator.provider.base import AbstractIdentifierProvider

RESERVED = "reserved"
REGISTERED = "registered"


@dataclass
class _Assignment:
    obj: Any
    status: str


class InMemoryIdentifierProvider(AbstractIdentifierProvider):
    """Thread-unsafe provider that keeps identifiers in dictionaries.

    Identifiers look like ``<scheme>:<prefix>/<n>``. When ``requires`` is set,
    minting first asks the parent mediator for an identifier of that type and
    refuses to mint without one (a DOI that needs a handle, for instance).
    """

    def __init__(
        self,
        identifier_class: IdentifierType = Handle,
        prefix: str = "123456789",
        *,
        name: str | None = None,
        requires: IdentifierType | None = None,
        read_only: bool = False,
    ) -> None:
        super().__init__()
        self.identifier_class = identifier_class
        self.prefix = prefix
        self.name = name or identifier_class.scheme
        self.requires = requires
        self.read_only = read_only
        self._counter = itertools.count(1)
        self._assignments: dict[str, _Assignment] = {}

    # --- Capability ---

    def supports(self, selector: IdentifierSelector) -> bool:
        if isinstance(selector, str):
            return selector.startswith(f"{self.identifier_class.scheme}:")
        return isinstance(selector, type) and issubclass(
            selector, self.identifier_class
        )

    # --- Helpers ---

    def _check_writable(self) -> None:
        if self.read_only:
            raise AuthorizationError(f"Provider {self.name!r} is read-only")

    def _identifiers_of(self, obj: Any) -> list[str]:
        return [i for i, a in self._assignments.items() if a.obj is obj]

    def _claim(self, obj: Any, identifier: str, status: str) -> None:
        if not self.supports(identifier):
            raise IdentifierError(
                f"{identifier!r} is not a {self.identifier_class.scheme} identifier"
            )
        current = self._assignments.get(identifier)
        if current is not None and current.obj is not obj:
            raise IdentifierError(f"{identifier!r} is assigned to another object")
        if current is not None and current.status == REGISTERED:
            return
        self._assignments[identifier] = _Assignment(obj=obj, status=status)

    def _next_identifier(self) -> str:
        while True:
            candidate = (
                f"{self.identifier_class.scheme}:{self.prefix}/{next(self._counter)}"
            )
            if candidate not in self._assignments:
                return candidate

    def status_of(self, identifier: str) -> str | None:
        assignment = self._assignments.get(identifier)
        return assignment.status if assignment else None

    # --- Operations ---

    def mint(self, context: UnitOfWork, obj: RepositoryObject) -> str:
        existing = self._identifiers_of(obj)
        if existing:
            return existing[0]
        self._check_writable()
        if self.requires is not None:
            dependency = self.parent_service.lookup(context, obj, self.requires)
            if dependency is None:
                raise IdentifierError(
                    f"Provider {self.name!r} needs a {self.requires.scheme} "
                    "identifier before minting"
                )
        identifier = self._next_identifier()
        self._assignments[identifier] = _Assignment(obj=obj, status=RESERVED)
        return identifier

    def reserve(
        self,
        context: UnitOfWork,
        obj: RepositoryObject,
        identifier: str | None = None,
    ) -> None:
        if identifier is None:
            self.mint(context, obj)
            return
        self._check_writable()
        self._claim(obj, identifier, RESERVED)

    def register(
        self,
        context: UnitOfWork,
        obj: RepositoryObject,
        identifier: str | None = None,
    ) -> str | None:
        if identifier is None:
            identifier = self.mint(context, obj)
        self._check_writable()
        self._claim(obj, identifier, REGISTERED)
        return identifier

    def lookup(
        self,
        context: UnitOfWork,
        obj: RepositoryObject,
        identifier_type: IdentifierType | None = None,
    ) -> str | None:
        if identifier_type is not None and not self.supports(identifier_type):
            return None
        found = self._identifiers_of(obj)
        return found[0] if found else None

    def resolve(self, context: UnitOfWork, identifier: str) -> Any | None:
        if not self.supports(identifier):
            raise IdentifierNotResolvableError(
                f"Provider {self.name!r} cannot resolve {identifier!r}"
            )
        assignment = self._assignments.get(identifier)
        return assignment.obj if assignment else None

    def delete(
        self,
        context: UnitOfWork,
        obj: RepositoryObject,
        identifier: str | None = None,
    ) -> None:
        self._check_writable()
        if identifier is None:
            for held in self._identifiers_of(obj):
                del self._assignments[held]
            return
        assignment = self._assignments.get(identifier)
        if assignment is None or assignment.obj is not obj:
            raise IdentifierNotFoundError(
                f"{identifier!r} is not assigned to this object"
            )
        del self._assignments[identifier]
