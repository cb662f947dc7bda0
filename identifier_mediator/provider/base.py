"""Identifier provider protocol and a base class for implementations."""

from __future__ import annotations

import weakref
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Protocol

from identifier_mediator.core.errors import ParentServiceError
from identifier_mediator.core.types import (
    IdentifierSelector,
    IdentifierType,
    RepositoryObject,
    UnitOfWork,
)

if TYPE_CHECKING:
    from identifier_mediator.mediator import IdentifierService


class IdentifierProvider(Protocol):
    """Capability set every provider registered with the mediator implements.

    Operations raise ``IdentifierError`` (or a subclass),
    ``AuthorizationError`` or ``StorageError``.
    """

    def set_parent_service(self, service: IdentifierService) -> None: ...

    def supports(self, selector: IdentifierSelector) -> bool: ...

    def mint(self, context: UnitOfWork, obj: RepositoryObject) -> str: ...

    def reserve(
        self,
        context: UnitOfWork,
        obj: RepositoryObject,
        identifier: str | None = None,
    ) -> None: ...

    def register(
        self,
        context: UnitOfWork,
        obj: RepositoryObject,
        identifier: str | None = None,
    ) -> str | None: ...

    def lookup(
        self,
        context: UnitOfWork,
        obj: RepositoryObject,
        identifier_type: IdentifierType | None = None,
    ) -> str | None: ...

    def resolve(self, context: UnitOfWork, identifier: str) -> Any | None: ...

    def delete(
        self,
        context: UnitOfWork,
        obj: RepositoryObject,
        identifier: str | None = None,
    ) -> None: ...


class AbstractIdentifierProvider(ABC):
    """Base class handling the back-reference to the owning mediator.

    The mediator owns its providers, so the provider keeps only a weak
    reference back. Subclasses implement the identifier operations.
    """

    name: str = ""

    def __init__(self) -> None:
        self._parent_ref: weakref.ReferenceType[IdentifierService] | None = None

    def set_parent_service(self, service: IdentifierService) -> None:
        self._parent_ref = weakref.ref(service)

    @property
    def parent_service(self) -> IdentifierService:
        if self._parent_ref is None:
            raise ParentServiceError(
                f"Provider {self!r} is not registered with a mediator"
            )
        service = self._parent_ref()
        if service is None:
            raise ParentServiceError(
                f"Mediator owning provider {self!r} no longer exists"
            )
        return service

    @abstractmethod
    def supports(self, selector: IdentifierSelector) -> bool:
        raise NotImplementedError

    @abstractmethod
    def mint(self, context: UnitOfWork, obj: RepositoryObject) -> str:
        raise NotImplementedError

    @abstractmethod
    def reserve(
        self,
        context: UnitOfWork,
        obj: RepositoryObject,
        identifier: str | None = None,
    ) -> None:
        raise NotImplementedError

    @abstractmethod
    def register(
        self,
        context: UnitOfWork,
        obj: RepositoryObject,
        identifier: str | None = None,
    ) -> str | None:
        raise NotImplementedError

    @abstractmethod
    def lookup(
        self,
        context: UnitOfWork,
        obj: RepositoryObject,
        identifier_type: IdentifierType | None = None,
    ) -> str | None:
        raise NotImplementedError

    @abstractmethod
    def resolve(self, context: UnitOfWork, identifier: str) -> Any | None:
        raise NotImplementedError

    @abstractmethod
    def delete(
        self,
        context: UnitOfWork,
        obj: RepositoryObject,
        identifier: str | None = None,
    ) -> None:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name or '-'}>"
