"""Identifier mediator: dispatches persistent-identifier operations over
an ordered list of pluggable providers."""

from identifier_mediator.config import (
    BroadcastConfig,
    MediatorConfig,
    ObservabilityConfig,
)
from identifier_mediator.core.errors import (
    AuthorizationError,
    IdentifierError,
    IdentifierNotFoundError,
    IdentifierNotResolvableError,
    IdentifierServiceError,
    ParentServiceError,
    ProviderError,
    StorageError,
)
from identifier_mediator.core.types import (
    DOI,
    DispatchPolicy,
    DispatchReport,
    Handle,
    Identifier,
    Operation,
    OutcomeStatus,
    ProviderOutcome,
    RepositoryObject,
    UnitOfWork,
)
from identifier_mediator.mediator import (
    IdentifierMediator,
    IdentifierService,
    create_identifier_service,
)
from identifier_mediator.observability.event_bus import (
    Event,
    EventBus,
    InMemoryEventBus,
    NullEventBus,
)
from identifier_mediator.provider.base import (
    AbstractIdentifierProvider,
    IdentifierProvider,
)
from identifier_mediator.provider.memory import InMemoryIdentifierProvider

__version__ = "0.1.0"

__all__ = [
    "AbstractIdentifierProvider",
    "AuthorizationError",
    "BroadcastConfig",
    "DOI",
    "DispatchPolicy",
    "DispatchReport",
    "Event",
    "EventBus",
    "Handle",
    "Identifier",
    "IdentifierError",
    "IdentifierMediator",
    "IdentifierNotFoundError",
    "IdentifierNotResolvableError",
    "IdentifierProvider",
    "IdentifierService",
    "IdentifierServiceError",
    "InMemoryEventBus",
    "InMemoryIdentifierProvider",
    "MediatorConfig",
    "NullEventBus",
    "ObservabilityConfig",
    "Operation",
    "OutcomeStatus",
    "ParentServiceError",
    "ProviderError",
    "ProviderOutcome",
    "RepositoryObject",
    "StorageError",
    "UnitOfWork",
    "create_identifier_service",
]
