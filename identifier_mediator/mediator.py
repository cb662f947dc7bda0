"""IdentifierMediator: routes identifier operations to the registered providers."""

from __future__ import annotations

from typing import Any, Callable, Protocol, Sequence

import structlog

from identifier_mediator.config import MediatorConfig
from identifier_mediator.core.clock import Clock, SystemClock
from identifier_mediator.core.errors import ProviderError
from identifier_mediator.core.id_generator import IdGenerator, UuidV4Generator
from identifier_mediator.core.types import (
    DispatchPolicy,
    DispatchReport,
    IdentifierSelector,
    IdentifierType,
    Operation,
    OutcomeStatus,
    ProviderOutcome,
    RepositoryObject,
    UnitOfWork,
    provider_name,
)
from identifier_mediator.observability.event_bus import Event, EventBus, NullEventBus
from identifier_mediator.provider.base import IdentifierProvider

logger = structlog.get_logger(__name__)

ProviderCall = Callable[[IdentifierProvider], Any]


class IdentifierService(Protocol):
    """What a provider may call back into through ``parent_service``."""

    def lookup(
        self,
        context: UnitOfWork,
        obj: RepositoryObject,
        identifier_type: IdentifierType,
        *,
        report: DispatchReport | None = None,
    ) -> str | None: ...

    def resolve(
        self,
        context: UnitOfWork,
        identifier: str,
        *,
        report: DispatchReport | None = None,
    ) -> Any | None: ...


class IdentifierMediator:
    """Dispatches each identifier operation over an ordered provider list.

    Writes (reserve/register) are fail-fast broadcasts followed by a single
    ``obj.persist()``. Reads (lookup/resolve) return the first non-``None``
    provider result. Deletes are best-effort broadcasts. Reads and deletes
    never raise provider errors; those are logged, emitted as
    ``ProviderFailed`` events and recorded on the ``DispatchReport``.

    Providers are consulted strictly in the order given here. The mediator
    keeps no per-call state, so one instance serves the whole process.
    """

    def __init__(
        self,
        providers: Sequence[IdentifierProvider],
        *,
        config: MediatorConfig | None = None,
        event_bus: EventBus | None = None,
        clock: Clock | None = None,
        id_generator: IdGenerator | None = None,
    ) -> None:
        self._providers: tuple[IdentifierProvider, ...] = tuple(providers)
        self._config = config or MediatorConfig()
        self._event_bus = event_bus or NullEventBus()
        self._clock = clock or SystemClock()
        self._id_gen = id_generator or UuidV4Generator()

        for provider in self._providers:
            provider.set_parent_service(self)

    @property
    def providers(self) -> tuple[IdentifierProvider, ...]:
        return self._providers

    @property
    def config(self) -> MediatorConfig:
        return self._config

    # --- Writes (fail-fast) ---

    def reserve(
        self,
        context: UnitOfWork,
        obj: RepositoryObject,
        identifier: str | None = None,
        *,
        report: DispatchReport | None = None,
    ) -> None:
        """Reserve identifiers for ``obj``.

        Without ``identifier`` every provider mints one; with it, only the
        providers that support the identifier reserve it.
        """
        report = self._begin(Operation.RESERVE, DispatchPolicy.FAIL_FAST, report)
        if identifier is None:
            self._broadcast(
                report,
                Operation.MINT,
                lambda p: p.mint(context, obj),
                context=context,
            )
        else:
            self._broadcast(
                report,
                Operation.RESERVE,
                lambda p: p.reserve(context, obj, identifier),
                selector=identifier,
                context=context,
            )
        self._persist(obj, report)
        self._complete(report)

    def register(
        self,
        context: UnitOfWork,
        obj: RepositoryObject,
        identifier: str | None = None,
        *,
        report: DispatchReport | None = None,
    ) -> None:
        """Register identifiers for ``obj`` with every provider.

        An explicit ``identifier`` goes to all providers regardless of
        ``supports`` unless ``broadcast.filter_register_by_support`` is set.
        """
        report = self._begin(Operation.REGISTER, DispatchPolicy.FAIL_FAST, report)
        if identifier is None:
            self._broadcast(
                report,
                Operation.REGISTER,
                lambda p: p.register(context, obj),
                context=context,
            )
        else:
            selector = (
                identifier
                if self._config.broadcast.filter_register_by_support
                else None
            )
            self._broadcast(
                report,
                Operation.REGISTER,
                lambda p: p.register(context, obj, identifier),
                selector=selector,
                context=context,
            )
        self._persist(obj, report)
        self._complete(report)

    # --- Reads (first match wins) ---

    def lookup(
        self,
        context: UnitOfWork,
        obj: RepositoryObject,
        identifier_type: IdentifierType,
        *,
        report: DispatchReport | None = None,
    ) -> str | None:
        """Return the first identifier of ``identifier_type`` held for ``obj``."""
        report = self._begin(Operation.LOOKUP, DispatchPolicy.FIRST_MATCH, report)
        result = self._first_match(
            report,
            Operation.LOOKUP,
            identifier_type,
            lambda p: p.lookup(context, obj, identifier_type),
        )
        self._complete(report)
        return result

    def resolve(
        self,
        context: UnitOfWork,
        identifier: str,
        *,
        report: DispatchReport | None = None,
    ) -> Any | None:
        """Return the object ``identifier`` points at, or ``None``."""
        report = self._begin(Operation.RESOLVE, DispatchPolicy.FIRST_MATCH, report)
        result = self._first_match(
            report,
            Operation.RESOLVE,
            identifier,
            lambda p: p.resolve(context, identifier),
        )
        self._complete(report)
        return result

    def lookup_all(
        self,
        context: UnitOfWork,
        obj: RepositoryObject,
        *,
        report: DispatchReport | None = None,
    ) -> list[str]:
        """Collect the identifier each provider holds for ``obj``, in order."""
        report = self._begin(
            Operation.LOOKUP_ALL, DispatchPolicy.FAIL_ISOLATED, report
        )
        found: list[str] = []

        def collect(provider: IdentifierProvider) -> None:
            result = provider.lookup(context, obj)
            if result:
                found.append(result)

        self._broadcast(report, Operation.LOOKUP, collect)
        self._complete(report)
        return found

    # --- Cleanup (best effort) ---

    def delete(
        self,
        context: UnitOfWork,
        obj: RepositoryObject,
        identifier: str | None = None,
        *,
        report: DispatchReport | None = None,
    ) -> None:
        """Remove identifiers of ``obj``; never persists and never raises
        provider errors."""
        report = self._begin(Operation.DELETE, DispatchPolicy.FAIL_ISOLATED, report)
        if identifier is None:
            self._broadcast(report, Operation.DELETE, lambda p: p.delete(context, obj))
        else:
            self._broadcast(
                report,
                Operation.DELETE,
                lambda p: p.delete(context, obj, identifier),
                selector=identifier,
            )
        self._complete(report)

    # --- Dispatch internals ---

    def _begin(
        self,
        operation: Operation,
        policy: DispatchPolicy,
        report: DispatchReport | None,
    ) -> DispatchReport:
        if report is None:
            report = DispatchReport()
        report.dispatch_id = self._id_gen.generate()
        report.operation = operation
        report.policy = policy
        report.outcomes = []
        report.persisted = False
        return report

    def _broadcast(
        self,
        report: DispatchReport,
        operation: Operation,
        call: ProviderCall,
        *,
        selector: IdentifierSelector | None = None,
        context: UnitOfWork | None = None,
    ) -> None:
        fail_fast = report.policy == DispatchPolicy.FAIL_FAST
        flush = fail_fast and self._config.broadcast.flush_between_providers

        for provider in self._providers:
            name = provider_name(provider)
            if selector is not None and not provider.supports(selector):
                self._record(report, name, operation, OutcomeStatus.SKIPPED)
                continue
            if fail_fast:
                try:
                    call(provider)
                except Exception as exc:
                    self._record(report, name, operation, OutcomeStatus.FAILED, exc)
                    self._abort(report, name, operation, exc)
                    raise
            else:
                try:
                    call(provider)
                except ProviderError as exc:
                    self._swallow(report, name, operation, exc)
                    continue
            self._record(report, name, operation, OutcomeStatus.INVOKED)
            if flush and context is not None:
                context.flush()
                self._emit("ContextFlushed", report, provider=name)

    def _first_match(
        self,
        report: DispatchReport,
        operation: Operation,
        selector: IdentifierSelector,
        call: ProviderCall,
    ) -> Any | None:
        for provider in self._providers:
            name = provider_name(provider)
            if not provider.supports(selector):
                self._record(report, name, operation, OutcomeStatus.SKIPPED)
                continue
            try:
                result = call(provider)
            except ProviderError as exc:
                self._swallow(report, name, operation, exc)
                continue
            if result is not None:
                self._record(report, name, operation, OutcomeStatus.MATCHED)
                return result
            self._record(report, name, operation, OutcomeStatus.EMPTY)
        return None

    def _persist(self, obj: RepositoryObject, report: DispatchReport) -> None:
        obj.persist()
        report.persisted = True
        self._emit("ObjectPersisted", report)

    def _record(
        self,
        report: DispatchReport,
        name: str,
        operation: Operation,
        status: OutcomeStatus,
        error: BaseException | None = None,
    ) -> None:
        report.outcomes.append(
            ProviderOutcome(
                provider=name, operation=operation, status=status, error=error
            )
        )

    def _swallow(
        self,
        report: DispatchReport,
        name: str,
        operation: Operation,
        exc: ProviderError,
    ) -> None:
        self._record(report, name, operation, OutcomeStatus.FAILED, exc)
        if self._config.observability.log_failures:
            logger.error(
                "identifier_provider_failed",
                provider=name,
                operation=operation.value,
                dispatch_id=report.dispatch_id,
                error=str(exc),
                exc_info=exc,
            )
        self._emit(
            "ProviderFailed",
            report,
            provider=name,
            error_type=type(exc).__name__,
            message=str(exc),
        )

    def _abort(
        self,
        report: DispatchReport,
        name: str,
        operation: Operation,
        exc: Exception,
    ) -> None:
        if self._config.observability.log_failures:
            logger.warning(
                "identifier_broadcast_aborted",
                provider=name,
                operation=operation.value,
                dispatch_id=report.dispatch_id,
                error=str(exc),
            )
        self._emit(
            "BroadcastAborted",
            report,
            provider=name,
            error_type=type(exc).__name__,
            message=str(exc),
        )

    def _complete(self, report: DispatchReport) -> None:
        self._emit(
            "DispatchCompleted",
            report,
            invoked=report.invoked,
            failures=len(report.failures),
            persisted=report.persisted,
        )

    def _emit(
        self,
        event_type: str,
        report: DispatchReport,
        provider: str | None = None,
        **payload: Any,
    ) -> None:
        if not self._config.observability.emit_events:
            return
        operation = report.operation.value if report.operation else ""
        event = Event(
            event_type=event_type,
            dispatch_id=report.dispatch_id,
            operation=operation,
            provider=provider,
            ts=self._clock.now_iso(),
            payload=payload,
        )
        # A failing handler must not change the dispatch outcome.
        try:
            self._event_bus.emit(event)
        except Exception:
            logger.exception(
                "identifier_event_handler_failed",
                event_type=event_type,
                dispatch_id=report.dispatch_id,
            )

    def __repr__(self) -> str:
        names = ", ".join(provider_name(p) for p in self._providers)
        return f"<IdentifierMediator [{names}]>"


def create_identifier_service(
    providers: Sequence[IdentifierProvider],
    config: MediatorConfig | None = None,
    event_bus: EventBus | None = None,
) -> IdentifierMediator:
    """One-line factory wiring a mediator over ``providers``."""
    return IdentifierMediator(providers, config=config, event_bus=event_bus)
