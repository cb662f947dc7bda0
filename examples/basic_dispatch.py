"""
Basic dispatch example
======================

Shows how a host application wires the identifier mediator:
- one handle provider and one DOI provider that depends on the handle
- reserve / register as fail-fast broadcasts with a single persist
- lookup / resolve as first-match reads
- a provider failure swallowed by delete and reported on the event bus

Run:
    python examples/basic_dispatch.py
"""

from identifier_mediator import (
    DOI,
    BroadcastConfig,
    DispatchReport,
    Handle,
    IdentifierError,
    InMemoryEventBus,
    InMemoryIdentifierProvider,
    MediatorConfig,
    create_identifier_service,
)
from identifier_mediator.observability import configure_logging


# ---------------------------------------------------------------------------
# 1. Host-side collaborators (normally the ORM session and a model instance)
# ---------------------------------------------------------------------------

class Session:
    def flush(self) -> None:
        print("  [session] flush")


class Item:
    def __init__(self, title: str) -> None:
        self.title = title

    def persist(self) -> None:
        print(f"  [item] persist {self.title!r}")


class FlakyProvider(InMemoryIdentifierProvider):
    """ARK-like provider whose registry is down for deletes."""

    def delete(self, context, obj, identifier=None):
        raise IdentifierError("registry unavailable")


# ---------------------------------------------------------------------------
# 2. Wiring
# ---------------------------------------------------------------------------

def main() -> None:
    configure_logging("INFO", json_logs=False)

    handle = InMemoryIdentifierProvider(Handle, "123456789")
    doi = InMemoryIdentifierProvider(DOI, "10.5072", requires=Handle)
    flaky = FlakyProvider(Handle, "99999", name="mirror")

    bus = InMemoryEventBus()
    bus.on("ProviderFailed", lambda e: print(f"  [event] {e.provider}: {e.payload['message']}"))

    service = create_identifier_service(
        [handle, doi, flaky],
        config=MediatorConfig(broadcast=BroadcastConfig(flush_between_providers=True)),
        event_bus=bus,
    )

    session, item = Session(), Item("Annual report")

    print("reserve:")
    service.reserve(session, item)

    print("register:")
    service.register(session, item)

    print("lookup:")
    print("  handle =", service.lookup(session, item, Handle))
    print("  doi    =", service.lookup(session, item, DOI))
    print("  all    =", service.lookup_all(session, item))

    print("resolve:")
    resolved = service.resolve(session, "doi:10.5072/1")
    print("  ->", resolved.title if resolved else None)

    print("delete:")
    report = DispatchReport()
    service.delete(session, item, report=report)
    for outcome in report.outcomes:
        print(f"  {outcome.provider}: {outcome.status.value}")


if __name__ == "__main__":
    main()
