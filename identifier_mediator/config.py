"""Runtime configuration models."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class BroadcastConfig:
    # Call ``context.flush()`` after each provider write in a fail-fast
    # broadcast so the next provider sees what the previous one created.
    flush_between_providers: bool = False
    # When false, ``register(ctx, obj, id)`` ignores ``supports(id)``.
    filter_register_by_support: bool = False


@dataclass
class ObservabilityConfig:
    emit_events: bool = True
    log_failures: bool = True


@dataclass
class MediatorConfig:
    broadcast: BroadcastConfig = field(default_factory=BroadcastConfig)
    observability: ObservabilityConfig = field(default_factory=ObservabilityConfig)
