"""Tests for core utilities: Clock, IdGenerator, errors, types, logging setup."""

from __future__ import annotations

import logging

import pytest
import structlog

from identifier_mediator.core.clock import FixedClock, SystemClock
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
from identifier_mediator.core.id_generator import SequentialIdGenerator, UuidV4Generator
from identifier_mediator.core.types import (
    DOI,
    DispatchReport,
    Handle,
    Identifier,
    Operation,
    OutcomeStatus,
    ProviderOutcome,
    provider_name,
)
from identifier_mediator.observability.logging import configure_logging


# ---- Clock ----

def test_system_clock_iso_format():
    ts = SystemClock().now_iso()
    assert "T" in ts
    assert ts.endswith("+00:00")


def test_fixed_clock():
    assert FixedClock("x").now_iso() == "x"


# ---- IdGenerator ----

def test_uuid_generator_uniqueness():
    gen = UuidV4Generator()
    ids = {gen.generate() for _ in range(100)}
    assert len(ids) == 100
    assert all(len(i) == 32 for i in ids)


def test_sequential_generator():
    gen = SequentialIdGenerator("call")
    assert [gen.generate() for _ in range(3)] == ["call-1", "call-2", "call-3"]


# ---- Errors ----

@pytest.mark.parametrize(
    "error_cls",
    [
        IdentifierError,
        IdentifierNotFoundError,
        IdentifierNotResolvableError,
        AuthorizationError,
        StorageError,
    ],
)
def test_provider_errors_share_base(error_cls):
    assert issubclass(error_cls, ProviderError)
    assert issubclass(error_cls, IdentifierServiceError)


def test_narrow_identifier_errors():
    assert issubclass(IdentifierNotFoundError, IdentifierError)
    assert issubclass(IdentifierNotResolvableError, IdentifierError)
    assert not issubclass(ParentServiceError, ProviderError)


# ---- Types ----

def test_identifier_scheme_and_str():
    assert Handle("hdl:1/1").scheme == "hdl"
    assert DOI.scheme == "doi"
    assert Identifier.scheme == "id"
    assert str(DOI("doi:10.1/x")) == "doi:10.1/x"
    assert issubclass(DOI, Identifier)


def test_report_views():
    report = DispatchReport(
        outcomes=[
            ProviderOutcome("a", Operation.DELETE, OutcomeStatus.SKIPPED),
            ProviderOutcome("b", Operation.DELETE, OutcomeStatus.FAILED, StorageError()),
            ProviderOutcome("c", Operation.DELETE, OutcomeStatus.INVOKED),
        ]
    )
    assert report.invoked == ["b", "c"]
    assert [o.provider for o in report.failures] == ["b"]


def test_provider_name_falls_back_to_class():
    class Nameless:
        pass

    class Named:
        name = "handle"

    assert provider_name(Nameless()) == "Nameless"
    assert provider_name(Named()) == "handle"


# ---- Logging ----

def test_configure_logging_sets_level():
    root = logging.getLogger()
    previous = root.level
    try:
        configure_logging("debug", json_logs=False)
        assert root.level == logging.DEBUG
        assert structlog.is_configured()
    finally:
        root.setLevel(previous)
        structlog.reset_defaults()
