"""Provider module: the provider contract and reference implementations."""

from identifier_mediator.provider.base import AbstractIdentifierProvider, IdentifierProvider
from identifier_mediator.provider.memory import InMemoryIdentifierProvider

__all__ = ["AbstractIdentifierProvider", "IdentifierProvider", "InMemoryIdentifierProvider"]
