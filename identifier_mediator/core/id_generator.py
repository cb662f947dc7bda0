"""Dispatch id generation; one id correlates every event of a mediator call."""

from __future__ import annotations

import itertools
import uuid
from typing import Protocol


class IdGenerator(Protocol):
    def generate(self) -> str: ...


class UuidV4Generator:
    def generate(self) -> str:
        return uuid.uuid4().hex


class SequentialIdGenerator:
    """Deterministic ids (``prefix-1``, ``prefix-2``, ...)."""

    def __init__(self, prefix: str = "dispatch") -> None:
        self._prefix = prefix
        self._counter = itertools.count(1)

    def generate(self) -> str:
        return f"{self._prefix}-{next(self._counter)}"
