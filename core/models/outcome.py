# Path: core/models/outcome.py
# Purpose: Tagged result type returned by calls to upstream services.
# Layer: core/models.
# Details: Callers branch on ``ok`` instead of catching exceptions from deep call stacks.

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Succeeded(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Failed:
    reason: str

    @property
    def ok(self) -> bool:
        return False


Outcome = Union[Succeeded[T], Failed]
