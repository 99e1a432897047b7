"""Result type returned by marketplace gateway operations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class FetchResult(Generic[T]):
    """Outcome of one facet query.

    A failed result still carries a usable default value, so callers can
    build a report without checking for errors; error says why it degraded.
    """

    value: T
    error: str | None = None

    @property
    def degraded(self) -> bool:
        return self.error is not None

    @classmethod
    def ok(cls, value: T) -> FetchResult[T]:
        return cls(value=value)

    @classmethod
    def failed(cls, default: T, error: str) -> FetchResult[T]:
        return cls(value=default, error=error)
