"""
models/result.py
----------------
Outcome of a data-access operation.

A successful result may still carry no data (a lookup that matched nothing
has ``value`` None, a search with no matches has an empty list). A failed
result carries the database error instead, so callers can tell "no data"
apart from "the database could not answer".
"""

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class QueryResult(Generic[T]):
    value: Optional[T] = None
    error: Optional[Exception] = None

    @classmethod
    def success(cls, value: Optional[T] = None) -> "QueryResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: Exception) -> "QueryResult[T]":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Optional[T]:
        """Return the value, re-raising the stored error on failure."""
        if self.error is not None:
            raise self.error
        return self.value

    def value_or(self, default: T) -> T:
        """Return the value on success (even if None), otherwise `default`."""
        return default if self.error is not None else self.value
