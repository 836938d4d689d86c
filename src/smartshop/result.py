"""
Explicit success/failure value returned by every repository operation.
"""

from dataclasses import dataclass
from typing import Callable, Generic, Optional, TypeVar

from smartshop.errors import RepositoryError

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True)
class Result(Generic[T]):
    value: Optional[T] = None
    error: Optional[RepositoryError] = None

    def __post_init__(self):
        if self.error is not None and self.value is not None:
            raise ValueError("A Result cannot carry both a value and an error")

    @classmethod
    def ok(cls, value: T = None) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def fail(cls, error: RepositoryError) -> "Result[T]":
        if not isinstance(error, RepositoryError):
            raise TypeError(f"Result.fail expects a RepositoryError, got {type(error).__name__}")
        return cls(error=error)

    @property
    def is_ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        """Return the value, or raise the carried error."""
        if self.error is not None:
            raise self.error
        return self.value

    def map(self, fn: Callable[[T], U]) -> "Result[U]":
        if self.error is not None:
            return Result(error=self.error)
        return Result(value=fn(self.value))
