from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

from .exceptions import ApiError

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    """Value-or-error returned by gateway and resource operations.

    Exactly one of ``value`` and ``error`` is meaningful: ``error is None``
    means success (``value`` may still be ``None`` for operations such as
    delete that return nothing).
    """

    value: T | None = None
    error: ApiError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]

    @classmethod
    def success(cls, value: T | None = None) -> Result[T]:
        return cls(value=value)

    @classmethod
    def failure(cls, error: ApiError) -> Result[T]:
        return cls(error=error)
