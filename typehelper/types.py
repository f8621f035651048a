"""
Type definitions for typehelper.

Provides the Result type (Ok/Err) used by every validation operation,
and the type aliases shared across modules.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Generic, NoReturn, TypeVar, Union

from .exceptions import UnwrapError

if TYPE_CHECKING:
    from .errors import ErrBuilder

T = TypeVar("T")
E = TypeVar("E")
U = TypeVar("U")
F = TypeVar("F")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Success result containing a value."""

    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def map(self, fn: Callable[[T], U]) -> Ok[U]:
        return Ok(fn(self.value))

    def map_err(self, fn: Callable[[Any], Any]) -> Ok[T]:
        return self

    def and_then(self, fn: Callable[[T], Result[U, F]]) -> Result[U, F]:
        return fn(self.value)

    def match(self, on_ok: Callable[[T], U], on_err: Callable[[Any], U]) -> U:
        return on_ok(self.value)

    def unwrap(self) -> T:
        return self.value

    def unwrap_err(self) -> NoReturn:
        raise UnwrapError(f"Called unwrap_err() on Ok: {self.value!r}")

    def unwrap_or(self, default: Any) -> T:
        return self.value

    def expect(self, message: str) -> T:
        return self.value


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """Error result containing an error value."""

    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def map(self, fn: Callable[[Any], Any]) -> Err[E]:
        return self

    def map_err(self, fn: Callable[[E], F]) -> Err[F]:
        return Err(fn(self.error))

    def and_then(self, fn: Callable[[Any], Any]) -> Err[E]:
        return self

    def match(self, on_ok: Callable[[Any], U], on_err: Callable[[E], U]) -> U:
        return on_err(self.error)

    def unwrap(self) -> NoReturn:
        """Raise the carried error, or UnwrapError if it is not an exception."""
        if isinstance(self.error, BaseException):
            raise self.error
        raise UnwrapError(f"Called unwrap() on Err: {self.error}")

    def unwrap_err(self) -> E:
        return self.error

    def unwrap_or(self, default: U) -> U:
        return default

    def expect(self, message: str) -> NoReturn:
        raise UnwrapError(f"{message}: {self.error}")


Result = Union[Ok[T], Err[E]]

# Type aliases
PathSegment = Union[str, int]
CheckFn = Callable[[Any], "Result[None, ErrBuilder]"]
RefineFn = Callable[[Any], "Result[None, ErrBuilder]"]
