"""
Core validator class for typehelper.

Provides TypeHelper, an immutable wrapper around a check function, with
functional composition (opt, or_null, arr, rec, or_, and_, merge, cond) and
the terminal operations (validate, guard, parse, parse_with_default, clone).
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable, Generic, Iterator, Optional, TypeVar

from typing_extensions import TypeGuard

from . import inference
from .codec import decode, encode
from .errors import ErrBuilder, fin, leaf_err, leaf_expect
from .exceptions import ShapeError, TypeHelperError
from .types import CheckFn, Err, Ok, PathSegment, RefineFn, Result
from .undefined import UNDEFINED, Undefined

logger = logging.getLogger(__name__)

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True, slots=True, eq=False, repr=False)
class TypeHelper(Generic[T]):
    """
    Immutable validator node.

    Wraps a check function `value -> Ok(None) | Err(ErrBuilder)`. Every
    combinator returns a new TypeHelper that closes over its inputs; the
    inputs are never modified, so helpers can be shared freely.
    """

    check: CheckFn
    annotation: Any = Any

    # -- terminal operations -------------------------------------------------

    def validate_base(self, value: Any) -> Result[T, ErrBuilder]:
        """
        Validate a value, keeping the raw ErrBuilder on failure.

        Meant for implementing other helpers. Ok carries the very same
        object that was passed in.
        """
        return self.check(value).map(lambda _: value)

    def validate(self, value: Any) -> Result[T, ShapeError]:
        """
        Validate a value.

        Returns:
            Ok(value) if validation passes
            Err(ShapeError) with a rendered "in a.b.0: ..." message otherwise
        """
        return self.validate_base(value).map_err(ErrBuilder.to_error)

    def guard(
        self, value: Any, on_err: Optional[Callable[[ShapeError], Any]] = None
    ) -> TypeGuard[T]:
        """
        Check a value, narrowing its type when True.

        Args:
            value: The value to check
            on_err: Called with the ShapeError before returning False
        """
        result = self.validate_base(value)
        if isinstance(result, Ok):
            return True
        if on_err is not None:
            on_err(result.error.to_error())
        return False

    def parse(self, text: str | bytes) -> Result[T, TypeHelperError]:
        """
        Decode JSON text and validate the result.

        Malformed text gives Err(DecodeError), a wrong shape Err(ShapeError).
        """
        return decode(text).and_then(self.validate)

    def parse_with_default(self, text: str | bytes, default: T) -> T:
        """
        Like parse(), but return a deep copy of `default` on any failure.

        The copy is fresh on every call, so mutating the returned value never
        affects `default` or later calls.
        """
        result = self.parse(text)
        if isinstance(result, Ok):
            return result.value
        logger.debug("Falling back to default value: %s", result.error)
        return copy.deepcopy(default)

    def clone(self, value: T) -> Result[T, TypeHelperError]:
        """
        Deep-copy a value through a JSON round trip and revalidate it.

        Values that do not survive the round trip (dates, enums, sets,
        UNDEFINED at the top level, ...) surface as Err instead of being
        silently changed. In most cases you can just unwrap() the result.
        """
        return encode(value).and_then(decode).and_then(self.validate)

    # -- combinators ---------------------------------------------------------

    def opt(self) -> TypeHelper[T | Undefined]:
        """
        Accept UNDEFINED as well. Used with struct() for optional fields.

        UNDEFINED never appears in JSON; for `T | None` use or_null().
        """
        check = self.check

        def opt_check(value: Any) -> Result[None, ErrBuilder]:
            if value is UNDEFINED:
                return fin()
            return check(value)

        return TypeHelper(opt_check, inference.with_undefined(self.annotation))

    def or_null(self) -> TypeHelper[T | None]:
        """Accept None (JSON null) as well."""
        check = self.check

        def or_null_check(value: Any) -> Result[None, ErrBuilder]:
            if value is None:
                return fin()
            return check(value)

        return TypeHelper(or_null_check, inference.with_none(self.annotation))

    def arr(self) -> TypeHelper[list[T]]:
        """Accept a list (or tuple) whose items all pass this helper."""
        check = self.check

        def arr_check(value: Any) -> Result[None, ErrBuilder]:
            if not is_sequence(value):
                return leaf_expect("array", value)
            for i, item in enumerate(value):
                result = check(item)
                if isinstance(result, Err):
                    result.error.err_in(i)
                    return result
            return fin()

        return TypeHelper(arr_check, list[self.annotation])  # type: ignore[valid-type]

    def rec(self) -> TypeHelper[dict[str, T]]:
        """Accept a keyed container whose values all pass this helper."""
        check = self.check

        def rec_check(value: Any) -> Result[None, ErrBuilder]:
            if not is_keyed(value):
                return leaf_expect("object", value)
            for key, item in entries(value):
                result = check(item)
                if isinstance(result, Err):
                    result.error.err_in(key)
                    return result
            return fin()

        return TypeHelper(rec_check, dict[str, self.annotation])  # type: ignore[valid-type]

    def or_(self, other: TypeHelper[U]) -> TypeHelper[T | U]:
        """
        Accept values passing either helper; this one is tried first.

        When both fail the message is "(<this error>) and (<other error>)",
        reported at the union's own location.
        """
        check = self.check
        other_check = other.check

        def or_check(value: Any) -> Result[None, ErrBuilder]:
            left = check(value)
            if isinstance(left, Ok):
                return left
            right = other_check(value)
            if isinstance(right, Ok):
                return right
            return leaf_err(f"({left.error.render()}) and ({right.error.render()})")

        return TypeHelper(or_check, inference.union_of(self.annotation, other.annotation))

    def and_(self, other: TypeHelper[U]) -> TypeHelper[T]:
        """
        Accept values passing both helpers.

        This helper runs first and its failure is returned without running
        `other`. To get the flattened struct type use merge() instead.
        """
        return TypeHelper(_both(self.check, other.check), self.annotation)

    def merge(self, other: TypeHelper[U]) -> TypeHelper[dict[str, Any]]:
        """
        Same check as and_(), but the struct types are flattened into one.

        For example struct({"a": DNumber}).merge(struct({"b": DString}))
        is typed {a: int | float, b: str}.
        """
        return TypeHelper(
            _both(self.check, other.check),
            inference.merge_annotations(self.annotation, other.annotation),
        )

    def cond(self, refine: RefineFn) -> TypeHelper[T]:
        """
        Refine with a custom condition run after this helper passes.

        `refine(value)` returns fin() or leaf_err(...). Its failure is
        reported at this helper's location, with no extra path segment.
        """
        check = self.check

        def cond_check(value: Any) -> Result[None, ErrBuilder]:
            return check(value).and_then(lambda _: refine(value))

        return TypeHelper(cond_check, self.annotation)

    def __or__(self, other: TypeHelper[U]) -> TypeHelper[T | U]:
        """Support `DString | DNumber`."""
        return self.or_(other)

    def __and__(self, other: TypeHelper[U]) -> TypeHelper[T]:
        """Support `DPositive & DInteger`."""
        return self.and_(other)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.annotation!r})"


def create_helper(check: CheckFn, annotation: Any = Any) -> TypeHelper[Any]:
    """
    Create a TypeHelper from a check function.

    Usage:
        def hex_check(v):
            if not isinstance(v, str):
                return leaf_expect("string", v)
            if not re.fullmatch(r"[0-9a-fA-F]+", v):
                return leaf_err("Invalid hex string")
            return fin()

        DHex = create_helper(hex_check, str)
    """
    return TypeHelper(check, annotation)


def _both(first: CheckFn, second: CheckFn) -> CheckFn:
    def both_check(value: Any) -> Result[None, ErrBuilder]:
        result = first(value)
        if isinstance(result, Err):
            return result
        return second(value)

    return both_check


def is_sequence(value: Any) -> bool:
    """Lists and tuples are sequences; strings are not."""
    return isinstance(value, (list, tuple))


def is_keyed(value: Any) -> bool:
    """Mappings, and sequences addressed by index, are keyed containers."""
    return isinstance(value, Mapping) or is_sequence(value)


def entries(value: Mapping[Any, Any] | list[Any] | tuple[Any, ...]) -> Iterator[tuple[PathSegment, Any]]:
    """Yield (key, item) pairs; sequence keys are their index as a string."""
    if isinstance(value, Mapping):
        for key, item in value.items():
            yield _segment(key), item
    else:
        for i, item in enumerate(value):
            yield str(i), item


def lookup(value: Mapping[Any, Any] | list[Any] | tuple[Any, ...], key: str) -> Any:
    """Read one key from a keyed container, UNDEFINED if it is absent."""
    if isinstance(value, Mapping):
        return value.get(key, UNDEFINED)
    if _is_index(key) and int(key) < len(value):
        return value[int(key)]
    return UNDEFINED


def _is_index(key: str) -> bool:
    return key.isascii() and key.isdigit() and (key == "0" or not key.startswith("0"))


def _segment(key: Any) -> PathSegment:
    if isinstance(key, (str, int)) and not isinstance(key, bool):
        return key
    return str(key)
