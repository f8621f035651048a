"""
Structural helpers for typehelper: struct, tuple_ and the functional forms
of the core combinators.

Usage:
    DMessage = struct({
        "role": literal("user", "assistant", "system"),
        "content": DString,
    })
    DChatRequest = struct({
        "model": DString,
        "stream": optional(DBoolean),
        "messages": array(DMessage),
    })

    DChatRequest.validate({"model": "m", "messages": [{"role": "user", "content": 42}]})
    # Err(ShapeError("in messages.0.content: Expected string, got 42"))
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, TypeVar

from . import inference
from .core import TypeHelper, entries, is_keyed, is_sequence, lookup
from .errors import ErrBuilder, fin, leaf_err, leaf_expect
from .types import Err, Ok, RefineFn, Result
from .undefined import Undefined

T = TypeVar("T")


@dataclass(frozen=True, slots=True, eq=False, repr=False)
class StructHelper(TypeHelper[dict[str, Any]]):
    """TypeHelper for a struct, keeping its field helpers for introspection."""

    fields: Mapping[str, TypeHelper[Any]] = field(default_factory=dict)


def struct(fields: Mapping[str, TypeHelper[Any]]) -> StructHelper:
    """
    Create a helper for a dict with named fields.

    Fields are checked in declaration order and the first failure is
    reported with its field name prepended to the path. A missing key is
    looked up as UNDEFINED, so fields built with opt() are optional. Keys
    that are not declared are ignored; use strict_struct() to reject them.

    Lists and tuples are keyed containers too: a field named "0" reads
    the first item.
    """
    frozen = MappingProxyType(dict(fields))

    def struct_check(value: Any) -> Result[None, ErrBuilder]:
        if not is_keyed(value):
            return leaf_expect("struct", value)
        return _check_fields(frozen, value)

    return StructHelper(struct_check, _struct_annotation(frozen), frozen)


def strict_struct(fields: Mapping[str, TypeHelper[Any]]) -> StructHelper:
    """
    Same as struct(), but keys that are not declared fail with
    "Unexpected field" at that key.
    """
    frozen = MappingProxyType(dict(fields))

    def strict_struct_check(value: Any) -> Result[None, ErrBuilder]:
        if not is_keyed(value):
            return leaf_expect("struct", value)
        result = _check_fields(frozen, value)
        if isinstance(result, Err):
            return result
        for key, _ in entries(value):
            if key not in frozen:
                return leaf_err("Unexpected field").map_err(lambda e: e.err_in(key))
        return fin()

    return StructHelper(strict_struct_check, _struct_annotation(frozen), frozen)


def _check_fields(
    fields: Mapping[str, TypeHelper[Any]], value: Any
) -> Result[None, ErrBuilder]:
    for key, helper in fields.items():
        result = helper.check(lookup(value, key))
        if isinstance(result, Err):
            result.error.err_in(key)
            return result
    return fin()


def _struct_annotation(fields: Mapping[str, TypeHelper[Any]]) -> Any:
    return inference.struct_annotation(
        {key: helper.annotation for key, helper in fields.items()}
    )


def tuple_(*helpers: TypeHelper[Any]) -> TypeHelper[tuple[Any, ...]]:
    """
    Create a helper for a fixed-length list, one helper per position.

    A wrong length fails with "tuple length <n>, got <actual>" at the tuple's
    own location; a failing item is reported with its index.
    """
    checks = tuple(h.check for h in helpers)

    def tuple_check(value: Any) -> Result[None, ErrBuilder]:
        if not is_sequence(value):
            return leaf_expect("tuple", value)
        if len(value) != len(checks):
            return leaf_err(f"tuple length {len(checks)}, got {len(value)}")
        for i, (check, item) in enumerate(zip(checks, value)):
            result = check(item)
            if isinstance(result, Err):
                result.error.err_in(i)
                return result
        return fin()

    if helpers:
        annotation = tuple[tuple(h.annotation for h in helpers)]  # type: ignore[misc]
    else:
        annotation = tuple[()]
    return TypeHelper(tuple_check, annotation)


def union(*helpers: TypeHelper[Any]) -> TypeHelper[Any]:
    """
    Accept values passing any of the helpers, tried in order.

    When all fail the message is "(<err 1>) and (<err 2>) and ...".

    Raises:
        ValueError: If no helper is given
    """
    if not helpers:
        raise ValueError("union() requires at least one helper")
    checks = tuple(h.check for h in helpers)

    def union_check(value: Any) -> Result[None, ErrBuilder]:
        errors = []
        for check in checks:
            result = check(value)
            if isinstance(result, Ok):
                return result
            errors.append(f"({result.error.render()})")
        return leaf_err(" and ".join(errors))

    return TypeHelper(union_check, inference.union_of(*(h.annotation for h in helpers)))


def array(helper: TypeHelper[T]) -> TypeHelper[list[T]]:
    return helper.arr()


def record(helper: TypeHelper[T]) -> TypeHelper[dict[str, T]]:
    return helper.rec()


def optional(helper: TypeHelper[T]) -> TypeHelper[T | Undefined]:
    return helper.opt()


def nullable(helper: TypeHelper[T]) -> TypeHelper[T | None]:
    return helper.or_null()


def with_condition(helper: TypeHelper[T], condition: RefineFn) -> TypeHelper[T]:
    """Functional form of helper.cond(condition)."""
    return helper.cond(condition)
