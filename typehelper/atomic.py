"""
Atomic and literal helpers for typehelper.

Atomic kinds are mutually exclusive classifications of a runtime value:

    undefined  UNDEFINED
    null       None
    boolean    bool
    symbol     any other Enum member
    string     str
    number     float, or int within +/- (2**53 - 1)
    bigint     int beyond +/- (2**53 - 1)
    object     everything else (dicts, lists, tuples, other objects)

Integers past 2**53 - 1 cannot be represented exactly as a JSON number,
which is why they classify as bigint rather than number. decode() never
produces one: such JSON integers come back as floats.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Literal, Union

from .codec import MAX_SAFE_INTEGER, describe
from .core import TypeHelper
from .errors import ErrBuilder, fin, leaf_expect
from .types import Result
from .undefined import UNDEFINED, Undefined

ATOMIC_KINDS: dict[str, Any] = {
    "string": str,
    "number": Union[int, float],
    "boolean": bool,
    "undefined": Undefined,
    "bigint": int,
    "symbol": Enum,
}

LiteralType = Union[str, int, float, bool, None, Undefined]


def kind_of(value: Any) -> str:
    """Classify a value into one of the atomic kinds, or "null"/"object"."""
    if value is UNDEFINED:
        return "undefined"
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, Enum):
        return "symbol"
    if isinstance(value, str):
        return "string"
    if isinstance(value, float):
        return "number"
    if isinstance(value, int):
        return "number" if abs(value) <= MAX_SAFE_INTEGER else "bigint"
    return "object"


def atomic(kind: str) -> TypeHelper[Any]:
    """
    Create a helper accepting exactly one atomic kind.

    Usage:
        atomic("string").guard("abc")      # True
        atomic("number").guard(True)       # False, bool is its own kind

    Raises:
        ValueError: If `kind` is not one of ATOMIC_KINDS
    """
    if kind not in ATOMIC_KINDS:
        raise ValueError(
            f"Unknown atomic kind {kind!r}, expected one of: {', '.join(ATOMIC_KINDS)}"
        )

    def atomic_check(value: Any) -> Result[None, ErrBuilder]:
        if kind_of(value) == kind:
            return fin()
        return leaf_expect(kind, value)

    return TypeHelper(atomic_check, ATOMIC_KINDS[kind])


# Constants for atomic types.
DString: TypeHelper[str] = atomic("string")
DNumber: TypeHelper[Union[int, float]] = atomic("number")
DBoolean: TypeHelper[bool] = atomic("boolean")
DUndefined: TypeHelper[Undefined] = atomic("undefined")
DBigInt: TypeHelper[int] = atomic("bigint")
DSymbol: TypeHelper[Enum] = atomic("symbol")


def literal(*values: LiteralType) -> TypeHelper[Any]:
    """
    Accept a value strictly equal to one of the given literals.

    Equality is per kind: 1 matches 1.0 but never True, "1" never matches 1.

    Usage:
        DRole = literal("user", "assistant", "system")
        DEnabled = literal("enabled", "disabled", None)
    """
    expected = "one of " + ", ".join(describe(v) for v in values)
    candidates = [(kind_of(v), v) for v in values]

    def literal_check(value: Any) -> Result[None, ErrBuilder]:
        value_kind = kind_of(value)
        for kind, candidate in candidates:
            if kind == value_kind and candidate == value:
                return fin()
        return leaf_expect(expected, value)

    annotation = Literal[values] if values else Any
    return TypeHelper(literal_check, annotation)
