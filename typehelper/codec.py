"""
JSON boundary for typehelper.

decode() and encode() wrap the json module in Results so that parse() and
clone() can chain them with validation. describe() renders a value the way
diagnostics quote it.
"""

from __future__ import annotations

import json
import logging
import math
from collections.abc import Mapping
from datetime import date, datetime, time
from typing import Any, Callable

from .context import allow_nan
from .exceptions import DecodeError, EncodeError
from .types import Err, Ok, Result
from .undefined import UNDEFINED

logger = logging.getLogger(__name__)

_SEPARATORS = (",", ":")

MAX_SAFE_INTEGER = 2**53 - 1

# Integral floats at or above this print in exponent form
_EXPONENT_THRESHOLD = 1e21


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Unexpected token {name} in JSON")


def _parse_int(text: str) -> int | float:
    """JSON has one number type; integers past the safe range lose precision."""
    value = float(text)
    if abs(value) <= MAX_SAFE_INTEGER:
        return int(text)
    return value


def decode(text: str | bytes) -> Result[Any, DecodeError]:
    """
    Decode JSON text.

    Integers beyond +/- MAX_SAFE_INTEGER decode as float, so every JSON
    number classifies as "number".

    Returns:
        Ok(value) with the decoded value
        Err(DecodeError) if the text is malformed
    """
    kwargs: dict[str, Any] = {"parse_int": _parse_int}
    if not allow_nan():
        kwargs["parse_constant"] = _reject_constant
    try:
        return Ok(json.loads(text, **kwargs))
    except ValueError as e:
        logger.debug("JSON decode failed: %s", e)
        return Err(DecodeError(str(e)))


def encode(value: Any) -> Result[str, EncodeError]:
    """
    Encode a value as compact JSON text.

    UNDEFINED values are dropped from mappings and become null inside
    sequences. Dates and times are written with isoformat().

    Returns:
        Ok(text) if the value is serializable
        Err(EncodeError) otherwise (top-level UNDEFINED, circular references,
        non-finite floats outside json_context(allow_nan=True), unknown types)
    """
    if value is UNDEFINED:
        return Err(EncodeError("undefined is not JSON serializable"))
    try:
        plain = _to_plain(value, set())
        return Ok(
            json.dumps(
                plain,
                separators=_SEPARATORS,
                ensure_ascii=False,
                allow_nan=allow_nan(),
                default=_encode_default,
            )
        )
    except (TypeError, ValueError) as e:
        logger.debug("JSON encode failed: %s", e)
        return Err(EncodeError(str(e)))


def describe(value: Any) -> str:
    """
    Render a value as compact JSON for diagnostics, falling back to repr.

    Integral floats print without a fraction and non-finite floats as null.
    UNDEFINED is dropped from mappings, null in sequences, and "undefined"
    on its own.
    """
    if value is UNDEFINED:
        return "undefined"
    try:
        return json.dumps(
            _to_plain(value, set(), number=_canonical_number),
            separators=_SEPARATORS,
            ensure_ascii=False,
            default=str,
        )
    except (TypeError, ValueError):
        return repr(value)


def _encode_default(obj: Any) -> Any:
    if isinstance(obj, (date, datetime, time)):
        return obj.isoformat()
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def _canonical_number(value: float) -> int | float | None:
    if not math.isfinite(value):
        return None
    if value.is_integer() and abs(value) < _EXPONENT_THRESHOLD:
        return int(value)
    return value


def _to_plain(
    value: Any, active: set[int], number: Callable[[float], Any] | None = None
) -> Any:
    """
    Strip UNDEFINED out of containers before handing them to json.

    When given, `number` rewrites every float on the way.
    """
    if isinstance(value, Mapping):
        marker = id(value)
        if marker in active:
            raise ValueError("Circular reference detected")
        active.add(marker)
        result = {k: _to_plain(v, active, number) for k, v in value.items() if v is not UNDEFINED}
        active.discard(marker)
        return result

    if isinstance(value, (list, tuple)):
        marker = id(value)
        if marker in active:
            raise ValueError("Circular reference detected")
        active.add(marker)
        result_list = [None if v is UNDEFINED else _to_plain(v, active, number) for v in value]
        active.discard(marker)
        return result_list

    if number is not None and isinstance(value, float):
        return number(value)
    return value
