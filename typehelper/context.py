"""
Context manager for serialization configuration (e.g., NaN handling).
"""

from contextlib import contextmanager
from contextvars import ContextVar

# Context variable for non-finite float handling
_allow_nan: ContextVar[bool] = ContextVar("allow_nan", default=False)


def allow_nan() -> bool:
    """Check if NaN/Infinity are currently accepted by the JSON codec."""
    return _allow_nan.get()


@contextmanager
def json_context(*, allow_nan: bool = False):
    """
    Context manager for JSON codec configuration.

    Args:
        allow_nan: If True, parse() accepts the NaN, Infinity and -Infinity
                  constants and clone() encodes non-finite floats. Strict JSON
                  has no such constants, so both are rejected by default.

    Example:
        from typehelper import DNumber, json_context

        DNumber.parse("NaN")          # Err(DecodeError)

        with json_context(allow_nan=True):
            DNumber.parse("NaN")      # Ok(nan)
    """
    token = _allow_nan.set(allow_nan)
    try:
        yield
    finally:
        _allow_nan.reset(token)
