"""
UNDEFINED sentinel marking an absent value.
"""

from enum import Enum
from typing import Any


class Undefined(Enum):
    """
    The "no value" marker, distinct from None (JSON null).

    A struct field that is missing from its input is looked up as UNDEFINED,
    so `DString.opt()` accepts both a string and a missing key.

    Examples:
        DUndefined.guard(UNDEFINED)   # True
        DUndefined.guard(None)        # False
    """

    UNDEFINED = 0

    def __repr__(self) -> str:
        return "UNDEFINED"

    def __bool__(self) -> bool:
        return False


UNDEFINED = Undefined.UNDEFINED


def is_undefined(value: Any) -> bool:
    return value is UNDEFINED
