"""
Exception hierarchy for typehelper.

Validation never raises these on its own: failures travel inside ``Err``.
They are the error objects carried by ``Err`` at the public boundary, and
what ``Result.unwrap()`` raises.
"""

from __future__ import annotations

from typing import Sequence


class TypeHelperError(ValueError):
    """Base class for every error produced by typehelper."""


class ShapeError(TypeHelperError):
    """
    A value does not have the shape a validator expects.

    Attributes:
        path: Location of the failure, outermost segment first
        reason: The message without the location prefix
    """

    def __init__(
        self, message: str, path: Sequence[str | int] = (), reason: str | None = None
    ):
        super().__init__(message)
        self.path = tuple(path)
        self.reason = reason if reason is not None else message


class DecodeError(TypeHelperError):
    """The input text is not valid JSON."""


class EncodeError(TypeHelperError):
    """A value cannot be represented as JSON text."""


class UnwrapError(TypeHelperError):
    """A Result was unwrapped on the wrong variant."""
