"""
ErrBuilder: failure message plus the location trail it collects on the way up.

A leaf check creates one ErrBuilder with leaf_err()/leaf_expect(). Each
enclosing struct/array/record/tuple appends its own segment with err_in()
before handing the failure to its caller, so segments are stored innermost
first and reversed when rendered:

    leaf_expect("string", 42)      -> "Expected string, got 42"
      .err_in("content")
      .err_in(0)
      .err_in("messages")          -> "in messages.0.content: Expected string, got 42"
"""

from __future__ import annotations

import json
from typing import Any

from .codec import describe
from .exceptions import ShapeError
from .types import Err, Ok, PathSegment


class ErrBuilder:
    """Mutable failure accumulator. One instance per failing check."""

    __slots__ = ("message", "stack_rev")

    def __init__(self, message: str):
        self.message = message
        self.stack_rev: list[PathSegment] = []

    def err_in(self, key: PathSegment) -> ErrBuilder:
        """Add a location segment and return this same builder."""
        self.stack_rev.append(key)
        return self

    @property
    def path(self) -> tuple[PathSegment, ...]:
        """Location of the failure, outermost first."""
        return tuple(reversed(self.stack_rev))

    def render(self) -> str:
        if not self.stack_rev:
            return self.message
        return f"in {'.'.join(_render_segment(k) for k in self.path)}: {self.message}"

    def to_error(self) -> ShapeError:
        return ShapeError(self.render(), path=self.path, reason=self.message)

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"ErrBuilder({self.render()!r})"


def _render_segment(key: PathSegment) -> str:
    text = str(key)
    # Quote keys with control characters so the path stays on one line
    if text.isprintable():
        return text
    return json.dumps(text)


def leaf_err(message: str) -> Err[ErrBuilder]:
    """Fail with a bare message at the current location."""
    return Err(ErrBuilder(message))


def leaf_expect(expected: str, value: Any) -> Err[ErrBuilder]:
    """Fail with "Expected <expected>, got <value as JSON>"."""
    return leaf_err(f"Expected {expected}, got {describe(value)}")


def fin() -> Ok[None]:
    """Successful outcome of a check function."""
    return Ok(None)
