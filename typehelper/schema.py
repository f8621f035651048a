"""
Pydantic export for typehelper struct helpers.

Provides to_pydantic(), which compiles a struct() helper into a pydantic
model that enforces the helper's own checks before field parsing.
"""

from __future__ import annotations

from typing import Any
from typing import Optional as TypingOptional

from pydantic import create_model, model_validator

from .inference import struct_fields
from .structure import StructHelper
from .types import Err


def to_pydantic(name: str, helper: StructHelper) -> type:
    """
    Compile a struct helper to a Pydantic model.

    Args:
        name: Name of the generated model class
        helper: A helper built with struct() or strict_struct()

    Returns:
        A Pydantic BaseModel subclass

    Usage:
        User = to_pydantic("User", struct({
            "name": DString,
            "email": DString.opt(),
        }))
        user = User(name="Alice")
        user.email  # None

    Raises:
        TypeError: If `helper` is not a struct helper
    """
    if not isinstance(helper, StructHelper):
        raise TypeError("Schema must be a struct")

    fields: dict[str, Any] = {}
    for key, (annotation, required) in struct_fields(helper.annotation).items():
        fields[key] = _pydantic_field(annotation, required)

    def check_shape(cls: type, data: Any) -> Any:
        if isinstance(data, cls):
            return data
        result = helper.validate(data)
        if isinstance(result, Err):
            raise ValueError(str(result.error))
        return data

    validators = {"check_shape": model_validator(mode="before")(check_shape)}
    return create_model(name, __validators__=validators, **fields)  # type: ignore[call-overload]


def _pydantic_field(annotation: Any, required: bool) -> tuple[Any, Any]:
    """Extract Pydantic field type and default from a struct field."""
    if required:
        return (annotation, ...)
    return (TypingOptional[annotation], None)
