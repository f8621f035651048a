"""
typehelper - composable runtime type validation and JSON parsing.

Usage:
    from typehelper import DString, DNumber, array, literal, struct

    DMessage = struct({
        "role": literal("user", "assistant", "system"),
        "content": DString,
    })
    DChat = struct({"model": DString, "messages": array(DMessage)})

    DChat.parse('{"model": "m", "messages": [{"role": "user", "content": 42}]}')
    # Err(ShapeError("in messages.0.content: Expected string, got 42"))
"""

from .atomic import (
    DBigInt,
    DBoolean,
    DNumber,
    DString,
    DSymbol,
    DUndefined,
    atomic,
    kind_of,
    literal,
)
from .codec import decode, describe, encode
from .context import json_context
from .core import TypeHelper, create_helper
from .errors import ErrBuilder, fin, leaf_err, leaf_expect
from .exceptions import DecodeError, EncodeError, ShapeError, TypeHelperError, UnwrapError
from .inference import infer_type, optional_fields
from .schema import to_pydantic
from .structure import (
    StructHelper,
    array,
    nullable,
    optional,
    record,
    strict_struct,
    struct,
    tuple_,
    union,
    with_condition,
)
from .types import Err, Ok, Result
from .undefined import UNDEFINED, Undefined, is_undefined

__all__ = [
    # Result types
    "Ok",
    "Err",
    "Result",
    # Errors
    "ErrBuilder",
    "leaf_err",
    "leaf_expect",
    "fin",
    "TypeHelperError",
    "ShapeError",
    "DecodeError",
    "EncodeError",
    "UnwrapError",
    # Sentinel
    "UNDEFINED",
    "Undefined",
    "is_undefined",
    # Core
    "TypeHelper",
    "create_helper",
    # Atomic
    "atomic",
    "kind_of",
    "literal",
    "DString",
    "DNumber",
    "DBoolean",
    "DUndefined",
    "DBigInt",
    "DSymbol",
    # Structure
    "StructHelper",
    "struct",
    "strict_struct",
    "tuple_",
    "union",
    "array",
    "record",
    "optional",
    "nullable",
    "with_condition",
    # Inference
    "infer_type",
    "optional_fields",
    # Codec & config
    "decode",
    "encode",
    "describe",
    "json_context",
    # Schema
    "to_pydantic",
]
