"""
Type inference for typehelper validators.

Every TypeHelper records the Python type its check accepts. Combinators
derive their annotation from their children's, so a whole validator tree
describes the value it accepts:

    infer_type(DString.arr())                      -> list[str]
    infer_type(struct({"name": DString,
                       "age": DNumber.opt()}))    -> TypedDict with
                                                     name: str
                                                     age: NotRequired[int | float]

Annotations are metadata only. Validation never consults them.
"""

from __future__ import annotations

import types
from typing import TYPE_CHECKING, Any, Literal, Mapping, Optional, Union, get_args, get_origin

from typing_extensions import NotRequired, TypedDict, is_typeddict

from .undefined import UNDEFINED, Undefined

if TYPE_CHECKING:
    from .core import TypeHelper

# Attribute holding {field: (annotation, required)} on generated TypedDicts
_FIELDS_ATTR = "__typehelper_fields__"
_STRUCT_NAME = "Struct"


def infer_type(helper: TypeHelper[Any]) -> Any:
    """Return the annotation describing what `helper` accepts."""
    return helper.annotation


def union_of(*annotations: Any) -> Any:
    if len(annotations) == 1:
        return annotations[0]
    return Union[tuple(annotations)]


def with_undefined(annotation: Any) -> Any:
    return Union[annotation, Undefined]


def with_none(annotation: Any) -> Any:
    return Optional[annotation]


def _is_union(annotation: Any) -> bool:
    origin = get_origin(annotation)
    return origin is Union or origin is types.UnionType


def admits_undefined(annotation: Any) -> bool:
    """Check if an annotation accepts the UNDEFINED sentinel."""
    if annotation is Undefined:
        return True
    if _is_union(annotation):
        return any(admits_undefined(arg) for arg in get_args(annotation))
    if get_origin(annotation) is Literal:
        return any(arg is UNDEFINED for arg in get_args(annotation))
    return False


def strip_undefined(annotation: Any) -> Any:
    """
    Remove Undefined from an annotation.

    An annotation that is nothing but Undefined is returned unchanged.
    """
    if _is_union(annotation):
        kept = [
            strip_undefined(arg)
            for arg in get_args(annotation)
            if arg is not Undefined and not _is_undefined_literal(arg)
        ]
        if not kept:
            return annotation
        return union_of(*kept)
    if get_origin(annotation) is Literal:
        values = [arg for arg in get_args(annotation) if arg is not UNDEFINED]
        if not values:
            return annotation
        return Literal[tuple(values)]
    return annotation


def _is_undefined_literal(annotation: Any) -> bool:
    return get_origin(annotation) is Literal and all(
        arg is UNDEFINED for arg in get_args(annotation)
    )


def struct_annotation(fields: Mapping[str, Any]) -> Any:
    """
    Build a TypedDict from field annotations.

    Fields whose annotation admits Undefined become NotRequired keys,
    typed without Undefined.
    """
    layout: dict[str, tuple[Any, bool]] = {}
    for name, annotation in fields.items():
        if admits_undefined(annotation):
            layout[name] = (strip_undefined(annotation), False)
        else:
            layout[name] = (annotation, True)
    return _typed_dict(layout)


def merge_annotations(left: Any, right: Any) -> Any:
    """
    Flatten two struct annotations into one TypedDict.

    On a key collision the left annotation is kept. Anything that is not a
    generated struct annotation falls back to the left annotation, since
    Python typing has no intersection type.
    """
    left_fields = getattr(left, _FIELDS_ATTR, None)
    right_fields = getattr(right, _FIELDS_ATTR, None)
    if left_fields is None or right_fields is None:
        return left
    layout = dict(right_fields)
    layout.update(left_fields)
    return _typed_dict(layout)


def _typed_dict(layout: Mapping[str, tuple[Any, bool]]) -> Any:
    td = TypedDict(  # type: ignore[misc, operator]
        _STRUCT_NAME,
        {
            name: annotation if required else NotRequired[annotation]
            for name, (annotation, required) in layout.items()
        },
    )
    setattr(td, _FIELDS_ATTR, dict(layout))
    return td


def struct_fields(annotation: Any) -> dict[str, tuple[Any, bool]]:
    """
    Return {field: (annotation, required)} for a struct annotation.

    Raises:
        TypeError: If the annotation was not produced by struct()/merge()
    """
    fields = getattr(annotation, _FIELDS_ATTR, None)
    if fields is None or not is_typeddict(annotation):
        raise TypeError("Annotation is not a struct type")
    return dict(fields)


def optional_fields(helper: TypeHelper[Any]) -> tuple[str, ...]:
    """Names of struct fields that may be absent from the input."""
    return tuple(
        name
        for name, (_, required) in struct_fields(infer_type(helper)).items()
        if not required
    )
