"""
Tests for typehelper.inference.
"""

from typing import Any, Literal, Optional, Union

import pytest
from structstest import DChatRequest, DPersonOptAge
from typing_extensions import is_typeddict

from typehelper import (
    UNDEFINED,
    DBoolean,
    DNumber,
    DString,
    DUndefined,
    Undefined,
    create_helper,
    fin,
    infer_type,
    literal,
    optional_fields,
    struct,
    tuple_,
    union,
)
from typehelper.inference import admits_undefined, strip_undefined, struct_fields


class TestAnnotations:
    def test_atomic(self):
        assert infer_type(DString) is str
        assert infer_type(DNumber) == Union[int, float]
        assert infer_type(DBoolean) is bool
        assert infer_type(DUndefined) is Undefined

    def test_combinators(self):
        assert infer_type(DString.arr()) == list[str]
        assert infer_type(DString.rec()) == dict[str, str]
        assert infer_type(DString.or_null()) == Optional[str]
        assert infer_type(DString.opt()) == Union[str, Undefined]
        assert infer_type(DString.or_(DBoolean)) == Union[str, bool]
        assert infer_type(union(DString, DBoolean)) == Union[str, bool]
        assert infer_type(DString.cond(lambda v: fin())) is str
        assert infer_type(DString.and_(DBoolean)) is str

    def test_literal(self):
        assert infer_type(literal("user", "assistant")) == Literal["user", "assistant"]

    def test_tuple(self):
        assert infer_type(tuple_(DString, DBoolean)) == tuple[str, bool]
        assert infer_type(tuple_()) == tuple[()]

    def test_custom_default_any(self):
        assert infer_type(create_helper(lambda v: fin())) is Any


class TestStructInference:
    def test_struct_is_typed_dict(self):
        annotation = infer_type(DPersonOptAge)
        assert is_typeddict(annotation)
        assert struct_fields(annotation) == {
            "name": (str, True),
            "age": (Union[int, float], False),
        }

    def test_optional_keys(self):
        annotation = infer_type(DPersonOptAge)
        assert annotation.__required_keys__ == frozenset({"name"})
        assert annotation.__optional_keys__ == frozenset({"age"})

    def test_optional_fields(self):
        assert optional_fields(DPersonOptAge) == ("age",)
        assert optional_fields(DChatRequest) == ("stream",)

    def test_optional_fields_requires_struct(self):
        with pytest.raises(TypeError):
            optional_fields(DString)

    def test_merge_flattens(self):
        DMerged = struct({"a": DNumber}).merge(struct({"b": DString.opt()}))
        assert struct_fields(infer_type(DMerged)) == {
            "b": (str, False),
            "a": (Union[int, float], True),
        }

    def test_merge_left_wins_on_collision(self):
        DMerged = struct({"a": DNumber}).merge(struct({"a": DString}))
        assert struct_fields(infer_type(DMerged))["a"] == (Union[int, float], True)

    def test_merge_non_struct_keeps_left(self):
        assert infer_type(DString.merge(DBoolean)) is str


class TestUndefinedHelpers:
    def test_admits_undefined(self):
        assert admits_undefined(Undefined)
        assert admits_undefined(Union[str, Undefined])
        assert admits_undefined(infer_type(literal("a").opt()))
        assert not admits_undefined(str)
        assert not admits_undefined(Optional[str])

    def test_literal_undefined(self):
        assert admits_undefined(Literal["a", UNDEFINED])
        assert strip_undefined(Literal["a", UNDEFINED]) == Literal["a"]

    def test_strip_undefined(self):
        assert strip_undefined(Union[str, Undefined]) is str
        assert strip_undefined(Union[str, bool, Undefined]) == Union[str, bool]
        assert strip_undefined(Undefined) is Undefined
        assert strip_undefined(str) is str
