"""
Tests for typehelper.atomic.
"""

from enum import Enum

import pytest

from typehelper import (
    UNDEFINED,
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


class Color(Enum):
    RED = "red"


class TestKindOf:
    @pytest.mark.parametrize(
        "value, kind",
        [
            ("abc", "string"),
            ("", "string"),
            (0, "number"),
            (123.456, "number"),
            (2**53 - 1, "number"),
            (-(2**53 - 1), "number"),
            (2**53, "bigint"),
            (-(2**64), "bigint"),
            (True, "boolean"),
            (False, "boolean"),
            (UNDEFINED, "undefined"),
            (Color.RED, "symbol"),
            (None, "null"),
            ({}, "object"),
            ([], "object"),
            ((1, 2), "object"),
        ],
    )
    def test_classification(self, value, kind):
        assert kind_of(value) == kind


class TestAtomic:
    def test_string(self):
        assert DString.guard("123")
        assert DString.guard(str(""))
        assert not DString.guard(123)

    def test_number(self):
        assert DNumber.guard(123)
        assert DNumber.guard(123.456)
        assert DNumber.guard(0)
        assert not DNumber.guard("123")
        assert not DNumber.guard([])
        assert not DNumber.guard(True)

    def test_boolean(self):
        assert DBoolean.guard(True)
        assert DBoolean.guard(False)
        assert not DBoolean.guard("true")
        assert not DBoolean.guard(0)

    def test_undefined(self):
        assert DUndefined.guard(UNDEFINED)
        assert not DUndefined.guard({})
        assert not DUndefined.guard(None)
        assert not DUndefined.guard(0)

    def test_bigint(self):
        assert DBigInt.guard(2**64)
        assert not DBigInt.guard(1)
        assert not DNumber.guard(2**64)

    def test_symbol(self):
        assert DSymbol.guard(Color.RED)
        assert not DSymbol.guard("red")
        assert not DSymbol.guard(UNDEFINED)

    def test_failure_message(self):
        assert DString.validate(42).unwrap_err().args[0] == "Expected string, got 42"
        assert (
            DNumber.validate(UNDEFINED).unwrap_err().args[0]
            == "Expected number, got undefined"
        )
        assert DBoolean.validate(None).unwrap_err().args[0] == "Expected boolean, got null"

    def test_unknown_kind(self):
        with pytest.raises(ValueError, match="Unknown atomic kind"):
            atomic("object")


class TestLiteral:
    def test_strings(self):
        DRole = literal("user", "assistant", "system")
        assert DRole.guard("user")
        assert DRole.guard("assistant")
        assert DRole.guard("system")
        assert not DRole.guard("admin")
        assert not DRole.guard(123)
        assert not DRole.guard(True)

    def test_with_null(self):
        DEnabled = literal("enabled", "disabled", None)
        assert DEnabled.guard("enabled")
        assert DEnabled.guard("disabled")
        assert DEnabled.guard(None)
        assert not DEnabled.guard("null")
        assert not DEnabled.guard(UNDEFINED)

    def test_strict_equality(self):
        DOne = literal(1)
        assert DOne.guard(1)
        assert DOne.guard(1.0)
        assert not DOne.guard(True)
        assert not DOne.guard("1")
        assert not literal(True).guard(1)

    def test_undefined_literal(self):
        assert literal(UNDEFINED).guard(UNDEFINED)
        assert not literal(UNDEFINED).guard(None)

    def test_failure_lists_candidates_in_order(self):
        DRole = literal("user", "assistant", "system")
        assert (
            DRole.validate("Peter").unwrap_err().args[0]
            == 'Expected one of "user", "assistant", "system", got "Peter"'
        )
        assert (
            literal(1, None, False).validate("x").unwrap_err().args[0]
            == 'Expected one of 1, null, false, got "x"'
        )
