"""
Tests for the Ok/Err result type.
"""

import pytest

from typehelper import Err, Ok, ShapeError, UnwrapError


class TestOk:
    def test_flags(self):
        assert Ok(1).is_ok()
        assert not Ok(1).is_err()

    def test_map_and_then(self):
        assert Ok(2).map(lambda x: x * 3) == Ok(6)
        assert Ok(2).and_then(lambda x: Ok(x + 1)) == Ok(3)
        assert Ok(2).and_then(lambda x: Err("no")) == Err("no")
        assert Ok(2).map_err(lambda e: "changed") == Ok(2)

    def test_extraction(self):
        assert Ok("v").unwrap() == "v"
        assert Ok("v").unwrap_or("d") == "v"
        assert Ok("v").expect("should be ok") == "v"
        with pytest.raises(UnwrapError):
            Ok("v").unwrap_err()

    def test_match(self):
        assert Ok(1).match(lambda v: f"ok {v}", lambda e: f"err {e}") == "ok 1"


class TestErr:
    def test_flags(self):
        assert Err("e").is_err()
        assert not Err("e").is_ok()

    def test_map_and_then_skip(self):
        assert Err("e").map(lambda x: x * 3) == Err("e")
        assert Err("e").and_then(lambda x: Ok(x)) == Err("e")
        assert Err("e").map_err(str.upper) == Err("E")

    def test_unwrap_raises_carried_exception(self):
        error = ShapeError("in a: bad")
        with pytest.raises(ShapeError, match="in a: bad"):
            Err(error).unwrap()

    def test_unwrap_non_exception(self):
        with pytest.raises(UnwrapError):
            Err("plain").unwrap()

    def test_extraction(self):
        assert Err("e").unwrap_err() == "e"
        assert Err("e").unwrap_or("d") == "d"
        with pytest.raises(UnwrapError, match="needed a value: e"):
            Err("e").expect("needed a value")

    def test_match(self):
        assert Err(1).match(lambda v: f"ok {v}", lambda e: f"err {e}") == "err 1"
