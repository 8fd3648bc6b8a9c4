from datetime import timedelta

import pytest

from flagtree.parser import FuncValue, ScalarValue, SliceValue, ValueKind, is_bool_value


def test_scalar_value_set_overwrites():
    value = ScalarValue(ValueKind.INT, 3)
    assert value.get() == 3
    value.set("4")
    value.set("5")
    assert value.get() == 5
    assert str(value) == "5"


def test_scalar_value_reset_restores_default():
    value = ScalarValue("duration", timedelta(seconds=2))
    value.set("1m")
    assert value.get() == timedelta(minutes=1)
    value.reset()
    assert value.get() == timedelta(seconds=2)
    assert str(value) == "2s"


def test_scalar_value_rejects_bad_literal():
    value = ScalarValue(ValueKind.UINT, 7)
    with pytest.raises(ValueError):
        value.set("-1")
    assert value.get() == 7


def test_scalar_bool_value():
    value = ScalarValue(ValueKind.BOOL)
    assert value.get() is False
    assert value.is_bool_flag()
    assert is_bool_value(value)
    value.set("true")
    assert value.get() is True
    assert str(value) == "true"


def test_non_bool_values_are_not_bool_flags():
    assert not is_bool_value(ScalarValue(ValueKind.STRING, ""))
    assert not is_bool_value(SliceValue(ValueKind.STRING))
    assert not is_bool_value(FuncValue(lambda literal: None))


def test_slice_value_appends_in_order():
    value = SliceValue(ValueKind.STRING)
    value.set("a")
    value.set("b")
    value.set("c")
    assert value.get() == ["a", "b", "c"]
    assert str(value) == "[a b c]"


def test_slice_value_first_set_discards_default():
    value = SliceValue(ValueKind.STRING, ["default"])
    assert value.get() == ["default"]
    value.set("x")
    assert value.get() == ["x"]
    value.set("y")
    assert value.get() == ["x", "y"]


def test_slice_value_reset():
    default = ["keep"]
    value = SliceValue(ValueKind.STRING, default)
    value.set("x")
    value.reset()
    assert value.get() == ["keep"]
    value.set("y")
    assert value.get() == ["y"]
    assert default == ["keep"]


def test_slice_value_typed():
    value = SliceValue(ValueKind.INT)
    value.set("1")
    value.set("-2")
    assert value.get() == [1, -2]
    with pytest.raises(ValueError):
        value.set("three")
    assert value.get() == [1, -2]


def test_func_value_calls_function():
    seen = []
    value = FuncValue(seen.append)
    value.set("one")
    value.set("two")
    assert seen == ["one", "two"]
    assert str(value) == ""


def test_func_value_propagates_errors():
    def reject(literal: str) -> None:
        raise ValueError(f"bad: {literal}")

    value = FuncValue(reject)
    with pytest.raises(ValueError, match="bad: x"):
        value.set("x")


def test_func_value_requires_callable():
    with pytest.raises(TypeError):
        FuncValue("not callable")


def test_custom_value_without_is_bool_flag():
    class Upper:
        def __init__(self):
            self.text = ""

        def set(self, literal: str) -> None:
            self.text = literal.upper()

    assert not is_bool_value(Upper())
