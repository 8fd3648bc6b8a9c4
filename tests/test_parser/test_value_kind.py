import pytest

from flagtree.parser import ValueKind


def test_value_kind_from_value():
    assert ValueKind("int64") == ValueKind.INT64
    assert ValueKind("duration") == ValueKind.DURATION


@pytest.mark.parametrize(
    "alias, expected",
    [
        ("str", ValueKind.STRING),
        ("float", ValueKind.FLOAT64),
        ("boolean", ValueKind.BOOL),
        ("timedelta", ValueKind.DURATION),
        ("  UINT  ", ValueKind.UINT),
    ],
)
def test_value_kind_aliases(alias, expected):
    assert ValueKind(alias) == expected


def test_value_kind_invalid():
    with pytest.raises(ValueError, match="Must be one of"):
        ValueKind("complex")

    with pytest.raises(ValueError):
        ValueKind(42)


def test_value_kind_sign():
    assert ValueKind.INT.is_signed
    assert ValueKind.INT64.is_signed
    assert ValueKind.UINT.is_unsigned
    assert ValueKind.UINT64.is_unsigned
    assert not ValueKind.FLOAT64.is_signed
    assert not ValueKind.STRING.is_unsigned


def test_value_kind_str():
    assert str(ValueKind.BOOL) == "bool"
    assert len(ValueKind) == 9
