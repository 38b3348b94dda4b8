from decimal import Decimal
from enum import Enum
from fractions import Fraction

import pytest

from propbind.utils.converters import (
    LONG_MAX,
    LONG_MIN,
    MISSING,
    to_bool,
    to_int,
    to_long,
    to_string,
)


class Level(Enum):
    LOW = 1


@pytest.mark.parametrize(
    "value, expected",
    [
        ("42", 42),
        (" -7 ", -7),
        ("+3", 3),
        (b"12", 12),
        (17, 17),
        (3.9, 3),
        (Decimal("5.7"), 5),
        (Decimal("1e400"), 10 ** 400),
        (Fraction(7, 2), 3),
        (10 ** 30, 10 ** 30),
    ],
)
def test_to_int_converts(value, expected):
    assert to_int(value, None) == expected


@pytest.mark.parametrize(
    "value",
    [
        "4.2", "abc", "", "1_000", True, None, [1], b"\xff",
        float("nan"), float("inf"), Decimal("NaN"), Decimal("-Infinity"),
    ],
)
def test_to_int_returns_default(value):
    assert to_int(value, MISSING) is MISSING


def test_to_long_checks_range():
    assert to_long(str(LONG_MAX), None) == LONG_MAX
    assert to_long(LONG_MIN, None) == LONG_MIN
    assert to_long(LONG_MAX + 1, "default") == "default"
    assert to_long(str(LONG_MIN - 1), "default") == "default"
    assert to_long(Decimal("1e400"), "default") == "default"
    assert to_long("oops", "default") == "default"


@pytest.mark.parametrize(
    "value, expected",
    [
        (True, True),
        (False, False),
        ("Yes", True),
        (" on ", True),
        ("1", True),
        ("off", False),
        ("FALSE", False),
        ("n", False),
        (0, False),
        (2, True),
        (b"true", True),
    ],
)
def test_to_bool_converts(value, expected):
    assert to_bool(value, None) is expected


@pytest.mark.parametrize("value", ["maybe", "", None, 1.0, object()])
def test_to_bool_returns_default(value):
    assert to_bool(value, MISSING) is MISSING


def test_to_string():
    assert to_string("x", None) == "x"
    assert to_string(5, None) == "5"
    assert to_string(True, None) == "true"
    assert to_string(Level.LOW, None) == "LOW"
    assert to_string(b"abc", None) == "abc"
    assert to_string(None, "default") == "default"
    assert to_string(b"\xff", "default") == "default"


def test_missing_is_falsy_singleton():
    assert not MISSING
    assert repr(MISSING) == "MISSING"
    assert type(MISSING)() is MISSING
