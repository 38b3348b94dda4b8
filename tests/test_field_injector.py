from collections.abc import Mapping

import pytest

from propbind.core.inject.field import (
    FieldHandle,
    FieldInjector,
    FieldKind,
    InjectionOutcome,
    convert,
)
from propbind.exceptions import InvalidEnumValueError
from propbind.utils.converters import MISSING, Long


class Target:
    value = "initial"


class SlottedTarget:
    __slots__ = ()


def make_injector(name: str, kind: FieldKind = FieldKind.STRING, declared_type=str, owner=Target):
    return FieldInjector(FieldHandle(owner, "value", declared_type), name, kind)


def test_static_name_is_used_verbatim():
    injector = make_injector("user.id")

    assert not injector.is_dynamic
    assert injector.placeholder is None
    assert injector.placeholder_span is None
    assert injector.resolve_key({"user.id": "1"}) == "user.id"


def test_placeholder_is_parsed_once_at_construction():
    injector = make_injector("a${v}b")

    assert injector.is_dynamic
    assert injector.placeholder == "v"
    assert injector.placeholder_span == (1, 4)


@pytest.mark.parametrize(
    "name, parameters, expected",
    [
        ("a${v}b", {"v": "X"}, "aXb"),
        ("a${v}b", {}, "a${v}b"),
        ("${v}", {"v": "X"}, "X"),
        ("user.${env}.id", {"env": "prod"}, "user.prod.id"),
        ("user.${env}", {"env": "prod"}, "user.prod"),
        ("a${v}b", {"v": 7}, "a7b"),
        ("a${v}b", {"v": None}, "a${v}b"),
        ("x${}", {"": "Q"}, "xQ"),
    ],
)
def test_resolve_key(name, parameters, expected):
    assert make_injector(name).resolve_key(parameters) == expected


@pytest.mark.parametrize("name", ["a}b${v}", "}${v}", "a${v", "plain}", "a$v}"])
def test_closing_brace_before_opening_or_missing_means_static(name):
    injector = make_injector(name)

    assert not injector.is_dynamic
    assert injector.resolve_key({"v": "X"}) == name


def test_only_first_placeholder_is_substituted():
    injector = make_injector("${a}.${b}")

    assert injector.placeholder == "a"
    assert injector.resolve_key({"a": "1", "b": "2"}) == "1.${b}"


def test_injector_is_immutable():
    injector = make_injector("a${v}b")

    with pytest.raises(AttributeError):
        injector.name = "other"
    with pytest.raises(AttributeError):
        injector.extra = 1


@pytest.mark.parametrize(
    "kind, declared_type, raw, expected",
    [
        (FieldKind.INTEGER, int, "42", 42),
        (FieldKind.INTEGER, int, "notanumber", MISSING),
        (FieldKind.LONG, Long, "9223372036854775807", 2 ** 63 - 1),
        (FieldKind.LONG, Long, "9223372036854775808", MISSING),
        (FieldKind.BOOLEAN, bool, "on", True),
        (FieldKind.BOOLEAN, bool, "perhaps", MISSING),
        (FieldKind.STRING, str, 5, "5"),
        (FieldKind.STRING, str, None, MISSING),
        (FieldKind.INTEGER, int, None, MISSING),
    ],
)
def test_convert_scalars(kind, declared_type, raw, expected):
    assert convert(kind, declared_type, raw) == expected


def test_convert_enum(color):
    assert convert(FieldKind.ENUM, color, "GREEN") is color.GREEN
    assert convert(FieldKind.ENUM, color, color.RED) is color.RED
    assert convert(FieldKind.ENUM, color, 2) is MISSING


def test_convert_enum_unknown_name_raises(color):
    with pytest.raises(InvalidEnumValueError) as exc_info:
        convert(FieldKind.ENUM, color, "BLUE")

    assert isinstance(exc_info.value, ValueError)
    assert exc_info.value.enum_type is color
    assert exc_info.value.value == "BLUE"


def test_convert_interface_passes_value_through():
    section = {"a": 1}

    assert convert(FieldKind.INTERFACE, Mapping, section) is section


def test_inject_writes_converted_value():
    target = Target()
    injector = make_injector("cnt", FieldKind.INTEGER, int)

    assert injector.inject(target, {"cnt": "42"}) is InjectionOutcome.INJECTED
    assert target.value == 42


def test_inject_missing_key_leaves_field():
    target = Target()

    assert make_injector("cnt").inject(target, {}) is InjectionOutcome.KEY_MISSING
    assert target.value == "initial"


def test_inject_resolved_key_missing_leaves_field():
    target = Target()
    injector = make_injector("a${v}b")

    outcome = injector.inject(target, {"v": "X", "a${v}b": "literal"})

    assert outcome is InjectionOutcome.KEY_MISSING
    assert target.value == "initial"


def test_inject_unconvertible_value_leaves_field():
    target = Target()
    injector = make_injector("cnt", FieldKind.INTEGER, int)

    assert injector.inject(target, {"cnt": "x"}) is InjectionOutcome.NOT_CONVERTIBLE
    assert target.value == "initial"


def test_inject_swallows_enum_error(color):
    target = Target()
    injector = make_injector("color", FieldKind.ENUM, color)

    assert injector.inject(target, {"color": "BLUE"}) is InjectionOutcome.FAILED
    assert target.value == "initial"


def test_inject_swallows_write_error():
    injector = make_injector("name", owner=SlottedTarget)

    assert injector.inject(SlottedTarget(), {"name": "x"}) is InjectionOutcome.FAILED


def test_field_handle_read_and_write():
    handle = FieldHandle(Target, "value", str)
    target = Target()

    handle.write(target, "new")

    assert handle.read(target) == "new"
    assert FieldHandle(Target, "absent", str).read(target, None) is None
