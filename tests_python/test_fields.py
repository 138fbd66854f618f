"""Tests covering option declarations, validation and text coercion."""

from __future__ import annotations

import pytest

from spark_options import OptionField, TypeMismatchError, ValueType
from spark_options.fields import coerce_text


def test_field_without_defaults_is_required() -> None:
    """A field with neither default kind should be required."""
    field = OptionField("jobName", ValueType.STRING)
    assert field.required
    assert not field.computed


def test_field_rejects_both_default_kinds() -> None:
    """Static defaults and default rules are mutually exclusive."""
    with pytest.raises(ValueError, match="both a static default"):
        OptionField("x", ValueType.INT64, default=1, default_rule=lambda _: 2)


def test_field_rejects_nonconforming_static_default() -> None:
    """A static default must match the declared type."""
    with pytest.raises(TypeMismatchError, match="expects int64"):
        OptionField("bundleSize", ValueType.INT64, default="0")


@pytest.mark.parametrize(
    ("value_type", "value", "expected"),
    [
        pytest.param(ValueType.STRING, "", "", id="empty_string"),
        pytest.param(ValueType.INT64, -1, -1, id="sentinel_int"),
        pytest.param(ValueType.FLOAT64, 1, 1.0, id="int_widened_to_float"),
        pytest.param(ValueType.FLOAT64, 0.1, 0.1, id="float"),
        pytest.param(ValueType.BOOL, False, False, id="bool"),
        pytest.param(ValueType.STRING_LIST, ("a", "b"), ["a", "b"], id="tuple_list"),
    ],
)
def test_validate_accepts_conforming_values(
    value_type: ValueType, value: object, expected: object
) -> None:
    """Conforming values should be returned in normalised form."""
    field = OptionField("opt", value_type)
    result = field.validate(value)
    assert result == expected
    assert type(result) is type(expected)


@pytest.mark.parametrize(
    ("value_type", "value"),
    [
        pytest.param(ValueType.INT64, "not-a-number", id="text_for_int"),
        pytest.param(ValueType.INT64, True, id="bool_for_int"),
        pytest.param(ValueType.INT64, 1.5, id="float_for_int"),
        pytest.param(ValueType.INT64, 2**63, id="int_overflow"),
        pytest.param(ValueType.FLOAT64, True, id="bool_for_float"),
        pytest.param(ValueType.BOOL, 1, id="int_for_bool"),
        pytest.param(ValueType.STRING, None, id="none_for_string"),
        pytest.param(ValueType.STRING_LIST, "a.jar", id="bare_string_for_list"),
        pytest.param(ValueType.STRING_LIST, ["a", 1], id="mixed_list"),
    ],
)
def test_validate_rejects_nonconforming_values(
    value_type: ValueType, value: object
) -> None:
    """Non-conforming values should raise ``TypeMismatchError``."""
    field = OptionField("opt", value_type)
    with pytest.raises(TypeMismatchError):
        field.validate(value)


def test_validate_copies_lists() -> None:
    """Validated lists must not alias the caller's list."""
    original = ["a.jar"]
    validated = OptionField("files", ValueType.STRING_LIST).validate(original)
    original.append("b.jar")
    assert validated == ["a.jar"]


@pytest.mark.parametrize(
    ("value_type", "text", "expected"),
    [
        pytest.param(ValueType.STRING, " spaced ", " spaced ", id="string_verbatim"),
        pytest.param(ValueType.INT64, " 1234 ", 1234, id="int"),
        pytest.param(ValueType.FLOAT64, "0.25", 0.25, id="float"),
        pytest.param(ValueType.BOOL, "Yes", True, id="bool_yes"),
        pytest.param(ValueType.BOOL, "off", False, id="bool_off"),
        pytest.param(ValueType.STRING_LIST, "a.jar, ,b.jar", ["a.jar", "b.jar"], id="list"),
        pytest.param(ValueType.STRING_LIST, "", [], id="empty_list"),
    ],
)
def test_coerce_text(value_type: ValueType, text: str, expected: object) -> None:
    """Command-line text should parse into the declared type."""
    assert coerce_text(OptionField("opt", value_type), text) == expected


@pytest.mark.parametrize(
    ("value_type", "text"),
    [
        pytest.param(ValueType.INT64, "not-a-number", id="int"),
        pytest.param(ValueType.FLOAT64, "fast", id="float"),
        pytest.param(ValueType.BOOL, "maybe", id="bool"),
    ],
)
def test_coerce_text_rejects_garbage(value_type: ValueType, text: str) -> None:
    """Unparseable text should raise ``TypeMismatchError`` naming the option."""
    with pytest.raises(TypeMismatchError, match="'opt'"):
        coerce_text(OptionField("opt", value_type), text)
