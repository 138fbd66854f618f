"""Option declarations and value validation.

Each option is described by an :class:`OptionField` carrying its declared
:class:`ValueType` and, optionally, either a static default or a computed
default rule. The helpers here validate explicit values and parse
command-line style text into the declared type.

Usage
-----
Declare a field with a static default::

    from spark_options.fields import OptionField, ValueType

    field = OptionField("batchIntervalMillis", ValueType.INT64, default=500)
    field.validate(1234)
"""

from __future__ import annotations

import dataclasses
import enum
import typing as typ

from .errors import TypeMismatchError

if typ.TYPE_CHECKING:
    from .option_set import OptionSet

__all__ = [
    "UNSET",
    "DefaultRule",
    "OptionField",
    "ValueType",
    "coerce_text",
    "validate",
]

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

_TRUE_WORDS = {"true", "1", "yes", "on"}
_FALSE_WORDS = {"false", "0", "no", "off"}


class _Unset(enum.Enum):
    UNSET = "UNSET"

    def __repr__(self) -> str:
        return "UNSET"


UNSET = _Unset.UNSET

DefaultRule = typ.Callable[["OptionSet"], typ.Any]


class ValueType(enum.Enum):
    """Types an option value may take."""

    STRING = "string"
    INT64 = "int64"
    FLOAT64 = "float64"
    BOOL = "bool"
    STRING_LIST = "list-of-string"


@dataclasses.dataclass(frozen=True, slots=True)
class OptionField:
    """Describe a single named configuration option.

    Parameters
    ----------
    name : str
        Key identifying the option within an :class:`~spark_options.OptionSet`.
    value_type : ValueType
        Declared type every value of the option must conform to.
    default : object, optional
        Static default returned when no explicit value is set.
    default_rule : DefaultRule | None, optional
        Callable computing the default from the surrounding option set.
    description : str, default=""
        Help text shown by the command line.

    Raises
    ------
    ValueError
        Raised when both ``default`` and ``default_rule`` are supplied.
    TypeMismatchError
        Raised when ``default`` does not conform to ``value_type``.

    Examples
    --------
    >>> OptionField("bundleSize", ValueType.INT64, default=0).required
    False
    >>> OptionField("jobName", ValueType.STRING).required
    True
    """

    name: str
    value_type: ValueType
    default: typ.Any = UNSET
    default_rule: DefaultRule | None = None
    description: str = ""

    def __post_init__(self) -> None:
        if self.default is not UNSET and self.default_rule is not None:
            message = (
                f"Option '{self.name}' declares both a static default "
                "and a default rule"
            )
            raise ValueError(message)
        if self.default is not UNSET:
            object.__setattr__(self, "default", self.validate(self.default))

    @property
    def required(self) -> bool:
        """``True`` when the option has no default of any kind."""
        return self.default is UNSET and self.default_rule is None

    @property
    def computed(self) -> bool:
        """``True`` when the default is produced by a rule."""
        return self.default_rule is not None

    def validate(self, value: object) -> typ.Any:
        """Return ``value`` normalised for this field."""
        return validate(self, value)


def _mismatch(field: OptionField, value: object) -> TypeMismatchError:
    message = (
        f"Option '{field.name}' expects {field.value_type.value}, "
        f"got {type(value).__name__}: {value!r}"
    )
    return TypeMismatchError(message)


def validate(field: OptionField, value: object) -> typ.Any:
    """Return ``value`` normalised to ``field``'s type or raise.

    Integers are widened to floats for ``FLOAT64`` fields and string lists
    are copied so the caller's sequence is never aliased.

    Raises
    ------
    TypeMismatchError
        Raised when ``value`` does not conform to the declared type.
    """
    kind = field.value_type
    if kind is ValueType.STRING and isinstance(value, str):
        return value
    if kind is ValueType.BOOL and isinstance(value, bool):
        return value
    if isinstance(value, bool):
        raise _mismatch(field, value)
    if kind is ValueType.INT64 and isinstance(value, int):
        if not INT64_MIN <= value <= INT64_MAX:
            message = f"Option '{field.name}' value {value} is outside the int64 range"
            raise TypeMismatchError(message)
        return value
    if kind is ValueType.FLOAT64 and isinstance(value, (int, float)):
        return float(value)
    if (
        kind is ValueType.STRING_LIST
        and isinstance(value, (list, tuple))
        and all(isinstance(item, str) for item in value)
    ):
        return list(value)
    raise _mismatch(field, value)


def _parse_bool(field: OptionField, text: str) -> bool:
    normalised = text.strip().lower()
    if normalised in _TRUE_WORDS:
        return True
    if normalised in _FALSE_WORDS:
        return False
    message = f"Option '{field.name}' cannot interpret {text!r} as a boolean"
    raise TypeMismatchError(message)


def coerce_text(field: OptionField, text: str) -> typ.Any:
    """Parse command-line style ``text`` into ``field``'s declared type.

    Examples
    --------
    >>> coerce_text(OptionField("n", ValueType.INT64), "42")
    42
    >>> coerce_text(OptionField("files", ValueType.STRING_LIST), "a.jar, b.jar")
    ['a.jar', 'b.jar']
    """
    kind = field.value_type
    if kind is ValueType.STRING:
        return text
    if kind is ValueType.BOOL:
        return _parse_bool(field, text)
    if kind is ValueType.STRING_LIST:
        return [item.strip() for item in text.split(",") if item.strip()]
    parser = int if kind is ValueType.INT64 else float
    try:
        parsed = parser(text.strip())
    except ValueError as exc:
        message = (
            f"Option '{field.name}' cannot interpret {text!r} "
            f"as {kind.value}"
        )
        raise TypeMismatchError(message) from exc
    return validate(field, parsed)
