"""Resolution model for named, typed configuration options.

An :class:`OptionSet` owns a collection of :class:`OptionField` declarations
together with any explicit values. Reading an option resolves it in the
order explicit value, computed default, static default. Resolved defaults
are memoized on first access so repeated reads agree; an explicit ``set``
discards only the computed defaults whose rules read the changed option.

Usage
-----
Build an option set, read a computed default and override a value::

    from spark_options import OptionField, OptionSet, ValueType

    options = OptionSet(
        [
            OptionField("jobName", ValueType.STRING),
            OptionField(
                "checkpointDir",
                ValueType.STRING,
                default_rule=lambda opts: "/tmp/" + opts.get("jobName"),
            ),
        ],
        overrides={"jobName": "demo"},
    )
    options.get("checkpointDir")  # "/tmp/demo"
"""

from __future__ import annotations

import copy
import typing as typ

from .errors import (
    CyclicDefaultError,
    DuplicateFieldError,
    MissingValueError,
    UnknownFieldError,
)
from .fields import OptionField, ValueType, coerce_text

__all__ = ["OptionSet"]


class OptionSet:
    """Named collection of option declarations and their values.

    Parameters
    ----------
    fields : Iterable[OptionField], optional
        Declarations registered in order.
    overrides : Mapping[str, object] | None, optional
        Explicit values applied through :meth:`apply_overrides`.

    Notes
    -----
    Instances are not safe for concurrent mutation. Share one between
    threads only behind an external lock.
    """

    def __init__(
        self,
        fields: typ.Iterable[OptionField] = (),
        overrides: typ.Mapping[str, object] | None = None,
    ) -> None:
        self._fields: dict[str, OptionField] = {}
        self._explicit: dict[str, typ.Any] = {}
        self._resolved: dict[str, typ.Any] = {}
        # option name -> computed options whose rules read it
        self._dependents: dict[str, set[str]] = {}
        self._resolving: list[str] = []
        for field in fields:
            self.declare(field)
        if overrides:
            self.apply_overrides(overrides)

    def __contains__(self, name: object) -> bool:
        return name in self._fields

    def __iter__(self) -> typ.Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __repr__(self) -> str:
        explicit = ", ".join(f"{key}={value!r}" for key, value in self._explicit.items())
        return f"OptionSet({len(self._fields)} fields; {explicit})"

    @property
    def fields(self) -> list[OptionField]:
        """Declared fields in declaration order."""
        return list(self._fields.values())

    @property
    def names(self) -> list[str]:
        """Declared option names in declaration order."""
        return list(self._fields)

    def field(self, name: str) -> OptionField:
        """Return the declaration for ``name``.

        Raises
        ------
        UnknownFieldError
            Raised when ``name`` has not been declared.
        """
        try:
            return self._fields[name]
        except KeyError as exc:
            message = f"Unknown option: {name}"
            raise UnknownFieldError(message) from exc

    def declare(self, field: OptionField) -> None:
        """Register ``field``.

        Raises
        ------
        DuplicateFieldError
            Raised when an option with the same name already exists.
        """
        if field.name in self._fields:
            message = f"Option '{field.name}' is already declared"
            raise DuplicateFieldError(message)
        self._fields[field.name] = field

    def is_set(self, name: str) -> bool:
        """Return ``True`` when ``name`` carries an explicit value."""
        self.field(name)
        return name in self._explicit

    def set(self, name: str, value: object) -> None:
        """Store an explicit ``value`` for ``name``.

        The value wins over any default for the lifetime of this instance.
        Memoized defaults computed from ``name``, directly or through other
        rules, are discarded so they observe the new value; every other
        memoized default is kept.

        Raises
        ------
        UnknownFieldError
            Raised when ``name`` has not been declared.
        TypeMismatchError
            Raised when ``value`` does not conform to the declared type.
        """
        field = self.field(name)
        self._explicit[name] = field.validate(value)
        self._invalidate(name)

    def apply_overrides(self, overrides: typ.Mapping[str, object]) -> None:
        """Apply key/value ``overrides`` such as parsed command-line pairs.

        Text values for non-string options are parsed into the declared type
        first, so ``{"batchIntervalMillis": "1000"}`` stores ``1000``.
        """
        for name, value in overrides.items():
            field = self.field(name)
            if isinstance(value, str) and field.value_type is not ValueType.STRING:
                value = coerce_text(field, value)
            self.set(name, value)

    def get(self, name: str) -> typ.Any:
        """Return the resolved value of ``name``.

        Raises
        ------
        UnknownFieldError
            Raised when ``name`` has not been declared.
        MissingValueError
            Raised when the option is required and has no explicit value.
        TypeMismatchError
            Raised when a computed default produces a non-conforming value.
        CyclicDefaultError
            Raised when computed defaults depend on each other in a loop.
        """
        return _detach(self._resolve(name))

    def resolve_all(self) -> dict[str, typ.Any]:
        """Resolve every declared option and return them by name.

        Rules pull their dependencies through :meth:`get`, so the first
        failure encountered in dependency order propagates and nothing is
        returned.
        """
        return {name: self.get(name) for name in self._fields}

    def copy(self) -> OptionSet:
        """Return an independent set with the same fields and resolved state.

        Explicit values and memoized defaults are both carried over, so a
        copy reports the same generated values as the original.
        """
        duplicate = OptionSet(self._fields.values())
        duplicate._explicit = copy.deepcopy(self._explicit)
        duplicate._resolved = copy.deepcopy(self._resolved)
        duplicate._dependents = copy.deepcopy(self._dependents)
        return duplicate

    def _invalidate(self, name: str) -> None:
        pending = [name]
        while pending:
            current = pending.pop()
            self._resolved.pop(current, None)
            pending.extend(self._dependents.pop(current, ()))

    def _resolve(self, name: str) -> typ.Any:
        field = self.field(name)
        if self._resolving:
            self._dependents.setdefault(name, set()).add(self._resolving[-1])
        if name in self._explicit:
            return self._explicit[name]
        if name in self._resolved:
            return self._resolved[name]
        if field.default_rule is not None:
            value = self._compute(field)
        elif not field.required:
            value = field.default
        else:
            message = f"Option '{name}' is required but has no value"
            raise MissingValueError(message)
        self._resolved[name] = value
        return value

    def _compute(self, field: OptionField) -> typ.Any:
        if field.name in self._resolving:
            chain = [*self._resolving[self._resolving.index(field.name) :], field.name]
            message = "Cyclic default rules: " + " -> ".join(chain)
            raise CyclicDefaultError(message)
        self._resolving.append(field.name)
        try:
            produced = field.default_rule(self)
        finally:
            self._resolving.pop()
        return field.validate(produced)


def _detach(value: typ.Any) -> typ.Any:
    """Return list values as fresh copies so callers cannot alias state."""
    return list(value) if isinstance(value, list) else value
