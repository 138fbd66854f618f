"""Exception types raised while declaring, resolving and staging options."""

from __future__ import annotations

__all__ = [
    "ConfigError",
    "CyclicDefaultError",
    "DuplicateFieldError",
    "MissingValueError",
    "OptionError",
    "StagingError",
    "TypeMismatchError",
    "UnknownFieldError",
]


class OptionError(RuntimeError):
    """Base class for option declaration and resolution failures."""


class UnknownFieldError(OptionError):
    """Raised when an option name has not been declared."""


class MissingValueError(OptionError):
    """Raised when a required option has neither a value nor a default."""


class TypeMismatchError(OptionError):
    """Raised when a value does not conform to the option's declared type."""


class DuplicateFieldError(OptionError):
    """Raised when an option name is declared twice."""


class CyclicDefaultError(OptionError):
    """Raised when computed defaults depend on each other in a loop."""


class ConfigError(OptionError):
    """Raised when an override file is malformed."""


class StagingError(RuntimeError):
    """Raised when resources cannot be prepared for staging."""
