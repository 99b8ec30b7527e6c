"""
Keysmith Exceptions
====================

Configuration problems are normally reported through
:class:`keysmith.core.models.ValidationResult`. The exceptions below are
raised when a caller invokes generation or entropy calculation with a
configuration that does not validate, or when the engine is reached with
something it cannot dispatch.

Port contract violations (a negative byte count, an empty charset, an
out-of-range dictionary index) are plain :class:`ValueError` /
:class:`IndexError` raised by the port and propagated unchanged.
"""

from __future__ import annotations

from typing import Any, Iterable, Sequence


class KeysmithError(Exception):
    """Base class for every error raised by the Keysmith core."""


class InvalidConfigError(KeysmithError, ValueError):
    """A generation request failed validation.

    Attributes:
        errors: The validator's messages, each naming the offending field.
    """

    def __init__(self, errors: Iterable[str]) -> None:
        self.errors: list[str] = list(errors)
        super().__init__("; ".join(self.errors) or "invalid configuration")


class UnknownPasswordTypeError(InvalidConfigError):
    """Dispatch was attempted on a type no strategy handles."""

    def __init__(self, password_type: Any, valid_types: Sequence[str]) -> None:
        self.password_type = password_type
        super().__init__(
            [unknown_type_message(password_type, valid_types)]
        )


class MissingDictionaryError(KeysmithError):
    """A dictionary-based scheme was requested without a Dictionary port."""


def unknown_type_message(password_type: Any, valid_types: Sequence[str]) -> str:
    """Shared wording for unsupported or missing password types."""
    if password_type is None or password_type == "":
        return f"type is required; valid types: {', '.join(valid_types)}"
    return (
        f"unknown password type {password_type!r}; "
        f"valid types: {', '.join(valid_types)}"
    )
