"""
Configuration Validator
========================

Structural checks on a :class:`~keysmith.core.models.PasswordConfig`
before any randomness is consumed. Every rule runs independently and all
violations are collected, in field order ``type``, ``length``,
``iteration``, ``separator``. Each message starts with the field name so
front ends can attribute errors by substring.

The quantum-resistant override is not a validation concern: the facade
applies :meth:`PasswordConfig.normalized` first.
"""

from __future__ import annotations

from typing import Any

from keysmith.core.errors import unknown_type_message
from keysmith.core.models import PasswordConfig, PasswordType, ValidationResult

MIN_LENGTH = 1
MAX_LENGTH = 1024
MIN_ITERATION = 1
MAX_ITERATION = 1024

SUPPORTED_TYPES: tuple[str, ...] = tuple(t.value for t in PasswordType)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _check_bounds(name: str, value: Any, low: int, high: int) -> list[str]:
    if not _is_int(value):
        return [f"{name} must be an integer between {low} and {high}, got {value!r}"]
    if value < low:
        return [f"{name} must be at least {low}, got {value}"]
    if value > high:
        return [f"{name} must not exceed {high}, got {value}"]
    return []


class ConfigValidator:
    """Pure validator for generation requests.

    Usage::

        result = ConfigValidator().validate(PasswordConfig(type="strong", length=0))
        result.is_valid          # False
        result.errors_for("length")
    """

    def validate(self, config: PasswordConfig) -> ValidationResult:
        errors: list[str] = []
        password_type = config.password_type

        if password_type is None:
            errors.append(unknown_type_message(config.type, SUPPORTED_TYPES))

        if password_type is not None and password_type.uses_length:
            errors.extend(
                _check_bounds("length", config.length, MIN_LENGTH, MAX_LENGTH)
            )

        errors.extend(
            _check_bounds("iteration", config.iteration, MIN_ITERATION, MAX_ITERATION)
        )

        if not isinstance(config.separator, str):
            errors.append(
                f"separator must be a string, got {type(config.separator).__name__}"
            )

        return ValidationResult(is_valid=not errors, errors=errors)
