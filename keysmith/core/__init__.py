"""
Keysmith Core Module
=====================

Data models, port contracts and exceptions shared by every layer. The
engine and the service facade live in :mod:`keysmith.core.engine` and
:mod:`keysmith.core.service`; they are re-exported from :mod:`keysmith`.
"""

from keysmith.core.errors import (
    InvalidConfigError,
    KeysmithError,
    MissingDictionaryError,
    UnknownPasswordTypeError,
)
from keysmith.core.models import (
    SECURITY_THRESHOLDS,
    EntropyInfo,
    GenerationMetadata,
    GenerationResult,
    PassphraseTransforms,
    PasswordConfig,
    PasswordStrength,
    PasswordType,
    QuantumSecurity,
    SecurityLevel,
    StrengthAnalysis,
    ValidationResult,
)
from keysmith.core.ports import Dictionary, MemoryDictionary, RandomSource

__all__ = [
    "RandomSource",
    "Dictionary",
    "MemoryDictionary",
    "PasswordConfig",
    "PasswordType",
    "SecurityLevel",
    "SECURITY_THRESHOLDS",
    "EntropyInfo",
    "GenerationMetadata",
    "GenerationResult",
    "QuantumSecurity",
    "ValidationResult",
    "PassphraseTransforms",
    "PasswordStrength",
    "StrengthAnalysis",
    "KeysmithError",
    "InvalidConfigError",
    "UnknownPasswordTypeError",
    "MissingDictionaryError",
]
