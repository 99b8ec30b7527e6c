"""
Keysmith Core Data Models
==========================

Pydantic models for the Keysmith generation engine: the request value
(:class:`PasswordConfig`), the password-type and security-level
enumerations, and the result objects returned by the service facade.

Every model is immutable and serialises with camelCase aliases
(``totalBits``, ``isValid`` ...) so JSON output carries the same field
names as the non-Python front ends consuming the same engine.

References:
    - Shannon, C. E. (1948). A Mathematical Theory of Communication.
    - NIST SP 800-63B (2017). Digital Identity Guidelines.
    - Pydantic v2 documentation. https://docs.pydantic.dev/latest/
"""

from __future__ import annotations

import enum
from collections.abc import Mapping
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


# ===================================================================== #
#  Enumerations
# ===================================================================== #


class PasswordType(str, enum.Enum):
    """Supported generation schemes, in their stable public order."""

    STRONG = "strong"
    BASE64 = "base64"
    MEMORABLE = "memorable"
    QUANTUM_RESISTANT = "quantum-resistant"
    PRONOUNCEABLE = "pronounceable"

    @classmethod
    def parse(cls, value: Any) -> Optional[PasswordType]:
        """Return the member for *value*, or ``None`` if it is not one."""
        try:
            return cls(value)
        except ValueError:
            return None

    @property
    def uses_length(self) -> bool:
        """Whether ``length`` is meaningful (and validated) for this type."""
        return self in (PasswordType.STRONG, PasswordType.BASE64)

    @property
    def unit_name(self) -> str:
        """Human name of one repeated unit."""
        return _UNIT_NAMES[self]


_UNIT_NAMES: dict[PasswordType, str] = {
    PasswordType.STRONG: "chunk",
    PasswordType.BASE64: "chunk",
    PasswordType.MEMORABLE: "word",
    PasswordType.QUANTUM_RESISTANT: "key",
    PasswordType.PRONOUNCEABLE: "syllable",
}


class SecurityLevel(str, enum.Enum):
    """Coarse strength classification of a generated secret.

    Attributes:
        EXCELLENT: 256 bits or more.
        STRONG:    128-255 bits.
        GOOD:      80-127 bits.
        MODERATE:  64-79 bits.
        WEAK:      below 64 bits.
    """

    WEAK = "WEAK"
    MODERATE = "MODERATE"
    GOOD = "GOOD"
    STRONG = "STRONG"
    EXCELLENT = "EXCELLENT"

    @classmethod
    def from_bits(cls, bits: float) -> SecurityLevel:
        """Classify *bits* using :data:`SECURITY_THRESHOLDS`."""
        for lower_bound, level in SECURITY_THRESHOLDS:
            if bits >= lower_bound:
                return level
        return cls.WEAK

    @property
    def recommendation(self) -> str:
        """Short advisory string for this tier."""
        return SECURITY_RECOMMENDATIONS[self]


# Lower bound in bits for each level, checked from the top down.
SECURITY_THRESHOLDS: tuple[tuple[float, SecurityLevel], ...] = (
    (256.0, SecurityLevel.EXCELLENT),
    (128.0, SecurityLevel.STRONG),
    (80.0, SecurityLevel.GOOD),
    (64.0, SecurityLevel.MODERATE),
    (0.0, SecurityLevel.WEAK),
)

SECURITY_RECOMMENDATIONS: dict[SecurityLevel, str] = {
    SecurityLevel.EXCELLENT: (
        "Excellent security. Suitable for high-security and long-term secrets."
    ),
    SecurityLevel.STRONG: (
        "Strong security. Suitable for high-security applications."
    ),
    SecurityLevel.GOOD: (
        "Good security for most applications. "
        "Consider increasing length for high-security needs."
    ),
    SecurityLevel.MODERATE: (
        "Moderate security. "
        "Increase length or iteration count for sensitive accounts."
    ),
    SecurityLevel.WEAK: (
        "Weak. Increase password length or iteration count for better security."
    ),
}


# ===================================================================== #
#  Request Model
# ===================================================================== #


# Canonical parameters forced onto quantum-resistant requests.
QUANTUM_LENGTH = 43
QUANTUM_ITERATION = 1
QUANTUM_SEPARATOR = ""


class _FrozenModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=False,
        extra="ignore",
    )


class PasswordConfig(_FrozenModel):
    """An immutable generation request.

    Field values are carried as given, except that integral floats such
    as ``16.0`` become ``int``. An out-of-range ``length`` or a
    non-integer ``iteration`` is not rejected here but reported by
    :class:`keysmith.domain.validator.ConfigValidator`, so that callers
    get field-level messages instead of a construction error.

    Attributes:
        type:      Password type identifier (see :class:`PasswordType`).
        length:    Characters per chunk for strong/base64 (1-1024).
        iteration: Number of repeated units (chunks, words, syllables).
        separator: String inserted between units; any content is allowed.
    """

    type: Optional[str] = Field(default=None, description="Password type identifier")
    length: Any = Field(default=16, description="Characters per chunk")
    iteration: Any = Field(default=1, description="Number of units")
    separator: Any = Field(default="-", description="Unit separator")

    @field_validator("type", mode="before")
    @classmethod
    def _coerce_type(cls, v: Any) -> Optional[str]:
        if v is None or isinstance(v, str) and not isinstance(v, enum.Enum):
            return v
        if isinstance(v, enum.Enum):
            return str(v.value)
        return str(v)

    @field_validator("length", "iteration", mode="before")
    @classmethod
    def _integral_floats(cls, v: Any) -> Any:
        # 16.0 from a JSON front end means 16
        if isinstance(v, float) and v.is_integer():
            return int(v)
        return v

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> PasswordConfig:
        """Build a config from a plain mapping.

        Keys whose value is ``None`` (other than ``type``) fall back to the
        field default, so partially-filled option dicts from a CLI or form
        can be passed straight through. Unknown keys are ignored.
        """
        values = {
            k: v for k, v in data.items()
            if k == "type" or v is not None
        }
        return cls.model_validate(values)

    @property
    def password_type(self) -> Optional[PasswordType]:
        """The parsed :class:`PasswordType`, or ``None`` if unknown."""
        return PasswordType.parse(self.type)

    def normalized(self) -> PasswordConfig:
        """Return the config with per-type canonical overrides applied.

        quantum-resistant requests always use 43 base64 characters in a
        single unit with no separator, whatever the caller supplied.
        """
        if self.password_type is PasswordType.QUANTUM_RESISTANT:
            return self.model_copy(
                update={
                    "length": QUANTUM_LENGTH,
                    "iteration": QUANTUM_ITERATION,
                    "separator": QUANTUM_SEPARATOR,
                }
            )
        return self


# ===================================================================== #
#  Result Models
# ===================================================================== #


class ValidationResult(_FrozenModel):
    """Outcome of validating a :class:`PasswordConfig`.

    Each error string names the offending field (``type``, ``length``,
    ``iteration`` or ``separator``).
    """

    is_valid: bool
    errors: list[str] = Field(default_factory=list)

    def errors_for(self, field_name: str) -> list[str]:
        """Errors mentioning *field_name* (substring match)."""
        return [e for e in self.errors if field_name in e]


class EntropyInfo(_FrozenModel):
    """Entropy estimate for a configuration, computed without randomness.

    Attributes:
        total_bits:     Bits of entropy of the whole secret.
        per_unit:       Bits contributed by one repeated unit.
        security_level: Coarse classification of ``total_bits``.
        recommendation: Advisory string for the level.
    """

    total_bits: float
    per_unit: float
    security_level: SecurityLevel
    recommendation: str


class GenerationMetadata(_FrozenModel):
    """Descriptive data attached to a generated password."""

    recommendation: str
    password_type: PasswordType
    character_count: int = Field(ge=0)


class GenerationResult(_FrozenModel):
    """A generated password with its entropy estimate."""

    password: str
    entropy_bits: float
    security_level: SecurityLevel
    metadata: GenerationMetadata

    def __repr__(self) -> str:
        # Keep secrets out of reprs that end up in logs and tracebacks.
        return (
            f"GenerationResult(password='***', entropy_bits={self.entropy_bits}, "
            f"security_level={self.security_level.value})"
        )


class QuantumSecurity(_FrozenModel):
    """Whether a configuration reaches the post-quantum entropy target."""

    is_quantum_safe: bool
    entropy_bits: float
    target_bits: float
    recommended_min_length: int


# ===================================================================== #
#  Randomness Audit Models
# ===================================================================== #


class RandomnessTest(_FrozenModel):
    """Result of one statistical test on a random source sample.

    Attributes:
        test_name:   Name of the statistical test.
        statistic:   Raw test statistic.
        p_value:     Probability of a result at least this extreme under
            the null hypothesis (the source is uniform).
        passed:      ``p_value >= significance``.
        description: Human-readable summary of what was measured.
    """

    test_name: str
    statistic: float
    p_value: float
    passed: bool
    description: str = ""


class RandomnessAudit(_FrozenModel):
    """Aggregated quality report for a :class:`RandomSource`."""

    sample_size: int
    significance: float
    shannon_entropy: float = Field(description="Bits per byte, max 8.0")
    min_entropy: float = Field(description="Bits per byte, max 8.0")
    tests: list[RandomnessTest] = Field(default_factory=list)
    passed: bool = False
    assessment: str = ""

    @property
    def tests_passed(self) -> int:
        return sum(1 for t in self.tests if t.passed)


# ===================================================================== #
#  Passphrase and Strength Models
# ===================================================================== #


class PassphraseTransforms(_FrozenModel):
    """Optional post-processing for memorable passphrases.

    Attributes:
        capitalize:    Upper-case the first letter of every word.
        uppercase:     Upper-case the whole passphrase.
        append_number: Append a number drawn with ``random_int(1000)``
            after all words have been drawn.
    """

    capitalize: bool = False
    uppercase: bool = False
    append_number: bool = False


class PasswordStrength(str, enum.Enum):
    """Five-step strength rating of an existing password (score 0-4)."""

    VERY_WEAK = "very_weak"
    WEAK = "weak"
    FAIR = "fair"
    GOOD = "good"
    STRONG = "strong"

    @classmethod
    def from_score(cls, score: int) -> PasswordStrength:
        return list(cls)[score]

    @property
    def label(self) -> str:
        return self.value.replace("_", " ").title()


class WeaknessPattern(_FrozenModel):
    """A structural weakness found in a password.

    Attributes:
        pattern:     Pattern kind (``sequence``, ``keyboard_row`` ...).
        matches:     Every matched substring, in order.
        multiplier:  Strength retained despite the pattern (0-1); the
            penalty is ``1 - multiplier``.
        description: Human-readable summary.
    """

    pattern: str
    matches: list[str] = Field(default_factory=list)
    multiplier: float
    description: str = ""


class DictionaryMatch(_FrozenModel):
    """A word-list hit: a common password, a word, or a reversed word."""

    dictionary: str
    word: str
    multiplier: float
    description: str = ""


class PasswordComposition(_FrozenModel):
    """Character classes present in a password and the naive entropy.

    ``entropy`` is ``length * log2(charset_size)`` with classes sized
    26 / 26 / 10 / 32.
    """

    length: int
    has_lowercase: bool
    has_uppercase: bool
    has_numbers: bool
    has_symbols: bool
    unique_chars: int
    charset_size: int
    entropy: float


class StrengthFeedback(_FrozenModel):
    warning: Optional[str] = None
    suggestions: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)


class StrengthAnalysis(_FrozenModel):
    """Strength assessment of a user-supplied password.

    Attributes:
        password_masked: First and last character only.
        score:           0 (very weak) to 4 (strong).
        strength:        Rating matching ``score``.
        entropy:         Effective entropy after pattern and dictionary
            reductions, rounded to 2 places.
        base_entropy:    Composition entropy before reductions.
        composition:     ``None`` for an empty password.
    """

    password_masked: str = ""
    score: int = Field(ge=0, le=4)
    strength: PasswordStrength
    entropy: float
    base_entropy: float = 0.0
    composition: Optional[PasswordComposition] = None
    patterns: list[WeaknessPattern] = Field(default_factory=list)
    dictionaries: list[DictionaryMatch] = Field(default_factory=list)
    feedback: StrengthFeedback = Field(default_factory=StrengthFeedback)

    @property
    def is_common_password(self) -> bool:
        return any(d.dictionary == "common_passwords" for d in self.dictionaries)
