"""
Keysmith Service Facade
========================

:class:`PasswordService` is the single entry point every front end calls.
It owns the order of operations for a request:

1. coerce a plain mapping into a :class:`PasswordConfig`;
2. apply the quantum-resistant normalization;
3. validate, raising :class:`InvalidConfigError` before any randomness
   is consumed;
4. dispatch to the :class:`GenerationEngine`;
5. attach the entropy estimate and metadata.

Both ports are injected at construction. Apart from the logger the
facade holds no mutable state of its own, so it is safe to share between
concurrent tasks as long as the injected ports are.

References:
    - Gamma, E., Helm, R., Johnson, R., & Vlissides, J. (1994).
      Design Patterns: Elements of Reusable Object-Oriented Software.
      Addison-Wesley. (Facade pattern)
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any, Iterable, Optional, Union

from shared.logger import KeysmithLogger

from keysmith.analyzers.strength import PasswordStrengthAnalyzer
from keysmith.core.engine import GenerationEngine
from keysmith.core.errors import InvalidConfigError
from keysmith.core.models import (
    EntropyInfo,
    GenerationMetadata,
    GenerationResult,
    PassphraseTransforms,
    PasswordConfig,
    PasswordType,
    QuantumSecurity,
    SecurityLevel,
    StrengthAnalysis,
    ValidationResult,
)
from keysmith.core.ports import (
    DICTIONARY_REQUIRED_METHODS,
    RANDOM_SOURCE_REQUIRED_METHODS,
    Dictionary,
    MemoryDictionary,
    RandomSource,
    missing_methods,
)
from keysmith.domain.entropy import EntropyCalculator, quantum_security
from keysmith.domain.validator import ConfigValidator
from keysmith.generators.memorable import APPENDED_NUMBER_BOUND, apply_transforms

ConfigLike = Union[PasswordConfig, Mapping[str, Any]]


class PasswordService:
    """Facade over validation, entropy calculation and generation.

    Usage::

        service = PasswordService(SystemRandomSource())
        result = await service.generate({"type": "strong", "length": 16, "iteration": 4})
        result.password, result.entropy_bits   # '...', 384.0

    Args:
        random_source: The only source of randomness for generation.
        dictionary:    Word source for memorable passwords; defaults to
            the bundled word list.
        logger:        Optional logger; a component logger is created
            otherwise.
        validate_ports: Check that the ports expose the required methods.

    Raises:
        TypeError: If a port is missing a required method.
    """

    def __init__(
        self,
        random_source: RandomSource,
        dictionary: Optional[Dictionary] = None,
        *,
        logger: Optional[KeysmithLogger] = None,
        validate_ports: bool = True,
    ) -> None:
        if dictionary is None:
            dictionary = MemoryDictionary()
        if validate_ports:
            _check_port(random_source, "random_source", RANDOM_SOURCE_REQUIRED_METHODS)
            _check_port(dictionary, "dictionary", DICTIONARY_REQUIRED_METHODS)

        self.random_source = random_source
        self.dictionary = dictionary
        self.logger = logger or KeysmithLogger("service")
        self.validator = ConfigValidator()
        self.calculator = EntropyCalculator(dictionary)
        self.engine = GenerationEngine(logger=self.logger)
        self.strength_analyzer = PasswordStrengthAnalyzer()

    # ------------------------------------------------------------------ #
    #  Validation
    # ------------------------------------------------------------------ #

    @staticmethod
    def _coerce(config: ConfigLike) -> PasswordConfig:
        if isinstance(config, PasswordConfig):
            return config.normalized()
        if isinstance(config, Mapping):
            return PasswordConfig.from_mapping(config).normalized()
        raise TypeError(
            f"config must be a PasswordConfig or a mapping, "
            f"got {type(config).__name__}"
        )

    def validate_config(self, config: ConfigLike) -> ValidationResult:
        """Validate *config* without raising for invalid values."""
        return self.validator.validate(self._coerce(config))

    def _validated(self, config: ConfigLike) -> PasswordConfig:
        normalized = self._coerce(config)
        validation = self.validator.validate(normalized)
        if not validation.is_valid:
            self.logger.debug(
                "Rejected configuration", error_count=len(validation.errors)
            )
            raise InvalidConfigError(validation.errors)
        return normalized

    # ------------------------------------------------------------------ #
    #  Entropy
    # ------------------------------------------------------------------ #

    def calculate_entropy(self, config: ConfigLike) -> EntropyInfo:
        """Entropy of *config* without consuming randomness.

        Raises:
            InvalidConfigError: If the configuration does not validate.
        """
        return self.calculator.calculate(self._validated(config))

    def quantum_security(self, config: ConfigLike) -> QuantumSecurity:
        """Check a base64-character config against the 256-bit target.

        Raises:
            InvalidConfigError: If the configuration does not validate.
        """
        return quantum_security(self._validated(config))

    # ------------------------------------------------------------------ #
    #  Generation
    # ------------------------------------------------------------------ #

    async def generate(self, config: ConfigLike) -> GenerationResult:
        """Generate one password with its entropy metadata.

        Raises:
            InvalidConfigError: If the configuration does not validate;
                no randomness is consumed in that case.
            MissingDictionaryError: Propagated from the memorable scheme.
        """
        normalized = self._validated(config)
        entropy = self.calculator.calculate(normalized)

        with self.logger.operation("generate"):
            password = await self.engine.generate(
                normalized, self.random_source, self.dictionary
            )
            self.logger.debug(
                "Generated password",
                password_type=normalized.type,
                entropy_bits=entropy.total_bits,
            )

        return _result(normalized, password, entropy.total_bits)

    async def generate_passphrase(
        self,
        config: ConfigLike,
        transforms: Optional[PassphraseTransforms] = None,
    ) -> GenerationResult:
        """Generate a memorable passphrase, then apply *transforms*.

        Words are drawn first; an appended number is one more
        ``random_int(1000)`` draw and adds ``log2(1000)`` bits.

        Raises:
            InvalidConfigError: If the configuration does not validate or
                is not of type ``memorable``.
        """
        normalized = self._validated(config)
        if normalized.password_type is not PasswordType.MEMORABLE:
            raise InvalidConfigError(
                [f"type must be 'memorable' for a passphrase, got '{normalized.type}'"]
            )
        transforms = transforms or PassphraseTransforms()
        bits = self.calculator.calculate(normalized).total_bits
        if transforms.append_number:
            bits = round(bits + math.log2(APPENDED_NUMBER_BOUND), 2)

        with self.logger.operation("passphrase"):
            words = await self.engine.generate(
                normalized, self.random_source, self.dictionary
            )
            password = await apply_transforms(
                words, normalized.separator, transforms, self.random_source
            )
            self.logger.debug(
                "Generated passphrase",
                words=normalized.iteration,
                transforms=transforms.model_dump(),
                entropy_bits=bits,
            )

        return _result(normalized, password, bits)

    async def generate_multiple(
        self, configs: Iterable[ConfigLike]
    ) -> list[GenerationResult]:
        """Generate one password per config, in order.

        Every config is validated before the first draw, so an invalid
        entry anywhere in the batch consumes no randomness.
        """
        normalized = [self._validated(config) for config in configs]
        results: list[GenerationResult] = []
        for config in normalized:
            results.append(await self.generate(config))
        return results

    # ------------------------------------------------------------------ #
    #  Strength
    # ------------------------------------------------------------------ #

    def analyze_strength(self, password: str) -> StrengthAnalysis:
        """Assess an existing password. No randomness is consumed."""
        return self.strength_analyzer.analyze(password)

    # ------------------------------------------------------------------ #
    #  Introspection
    # ------------------------------------------------------------------ #

    def get_supported_types(self) -> list[str]:
        """The five type identifiers in stable order."""
        return [t.value for t in PasswordType]


def _result(config: PasswordConfig, password: str, bits: float) -> GenerationResult:
    level = SecurityLevel.from_bits(bits)
    return GenerationResult(
        password=password,
        entropy_bits=bits,
        security_level=level,
        metadata=GenerationMetadata(
            recommendation=level.recommendation,
            password_type=config.password_type,
            character_count=len(password),
        ),
    )


def _check_port(port: Any, name: str, required: Iterable[str]) -> None:
    missing = missing_methods(port, tuple(required))
    if missing:
        raise TypeError(
            f"{name} is missing required method(s): {', '.join(missing)}"
        )
