"""
Entropy Calculator
===================

Bits of entropy for a valid generation request, computed from the
configuration alone. Nothing here touches randomness.

Per scheme, ``total = iteration * bits_per_unit``:

- strong / base64: ``length * log2(64) = 6 * length`` bits per chunk.
- memorable: ``log2(dictionary size)`` bits per word.
- pronounceable: ``2 * log2(21) + 2 * log2(5)`` bits per CVVC syllable.
- quantum-resistant: fixed 43 base64 characters, 258 bits.

References:
    - Shannon, C. E. (1948). A Mathematical Theory of Communication.
    - NIST SP 800-63B (2017), Appendix A -- Strength of Memorized Secrets.
"""

from __future__ import annotations

import math
from typing import Optional

from keysmith.core.errors import UnknownPasswordTypeError
from keysmith.core.models import (
    QUANTUM_LENGTH,
    EntropyInfo,
    PasswordConfig,
    PasswordType,
    QuantumSecurity,
    SecurityLevel,
)
from keysmith.core.ports import Dictionary, MemoryDictionary
from keysmith.domain.charsets import (
    BASE64_BITS_PER_CHAR,
    CONSONANTS,
    STRONG_ALPHABET,
    VOWELS,
    bits_per_symbol,
)

QUANTUM_TARGET_BITS = 256.0
QUANTUM_MIN_LENGTH = math.ceil(QUANTUM_TARGET_BITS / BASE64_BITS_PER_CHAR)

SYLLABLE_BITS = 2 * bits_per_symbol(CONSONANTS) + 2 * bits_per_symbol(VOWELS)


def _round_bits(bits: float) -> float:
    return round(bits, 2)


class EntropyCalculator:
    """Computes :class:`EntropyInfo` for validated configurations.

    Args:
        dictionary: Word source whose size drives memorable entropy.
            Defaults to the bundled word list.
    """

    def __init__(self, dictionary: Optional[Dictionary] = None) -> None:
        self._dictionary = dictionary if dictionary is not None else MemoryDictionary()

    def bits_per_unit(self, config: PasswordConfig) -> float:
        """Entropy contributed by one repeated unit of *config*.

        Raises:
            UnknownPasswordTypeError: If ``config.type`` is not supported.
        """
        password_type = config.password_type
        if password_type in (PasswordType.STRONG, PasswordType.BASE64):
            charset_bits = (
                bits_per_symbol(STRONG_ALPHABET)
                if password_type is PasswordType.STRONG
                else BASE64_BITS_PER_CHAR
            )
            return config.length * charset_bits
        if password_type is PasswordType.MEMORABLE:
            return math.log2(self._dictionary.size())
        if password_type is PasswordType.PRONOUNCEABLE:
            return SYLLABLE_BITS
        if password_type is PasswordType.QUANTUM_RESISTANT:
            return QUANTUM_LENGTH * BASE64_BITS_PER_CHAR
        raise UnknownPasswordTypeError(
            config.type, [t.value for t in PasswordType]
        )

    def calculate(self, config: PasswordConfig) -> EntropyInfo:
        """Entropy of the whole secret described by *config*.

        quantum-resistant always reports the canonical single unit,
        whatever iteration the caller passed.
        """
        per_unit = self.bits_per_unit(config)
        units = (
            1
            if config.password_type is PasswordType.QUANTUM_RESISTANT
            else config.iteration
        )
        total = _round_bits(per_unit * units)
        level = SecurityLevel.from_bits(total)
        return EntropyInfo(
            total_bits=total,
            per_unit=_round_bits(per_unit),
            security_level=level,
            recommendation=level.recommendation,
        )


def quantum_security(config: PasswordConfig) -> QuantumSecurity:
    """Report whether a base64-character config meets the 256-bit target.

    Only ``length * iteration`` matters: every character is one uniform
    draw from the 64-symbol base64 alphabet.
    """
    bits = _round_bits(config.length * config.iteration * BASE64_BITS_PER_CHAR)
    return QuantumSecurity(
        is_quantum_safe=bits >= QUANTUM_TARGET_BITS,
        entropy_bits=bits,
        target_bits=QUANTUM_TARGET_BITS,
        recommended_min_length=QUANTUM_MIN_LENGTH,
    )
