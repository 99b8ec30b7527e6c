"""Pure domain rules: character sets, validation and the entropy model."""

from keysmith.domain.entropy import EntropyCalculator, quantum_security
from keysmith.domain.validator import ConfigValidator

__all__ = ["ConfigValidator", "EntropyCalculator", "quantum_security"]
