"""
Quantum-Resistant Keys
=======================

A single 43-character base64 string from one 32-byte draw: 256 bits of
raw randomness, rated at 43 * 6 = 258 bits by the character model.
Grover's algorithm halves the effective strength of a brute-force
search, so 256 bits keeps a 128-bit margin against quantum attackers.

The facade normalizes these requests to length 43, iteration 1 and an
empty separator before they reach the strategy.

References:
    - Grover, L. K. (1996). A fast quantum mechanical algorithm for
      database search. STOC '96.
"""

from __future__ import annotations

from typing import Optional

from keysmith.core.models import QUANTUM_LENGTH, PasswordConfig, PasswordType
from keysmith.core.ports import Dictionary, RandomSource
from keysmith.generators.base import PasswordStrategy

QUANTUM_BYTE_LENGTH = 32


class QuantumResistantStrategy(PasswordStrategy):
    """One fixed-size key; no separator is ever applied."""

    password_type = PasswordType.QUANTUM_RESISTANT

    async def generate(
        self,
        config: PasswordConfig,
        random_source: RandomSource,
        dictionary: Optional[Dictionary] = None,
    ) -> str:
        return await self.generate_unit(config, random_source, dictionary)

    async def generate_unit(
        self,
        config: PasswordConfig,
        random_source: RandomSource,
        dictionary: Optional[Dictionary] = None,
    ) -> str:
        encoded = await random_source.random_base64(QUANTUM_BYTE_LENGTH)
        return encoded.rstrip("=")[:QUANTUM_LENGTH]
