"""
Strong Passwords
=================

Random characters from the fixed 64-symbol :data:`STRONG_ALPHABET`
(upper, lower, digits, ``+`` and ``/``), one ``random_int(64)`` draw per
character. Each character carries exactly 6 bits.
"""

from __future__ import annotations

from typing import Optional

from keysmith.core.models import PasswordConfig, PasswordType
from keysmith.core.ports import Dictionary, RandomSource
from keysmith.domain.charsets import STRONG_ALPHABET
from keysmith.generators.base import PasswordStrategy


class StrongStrategy(PasswordStrategy):
    """``length`` alphabet characters per chunk."""

    password_type = PasswordType.STRONG

    async def generate_unit(
        self,
        config: PasswordConfig,
        random_source: RandomSource,
        dictionary: Optional[Dictionary] = None,
    ) -> str:
        chars: list[str] = []
        for _ in range(config.length):
            index = await random_source.random_int(len(STRONG_ALPHABET))
            chars.append(STRONG_ALPHABET[index])
        return "".join(chars)
