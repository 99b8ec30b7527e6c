"""
Pronounceable Passwords
========================

Consonant-vowel-vowel-consonant syllables ("bauk", "tiez"). Each syllable
takes four independent draws in a fixed order: consonant, vowel, vowel,
consonant.

Entropy per syllable: ``2 * log2(21) + 2 * log2(5)``, about 13.42 bits.
"""

from __future__ import annotations

from typing import Optional

from keysmith.core.models import PasswordConfig, PasswordType
from keysmith.core.ports import Dictionary, RandomSource
from keysmith.domain.charsets import CONSONANTS, VOWELS
from keysmith.generators.base import PasswordStrategy

SYLLABLE_PATTERN: tuple[str, ...] = (CONSONANTS, VOWELS, VOWELS, CONSONANTS)


async def cvvc_syllable(random_source: RandomSource) -> str:
    letters: list[str] = []
    for phonemes in SYLLABLE_PATTERN:
        letters.append(phonemes[await random_source.random_int(len(phonemes))])
    return "".join(letters)


class PronounceableStrategy(PasswordStrategy):
    """One CVVC syllable per unit."""

    password_type = PasswordType.PRONOUNCEABLE

    async def generate_unit(
        self,
        config: PasswordConfig,
        random_source: RandomSource,
        dictionary: Optional[Dictionary] = None,
    ) -> str:
        return await cvvc_syllable(random_source)
