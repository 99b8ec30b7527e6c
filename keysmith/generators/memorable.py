"""
Memorable Passphrases
======================

One dictionary word per unit, chosen with ``random_int(dictionary.size())``.

:func:`apply_transforms` post-processes a finished passphrase. Its only
draw, the appended number, happens after every word has been chosen.
"""

from __future__ import annotations

from typing import Optional

from keysmith.core.errors import MissingDictionaryError
from keysmith.core.models import PassphraseTransforms, PasswordConfig, PasswordType
from keysmith.core.ports import Dictionary, RandomSource
from keysmith.generators.base import PasswordStrategy

APPENDED_NUMBER_BOUND = 1000


class MemorableStrategy(PasswordStrategy):
    """Words joined by the separator, XKCD style."""

    password_type = PasswordType.MEMORABLE

    async def generate_unit(
        self,
        config: PasswordConfig,
        random_source: RandomSource,
        dictionary: Optional[Dictionary] = None,
    ) -> str:
        if dictionary is None:
            raise MissingDictionaryError(
                "A Dictionary is required for memorable passwords"
            )
        index = await random_source.random_int(dictionary.size())
        return dictionary.word(index)


async def apply_transforms(
    passphrase: str,
    separator: str,
    transforms: PassphraseTransforms,
    random_source: RandomSource,
) -> str:
    """Capitalize, upper-case and append a number, in that order.

    Capitalization splits on *separator*; with an empty separator the
    whole passphrase counts as one word.
    """
    if transforms.capitalize:
        words = passphrase.split(separator) if separator else [passphrase]
        passphrase = separator.join(word[:1].upper() + word[1:] for word in words)
    if transforms.uppercase:
        passphrase = passphrase.upper()
    if transforms.append_number:
        number = await random_source.random_int(APPENDED_NUMBER_BOUND)
        passphrase = f"{passphrase}{number}"
    return passphrase
