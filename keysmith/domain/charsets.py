"""
Character sets and phoneme inventories used by the generation schemes.

Changing any of these strings changes the passwords produced from a
given sequence of random draws, so they are fixed.
"""

from __future__ import annotations

import math

UPPERCASE = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
LOWERCASE = "abcdefghijklmnopqrstuvwxyz"
DIGITS = "0123456789"

# 62 alphanumerics plus two symbols: exactly 64 symbols, 6 bits each.
STRONG_SYMBOLS = "+/"
STRONG_ALPHABET = UPPERCASE + LOWERCASE + DIGITS + STRONG_SYMBOLS

# RFC 4648 base64 alphabet.
BASE64_ALPHABET = UPPERCASE + LOWERCASE + DIGITS + "+/"
BASE64_BITS_PER_CHAR = math.log2(len(BASE64_ALPHABET))

# Phonemes for consonant-vowel-vowel-consonant syllables.
CONSONANTS = "bcdfghjklmnpqrstvwxyz"
VOWELS = "aeiou"


def bits_per_symbol(charset: str) -> float:
    """Entropy of one uniform draw from *charset*, in bits."""
    if not charset:
        raise ValueError("charset must not be empty")
    return math.log2(len(charset))
