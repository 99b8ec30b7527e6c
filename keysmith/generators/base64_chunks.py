"""
Base64 Passwords
=================

Chunks cut from base64-encoded random bytes. For a chunk of ``length``
characters the strategy requests ``ceil(3 * length / 4)`` bytes, which
always encode to at least ``length`` non-padding characters, strips the
padding and keeps the first ``length`` characters.
"""

from __future__ import annotations

import math
from typing import Optional

from keysmith.core.models import PasswordConfig, PasswordType
from keysmith.core.ports import Dictionary, RandomSource
from keysmith.generators.base import PasswordStrategy


def required_byte_length(char_length: int) -> int:
    """Bytes needed so their base64 encoding covers *char_length* characters."""
    return math.ceil(char_length * 3 / 4)


async def base64_chunk(random_source: RandomSource, length: int) -> str:
    """One draw of random base64 text, trimmed to *length* characters."""
    encoded = await random_source.random_base64(required_byte_length(length))
    return encoded.rstrip("=")[:length]


class Base64Strategy(PasswordStrategy):
    """``length`` base64 characters per chunk, one byte draw per chunk."""

    password_type = PasswordType.BASE64

    async def generate_unit(
        self,
        config: PasswordConfig,
        random_source: RandomSource,
        dictionary: Optional[Dictionary] = None,
    ) -> str:
        return await base64_chunk(random_source, config.length)
