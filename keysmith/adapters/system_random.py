"""
Operating-system CSPRNG adapter.

:class:`SystemRandomSource` is the production :class:`RandomSource`.
``secrets.randbelow`` already rejects biased draws, so ``random_int``
is uniform over ``[0, max_value)`` for any bound.
"""

from __future__ import annotations

import secrets

from keysmith.core.ports import RandomSource, require_positive_int


class SystemRandomSource(RandomSource):
    """Randomness from :mod:`secrets` (``os.urandom`` underneath)."""

    async def random_int(self, max_value: int) -> int:
        require_positive_int(max_value, "max_value")
        return secrets.randbelow(max_value)

    async def random_bytes(self, length: int) -> bytes:
        require_positive_int(length, "length")
        return secrets.token_bytes(length)
