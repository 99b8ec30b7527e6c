"""
Generation Strategy Base
=========================

Every password scheme is a stateless :class:`PasswordStrategy` that builds
``config.iteration`` units, one after another, and joins them with
``config.separator``. Units are produced sequentially and every draw is
awaited in order: the order of draws is part of the determinism contract
shared by all front ends.
"""

from __future__ import annotations

import abc
from typing import ClassVar, Optional

from keysmith.core.models import PasswordConfig, PasswordType
from keysmith.core.ports import Dictionary, RandomSource


class PasswordStrategy(abc.ABC):
    """One generation scheme, keyed by :attr:`password_type`."""

    password_type: ClassVar[PasswordType]

    @abc.abstractmethod
    async def generate_unit(
        self,
        config: PasswordConfig,
        random_source: RandomSource,
        dictionary: Optional[Dictionary] = None,
    ) -> str:
        """Produce one unit (chunk, word or syllable)."""

    async def generate(
        self,
        config: PasswordConfig,
        random_source: RandomSource,
        dictionary: Optional[Dictionary] = None,
    ) -> str:
        units: list[str] = []
        for _ in range(config.iteration):
            units.append(await self.generate_unit(config, random_source, dictionary))
        return config.separator.join(units)
