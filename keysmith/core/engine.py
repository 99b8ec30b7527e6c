"""
Keysmith Generation Engine
===========================

Dispatches a validated :class:`PasswordConfig` to the strategy registered
for its :class:`PasswordType`. The engine holds no mutable state: the
registry is fixed at construction and every draw goes through the
:class:`RandomSource` passed in with the call, so concurrent calls with
independent sources need no locking.

Adding a scheme means one new strategy class and one registry entry; no
other component changes.

References:
    - Gamma, E., Helm, R., Johnson, R., & Vlissides, J. (1994).
      Design Patterns: Elements of Reusable Object-Oriented Software.
      Addison-Wesley. (Strategy pattern)
"""

from __future__ import annotations

from typing import Mapping, Optional

from shared.logger import KeysmithLogger

from keysmith.core.errors import UnknownPasswordTypeError
from keysmith.core.models import PasswordConfig, PasswordType
from keysmith.core.ports import Dictionary, RandomSource
from keysmith.generators import STRATEGIES, PasswordStrategy


class GenerationEngine:
    """Strategy registry for the five password schemes.

    Usage::

        engine = GenerationEngine()
        password = await engine.generate(config, SystemRandomSource(), dictionary)

    Attributes:
        logger: Logger for the engine; never receives generated secrets.
    """

    def __init__(
        self,
        strategies: Optional[Mapping[PasswordType, PasswordStrategy]] = None,
        logger: Optional[KeysmithLogger] = None,
    ) -> None:
        self._strategies: dict[PasswordType, PasswordStrategy] = dict(
            strategies if strategies is not None else STRATEGIES
        )
        self.logger = logger or KeysmithLogger("engine")

    @property
    def supported_types(self) -> list[PasswordType]:
        """Registered types in :class:`PasswordType` declaration order."""
        return [t for t in PasswordType if t in self._strategies]

    def strategy_for(self, config: PasswordConfig) -> PasswordStrategy:
        """Return the strategy for ``config.type``.

        Raises:
            UnknownPasswordTypeError: If no strategy handles the type.
        """
        password_type = config.password_type
        if password_type is None or password_type not in self._strategies:
            raise UnknownPasswordTypeError(
                config.type, [t.value for t in self.supported_types]
            )
        return self._strategies[password_type]

    async def generate(
        self,
        config: PasswordConfig,
        random_source: RandomSource,
        dictionary: Optional[Dictionary] = None,
    ) -> str:
        """Generate one password for an already validated *config*.

        Raises:
            UnknownPasswordTypeError: If ``config.type`` is not registered.
            MissingDictionaryError: For memorable without a dictionary.
        """
        strategy = self.strategy_for(config)
        self.logger.debug(
            "Dispatching generation",
            password_type=config.type,
            iteration=config.iteration,
        )
        return await strategy.generate(config, random_source, dictionary)
