"""
Keysmith Generators
====================

One stateless strategy per password type. :data:`STRATEGIES` is the
registry the engine dispatches through; it covers every
:class:`~keysmith.core.models.PasswordType` member.
"""

from keysmith.core.models import PasswordType
from keysmith.generators.base import PasswordStrategy
from keysmith.generators.base64_chunks import Base64Strategy
from keysmith.generators.memorable import MemorableStrategy
from keysmith.generators.pronounceable import PronounceableStrategy
from keysmith.generators.quantum import QuantumResistantStrategy
from keysmith.generators.strong import StrongStrategy

STRATEGIES: dict[PasswordType, PasswordStrategy] = {
    strategy.password_type: strategy
    for strategy in (
        StrongStrategy(),
        Base64Strategy(),
        MemorableStrategy(),
        QuantumResistantStrategy(),
        PronounceableStrategy(),
    )
}

__all__ = [
    "STRATEGIES",
    "PasswordStrategy",
    "StrongStrategy",
    "Base64Strategy",
    "MemorableStrategy",
    "QuantumResistantStrategy",
    "PronounceableStrategy",
]
