"""
Keysmith Adapters
==================

Concrete implementations of the :mod:`keysmith.core.ports` contracts.
"""

from keysmith.adapters.deterministic import DeterministicRandomSource
from keysmith.adapters.system_random import SystemRandomSource
from keysmith.adapters.wordlist_file import WordListFileDictionary

__all__ = [
    "DeterministicRandomSource",
    "SystemRandomSource",
    "WordListFileDictionary",
]
