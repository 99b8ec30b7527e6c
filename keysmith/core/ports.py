"""
Keysmith Ports
===============

Abstract capabilities the core consumes but never constructs:

- :class:`RandomSource` -- the only place randomness may come from.
  Every generation strategy draws exclusively through it, which is what
  lets a deterministic double stand in for the OS CSPRNG and guarantees
  that every front end produces identical passwords from identical draws.
- :class:`Dictionary` -- an indexed word list for passphrase schemes.

Concrete adapters (OS CSPRNG, seeded test generator, word-list files)
live in :mod:`keysmith.adapters`. :class:`MemoryDictionary` over the
bundled word list is the reference dictionary.
"""

from __future__ import annotations

import abc
import base64
from typing import Any, Sequence

from keysmith.core.wordlist import DEFAULT_WORD_LIST


def require_positive_int(value: Any, name: str) -> None:
    """Raise :class:`ValueError` unless *value* is an ``int`` >= 1.

    ``bool`` is rejected even though it subclasses ``int``.
    """
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ValueError(f"{name} must be a positive integer, got {value!r}")


# ===================================================================== #
#  RandomSource
# ===================================================================== #


class RandomSource(abc.ABC):
    """Asynchronous source of randomness.

    Implementations provide :meth:`random_int` and :meth:`random_bytes`;
    :meth:`random_base64` and :meth:`random_string` are derived from them
    but may be overridden (e.g. to count calls).

    All methods are coroutines so that adapters backed by asynchronous
    platform APIs fit the same contract.
    """

    @abc.abstractmethod
    async def random_int(self, max_value: int) -> int:
        """Return an integer uniformly drawn from ``[0, max_value)``.

        Raises:
            ValueError: If *max_value* is not a positive integer.
        """

    @abc.abstractmethod
    async def random_bytes(self, length: int) -> bytes:
        """Return *length* random bytes.

        Raises:
            ValueError: If *length* is not a positive integer.
        """

    async def random_base64(self, byte_length: int) -> str:
        """Return standard (padded) base64 of *byte_length* random bytes."""
        require_positive_int(byte_length, "byte_length")
        data = await self.random_bytes(byte_length)
        return base64.b64encode(data).decode("ascii")

    async def random_string(self, length: int, charset: str) -> str:
        """Return *length* characters drawn uniformly from *charset*.

        Raises:
            ValueError: If *length* is not a positive integer or *charset*
                is empty.
        """
        require_positive_int(length, "length")
        if not charset:
            raise ValueError("charset must not be empty")
        chars = []
        for _ in range(length):
            chars.append(charset[await self.random_int(len(charset))])
        return "".join(chars)


# ===================================================================== #
#  Dictionary
# ===================================================================== #


class Dictionary(abc.ABC):
    """Indexed word list consumed by passphrase schemes."""

    @abc.abstractmethod
    def word(self, index: int) -> str:
        """Return the word at *index*.

        Raises:
            IndexError: If *index* is outside ``[0, size())``.
        """

    @abc.abstractmethod
    def size(self) -> int:
        """Number of words available."""


class MemoryDictionary(Dictionary):
    """Dictionary backed by an in-memory sequence of words.

    Args:
        words: Word sequence; defaults to :data:`DEFAULT_WORD_LIST`.

    Raises:
        ValueError: If *words* is empty.
    """

    def __init__(self, words: Sequence[str] = DEFAULT_WORD_LIST) -> None:
        if not words:
            raise ValueError("Dictionary word list must not be empty")
        self._words: tuple[str, ...] = tuple(words)

    def word(self, index: int) -> str:
        if isinstance(index, bool) or not isinstance(index, int):
            raise IndexError(f"word index must be an integer, got {index!r}")
        if not 0 <= index < len(self._words):
            raise IndexError(
                f"word index {index} out of range [0, {len(self._words)})"
            )
        return self._words[index]

    def size(self) -> int:
        return len(self._words)

    def __len__(self) -> int:
        return len(self._words)


# ===================================================================== #
#  Port validation
# ===================================================================== #


RANDOM_SOURCE_REQUIRED_METHODS: tuple[str, ...] = (
    "random_int",
    "random_bytes",
    "random_base64",
)
DICTIONARY_REQUIRED_METHODS: tuple[str, ...] = ("word", "size")


def missing_methods(port: Any, required: Sequence[str]) -> list[str]:
    """Names in *required* that *port* does not expose as callables."""
    return [name for name in required if not callable(getattr(port, name, None))]
