"""
Word list file adapter.

Reads either a plain list (one word per line) or an EFF-style diceware
list where each line is ``<dice digits><whitespace><word>``. Blank lines
and lines starting with ``#`` are skipped. The file is read on first use.

References:
    - EFF Dice-Generated Passphrases (2016).
      https://www.eff.org/dice
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Optional

from keysmith.core.ports import Dictionary

_DICEWARE_LINE = re.compile(r"^[1-6]+\s+(\S+)\s*$")


def parse_word_list(text: str) -> list[str]:
    """Extract the words from the contents of a word list file."""
    words: list[str] = []
    for raw in text.splitlines():
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        match = _DICEWARE_LINE.match(line)
        words.append(match.group(1) if match else line.split()[0])
    return words


class WordListFileDictionary(Dictionary):
    """:class:`Dictionary` backed by a word list on disk.

    Args:
        path:     Path to the list.
        encoding: Text encoding of the file.

    Raises:
        FileNotFoundError: On first access if *path* does not exist.
        ValueError: On first access if the file holds no words.
    """

    def __init__(self, path: str | Path, encoding: str = "utf-8") -> None:
        self.path = Path(path)
        self.encoding = encoding
        self._words: Optional[tuple[str, ...]] = None

    @property
    def words(self) -> tuple[str, ...]:
        if self._words is None:
            words = parse_word_list(self.path.read_text(encoding=self.encoding))
            if not words:
                raise ValueError(f"Word list {self.path} contains no words")
            self._words = tuple(words)
        return self._words

    def word(self, index: int) -> str:
        words = self.words
        if isinstance(index, bool) or not isinstance(index, int):
            raise IndexError(f"word index must be an integer, got {index!r}")
        if not 0 <= index < len(words):
            raise IndexError(f"word index {index} out of range [0, {len(words)})")
        return words[index]

    def size(self) -> int:
        return len(self.words)
