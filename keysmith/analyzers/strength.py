"""
Password Strength Analyzer
===========================

Scores an existing, user-supplied password from 0 (very weak) to 4
(strong). Nothing here draws randomness; the analyzer only inspects the
string it is given.

The assessment combines three views of the password:

1. Composition: which character classes appear, giving a naive entropy
   of ``length * log2(charset)``.
2. Weakness patterns: alphabetic and numeric sequences, keyboard rows and
   columns, repetition, alternation and l33t substitutions.
3. Dictionary hits: common passwords, English words and reversed words.

A common password always scores 0 with an effective entropy of 1 bit.
Otherwise every dictionary hit costs two score steps, every two points of
pattern penalty cost one, and the entropy is reduced by at most 80%.

References:
    - NIST SP 800-63B (2017), Section 5.1.1.2 -- Memorized Secret Verifiers.
    - Wheeler, D. L. (2016). zxcvbn: Low-Budget Password Strength
      Estimation. USENIX Security.
"""

from __future__ import annotations

import math
import re
import string

from keysmith.core.models import (
    DictionaryMatch,
    PasswordComposition,
    PasswordStrength,
    StrengthAnalysis,
    StrengthFeedback,
    WeaknessPattern,
)


# ===================================================================== #
#  Pattern and Word Databases
# ===================================================================== #

# (name, regex, multiplier, description)
_WEAKNESS_PATTERNS: list[tuple[str, re.Pattern[str], float, str]] = [
    (
        "sequence",
        re.compile(
            r"abc|bcd|cde|def|efg|fgh|ghi|hij|ijk|jkl|klm|lmn|mno|nop|opq|pqr"
            r"|qrs|rst|stu|tuv|uvw|vwx|wxy|xyz|012|123|234|345|456|567|678|789",
            re.IGNORECASE,
        ),
        0.9,
        "Contains alphabetic or numeric sequences",
    ),
    (
        "reverse_sequence",
        re.compile(
            r"zyx|yxw|xwv|wvu|vut|uts|tsr|srq|rqp|qpo|pon|onm|nml|mlk|lkj|kji"
            r"|jih|ihg|hgf|gfe|fed|edc|dcb|cba|987|876|765|654|543|432|321|210",
            re.IGNORECASE,
        ),
        0.9,
        "Contains reverse sequences",
    ),
    (
        "keyboard_row",
        re.compile(
            r"qwer|wert|erty|rtyu|tyui|yuio|uiop|asdf|sdfg|dfgh|fghj|ghjk|hjkl"
            r"|zxcv|xcvb|cvbn|vbnm",
            re.IGNORECASE,
        ),
        0.85,
        "Contains keyboard row patterns",
    ),
    (
        "keyboard_column",
        re.compile(r"qaz|wsx|edc|rfv|tgb|yhn|ujm", re.IGNORECASE),
        0.85,
        "Contains keyboard column patterns",
    ),
    ("repetition", re.compile(r"(.)\1{2,}"), 0.8, "Contains character repetition"),
    ("alternating", re.compile(r"(.)(.)(?:\1\2){2,}"), 0.7, "Contains alternating patterns"),
]

_LEET_MULTIPLIER = 0.5

_LEET_MAP: dict[str, str] = {
    "4": "a", "@": "a", "3": "e", "1": "i", "!": "i",
    "0": "o", "5": "s", "$": "s", "7": "t",
}

_COMMON_PASSWORDS: frozenset[str] = frozenset({
    "password", "password1", "password123", "123456", "123456789",
    "qwerty", "abc123", "welcome", "admin", "letmein", "monkey", "dragon",
    "master", "hello", "freedom", "whatever", "qazwsx", "trustno1",
    "jordan", "iloveyou", "princess", "starwars", "shadow", "superman",
    "sunshine", "michael", "computer", "football", "pepper", "mustang",
    "charlie",
})

_COMMON_WORDS: frozenset[str] = frozenset({
    "the", "and", "for", "are", "but", "not", "you", "all", "can", "had",
    "her", "was", "one", "our", "out", "day", "get", "has", "him", "his",
    "how", "man", "new", "now", "old", "see", "two", "way", "who", "boy",
    "did", "its", "let", "put", "say", "she", "too", "use", "love", "time",
    "very", "when", "come", "here", "just", "like", "long", "make", "many",
    "over", "such", "take", "than", "them", "well", "were", "what", "year",
    "your", "work", "life", "only", "think", "first", "after", "back",
    "other", "good", "want", "give",
})

_DICTIONARY_MULTIPLIERS: dict[str, float] = {
    "common_passwords": 1.0,
    "english_words": 0.7,
    "reversed_words": 0.8,
}

# Composition entropy needed for scores 1, 2, 3 and 4.
ENTROPY_THRESHOLDS: tuple[float, ...] = (20.0, 40.0, 60.0, 80.0)

MAX_ENTROPY_REDUCTION = 0.8
COMMON_PASSWORD_ENTROPY = 1.0


class PasswordStrengthAnalyzer:
    """Assesses how guessable an existing password is.

    Usage::

        analysis = PasswordStrengthAnalyzer().analyze("Tr0ub4dor&3")
        analysis.strength.label, analysis.entropy
    """

    def analyze(self, password: str) -> StrengthAnalysis:
        if not password:
            return StrengthAnalysis(
                score=0,
                strength=PasswordStrength.VERY_WEAK,
                entropy=0.0,
                feedback=StrengthFeedback(
                    warning="Password is required",
                    suggestions=["Enter a password"],
                ),
            )

        composition = self.composition(password)
        patterns = self.detect_patterns(password)
        dictionaries = self.check_dictionaries(password)

        score = self._score(composition, patterns, dictionaries)
        effective = self._effective_entropy(composition, patterns, dictionaries)

        return StrengthAnalysis(
            password_masked=_mask(password),
            score=score,
            strength=PasswordStrength.from_score(score),
            entropy=round(effective, 2),
            base_entropy=round(composition.entropy, 2),
            composition=composition,
            patterns=patterns,
            dictionaries=dictionaries,
            feedback=self._feedback(score, composition, patterns, dictionaries),
        )

    # ------------------------------------------------------------------ #
    #  Composition
    # ------------------------------------------------------------------ #

    @staticmethod
    def composition(password: str) -> PasswordComposition:
        has_lower = any(c in string.ascii_lowercase for c in password)
        has_upper = any(c in string.ascii_uppercase for c in password)
        has_digit = any(c in string.digits for c in password)
        has_symbol = re.search(r"[^a-zA-Z0-9]", password) is not None

        charset = (
            26 * has_lower + 26 * has_upper + 10 * has_digit + 32 * has_symbol
        )
        return PasswordComposition(
            length=len(password),
            has_lowercase=has_lower,
            has_uppercase=has_upper,
            has_numbers=has_digit,
            has_symbols=has_symbol,
            unique_chars=len(set(password)),
            charset_size=charset,
            entropy=len(password) * math.log2(charset) if charset else 0.0,
        )

    # ------------------------------------------------------------------ #
    #  Pattern Detection
    # ------------------------------------------------------------------ #

    @staticmethod
    def detect_patterns(password: str) -> list[WeaknessPattern]:
        """Every weakness pattern present, each with all of its matches."""
        found: list[WeaknessPattern] = []
        for name, regex, multiplier, description in _WEAKNESS_PATTERNS:
            matches = [m.group(0) for m in regex.finditer(password)]
            if matches:
                found.append(WeaknessPattern(
                    pattern=name,
                    matches=matches,
                    multiplier=multiplier,
                    description=description,
                ))

        leet = _leet_words(password)
        if leet:
            found.append(WeaknessPattern(
                pattern="leet_speak",
                matches=leet,
                multiplier=_LEET_MULTIPLIER,
                description="Uses common character substitutions",
            ))
        return found

    @staticmethod
    def check_dictionaries(password: str) -> list[DictionaryMatch]:
        """Common-password, word and reversed-word hits.

        Words are the runs of ASCII letters in the lower-cased password;
        only words longer than three letters count.
        """
        lowered = password.lower()
        hits: list[DictionaryMatch] = []

        if lowered in _COMMON_PASSWORDS:
            hits.append(DictionaryMatch(
                dictionary="common_passwords",
                word=password,
                multiplier=_DICTIONARY_MULTIPLIERS["common_passwords"],
                description="Found in common passwords list",
            ))

        words = [w for w in re.split(r"[^a-z]", lowered) if len(w) > 3]
        for word in words:
            if word in _COMMON_WORDS:
                hits.append(DictionaryMatch(
                    dictionary="english_words",
                    word=word,
                    multiplier=_DICTIONARY_MULTIPLIERS["english_words"],
                    description=f"Contains dictionary word: {word}",
                ))
        for word in words:
            reversed_word = word[::-1]
            if reversed_word in _COMMON_WORDS:
                hits.append(DictionaryMatch(
                    dictionary="reversed_words",
                    word=word,
                    multiplier=_DICTIONARY_MULTIPLIERS["reversed_words"],
                    description=f"Contains reversed dictionary word: {reversed_word}",
                ))
        return hits

    # ------------------------------------------------------------------ #
    #  Scoring
    # ------------------------------------------------------------------ #

    @staticmethod
    def _pattern_penalty(patterns: list[WeaknessPattern]) -> float:
        return sum(1 - p.multiplier for p in patterns)

    def _score(
        self,
        composition: PasswordComposition,
        patterns: list[WeaknessPattern],
        dictionaries: list[DictionaryMatch],
    ) -> int:
        if any(d.dictionary == "common_passwords" for d in dictionaries):
            return 0

        score = sum(1 for t in ENTROPY_THRESHOLDS if composition.entropy >= t)
        if dictionaries:
            score = max(0, score - 2)
        score -= math.floor(self._pattern_penalty(patterns) / 2)
        return max(0, min(4, score))

    def _effective_entropy(
        self,
        composition: PasswordComposition,
        patterns: list[WeaknessPattern],
        dictionaries: list[DictionaryMatch],
    ) -> float:
        if any(d.dictionary == "common_passwords" for d in dictionaries):
            return COMMON_PASSWORD_ENTROPY
        reduction = min(
            MAX_ENTROPY_REDUCTION,
            self._pattern_penalty(patterns) * 0.2 + len(dictionaries) * 0.1,
        )
        return composition.entropy * (1 - reduction)

    # ------------------------------------------------------------------ #
    #  Feedback
    # ------------------------------------------------------------------ #

    @staticmethod
    def _feedback(
        score: int,
        composition: PasswordComposition,
        patterns: list[WeaknessPattern],
        dictionaries: list[DictionaryMatch],
    ) -> StrengthFeedback:
        suggestions: list[str] = []
        recommendations: list[str] = []
        warning = None
        kinds = {p.pattern for p in patterns}

        if composition.length < 8:
            suggestions.append("Use at least 8 characters")
        elif composition.length < 12:
            suggestions.append("Consider using 12 or more characters for better security")

        if not composition.has_lowercase:
            suggestions.append("Add lowercase letters")
        if not composition.has_uppercase:
            suggestions.append("Add uppercase letters")
        if not composition.has_numbers:
            suggestions.append("Add numbers")
        if not composition.has_symbols:
            suggestions.append("Add symbols")

        if kinds & {"sequence", "reverse_sequence"}:
            suggestions.append("Avoid sequences (e.g., abc, 123)")
        if kinds & {"keyboard_row", "keyboard_column"}:
            suggestions.append("Avoid keyboard patterns (e.g., qwerty, asdf)")
        if "repetition" in kinds:
            suggestions.append("Avoid repeated characters (e.g., aaa, 111)")
        if "leet_speak" in kinds:
            suggestions.append("Predictable substitutions like @ for a are easy to guess")

        if any(d.dictionary == "common_passwords" for d in dictionaries):
            warning = "This is a very common password"
            suggestions.append("Avoid common passwords")
        if any(d.dictionary == "english_words" for d in dictionaries):
            suggestions.append("Avoid dictionary words")

        if score <= 1:
            recommendations.append("Consider using a password manager")
            recommendations.append("Use a passphrase with multiple random words")
        elif score == 2:
            recommendations.append("Consider adding more complexity")
            recommendations.append("Avoid predictable patterns")

        return StrengthFeedback(
            warning=warning,
            suggestions=suggestions,
            recommendations=recommendations,
        )


def _leet_words(password: str) -> list[str]:
    """Words that only appear once l33t substitutions are undone."""
    lowered = password.lower()
    decoded = "".join(_LEET_MAP.get(c, c) for c in lowered)
    if decoded == lowered:
        return []
    return sorted(
        word for word in _COMMON_WORDS | _COMMON_PASSWORDS
        if len(word) >= 4 and word in decoded and word not in lowered
    )


def _mask(password: str) -> str:
    if len(password) <= 2:
        return "*" * len(password)
    return password[0] + "*" * (len(password) - 2) + password[-1]
