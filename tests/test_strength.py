import math

import pytest

from keysmith.analyzers import PasswordStrengthAnalyzer
from keysmith.core.models import PasswordStrength


@pytest.fixture
def analyzer():
    return PasswordStrengthAnalyzer()


def _kinds(analysis):
    return [p.pattern for p in analysis.patterns]


def test_empty_password(analyzer):
    analysis = analyzer.analyze("")
    assert analysis.score == 0
    assert analysis.entropy == 0.0
    assert analysis.composition is None
    assert analysis.feedback.warning == "Password is required"


def test_common_password_is_always_very_weak(analyzer):
    analysis = analyzer.analyze("Password")
    assert analysis.is_common_password
    assert analysis.score == 0
    assert analysis.strength is PasswordStrength.VERY_WEAK
    assert analysis.entropy == 1.0
    assert analysis.feedback.warning == "This is a very common password"
    assert "Avoid common passwords" in analysis.feedback.suggestions


def test_random_password_keeps_full_entropy(analyzer):
    analysis = analyzer.analyze("Xk9#mQ2$vL7!pR4&")

    assert analysis.composition.charset_size == 94
    assert analysis.base_entropy == pytest.approx(16 * math.log2(94), abs=0.01)
    assert analysis.entropy == analysis.base_entropy
    assert analysis.patterns == []
    assert analysis.dictionaries == []
    assert analysis.score == 4
    assert analysis.strength is PasswordStrength.STRONG
    assert analysis.feedback.suggestions == []
    assert analysis.feedback.recommendations == []


def test_sequences_and_keyboard_rows(analyzer):
    analysis = analyzer.analyze("qwerty123")

    assert _kinds(analysis) == ["sequence", "keyboard_row"]
    assert analysis.patterns[0].matches == ["123"]
    assert analysis.patterns[1].matches == ["qwer"]
    assert analysis.score == 2
    assert analysis.strength is PasswordStrength.FAIR
    assert analysis.entropy == pytest.approx(9 * math.log2(36) * 0.95, abs=0.01)
    assert "Avoid sequences (e.g., abc, 123)" in analysis.feedback.suggestions
    assert "Avoid keyboard patterns (e.g., qwerty, asdf)" in analysis.feedback.suggestions
    assert "Avoid predictable patterns" in analysis.feedback.recommendations


def test_dictionary_words_cost_two_steps(analyzer):
    analysis = analyzer.analyze("time-love-work")

    assert [d.word for d in analysis.dictionaries] == ["time", "love", "work"]
    assert {d.dictionary for d in analysis.dictionaries} == {"english_words"}
    assert analysis.composition.entropy >= 80
    assert analysis.score == 2
    assert analysis.entropy == pytest.approx(analysis.composition.entropy * 0.7, abs=0.01)
    assert "Avoid dictionary words" in analysis.feedback.suggestions


def test_reversed_word(analyzer):
    analysis = analyzer.analyze("evol!X9z")
    assert [(d.dictionary, d.word) for d in analysis.dictionaries] == [
        ("reversed_words", "evol")
    ]
    assert analysis.score == 0


def test_leet_substitutions_are_undone(analyzer):
    analysis = analyzer.analyze("passw0rd")

    assert not analysis.is_common_password
    assert _kinds(analysis) == ["leet_speak"]
    assert analysis.patterns[0].matches == ["password"]
    assert (
        "Predictable substitutions like @ for a are easy to guess"
        in analysis.feedback.suggestions
    )


def test_repetition_and_alternation(analyzer):
    analysis = analyzer.analyze("aaaaaa")
    assert _kinds(analysis) == ["repetition", "alternating"]
    assert analysis.score == 1
    assert analysis.strength is PasswordStrength.WEAK
    assert "Use a passphrase with multiple random words" in analysis.feedback.recommendations


def test_password_is_masked(analyzer):
    assert analyzer.analyze("secret").password_masked == "s****t"
    assert analyzer.analyze("ab").password_masked == "**"


def test_strength_labels():
    assert PasswordStrength.from_score(0).label == "Very Weak"
    assert PasswordStrength.from_score(4) is PasswordStrength.STRONG
