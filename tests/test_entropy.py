import math

import pytest

from keysmith.core.errors import UnknownPasswordTypeError
from keysmith.core.models import SECURITY_THRESHOLDS, PasswordConfig, SecurityLevel
from keysmith.core.ports import MemoryDictionary
from keysmith.domain.entropy import EntropyCalculator, quantum_security


@pytest.fixture
def calculator():
    return EntropyCalculator()


def test_strong_sixteen_by_four_is_384_bits(calculator):
    info = calculator.calculate(PasswordConfig(type="strong", length=16, iteration=4))
    assert info.total_bits == 384.0
    assert info.per_unit == 96.0
    assert info.security_level is SecurityLevel.EXCELLENT
    assert info.recommendation == SecurityLevel.EXCELLENT.recommendation


def test_base64_uses_six_bits_per_character(calculator):
    info = calculator.calculate(PasswordConfig(type="base64", length=43, iteration=1))
    assert info.total_bits == 258.0


def test_quantum_resistant_is_fixed_at_258_bits(calculator):
    for iteration in (1, 3, 50):
        config = PasswordConfig(type="quantum-resistant", length=8, iteration=iteration)
        info = calculator.calculate(config)
        assert info.total_bits == 258.0
        assert info.security_level is SecurityLevel.EXCELLENT


def test_memorable_uses_dictionary_size():
    calculator = EntropyCalculator(MemoryDictionary(["a", "b", "c", "d"]))
    info = calculator.calculate(PasswordConfig(type="memorable", iteration=5))
    assert info.per_unit == 2.0
    assert info.total_bits == 10.0


def test_bundled_word_list_gives_eight_bits_per_word(calculator):
    info = calculator.calculate(PasswordConfig(type="memorable", iteration=4))
    assert info.per_unit == 8.0
    assert info.total_bits == 32.0
    assert info.security_level is SecurityLevel.WEAK


def test_pronounceable_syllable_entropy(calculator):
    expected = 2 * math.log2(21) + 2 * math.log2(5)
    info = calculator.calculate(PasswordConfig(type="pronounceable", iteration=3))
    assert info.per_unit == round(expected, 2)
    assert info.total_bits == round(3 * expected, 2)


def test_entropy_increases_with_length_and_iteration(calculator):
    previous = 0.0
    for length in range(1, 40):
        bits = calculator.calculate(PasswordConfig(type="strong", length=length)).total_bits
        assert bits > previous
        previous = bits

    previous = 0.0
    for iteration in range(1, 20):
        bits = calculator.calculate(
            PasswordConfig(type="pronounceable", iteration=iteration)
        ).total_bits
        assert bits > previous
        previous = bits


@pytest.mark.parametrize(
    "bits,level",
    [
        (0.0, SecurityLevel.WEAK),
        (63.99, SecurityLevel.WEAK),
        (64.0, SecurityLevel.MODERATE),
        (80.0, SecurityLevel.GOOD),
        (127.99, SecurityLevel.GOOD),
        (128.0, SecurityLevel.STRONG),
        (256.0, SecurityLevel.EXCELLENT),
    ],
)
def test_security_level_boundaries(bits, level):
    assert SecurityLevel.from_bits(bits) is level


def test_threshold_table_is_ordered_from_the_top():
    bounds = [bound for bound, _ in SECURITY_THRESHOLDS]
    assert bounds == sorted(bounds, reverse=True)


def test_unknown_type_raises(calculator):
    with pytest.raises(UnknownPasswordTypeError) as exc_info:
        calculator.calculate(PasswordConfig(type="nope"))
    assert "type" in str(exc_info.value)


def test_quantum_security_check():
    short = quantum_security(PasswordConfig(type="base64", length=20, iteration=2))
    assert not short.is_quantum_safe
    assert short.entropy_bits == 240.0
    assert short.recommended_min_length == 43

    enough = quantum_security(PasswordConfig(type="base64", length=43, iteration=1))
    assert enough.is_quantum_safe
    assert enough.target_bits == 256.0
