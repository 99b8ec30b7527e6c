import pytest

from keysmith.adapters import DeterministicRandomSource
from keysmith.core.errors import MissingDictionaryError
from keysmith.core.models import PassphraseTransforms, PasswordConfig
from keysmith.core.ports import MemoryDictionary
from keysmith.core.wordlist import DEFAULT_WORD_LIST
from keysmith.domain.charsets import BASE64_ALPHABET, STRONG_ALPHABET
from keysmith.generators import (
    STRATEGIES,
    Base64Strategy,
    MemorableStrategy,
    PronounceableStrategy,
    QuantumResistantStrategy,
    StrongStrategy,
)
from keysmith.generators.base64_chunks import required_byte_length
from keysmith.generators.memorable import apply_transforms


def test_registry_covers_every_type():
    assert [t.value for t in STRATEGIES] == [
        "strong",
        "base64",
        "memorable",
        "quantum-resistant",
        "pronounceable",
    ]


@pytest.mark.asyncio
async def test_strong_maps_draws_onto_the_alphabet(incrementing_source):
    config = PasswordConfig(type="strong", length=4, iteration=2, separator="-")
    password = await StrongStrategy().generate(config, incrementing_source)
    assert password == "ABCD-EFGH"
    assert incrementing_source.call_counts["random_int"] == 8


@pytest.mark.asyncio
async def test_strong_reaches_both_symbols():
    source = DeterministicRandomSource.with_sequence([62, 63])
    config = PasswordConfig(type="strong", length=2, iteration=1)
    assert await StrongStrategy().generate(config, source) == "+/"


@pytest.mark.asyncio
async def test_base64_chunks_come_from_one_byte_draw_each(incrementing_source):
    config = PasswordConfig(type="base64", length=4, iteration=2, separator="-")
    password = await Base64Strategy().generate(config, incrementing_source)
    # bytes 00 01 02 -> "AAEC", bytes 03 04 05 -> "AwQF"
    assert password == "AAEC-AwQF"
    assert incrementing_source.call_counts["random_base64"] == 2
    assert incrementing_source.call_counts["random_int"] == 0


@pytest.mark.asyncio
async def test_base64_strips_padding_and_truncates():
    source = DeterministicRandomSource.with_sequence([0])
    config = PasswordConfig(type="base64", length=10, iteration=2, separator="")
    password = await Base64Strategy().generate(config, source)
    assert password == "A" * 20
    assert "=" not in password


@pytest.mark.parametrize("length", [1, 2, 3, 4, 5, 10, 43, 1024])
def test_byte_length_always_covers_requested_characters(length):
    encoded_chars = 4 * required_byte_length(length) / 3
    assert encoded_chars >= length


@pytest.mark.asyncio
async def test_memorable_picks_words_by_index(dictionary):
    source = DeterministicRandomSource.with_sequence([0, 1, 255])
    config = PasswordConfig(type="memorable", iteration=3, separator=" ")
    password = await MemorableStrategy().generate(config, source, dictionary)
    assert password == " ".join(
        [DEFAULT_WORD_LIST[0], DEFAULT_WORD_LIST[1], DEFAULT_WORD_LIST[255]]
    )


@pytest.mark.asyncio
async def test_memorable_requires_a_dictionary(seeded_source):
    config = PasswordConfig(type="memorable", iteration=2)
    with pytest.raises(MissingDictionaryError):
        await MemorableStrategy().generate(config, seeded_source, None)
    assert sum(seeded_source.call_counts.values()) == 0


@pytest.mark.asyncio
async def test_memorable_single_word_dictionary_consumes_no_values():
    source = DeterministicRandomSource.with_sequence([9])
    config = PasswordConfig(type="memorable", iteration=3, separator="-")
    password = await MemorableStrategy().generate(
        config, source, MemoryDictionary(["only"])
    )
    assert password == "only-only-only"


@pytest.mark.asyncio
async def test_pronounceable_draw_order_is_cvvc(incrementing_source):
    config = PasswordConfig(type="pronounceable", iteration=2, separator=".")
    password = await PronounceableStrategy().generate(config, incrementing_source)
    # consonant 0, vowel 1, vowel 2, consonant 3 / consonant 4, vowel 0, vowel 1, consonant 7
    assert password == "beif.gaek"
    assert incrementing_source.call_counts["random_int"] == 8


@pytest.mark.asyncio
async def test_quantum_is_a_single_43_character_key():
    source = DeterministicRandomSource.with_sequence([0])
    config = PasswordConfig(type="quantum-resistant").normalized()
    password = await QuantumResistantStrategy().generate(config, source)
    assert password == "A" * 43
    assert source.call_counts["random_base64"] == 1
    assert source.call_counts["random_int"] == 0


@pytest.mark.asyncio
async def test_quantum_ignores_separator_and_iteration(seeded_source):
    config = PasswordConfig(type="quantum-resistant", iteration=5, separator="-")
    password = await QuantumResistantStrategy().generate(config, seeded_source)
    assert len(password) == 43
    assert set(password) <= set(BASE64_ALPHABET)


@pytest.mark.asyncio
async def test_newline_separator_appears_between_units_only(seeded_source):
    config = PasswordConfig(type="strong", length=8, iteration=2, separator="\n")
    password = await StrongStrategy().generate(config, seeded_source)
    assert password.count("\n") == 1
    first, second = password.split("\n")
    assert len(first) == len(second) == 8
    assert set(first + second) <= set(STRONG_ALPHABET)


@pytest.mark.asyncio
async def test_memorable_unit_requires_a_dictionary(seeded_source):
    config = PasswordConfig(type="memorable", iteration=1)
    with pytest.raises(MissingDictionaryError):
        await MemorableStrategy().generate_unit(config, seeded_source, None)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "transforms, expected",
    [
        (PassphraseTransforms(), "able-acid"),
        (PassphraseTransforms(capitalize=True), "Able-Acid"),
        (PassphraseTransforms(uppercase=True), "ABLE-ACID"),
        (PassphraseTransforms(capitalize=True, append_number=True), "Able-Acid42"),
    ],
)
async def test_passphrase_transforms(dictionary, transforms, expected):
    source = DeterministicRandomSource.with_sequence([0, 1, 42])
    config = PasswordConfig(type="memorable", iteration=2, separator="-")
    words = await MemorableStrategy().generate(config, source, dictionary)
    assert await apply_transforms(words, "-", transforms, source) == expected


@pytest.mark.asyncio
async def test_appended_number_is_drawn_after_the_words(dictionary):
    source = DeterministicRandomSource.with_sequence([0, 1, 1999])
    config = PasswordConfig(type="memorable", iteration=2, separator="")
    words = await MemorableStrategy().generate(config, source, dictionary)
    result = await apply_transforms(
        words, "", PassphraseTransforms(capitalize=True, append_number=True), source
    )
    assert result == "Ableacid999"
    assert source.call_counts["random_int"] == 3
