import asyncio
import math

import pytest

from keysmith.adapters import DeterministicRandomSource, SystemRandomSource
from keysmith.core.engine import GenerationEngine
from keysmith.core.errors import InvalidConfigError, UnknownPasswordTypeError
from keysmith.core.models import (
    GenerationResult,
    PassphraseTransforms,
    PasswordConfig,
    PasswordType,
    SecurityLevel,
)
from keysmith.core.service import PasswordService
from keysmith.domain.charsets import STRONG_ALPHABET
from shared.logger import current_operation


@pytest.mark.asyncio
async def test_generate_attaches_entropy_and_metadata(make_service, seeded_source):
    service = make_service(seeded_source)
    result = await service.generate(
        {"type": "strong", "length": 16, "iteration": 4, "separator": ""}
    )

    assert isinstance(result, GenerationResult)
    assert len(result.password) == 64
    assert set(result.password) <= set(STRONG_ALPHABET)
    assert result.entropy_bits == 384.0
    assert result.security_level is SecurityLevel.EXCELLENT
    assert result.metadata.password_type is PasswordType.STRONG
    assert result.metadata.character_count == 64
    assert result.metadata.recommendation


@pytest.mark.asyncio
async def test_quantum_request_is_normalized(make_service, seeded_source):
    service = make_service(seeded_source)
    result = await service.generate(
        PasswordConfig(type="quantum-resistant", length=0, iteration=9, separator="-")
    )
    assert len(result.password) == 43
    assert "-" not in result.password
    assert result.entropy_bits == 258.0


@pytest.mark.asyncio
async def test_invalid_config_raises_before_any_draw(make_service, seeded_source):
    service = make_service(seeded_source)
    with pytest.raises(InvalidConfigError) as exc_info:
        await service.generate({"type": "strong", "length": 0, "iteration": 0})

    assert len(exc_info.value.errors) == 2
    assert "length" in str(exc_info.value)
    assert sum(seeded_source.call_counts.values()) == 0


@pytest.mark.asyncio
async def test_unknown_type_is_rejected_with_type_in_message(make_service, seeded_source):
    service = make_service(seeded_source)
    with pytest.raises(InvalidConfigError) as exc_info:
        await service.generate({"type": "hex"})
    assert "type" in exc_info.value.errors[0]

    validation = service.validate_config({"type": "hex"})
    assert not validation.is_valid
    assert validation.errors_for("type")


def test_invalid_config_error_is_a_value_error():
    assert issubclass(InvalidConfigError, ValueError)


def test_calculate_entropy_consumes_no_randomness(make_service, seeded_source):
    service = make_service(seeded_source)
    info = service.calculate_entropy({"type": "pronounceable", "iteration": 4})
    assert info.total_bits > 0
    assert sum(seeded_source.call_counts.values()) == 0


def test_calculate_entropy_rejects_invalid_config(make_service, seeded_source):
    service = make_service(seeded_source)
    with pytest.raises(InvalidConfigError):
        service.calculate_entropy({"type": "base64", "length": 2000})


def test_supported_types_are_stable(make_service, seeded_source):
    service = make_service(seeded_source)
    assert service.get_supported_types() == [
        "strong",
        "base64",
        "memorable",
        "quantum-resistant",
        "pronounceable",
    ]


def test_ports_missing_methods_are_rejected():
    class HalfSource:
        async def random_int(self, max_value):
            return 0

    with pytest.raises(TypeError, match="random_bytes"):
        PasswordService(HalfSource())

    with pytest.raises(TypeError, match="dictionary"):
        PasswordService(SystemRandomSource(), object())


def test_config_of_wrong_kind_is_a_type_error(make_service, seeded_source):
    service = make_service(seeded_source)
    with pytest.raises(TypeError):
        service.validate_config(["strong"])


@pytest.mark.asyncio
async def test_generate_multiple_validates_whole_batch_first(make_service, seeded_source):
    service = make_service(seeded_source)
    with pytest.raises(InvalidConfigError):
        await service.generate_multiple(
            [{"type": "strong"}, {"type": "strong", "iteration": 0}]
        )
    assert sum(seeded_source.call_counts.values()) == 0

    results = await service.generate_multiple(
        [{"type": "memorable", "iteration": 3}, {"type": "pronounceable"}]
    )
    assert [r.metadata.password_type for r in results] == [
        PasswordType.MEMORABLE,
        PasswordType.PRONOUNCEABLE,
    ]


@pytest.mark.asyncio
async def test_result_repr_masks_the_password(make_service, seeded_source):
    result = await make_service(seeded_source).generate({"type": "strong"})
    assert result.password not in repr(result)


@pytest.mark.asyncio
async def test_json_dump_uses_camel_case(make_service, seeded_source):
    result = await make_service(seeded_source).generate({"type": "base64", "length": 8})
    data = result.model_dump(mode="json", by_alias=True)
    assert set(data) == {"password", "entropyBits", "securityLevel", "metadata"}
    assert data["metadata"]["passwordType"] == "base64"
    assert data["metadata"]["characterCount"] == 8


@pytest.mark.asyncio
async def test_engine_rejects_unregistered_type(seeded_source):
    engine = GenerationEngine()
    with pytest.raises(UnknownPasswordTypeError):
        await engine.generate(PasswordConfig(type="custom"), seeded_source)


@pytest.mark.asyncio
async def test_concurrent_calls_with_independent_sources(make_service):
    async def one(seed):
        service = make_service(DeterministicRandomSource.with_seed(seed))
        return (await service.generate({"type": "strong", "iteration": 2})).password

    concurrent = await asyncio.gather(*(one(seed) for seed in (1, 2, 3)))
    sequential = [await one(seed) for seed in (1, 2, 3)]
    assert list(concurrent) == sequential


def test_reference_examples(make_service, seeded_source):
    service = make_service(seeded_source)

    valid = service.validate_config(
        {"type": "strong", "length": 16, "iteration": 4, "separator": "-"}
    )
    assert valid.model_dump(by_alias=True) == {"isValid": True, "errors": []}

    rejected = service.validate_config({"type": "strong", "length": 0, "iteration": 4})
    assert not rejected.is_valid
    assert rejected.errors_for("length")

    for anything in ({}, {"length": 0, "iteration": 0, "separator": 3}, {"length": 999}):
        info = service.calculate_entropy({"type": "quantum-resistant", **anything})
        assert info.total_bits == 258.0


@pytest.mark.asyncio
async def test_newline_separator_round_trip(make_service, seeded_source):
    result = await make_service(seeded_source).generate(
        {"type": "memorable", "iteration": 2, "separator": "\n"}
    )
    assert result.password.count("\n") == 1


class _YieldingSource(DeterministicRandomSource):
    """Seeded source that hands control back to the loop before each draw."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.operations_seen = set()

    async def random_int(self, max_value):
        await asyncio.sleep(0)
        self.operations_seen.add(current_operation.get())
        return await super().random_int(max_value)


@pytest.mark.asyncio
async def test_shared_service_keeps_operation_scope_per_task(make_service):
    source = _YieldingSource()
    service = make_service(source)

    await asyncio.gather(
        service.generate({"type": "strong", "length": 4}),
        service.generate({"type": "strong", "length": 4}),
    )

    assert source.operations_seen == {"generate"}
    assert current_operation.get() is None


@pytest.mark.asyncio
async def test_passphrase_adds_number_entropy(make_service):
    service = make_service(DeterministicRandomSource.with_sequence([0, 1, 42]))
    config = {"type": "memorable", "iteration": 2, "separator": "-"}

    result = await service.generate_passphrase(
        config, PassphraseTransforms(capitalize=True, append_number=True)
    )

    plain_bits = service.calculate_entropy(config).total_bits
    assert result.password == "Able-Acid42"
    assert result.entropy_bits == round(plain_bits + math.log2(1000), 2)
    assert result.metadata.password_type is PasswordType.MEMORABLE


@pytest.mark.asyncio
async def test_passphrase_rejects_other_types(make_service, seeded_source):
    service = make_service(seeded_source)
    with pytest.raises(InvalidConfigError, match="memorable"):
        await service.generate_passphrase({"type": "strong"})
    assert sum(seeded_source.call_counts.values()) == 0


def test_analyze_strength_draws_nothing(make_service, seeded_source):
    service = make_service(seeded_source)
    analysis = service.analyze_strength("password")
    assert analysis.score == 0
    assert sum(seeded_source.call_counts.values()) == 0
