import asyncio
import json

from keysmith.adapters import DeterministicRandomSource
from keysmith.cli import cli
from keysmith.core.models import PassphraseTransforms
from keysmith.core.service import PasswordService


def _invoke(runner, *args):
    return runner.invoke(cli, list(args), obj={}, catch_exceptions=False)


def test_seeded_generation_is_reproducible(runner):
    args = ("--quiet", "--seed", "42", "generate", "-t", "strong", "-l", "8", "-i", "2", "-s", "-")
    first = _invoke(runner, *args)
    second = _invoke(runner, *args)

    assert first.exit_code == 0
    assert first.output == second.output
    password = first.output.strip()
    assert len(password) == 17
    assert password.count("-") == 1


def test_cli_matches_the_service_for_the_same_draws(runner):
    result = _invoke(
        runner, "--quiet", "--seed", "7777", "generate", "-t", "pronounceable", "-i", "4", "-s", "."
    )
    service = PasswordService(DeterministicRandomSource.with_seed(7777))
    expected = asyncio.run(
        service.generate({"type": "pronounceable", "iteration": 4, "separator": "."})
    )
    assert result.output.strip() == expected.password


def test_count_produces_one_line_per_password(runner):
    result = _invoke(runner, "--quiet", "generate", "-t", "base64", "-l", "12", "-i", "1", "-n", "5")
    lines = result.output.splitlines()
    assert len(lines) == 5
    assert all(len(line) == 12 for line in lines)


def test_invalid_configuration_exits_with_status_2(runner):
    result = runner.invoke(cli, ["--quiet", "generate", "-t", "strong", "-l", "0"], obj={})
    assert result.exit_code == 2
    assert "length" in result.output


def test_empty_separator_and_presets(runner):
    result = _invoke(runner, "--quiet", "--seed", "3", "generate", "-p", "secure")
    password = result.output.strip()
    assert len(password) == 64
    assert "-" not in password

    # explicit options win over the preset
    result = _invoke(runner, "--quiet", "--seed", "3", "generate", "-p", "secure", "-i", "1")
    assert len(result.output.strip()) == 16


def test_unknown_preset_is_a_usage_error(runner):
    result = runner.invoke(cli, ["--quiet", "generate", "-p", "nope"], obj={})
    assert result.exit_code == 2


def test_json_output_uses_camel_case(runner):
    result = _invoke(runner, "--output", "json", "--seed", "9", "generate", "-t", "quantum-resistant")
    report = json.loads(result.output)

    assert report["reportMetadata"]["command"] == "generate"
    entry = report["results"][0]
    assert len(entry["password"]) == 43
    assert entry["entropyBits"] == 258.0
    assert entry["securityLevel"] == "EXCELLENT"
    assert entry["metadata"]["passwordType"] == "quantum-resistant"


def test_json_report_to_file(runner, tmp_path):
    target = tmp_path / "out" / "types.json"
    result = _invoke(runner, "--output", "json", "--output-file", str(target), "types")
    assert result.exit_code == 0
    assert json.loads(target.read_text(encoding="utf-8"))["results"][3] == "quantum-resistant"


def test_entropy_command(runner):
    result = _invoke(runner, "--quiet", "entropy", "-t", "strong", "-l", "16", "-i", "4")
    assert result.output.strip() == "384.00"

    result = _invoke(runner, "--output", "json", "entropy", "-t", "base64", "-l", "20", "-i", "2")
    report = json.loads(result.output)["results"]
    assert report["entropy"]["totalBits"] == 240.0
    assert report["quantumSecurity"]["isQuantumSafe"] is False


def test_validate_command(runner):
    ok = _invoke(runner, "--quiet", "validate", "-t", "memorable", "-i", "6")
    assert ok.exit_code == 0
    assert ok.output.strip() == "valid"

    bad = runner.invoke(
        cli, ["--output", "json", "validate", "-t", "strong", "-l", "0", "-i", "0"], obj={}
    )
    assert bad.exit_code == 2
    report = json.loads(bad.output)["results"]
    assert report["isValid"] is False
    assert len(report["errors"]) == 2


def test_types_command_lists_stable_order(runner):
    result = _invoke(runner, "--quiet", "types")
    assert result.output.split() == [
        "strong",
        "base64",
        "memorable",
        "quantum-resistant",
        "pronounceable",
    ]


def test_console_output_renders(runner):
    result = _invoke(runner, "--seed", "5", "generate", "-t", "memorable", "-i", "4")
    assert result.exit_code == 0
    assert "Generated Passwords" in result.output
    assert "Deterministic generator" in result.output


def test_wordlist_option(runner, tmp_path):
    words = tmp_path / "words.txt"
    words.write_text("kiwi\n", encoding="utf-8")
    result = _invoke(
        runner, "--quiet", "--wordlist", str(words), "generate", "-t", "memorable", "-i", "3", "-s", "+"
    )
    assert result.output.strip() == "kiwi+kiwi+kiwi"


def test_config_file_defaults(runner, tmp_path):
    config = tmp_path / "keysmith.toml"
    config.write_text(
        '[generator]\ndefault_type = "pronounceable"\niteration = 2\nseparator = ""\n',
        encoding="utf-8",
    )
    result = _invoke(runner, "--quiet", "--config", str(config), "generate")
    assert len(result.output.strip()) == 8


def test_audit_rng_report(runner, tmp_path):
    target = tmp_path / "audit.json"
    result = runner.invoke(
        cli,
        ["--output", "json", "--output-file", str(target), "--seed", "42",
         "audit-rng", "--sample-size", "2560"],
        obj={},
    )
    assert result.exit_code in (0, 1)
    audit = json.loads(target.read_text(encoding="utf-8"))["results"]
    assert audit["sampleSize"] == 2560
    assert len(audit["tests"]) == 3


def test_missing_wordlist_from_config_is_a_usage_error(runner, tmp_path):
    config = tmp_path / "keysmith.toml"
    config.write_text(
        f'[generator]\nwordlist = "{(tmp_path / "nope.txt").as_posix()}"\n', encoding="utf-8"
    )
    result = runner.invoke(
        cli, ["-c", str(config), "-q", "generate", "-t", "memorable"], obj={}
    )
    assert result.exit_code == 2
    assert "word list file not found" in result.output
    assert not isinstance(result.exception, FileNotFoundError)


def test_empty_wordlist_is_reported_not_raised(runner, tmp_path):
    words = tmp_path / "empty.txt"
    words.write_text("# nothing here\n\n", encoding="utf-8")
    for command in ("generate", "entropy"):
        result = runner.invoke(
            cli, ["-q", "-w", str(words), command, "-t", "memorable"], obj={}
        )
        assert result.exit_code == 1
        assert "contains no words" in result.output


def test_passphrase_command_matches_the_service(runner):
    result = _invoke(
        runner, "--quiet", "--seed", "42", "passphrase", "-i", "3", "-s", " ",
        "--capitalize", "--append-number",
    )
    service = PasswordService(DeterministicRandomSource.with_seed(42))
    expected = asyncio.run(
        service.generate_passphrase(
            {"type": "memorable", "iteration": 3, "separator": " "},
            PassphraseTransforms(capitalize=True, append_number=True),
        )
    )
    assert result.output.strip() == expected.password
    assert expected.password[0].isupper()


def test_analyze_command(runner):
    result = _invoke(runner, "--quiet", "analyze", "password")
    assert result.output.strip() == "0 very_weak 1.00"

    result = _invoke(runner, "--output", "json", "analyze", "Xk9#mQ2$vL7!pR4&")
    report = json.loads(result.output)["results"]
    assert report["score"] == 4
    assert report["strength"] == "strong"
    assert report["passwordMasked"] == "X**************&"


def test_analyze_prompts_when_no_argument(runner):
    result = runner.invoke(cli, ["--quiet", "analyze"], input="qwerty123\n", obj={})
    assert result.exit_code == 0
    assert result.output.strip().endswith("2 fair 44.20")
