"""
Keysmith CLI
=============

Click-based command-line interface for the Keysmith password engine.
Every subcommand goes through :class:`PasswordService`, so the CLI
produces exactly what any other front end would for the same
configuration and the same random draws.

Usage::

    python -m keysmith generate -t strong -l 16 -i 4 -s ""
    python -m keysmith generate -p memorable -n 5
    python -m keysmith passphrase -i 4 --capitalize --append-number
    python -m keysmith analyze "Tr0ub4dor&3"
    python -m keysmith --seed 42 generate -t pronounceable -i 3
    python -m keysmith entropy -t base64 -l 43 -i 1
    python -m keysmith validate -t strong -l 0
    python -m keysmith types
    python -m keysmith audit-rng --sample-size 20000

Option precedence: explicit options, then the ``-p/--preset`` profile,
then the ``[generator]`` section of the configuration file.

Exit status 2 signals an invalid configuration.

References:
    - Click Documentation. https://click.palletsprojects.com/
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Callable, Optional

import click

from shared.config import KeysmithConfig
from shared.console import KeysmithConsole
from shared.logger import KeysmithLogger

from keysmith import __version__
from keysmith.adapters import (
    DeterministicRandomSource,
    SystemRandomSource,
    WordListFileDictionary,
)
from keysmith.analyzers import RandomnessAuditor
from keysmith.core.errors import InvalidConfigError, MissingDictionaryError
from keysmith.core.models import (
    GenerationResult,
    PassphraseTransforms,
    PasswordConfig,
    PasswordType,
)
from keysmith.core.ports import Dictionary, MemoryDictionary, RandomSource
from keysmith.core.service import PasswordService
from keysmith.output.console import KeysmithConsoleOutput
from keysmith.output.report import KeysmithReportGenerator

EXIT_INVALID_CONFIG = 2

# Raised by a word list that cannot be read or holds no words. Checked
# after InvalidConfigError, which is itself a ValueError.
WORD_LIST_ERRORS = (MissingDictionaryError, OSError, ValueError)


# ===================================================================== #
#  Async Runner Helper
# ===================================================================== #

def _run_async(coro):
    """Run a coroutine from a synchronous Click handler."""
    return asyncio.run(coro)


# ===================================================================== #
#  CLI Group
# ===================================================================== #

@click.group()
@click.version_option(__version__, prog_name="keysmith")
@click.option(
    "--config", "-c",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Path to Keysmith configuration file (TOML).",
)
@click.option(
    "--output", "-o",
    type=click.Choice(["console", "json"]),
    default="console",
    help="Output format.",
)
@click.option(
    "--output-file", "-f",
    type=click.Path(dir_okay=False),
    default=None,
    help="Write the JSON report to this file instead of stdout.",
)
@click.option(
    "--quiet", "-q",
    is_flag=True,
    default=False,
    help="Plain output only: no banner, tables or colours.",
)
@click.option(
    "--seed",
    type=click.IntRange(min=1),
    default=None,
    help="Use the deterministic generator with this seed (testing only).",
)
@click.option(
    "--wordlist", "-w",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Word list file for memorable passwords (plain or EFF diceware).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    config: Optional[str],
    output: str,
    output_file: Optional[str],
    quiet: bool,
    seed: Optional[int],
    wordlist: Optional[str],
) -> None:
    """Keysmith -- password and passphrase generator.

    Generate strong, base64, memorable, quantum-resistant and
    pronounceable passwords and report their entropy.
    """
    ctx.ensure_object(dict)

    keysmith_config = KeysmithConfig.load(config)
    ctx.obj["config"] = keysmith_config
    ctx.obj["output_format"] = output
    ctx.obj["output_file"] = output_file
    ctx.obj["quiet"] = quiet

    logger = KeysmithLogger.from_config("cli", keysmith_config.global_settings)
    ctx.obj["logger"] = logger

    random_source: RandomSource
    if seed is not None:
        random_source = DeterministicRandomSource.with_seed(seed)
    else:
        random_source = SystemRandomSource()
    ctx.obj["random_source"] = random_source
    ctx.obj["seeded"] = seed is not None

    wordlist_path = wordlist or keysmith_config.generator.wordlist
    if wordlist_path and not Path(wordlist_path).is_file():
        raise click.BadParameter(
            f"word list file not found: {wordlist_path}",
            param_hint="'[generator] wordlist'",
        )
    dictionary: Dictionary = (
        WordListFileDictionary(wordlist_path) if wordlist_path else MemoryDictionary()
    )

    console = KeysmithConsole(quiet=quiet or output == "json")
    ctx.obj["console"] = console
    ctx.obj["service"] = PasswordService(random_source, dictionary, logger=logger)
    ctx.obj["display"] = KeysmithConsoleOutput(console)
    ctx.obj["reporter"] = KeysmithReportGenerator(
        version=keysmith_config.global_settings.version
    )

    if not quiet and output == "console":
        console.banner(version=__version__)


def _config_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Attach the options that make up a :class:`PasswordConfig`."""
    options = [
        click.option(
            "--type", "-t", "password_type",
            type=click.Choice([t.value for t in PasswordType]),
            default=None,
            help="Password type.",
        ),
        click.option(
            "--length", "-l",
            type=int,
            default=None,
            help="Characters per chunk (strong and base64 only).",
        ),
        click.option(
            "--iteration", "-i",
            type=int,
            default=None,
            help="Number of chunks, words or syllables.",
        ),
        click.option(
            "--separator", "-s",
            default=None,
            help="Separator placed between units (may be empty).",
        ),
        click.option(
            "--preset", "-p",
            default=None,
            help="Named profile from the configuration (quick, secure, memorable ...).",
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _build_config(
    ctx: click.Context,
    password_type: Optional[str],
    length: Optional[int],
    iteration: Optional[int],
    separator: Optional[str],
    preset: Optional[str],
) -> PasswordConfig:
    """Merge configuration defaults, preset and explicit options."""
    keysmith_config: KeysmithConfig = ctx.obj["config"]
    defaults = keysmith_config.generator
    merged: dict[str, Any] = {
        "type": defaults.default_type,
        "length": defaults.length,
        "iteration": defaults.iteration,
        "separator": defaults.separator,
    }

    if preset is not None:
        try:
            merged.update(keysmith_config.preset(preset).as_options())
        except KeyError as exc:
            raise click.BadParameter(str(exc.args[0]), param_hint="'--preset'")

    explicit = {
        "type": password_type,
        "length": length,
        "iteration": iteration,
        "separator": separator,
    }
    merged.update({k: v for k, v in explicit.items() if v is not None})
    return PasswordConfig.from_mapping(merged)


def _fail_invalid(ctx: click.Context, errors: list[str]) -> None:
    for message in errors:
        click.echo(f"error: {message}", err=True)
    ctx.exit(EXIT_INVALID_CONFIG)


def _emit_json(ctx: click.Context, command: str, payload: Any) -> None:
    reporter: KeysmithReportGenerator = ctx.obj["reporter"]
    output_file = ctx.obj["output_file"]
    if output_file:
        path = reporter.generate_json(command, payload, Path(output_file))
        click.echo(f"JSON report saved to: {path}", err=True)
    else:
        click.echo(reporter.render_json(command, payload))


def _warn_seeded(ctx: click.Context) -> None:
    if ctx.obj["seeded"]:
        ctx.obj["console"].warning(
            "Deterministic generator in use: never use these passwords as real secrets."
        )


# ===================================================================== #
#  Subcommands
# ===================================================================== #

@cli.command()
@_config_options
@click.option(
    "--count", "-n",
    type=click.IntRange(min=1, max=1000),
    default=1,
    show_default=True,
    help="Number of passwords to generate.",
)
@click.pass_context
def generate(
    ctx: click.Context,
    password_type: Optional[str],
    length: Optional[int],
    iteration: Optional[int],
    separator: Optional[str],
    preset: Optional[str],
    count: int,
) -> None:
    """Generate one or more passwords."""
    service: PasswordService = ctx.obj["service"]
    display: KeysmithConsoleOutput = ctx.obj["display"]
    config = _build_config(ctx, password_type, length, iteration, separator, preset)

    try:
        results = _run_async(service.generate_multiple([config] * count))
    except InvalidConfigError as exc:
        _fail_invalid(ctx, exc.errors)
        return
    except WORD_LIST_ERRORS as exc:
        raise click.ClickException(str(exc))

    if ctx.obj["output_format"] == "json":
        _emit_json(ctx, "generate", results)
    elif ctx.obj["quiet"]:
        for result in results:
            click.echo(result.password)
    else:
        _warn_seeded(ctx)
        display.display_generation(results)


@cli.command()
@_config_options
@click.pass_context
def entropy(
    ctx: click.Context,
    password_type: Optional[str],
    length: Optional[int],
    iteration: Optional[int],
    separator: Optional[str],
    preset: Optional[str],
) -> None:
    """Estimate entropy for a configuration without generating anything."""
    service: PasswordService = ctx.obj["service"]
    display: KeysmithConsoleOutput = ctx.obj["display"]
    config = _build_config(ctx, password_type, length, iteration, separator, preset)

    try:
        info = service.calculate_entropy(config)
    except InvalidConfigError as exc:
        _fail_invalid(ctx, exc.errors)
        return
    except WORD_LIST_ERRORS as exc:
        raise click.ClickException(str(exc))

    parsed_type = PasswordType(config.type)
    quantum = (
        service.quantum_security(config)
        if parsed_type in (PasswordType.BASE64, PasswordType.QUANTUM_RESISTANT)
        else None
    )

    if ctx.obj["output_format"] == "json":
        payload: dict[str, Any] = {"entropy": info}
        if quantum is not None:
            payload["quantumSecurity"] = quantum
        _emit_json(ctx, "entropy", payload)
    elif ctx.obj["quiet"]:
        click.echo(f"{info.total_bits:.2f}")
    else:
        display.display_entropy(info, parsed_type, quantum)


@cli.command()
@_config_options
@click.pass_context
def validate(
    ctx: click.Context,
    password_type: Optional[str],
    length: Optional[int],
    iteration: Optional[int],
    separator: Optional[str],
    preset: Optional[str],
) -> None:
    """Check a configuration and list every problem found."""
    service: PasswordService = ctx.obj["service"]
    display: KeysmithConsoleOutput = ctx.obj["display"]
    config = _build_config(ctx, password_type, length, iteration, separator, preset)
    result = service.validate_config(config)

    if ctx.obj["output_format"] == "json":
        _emit_json(ctx, "validate", result)
    elif ctx.obj["quiet"]:
        click.echo("valid" if result.is_valid else "invalid")
    else:
        display.display_validation(result)

    if not result.is_valid:
        if ctx.obj["quiet"]:
            for message in result.errors:
                click.echo(f"error: {message}", err=True)
        ctx.exit(EXIT_INVALID_CONFIG)


@cli.command()
@click.option(
    "--iteration", "-i",
    type=int,
    default=None,
    help="Number of words (default from configuration).",
)
@click.option(
    "--separator", "-s",
    default=None,
    help="Separator placed between words.",
)
@click.option("--capitalize", is_flag=True, help="Capitalize every word.")
@click.option("--uppercase", is_flag=True, help="Upper-case the whole passphrase.")
@click.option(
    "--append-number",
    is_flag=True,
    help="Append a random number below 1000.",
)
@click.option(
    "--count", "-n",
    type=click.IntRange(min=1, max=1000),
    default=1,
    show_default=True,
    help="Number of passphrases to generate.",
)
@click.pass_context
def passphrase(
    ctx: click.Context,
    iteration: Optional[int],
    separator: Optional[str],
    capitalize: bool,
    uppercase: bool,
    append_number: bool,
    count: int,
) -> None:
    """Generate memorable passphrases with optional transforms."""
    service: PasswordService = ctx.obj["service"]
    display: KeysmithConsoleOutput = ctx.obj["display"]
    config = _build_config(
        ctx, PasswordType.MEMORABLE.value, None, iteration, separator, None
    )
    transforms = PassphraseTransforms(
        capitalize=capitalize, uppercase=uppercase, append_number=append_number
    )

    async def _batch() -> list[GenerationResult]:
        return [
            await service.generate_passphrase(config, transforms)
            for _ in range(count)
        ]

    try:
        results = _run_async(_batch())
    except InvalidConfigError as exc:
        _fail_invalid(ctx, exc.errors)
        return
    except WORD_LIST_ERRORS as exc:
        raise click.ClickException(str(exc))

    if ctx.obj["output_format"] == "json":
        _emit_json(ctx, "passphrase", results)
    elif ctx.obj["quiet"]:
        for result in results:
            click.echo(result.password)
    else:
        _warn_seeded(ctx)
        display.display_generation(results)


@cli.command()
@click.argument("password", required=False)
@click.pass_context
def analyze(ctx: click.Context, password: Optional[str]) -> None:
    """Score the strength of an existing password.

    Prompts without echo when PASSWORD is omitted, which keeps the
    secret out of shell history.
    """
    service: PasswordService = ctx.obj["service"]
    if password is None:
        password = click.prompt("Password", hide_input=True, err=True)
    analysis = service.analyze_strength(password)

    if ctx.obj["output_format"] == "json":
        _emit_json(ctx, "analyze", analysis)
    elif ctx.obj["quiet"]:
        click.echo(f"{analysis.score} {analysis.strength.value} {analysis.entropy:.2f}")
    else:
        ctx.obj["display"].display_strength(analysis)


@cli.command()
@click.pass_context
def types(ctx: click.Context) -> None:
    """List the supported password types."""
    service: PasswordService = ctx.obj["service"]
    supported = service.get_supported_types()

    if ctx.obj["output_format"] == "json":
        _emit_json(ctx, "types", supported)
    elif ctx.obj["quiet"]:
        for name in supported:
            click.echo(name)
    else:
        ctx.obj["display"].display_types(supported)


@cli.command("audit-rng")
@click.option(
    "--sample-size",
    type=click.IntRange(min=1280),
    default=None,
    help="Bytes to draw (default from configuration).",
)
@click.option(
    "--significance",
    type=click.FloatRange(min=0.0, max=1.0, min_open=True, max_open=True),
    default=None,
    help="Significance level for every test (default from configuration).",
)
@click.pass_context
def audit_rng(
    ctx: click.Context,
    sample_size: Optional[int],
    significance: Optional[float],
) -> None:
    """Run statistical sanity checks on the active random source."""
    keysmith_config: KeysmithConfig = ctx.obj["config"]
    auditor = RandomnessAuditor(
        sample_size=sample_size or keysmith_config.randomness.sample_size,
        significance=significance or keysmith_config.randomness.significance,
        logger=ctx.obj["logger"],
    )
    console: KeysmithConsole = ctx.obj["console"]

    with console.status("Sampling random source..."):
        audit = _run_async(auditor.audit(ctx.obj["random_source"]))

    if ctx.obj["output_format"] == "json":
        _emit_json(ctx, "audit-rng", audit)
    elif ctx.obj["quiet"]:
        click.echo("PASS" if audit.passed else "FAIL")
    else:
        ctx.obj["display"].display_audit(audit)

    if not audit.passed:
        ctx.exit(1)


# ===================================================================== #
#  Entry Point
# ===================================================================== #

def main() -> None:
    """Main entry point for the Keysmith CLI."""
    cli(obj={})


if __name__ == "__main__":
    main()
