"""
Keysmith Console Output
========================

Rich formatters for generation results, entropy estimates, validation
reports, the type catalogue, randomness audits and strength analyses.

Passwords are printed with ``soft_wrap`` so a long secret is never broken
across lines by the terminal width, and escaped so separators containing
``[`` are not read as markup.

References:
    - Rich Library Documentation. https://rich.readthedocs.io/
"""

from __future__ import annotations

from typing import Optional, Sequence

from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from shared.console import KeysmithConsole
from keysmith.core.models import (
    EntropyInfo,
    GenerationResult,
    PasswordStrength,
    PasswordType,
    QuantumSecurity,
    RandomnessAudit,
    SecurityLevel,
    StrengthAnalysis,
    ValidationResult,
)


_LEVEL_STYLES: dict[SecurityLevel, str] = {
    SecurityLevel.WEAK: "keysmith.weak",
    SecurityLevel.MODERATE: "keysmith.moderate",
    SecurityLevel.GOOD: "keysmith.good",
    SecurityLevel.STRONG: "keysmith.strong",
    SecurityLevel.EXCELLENT: "keysmith.excellent",
}

_STRENGTH_STYLES: dict[PasswordStrength, str] = {
    PasswordStrength.VERY_WEAK: "red",
    PasswordStrength.WEAK: "dark_orange",
    PasswordStrength.FAIR: "yellow",
    PasswordStrength.GOOD: "green",
    PasswordStrength.STRONG: "bright_green",
}

_TYPE_DESCRIPTIONS: dict[PasswordType, str] = {
    PasswordType.STRONG: "Random characters from A-Z a-z 0-9 + /",
    PasswordType.BASE64: "Base64 text cut from random bytes",
    PasswordType.MEMORABLE: "Dictionary words joined by the separator",
    PasswordType.QUANTUM_RESISTANT: "One 43-character base64 key (258 bits)",
    PasswordType.PRONOUNCEABLE: "Consonant-vowel-vowel-consonant syllables",
}

# Meter scale: 256 bits fills the bar.
_METER_MAX_BITS = 256.0
_METER_WIDTH = 40


class KeysmithConsoleOutput:
    """Console output formatters for Keysmith results.

    Usage::

        output = KeysmithConsoleOutput(KeysmithConsole())
        output.display_generation(results)
        output.display_entropy(info, PasswordType.STRONG)
    """

    def __init__(self, console: Optional[KeysmithConsole] = None) -> None:
        self.console = console or KeysmithConsole()
        self._rich = self.console.rich

    # ------------------------------------------------------------------ #
    #  Strength meter
    # ------------------------------------------------------------------ #

    @staticmethod
    def strength_meter(bits: float, level: SecurityLevel) -> Text:
        """Coloured bar proportional to *bits*, capped at 256."""
        filled = int(min(bits, _METER_MAX_BITS) / _METER_MAX_BITS * _METER_WIDTH)
        filled = max(0, min(_METER_WIDTH, filled))

        meter = Text()
        meter.append(f"{bits:.2f} bits  ", style="bold")
        meter.append("[", style="dim")
        for i in range(_METER_WIDTH):
            if i < filled:
                if i < _METER_WIDTH * 0.25:
                    meter.append("█", style="red")
                elif i < _METER_WIDTH * 0.50:
                    meter.append("█", style="yellow")
                elif i < _METER_WIDTH * 0.75:
                    meter.append("█", style="green")
                else:
                    meter.append("█", style="bright_green")
            else:
                meter.append("░", style="dim")
        meter.append("]  ", style="dim")
        meter.append(level.value, style=_LEVEL_STYLES[level])
        return meter

    # ------------------------------------------------------------------ #
    #  Generation
    # ------------------------------------------------------------------ #

    def display_generation(self, results: Sequence[GenerationResult]) -> None:
        if not results:
            return
        self.console.section("Generated Passwords")

        for result in results:
            self._rich.print(
                f"[keysmith.secret]{escape(result.password)}[/keysmith.secret]",
                soft_wrap=True,
            )
        self._rich.print()

        first = results[0]
        self._rich.print(
            Panel(
                self.strength_meter(first.entropy_bits, first.security_level),
                title="Strength",
                border_style="cyan",
            )
        )

        tbl = Table(
            border_style="bright_cyan",
            header_style="bold bright_magenta",
            show_lines=True,
        )
        tbl.add_column("Property", style="bold")
        tbl.add_column("Value")
        tbl.add_row("Type", first.metadata.password_type.value)
        tbl.add_row("Count", str(len(results)))
        tbl.add_row("Characters", str(first.metadata.character_count))
        tbl.add_row("Entropy", f"{first.entropy_bits:.2f} bits")
        tbl.add_row("Recommendation", first.metadata.recommendation)
        self._rich.print(tbl)

    # ------------------------------------------------------------------ #
    #  Entropy
    # ------------------------------------------------------------------ #

    def display_entropy(
        self,
        info: EntropyInfo,
        password_type: PasswordType,
        quantum: Optional[QuantumSecurity] = None,
    ) -> None:
        self.console.section("Entropy Estimate")
        self._rich.print(
            Panel(
                self.strength_meter(info.total_bits, info.security_level),
                title="Strength Meter",
                border_style="cyan",
            )
        )

        tbl = Table(
            border_style="bright_cyan",
            header_style="bold bright_magenta",
            show_lines=True,
        )
        tbl.add_column("Property", style="bold")
        tbl.add_column("Value")
        tbl.add_row("Type", password_type.value)
        tbl.add_row("Total", f"{info.total_bits:.2f} bits")
        tbl.add_row(f"Per {password_type.unit_name}", f"{info.per_unit:.2f} bits")
        tbl.add_row("Security Level", info.security_level.value)
        tbl.add_row("Recommendation", info.recommendation)
        if quantum is not None:
            tbl.add_row(
                "Quantum Safe",
                f"{'Yes' if quantum.is_quantum_safe else 'No'} "
                f"(target {quantum.target_bits:.0f} bits, "
                f"min length {quantum.recommended_min_length})",
            )
        self._rich.print(tbl)

    # ------------------------------------------------------------------ #
    #  Validation
    # ------------------------------------------------------------------ #

    def display_validation(self, result: ValidationResult) -> None:
        if result.is_valid:
            self.console.success("Configuration is valid")
            return
        self.console.error(
            f"Configuration has {len(result.errors)} error(s)"
        )
        for message in result.errors:
            self._rich.print(f"  [red]•[/red] {escape(message)}")

    # ------------------------------------------------------------------ #
    #  Type catalogue
    # ------------------------------------------------------------------ #

    def display_types(self, types: Sequence[str]) -> None:
        rows = []
        for name in types:
            password_type = PasswordType(name)
            rows.append(
                (
                    name,
                    password_type.unit_name,
                    "yes" if password_type.uses_length else "no",
                    _TYPE_DESCRIPTIONS[password_type],
                )
            )
        self.console.table(
            "Password Types",
            ["Type", "Unit", "Uses Length", "Description"],
            rows,
            styles=["bold", "", "", "dim"],
        )

    # ------------------------------------------------------------------ #
    #  Randomness audit
    # ------------------------------------------------------------------ #

    def display_audit(self, audit: RandomnessAudit) -> None:
        self.console.section("Randomness Audit")

        summary = Text()
        summary.append("Overall: ", style="bold")
        summary.append(
            "PASS" if audit.passed else "FAIL",
            style="bold bright_green" if audit.passed else "bold red",
        )
        summary.append(f"\nTests: {audit.tests_passed}/{len(audit.tests)} passed\n")
        summary.append(f"Sample: {audit.sample_size:,} bytes\n")
        summary.append(f"Shannon entropy: {audit.shannon_entropy:.4f} bits/byte\n")
        summary.append(f"Min-entropy: {audit.min_entropy:.4f} bits/byte\n")
        summary.append(audit.assessment)
        self._rich.print(Panel(summary, title="Audit Summary", border_style="cyan"))

        tbl = Table(
            title=f"Statistical Tests (alpha = {audit.significance})",
            border_style="bright_cyan",
            header_style="bold bright_magenta",
            show_lines=True,
        )
        tbl.add_column("#", style="dim", width=3, justify="right")
        tbl.add_column("Test Name", style="bold")
        tbl.add_column("Statistic", justify="right")
        tbl.add_column("p-value", justify="right")
        tbl.add_column("Result", justify="center")
        for idx, test in enumerate(audit.tests, start=1):
            colour = "green" if test.passed else "red"
            tbl.add_row(
                str(idx),
                test.test_name,
                f"{test.statistic:.4f}",
                f"{test.p_value:.6f}",
                f"[{colour}]{'PASS' if test.passed else 'FAIL'}[/{colour}]",
            )
        self._rich.print(tbl)

    # ------------------------------------------------------------------ #
    #  Strength analysis
    # ------------------------------------------------------------------ #

    def display_strength(self, analysis: StrengthAnalysis) -> None:
        self.console.section("Password Strength")

        colour = _STRENGTH_STYLES[analysis.strength]
        score = Text()
        score.append("Score: ", style="bold")
        score.append(f"{analysis.score}/4  ")
        score.append("[", style="dim")
        for step in range(4):
            score.append("█" * 5 if step < analysis.score else "░" * 5, style=colour)
        score.append("]  ", style="dim")
        score.append(analysis.strength.label, style=f"bold {colour}")
        self._rich.print(Panel(score, title="Strength Meter", border_style="cyan"))

        if analysis.feedback.warning:
            self.console.warning(analysis.feedback.warning)

        tbl = Table(
            border_style="bright_cyan",
            header_style="bold bright_magenta",
            show_lines=True,
        )
        tbl.add_column("Property", style="bold")
        tbl.add_column("Value")
        tbl.add_row("Password", escape(analysis.password_masked))
        tbl.add_row("Effective Entropy", f"{analysis.entropy:.2f} bits")
        tbl.add_row("Composition Entropy", f"{analysis.base_entropy:.2f} bits")
        if analysis.composition is not None:
            comp = analysis.composition
            classes = [
                name for name, present in (
                    ("lower", comp.has_lowercase),
                    ("upper", comp.has_uppercase),
                    ("digits", comp.has_numbers),
                    ("symbols", comp.has_symbols),
                ) if present
            ]
            tbl.add_row("Length", str(comp.length))
            tbl.add_row("Character Classes", ", ".join(classes))
        for pattern in analysis.patterns:
            tbl.add_row(
                f"Pattern: {pattern.pattern}",
                escape(", ".join(pattern.matches)),
            )
        for match in analysis.dictionaries:
            tbl.add_row(f"Dictionary: {match.dictionary}", escape(match.description))
        self._rich.print(tbl)

        for line in analysis.feedback.suggestions + analysis.feedback.recommendations:
            self._rich.print(f"  [cyan]•[/cyan] {escape(line)}")
