"""
Keysmith Configuration Management
==================================

Centralized configuration for the Keysmith toolkit using Python
dataclasses and TOML-based persistence.

Configuration is kept apart from code: generator defaults, named presets,
logging and randomness-audit parameters all come from ``keysmith.toml``
when present and fall back to the dataclass defaults otherwise.

References:
    - Wiggins, A. (2011). The Twelve-Factor App. https://12factor.net/
    - TOML v1.0.0 Specification. https://toml.io/en/v1.0.0
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Any, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[no-redef]


# ---------------------------------------------------------------------------
# Default configuration file: the working directory first, then the source
# checkout (keysmith.toml is not installed with the package)
# ---------------------------------------------------------------------------
CONFIG_FILENAME = "keysmith.toml"
_PROJECT_CONFIG_PATH: Path = Path(__file__).resolve().parent.parent / CONFIG_FILENAME


def default_config_path() -> Optional[Path]:
    """First existing default configuration file, or ``None``."""
    for candidate in (Path.cwd() / CONFIG_FILENAME, _PROJECT_CONFIG_PATH):
        if candidate.is_file():
            return candidate
    return None


# ========================== Section Configs ================================


@dataclass(frozen=False, slots=True)
class GeneratorConfig:
    """Defaults applied by front ends when an option is not given.

    The CLI merges these under explicit options and presets; the core
    service itself never reads them.
    """

    default_type: str = "strong"
    length: int = 16
    iteration: int = 3
    separator: str = "-"
    wordlist: str = ""  # empty -> bundled word list


@dataclass(frozen=False, slots=True)
class RandomnessConfig:
    """Parameters for the randomness quality audit.

    Reference:
        Pearson, K. (1900). On the criterion that a given system of
        deviations from the probable ... Philosophical Magazine, 50(302).
    """

    sample_size: int = 10_000
    significance: float = 0.01


@dataclass(frozen=False, slots=True)
class PresetConfig:
    """A named generation profile (``-p/--preset`` on the CLI)."""

    type: str = "strong"
    length: Optional[int] = None
    iteration: int = 1
    separator: str = "-"

    def as_options(self) -> dict[str, Any]:
        """Return the preset as config keys, dropping unset values."""
        return {k: v for k, v in asdict(self).items() if v is not None}


def _default_presets() -> dict[str, PresetConfig]:
    return {
        "quick": PresetConfig(type="strong", length=12, iteration=3, separator="-"),
        "secure": PresetConfig(type="strong", length=16, iteration=4, separator=""),
        "memorable": PresetConfig(type="memorable", iteration=4, separator="-"),
    }


# =========================== Global Settings ===============================


@dataclass(frozen=False, slots=True)
class GlobalConfig:
    """Global settings: logging verbosity and destinations."""

    log_level: str = "WARNING"
    log_file: str = ""  # empty -> no file logging
    log_json: bool = False
    console_logging: bool = True
    debug: bool = False
    version: str = "1.0.0"


# =========================== Master Config =================================


@dataclass(frozen=False, slots=True)
class KeysmithConfig:
    """Master configuration aggregating every section.

    Usage:
        >>> config = KeysmithConfig.load()                  # from default path
        >>> config = KeysmithConfig.load("custom.toml")     # from custom path
        >>> config.generator.length
        16
        >>> config.presets["secure"].iteration
        4
    """

    global_settings: GlobalConfig = field(default_factory=GlobalConfig)
    generator: GeneratorConfig = field(default_factory=GeneratorConfig)
    randomness: RandomnessConfig = field(default_factory=RandomnessConfig)
    presets: dict[str, PresetConfig] = field(default_factory=_default_presets)

    # ------------------------------------------------------------------ #
    #  TOML Loading
    # ------------------------------------------------------------------ #

    @classmethod
    def load(cls, path: str | Path | None = None) -> KeysmithConfig:
        """Load configuration from a TOML file.

        If *path* is ``None`` the loader looks for ``keysmith.toml`` in the
        current working directory, then in the project root, and returns
        the defaults when neither exists.  Missing keys fall back to
        dataclass defaults.
        ``[presets.<name>]`` tables override or extend the built-in presets.

        Args:
            path: Filesystem path to a TOML configuration file.

        Returns:
            A fully-populated :class:`KeysmithConfig` instance.

        Raises:
            FileNotFoundError: If the specified path does not exist
                *and* was explicitly provided by the caller.
        """
        if path is None:
            config_path = default_config_path()
            if config_path is None:
                return cls()
        else:
            config_path = Path(path)
            if not config_path.exists():
                raise FileNotFoundError(
                    f"Configuration file not found: {config_path}"
                )

        with open(config_path, "rb") as fh:
            raw: dict[str, Any] = tomllib.load(fh)

        presets = _default_presets()
        for name, section in raw.get("presets", {}).items():
            if isinstance(section, dict):
                presets[name] = cls._build_section(PresetConfig, section)

        return cls(
            global_settings=cls._build_section(GlobalConfig, raw.get("global", {})),
            generator=cls._build_section(GeneratorConfig, raw.get("generator", {})),
            randomness=cls._build_section(RandomnessConfig, raw.get("randomness", {})),
            presets=presets,
        )

    def preset(self, name: str) -> PresetConfig:
        """Look up a preset by name.

        Raises:
            KeyError: If no preset with that name exists. The message
                lists the valid names.
        """
        try:
            return self.presets[name]
        except KeyError:
            valid = ", ".join(sorted(self.presets))
            raise KeyError(f"Unknown preset '{name}'. Valid presets: {valid}") from None

    # ------------------------------------------------------------------ #
    #  Internal helpers
    # ------------------------------------------------------------------ #

    @staticmethod
    def _build_section(cls: type, data: dict[str, Any]) -> Any:
        """Instantiate a dataclass *cls* using only the keys it declares.

        Unknown keys in the TOML source are silently ignored so that
        forward-compatible config files do not break older code.
        """
        valid_keys = {f.name for f in cls.__dataclass_fields__.values()}  # type: ignore[attr-defined]
        filtered = {k: v for k, v in data.items() if k in valid_keys}
        return cls(**filtered)

