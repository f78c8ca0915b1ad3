"""Configuration file support for gwas-ingest.

Parser layouts can be kept in a TOML file instead of being passed on the
command line:

    [gwas_ingest.gwas]
    marker_col = 3
    pvalue_col = 12
    is_neg_log_pvalue = false

    [gwas_ingest.sniffer]
    sample_size = 100
"""

import logging
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .gwas.models import COLUMN_FIELDS, GWASParserConfig
from .reader import DEFAULT_SAMPLE_SIZE
from .utils.validators import ConfigurationError

logger = logging.getLogger(__name__)

BOOLEAN_FIELDS = ("is_neg_log_pvalue", "is_alt_effect")

VALID_FIELDS = {*COLUMN_FIELDS, *BOOLEAN_FIELDS, "delimiter"}


class ConfigValidationError(ConfigurationError):
    """Raised when configuration file validation fails."""

    pass


@dataclass(frozen=True)
class SnifferSettings:
    """Settings for automatic format detection."""

    sample_size: int = DEFAULT_SAMPLE_SIZE


def _read_toml(config_path: Path) -> dict[str, Any]:
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, "rb") as f:
        try:
            toml_data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigValidationError(f"Invalid TOML in {config_path}: {e}") from e
    return toml_data.get("gwas_ingest", {})


def validate_config(config_dict: dict[str, Any]) -> None:
    """Validate parser configuration values.

    Raises:
        ConfigValidationError: If any configuration value is invalid.
    """
    unknown = set(config_dict) - VALID_FIELDS
    if unknown:
        raise ConfigValidationError(f"Unknown parser options: {', '.join(sorted(unknown))}")

    for name in COLUMN_FIELDS:
        if name not in config_dict:
            continue
        value = config_dict[name]
        if not isinstance(value, int) or isinstance(value, bool):
            raise ConfigValidationError(
                f"{name} must be an integer, got {type(value).__name__}"
            )
        if value < 1:
            raise ConfigValidationError(f"{name} must be a 1-based column number, got {value}")

    for name in BOOLEAN_FIELDS:
        if name in config_dict and not isinstance(config_dict[name], bool):
            raise ConfigValidationError(
                f"{name} must be a boolean, got {type(config_dict[name]).__name__}"
            )

    if "delimiter" in config_dict:
        delimiter = config_dict["delimiter"]
        if not isinstance(delimiter, str) or len(delimiter) != 1:
            raise ConfigValidationError(
                f"delimiter must be a single character, got {delimiter!r}"
            )


def load_parser_config(
    config_path: Path,
    overrides: dict[str, Any] | None = None,
) -> GWASParserConfig:
    """Load a GWAS parser layout from a TOML file.

    Args:
        config_path: Path to the TOML configuration file.
        overrides: Optional dict of values to override loaded config.

    Returns:
        GWASParserConfig built from the ``[gwas_ingest.gwas]`` table.

    Raises:
        FileNotFoundError: If the config file doesn't exist.
        ConfigValidationError: If any configuration value is invalid.
        ConfigurationError: If the resulting column layout is inconsistent.
    """
    config_dict = dict(_read_toml(config_path).get("gwas", {}))

    if overrides:
        config_dict.update(overrides)

    validate_config(config_dict)
    logger.debug(f"Loaded parser configuration from {config_path}: {config_dict}")
    return GWASParserConfig.from_mapping(config_dict)


def load_sniffer_settings(config_path: Path | None) -> SnifferSettings:
    """Load sniffer settings from a TOML file, using defaults when absent."""
    if config_path is None or not config_path.exists():
        return SnifferSettings()

    sniffer_data = _read_toml(config_path).get("sniffer", {})
    sample_size = sniffer_data.get("sample_size", DEFAULT_SAMPLE_SIZE)
    if not isinstance(sample_size, int) or isinstance(sample_size, bool) or sample_size < 1:
        raise ConfigValidationError(f"sample_size must be a positive integer, got {sample_size!r}")
    return SnifferSettings(sample_size=sample_size)
