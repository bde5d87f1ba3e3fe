"""Configuration parsing from ``.lcov-summary.yml``."""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from lcov_summary.errors import ConfigError
from lcov_summary.parsing.builder import OrphanPolicy

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = ".lcov-summary.yml"

_ENV_VAR_RE = re.compile(r"\$\{(\w+)\}")


def _resolve_env_vars(value: str) -> str:
    """Replace ``${VAR_NAME}`` placeholders with environment variable values."""

    def _replace(match: re.Match[str]) -> str:
        var = match.group(1)
        resolved = os.environ.get(var)
        if resolved is None:
            logger.warning("Environment variable %s is not set (referenced in config)", var)
            return ""
        return resolved

    return _ENV_VAR_RE.sub(_replace, value)


def _resolve_dict(data: dict[str, Any]) -> dict[str, Any]:
    """Recursively resolve environment variables in a dictionary."""
    result: dict[str, Any] = {}
    for key, value in data.items():
        if isinstance(value, str):
            result[key] = _resolve_env_vars(value)
        elif isinstance(value, dict):
            result[key] = _resolve_dict(value)
        elif isinstance(value, list):
            result[key] = [
                _resolve_env_vars(item) if isinstance(item, str) else item for item in value
            ]
        else:
            result[key] = value
    return result


@dataclass
class ThresholdConfig:
    """Percentage thresholds used to color coverage values."""

    low: float = 70.0
    """Values below this are shown in red."""

    mid: float = 80.0
    """Values below this (and at least ``low``) are shown in yellow."""


@dataclass
class DisplayConfig:
    """Terminal table display settings."""

    path_anchor: str = "/src"
    """File paths are shortened to start at this segment (empty disables)."""

    show_branches: bool = False
    """Add branch hit/total columns to the per-file table."""


@dataclass
class ParseConfig:
    """LCOV parsing behaviour."""

    orphan_policy: str = OrphanPolicy.SKIP.value
    """``skip`` drops FNDA records for undeclared functions, ``abort`` fails."""


@dataclass
class LcovSummaryConfig:
    """Complete configuration from ``.lcov-summary.yml``."""

    thresholds: ThresholdConfig = field(default_factory=ThresholdConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    parse: ParseConfig = field(default_factory=ParseConfig)

    @property
    def orphan_policy(self) -> OrphanPolicy:
        """Return the parse orphan policy as an enum."""
        return OrphanPolicy(self.parse.orphan_policy)


def _section(raw: dict[str, Any], name: str) -> dict[str, Any]:
    value = raw.get(name, {})
    if not isinstance(value, dict):
        logger.warning("Ignoring non-mapping %r section in %s", name, CONFIG_FILE_NAME)
        return {}
    return value


def _parse_float(section: dict[str, Any], key: str, default: float, prefix: str) -> float:
    value = section.get(key, default)
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"{prefix}.{key} must be a number (got: {value!r})") from e


_TRUE_STRINGS = frozenset({"true", "yes", "1"})
_FALSE_STRINGS = frozenset({"false", "no", "0"})


def _parse_bool(section: dict[str, Any], key: str, default: bool, prefix: str) -> bool:
    value = section.get(key)
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE_STRINGS:
        return True
    if text in _FALSE_STRINGS:
        return False
    raise ConfigError(f"{prefix}.{key} must be true or false (got: {value!r})")


def _parse_thresholds(raw: dict[str, Any]) -> ThresholdConfig:
    section = _section(raw, "thresholds")
    defaults = ThresholdConfig()
    return ThresholdConfig(
        low=_parse_float(section, "low", defaults.low, "thresholds"),
        mid=_parse_float(section, "mid", defaults.mid, "thresholds"),
    )


def _parse_display(raw: dict[str, Any]) -> DisplayConfig:
    section = _section(raw, "display")
    defaults = DisplayConfig()
    anchor = section.get("path_anchor", defaults.path_anchor)
    return DisplayConfig(
        path_anchor="" if anchor is None else str(anchor),
        show_branches=_parse_bool(section, "show_branches", defaults.show_branches, "display"),
    )


def _parse_parse(raw: dict[str, Any]) -> ParseConfig:
    section = _section(raw, "parse")
    return ParseConfig(
        orphan_policy=str(section.get("orphan_policy", ParseConfig().orphan_policy)).lower(),
    )


def load_config(path: str | Path | None = None) -> LcovSummaryConfig:
    """Load ``.lcov-summary.yml`` from *path* (a file or directory).

    Falls back to defaults when the default file is missing or a section is
    absent.

    Raises:
        ConfigError: If an explicit *path* does not exist, or the file is not
            valid YAML.
    """
    if path is not None and not Path(path).exists():
        raise ConfigError(f"Config file not found: {path}")
    config_path = Path(path) if path is not None else Path.cwd()
    if config_path.is_dir():
        config_path = config_path / CONFIG_FILE_NAME

    raw: dict[str, Any] = {}
    if config_path.is_file():
        try:
            parsed = yaml.safe_load(config_path.read_text(encoding="utf-8"))
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Failed to load {config_path}: {e}") from e
        if isinstance(parsed, dict):
            raw = _resolve_dict(parsed)
        elif parsed is not None:
            logger.warning("Ignoring %s: top level is not a mapping", config_path)
    else:
        logger.debug("No config file at %s, using defaults", config_path)

    return LcovSummaryConfig(
        thresholds=_parse_thresholds(raw),
        display=_parse_display(raw),
        parse=_parse_parse(raw),
    )


def _validate_thresholds(thresholds: ThresholdConfig) -> list[str]:
    """Validate threshold settings."""
    max_percentage = 100.0
    errors: list[str] = []

    if not 0.0 <= thresholds.low <= max_percentage:
        errors.append(f"thresholds.low must be between 0 and 100 (got: {thresholds.low})")

    if not 0.0 <= thresholds.mid <= max_percentage:
        errors.append(f"thresholds.mid must be between 0 and 100 (got: {thresholds.mid})")

    if thresholds.low > thresholds.mid:
        errors.append(
            f"thresholds.low must not exceed thresholds.mid "
            f"(got: {thresholds.low} > {thresholds.mid})"
        )

    return errors


def _validate_parse(parse: ParseConfig) -> list[str]:
    """Validate parse settings."""
    valid = {policy.value for policy in OrphanPolicy}
    if parse.orphan_policy not in valid:
        return [
            f"parse.orphan_policy must be one of {', '.join(sorted(valid))} "
            f"(got: {parse.orphan_policy})"
        ]
    return []


def validate_config(config: LcovSummaryConfig) -> list[str]:
    """Validate the configuration and return a list of error messages.

    Returns an empty list if the configuration is valid.
    """
    errors: list[str] = []
    errors.extend(_validate_thresholds(config.thresholds))
    errors.extend(_validate_parse(config.parse))
    return errors
