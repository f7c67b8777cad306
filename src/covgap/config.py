"""Configuration parsing from ``.covgap.yml``."""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = ".covgap.yml"

_ENV_VAR_RE = re.compile(r"\$\{(\w+)\}")

_OUTPUT_FORMATS = ("text", "json")
_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


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
        else:
            result[key] = value
    return result


@dataclass
class ReportConfig:
    """Output configuration."""

    format: str = "text"
    """Output format: text or json."""

    show_warnings: bool = True
    """Print data-consistency warnings on stderr."""


@dataclass
class CoverageConfig:
    """Minimum coverage percentages; 0 disables a check."""

    line_threshold: float = 0.0
    """Minimum acceptable line coverage percentage."""

    region_threshold: float = 0.0
    """Minimum acceptable region coverage percentage."""

    branch_threshold: float = 0.0
    """Minimum acceptable branch coverage percentage."""

    function_threshold: float = 0.0
    """Minimum acceptable function coverage percentage."""


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "WARNING"
    """Root log level when ``--verbose`` is not given."""


@dataclass
class CovgapConfig:
    """Complete covgap configuration from ``.covgap.yml``."""

    report: ReportConfig = field(default_factory=ReportConfig)
    """Output configuration."""

    coverage: CoverageConfig = field(default_factory=CoverageConfig)
    """Coverage threshold configuration."""

    logging: LoggingConfig = field(default_factory=LoggingConfig)
    """Logging configuration."""

    source: str = ""
    """Path the configuration was loaded from (empty when defaults are used)."""

    raw: dict[str, Any] = field(default_factory=dict)
    """Raw parsed YAML for extension/debugging."""


def _section(raw: dict[str, Any], name: str) -> dict[str, Any]:
    section = raw.get(name, {})
    if not isinstance(section, dict):
        logger.warning("Ignoring config section %r: expected a mapping", name)
        return {}
    return section


def _parse_report_config(raw: dict[str, Any]) -> ReportConfig:
    """Parse report configuration from raw YAML."""
    report_raw = _section(raw, "report")
    return ReportConfig(
        format=str(report_raw.get("format", os.environ.get("COVGAP_FORMAT", "text"))),
        show_warnings=bool(report_raw.get("show_warnings", True)),
    )


def _threshold(coverage_raw: dict[str, Any], name: str) -> float:
    value = coverage_raw.get(name, 0.0)
    try:
        return float(value)
    except (TypeError, ValueError):
        logger.warning("Ignoring coverage.%s: %r is not a number", name, value)
        return 0.0


def _parse_coverage_config(raw: dict[str, Any]) -> CoverageConfig:
    """Parse coverage threshold configuration from raw YAML."""
    coverage_raw = _section(raw, "coverage")
    return CoverageConfig(
        line_threshold=_threshold(coverage_raw, "line_threshold"),
        region_threshold=_threshold(coverage_raw, "region_threshold"),
        branch_threshold=_threshold(coverage_raw, "branch_threshold"),
        function_threshold=_threshold(coverage_raw, "function_threshold"),
    )


def _parse_logging_config(raw: dict[str, Any]) -> LoggingConfig:
    """Parse logging configuration from raw YAML."""
    logging_raw = _section(raw, "logging")
    level = logging_raw.get("level", os.environ.get("COVGAP_LOG_LEVEL", "WARNING"))
    return LoggingConfig(level=str(level).upper())


def load_config(path: str | Path | None = None) -> CovgapConfig:
    """Load and parse a ``.covgap.yml`` configuration.

    Args:
        path: Config file, or a directory containing ``.covgap.yml``.
            Defaults to the current directory.

    Falls back to defaults and environment variables when the file is
    missing or incomplete.
    """
    config_path = Path(path) if path is not None else Path.cwd()
    if config_path.is_dir():
        config_path = config_path / CONFIG_FILE_NAME

    raw: dict[str, Any] = {}
    source = ""
    if config_path.is_file():
        parsed = yaml.safe_load(config_path.read_text(encoding="utf-8"))
        source = str(config_path)
        if isinstance(parsed, dict):
            raw = _resolve_dict(parsed)
        elif parsed is not None:
            logger.warning("Ignoring %s: top level is not a mapping", config_path)
    else:
        logger.debug("No config file at %s, using defaults", config_path)

    return CovgapConfig(
        report=_parse_report_config(raw),
        coverage=_parse_coverage_config(raw),
        logging=_parse_logging_config(raw),
        source=source,
        raw=raw,
    )


def _validate_report_config(report: ReportConfig) -> list[str]:
    errors: list[str] = []
    if report.format not in _OUTPUT_FORMATS:
        errors.append(
            f"report.format must be one of {', '.join(_OUTPUT_FORMATS)} (got: {report.format})"
        )
    return errors


def _validate_coverage_config(coverage: CoverageConfig) -> list[str]:
    """Validate coverage threshold settings."""
    max_percentage = 100.0
    errors: list[str] = []

    for name in ("line_threshold", "region_threshold", "branch_threshold", "function_threshold"):
        value = getattr(coverage, name)
        if not 0.0 <= value <= max_percentage:
            errors.append(f"coverage.{name} must be between 0 and 100 (got: {value})")

    return errors


def _validate_logging_config(logging_config: LoggingConfig) -> list[str]:
    errors: list[str] = []
    if logging_config.level not in _LOG_LEVELS:
        errors.append(
            f"logging.level must be one of {', '.join(_LOG_LEVELS)} (got: {logging_config.level})"
        )
    return errors


def validate_config(config: CovgapConfig) -> list[str]:
    """Validate the configuration and return a list of error messages.

    Returns an empty list if the configuration is valid.
    """
    errors: list[str] = []
    errors.extend(_validate_report_config(config.report))
    errors.extend(_validate_coverage_config(config.coverage))
    errors.extend(_validate_logging_config(config.logging))
    return errors


def check_thresholds(coverage: CoverageConfig, percentages: dict[str, float]) -> list[str]:
    """Return a message for every category below its configured threshold.

    Args:
        coverage: Threshold configuration.
        percentages: Category name (lines, regions, branches, functions) to
            achieved percentage.
    """
    thresholds = {
        "lines": coverage.line_threshold,
        "regions": coverage.region_threshold,
        "branches": coverage.branch_threshold,
        "functions": coverage.function_threshold,
    }
    return [
        f"{category} coverage {percentages[category]:.1f}% is below threshold {threshold:.1f}%"
        for category, threshold in thresholds.items()
        if threshold > 0 and percentages[category] < threshold
    ]
