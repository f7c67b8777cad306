"""Command line interface for covgap."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict
from pathlib import Path
from typing import Any

import click
import yaml
from rich.console import Console
from rich.logging import RichHandler

from covgap import __version__
from covgap.adapters.llvm_cov import LlvmCovAdapter
from covgap.analysis.engine import analyze
from covgap.config import CovgapConfig, check_thresholds, load_config, validate_config
from covgap.errors import CoverageParseError
from covgap.reporters.json_reporter import JSONReporter
from covgap.reporters.terminal import CLIReporter, reporter
from covgap.reporters.text import format_result

logger = logging.getLogger(__name__)

_LOG_FORMAT = "%(message)s"


def _configure_logging(level: str) -> None:
    """Route log records through rich on stderr."""
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.WARNING
    logging.basicConfig(
        level=numeric_level,
        format=_LOG_FORMAT,
        handlers=[RichHandler(console=reporter.console, show_path=False)],
        force=True,
    )


def _load_config_or_abort(config_path: str | None) -> CovgapConfig:
    try:
        return load_config(config_path)
    except (OSError, ValueError, yaml.YAMLError) as e:
        reporter.print_error(f"Failed to load configuration: {e}")
        raise click.Abort from e


def _read_report_input(path: Path | None) -> str:
    """Read export JSON from *path*, a directory holding one, or stdin."""
    if path is None:
        logger.debug("Reading coverage export from stdin")
        return click.get_text_stream("stdin").read()

    adapter = LlvmCovAdapter()
    if path.is_dir():
        found = adapter.find_export(path)
        if found is None:
            raise CoverageParseError(f"no llvm-cov export found in {path}")
        path = found

    logger.debug("Reading coverage export from %s", path)
    try:
        return path.read_text(encoding="utf-8")
    except OSError as e:
        raise CoverageParseError(f"failed to read {path}: {e}") from e


def _percentages(summary: Any) -> dict[str, float]:
    return {
        "lines": summary.lines_percent,
        "regions": summary.regions_percent,
        "branches": summary.branches_percent,
        "functions": summary.functions_percent,
    }


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging on stderr.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, resolve_path=True),
    default=None,
    help="Path to .covgap.yml (or a directory containing it).",
)
@click.version_option(version=__version__, prog_name="covgap")
@click.pass_context
def cli(ctx: click.Context, *, verbose: bool, config_path: str | None) -> None:
    """covgap: compact coverage gaps from llvm-cov export JSON."""
    ctx.ensure_object(dict)
    config = _load_config_or_abort(config_path)
    _configure_logging("DEBUG" if verbose else config.logging.level)
    ctx.obj["config"] = config
    ctx.obj["config_path"] = config_path


@cli.command("analyze")
@click.argument(
    "path",
    required=False,
    type=click.Path(exists=True, path_type=Path),
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default=None,
    help="Output format (default from config, else text).",
)
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write the report to a file instead of stdout.",
)
@click.option("--fail-under-lines", type=float, default=None, help="Minimum line coverage %.")
@click.option("--fail-under-regions", type=float, default=None, help="Minimum region coverage %.")
@click.option(
    "--fail-under-branches", type=float, default=None, help="Minimum branch coverage %."
)
@click.option(
    "--fail-under-functions", type=float, default=None, help="Minimum function coverage %."
)
@click.pass_context
def analyze_command(
    ctx: click.Context,
    path: Path | None,
    output_format: str | None,
    output: Path | None,
    fail_under_lines: float | None,
    fail_under_regions: float | None,
    fail_under_branches: float | None,
    fail_under_functions: float | None,
) -> None:
    """Analyze llvm-cov export JSON and print compact coverage gaps.

    Reads PATH (a JSON file, or a directory containing coverage.json), or
    stdin when PATH is omitted.

    Example:
      cargo llvm-cov --json | covgap analyze
    """
    config: CovgapConfig = ctx.obj["config"]
    overrides = {
        "line_threshold": fail_under_lines,
        "region_threshold": fail_under_regions,
        "branch_threshold": fail_under_branches,
        "function_threshold": fail_under_functions,
    }
    for name, value in overrides.items():
        if value is not None:
            setattr(config.coverage, name, value)

    try:
        report = LlvmCovAdapter().parse_string(_read_report_input(path))
    except CoverageParseError as e:
        reporter.print_error(str(e))
        raise click.Abort from e

    result = analyze(report)

    fmt = output_format or config.report.format
    if fmt == "json":
        json_reporter = JSONReporter()
        if output is not None:
            json_reporter.generate(output, result)
        else:
            click.echo(json_reporter.generate_string(result))
    elif output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(format_result(result), encoding="utf-8")
        logger.info("Report written to %s", output)
    else:
        click.echo(format_result(result), nl=False)

    reporter.print_diagnostics(result, show_warnings=config.report.show_warnings)

    failures = check_thresholds(config.coverage, _percentages(result.summary))
    reporter.print_threshold_failures(failures)
    if failures or not result.ok:
        raise click.Abort


@cli.command("summary")
@click.argument(
    "path",
    required=False,
    type=click.Path(exists=True, path_type=Path),
)
def summary_command(path: Path | None) -> None:
    """Print a per-file coverage table for an llvm-cov export."""
    try:
        report = LlvmCovAdapter().parse_string(_read_report_input(path))
    except CoverageParseError as e:
        reporter.print_error(str(e))
        raise click.Abort from e

    result = analyze(report)
    excluded = {error.path for error in result.errors}
    files = [file for file in report.files if file.path not in excluded]
    CLIReporter(Console()).print_coverage_summary(files, result.summary)
    reporter.print_diagnostics(result, show_warnings=False)


@cli.group("config")
def config_group() -> None:
    """Inspect `.covgap.yml` configuration."""


@config_group.command("show")
@click.option(
    "--json-output",
    "as_json",
    is_flag=True,
    help="Output as JSON instead of YAML.",
)
@click.pass_context
def config_show(ctx: click.Context, *, as_json: bool) -> None:
    """Display the resolved configuration."""
    config: CovgapConfig = ctx.obj["config"]
    config_dict = asdict(config)
    config_dict.pop("raw", None)

    if as_json:
        click.echo(json.dumps(config_dict, indent=2))
    else:
        click.echo(yaml.safe_dump(config_dict, sort_keys=False, default_flow_style=False))


@config_group.command("validate")
@click.pass_context
def config_validate(ctx: click.Context) -> None:
    """Validate `.covgap.yml` configuration values."""
    config: CovgapConfig = ctx.obj["config"]
    errors = validate_config(config)

    if not errors:
        reporter.print_success("Configuration is valid!")
        return

    reporter.print_error(f"Found {len(errors)} configuration error(s):")
    for idx, error in enumerate(errors, start=1):
        reporter.console.print(f"  {idx}. [red]{error}[/red]")
    raise click.Abort


def main() -> None:
    """Console script entry point."""
    cli(obj={})


if __name__ == "__main__":
    main()
