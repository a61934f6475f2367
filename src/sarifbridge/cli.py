"""CLI for SarifBridge."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any

import orjson
import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from sarifbridge.config import AppConfig, load_app_config
from sarifbridge.constants import PACKAGE_VERSION
from sarifbridge.delivery import BitbucketReportsClient
from sarifbridge.engine import convert
from sarifbridge.errors import SarifBridgeError
from sarifbridge.schemas.enums import Verdict
from sarifbridge.schemas.report_models import BitbucketReport
from sarifbridge.security.redaction import redact_text

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help="SarifBridge converts SARIF reports into Bitbucket code insights.",
)
console = Console(stderr=True)

INPUT_OPTION = typer.Option(
    None, "--input", "-i", help="SARIF file to read. Defaults to stdin."
)
CONFIG_OPTION = typer.Option(None, "--config", help="Path to a YAML settings file.")
MAX_ANNOTATIONS_OPTION = typer.Option(
    None, "--max-annotations", min=0, help="Maximum annotations to upload (default 100)."
)
FAIL_ON_HIGH_OPTION = typer.Option(
    False, "--fail-on-high", help="Fail the report when HIGH or CRITICAL findings exist."
)
FAIL_ON_CRITICAL_OPTION = typer.Option(
    False, "--fail-on-critical", help="Fail the report only on CRITICAL findings."
)
SEVERITY_STRATEGY_OPTION = typer.Option(
    None, "--severity-strategy", help="Severity inference: keyword, level or auto."
)
LINE_STRATEGY_OPTION = typer.Option(
    None, "--line-strategy", help="Line selection: end_first or start_first."
)
SUMMARY_STRATEGY_OPTION = typer.Option(
    None, "--summary-strategy", help="Summary text: truncate or first_sentence."
)
VERBOSE_OPTION = typer.Option(False, "--verbose", "-v", help="Enable debug logging.")


@app.command()
def version() -> None:
    """Print the SarifBridge version."""
    typer.echo(PACKAGE_VERSION)


@app.command("convert")
def convert_command(
    input_path: Path | None = INPUT_OPTION,
    config: Path | None = CONFIG_OPTION,
    output_format: str = typer.Option("json", "--format", help="Output format: json or table."),
    max_annotations: int | None = MAX_ANNOTATIONS_OPTION,
    fail_on_high: bool = FAIL_ON_HIGH_OPTION,
    fail_on_critical: bool = FAIL_ON_CRITICAL_OPTION,
    severity_strategy: str | None = SEVERITY_STRATEGY_OPTION,
    line_strategy: str | None = LINE_STRATEGY_OPTION,
    summary_strategy: str | None = SUMMARY_STRATEGY_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Convert SARIF and print the report without uploading it."""
    _configure_logging(verbose)
    if output_format not in {"json", "table"}:
        raise typer.BadParameter("format must be either 'json' or 'table'.")
    try:
        app_config = load_app_config(
            config,
            cli_overrides={
                "max_annotations": max_annotations,
                "fail_on_high": fail_on_high,
                "fail_on_critical": fail_on_critical,
                "severity_strategy": severity_strategy,
                "line_strategy": line_strategy,
                "summary_strategy": summary_strategy,
            },
        )
        report = convert(_read_input(input_path), app_config.policy)
    except (SarifBridgeError, ValueError, OSError) as exc:
        console.print(f"[red]Conversion failed:[/red] {redact_text(str(exc))}")
        raise typer.Exit(code=1) from exc

    if output_format == "table":
        _render_report_table(report)
    else:
        typer.echo(_report_json(report))


@app.command("upload")
def upload(
    input_path: Path | None = INPUT_OPTION,
    config: Path | None = CONFIG_OPTION,
    token: str | None = typer.Option(None, "--token", help="Bitbucket access token."),
    user: str | None = typer.Option(None, "--user", help="Bitbucket username."),
    password: str | None = typer.Option(None, "--password", help="Bitbucket app password."),
    workspace: str | None = typer.Option(None, "--workspace", help="Bitbucket workspace."),
    repo: str | None = typer.Option(None, "--repo", help="Repository slug."),
    commit: str | None = typer.Option(None, "--commit", help="Commit hash to report on."),
    max_annotations: int | None = MAX_ANNOTATIONS_OPTION,
    fail_on_high: bool = FAIL_ON_HIGH_OPTION,
    fail_on_critical: bool = FAIL_ON_CRITICAL_OPTION,
    severity_strategy: str | None = SEVERITY_STRATEGY_OPTION,
    line_strategy: str | None = LINE_STRATEGY_OPTION,
    summary_strategy: str | None = SUMMARY_STRATEGY_OPTION,
    exit_on_fail: bool = typer.Option(
        False, "--exit-on-fail", help="Exit with code 2 when the verdict is FAILED."
    ),
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Convert SARIF and publish it as a Bitbucket commit report."""
    _configure_logging(verbose)
    secrets = [value for value in (token, password) if value]
    try:
        app_config = load_app_config(
            config,
            cli_overrides={
                "token": token,
                "user": user,
                "password": password,
                "workspace": workspace,
                "repo": repo,
                "commit": commit,
                "max_annotations": max_annotations,
                "fail_on_high": fail_on_high,
                "fail_on_critical": fail_on_critical,
                "severity_strategy": severity_strategy,
                "line_strategy": line_strategy,
                "summary_strategy": summary_strategy,
            },
        )
        app_config.require_delivery()
        report = convert(_read_input(input_path), app_config.policy)
        with BitbucketReportsClient.from_config(app_config) as client:
            client.publish(report)
    except (SarifBridgeError, ValueError, OSError) as exc:
        console.print(f"[red]Upload failed:[/red] {redact_text(str(exc), secrets=secrets)}")
        raise typer.Exit(code=1) from exc

    _render_result_panel(report)
    if exit_on_fail and report.result == Verdict.FAILED:
        raise typer.Exit(code=2)


@app.command("validate-config")
def validate_config(config: Path | None = CONFIG_OPTION) -> None:
    """Validate configuration and print the resolved values."""
    try:
        app_config = load_app_config(config)
    except (ValueError, OSError) as exc:
        console.print(f"[red]Configuration validation failed:[/red] {redact_text(str(exc))}")
        raise typer.Exit(code=1) from exc
    _render_config_table(app_config)


def _read_input(input_path: Path | None) -> str:
    if input_path is None:
        return sys.stdin.read()
    return input_path.read_text(encoding="utf-8")


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _report_json(report: BitbucketReport) -> str:
    payload: dict[str, Any] = report.model_dump(mode="json")
    return orjson.dumps(payload, option=orjson.OPT_INDENT_2).decode("utf-8")


def _render_report_table(report: BitbucketReport) -> None:
    table = Table(title=report.title)
    table.add_column("Severity")
    table.add_column("Rule")
    table.add_column("Location")
    table.add_column("Summary")
    for annotation in report.annotations:
        table.add_row(
            annotation.severity.value,
            annotation.rule_id,
            f"{annotation.path}:{annotation.line}",
            annotation.summary,
        )
    Console().print(table)
    _render_result_panel(report)


def _render_result_panel(report: BitbucketReport) -> None:
    color = "red" if report.result == Verdict.FAILED else "green"
    counts = ", ".join(
        f"{severity.value}={count}" for severity, count in report.stats.counts.items()
    )
    lines = [
        f"result: [bold {color}]{report.result.value}[/bold {color}]",
        f"highest: {report.stats.highest.value}",
        f"counts: {counts}",
        f"annotations: {len(report.annotations)} of {report.total_findings}",
    ]
    console.print(Panel.fit("\n".join(lines), title=f"Report {report.scan_id}"))


def _render_config_table(config: AppConfig) -> None:
    table = Table(title="Resolved Configuration")
    table.add_column("Setting")
    table.add_column("Value")
    policy = config.policy
    rows = [
        ("max_annotations", str(policy.max_annotations)),
        ("fail_on_high", str(policy.fail_on_high)),
        ("fail_on_critical", str(policy.fail_on_critical)),
        ("severity_strategy", policy.severity_strategy.value),
        ("line_strategy", policy.line_strategy.value),
        ("summary_strategy", policy.summary_strategy.value),
        ("auth", "token" if config.credentials.uses_token else config.credentials.user or "-"),
        ("workspace", config.target.workspace or "-"),
        ("repo", config.target.repo or "-"),
        ("commit", config.target.commit or "-"),
        ("api_url", config.delivery.api_url),
    ]
    for name, value in rows:
        table.add_row(name, value)
    Console().print(table)
