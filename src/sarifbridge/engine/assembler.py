"""Report assembly: the engine entry point."""

from __future__ import annotations

import logging
import re

import orjson
from pydantic import ValidationError

from sarifbridge.config.models import ReportPolicy
from sarifbridge.engine.aggregator import aggregate, decide_verdict
from sarifbridge.engine.mapper import map_run
from sarifbridge.engine.ordering import dedupe_and_sort
from sarifbridge.errors import MalformedReportError
from sarifbridge.schemas.report_models import Annotation, BitbucketReport
from sarifbridge.schemas.sarif_models import SarifReport

LOGGER = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")


def parse_report(raw: str | bytes) -> SarifReport:
    """Decode and validate a SARIF document read to completion."""
    try:
        payload = orjson.loads(raw)
    except orjson.JSONDecodeError as exc:
        raise MalformedReportError(f"Input is not valid JSON: {exc}") from exc
    if not isinstance(payload, dict):
        raise MalformedReportError("SARIF document must be a JSON object")
    try:
        return SarifReport.model_validate(payload)
    except ValidationError as exc:
        raise MalformedReportError(f"Input is not a usable SARIF report: {exc}") from exc


def scan_id_for(tool_name: str) -> str:
    """Lower-cased tool name with all whitespace removed."""
    return _WHITESPACE.sub("", tool_name).lower()


def truncate(annotations: list[Annotation], max_annotations: int) -> list[Annotation]:
    """Keep the leading ``max_annotations`` entries without reordering."""
    return annotations[:max_annotations]


def assemble_report(
    report: SarifReport,
    policy: ReportPolicy | None = None,
    *,
    cwd: str | None = None,
) -> BitbucketReport:
    """Transform a parsed SARIF report into the payload for delivery."""
    if policy is None:
        policy = ReportPolicy()
    run = report.primary_run
    if len(report.runs) > 1:
        LOGGER.warning(
            "SARIF report contains %d runs; only the first (%s) is converted",
            len(report.runs),
            run.tool_name,
        )

    ordered = dedupe_and_sort(map_run(run, policy, cwd=cwd))
    stats = aggregate(ordered)
    verdict = decide_verdict(stats.highest, policy)
    annotations = truncate(ordered, policy.max_annotations)
    if len(annotations) < len(ordered):
        LOGGER.debug(
            "Truncated annotations from %d to %d", len(ordered), len(annotations)
        )

    return BitbucketReport(
        scan_id=scan_id_for(run.tool_name),
        title=f"{run.tool_name} Security Scan",
        reporter=policy.reporter,
        result=verdict,
        details=stats.summary,
        annotations=annotations,
        stats=stats,
        total_findings=len(ordered),
    )


def convert(
    raw: str | bytes,
    policy: ReportPolicy | None = None,
    *,
    cwd: str | None = None,
) -> BitbucketReport:
    """Parse and assemble in one step."""
    return assemble_report(parse_report(raw), policy, cwd=cwd)
