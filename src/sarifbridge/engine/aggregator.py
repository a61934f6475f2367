"""Severity statistics, summary text and the pass/fail verdict."""

from __future__ import annotations

from collections import Counter
from typing import Sequence

from sarifbridge.config.models import ReportPolicy
from sarifbridge.schemas.enums import SEVERITY_ORDER, Severity, Verdict
from sarifbridge.schemas.report_models import Annotation, SeverityStats

# Bitbucket report details do not render newlines.
LINE_BREAK = "  "


def count_by_severity(annotations: Sequence[Annotation]) -> dict[Severity, int]:
    counts = {severity: 0 for severity in SEVERITY_ORDER}
    for annotation in annotations:
        counts[annotation.severity] += 1
    return counts


def highest_severity(counts: dict[Severity, int]) -> Severity:
    """Most severe rank with a non-zero count; LOW when nothing was found."""
    for severity in SEVERITY_ORDER:
        if counts.get(severity, 0) > 0:
            return severity
    return Severity.LOW


def format_summary(counts: dict[Severity, int], highest: Severity) -> str:
    lines = ["Security Scan Summary", "Findings by severity:"]
    lines.extend(f"• {severity.value}: {counts[severity]}" for severity in SEVERITY_ORDER)
    lines.append(f"Highest severity: {highest.value}")
    return LINE_BREAK.join(lines)


def aggregate(annotations: Sequence[Annotation]) -> SeverityStats:
    """Aggregate the deduplicated, sorted annotations before truncation."""
    counts = count_by_severity(annotations)
    highest = highest_severity(counts)
    rule_counts = Counter(annotation.rule_id for annotation in annotations)
    return SeverityStats(
        counts=counts,
        highest=highest,
        rule_counts=dict(sorted(rule_counts.items(), key=lambda item: (-item[1], item[0]))),
        summary=format_summary(counts, highest),
    )


def decide_verdict(highest: Severity, policy: ReportPolicy) -> Verdict:
    """Derive the scan verdict from the highest severity.

    CRITICAL always fails. HIGH fails under the default policy and whenever
    ``fail_on_high`` is set; ``fail_on_critical`` alone lets HIGH pass.
    """
    if highest == Severity.CRITICAL:
        return Verdict.FAILED
    if highest == Severity.HIGH:
        if policy.fail_on_high or not policy.fail_on_critical:
            return Verdict.FAILED
    return Verdict.PASSED
