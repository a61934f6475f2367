"""Raw SARIF results to normalized annotations."""

from __future__ import annotations

from typing import Iterable, Mapping
from uuid import uuid4

from sarifbridge.config.models import ReportPolicy
from sarifbridge.constants import ANNOTATION_TYPE
from sarifbridge.engine.paths import normalize_path
from sarifbridge.engine.rules import build_rule_index, resolve_rule_text
from sarifbridge.engine.severity import SeverityClassifier
from sarifbridge.engine.summarizer import summarize
from sarifbridge.schemas.enums import LineStrategy
from sarifbridge.schemas.report_models import Annotation
from sarifbridge.schemas.sarif_models import SarifRegion, SarifResult, SarifRule, SarifRun


def select_line(region: SarifRegion | None, strategy: LineStrategy) -> int:
    """Pick the annotated line; unknown or non-positive lines become 1."""
    if region is None:
        return 1
    if strategy == LineStrategy.END_FIRST:
        candidates = (region.end_line, region.start_line)
    else:
        candidates = (region.start_line,)
    for candidate in candidates:
        if candidate is not None and candidate >= 1:
            return candidate
    return 1


def map_result(
    result: SarifResult,
    *,
    rule_index: Mapping[str, SarifRule],
    classifier: SeverityClassifier,
    policy: ReportPolicy,
    cwd: str | None = None,
) -> Annotation:
    """Convert one raw finding into an annotation with a fresh identifier."""
    full_text = resolve_rule_text(result, rule_index)
    short_text = summarize(full_text, strategy=policy.summary_strategy)
    return Annotation(
        external_id=str(uuid4()),
        annotation_type=ANNOTATION_TYPE,
        severity=classifier.classify(result, full_text),
        title=short_text,
        summary=short_text,
        message=full_text,
        details=full_text,
        path=normalize_path(result.artifact_uri, cwd=cwd),
        line=select_line(result.region, policy.line_strategy),
        rule_id=result.rule_id,
    )


def map_run(
    run: SarifRun,
    policy: ReportPolicy,
    *,
    cwd: str | None = None,
) -> list[Annotation]:
    """Map every result of a run, in input order."""
    rule_index = build_rule_index(run.tool.driver.rules)
    classifier = SeverityClassifier.for_run(policy.severity_strategy, run.results)
    return list(
        _map_results(
            run.results,
            rule_index=rule_index,
            classifier=classifier,
            policy=policy,
            cwd=cwd,
        )
    )


def _map_results(
    results: Iterable[SarifResult],
    *,
    rule_index: Mapping[str, SarifRule],
    classifier: SeverityClassifier,
    policy: ReportPolicy,
    cwd: str | None,
) -> Iterable[Annotation]:
    for result in results:
        yield map_result(
            result,
            rule_index=rule_index,
            classifier=classifier,
            policy=policy,
            cwd=cwd,
        )
