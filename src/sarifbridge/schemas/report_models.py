"""Output contracts: annotations, severity statistics and the final report."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import Field

from sarifbridge.constants import ANNOTATION_TYPE, REPORT_TYPE, SUMMARY_LIMIT
from sarifbridge.schemas.base import StrictSchemaModel
from sarifbridge.schemas.enums import Severity, Verdict

BITBUCKET_ANNOTATION_FIELDS = (
    "external_id",
    "annotation_type",
    "severity",
    "summary",
    "details",
    "path",
    "line",
)


class Annotation(StrictSchemaModel):
    """Normalized annotation produced for one finding."""

    external_id: str = Field(min_length=1)
    annotation_type: Literal["ISSUE"] = ANNOTATION_TYPE
    severity: Severity
    title: str = Field(max_length=SUMMARY_LIMIT)
    summary: str = Field(max_length=SUMMARY_LIMIT)
    message: str
    details: str
    path: str = Field(min_length=1)
    line: int = Field(ge=1)
    rule_id: str = Field(min_length=1)

    @property
    def identity_key(self) -> tuple[str, str, int]:
        return (self.rule_id, self.path, self.line)

    def to_bitbucket(self) -> dict[str, Any]:
        """Serialize to the Bitbucket annotation resource shape."""
        payload = self.model_dump(mode="json", include=set(BITBUCKET_ANNOTATION_FIELDS))
        return {key: payload[key] for key in BITBUCKET_ANNOTATION_FIELDS}


class SeverityStats(StrictSchemaModel):
    """Aggregate statistics over the deduplicated, sorted annotations."""

    counts: dict[Severity, int]
    highest: Severity
    rule_counts: dict[str, int] = Field(default_factory=dict)
    summary: str

    @property
    def total(self) -> int:
        return sum(self.counts.values())


class BitbucketReport(StrictSchemaModel):
    """Final payload handed to the delivery layer."""

    scan_id: str = Field(min_length=1)
    title: str = Field(min_length=1)
    report_type: Literal["SECURITY"] = REPORT_TYPE
    reporter: str = Field(min_length=1)
    result: Verdict
    details: str
    annotations: list[Annotation] = Field(default_factory=list)
    stats: SeverityStats
    total_findings: int = Field(ge=0)

    @property
    def truncated(self) -> bool:
        return self.total_findings > len(self.annotations)

    def report_resource(self) -> dict[str, Any]:
        """Body for the report create/update request."""
        return {
            "title": self.title,
            "report_type": self.report_type,
            "reporter": self.reporter,
            "result": self.result.value,
            "details": self.details,
        }

    def annotation_resources(self) -> list[dict[str, Any]]:
        return [annotation.to_bitbucket() for annotation in self.annotations]
