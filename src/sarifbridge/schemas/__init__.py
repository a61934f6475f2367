"""Schema contract exports."""

from sarifbridge.schemas.enums import (
    LineStrategy,
    Severity,
    SeverityStrategy,
    SummaryStrategy,
    Verdict,
)
from sarifbridge.schemas.report_models import Annotation, BitbucketReport, SeverityStats
from sarifbridge.schemas.sarif_models import SarifReport, SarifResult, SarifRule, SarifRun

__all__ = [
    "Annotation",
    "BitbucketReport",
    "LineStrategy",
    "SarifReport",
    "SarifResult",
    "SarifRule",
    "SarifRun",
    "Severity",
    "SeverityStats",
    "SeverityStrategy",
    "SummaryStrategy",
    "Verdict",
]
