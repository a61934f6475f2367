"""Severity inference for raw findings."""

from __future__ import annotations

import logging
import re
from typing import Iterable

from sarifbridge.schemas.enums import Severity, SeverityStrategy
from sarifbridge.schemas.sarif_models import SarifResult

LOGGER = logging.getLogger(__name__)

# Ordered, first match wins.
KEYWORD_RULES: tuple[tuple[Severity, re.Pattern[str]], ...] = (
    (
        Severity.CRITICAL,
        re.compile(
            r"(?<![a-z])rce(?![a-z])|remote code|command injection|prototype pollution|sql injection"
            r"|path traversal|directory traversal|arbitrary file write|takeover"
        ),
    ),
    (
        Severity.HIGH,
        re.compile(
            r"csrf|xss|cross[- ]site|auth bypass|authentication bypass|authorization"
            r"|hardcoded|jwt|token|insecure deserialization|open redirect"
        ),
    ),
    (
        Severity.MEDIUM,
        re.compile(
            r"missing integrity|weak crypt|md5|sha1|audit|insecure configuration"
            r"|skip-tls|insecure"
        ),
    ),
)

LEVEL_SEVERITY: dict[str, Severity] = {
    "none": Severity.LOW,
    "note": Severity.LOW,
    "warning": Severity.MEDIUM,
    "error": Severity.HIGH,
}


def classify_by_keywords(rule_id: str, text: str) -> Severity:
    """Infer severity from keyword classes over rule id and description."""
    haystack = f"{rule_id} {text}".lower()
    for severity, pattern in KEYWORD_RULES:
        if pattern.search(haystack):
            return severity
    return Severity.LOW


def classify_by_level(level: str | None) -> Severity:
    """Map a SARIF result level onto a severity; unknown levels are LOW."""
    if not level:
        return Severity.LOW
    return LEVEL_SEVERITY.get(level.lower(), Severity.LOW)


def resolve_strategy(
    strategy: SeverityStrategy,
    results: Iterable[SarifResult],
) -> SeverityStrategy:
    """Settle AUTO into one concrete strategy for the whole run."""
    if strategy != SeverityStrategy.AUTO:
        return strategy
    results = list(results)
    if results and all(result.level for result in results):
        resolved = SeverityStrategy.LEVEL
    else:
        resolved = SeverityStrategy.KEYWORD
    LOGGER.debug("Severity strategy auto-resolved to %s", resolved.value)
    return resolved


class SeverityClassifier:
    """Classifier bound to a single concrete strategy for one run."""

    def __init__(self, strategy: SeverityStrategy) -> None:
        if strategy == SeverityStrategy.AUTO:
            raise ValueError("AUTO must be resolved before building a classifier")
        self.strategy = strategy

    @classmethod
    def for_run(
        cls,
        strategy: SeverityStrategy,
        results: Iterable[SarifResult],
    ) -> "SeverityClassifier":
        return cls(resolve_strategy(strategy, results))

    def classify(self, result: SarifResult, text: str) -> Severity:
        if self.strategy == SeverityStrategy.LEVEL:
            return classify_by_level(result.level)
        return classify_by_keywords(result.rule_id, text)
