"""Severity inference tests."""

from __future__ import annotations

import pytest

from sarif_factory import make_result

from sarifbridge.engine.severity import (
    SeverityClassifier,
    classify_by_keywords,
    classify_by_level,
    resolve_strategy,
)
from sarifbridge.schemas.enums import Severity, SeverityStrategy
from sarifbridge.schemas.sarif_models import SarifResult


@pytest.mark.parametrize(
    ("rule_id", "text", "expected"),
    [
        ("js.sqli", "Possible SQL injection via string concatenation", Severity.CRITICAL),
        ("cmd", "Command Injection through child_process", Severity.CRITICAL),
        ("proto", "Prototype pollution in merge()", Severity.CRITICAL),
        ("fs", "Directory traversal when joining user paths", Severity.CRITICAL),
        ("generic.rce", "", Severity.CRITICAL),
        ("python_rce_eval", "", Severity.CRITICAL),
        ("web", "Reflected XSS in template", Severity.HIGH),
        ("web", "Cross-site request forgery protection disabled", Severity.HIGH),
        ("secrets", "Hardcoded password in config", Severity.HIGH),
        ("jwt.none-alg", "", Severity.HIGH),
        ("redirect", "Open redirect to untrusted URL", Severity.HIGH),
        ("crypto", "Use of MD5 for hashing", Severity.MEDIUM),
        ("tls", "Insecure configuration of the HTTP client", Severity.MEDIUM),
        ("style", "Prefer const over let", Severity.LOW),
    ],
)
def test_keyword_classes(rule_id: str, text: str, expected: Severity) -> None:
    """Keyword classes map onto the expected severity."""
    assert classify_by_keywords(rule_id, text) == expected


def test_first_matching_class_wins() -> None:
    """Text matching several classes takes the most severe listed first."""
    assert classify_by_keywords("x", "insecure token leads to SQL injection") == Severity.CRITICAL
    assert classify_by_keywords("x", "insecure JWT handling") == Severity.HIGH


def test_matching_is_case_insensitive_and_includes_rule_id() -> None:
    """Rule ids participate in matching regardless of case."""
    assert classify_by_keywords("Security.SQL Injection", "nothing here") == Severity.CRITICAL


def test_rce_is_not_matched_inside_words() -> None:
    """Words merely containing 'rce' are not remote code execution."""
    assert classify_by_keywords("perf", "Resource leak in source file") == Severity.LOW


@pytest.mark.parametrize(
    ("level", "expected"),
    [
        ("note", Severity.LOW),
        ("warning", Severity.MEDIUM),
        ("error", Severity.HIGH),
        ("none", Severity.LOW),
        (None, Severity.LOW),
        ("bogus", Severity.LOW),
    ],
)
def test_level_mapping(level: str | None, expected: Severity) -> None:
    """SARIF levels map onto three severities."""
    assert classify_by_level(level) == expected


def test_auto_strategy_requires_level_on_every_result() -> None:
    """AUTO never mixes strategies within a run."""
    with_levels = [
        SarifResult.model_validate(make_result("a", level="error")),
        SarifResult.model_validate(make_result("b", level="note")),
    ]
    mixed = with_levels + [SarifResult.model_validate(make_result("c"))]
    assert resolve_strategy(SeverityStrategy.AUTO, with_levels) == SeverityStrategy.LEVEL
    assert resolve_strategy(SeverityStrategy.AUTO, mixed) == SeverityStrategy.KEYWORD
    assert resolve_strategy(SeverityStrategy.AUTO, []) == SeverityStrategy.KEYWORD
    assert resolve_strategy(SeverityStrategy.LEVEL, mixed) == SeverityStrategy.LEVEL


def test_classifier_uses_bound_strategy() -> None:
    """A level classifier ignores keywords and vice versa."""
    result = SarifResult.model_validate(make_result("sqli", level="note"))
    text = "SQL injection"
    assert SeverityClassifier(SeverityStrategy.LEVEL).classify(result, text) == Severity.LOW
    assert SeverityClassifier(SeverityStrategy.KEYWORD).classify(result, text) == Severity.CRITICAL


def test_classifier_rejects_unresolved_auto() -> None:
    """AUTO must be settled per run before classification."""
    with pytest.raises(ValueError):
        SeverityClassifier(SeverityStrategy.AUTO)
