"""Enum definitions for canonical contracts."""

from __future__ import annotations

from enum import Enum


class Severity(str, Enum):
    CRITICAL = "CRITICAL"
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


class Verdict(str, Enum):
    PASSED = "PASSED"
    FAILED = "FAILED"


class SeverityStrategy(str, Enum):
    KEYWORD = "keyword"
    LEVEL = "level"
    AUTO = "auto"


class LineStrategy(str, Enum):
    START_FIRST = "start_first"
    END_FIRST = "end_first"


class SummaryStrategy(str, Enum):
    TRUNCATE = "truncate"
    FIRST_SENTENCE = "first_sentence"


SEVERITY_ORDER: dict[Severity, int] = {
    Severity.CRITICAL: 0,
    Severity.HIGH: 1,
    Severity.MEDIUM: 2,
    Severity.LOW: 3,
}


def severity_rank(severity: Severity) -> int:
    """Return the sort rank of a severity (0 is most severe)."""
    return SEVERITY_ORDER[severity]


def normalize_enum_value(enum_cls: type[Enum], raw_value: str | Enum) -> Enum:
    """Map user-supplied labels such as ``End-First`` onto enum members."""
    if isinstance(raw_value, enum_cls):
        return raw_value
    normalized = str(raw_value).strip().lower().replace("-", "_")
    for member in enum_cls:
        if member.value == normalized:
            return member
    raise ValueError(f"Unsupported {enum_cls.__name__} value: {raw_value}")
