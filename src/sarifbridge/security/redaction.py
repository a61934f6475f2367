"""Redaction utilities for credentials in logs and error messages."""

from __future__ import annotations

import re
from typing import Any, Iterable

REDACTED = "[REDACTED]"
SENSITIVE_PATTERNS = [
    re.compile(r"\bATBB[A-Za-z0-9_=-]{16,}\b"),
    re.compile(r"\bATCTT3x[A-Za-z0-9_=-]{16,}\b"),
    re.compile(r"\bATATT3x[A-Za-z0-9_=-]{16,}\b"),
]
PREFIXED_PATTERNS = [
    re.compile(r"(?i)\b(authorization\s*:\s*(?:bearer|basic)\s+)[A-Za-z0-9._:+/=-]+"),
    re.compile(r"(?i)\b((?:app[-_ ]?)?password\s*[=:]\s*)[\"']?[^\s\"']{4,}[\"']?"),
    re.compile(r"(?i)\b(token\s*[=:]\s*)[\"']?[A-Za-z0-9._:=-]{8,}[\"']?"),
]


def redact_text(value: str, *, secrets: Iterable[str] = ()) -> str:
    """Redact credentials from a text value.

    ``secrets`` are literal values known to be sensitive, such as the token
    supplied on the command line.
    """
    redacted = value
    for secret in secrets:
        if secret:
            redacted = redacted.replace(secret, REDACTED)
    for pattern in SENSITIVE_PATTERNS:
        redacted = pattern.sub(REDACTED, redacted)
    for pattern in PREFIXED_PATTERNS:
        redacted = pattern.sub(r"\1" + REDACTED, redacted)
    return redacted


def redact_mapping(value: Any) -> Any:
    """Recursively redact strings in nested dictionaries/lists."""
    if isinstance(value, str):
        return redact_text(value)
    if isinstance(value, dict):
        return {k: redact_mapping(v) for k, v in value.items()}
    if isinstance(value, list):
        return [redact_mapping(item) for item in value]
    return value
