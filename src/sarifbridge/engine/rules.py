"""Rule catalog lookup."""

from __future__ import annotations

from typing import Iterable, Mapping

from sarifbridge.schemas.sarif_models import SarifResult, SarifRule


def build_rule_index(rules: Iterable[SarifRule] | None) -> dict[str, SarifRule]:
    """Map rule id to rule; the last duplicate id wins."""
    return {rule.id: rule for rule in rules or ()}


def resolve_rule_text(result: SarifResult, rule_index: Mapping[str, SarifRule]) -> str:
    """Best available description: full, then short, then the result message."""
    rule = rule_index.get(result.rule_id)
    candidates = (
        rule.full_text if rule else None,
        rule.short_text if rule else None,
        result.message_text,
    )
    for candidate in candidates:
        if candidate is not None:
            return candidate
    return ""
