"""Deduplication and severity ordering of annotations."""

from __future__ import annotations

import logging
from typing import Iterable

from sarifbridge.schemas.enums import severity_rank
from sarifbridge.schemas.report_models import Annotation

LOGGER = logging.getLogger(__name__)


def deduplicate(annotations: Iterable[Annotation]) -> list[Annotation]:
    """Collapse annotations sharing ``(rule_id, path, line)``.

    The last occurrence wins and keeps the slot of the first one.
    """
    unique: dict[tuple[str, str, int], Annotation] = {}
    seen = 0
    for annotation in annotations:
        seen += 1
        unique[annotation.identity_key] = annotation
    if seen != len(unique):
        LOGGER.debug("Collapsed %d duplicate annotation(s)", seen - len(unique))
    return list(unique.values())


def sort_by_severity(annotations: Iterable[Annotation]) -> list[Annotation]:
    """Stable sort, CRITICAL first."""
    return sorted(annotations, key=lambda annotation: severity_rank(annotation.severity))


def dedupe_and_sort(annotations: Iterable[Annotation]) -> list[Annotation]:
    return sort_by_severity(deduplicate(annotations))
