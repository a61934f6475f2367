"""Bounded-length titles for annotation summaries."""

from __future__ import annotations

import re

from sarifbridge.constants import ELLIPSIS, SUMMARY_LIMIT
from sarifbridge.schemas.enums import SummaryStrategy

_SENTENCE_END = re.compile(r"[.!?](?=\s|$)")


def summarize(
    text: str | None,
    *,
    limit: int = SUMMARY_LIMIT,
    strategy: SummaryStrategy = SummaryStrategy.TRUNCATE,
) -> str:
    """Reduce ``text`` to at most ``limit`` characters.

    Short text is returned trimmed but otherwise unchanged, so summarizing a
    summary is a no-op. Longer text is cut at the last whitespace inside the
    limit and marked with an ellipsis.
    """
    if not text:
        return ""
    text = text.strip()
    if strategy == SummaryStrategy.FIRST_SENTENCE:
        sentence = first_sentence(text)
        if sentence and len(sentence) <= limit:
            return sentence
    if len(text) <= limit:
        return text
    return _truncate_at_whitespace(text, limit)


def first_sentence(text: str) -> str:
    """Return the leading sentence of ``text`` including its terminator."""
    match = _SENTENCE_END.search(text)
    if match is None:
        return text.strip()
    return text[: match.end()].strip()


def _truncate_at_whitespace(text: str, limit: int) -> str:
    budget = limit - len(ELLIPSIS)
    cut = _back_off(text[:limit])
    if len(cut) > budget:
        cut = _back_off(cut[:budget])
    return cut + ELLIPSIS


def _back_off(cut: str) -> str:
    boundary = _last_whitespace(cut)
    if boundary <= 0:
        return cut
    return cut[:boundary].rstrip()


def _last_whitespace(text: str) -> int:
    for index in range(len(text) - 1, -1, -1):
        if text[index].isspace():
            return index
    return -1
