"""SARIF to Bitbucket annotation engine."""

from sarifbridge.engine.aggregator import aggregate, decide_verdict
from sarifbridge.engine.assembler import assemble_report, convert, parse_report
from sarifbridge.engine.mapper import map_result, map_run
from sarifbridge.engine.ordering import dedupe_and_sort, deduplicate, sort_by_severity
from sarifbridge.engine.paths import normalize_path
from sarifbridge.engine.rules import build_rule_index, resolve_rule_text
from sarifbridge.engine.severity import SeverityClassifier, classify_by_keywords
from sarifbridge.engine.summarizer import summarize

__all__ = [
    "SeverityClassifier",
    "aggregate",
    "assemble_report",
    "build_rule_index",
    "classify_by_keywords",
    "convert",
    "decide_verdict",
    "dedupe_and_sort",
    "deduplicate",
    "map_result",
    "map_run",
    "normalize_path",
    "parse_report",
    "resolve_rule_text",
    "sort_by_severity",
    "summarize",
]
