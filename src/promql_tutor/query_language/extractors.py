"""Extraction of label matchers and grouping labels from syntax nodes."""

from __future__ import annotations

import logging
from typing import cast

from promql_tutor.query_language.ast import LabelMatcher, MatchOperator
from promql_tutor.query_language.syntax import SyntaxNode


logger = logging.getLogger("promql_tutor")

MATCHER_NODE_NAMES = frozenset({"LabelMatcher", "UnquotedLabelMatcher", "QuotedLabelMatcher"})
NON_EQUAL_OPERATORS = frozenset({"!=", "=~", "!~"})


def strip_quotes(text: str) -> str:
    """Drop the first and last character of a quoted literal."""
    return text[1:-1]


def _label_name(matcher: SyntaxNode, query: str) -> str | None:
    label = matcher.get_child("LabelName")
    if label is not None:
        return label.text(query)
    quoted = matcher.get_child("QuotedLabelName")
    if quoted is not None:
        return strip_quotes(quoted.text(query))
    return None


def extract_label_matchers(node: SyntaxNode, query: str) -> list[LabelMatcher]:
    """Collect matchers from a ``LabelMatchers`` node in encounter order.

    Matchers missing a label name or a value are skipped, so partially typed
    selectors still produce the matchers that are complete.
    """
    matchers: list[LabelMatcher] = []
    for child in node.children:
        if child.name not in MATCHER_NODE_NAMES:
            continue
        name = _label_name(child, query)
        value_node = child.get_child("StringLiteral")
        if name is None or value_node is None:
            logger.debug("Skipping incomplete label matcher: %r", child.text(query))
            continue

        op: MatchOperator = "="
        op_node = child.get_child("MatchOp")
        if op_node is not None:
            op_text = op_node.text(query)
            if op_text in NON_EQUAL_OPERATORS:
                op = cast(MatchOperator, op_text)

        matchers.append(LabelMatcher(name, op, strip_quotes(value_node.text(query))))
    return matchers


def extract_grouping_labels(node: SyntaxNode, query: str) -> list[str]:
    """Collect label names from a ``GroupingLabels`` node, keeping duplicates."""
    return [child.text(query) for child in node.children if child.name == "LabelName"]
