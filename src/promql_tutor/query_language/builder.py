"""Conversion of concrete syntax trees into explanation ASTs."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import cast

from promql_tutor.query_language.ast import (
    Aggregation,
    BinaryExpr,
    ErrorNode,
    FunctionCall,
    MatrixSelector,
    NumberLiteral,
    ParenExpr,
    ParsedNode,
    StringLiteral,
    Subquery,
    UnaryExpr,
    VectorSelector,
)
from promql_tutor.query_language.duration import DEFAULT_DURATION_MS, parse_duration
from promql_tutor.query_language.extractors import (
    extract_grouping_labels,
    extract_label_matchers,
    strip_quotes,
)
from promql_tutor.query_language.syntax import SyntaxNode


logger = logging.getLogger("promql_tutor")


EXPRESSION_NODE_NAMES = frozenset(
    {
        "Expr",
        "AggregateExpr",
        "FunctionCall",
        "BinaryExpr",
        "VectorSelector",
        "MatrixSelector",
        "SubqueryExpr",
        "NumberLiteral",
        "NumberDurationLiteral",
        "StringLiteral",
        "ParenExpr",
        "UnaryExpr",
        "StepInvariantExpr",
        "OffsetExpr",
    }
)

BINARY_OPERATOR_NODE_NAMES = frozenset(
    {
        "Add",
        "Sub",
        "Mul",
        "Div",
        "Mod",
        "Pow",
        "Eql",
        "Neq",
        "Lss",
        "Lte",
        "Gtr",
        "Gte",
        "And",
        "Or",
        "Unless",
        "Atan2",
    }
)

DURATION_NODE_NAMES = ("Duration", "NumberDurationLiteralInDurationContext")


def is_expression_node(node: SyntaxNode) -> bool:
    """Return whether the node kind produces an expression."""
    return node.name in EXPRESSION_NODE_NAMES


def _is_operator_node(node: SyntaxNode) -> bool:
    return "Op" in node.name or node.name in BINARY_OPERATOR_NODE_NAMES


def _first_expression_child(node: SyntaxNode) -> SyntaxNode | None:
    return next((child for child in node.children if is_expression_node(child)), None)


def _build_expression_children(node: SyntaxNode, query: str) -> tuple[ParsedNode, ...]:
    return tuple(build_ast(child, query) for child in node.children if is_expression_node(child))


def _build_wrapper(node: SyntaxNode, query: str, text: str) -> ParsedNode:
    child = node.first_child
    if child is None:
        return ErrorNode(text)
    return build_ast(child, query)


def _build_aggregation(node: SyntaxNode, query: str, text: str) -> Aggregation:
    operator = node.get_child("AggregateOp")
    modifier = node.get_child("AggregateModifier")
    body = node.get_child("FunctionCallBody")

    grouping: list[str] = []
    without = False
    if modifier is not None:
        without = modifier.get_child("Without") is not None
        labels = modifier.get_child("GroupingLabels")
        if labels is not None:
            grouping = extract_grouping_labels(labels, query)

    children: tuple[ParsedNode, ...] = ()
    if body is not None:
        first = body.first_child
        if first is not None and is_expression_node(first):
            children = (build_ast(first, query),)

    return Aggregation(
        text,
        op=operator.text(query).lower() if operator is not None else "unknown",
        grouping=tuple(grouping),
        without=without,
        children=children,
    )


def _build_function_call(node: SyntaxNode, query: str, text: str) -> FunctionCall:
    identifier = node.get_child("FunctionIdentifier")
    body = node.get_child("FunctionCallBody")
    return FunctionCall(
        text,
        func_name=identifier.text(query) if identifier is not None else "unknown",
        args=_build_expression_children(body, query) if body is not None else (),
    )


def _build_binary(node: SyntaxNode, query: str, text: str) -> BinaryExpr:
    operator = ""
    operands: list[ParsedNode] = []
    for child in node.children:
        if is_expression_node(child):
            operands.append(build_ast(child, query))
        elif _is_operator_node(child):
            operator = child.text(query)
    if len(operands) != 2:
        logger.debug("Binary expression with %d operands: %r", len(operands), text)
    return BinaryExpr(text, op=operator, children=tuple(operands))


def _build_vector_selector(node: SyntaxNode, query: str, text: str) -> VectorSelector:
    identifier = node.get_child("Identifier", "MetricIdentifier")
    matchers = node.get_child("LabelMatchers")
    return VectorSelector(
        text,
        name=identifier.text(query) if identifier is not None else "",
        matchers=tuple(extract_label_matchers(matchers, query)) if matchers is not None else (),
    )


def _build_matrix_selector(node: SyntaxNode, query: str, text: str) -> ParsedNode:
    duration = node.get_child(*DURATION_NODE_NAMES)
    window = parse_duration(duration.text(query)) if duration is not None else DEFAULT_DURATION_MS

    vector = node.get_child("VectorSelector")
    if vector is not None:
        selector = cast(VectorSelector, build_ast(vector, query))
        return MatrixSelector(text, name=selector.name, matchers=selector.matchers, range=window)

    # A range applied directly to a call is explained as the call itself.
    call = node.get_child("FunctionCall")
    if call is not None:
        return build_ast(call, query)

    return MatrixSelector(text, range=window)


def _build_subquery(node: SyntaxNode, query: str, text: str) -> Subquery:
    inner = _first_expression_child(node)
    durations = node.get_children("Duration")
    return Subquery(
        text,
        children=(build_ast(inner, query),) if inner is not None else (),
        range=parse_duration(durations[0].text(query)) if durations else None,
        step=parse_duration(durations[1].text(query)) if len(durations) > 1 else None,
    )


def _build_offset(node: SyntaxNode, query: str, text: str) -> ParsedNode:
    inner = _first_expression_child(node)
    if inner is None:
        return ErrorNode(text)
    built = build_ast(inner, query)
    duration = node.get_child("Duration")
    if duration is None or not isinstance(built, VectorSelector | MatrixSelector):
        return built
    offset = parse_duration(duration.text(query))
    if node.get_child("Sub") is not None:
        offset = -offset
    return replace(built, text=text, offset=offset)


def _build_paren(node: SyntaxNode, query: str, text: str) -> ParenExpr:
    inner = _first_expression_child(node)
    return ParenExpr(text, children=(build_ast(inner, query),) if inner is not None else ())


def _build_unary(node: SyntaxNode, query: str, text: str) -> UnaryExpr:
    operator = ""
    children: list[ParsedNode] = []
    for child in node.children:
        if child.name in {"Add", "Sub"}:
            operator = child.text(query)
        elif is_expression_node(child):
            children.append(build_ast(child, query))
    return UnaryExpr(text, op=operator, children=tuple(children))


def _build_fallback(node: SyntaxNode, query: str, text: str) -> ParsedNode:
    children = _build_expression_children(node, query)
    if len(children) == 1:
        return children[0]
    logger.debug("Unrecognized node %s with %d expression children", node.name, len(children))
    return ErrorNode(text, children=children)


def build_ast(node: SyntaxNode, query: str) -> ParsedNode:
    """Build the explanation AST for a concrete syntax node.

    Never fails for a tree produced from ``query``: node kinds it does not know
    are either transparent (a single expression child) or become ``ErrorNode``.
    """
    text = node.text(query)
    match node.name:
        case "PromQL" | "Expr":
            return _build_wrapper(node, query, text)
        case "AggregateExpr":
            return _build_aggregation(node, query, text)
        case "FunctionCall":
            return _build_function_call(node, query, text)
        case "BinaryExpr":
            return _build_binary(node, query, text)
        case "VectorSelector":
            return _build_vector_selector(node, query, text)
        case "MatrixSelector":
            return _build_matrix_selector(node, query, text)
        case "SubqueryExpr":
            return _build_subquery(node, query, text)
        case "OffsetExpr":
            return _build_offset(node, query, text)
        case "NumberLiteral" | "NumberDurationLiteral":
            return NumberLiteral(text, value=text)
        case "StringLiteral":
            return StringLiteral(text, value=strip_quotes(text))
        case "ParenExpr":
            return _build_paren(node, query, text)
        case "UnaryExpr":
            return _build_unary(node, query, text)
        case _:
            return _build_fallback(node, query, text)
