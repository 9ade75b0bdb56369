"""PromQL grammar producing concrete syntax trees."""

from __future__ import annotations

import logging
import sys
from collections.abc import Generator, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import cast

from parsy import (
    ParseError,
    Parser,
    alt,
    eof,
    forward_declaration,
    generate,
    index,
    regex,
    seq,
    string,
)

from promql_tutor.query_language.errors import QuerySyntaxError
from promql_tutor.query_language.syntax import ERROR_NODE_NAME, ROOT_NODE_NAME, SyntaxNode


logger = logging.getLogger("promql_tutor")

NESTING_ERROR_MESSAGE = "Query is nested too deeply"

# Upper bound of combinator frames per character of query text.
FRAMES_PER_CHARACTER = 50
MAX_RECURSION_LIMIT = 10_000


AGGREGATE_OPERATORS = (
    "sum",
    "avg",
    "count",
    "count_values",
    "min",
    "max",
    "group",
    "stddev",
    "stdvar",
    "topk",
    "bottomk",
    "quantile",
    "limitk",
    "limit_ratio",
)

NUMBER_PATTERN = (
    r"(?i)(?:0x[0-9a-f]+|(?:\d+(?:\.\d*)?|\.\d+)(?:e[+-]?\d+)?|inf|nan)(?![A-Za-z0-9_:])"
)
STRING_PATTERN = r"\"(?:[^\"\\\n]|\\.)*\"|'(?:[^'\\\n]|\\.)*'|`[^`]*`"
DURATION_PATTERN = r"(?:\d+(?:ms|[smhdwy]))+(?![A-Za-z0-9_])"
LABEL_NAME_PATTERN = r"[A-Za-z_][A-Za-z0-9_]*"
METRIC_NAME_PATTERN = (
    r"(?!(?i:and|or|unless|atan2|offset|bool)(?![A-Za-z0-9_:]))[A-Za-z_:][A-Za-z0-9_:]*"
)
# Aggregation operators are never plain calls.
FUNCTION_NAME_PATTERN = (
    rf"(?!(?i:{'|'.join(AGGREGATE_OPERATORS)})(?![A-Za-z0-9_:]))"
    r"[A-Za-z_][A-Za-z0-9_]*(?=\s*\()"
)

_WS = regex(r"(?:\s|#[^\n]*)*")


@dataclass(frozen=True, slots=True)
class _Span:
    """Range of an anonymous token that only contributes to node extents."""

    start: int
    end: int


def _flatten(items: object) -> list[SyntaxNode | _Span]:
    """Flatten nested parser results into tokens and nodes."""
    if items is None:
        return []
    if isinstance(items, SyntaxNode | _Span):
        return [items]
    flat: list[SyntaxNode | _Span] = []
    for item in cast(list[object] | tuple[object, ...], items):
        flat.extend(_flatten(item))
    return flat


def _make_node(name: str, items: object) -> SyntaxNode:
    """Create a composite node spanning all parsed items."""
    flat = _flatten(items)
    children = tuple(item for item in flat if isinstance(item, SyntaxNode))
    return SyntaxNode(name, flat[0].start, flat[-1].end, children)


def _node(name: str, parser: Parser) -> Parser:
    """Wrap parser results into a named composite node."""
    return parser.map(lambda items: _make_node(name, items))


def _token(name: str, pattern: str, description: str | None = None) -> Parser:
    """Build a named leaf token parser skipping leading whitespace."""
    located = seq(index, regex(pattern), index).combine(
        lambda start, _text, end: SyntaxNode(name, start, end)
    )
    return (_WS >> located).desc(description or name)


def _punct(value: str) -> Parser:
    """Build an anonymous punctuation parser."""
    located = seq(index, string(value), index).combine(lambda start, _text, end: _Span(start, end))
    return (_WS >> located).desc(f"'{value}'")


def _keyword(name: str, word: str) -> Parser:
    """Build a case-insensitive keyword token with identifier boundary."""
    return _token(name, rf"(?i){word}(?![A-Za-z0-9_:])", word)


def _build_label_matchers_parser(label_name: Parser, string_literal: Parser) -> Parser:
    """Build parser for ``{name="value", ...}`` blocks."""
    match_op = _token("MatchOp", r"=~|!~|!=|=", "match operator")
    quoted_label_name = _node("QuotedLabelName", string_literal)
    unquoted_matcher = _node("UnquotedLabelMatcher", seq(label_name, match_op, string_literal))
    quoted_matcher = _node("QuotedLabelMatcher", seq(quoted_label_name, match_op, string_literal))
    matcher = unquoted_matcher | quoted_matcher | quoted_label_name
    return _node(
        "LabelMatchers",
        seq(_punct("{"), matcher.sep_by(_punct(",")), _punct(",").optional(), _punct("}")),
    )


def _build_grouping_labels_parser(label_name: Parser) -> Parser:
    """Build parser for ``(label, ...)`` grouping lists."""
    return _node(
        "GroupingLabels",
        seq(_punct("("), label_name.sep_by(_punct(",")), _punct(",").optional(), _punct(")")),
    )


def _build_aggregate_parser(function_call_body: Parser, grouping_labels: Parser) -> Parser:
    """Build parser for aggregation expressions with optional by/without modifier."""
    operators = "|".join(sorted(AGGREGATE_OPERATORS, key=len, reverse=True))
    aggregate_op = _token(
        "AggregateOp", rf"(?i)(?:{operators})(?![A-Za-z0-9_:])", "aggregation operator"
    )
    modifier = _node(
        "AggregateModifier",
        seq(_keyword("By", "by") | _keyword("Without", "without"), grouping_labels),
    )
    return _node(
        "AggregateExpr",
        seq(
            aggregate_op,
            seq(modifier, function_call_body) | seq(function_call_body, modifier.optional()),
        ),
    )


def _build_postfix_chain_parser(primary: Parser, duration: Parser) -> Parser:
    """Build parser applying range, subquery, offset and @ modifiers to a primary."""

    @generate
    def bracket_postfix() -> Generator[Parser, object, tuple[str, list[object]]]:
        open_bracket = yield _punct("[")
        window = yield duration
        colon = yield _punct(":").optional()
        if colon is None:
            close_bracket = yield _punct("]")
            return ("MatrixSelector", [open_bracket, window, close_bracket])
        step = yield duration.optional()
        close_bracket = yield _punct("]")
        return ("SubqueryExpr", [open_bracket, window, colon, step, close_bracket])

    offset_postfix = seq(
        _keyword("Offset", "offset"), _token("Sub", r"-").optional(), duration
    ).map(lambda items: ("OffsetExpr", items))

    at_timestamp = _token("Timestamp", NUMBER_PATTERN, "timestamp") | _token(
        "AtModifierPreprocessors", r"(?i)(?:start|end)\s*\(\s*\)", "start() or end()"
    )
    at_postfix = seq(_token("At", "@"), at_timestamp).map(
        lambda items: ("StepInvariantExpr", items)
    )

    @generate
    def with_postfix() -> Generator[Parser, object, SyntaxNode]:
        current = cast(SyntaxNode, (yield primary))
        postfixes = yield (bracket_postfix | offset_postfix | at_postfix).many()
        for name, items in cast(list[tuple[str, list[object]]], postfixes):
            current = _make_node(name, [current, items])
        return current

    return with_postfix


def _chain_left(term: Parser, operator: Parser, modifiers: Parser) -> Parser:
    """Build a left-associative binary expression parser."""

    @generate
    def parser() -> Generator[Parser, object, SyntaxNode]:
        current = cast(SyntaxNode, (yield term))
        rest = yield seq(operator, modifiers, term).many()
        for items in cast(list[list[object]], rest):
            current = _make_node("BinaryExpr", [current, items])
        return current

    return parser


def _make_parser() -> Parser:
    """Create the full PromQL parser."""
    expr = forward_declaration()

    number_literal = _token("NumberLiteral", NUMBER_PATTERN, "number")
    string_literal = _token("StringLiteral", STRING_PATTERN, "string")
    duration = _token("Duration", DURATION_PATTERN, "duration")
    label_name = _token("LabelName", LABEL_NAME_PATTERN, "label name")

    label_matchers = _build_label_matchers_parser(label_name, string_literal)
    grouping_labels = _build_grouping_labels_parser(label_name)
    vector_selector = _node(
        "VectorSelector",
        seq(_token("Identifier", METRIC_NAME_PATTERN, "metric name"), label_matchers.optional())
        | label_matchers,
    )

    function_call_body = _node(
        "FunctionCallBody", seq(_punct("("), expr.sep_by(_punct(",")), _punct(")"))
    )
    function_call = _node(
        "FunctionCall",
        seq(
            _token("FunctionIdentifier", FUNCTION_NAME_PATTERN, "function name"),
            function_call_body,
        ),
    )
    aggregate_expr = _build_aggregate_parser(function_call_body, grouping_labels)
    paren_expr = _node("ParenExpr", seq(_punct("("), expr, _punct(")")))

    primary = (
        paren_expr
        | aggregate_expr
        | function_call
        | number_literal
        | string_literal
        | vector_selector
    )
    postfix_expr = _build_postfix_chain_parser(primary, duration)

    matching_clause = _node(
        "MatchingModifierClause",
        seq(
            _keyword("On", "on") | _keyword("Ignoring", "ignoring"),
            grouping_labels,
            seq(
                _keyword("GroupLeft", "group_left") | _keyword("GroupRight", "group_right"),
                grouping_labels.optional(),
            ).optional(),
        ),
    )
    modifiers = seq(_keyword("BoolModifier", "bool").optional(), matching_clause.optional())

    unary = forward_declaration()

    @generate
    def power() -> Generator[Parser, object, SyntaxNode]:
        base = cast(SyntaxNode, (yield postfix_expr))
        rest = yield seq(_token("Pow", r"\^"), modifiers, unary).optional()
        if rest is None:
            return base
        return _make_node("BinaryExpr", [base, rest])

    @generate
    def signed() -> Generator[Parser, object, SyntaxNode]:
        sign = yield (_token("Sub", r"-") | _token("Add", r"\+")).optional()
        if sign is None:
            return cast(SyntaxNode, (yield power))
        operand = yield unary
        return _make_node("UnaryExpr", [sign, operand])

    unary.become(signed)

    multiplicative = _chain_left(
        unary,
        alt(
            _token("Mul", r"\*"),
            _token("Div", r"/"),
            _token("Mod", r"%"),
            _keyword("Atan2", "atan2"),
        ),
        modifiers,
    )
    additive = _chain_left(multiplicative, _token("Add", r"\+") | _token("Sub", r"-"), modifiers)
    comparison = _chain_left(
        additive,
        alt(
            _token("Eql", r"=="),
            _token("Neq", r"!="),
            _token("Lte", r"<="),
            _token("Lss", r"<"),
            _token("Gte", r">="),
            _token("Gtr", r">"),
        ),
        modifiers,
    )
    conjunction = _chain_left(
        comparison, _keyword("And", "and") | _keyword("Unless", "unless"), modifiers
    )
    disjunction = _chain_left(conjunction, _keyword("Or", "or"), modifiers)

    expr.become(disjunction)
    return expr.optional() << _WS << eof


QUERY_PARSER = _make_parser()


@contextmanager
def recursion_headroom(query: str) -> Iterator[None]:
    """Raise the interpreter recursion limit in proportion to the query length."""
    previous = sys.getrecursionlimit()
    wanted = min(previous + len(query) * FRAMES_PER_CHARACTER, MAX_RECURSION_LIMIT)
    sys.setrecursionlimit(max(previous, wanted))
    try:
        yield
    finally:
        sys.setrecursionlimit(previous)


def format_syntax_error(query: str, position: int) -> str:
    """Build a query excerpt with a caret under the failing column."""
    line_start = query.rfind("\n", 0, position) + 1
    line_end = query.find("\n", position)
    if line_end == -1:
        line_end = len(query)
    pointer = " " * (position - line_start) + "^"
    return f"{query[line_start:line_end]}\n{pointer}"


def parse_tree(query: str) -> SyntaxNode:
    """Parse query text into a concrete syntax tree.

    Syntax errors do not raise: the returned ``PromQL`` root then holds an
    error node covering the text from the failing position to the end.

    Raises:
        QuerySyntaxError: If the query nests deeper than the parser can follow
    """
    try:
        with recursion_headroom(query):
            expr_node = QUERY_PARSER.parse(query)
    except ParseError as exc:
        logger.debug(
            "Syntax error at %d: %s\n%s", exc.index, exc, format_syntax_error(query, exc.index)
        )
        error_node = SyntaxNode(ERROR_NODE_NAME, exc.index, len(query))
        return SyntaxNode(ROOT_NODE_NAME, 0, len(query), (error_node,))
    except RecursionError as exc:
        raise QuerySyntaxError(NESTING_ERROR_MESSAGE) from exc

    children = () if expr_node is None else (cast(SyntaxNode, expr_node),)
    return SyntaxNode(ROOT_NODE_NAME, 0, len(query), children)
