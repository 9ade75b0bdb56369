"""Tests for the PromQL concrete syntax tree producer."""

from __future__ import annotations

import pytest

from promql_tutor.query_language import format_syntax_error, parse_tree
from promql_tutor.query_language.errors import QuerySyntaxError
from promql_tutor.query_language.syntax import ERROR_NODE_NAME, ROOT_NODE_NAME, SyntaxNode


def _names(node: SyntaxNode) -> list[str]:
    return [child.name for child in node.children]


def test_parse_tree_root_covers_query() -> None:
    """Root node should be named PromQL and span the whole input."""
    root = parse_tree("  up  ")

    assert root.name == ROOT_NODE_NAME
    assert (root.start, root.end) == (0, 6)
    assert _names(root) == ["VectorSelector"]


def test_parse_tree_empty_query_has_no_children() -> None:
    """Empty and whitespace-only input should give a childless root."""
    assert parse_tree("").children == ()
    assert parse_tree("   \n").children == ()


def test_parse_tree_vector_selector_ranges() -> None:
    """Leaf ranges should be half-open offsets into the query."""
    query = 'up{job="api"}'
    selector = parse_tree(query).first_child
    assert selector is not None

    identifier = selector.get_child("Identifier")
    matchers = selector.get_child("LabelMatchers")
    assert identifier is not None
    assert matchers is not None
    assert identifier.text(query) == "up"
    assert matchers.text(query) == '{job="api"}'
    assert selector.text(query) == query


def test_parse_tree_matrix_selector_shape() -> None:
    """A bracketed duration should wrap the selector in a MatrixSelector."""
    query = "rate(http_requests_total[5m])"
    call = parse_tree(query).first_child
    assert call is not None
    assert _names(call) == ["FunctionIdentifier", "FunctionCallBody"]

    body = call.get_child("FunctionCallBody")
    assert body is not None
    matrix = body.first_child
    assert matrix is not None
    assert matrix.name == "MatrixSelector"
    assert _names(matrix) == ["VectorSelector", "Duration"]


def test_parse_tree_aggregate_modifier_before_body() -> None:
    """Grouping modifiers may precede the aggregation body."""
    query = "sum by (job, instance) (up)"
    aggregate = parse_tree(query).first_child
    assert aggregate is not None
    assert _names(aggregate) == ["AggregateOp", "AggregateModifier", "FunctionCallBody"]

    modifier = aggregate.get_child("AggregateModifier")
    assert modifier is not None
    labels = modifier.get_child("GroupingLabels")
    assert labels is not None
    assert [child.text(query) for child in labels.children] == ["job", "instance"]


def test_parse_tree_aggregate_modifier_after_body() -> None:
    """Grouping modifiers may follow the aggregation body."""
    aggregate = parse_tree("avg(up) without (pod)").first_child
    assert aggregate is not None
    assert _names(aggregate) == ["AggregateOp", "FunctionCallBody", "AggregateModifier"]


def test_parse_tree_binary_precedence() -> None:
    """Multiplication should bind tighter than addition."""
    query = "a + b * c"
    binary = parse_tree(query).first_child
    assert binary is not None
    assert binary.name == "BinaryExpr"
    assert _names(binary) == ["VectorSelector", "Add", "BinaryExpr"]
    right = binary.children[2]
    assert right.text(query) == "b * c"


def test_parse_tree_binary_left_associative() -> None:
    """Operators of equal precedence should group to the left."""
    query = "a / b / c"
    binary = parse_tree(query).first_child
    assert binary is not None
    left = binary.first_child
    assert left is not None
    assert left.text(query) == "a / b"


def test_parse_tree_power_right_associative() -> None:
    """Exponentiation should group to the right."""
    query = "2 ^ 3 ^ 2"
    binary = parse_tree(query).first_child
    assert binary is not None
    assert binary.children[-1].text(query) == "3 ^ 2"


def test_parse_tree_matching_modifiers() -> None:
    """bool and on/group_left modifiers should be kept inside the binary node."""
    query = "a > bool on (job) group_left (team) b"
    binary = parse_tree(query).first_child
    assert binary is not None
    assert _names(binary) == [
        "VectorSelector",
        "Gtr",
        "BoolModifier",
        "MatchingModifierClause",
        "VectorSelector",
    ]


@pytest.mark.parametrize(
    ("query", "name"),
    [
        ("rate(x[1h])[30m:1m]", "SubqueryExpr"),
        ("x offset 5m", "OffsetExpr"),
        ("x @ 1609746000", "StepInvariantExpr"),
        ("x @ start()", "StepInvariantExpr"),
        ("-x", "UnaryExpr"),
        ("(x)", "ParenExpr"),
        ('"text"', "StringLiteral"),
        ("1.5e3", "NumberLiteral"),
        ("{job='api'}", "VectorSelector"),
    ],
)
def test_parse_tree_expression_kinds(query: str, name: str) -> None:
    """Each construct should produce its named node kind."""
    node = parse_tree(query).first_child
    assert node is not None
    assert node.name == name


def test_parse_tree_keywords_are_case_insensitive() -> None:
    """Aggregation operators and keywords should match in any case."""
    aggregate = parse_tree("SUM BY (job) (up)").first_child
    assert aggregate is not None
    assert aggregate.name == "AggregateExpr"


def test_parse_tree_skips_comments() -> None:
    """Comments should be treated like whitespace."""
    node = parse_tree("up # scrape health\n").first_child
    assert node is not None
    assert node.name == "VectorSelector"


@pytest.mark.parametrize(
    ("query", "position"),
    [
        ("sum(rate(x[5m])", 15),
        ("up{job=}", 7),
        ("rate(x[5m]", 10),
    ],
)
def test_parse_tree_marks_errors(query: str, position: int) -> None:
    """Syntax errors should produce an error node at the failing offset."""
    root = parse_tree(query)
    error = root.find_error()

    assert error is not None
    assert error.name == ERROR_NODE_NAME
    assert error.is_error
    assert error.start == position
    assert error.end == len(query)


def test_parse_tree_deep_nesting_raises() -> None:
    """Nesting beyond the recursion limit should raise QuerySyntaxError."""
    query = "(" * 5000 + "1" + ")" * 5000

    with pytest.raises(QuerySyntaxError):
        parse_tree(query)


def test_syntax_node_navigation() -> None:
    """Parent links and sibling navigation should follow child order."""
    query = "a + b"
    binary = parse_tree(query).first_child
    assert binary is not None
    left = binary.first_child
    assert left is not None

    operator = left.next_sibling
    assert operator is not None
    assert operator.name == "Add"
    assert operator.parent is binary
    assert binary.children[-1].next_sibling is None
    walked = [node.name for node in binary.walk()]
    assert walked[:3] == ["BinaryExpr", "VectorSelector", "Identifier"]


def test_format_syntax_error_points_at_column() -> None:
    """Caret pointer should sit under the failing column of its line."""
    assert format_syntax_error("sum(up", 6) == "sum(up\n      ^"
    assert format_syntax_error("up\n+ )", 5) == "+ )\n  ^"


def test_parse_tree_nested_calls() -> None:
    """Thirty nested function calls should parse without error nodes."""
    query = "abs(" * 30 + "up" + ")" * 30

    root = parse_tree(query)

    assert root.find_error() is None
    assert root.first_child is not None
    assert root.first_child.end == len(query)
