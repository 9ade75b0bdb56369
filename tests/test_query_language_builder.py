"""Tests for building explanation ASTs from concrete syntax trees."""

from __future__ import annotations

from typing import cast

import pytest

from promql_tutor.query_language import LabelMatcher, build_ast, parse_tree
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
from promql_tutor.query_language.syntax import SyntaxNode


def _build(query: str) -> ParsedNode:
    return build_ast(parse_tree(query), query)


def test_build_vector_selector() -> None:
    """A bare metric name should become a VectorSelector without matchers."""
    assert _build("up") == VectorSelector("up", name="up")


def test_build_vector_selector_without_metric_name() -> None:
    """Selectors with only matchers should have an empty name."""
    node = _build('{job="api"}')

    assert node == VectorSelector(
        '{job="api"}', name="", matchers=(LabelMatcher("job", "=", "api"),)
    )


def test_build_rate_over_matrix_selector() -> None:
    """Function calls should carry their range vector argument."""
    query = "rate(demo_cpu_usage_seconds_total[5m])"

    node = _build(query)

    assert node == FunctionCall(
        query,
        func_name="rate",
        args=(
            MatrixSelector(
                "demo_cpu_usage_seconds_total[5m]",
                name="demo_cpu_usage_seconds_total",
                range=300_000,
            ),
        ),
    )


def test_build_aggregation_with_grouping() -> None:
    """by (...) should populate grouping and keep the inner expression."""
    query = 'sum by (status) (rate(demo_api_request_duration_seconds_count{status=~"[45].."}[5m]))'

    node = cast(Aggregation, _build(query))

    assert isinstance(node, Aggregation)
    assert node.op == "sum"
    assert node.grouping == ("status",)
    assert node.without is False
    assert len(node.children) == 1
    call = cast(FunctionCall, node.children[0])
    assert call.func_name == "rate"
    matrix = cast(MatrixSelector, call.args[0])
    assert matrix.matchers == (LabelMatcher("status", "=~", "[45].."),)


def test_build_aggregation_without_and_case() -> None:
    """Operators should be lowercased and without flagged."""
    node = cast(Aggregation, _build("AVG without (pod, node) (up)"))

    assert node.op == "avg"
    assert node.grouping == ("pod", "node")
    assert node.without is True


def test_build_aggregation_without_modifier_has_no_grouping() -> None:
    """Plain aggregations should have an empty grouping."""
    node = cast(Aggregation, _build("max(up)"))

    assert node.grouping == ()
    assert node.without is False
    assert node.children == (VectorSelector("up", name="up"),)


def test_build_aggregation_keeps_first_body_expression() -> None:
    """Parameterized aggregations keep only the first body expression."""
    node = cast(Aggregation, _build("topk(5, up)"))

    assert node.children == (NumberLiteral("5", value="5"),)


def test_build_binary_expression() -> None:
    """Binary operators should record the operator and both operands."""
    node = cast(BinaryExpr, _build("a / on (job) b"))

    assert node.op == "/"
    assert node.children == (VectorSelector("a", name="a"), VectorSelector("b", name="b"))


def test_build_binary_keyword_operator() -> None:
    """Keyword operators should be kept as written."""
    node = cast(BinaryExpr, _build("a UNLESS b"))

    assert node.op == "UNLESS"


def test_build_matrix_selector_custom_range() -> None:
    """Compound durations should be summed into the range."""
    node = cast(MatrixSelector, _build('errors{code="500"}[1h30m]'))

    assert node.name == "errors"
    assert node.range == 5_400_000
    assert node.matchers == (LabelMatcher("code", "=", "500"),)


def test_build_subquery_records_window() -> None:
    """Subqueries should keep the inner expression and record range and step."""
    call = cast(FunctionCall, _build("max_over_time(rate(x[5m])[1h:1m])"))
    node = call.args[0]

    assert isinstance(node, Subquery)
    assert node.range == 3_600_000
    assert node.step == 60_000
    assert isinstance(node.children[0], FunctionCall)


def test_build_subquery_without_step() -> None:
    """A subquery without explicit step should have no step."""
    node = cast(Subquery, _build("rate(x[5m])[30m:]"))

    assert node.range == 1_800_000
    assert node.step is None


@pytest.mark.parametrize(
    ("query", "offset"),
    [
        ("x offset 5m", 300_000),
        ("x offset -1h", -3_600_000),
    ],
)
def test_build_offset_on_vector_selector(query: str, offset: int) -> None:
    """Offsets should be recorded on the selector they modify."""
    node = cast(VectorSelector, _build(query))

    assert node.name == "x"
    assert node.offset == offset
    assert node.text == query


def test_build_offset_on_matrix_selector() -> None:
    """Range selectors should keep their range when offset."""
    node = cast(MatrixSelector, _build("x[10m] offset 1d"))

    assert node.range == 600_000
    assert node.offset == 86_400_000


def test_build_step_invariant_is_transparent() -> None:
    """@ modifiers should not hide the selector they apply to."""
    node = _build("x @ 1609746000")

    assert node == VectorSelector("x", name="x")


def test_build_literals() -> None:
    """Literals should keep their text, strings without quotes."""
    assert _build("42") == NumberLiteral("42", value="42")
    assert _build("'hello'") == StringLiteral("'hello'", value="hello")


def test_build_paren_and_unary() -> None:
    """Parentheses and signs should wrap their operands."""
    node = cast(UnaryExpr, _build("-(up)"))

    assert node.op == "-"
    assert node.children == (ParenExpr("(up)", children=(VectorSelector("up", name="up"),)),)


def test_build_unknown_node_with_one_expression_is_transparent() -> None:
    """Unknown wrappers around a single expression should disappear."""
    query = "up"
    wrapper = SyntaxNode("Mystery", 0, 2, (SyntaxNode("VectorSelector", 0, 2),))

    assert build_ast(wrapper, query) == VectorSelector("up", name="")


def test_build_unknown_node_without_expression_is_error() -> None:
    """Unknown nodes without a single expression child should become ErrorNode."""
    query = "a b"
    node = SyntaxNode(
        "Mystery",
        0,
        3,
        (SyntaxNode("NumberLiteral", 0, 1), SyntaxNode("NumberLiteral", 2, 3)),
    )

    built = build_ast(node, query)

    assert isinstance(built, ErrorNode)
    assert built.text == "a b"
    assert len(built.children) == 2


def test_build_empty_root_is_error() -> None:
    """A root without children should become an ErrorNode."""
    assert build_ast(SyntaxNode("PromQL", 0, 0), "") == ErrorNode("")
