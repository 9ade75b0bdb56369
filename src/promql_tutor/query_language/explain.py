"""Natural-language explanations of PromQL AST nodes."""

from __future__ import annotations

from dataclasses import dataclass

from promql_tutor.query_language.ast import (
    Aggregation,
    BinaryExpr,
    FunctionCall,
    LabelMatcher,
    MatrixSelector,
    NumberLiteral,
    ParenExpr,
    ParsedNode,
    StringLiteral,
    Subquery,
    UnaryExpr,
    VectorSelector,
    node_children,
)
from promql_tutor.query_language.duration import format_duration


LANGUAGE_NAME = "PromQL"
ANY_METRIC = "(any)"

AGGREGATION_PHRASES: dict[str, str] = {
    "sum": "sums",
    "avg": "calculates the average of",
    "min": "finds the minimum of",
    "max": "finds the maximum of",
    "count": "counts",
    "stddev": "calculates the standard deviation of",
    "stdvar": "calculates the variance of",
    "topk": "returns the top K values of",
    "bottomk": "returns the bottom K values of",
    "quantile": "calculates a quantile of",
    "group": "groups",
}

FUNCTION_PHRASES: dict[str, str] = {
    "rate": "calculates the per-second rate of increase",
    "irate": "calculates the instant rate of increase",
    "increase": "calculates the total increase",
    "delta": "calculates the difference between first and last value",
    "histogram_quantile": "calculates a percentile from histogram buckets",
    "label_replace": "replaces label values using regex",
    "label_join": "joins label values",
    "abs": "returns absolute values",
    "ceil": "rounds up to nearest integer",
    "floor": "rounds down to nearest integer",
    "round": "rounds to nearest integer",
    "sqrt": "calculates square root",
    "exp": "calculates exponential",
    "ln": "calculates natural logarithm",
    "log2": "calculates base-2 logarithm",
    "log10": "calculates base-10 logarithm",
    "time": "returns the current Unix timestamp",
    "timestamp": "returns the timestamp of each sample",
    "absent": "returns 1 if the series is absent",
    "absent_over_time": "returns 1 if the series has no values in the range",
    "changes": "counts value changes",
    "resets": "counts counter resets",
    "deriv": "calculates the derivative using linear regression",
    "predict_linear": "predicts future values using linear regression",
    "holt_winters": "applies Holt-Winters smoothing",
    "clamp": "clamps values between min and max",
    "clamp_min": "clamps values to a minimum",
    "clamp_max": "clamps values to a maximum",
    "sort": "sorts values ascending",
    "sort_desc": "sorts values descending",
    "avg_over_time": "calculates average over time range",
    "min_over_time": "finds minimum over time range",
    "max_over_time": "finds maximum over time range",
    "sum_over_time": "sums values over time range",
    "count_over_time": "counts samples over time range",
    "stddev_over_time": "calculates standard deviation over time range",
    "stdvar_over_time": "calculates variance over time range",
    "last_over_time": "returns last value in time range",
    "present_over_time": "returns 1 if any sample exists in range",
    "quantile_over_time": "calculates quantile over time range",
}

BINARY_PHRASES: dict[str, str] = {
    "+": "adds",
    "-": "subtracts",
    "*": "multiplies",
    "/": "divides",
    "%": "calculates modulo of",
    "^": "raises to the power of",
    "==": "checks equality of",
    "!=": "checks inequality of",
    ">": "compares (greater than)",
    "<": "compares (less than)",
    ">=": "compares (greater or equal)",
    "<=": "compares (less or equal)",
    "and": "performs logical AND on",
    "or": "performs logical OR on",
    "unless": "excludes matching series from",
}

MATCHER_RELATIONS: dict[str, str] = {
    "=": "equals",
    "!=": "does not equal",
    "=~": "matches regex",
    "!~": "does not match regex",
}


@dataclass(frozen=True, slots=True)
class ExplanationStep:
    """Explanation of one node within a query tree."""

    depth: int
    kind: str
    text: str
    explanation: str


def _describe_matcher(matcher: LabelMatcher) -> str:
    return f'{matcher.name} {MATCHER_RELATIONS[matcher.op]} "{matcher.value}"'


def _describe_offset(offset: int | None) -> str:
    if offset is None:
        return ""
    if offset < 0:
        return f", offset forward by {format_duration(-offset)}"
    return f", offset by {format_duration(offset)}"


def _explain_aggregation(node: Aggregation) -> str:
    phrase = AGGREGATION_PHRASES.get(node.op, f"applies {node.op} to")
    explanation = f"This expression {phrase} the values"
    if node.grouping:
        labels = ", ".join(node.grouping)
        if node.without:
            explanation += f", excluding labels: {labels}"
        else:
            explanation += f", grouped by: {labels}"
    return explanation


def _explain_vector_selector(node: VectorSelector) -> str:
    explanation = f'Selects the metric "{node.name or ANY_METRIC}"'
    if node.matchers:
        explanation += " where " + " AND ".join(_describe_matcher(m) for m in node.matchers)
    return explanation + _describe_offset(node.offset)


def _explain_matrix_selector(node: MatrixSelector) -> str:
    explanation = f'Selects {format_duration(node.range)} of data for "{node.name or ANY_METRIC}"'
    if node.matchers:
        explanation += " with label filters"
    return explanation + _describe_offset(node.offset)


def explain(node: ParsedNode) -> str:
    """Describe what a single AST node computes in one sentence."""
    match node:
        case Aggregation():
            return _explain_aggregation(node)
        case FunctionCall(func_name=name):
            return f"The {name}() function {FUNCTION_PHRASES.get(name, f'applies {name}()')}"
        case VectorSelector():
            return _explain_vector_selector(node)
        case MatrixSelector():
            return _explain_matrix_selector(node)
        case BinaryExpr(op=op):
            return f"Binary operation that {BINARY_PHRASES.get(op.lower(), op)} two expressions"
        case NumberLiteral(value=value):
            return f"A scalar number with value {value}"
        case StringLiteral(value=value):
            return f'A string value: "{value}"'
        case ParenExpr():
            return "Parentheses grouping a sub-expression"
        case UnaryExpr(op=op):
            return f"Unary {'negation' if op == '-' else 'plus'} operator"
        case Subquery():
            return "A subquery that evaluates an expression over a time range"
    return f"{LANGUAGE_NAME} expression"


def explain_tree(node: ParsedNode) -> list[ExplanationStep]:
    """Explain every node of a tree in pre-order."""
    steps: list[ExplanationStep] = []

    def visit(current: ParsedNode, depth: int) -> None:
        steps.append(
            ExplanationStep(depth, type(current).__name__, current.text, explain(current))
        )
        for child in node_children(current):
            visit(child, depth + 1)

    visit(node, 0)
    return steps
