"""AST nodes for PromQL explanation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, TypeAlias


MatchOperator: TypeAlias = Literal["=", "!=", "=~", "!~"]


@dataclass(frozen=True, slots=True)
class LabelMatcher:
    """Single ``name <op> "value"`` series filter."""

    name: str
    op: MatchOperator
    value: str


@dataclass(frozen=True, slots=True)
class ParsedNode:
    """Base AST node; ``text`` is the source slice the node was built from."""

    text: str


@dataclass(frozen=True, slots=True)
class Aggregation(ParsedNode):
    """Aggregation operator such as ``sum by (job) (...)``."""

    op: str
    grouping: tuple[str, ...] = ()
    without: bool = False
    children: tuple[ParsedNode, ...] = ()


@dataclass(frozen=True, slots=True)
class FunctionCall(ParsedNode):
    """Function invocation."""

    func_name: str
    args: tuple[ParsedNode, ...] = ()


@dataclass(frozen=True, slots=True)
class BinaryExpr(ParsedNode):
    """Binary operation; operands are kept in source order."""

    op: str
    children: tuple[ParsedNode, ...] = ()


@dataclass(frozen=True, slots=True)
class VectorSelector(ParsedNode):
    """Instant vector selector; an empty name matches any metric."""

    name: str = ""
    matchers: tuple[LabelMatcher, ...] = ()
    offset: int | None = None


@dataclass(frozen=True, slots=True)
class MatrixSelector(ParsedNode):
    """Range vector selector with a lookback window in milliseconds."""

    name: str = ""
    matchers: tuple[LabelMatcher, ...] = ()
    range: int = 300_000
    offset: int | None = None


@dataclass(frozen=True, slots=True)
class Subquery(ParsedNode):
    """Subquery over an inner expression."""

    children: tuple[ParsedNode, ...] = ()
    range: int | None = None
    step: int | None = None


@dataclass(frozen=True, slots=True)
class NumberLiteral(ParsedNode):
    """Scalar number literal, kept as written."""

    value: str


@dataclass(frozen=True, slots=True)
class StringLiteral(ParsedNode):
    """String literal without its enclosing quotes."""

    value: str


@dataclass(frozen=True, slots=True)
class ParenExpr(ParsedNode):
    """Parenthesized expression."""

    children: tuple[ParsedNode, ...] = ()


@dataclass(frozen=True, slots=True)
class UnaryExpr(ParsedNode):
    """Unary ``+``/``-`` expression."""

    op: str
    children: tuple[ParsedNode, ...] = ()


@dataclass(frozen=True, slots=True)
class ErrorNode(ParsedNode):
    """Fragment the builder could not classify, with any salvaged children."""

    children: tuple[ParsedNode, ...] = ()


def node_children(node: ParsedNode) -> tuple[ParsedNode, ...]:
    """Return the child expressions of a node in source order."""
    match node:
        case FunctionCall(args=args):
            return args
        case Aggregation(children=children) | BinaryExpr(children=children):
            return children
        case Subquery(children=children) | ParenExpr(children=children):
            return children
        case UnaryExpr(children=children) | ErrorNode(children=children):
            return children
    return ()


def _matchers_to_list(matchers: tuple[LabelMatcher, ...]) -> list[dict[str, str]]:
    return [{"type": m.op, "name": m.name, "value": m.value} for m in matchers]


def ast_to_dict(node: ParsedNode) -> dict[str, object]:
    """Convert an AST into JSON-ready data."""
    match node:
        case Aggregation():
            return {
                "type": "aggregation",
                "text": node.text,
                "op": node.op,
                "grouping": list(node.grouping),
                "without": node.without,
                "children": [ast_to_dict(child) for child in node.children],
            }
        case FunctionCall():
            return {
                "type": "call",
                "text": node.text,
                "funcName": node.func_name,
                "args": [ast_to_dict(arg) for arg in node.args],
            }
        case BinaryExpr():
            return {
                "type": "binaryExpr",
                "text": node.text,
                "op": node.op,
                "children": [ast_to_dict(child) for child in node.children],
            }
        case VectorSelector():
            return {
                "type": "vectorSelector",
                "text": node.text,
                "name": node.name,
                "matchers": _matchers_to_list(node.matchers),
                "offset": node.offset,
            }
        case MatrixSelector():
            return {
                "type": "matrixSelector",
                "text": node.text,
                "name": node.name,
                "matchers": _matchers_to_list(node.matchers),
                "range": node.range,
                "offset": node.offset,
            }
        case Subquery():
            return {
                "type": "subquery",
                "text": node.text,
                "range": node.range,
                "step": node.step,
                "children": [ast_to_dict(child) for child in node.children],
            }
        case NumberLiteral():
            return {"type": "numberLiteral", "text": node.text, "value": node.value}
        case StringLiteral():
            return {"type": "stringLiteral", "text": node.text, "value": node.value}
        case ParenExpr():
            return {
                "type": "parenExpr",
                "text": node.text,
                "children": [ast_to_dict(child) for child in node.children],
            }
        case UnaryExpr():
            return {
                "type": "unaryExpr",
                "text": node.text,
                "op": node.op,
                "children": [ast_to_dict(child) for child in node.children],
            }
    return {
        "type": "error",
        "text": node.text,
        "children": [ast_to_dict(child) for child in node_children(node)],
    }
