"""Entry point turning PromQL text into an explanation AST."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from promql_tutor.query_language.ast import ParsedNode
from promql_tutor.query_language.builder import build_ast
from promql_tutor.query_language.errors import QueryLanguageError
from promql_tutor.query_language.grammar import (
    NESTING_ERROR_MESSAGE,
    parse_tree,
    recursion_headroom,
)


logger = logging.getLogger("promql_tutor")

PARSE_ERROR_MESSAGE = "Parse error in query"
EMPTY_QUERY_MESSAGE = "Empty query"
UNKNOWN_ERROR_MESSAGE = "Unknown parse error"


@dataclass(frozen=True, slots=True)
class ParseResult:
    """Outcome of parsing one query.

    ``ast`` is set on success, ``error`` on failure. ``position`` points at the
    offending character for syntax errors.
    """

    success: bool
    ast: ParsedNode | None = None
    error: str | None = None
    position: int | None = None


def _parse(query: str) -> ParseResult:
    root = parse_tree(query)

    error_node = root.find_error()
    if error_node is not None:
        return ParseResult(success=False, error=PARSE_ERROR_MESSAGE, position=error_node.start)

    expression = root.first_child
    if expression is None:
        return ParseResult(success=False, error=EMPTY_QUERY_MESSAGE)

    with recursion_headroom(query):
        ast = build_ast(expression, query)
    logger.debug("Parsed %r as %s", query, type(ast).__name__)
    return ParseResult(success=True, ast=ast)


def parse_query(query: str) -> ParseResult:
    """Parse query text, reporting every failure through the result."""
    try:
        return _parse(query)
    except QueryLanguageError as exc:
        return ParseResult(success=False, error=str(exc))
    except RecursionError:
        logger.debug("AST for %r exceeds the recursion limit", query)
        return ParseResult(success=False, error=NESTING_ERROR_MESSAGE)
    except Exception as exc:
        logger.debug("Unexpected failure parsing %r", query, exc_info=True)
        return ParseResult(success=False, error=str(exc) or UNKNOWN_ERROR_MESSAGE)
