"""Public API for PromQL parsing and explanation."""

from promql_tutor.query_language.ast import LabelMatcher, ParsedNode, ast_to_dict
from promql_tutor.query_language.builder import build_ast
from promql_tutor.query_language.duration import format_duration, parse_duration
from promql_tutor.query_language.errors import QueryLanguageError, QuerySyntaxError
from promql_tutor.query_language.explain import ExplanationStep, explain, explain_tree
from promql_tutor.query_language.grammar import format_syntax_error, parse_tree
from promql_tutor.query_language.parser import ParseResult, parse_query


__all__ = [
    "ExplanationStep",
    "LabelMatcher",
    "ParseResult",
    "ParsedNode",
    "QueryLanguageError",
    "QuerySyntaxError",
    "ast_to_dict",
    "build_ast",
    "explain",
    "explain_tree",
    "format_duration",
    "format_syntax_error",
    "parse_duration",
    "parse_query",
    "parse_tree",
]
