"""Errors for PromQL parsing and explanation."""


class QueryLanguageError(Exception):
    """Base exception for query language failures."""


class QuerySyntaxError(QueryLanguageError):
    """Raised when query text cannot be parsed by the grammar."""
