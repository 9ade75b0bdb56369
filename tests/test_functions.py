"""Tests for the function reference catalog."""

from __future__ import annotations

import pytest

from promql_tutor.functions import (
    FUNCTION_CATEGORIES,
    FUNCTIONS,
    FunctionNotFoundError,
    FunctionReference,
    find_functions,
    get_function,
)
from promql_tutor.query_language import parse_query


def test_function_names_are_unique() -> None:
    """Function names should identify exactly one entry."""
    names = [function.name for function in FUNCTIONS]

    assert len(names) == len(set(names))


def test_functions_use_known_categories() -> None:
    """Every entry should belong to a listed category, and every category should be used."""
    used = {function.category for function in FUNCTIONS}

    assert used == set(FUNCTION_CATEGORIES)


@pytest.mark.parametrize("function", FUNCTIONS, ids=lambda function: function.name)
def test_function_examples_parse(function: FunctionReference) -> None:
    """Every example should be a valid query that mentions the function."""
    result = parse_query(function.example)

    assert result.success, f"{function.example}: {result.error}"
    assert function.name in function.example
    assert function.signature.startswith(function.name)


def test_find_functions_without_filters_returns_catalog() -> None:
    """No filters should keep every entry in catalog order."""
    assert find_functions() == FUNCTIONS


def test_find_functions_by_category_ignores_case() -> None:
    """Category filtering should be case-insensitive."""
    names = [function.name for function in find_functions(category="rate")]

    assert names == ["rate", "irate", "increase"]


def test_find_functions_searches_names_and_descriptions() -> None:
    """Search text should match names as well as descriptions."""
    by_name = [function.name for function in find_functions(search="QUANTILE")]
    by_description = [function.name for function in find_functions(search="nearest")]

    assert by_name == ["histogram_quantile"]
    assert by_description == ["ceil", "floor", "round"]


def test_find_functions_combines_filters() -> None:
    """Category and search should both have to match."""
    assert find_functions(category="Math", search="rate") == ()


@pytest.mark.parametrize("name", ["rate", "RATE", "rate()", " rate "])
def test_get_function_normalizes_name(name: str) -> None:
    """Lookups should ignore case, whitespace and a trailing call suffix."""
    assert get_function(name).name == "rate"


def test_get_function_unknown_lists_available_names() -> None:
    """Unknown names should raise with the available names in the message."""
    with pytest.raises(FunctionNotFoundError) as exc_info:
        get_function("nope")

    message = str(exc_info.value)
    assert "Unknown function: nope" in message
    assert "histogram_quantile" in message
    assert isinstance(exc_info.value, LookupError)
