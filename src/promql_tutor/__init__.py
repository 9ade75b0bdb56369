"""promql_tutor - Parse PromQL queries and explain them in plain language."""

from promql_tutor.cli import main
from promql_tutor.concepts import CONCEPTS, Concept, get_concept
from promql_tutor.functions import FUNCTIONS, FunctionReference, get_function
from promql_tutor.query_language import (
    ExplanationStep,
    LabelMatcher,
    ParsedNode,
    ParseResult,
    explain,
    explain_tree,
    parse_query,
)
from promql_tutor.scenarios import SCENARIOS, Scenario, get_scenario


__version__ = "0.1.0"

__all__ = [
    "CONCEPTS",
    "FUNCTIONS",
    "SCENARIOS",
    "Concept",
    "ExplanationStep",
    "FunctionReference",
    "LabelMatcher",
    "ParseResult",
    "ParsedNode",
    "Scenario",
    "__version__",
    "explain",
    "explain_tree",
    "get_concept",
    "get_function",
    "get_scenario",
    "main",
    "parse_query",
]
