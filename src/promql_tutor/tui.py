"""Terminal output formatting for the promql-tutor CLI."""

from __future__ import annotations

from typing import Protocol

from rich.console import Console
from rich.text import Text
from rich.tree import Tree

from promql_tutor.color import (
    bright_white,
    dim_white,
    escape_text,
    node_type_color,
    query_text,
    should_use_color,
)
from promql_tutor.concepts import Concept
from promql_tutor.functions import FunctionReference
from promql_tutor.query_language import (
    ExplanationStep,
    ParsedNode,
    explain,
    explain_tree,
    parse_query,
)
from promql_tutor.scenarios import Scenario


class ColorArgs(Protocol):
    """Protocol for command arguments carrying the color flag."""

    color_flag: bool | None


def setup_output(args: ColorArgs) -> bool:
    """Resolve whether command output should be colored."""
    return should_use_color(args.color_flag)


def build_console(color_enabled: bool) -> Console:
    """Build the Rich console used for command output."""
    return Console(
        force_terminal=True if color_enabled else None,
        no_color=not color_enabled,
        highlight=False,
    )


def print_output(console: Console, text: str, color_enabled: bool, end: str = "\n") -> None:
    """Print text, interpreting Rich markup only when color is enabled."""
    if color_enabled:
        console.print(text, end=end, markup=True, highlight=False, soft_wrap=True)
        return
    console.file.write(f"{text}{end}")
    console.file.flush()


def lines_to_text(lines: list[str]) -> str:
    """Join output lines, dropping the trailing newline."""
    return "\n".join(lines)


def _tree_label(step: ExplanationStep, color_enabled: bool) -> Text:
    label = (
        f"{node_type_color(step.kind, color_enabled)} "
        f"{query_text(step.text, color_enabled)}\n"
        f"{dim_white(step.explanation, color_enabled)}"
    )
    if color_enabled:
        return Text.from_markup(label)
    return Text(label)


def build_explanation_tree(root: ParsedNode, color_enabled: bool) -> Tree:
    """Build a Rich tree with one explained entry per AST node."""
    root_step, *steps = explain_tree(root)
    tree = Tree(_tree_label(root_step, color_enabled), guide_style="dim" if color_enabled else "")

    # branches[depth] is the latest entry added at that depth
    branches = [tree]
    for step in steps:
        del branches[step.depth :]
        branches.append(branches[-1].add(_tree_label(step, color_enabled)))
    return tree


def format_scenario_list(scenarios: tuple[Scenario, ...], color_enabled: bool) -> str:
    """Format the scenario catalog as one line per scenario."""
    if not scenarios:
        return "No scenarios"
    width = max(len(scenario.id) for scenario in scenarios)
    lines = []
    for scenario in scenarios:
        count = len(scenario.sample_queries)
        noun = "query" if count == 1 else "queries"
        lines.append(
            f"{bright_white(scenario.id.ljust(width), color_enabled)}  "
            f"{escape_text(scenario.title, color_enabled)} "
            f"{dim_white(f'({count} {noun})', color_enabled)}"
        )
    return lines_to_text(lines)


def _generated_explanation(query: str) -> str:
    result = parse_query(query)
    if not result.success or result.ast is None:
        return f"Could not explain query: {result.error}"
    return explain(result.ast)


def format_scenario(scenario: Scenario, color_enabled: bool) -> str:
    """Format a scenario with its objectives and explained sample queries.

    Args:
        scenario: Scenario to display
        color_enabled: Whether to emit Rich markup

    Returns:
        Multi-line text ready for ``print_output``
    """
    lines = [
        bright_white(scenario.title, color_enabled),
        escape_text(scenario.description, color_enabled),
        "",
        bright_white("Learning objectives:", color_enabled),
    ]
    lines.extend(
        f"  - {escape_text(objective, color_enabled)}"
        for objective in scenario.learning_objectives
    )
    lines.append("")
    lines.append(bright_white("Sample queries:", color_enabled))

    for index, sample in enumerate(scenario.sample_queries, start=1):
        lines.append(f"  {index}. {query_text(sample.query, color_enabled)}")
        lines.append(f"     {escape_text(sample.description, color_enabled)}")
        if sample.explanation:
            lines.append(f"     {dim_white(sample.explanation, color_enabled)}")
        lines.append(f"     {dim_white(_generated_explanation(sample.query), color_enabled)}")

    return lines_to_text(lines)


def _section(title: str, body: list[str], color_enabled: bool) -> list[str]:
    return [bright_white(f"{title}:", color_enabled), *(f"  {line}" for line in body), ""]


def _tips(tips: tuple[str, ...], color_enabled: bool) -> list[str]:
    if not tips:
        return []
    lines = [bright_white("Tips:", color_enabled)]
    lines.extend(f"  - {escape_text(tip, color_enabled)}" for tip in tips)
    return lines


def format_function_list(functions: tuple[FunctionReference, ...], color_enabled: bool) -> str:
    """Format function references as one line per function, grouped by category."""
    if not functions:
        return "No functions"
    width = max(len(function.name) + 2 for function in functions)
    lines: list[str] = []
    category = None
    for function in functions:
        if function.category != category:
            if category is not None:
                lines.append("")
            category = function.category
            lines.append(bright_white(category, color_enabled))
        lines.append(
            f"  {query_text(f'{function.name}()'.ljust(width), color_enabled)}  "
            f"{escape_text(function.description, color_enabled)}"
        )
    return lines_to_text(lines)


def format_function(function: FunctionReference, color_enabled: bool) -> str:
    """Format one function reference.

    Args:
        function: Catalog entry to display
        color_enabled: Whether to emit Rich markup

    Returns:
        Syntax, explanation, an explained example and tips as multi-line text
    """
    lines = [
        f"{bright_white(f'{function.name}()', color_enabled)} "
        f"{dim_white(f'[{function.category}]', color_enabled)}",
        escape_text(function.description, color_enabled),
        "",
    ]
    lines.extend(_section("Syntax", [query_text(function.signature, color_enabled)], color_enabled))
    lines.extend(
        _section("How it works", [escape_text(function.explanation, color_enabled)], color_enabled)
    )
    lines.extend(
        _section(
            "Example",
            [
                query_text(function.example, color_enabled),
                dim_white(_generated_explanation(function.example), color_enabled),
            ],
            color_enabled,
        )
    )
    lines.extend(_tips(function.tips, color_enabled))
    return lines_to_text(lines).rstrip("\n")


def format_concept_list(concepts: tuple[Concept, ...], color_enabled: bool) -> str:
    """Format the concepts catalog as one line per concept."""
    if not concepts:
        return "No concepts"
    width = max(len(concept.id) for concept in concepts)
    return lines_to_text(
        [
            f"{bright_white(concept.id.ljust(width), color_enabled)}  "
            f"{escape_text(concept.title, color_enabled)} "
            f"{dim_white(f'- {concept.description}', color_enabled)}"
            for concept in concepts
        ]
    )


def format_concept(concept: Concept, color_enabled: bool) -> str:
    """Format a concept lesson with its example query explained."""
    lines = [
        bright_white(concept.title, color_enabled),
        escape_text(concept.description, color_enabled),
        "",
    ]
    lines.extend(_section("What is it?", [escape_text(concept.what, color_enabled)], color_enabled))
    lines.extend(
        _section("When to use?", [escape_text(concept.when, color_enabled)], color_enabled)
    )
    lines.extend(
        _section(
            "Example",
            [
                escape_text(concept.example, color_enabled),
                query_text(concept.query, color_enabled),
                dim_white(_generated_explanation(concept.query), color_enabled),
            ],
            color_enabled,
        )
    )
    lines.extend(_tips(concept.tips, color_enabled))
    return lines_to_text(lines).rstrip("\n")
