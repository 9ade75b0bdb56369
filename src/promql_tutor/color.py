"""Color support for CLI output using Rich markup."""

import sys

from rich.markup import escape


NODE_TYPE_STYLES: dict[str, str] = {
    "Aggregation": "bold magenta",
    "FunctionCall": "bold cyan",
    "BinaryExpr": "bold yellow",
    "VectorSelector": "bold green",
    "MatrixSelector": "bold green",
    "Subquery": "bold blue",
    "NumberLiteral": "blue",
    "StringLiteral": "blue",
    "ParenExpr": "white",
    "UnaryExpr": "yellow",
    "ErrorNode": "bold red",
}


def should_use_color(color_flag: bool | None) -> bool:
    """Determine if color should be used based on flag and TTY detection.

    Args:
        color_flag: Explicit color preference (True/False) or None for auto-detect

    Returns:
        True if colors should be used, False otherwise
    """
    if color_flag is None:
        return sys.stdout.isatty()
    return color_flag


def escape_text(text: str, enabled: bool) -> str:
    """Escape markup characters when color output is enabled.

    Args:
        text: Text to escape
        enabled: Whether coloring is enabled

    Returns:
        Escaped text when enabled, original text otherwise
    """
    if not enabled:
        return text
    return escape(text)


def colorize(text: str, style: str, enabled: bool) -> str:
    """Apply Rich markup style to text if enabled.

    Args:
        text: Text to colorize
        style: Rich style string (e.g., "green", "bold white")
        enabled: Whether coloring is enabled

    Returns:
        Styled text if enabled, original text otherwise
    """
    if not enabled:
        return text
    return f"[{style}]{escape(text)}[/]"


def bright_white(text: str, enabled: bool) -> str:
    """Apply bright white color to text."""
    return colorize(text, "bold white", enabled)


def dim_white(text: str, enabled: bool) -> str:
    """Apply dim white color to text."""
    return colorize(text, "dim white", enabled)


def query_text(text: str, enabled: bool) -> str:
    """Highlight a PromQL query fragment."""
    return colorize(text, "cyan", enabled)


def node_type_color(node_type: str, enabled: bool) -> str:
    """Color an AST node type name by its kind.

    Args:
        node_type: AST node class name (e.g., "Aggregation")
        enabled: Whether coloring is enabled

    Returns:
        Colored node type name if enabled, original text otherwise
    """
    return colorize(node_type, NODE_TYPE_STYLES.get(node_type, "white"), enabled)
