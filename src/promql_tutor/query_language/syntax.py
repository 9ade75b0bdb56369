"""Concrete syntax tree nodes produced by the PromQL grammar."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field


ROOT_NODE_NAME = "PromQL"
ERROR_NODE_NAME = "⚠"


@dataclass(eq=False, slots=True)
class SyntaxNode:
    """Named node covering the half-open range ``[start, end)`` of the query text."""

    name: str
    start: int
    end: int
    children: tuple[SyntaxNode, ...] = ()
    parent: SyntaxNode | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        for child in self.children:
            child.parent = self

    @property
    def is_error(self) -> bool:
        """Return whether this node marks a syntax error."""
        return self.name == ERROR_NODE_NAME

    @property
    def first_child(self) -> SyntaxNode | None:
        """Return the first child node, if any."""
        return self.children[0] if self.children else None

    @property
    def next_sibling(self) -> SyntaxNode | None:
        """Return the node following this one under the same parent."""
        if self.parent is None:
            return None
        siblings = self.parent.children
        for position, sibling in enumerate(siblings):
            if sibling is self:
                return siblings[position + 1] if position + 1 < len(siblings) else None
        return None

    def get_child(self, *names: str) -> SyntaxNode | None:
        """Return the first direct child whose kind is one of ``names``."""
        for child in self.children:
            if child.name in names:
                return child
        return None

    def get_children(self, name: str) -> list[SyntaxNode]:
        """Return all direct children of the given kind."""
        return [child for child in self.children if child.name == name]

    def text(self, query: str) -> str:
        """Return the source slice covered by this node."""
        return query[self.start : self.end]

    def walk(self) -> Iterator[SyntaxNode]:
        """Iterate over this node and its descendants in pre-order."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def find_error(self) -> SyntaxNode | None:
        """Return the first error node in this subtree."""
        return next((node for node in self.walk() if node.is_error), None)
