"""
Generic syntax tree used by the annotator.

Every extractor converts its parser's tree into SyntaxNode objects, so the
overlay algorithm only needs span, kind, parent and children.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Optional

__all__ = ["SyntaxNode", "walk_preorder", "NO_PARENT"]

# Parent kind reported for a root node.
NO_PARENT = "NONE"


@dataclass(eq=False)
class SyntaxNode:
    kind: str
    start: int
    length: int
    parent: Optional[SyntaxNode] = field(default=None, repr=False)
    children: List[SyntaxNode] = field(default_factory=list, repr=False)

    @property
    def end(self) -> int:
        return self.start + self.length

    @property
    def parent_kind(self) -> str:
        return self.parent.kind if self.parent is not None else NO_PARENT

    def add_child(self, kind: str, start: int, length: int) -> SyntaxNode:
        """Create a child node, link it to this node and return it."""
        child = SyntaxNode(kind, start, length, parent=self)
        self.children.append(child)
        return child


def walk_preorder(root: SyntaxNode) -> Iterator[SyntaxNode]:
    """
    Yield nodes parent first, then children left to right.

    Uses an explicit stack so deeply nested trees do not hit the
    recursion limit.
    """
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))
