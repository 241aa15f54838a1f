"""
Tree-sitter infrastructure shared by tokenizers and extractors.
Provides grammar loading, parsing and byte/character offset conversion.
"""

from __future__ import annotations

import importlib
from typing import Callable, Iterator, List, Optional, Tuple

from tree_sitter import Language, Node, Parser, Tree

from .errors import ConfigurationError

__all__ = ["SourceDocument", "load_language", "GrammarLoader"]

GrammarLoader = Callable[[], Language]


def load_language(module_name: str) -> Language:
    """
    Load a tree-sitter grammar from its binding package
    (tree_sitter_python, tree_sitter_java, ...).

    Raises:
        ConfigurationError: If the package is missing or is not a grammar
    """
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise ConfigurationError(f"Tree-sitter grammar '{module_name}' is not installed: {e}") from e
    language_fn = getattr(module, "language", None)
    if not callable(language_fn):
        raise ConfigurationError(f"Module '{module_name}' does not provide a tree-sitter language")
    return Language(language_fn())


class SourceDocument:
    """
    Tree-sitter parse of one buffer.

    Tree-sitter reports UTF-8 byte offsets; every public range here is
    expressed in character offsets of `text`.
    """

    def __init__(self, text: str, language: Language):
        self.text = text
        self.language = language
        self._text_bytes = text.encode("utf-8")
        self._char_at_byte: Optional[List[int]] = None
        self.tree: Tree = Parser(language).parse(self._text_bytes)

    @property
    def root_node(self) -> Node:
        return self.tree.root_node

    def walk_tree(self, start_node: Optional[Node] = None) -> Iterator[Node]:
        """
        Walk the tree using TreeCursor for efficient traversal.

        Args:
            start_node: Node to start from (default: root)

        Yields:
            Node objects in depth-first pre-order
        """
        if start_node is None:
            start_node = self.root_node

        cursor = start_node.walk()
        visited_children = False

        while True:
            if not visited_children:
                yield cursor.node

                if not cursor.goto_first_child():
                    visited_children = True
            elif cursor.goto_next_sibling():
                visited_children = False
            elif not cursor.goto_parent():
                break
            else:
                visited_children = True

    def has_error(self) -> bool:
        """Check if the tree has any syntax errors."""
        return self.root_node.has_error

    def get_errors(self) -> List[Node]:
        """ERROR and missing nodes, in document order."""
        return [node for node in self.walk_tree() if node.is_error or node.is_missing]

    def get_node_text(self, node: Node) -> str:
        """Get text content for a node."""
        return self._text_bytes[node.start_byte:node.end_byte].decode("utf-8", errors="replace")

    def get_node_range(self, node: Node) -> Tuple[int, int]:
        """Get char range for a node."""
        return self.byte_to_char_position(node.start_byte), self.byte_to_char_position(node.end_byte)

    def byte_to_char_position(self, byte_pos: int) -> int:
        """
        Convert a byte position to a character position.
        A position inside a multi-byte character maps to the start of
        that character.
        """
        if byte_pos <= 0:
            return 0
        if byte_pos >= len(self._text_bytes):
            return len(self.text)
        if len(self._text_bytes) == len(self.text):
            # Pure ASCII
            return byte_pos
        if self._char_at_byte is None:
            self._char_at_byte = self._build_char_table()
        return self._char_at_byte[byte_pos]

    def _build_char_table(self) -> List[int]:
        table: List[int] = []
        for index, char in enumerate(self.text):
            table.extend([index] * len(char.encode("utf-8")))
        table.append(len(self.text))
        return table

    def get_point(self, node: Node) -> Tuple[int, int]:
        """
        1-based (line, column) of the node start.
        Tree-sitter columns count bytes; the returned column counts characters.
        """
        row, byte_column = node.start_point
        line_start = self.byte_to_char_position(node.start_byte - byte_column)
        return row + 1, self.byte_to_char_position(node.start_byte) - line_start + 1
