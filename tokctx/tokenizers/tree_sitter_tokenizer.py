"""
Lexical tokenizer built from the leaves of a tree-sitter parse.
"""

from __future__ import annotations

import re
from typing import FrozenSet, Iterator, List, Optional, Tuple

from tree_sitter import Language, Node

from ..annotate import WHITESPACE_KIND, WHITESPACE_PREFIX
from ..errors import ParseError
from ..model import Token
from ..tree_sitter_support import GrammarLoader, SourceDocument, load_language
from .base import BaseTokenizer

__all__ = ["TreeSitterTokenizer", "whitespace_token_text"]

_WHITESPACE_RUN = re.compile(r"\s+")
_WHITESPACE_CODES = {" ": "s", "\t": "t", "\n": "n", "\r": "r", "\f": "f", "\v": "v"}


def whitespace_token_text(run: str) -> str:
    """Printable text for a whitespace run: WS_ followed by one letter per char."""
    return WHITESPACE_PREFIX + "".join(_WHITESPACE_CODES.get(ch, "u") for ch in run)


class TreeSitterTokenizer(BaseTokenizer):
    """
    One token per tree-sitter leaf, keyed by character offset.

    Tree-sitter keeps every source token as a leaf, anonymous ones included,
    so walking the leaves reproduces the lexer output. Node types listed in
    `atomic_types` (string literals and the like) have inner structure but
    are emitted whole.
    """

    #: Binding package of the grammar, e.g. "tree_sitter_java"
    grammar: str = ""
    #: Node types emitted as a single token even when they have children
    atomic_types: FrozenSet[str] = frozenset()
    #: Node types that are comments
    comment_types: FrozenSet[str] = frozenset({"comment"})

    def __init__(
        self,
        *,
        tokenize_comments: bool = False,
        emit_whitespace: bool = False,
        language_loader: Optional[GrammarLoader] = None,
    ):
        self.tokenize_comments = tokenize_comments
        self.emit_whitespace = emit_whitespace
        self._language_loader = language_loader
        self._language: Optional[Language] = None

    @property
    def language(self) -> Language:
        if self._language is None:
            if self._language_loader is not None:
                self._language = self._language_loader()
            else:
                self._language = load_language(self.grammar)
        return self._language

    def prepare(self) -> None:
        _ = self.language

    def identifier_kind(self) -> str:
        return "identifier"

    def token_text(self, node: Node, text: str) -> str:
        """Hook for subclasses that rewrite token text (e.g. type tokenizers)."""
        return text

    def scan(self, code: str) -> Iterator[Tuple[int, Token]]:
        try:
            doc = SourceDocument(code, self.language)
        except UnicodeEncodeError as e:
            raise ParseError(f"Source is not valid Unicode text: {e}") from e

        spans: List[Tuple[int, int]] = []
        for node in self._token_nodes(doc):
            start, end = doc.get_node_range(node)
            text = doc.get_node_text(node)
            # Zero-width recovery leaves and layout leaves (the newline that
            # ends a preprocessor directive) are not tokens.
            if end <= start or not text.strip():
                continue
            # Skipped comments still occupy their span, so no whitespace
            # token is cut out of them.
            spans.append((start, end))
            if node.type in self.comment_types and not self.tokenize_comments:
                continue
            yield start, Token(self.token_text(node, text), node.type)

        if self.emit_whitespace:
            yield from self._whitespace_tokens(code, spans)

    def _token_nodes(self, doc: SourceDocument) -> Iterator[Node]:
        root = doc.root_node
        cursor = root.walk()
        while True:
            node = cursor.node
            is_token = node != root and (node.child_count == 0 or node.type in self.atomic_types)
            if is_token:
                yield node
            elif cursor.goto_first_child():
                continue
            while not cursor.goto_next_sibling():
                if not cursor.goto_parent():
                    return

    @staticmethod
    def _whitespace_tokens(code: str, spans: List[Tuple[int, int]]) -> Iterator[Tuple[int, Token]]:
        """Whitespace runs in the gaps between emitted tokens."""
        cursor = 0
        for start, end in spans + [(len(code), len(code))]:
            if start > cursor:
                for match in _WHITESPACE_RUN.finditer(code, cursor, start):
                    yield match.start(), Token(whitespace_token_text(match.group()), WHITESPACE_KIND)
            cursor = max(cursor, end)
