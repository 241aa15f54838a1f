"""
Syntax extraction on top of tree-sitter grammars.
"""

from __future__ import annotations

import logging
from typing import FrozenSet, Iterable, List, Optional, Tuple

from tree_sitter import Language, Node

from ..errors import ParseError
from ..syntax import SyntaxNode
from ..tree_sitter_support import GrammarLoader, SourceDocument
from .base import SyntaxExtractor

__all__ = ["TreeSitterExtractor"]

_LOG = logging.getLogger("tokctx.extractors")


class TreeSitterExtractor(SyntaxExtractor):
    """
    Converts a tree-sitter parse into SyntaxNode objects.

    Only named nodes become syntax context by default: anonymous nodes are
    the keywords and punctuation themselves, so keeping them would make every
    such token its own innermost node. Children of a dropped node are
    attached to the nearest kept ancestor.

    Tree-sitter always produces a tree; in strict mode a tree with ERROR or
    missing nodes is rejected with ParseError, otherwise it is returned with
    the ERROR nodes in place.
    """

    def __init__(
        self,
        language_loader: GrammarLoader,
        *,
        strict: bool = True,
        named_only: bool = True,
        token_types: Iterable[str] = (),
    ):
        self._language_loader = language_loader
        self._language: Optional[Language] = None
        self.strict = strict
        self.named_only = named_only
        # Nodes the tokenizer emits as one token: kept, but not descended
        # into, so no inner node can claim the token.
        self.token_types: FrozenSet[str] = frozenset(token_types)

    @property
    def language(self) -> Language:
        if self._language is None:
            self._language = self._language_loader()
        return self._language

    def prepare(self) -> None:
        _ = self.language

    def parse(self, code: str) -> SyntaxNode:
        try:
            doc = SourceDocument(code, self.language)
        except UnicodeEncodeError as e:
            raise ParseError(f"Source is not valid Unicode text: {e}") from e

        if doc.has_error():
            errors = doc.get_errors()
            if self.strict:
                if errors:
                    line, column = doc.get_point(errors[0])
                    what = "Missing token" if errors[0].is_missing else "Syntax error"
                    raise ParseError(what, line=line, column=column)
                raise ParseError("Syntax error")
            _LOG.debug("Annotating a tree with %d error node(s)", len(errors))

        return self._convert(doc)

    def _convert(self, doc: SourceDocument) -> SyntaxNode:
        ts_root = doc.root_node
        start, end = doc.get_node_range(ts_root)
        root = SyntaxNode(ts_root.type, start, end - start)

        # (tree-sitter node, nearest kept ancestor)
        stack: List[Tuple[Node, SyntaxNode]] = [(child, root) for child in reversed(ts_root.children)]
        while stack:
            ts_node, parent = stack.pop()
            if ts_node.is_named or not self.named_only:
                start, end = doc.get_node_range(ts_node)
                node = parent.add_child(ts_node.type, start, end - start)
            else:
                node = parent
            if ts_node.type in self.token_types:
                continue
            stack.extend((child, node) for child in reversed(ts_node.children))
        return root
