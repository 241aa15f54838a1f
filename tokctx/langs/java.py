"""
Java front end on the tree-sitter Java grammar.
"""

from __future__ import annotations

from tree_sitter import Language

from ..annotate import braced_format, is_whitespace_token
from ..tokenizers.tree_sitter_tokenizer import TreeSitterTokenizer
from ..tree_sitter_support import load_language
from .profile import LanguageProfile

__all__ = ["JavaTokenizer", "JavaWhitespaceTokenizer", "java_language", "PROFILE"]


def java_language() -> Language:
    return load_language("tree_sitter_java")


class JavaTokenizer(TreeSitterTokenizer):
    """Java code tokens; comments only when asked for."""

    name = "java"
    extensions = (".java",)
    grammar = "tree_sitter_java"
    atomic_types = frozenset({"string_literal", "character_literal", "text_block"})
    comment_types = frozenset({"line_comment", "block_comment"})


class JavaWhitespaceTokenizer(JavaTokenizer):
    """Java code tokens interleaved with WS_ tokens for the whitespace between them."""

    def __init__(self, *, tokenize_comments: bool = False):
        super().__init__(tokenize_comments=tokenize_comments, emit_whitespace=True)


PROFILE = LanguageProfile(
    name="java",
    extensions=(".java",),
    tokenizers={"code": JavaTokenizer, "whitespace": JavaWhitespaceTokenizer},
    default_tokenizer="code",
    grammar=java_language,
    is_ignorable=is_whitespace_token,
    formatter=braced_format,
    token_types=JavaTokenizer.atomic_types,
)
