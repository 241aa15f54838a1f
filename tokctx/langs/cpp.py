"""
C/C++ front end on the tree-sitter C++ grammar.
"""

from __future__ import annotations

from tree_sitter import Language, Node

from ..annotate import compact_format, is_whitespace_token
from ..tokenizers.tree_sitter_tokenizer import TreeSitterTokenizer
from ..tree_sitter_support import load_language
from .profile import LanguageProfile

__all__ = [
    "CppTokenizer",
    "CppWhitespaceTokenizer",
    "CppTypeTokenizer",
    "cpp_language",
    "PROFILE",
    "TYPE_IDENTIFIER",
    "TYPE_LITERAL",
    "TYPE_COMMENT",
    "TYPE_PREPROCESSOR",
]

CPP_EXTENSIONS = (".cc", ".cpp", ".cxx", ".h", ".hh", ".hpp", ".hxx")

TYPE_LITERAL = "%LITERAL%"
TYPE_IDENTIFIER = "%IDENTIFIER%"
TYPE_COMMENT = "%COMMENT%"
TYPE_PREPROCESSOR = "%PREPROCESSOR%"

_IDENTIFIER_TYPES = frozenset({
    "identifier",
    "field_identifier",
    "type_identifier",
    "namespace_identifier",
    "statement_identifier",
})
_LITERAL_TYPES = frozenset({
    "number_literal",
    "string_literal",
    "raw_string_literal",
    "char_literal",
    "system_lib_string",
})


def cpp_language() -> Language:
    return load_language("tree_sitter_cpp")


class CppTokenizer(TreeSitterTokenizer):
    """C/C++ code tokens; comments only when asked for."""

    name = "cpp"
    extensions = CPP_EXTENSIONS
    grammar = "tree_sitter_cpp"
    atomic_types = frozenset({"string_literal", "raw_string_literal", "char_literal"})


class CppWhitespaceTokenizer(CppTokenizer):
    """C/C++ code tokens interleaved with WS_ tokens."""

    def __init__(self, *, tokenize_comments: bool = False):
        super().__init__(tokenize_comments=tokenize_comments, emit_whitespace=True)


class CppTypeTokenizer(CppTokenizer):
    """
    Replaces identifiers, literals, comments and preprocessor tokens with
    their category, keeping keywords and punctuation verbatim. Comments are
    tokenized by default.
    """

    def __init__(self, *, tokenize_comments: bool = True):
        super().__init__(tokenize_comments=tokenize_comments)

    def token_text(self, node: Node, text: str) -> str:
        kind = node.type
        if kind in _IDENTIFIER_TYPES:
            return TYPE_IDENTIFIER
        if kind in self.comment_types:
            return TYPE_COMMENT
        if kind in _LITERAL_TYPES:
            return TYPE_LITERAL
        if kind.startswith("#") or kind in ("preproc_arg", "preproc_directive"):
            return TYPE_PREPROCESSOR
        return text


PROFILE = LanguageProfile(
    name="cpp",
    extensions=CPP_EXTENSIONS,
    tokenizers={
        "code": CppTokenizer,
        "whitespace": CppWhitespaceTokenizer,
        "type": CppTypeTokenizer,
    },
    default_tokenizer="code",
    grammar=cpp_language,
    is_ignorable=is_whitespace_token,
    formatter=compact_format,
    token_types=CppTokenizer.atomic_types,
)
