"""
Python front end: CPython lexer plus the tree-sitter Python grammar.
"""

from __future__ import annotations

import io
import tokenize
from typing import Iterator, List, Tuple

from tree_sitter import Language

from ..annotate import compact_format, kinds_predicate
from ..errors import ParseError
from ..model import Token
from ..tokenizers.base import BaseTokenizer
from ..tree_sitter_support import load_language
from .profile import LanguageProfile

__all__ = ["PythonTokenizer", "python_language", "PROFILE", "IGNORABLE_KINDS", "STRING_TYPES"]

# Synthesized layout tokens: they carry no syntax of their own.
IGNORABLE_KINDS = ("NEWLINE", "NL", "INDENT")

# The lexer returns a whole string literal (f-strings before 3.12) as one
# token, while the grammar splits it into start, content and end nodes.
STRING_TYPES = frozenset({"string"})


def python_language() -> Language:
    return load_language("tree_sitter_python")


def line_starts(code: str) -> List[int]:
    """Character offset of the first character of every line."""
    starts = [0]
    index = code.find("\n")
    while index != -1:
        starts.append(index + 1)
        index = code.find("\n", index + 1)
    return starts


class PythonTokenizer(BaseTokenizer):
    """
    Tokens from the standard library lexer.

    The lexer reports (line, column) pairs; they are mapped to character
    offsets through a table of line starts so that keys share the offset
    space of the syntax tree. Zero-width tokens (DEDENT, ENDMARKER, the
    implicit final NEWLINE) are dropped: they would collide with the offset
    of the next real token.
    """

    name = "python"
    extensions = (".py",)

    def __init__(self, *, tokenize_comments: bool = False):
        self.tokenize_comments = tokenize_comments

    def identifier_kind(self) -> str:
        return "NAME"

    def scan(self, code: str) -> Iterator[Tuple[int, Token]]:
        starts = line_starts(code)
        readline = io.StringIO(code).readline
        try:
            for tok in tokenize.generate_tokens(readline):
                if not tok.string:
                    continue
                kind = tokenize.tok_name[tok.type]
                if tok.type == tokenize.COMMENT and not self.tokenize_comments:
                    continue
                row, column = tok.start
                yield self._offset(starts, row, column), Token(tok.string, kind)
        except tokenize.TokenError as e:
            message = e.args[0] if e.args else str(e)
            if len(e.args) > 1 and e.args[1]:
                row, column = e.args[1]
                raise ParseError(f"Tokenization failed: {message}", line=row, column=column + 1) from e
            raise ParseError(f"Tokenization failed: {message}") from e
        except SyntaxError as e:
            raise ParseError(f"Tokenization failed: {e.msg}", line=e.lineno, column=e.offset) from e

    @staticmethod
    def _offset(starts: List[int], row: int, column: int) -> int:
        # Rows are 1-based; the lexer may report one row past the last line
        # for tokens at end of input.
        if row - 1 < len(starts):
            return starts[row - 1] + column
        return starts[-1] + column


PROFILE = LanguageProfile(
    name="python",
    extensions=(".py",),
    tokenizers={"code": PythonTokenizer},
    default_tokenizer="code",
    grammar=python_language,
    is_ignorable=kinds_predicate(IGNORABLE_KINDS),
    formatter=compact_format,
    token_types=STRING_TYPES,
)
