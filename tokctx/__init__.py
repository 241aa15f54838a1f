from __future__ import annotations

# Public API:
#  • AnnotatedTokenizer: token streams with syntax context
#  • annotate: the span overlay over an existing stream and tree
from .annotate import annotate, braced_format, compact_format
from .errors import ConfigurationError, ParseError, TokCtxError, UnsupportedOperation
from .facade import AnnotatedTokenizer, AnnotationOutcome
from .model import PositionedTokens, Token
from .registry import get_profile, list_languages
from .settings import Settings, load_settings
from .syntax import SyntaxNode

__all__ = [
    "AnnotatedTokenizer",
    "AnnotationOutcome",
    "PositionedTokens",
    "Token",
    "SyntaxNode",
    "annotate",
    "compact_format",
    "braced_format",
    "get_profile",
    "list_languages",
    "Settings",
    "load_settings",
    "TokCtxError",
    "ParseError",
    "UnsupportedOperation",
    "ConfigurationError",
]
