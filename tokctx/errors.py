"""
Exceptions raised by tokctx.

All expected failures that a caller can act on derive from TokCtxError:
a buffer that does not parse, an operation the annotated form cannot
offer, a configuration that cannot be resolved.

Programming errors and bugs should NOT inherit from TokCtxError;
they propagate with full tracebacks.
"""

from __future__ import annotations

from typing import Optional


class TokCtxError(Exception):
    """Base class for all user-facing errors in tokctx."""
    pass


class ParseError(TokCtxError):
    """
    A source buffer could not be tokenized or parsed for the target grammar.

    Line and column are 1-based when known.
    """

    def __init__(self, message: str, *, line: Optional[int] = None, column: Optional[int] = None):
        self.line = line
        self.column = column
        if line is not None:
            message = f"{message} (line {line}, column {column})"
        super().__init__(message)


class UnsupportedOperation(TokCtxError):
    """The requested operation is not available for this tokenizer."""
    pass


class ConfigurationError(TokCtxError):
    """A tokenizer, extractor, grammar or setting could not be resolved."""
    pass


__all__ = ["TokCtxError", "ParseError", "UnsupportedOperation", "ConfigurationError"]
