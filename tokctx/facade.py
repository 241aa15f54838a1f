"""
Annotated tokenizer: base tokens overlaid with syntax context.

All stream shapes are projections of one computation (`compute`), so they
cannot disagree for the same buffer. A buffer that fails to parse is logged
and reported as None (or as a failed AnnotationOutcome in batch mode); an
empty buffer still yields a stream holding the two sentinels.

Instances hold no per-buffer state, but tokenizers and extractors are not
designed for concurrent use: give each thread its own AnnotatedTokenizer.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from .annotate import AnnotationFormatter, IgnorablePredicate, annotate, get_formatter
from .errors import ParseError, UnsupportedOperation
from .extractors.base import SyntaxExtractor
from .filters import FileFilter
from .model import PositionedTokens, Token
from .registry import get_profile
from .settings import Settings
from .tokenizers.base import BaseTokenizer

__all__ = ["AnnotatedTokenizer", "AnnotationOutcome"]

_LOG = logging.getLogger("tokctx.facade")


@dataclass(frozen=True)
class AnnotationOutcome:
    """Result of annotating one buffer in a batch."""
    source: str
    tokens: Optional[PositionedTokens] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.tokens is not None


class AnnotatedTokenizer:
    """
    Facade with the same stream operations as a base tokenizer, producing
    tokens whose text carries "node kind / parent kind" context.
    """

    def __init__(
        self,
        base: BaseTokenizer,
        extractor: SyntaxExtractor,
        *,
        is_ignorable: IgnorablePredicate,
        formatter: AnnotationFormatter,
        language: Optional[str] = None,
    ):
        self.base = base
        self.extractor = extractor
        self.is_ignorable = is_ignorable
        self.formatter = formatter
        self.language = language or base.name
        base.prepare()
        extractor.prepare()

    @classmethod
    def for_language(cls, name: str, settings: Optional[Settings] = None) -> AnnotatedTokenizer:
        """
        Build the annotated tokenizer of a registered language.

        The tokenizer, extractor and grammar are resolved here, so a bad
        configuration fails at construction rather than on first use.

        Raises:
            ConfigurationError: If any part cannot be resolved
        """
        profile = get_profile(name)
        lang_cfg = (settings or Settings()).for_language(name)

        base = profile.create_tokenizer(lang_cfg.tokenizer, **lang_cfg.tokenizer_options())
        extractor = profile.create_extractor(strict=lang_cfg.strict)
        formatter = get_formatter(lang_cfg.format) if lang_cfg.format else profile.formatter

        _LOG.debug("Annotated tokenizer for %s: base=%r strict=%s", name, base, lang_cfg.strict)
        return cls(base, extractor, is_ignorable=profile.is_ignorable, formatter=formatter, language=name)

    # --- canonical computation ---

    def compute(self, code: str) -> PositionedTokens:
        """
        Tokenize, parse and overlay one buffer.

        Raises:
            ParseError: If the buffer cannot be tokenized or parsed
        """
        tree = self.extractor.parse(code)
        baseline = self.base.tokenize_with_positions(code)
        return annotate(baseline, tree, is_ignorable=self.is_ignorable, formatter=self.formatter)

    def _compute_or_none(self, code: str) -> Optional[PositionedTokens]:
        try:
            return self.compute(code)
        except ParseError as e:
            _LOG.warning("Failed to get annotated %s tokens: %s", self.language, e)
            return None

    # --- projections ---

    def tokenize_with_positions(self, code: str) -> Optional[PositionedTokens]:
        return self._compute_or_none(code)

    def token_list(self, code: str) -> Optional[List[Token]]:
        tokens = self._compute_or_none(code)
        return tokens.tokens() if tokens is not None else None

    def token_texts(self, code: str) -> Optional[List[str]]:
        tokens = self._compute_or_none(code)
        return tokens.texts() if tokens is not None else None

    def texts_with_positions(self, code: str) -> Optional[Dict[int, str]]:
        tokens = self._compute_or_none(code)
        return tokens.text_map() if tokens is not None else None

    def token_from_string(self, text: str) -> Token:
        raise UnsupportedOperation(
            "An annotated tokenizer cannot return a token from a single string: "
            "syntax context needs the surrounding code."
        )

    # --- forwarded from the base tokenizer ---

    def file_filter(self) -> FileFilter:
        return self.base.file_filter()

    def identifier_kind(self) -> str:
        return self.base.identifier_kind()

    # --- batches ---

    def annotate_sources(self, sources: Iterable[Tuple[str, str]]) -> Iterator[AnnotationOutcome]:
        """
        Annotate (name, code) pairs independently; a failing buffer yields a
        failed outcome and the batch continues.
        """
        for name, code in sources:
            try:
                tokens = self.compute(code)
            except ParseError as e:
                _LOG.warning("%s: failed to get annotated tokens: %s", name, e)
                yield AnnotationOutcome(name, error=str(e))
                continue
            yield AnnotationOutcome(name, tokens=tokens)

    def annotate_path(self, path: Path) -> AnnotationOutcome:
        """Annotate one file regardless of the file filter; unreadable files fail."""
        try:
            code = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            _LOG.warning("%s: cannot read file: %s", path, e)
            return AnnotationOutcome(str(path), error=f"cannot read file: {e}")
        return next(self.annotate_sources([(str(path), code)]))

    def annotate_paths(self, paths: Iterable[Path]) -> Iterator[AnnotationOutcome]:
        """Annotate files accepted by the file filter; others are skipped."""
        accept = self.file_filter()
        for path in paths:
            if not accept(path):
                _LOG.debug("Skipping %s: not a %s file", path, self.language)
                continue
            yield self.annotate_path(path)

    def __repr__(self) -> str:
        return f"AnnotatedTokenizer(language={self.language!r}, base={self.base!r})"
