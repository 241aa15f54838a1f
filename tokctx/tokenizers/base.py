from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict, Iterator, List, Tuple

from ..filters import FileFilter
from ..model import END_TOKEN, PositionedTokens, START_TOKEN, SENTENCE_END, SENTENCE_START, Token


class BaseTokenizer(ABC):
    """
    Abstract base class for every lexical tokenizer.

    Subclasses only implement `scan`; all stream shapes are projections of
    `tokenize_with_positions`, so they never disagree for the same input.
    Instances keep no per-buffer state between calls.
    """

    #: Language name (python, java, ...)
    name: str = "base"
    #: Accepted file extensions
    extensions: Tuple[str, ...] = ()

    @abstractmethod
    def scan(self, code: str) -> Iterator[Tuple[int, Token]]:
        """
        Tokenize a buffer.

        Args:
            code: Source text

        Yields:
            (character offset, token) pairs, sentinels excluded

        Raises:
            ParseError: If the buffer cannot be tokenized
        """
        pass

    @abstractmethod
    def identifier_kind(self) -> str:
        """Token kind used for identifiers."""
        pass

    def prepare(self) -> None:
        """Resolve external resources (grammars) ahead of the first call."""
        pass

    def tokenize_with_positions(self, code: str) -> PositionedTokens:
        """Offset-keyed tokens, bracketed by the start and end sentinels."""
        return PositionedTokens.bracketed(self.scan(code))

    def token_list(self, code: str) -> List[Token]:
        return self.tokenize_with_positions(code).tokens()

    def token_texts(self, code: str) -> List[str]:
        return self.tokenize_with_positions(code).texts()

    def texts_with_positions(self, code: str) -> Dict[int, str]:
        return self.tokenize_with_positions(code).text_map()

    def token_from_string(self, text: str) -> Token:
        """
        Token for a standalone fragment.

        Sentinel strings map to the sentinel tokens; anything else yields the
        first scanned token.

        Raises:
            ValueError: If the fragment contains no token
        """
        if text == SENTENCE_START:
            return START_TOKEN
        if text == SENTENCE_END:
            return END_TOKEN
        for _, token in self.scan(text):
            return token
        raise ValueError(f"No token found in {text!r}")

    def file_filter(self) -> FileFilter:
        return FileFilter.for_extensions(self.extensions)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"
