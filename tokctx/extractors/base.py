from __future__ import annotations

from abc import ABC, abstractmethod

from ..syntax import SyntaxNode


class SyntaxExtractor(ABC):
    """
    Parses a buffer into a SyntaxNode tree in the character offset space
    used by the tokenizers.
    """

    @abstractmethod
    def parse(self, code: str) -> SyntaxNode:
        """
        Parse source text.

        Args:
            code: Source text

        Returns:
            Root node of the syntax tree

        Raises:
            ParseError: If the buffer is not valid for the grammar
        """
        pass

    def prepare(self) -> None:
        """Resolve external resources (grammars) ahead of the first parse."""
        pass
