from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, FrozenSet, Mapping, Tuple

from ..annotate import AnnotationFormatter, IgnorablePredicate
from ..errors import ConfigurationError
from ..extractors import TreeSitterExtractor
from ..tokenizers.base import BaseTokenizer
from ..tree_sitter_support import GrammarLoader

__all__ = ["LanguageProfile"]


@dataclass(frozen=True)
class LanguageProfile:
    """Everything that varies between source languages."""
    name: str
    extensions: Tuple[str, ...]
    #: Base tokenizer factories by configuration name
    tokenizers: Mapping[str, Callable[..., BaseTokenizer]]
    default_tokenizer: str
    #: Loader of the tree-sitter grammar used by the extractor
    grammar: GrammarLoader
    is_ignorable: IgnorablePredicate
    formatter: AnnotationFormatter
    #: Node types the tokenizers emit as a single token (string literals)
    token_types: FrozenSet[str] = frozenset()

    def create_tokenizer(self, name: str | None = None, **options: Any) -> BaseTokenizer:
        """
        Instantiate a base tokenizer by name (default tokenizer when None).

        Raises:
            ConfigurationError: If the name is unknown or the options are rejected
        """
        key = name or self.default_tokenizer
        factory = self.tokenizers.get(key)
        if factory is None:
            raise ConfigurationError(
                f"Unknown {self.name} tokenizer: '{key}'. "
                f"Supported: {', '.join(sorted(self.tokenizers))}"
            )
        try:
            return factory(**options)
        except TypeError as e:
            raise ConfigurationError(
                f"{self.name} tokenizer '{key}' rejected options {sorted(options)}: {e}"
            ) from e

    def create_extractor(self, *, strict: bool = True) -> TreeSitterExtractor:
        return TreeSitterExtractor(self.grammar, strict=strict, token_types=self.token_types)
