from .base import BaseTokenizer
from .tree_sitter_tokenizer import TreeSitterTokenizer, whitespace_token_text

__all__ = [
    "BaseTokenizer",
    "TreeSitterTokenizer",
    "whitespace_token_text",
]
