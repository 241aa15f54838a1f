from .base import SyntaxExtractor
from .tree_sitter_extractor import TreeSitterExtractor

__all__ = ["SyntaxExtractor", "TreeSitterExtractor"]
