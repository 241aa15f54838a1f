"""
Shared test infrastructure for tokctx.

Modules:
- cli_utils: running the tokctx command in a subprocess
- file_utils: creating source files
- grammar_utils: skipping tests when a tree-sitter grammar is missing
- tree_utils: hand-built token streams and syntax trees
"""

from .cli_utils import jlines, jload, run_cli
from .file_utils import write, write_source
from .grammar_utils import is_grammar_available, require_grammar
from .tree_utils import int_x_declaration, positioned_texts, stream

__all__ = [
    "run_cli",
    "jload",
    "jlines",
    "write",
    "write_source",
    "is_grammar_available",
    "require_grammar",
    "int_x_declaration",
    "positioned_texts",
    "stream",
]
