"""
Tests for syntax extraction from tree-sitter parses.
"""

import logging

import pytest

from tokctx.errors import ParseError
from tokctx.extractors import TreeSitterExtractor
from tokctx.syntax import walk_preorder
from tokctx.tree_sitter_support import SourceDocument

from tests.infrastructure import require_grammar


@pytest.fixture
def cpp_language():
    require_grammar("tree_sitter_cpp")
    from tokctx.langs.cpp import cpp_language
    return cpp_language


def kinds_and_spans(root):
    return [(n.kind, n.start, n.length) for n in walk_preorder(root)]


def test_named_nodes_only(cpp_language):
    root = TreeSitterExtractor(cpp_language).parse("int x;")

    assert kinds_and_spans(root) == [
        ("translation_unit", 0, 6),
        ("declaration", 0, 6),
        ("primitive_type", 0, 3),
        ("identifier", 4, 1),
    ]
    assert root.parent is None
    assert root.children[0].children[1].parent_kind == "declaration"


def test_anonymous_nodes_when_asked(cpp_language):
    root = TreeSitterExtractor(cpp_language, named_only=False).parse("int x;")

    assert ("translation_unit", 0, 6) == kinds_and_spans(root)[0]
    assert (";", 5, 1) in kinds_and_spans(root)


def test_spans_are_in_characters(cpp_language):
    code = 'const char* s = "é€";\nint y;\n'
    root = TreeSitterExtractor(cpp_language).parse(code)

    ident = [n for n in walk_preorder(root) if n.kind == "identifier"]
    assert [(n.start, n.length) for n in ident] == [(12, 1), (code.index("y;"), 1)]


def test_strict_mode_reports_position(cpp_language):
    with pytest.raises(ParseError) as exc:
        TreeSitterExtractor(cpp_language).parse("int x;\nint y = ;\n")

    assert exc.value.line == 2
    assert "(line 2, column" in str(exc.value)


def test_lenient_mode_returns_the_recovered_tree(cpp_language, caplog):
    caplog.set_level(logging.DEBUG, logger="tokctx.extractors")

    root = TreeSitterExtractor(cpp_language, strict=False).parse("int x = ;\nint y;\n")

    assert root.kind == "translation_unit"
    assert "error node" in caplog.text


def test_empty_buffer(cpp_language):
    root = TreeSitterExtractor(cpp_language).parse("")
    assert root.kind == "translation_unit"
    assert root.length == 0
    assert root.children == []


def test_byte_to_char_position(cpp_language):
    doc = SourceDocument("a€b", cpp_language())

    # "€" is three bytes in UTF-8
    assert doc.byte_to_char_position(0) == 0
    assert doc.byte_to_char_position(1) == 1
    assert doc.byte_to_char_position(2) == 1
    assert doc.byte_to_char_position(4) == 2
    assert doc.byte_to_char_position(5) == 3
    assert doc.byte_to_char_position(99) == 3


def test_token_types_are_leaves(cpp_language):
    code = 'const char* s = "a\\tb";'

    default = TreeSitterExtractor(cpp_language).parse(code)
    literal = TreeSitterExtractor(cpp_language, token_types={"string_literal"}).parse(code)

    [inner] = [n for n in walk_preorder(default) if n.kind == "string_literal"]
    [leaf] = [n for n in walk_preorder(literal) if n.kind == "string_literal"]
    assert inner.children
    assert leaf.children == []
    assert (leaf.start, leaf.length) == (code.index('"'), 6)


def test_node_text_and_range_are_in_characters(cpp_language):
    code = 'auto s = "é€";'
    doc = SourceDocument(code, cpp_language())

    [literal] = [n for n in doc.walk_tree() if n.type == "string_literal"]

    assert doc.get_node_text(literal) == '"é€"'
    assert doc.get_node_range(literal) == (9, 13)


def test_point_columns_count_characters(cpp_language):
    code = 'auto s = "é€";\nauto t = "ü"; int y;\n'
    doc = SourceDocument(code, cpp_language())

    [y] = [n for n in doc.walk_tree() if n.type == "identifier" and doc.get_node_text(n) == "y"]

    second_line = code.splitlines()[1]
    assert doc.get_point(y) == (2, second_line.index("y") + 1)


def test_strict_error_column_counts_characters(cpp_language):
    code = 'auto s = "é€"; int y = ;\n'
    with pytest.raises(ParseError) as exc:
        TreeSitterExtractor(cpp_language).parse(code)

    assert exc.value.line == 1
    # Past the multi-byte literal, in the character offset space
    assert code.index("int") < exc.value.column <= len(code)
