"""
Tests for the Java front end.
"""

import pytest

from tokctx.facade import AnnotatedTokenizer
from tokctx.langs.java import JavaTokenizer, JavaWhitespaceTokenizer
from tokctx.model import END_POSITION, Token
from tokctx.settings import LanguageSettings, Settings
from tokctx.tokenizers import whitespace_token_text

pytestmark = pytest.mark.usefixtures("java_grammar")


def test_leaf_tokens():
    tokens = JavaTokenizer().tokenize_with_positions("class A { int x; }")

    assert tokens.texts() == ["<SENTENCE>", "class", "A", "{", "int", "x", ";", "}", "</SENTENCE>"]
    assert tokens[6] == Token("A", "identifier")
    assert list(tokens)[1:-1] == [0, 6, 8, 10, 14, 15, 17]


def test_string_literal_is_one_token():
    code = 'class A { String s = "a b"; }'
    tokens = JavaTokenizer().tokenize_with_positions(code)

    assert tokens[code.index('"')] == Token('"a b"', "string_literal")


def test_comments_only_when_asked():
    code = "class A { // note\n}"
    assert "// note" not in JavaTokenizer().token_texts(code)
    assert "// note" in JavaTokenizer(tokenize_comments=True).token_texts(code)


def test_whitespace_token_text():
    assert whitespace_token_text(" ") == "WS_s"
    assert whitespace_token_text("\n\t  ") == "WS_ntss"
    assert whitespace_token_text("\r\n\f\v\u00a0") == "WS_rnfvu"


def test_whitespace_tokenizer_fills_gaps():
    tokens = JavaWhitespaceTokenizer().tokenize_with_positions("class A {\n\t}\n")

    assert tokens.texts() == [
        "<SENTENCE>", "class", "WS_s", "A", "WS_s", "{", "WS_nt", "}", "WS_n", "</SENTENCE>",
    ]
    assert tokens[5].kind == "WHITESPACE"


def test_whitespace_is_not_taken_from_skipped_comments():
    code = "class A { /* a  b */ }"
    texts = JavaWhitespaceTokenizer().texts_with_positions(code)

    assert texts == {
        -1: "<SENTENCE>",
        0: "class",
        5: "WS_s",
        6: "A",
        7: "WS_s",
        8: "{",
        9: "WS_s",
        20: "WS_s",
        21: "}",
        END_POSITION: "</SENTENCE>",
    }


def test_offsets_count_characters_not_bytes():
    code = 'class Ä { String s = "é€"; int y; }'
    tokens = JavaTokenizer().tokenize_with_positions(code)

    for pos, token in tokens.items():
        if not token.is_sentinel:
            assert code[pos:pos + len(token.text)] == token.text
    assert tokens[code.index("y;")] == Token("y", "identifier")


class TestJavaAnnotation:

    def test_field_declaration(self, java_annotated):
        code = "class A { int x; }"
        texts = java_annotated.texts_with_positions(code)

        assert texts[code.index("A")] == "A->{in:identifier,parent:class_declaration}"
        assert texts[code.index("x")] == "x->{in:identifier,parent:variable_declarator}"
        assert texts[code.index(";")] == ";->{in:field_declaration,parent:class_body}"
        assert texts[code.index("}")] == "}->{in:class_body,parent:class_declaration}"
        assert texts[0] == "class->{in:class_declaration,parent:program}"

    def test_whitespace_tokens_pass_through(self):
        settings = Settings(languages={"java": LanguageSettings(tokenizer="whitespace")})
        annotated = AnnotatedTokenizer.for_language("java", settings)

        texts = annotated.token_texts("class A {}")

        assert texts[2] == "WS_s"
        assert texts[4] == "WS_s"
        assert texts[3] == "A->{in:identifier,parent:class_declaration}"

    def test_non_ascii_source(self, java_annotated):
        code = 'class A { String s = "é€"; int y; }'
        texts = java_annotated.texts_with_positions(code)

        assert texts[code.index("y;")] == "y->{in:identifier,parent:variable_declarator}"

    def test_syntax_error_gives_none(self, java_annotated):
        assert java_annotated.token_list("class Broken { int x = ; }") is None
