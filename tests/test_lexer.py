"""Tests for the token scanner."""

import pytest

from languages import SAMPLE_CODE, number_re
from lexer import classify_number, scan, tokenize
from lexical_types import Language, TokenKind


def _texts(source, language="java"):
    return [t.text for t in tokenize(source, language)]


def _kinds(source, language="java"):
    return [t.kind for t in tokenize(source, language)]


def test_declaration_tokens():
    tokens = tokenize("int x = 5;", "java")
    assert [(t.kind, t.text, t.line, t.column) for t in tokens] == [
        (TokenKind.KEYWORD, "int", 1, 1),
        (TokenKind.IDENTIFIER, "x", 1, 5),
        (TokenKind.OPERATOR, "=", 1, 7),
        (TokenKind.LITERAL_NUMBER, "5", 1, 9),
        (TokenKind.PUNCTUATION, ";", 1, 10),
    ]


@pytest.mark.parametrize("language", list(Language))
def test_scan_reconstructs_source(language):
    source = SAMPLE_CODE[language]
    assert "".join(t.text for t in scan(source, language)) == source


def test_scan_is_lazy_and_restarts():
    it = scan("a b", "java")
    first = next(it)
    assert first.text == "a"
    assert [t.text for t in scan("a b", "java")] == ["a", " ", "b"]


def test_newline_positions():
    tokens = tokenize("a\n  b\n\n   c", "java")
    assert [(t.text, t.line, t.column) for t in tokens] == [
        ("a", 1, 1),
        ("b", 2, 3),
        ("c", 4, 4),
    ]


def test_multiline_comment_positions():
    tokens = list(scan("/* x\n y */ z", "java"))
    assert tokens[0].kind is TokenKind.COMMENT_MULTI
    z = tokenize("/* x\n y */ z", "java")[0]
    assert (z.text, z.line, z.column) == ("z", 2, 7)


def test_comments_are_not_visible():
    source = "a // note\nb /* block */ c"
    assert _texts(source) == ["a", "b", "c"]
    kinds = [t.kind for t in scan(source, "java")]
    assert TokenKind.COMMENT_SINGLE in kinds
    assert TokenKind.COMMENT_MULTI in kinds


def test_unterminated_block_comment_runs_to_end():
    assert _texts("a /* never closed\nb c") == ["a"]


def test_invalid_character_becomes_error_token():
    tokens = tokenize("int a = 1;\nb @ c;", "java")
    errors = [t for t in tokens if t.kind is TokenKind.ERROR]
    assert len(errors) == 1
    err = errors[0]
    assert (err.text, err.line, err.column) == ("@", 2, 3)
    assert err.message == "Invalid character '@'"
    c = tokens[tokens.index(err) + 1]
    assert (c.text, c.kind, c.line, c.column) == ("c", TokenKind.IDENTIFIER, 2, 5)


def test_error_tokens_do_not_disturb_neighbours():
    clean = tokenize("x = y + z;", "java")
    dirty = [t for t in tokenize("x = y + z;`", "java") if t.kind is not TokenKind.ERROR]
    assert clean == dirty


def test_keywords_booleans_and_null():
    tokens = tokenize("boolean f = true; Object o = null;", "java")
    by_text = {t.text: t.kind for t in tokens}
    assert by_text["boolean"] is TokenKind.KEYWORD
    assert by_text["true"] is TokenKind.LITERAL_BOOLEAN
    assert by_text["null"] is TokenKind.KEYWORD
    assert by_text["Object"] is TokenKind.IDENTIFIER


def test_keyword_sets_differ_per_language():
    assert _kinds("string s;", "java")[0] is TokenKind.IDENTIFIER
    assert _kinds("string s;", "cpp")[0] is TokenKind.KEYWORD
    assert _kinds("boolean b;", "cpp")[0] is TokenKind.IDENTIFIER


def test_identifiers_may_contain_dollar_and_underscore():
    assert _kinds("$tmp _x a1", "java") == [TokenKind.IDENTIFIER] * 3


def test_string_literal_with_escapes():
    tokens = tokenize(r's = "say \"hi\"";', "java")
    assert tokens[2].kind is TokenKind.LITERAL_STRING
    assert tokens[2].text == r'"say \"hi\""'
    assert tokens[3].text == ";"


def test_unterminated_string_consumes_rest_of_input():
    tokens = tokenize('x = "abc\ny = 1;', "java")
    assert tokens[-1].kind is TokenKind.LITERAL_STRING
    assert tokens[-1].text == '"abc\ny = 1;'


def test_char_literals():
    tokens = tokenize(r"c = 'A'; d = '\n';", "java")
    chars = [t.text for t in tokens if t.kind is TokenKind.LITERAL_CHAR]
    assert chars == ["'A'", r"'\n'"]


@pytest.mark.parametrize("text", ["0x1F", "017", "42", "3.14", "2.5f", "10L", "1e3", ".5", "7d", "0xFFL"])
def test_numbers_are_single_tokens(text):
    tokens = tokenize(f"x = {text};", "java")
    assert tokens[2].kind is TokenKind.LITERAL_NUMBER
    assert tokens[2].text == text


@pytest.mark.parametrize("text, data_type, value", [
    ("42", "int", 42),
    ("0x1F", "int", 31),
    ("017", "int", 15),
    ("10L", "long", 10),
    ("0xFFL", "long", 255),
    ("3.14", "double", 3.14),
    ("1e3", "double", 1000.0),
    ("2.5f", "float", 2.5),
    ("2.5D", "double", 2.5),
    ("5f", "float", 5.0),
])
def test_number_types(text, data_type, value):
    assert classify_number(number_re.fullmatch(text)) == (data_type, value)


def test_longest_operator_wins():
    assert _texts("a >>>= 2; b >>= 1; c >= d; e > f;") == [
        "a", ">>>=", "2", ";", "b", ">>=", "1", ";", "c", ">=", "d", ";", "e", ">", "f", ";",
    ]
    assert _texts("p->x; A::B; i++; --j; a && b || c", "cpp") == [
        "p", "->", "x", ";", "A", "::", "B", ";", "i", "++", ";", "--", "j", ";",
        "a", "&&", "b", "||", "c",
    ]


def test_shift_operators_outside_generics():
    assert _texts("x = a >> 2;") == ["x", "=", "a", ">>", "2", ";"]
    assert _texts("x = b>>2;") == ["x", "=", "b", ">>", "2", ";"]
    assert _texts('cout << "hi" << endl;', "cpp") == ["cout", "<<", '"hi"', "<<", "endl", ";"]


def test_nested_generic_closers_are_split():
    assert _texts("List<List<String>> xs;") == [
        "List", "<", "List", "<", "String", ">", ">", "xs", ";",
    ]
    assert _texts("vector<vector<int>> grid;", "cpp") == [
        "vector", "<", "vector", "<", "int", ">", ">", "grid", ";",
    ]


def test_diamond_operator():
    assert _texts("List<String> items = new ArrayList<>();") == [
        "List", "<", "String", ">", "items", "=", "new", "ArrayList", "<", ">", "(", ")", ";",
    ]


def test_comparison_after_statement_end_is_not_split():
    # the open generic guess for i<n ends at the semicolon
    assert _texts("for (i = 0; i<n; i++) { x >= 1; }") == [
        "for", "(", "i", "=", "0", ";", "i", "<", "n", ";", "i", "++", ")",
        "{", "x", ">=", "1", ";", "}",
    ]


def test_punctuation_and_separators():
    tokens = tokenize("case 1: f(a, b[0]);", "java")
    kinds = {t.text: t.kind for t in tokens}
    for p in (":", "(", ")", "[", "]", ";"):
        assert kinds[p] is TokenKind.PUNCTUATION
    assert kinds[","] is TokenKind.OPERATOR


def test_preprocessor_lines_are_skipped_for_cpp():
    tokens = tokenize("#include <iostream>\n  #define N 3\nint x;", "cpp")
    assert [(t.text, t.line, t.column) for t in tokens] == [
        ("int", 3, 1), ("x", 3, 5), (";", 3, 6),
    ]


def test_hash_is_an_error_in_java_and_mid_line_in_cpp():
    java = tokenize("#include <x>", "java")
    assert java[0].kind is TokenKind.ERROR and java[0].text == "#"
    cpp = tokenize("a # b", "cpp")
    assert [t.kind for t in cpp] == [TokenKind.IDENTIFIER, TokenKind.ERROR, TokenKind.IDENTIFIER]


def test_tokens_are_immutable():
    token = tokenize("x", "java")[0]
    with pytest.raises(AttributeError):
        token.text = "y"
