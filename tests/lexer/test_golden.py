"""Golden token-kind tables for the scanner.

Each case pins the exact sequence of token kinds for a small template,
plus the diagnostics it must produce. Diagnostic-free cases are also run
through the parser to check they parse without raising.
"""

import pytest

from curlymark import parse, tokenize
from curlymark.tokens import TokenKind as K

GOLDEN_CASES = [
    pytest.param("", [], [], id="empty-input"),
    pytest.param("hello", [K.LITERAL], [], id="literal-only"),
    pytest.param(
        "<div></div>",
        [K.TAG_BEGIN, K.RIGHT_ANGLED, K.TAG_CLOSING_START, K.TAG_CLOSING_END],
        [],
        id="open-and-close",
    ),
    pytest.param("<br/>", [K.TAG_BEGIN, K.TAG_END], [], id="self-closing"),
    pytest.param("<img />", [K.TAG_BEGIN, K.TAG_END], [], id="self-closing-with-space"),
    pytest.param(
        "<div id=main>",
        [K.TAG_BEGIN, K.ATTR_KEY, K.EQUAL, K.ATTR_VALUE_UNQUOTED, K.RIGHT_ANGLED],
        [],
        id="unquoted-value",
    ),
    pytest.param(
        "<div count=123>",
        [K.TAG_BEGIN, K.ATTR_KEY, K.EQUAL, K.ATTR_VALUE_UNQUOTED, K.RIGHT_ANGLED],
        [],
        id="numeric-value",
    ),
    pytest.param(
        '<img src="foo.png">',
        [K.TAG_BEGIN, K.ATTR_KEY, K.EQUAL, K.STRING, K.RIGHT_ANGLED],
        [],
        id="double-quoted-value",
    ),
    pytest.param(
        "<div class='abc'>",
        [K.TAG_BEGIN, K.ATTR_KEY, K.EQUAL, K.STRING, K.RIGHT_ANGLED],
        [],
        id="single-quoted-value",
    ),
    pytest.param(
        "<span value={{foo}}>",
        [K.TAG_BEGIN, K.ATTR_KEY, K.EQUAL, K.EXECUTABLE, K.RIGHT_ANGLED],
        [],
        id="executable-value",
    ),
    pytest.param(
        '<div a=1 b="2" c={{three}}>',
        [
            K.TAG_BEGIN,
            K.ATTR_KEY, K.EQUAL, K.ATTR_VALUE_UNQUOTED,
            K.ATTR_KEY, K.EQUAL, K.STRING,
            K.ATTR_KEY, K.EQUAL, K.EXECUTABLE,
            K.RIGHT_ANGLED,
        ],
        [],
        id="multiple-attributes",
    ),
    pytest.param(
        "<input disabled>",
        [K.TAG_BEGIN, K.ATTR_KEY, K.RIGHT_ANGLED],
        [],
        id="valueless-attribute",
    ),
    pytest.param(
        '<div   \n   id =   "foo"   >',
        [K.TAG_BEGIN, K.ATTR_KEY, K.EQUAL, K.STRING, K.RIGHT_ANGLED],
        [],
        id="whitespace-inside-tag",
    ),
    pytest.param(
        "<div>{{ foo }}</div>",
        [K.TAG_BEGIN, K.RIGHT_ANGLED, K.EXECUTABLE, K.TAG_CLOSING_START, K.TAG_CLOSING_END],
        [],
        id="executable-in-body",
    ),
    pytest.param(
        "<div>{{ if(x) {{ y }} }}</div>",
        [K.TAG_BEGIN, K.RIGHT_ANGLED, K.EXECUTABLE, K.TAG_CLOSING_START, K.TAG_CLOSING_END],
        [],
        id="nested-executables",
    ),
    pytest.param(
        "<div>{{ arr[ {x:1} ] }}</div>",
        [K.TAG_BEGIN, K.RIGHT_ANGLED, K.EXECUTABLE, K.TAG_CLOSING_START, K.TAG_CLOSING_END],
        [],
        id="nested-single-braces",
    ),
    pytest.param(
        '<div title="Hello {{name}}!">',
        [
            K.TAG_BEGIN, K.ATTR_KEY, K.EQUAL,
            K.STRING_INTERPOLATION, K.INTERPOLATED_EXECUTABLE, K.STRING,
            K.RIGHT_ANGLED,
        ],
        [],
        id="string-interpolation",
    ),
    pytest.param(
        '<input placeholder="Name: {{user}}">',
        [
            K.TAG_BEGIN, K.ATTR_KEY, K.EQUAL,
            K.STRING_INTERPOLATION, K.INTERPOLATED_EXECUTABLE, K.STRING,
            K.RIGHT_ANGLED,
        ],
        [],
        id="interpolation-at-end",
    ),
    pytest.param(
        '<div title="a \\"b\\" c">',
        [K.TAG_BEGIN, K.ATTR_KEY, K.EQUAL, K.STRING, K.RIGHT_ANGLED],
        [],
        id="escaped-quotes",
    ),
    pytest.param(
        "</div class=bad>",
        [K.TAG_CLOSING_START, K.ATTR_KEY, K.EQUAL, K.ATTR_VALUE_UNQUOTED, K.TAG_CLOSING_END],
        [],
        id="closing-tag-with-attributes",
    ),
    pytest.param("<!-- comment -->", [K.TAG_BEGIN, K.TAG_COMMENT_END], [], id="comment"),
    pytest.param(
        "foo <b>bar</b>",
        [
            K.LITERAL, K.TAG_BEGIN, K.RIGHT_ANGLED,
            K.LITERAL, K.TAG_CLOSING_START, K.TAG_CLOSING_END,
        ],
        [],
        id="literal-then-tag",
    ),
    pytest.param(
        "<div><span>{{x}}</span></div>",
        [
            K.TAG_BEGIN, K.RIGHT_ANGLED,
            K.TAG_BEGIN, K.RIGHT_ANGLED,
            K.EXECUTABLE,
            K.TAG_CLOSING_START, K.TAG_CLOSING_END,
            K.TAG_CLOSING_START, K.TAG_CLOSING_END,
        ],
        [],
        id="deep-nesting",
    ),
    pytest.param(
        "<ul><li id=one>1</li><li id=two>2</li></ul>",
        [
            K.TAG_BEGIN, K.RIGHT_ANGLED,
            K.TAG_BEGIN, K.ATTR_KEY, K.EQUAL, K.ATTR_VALUE_UNQUOTED, K.RIGHT_ANGLED,
            K.LITERAL, K.TAG_CLOSING_START, K.TAG_CLOSING_END,
            K.TAG_BEGIN, K.ATTR_KEY, K.EQUAL, K.ATTR_VALUE_UNQUOTED, K.RIGHT_ANGLED,
            K.LITERAL, K.TAG_CLOSING_START, K.TAG_CLOSING_END,
            K.TAG_CLOSING_START, K.TAG_CLOSING_END,
        ],
        [],
        id="sibling-list-items",
    ),
    pytest.param(
        "<p>Olá ☀️</p>",
        [K.TAG_BEGIN, K.RIGHT_ANGLED, K.LITERAL, K.TAG_CLOSING_START, K.TAG_CLOSING_END],
        [],
        id="unicode-text",
    ),
    pytest.param("5 &lt; 6", [K.LITERAL], [], id="entity-in-text"),
    pytest.param("a < b", [K.LITERAL], [], id="bare-less-than"),
    pytest.param("Hello {{name}}!", [K.LITERAL, K.EXECUTABLE, K.LITERAL], [], id="text-executable"),
    pytest.param("cost {100}", [K.LITERAL], [], id="single-braces"),
    pytest.param("<div", [K.TAG_BEGIN], [], id="missing-right-angle"),
    pytest.param(
        '<div title="oops>',
        [K.TAG_BEGIN, K.ATTR_KEY, K.EQUAL, K.STRING],
        ["Unterminated string value"],
        id="unterminated-string",
    ),
    pytest.param(
        "<div>{{ foo </div>",
        [K.TAG_BEGIN, K.RIGHT_ANGLED],
        ["Unmatched {{ block"],
        id="unmatched-executable",
    ),
]


@pytest.mark.parametrize(("source", "expected_kinds", "expected_errors"), GOLDEN_CASES)
def test_token_kinds(source: str, expected_kinds: list[K], expected_errors: list[str]) -> None:
    """Token kinds and diagnostics match the golden table."""
    tokens, diagnostics = tokenize(source)

    assert [t.kind for t in tokens] == expected_kinds
    assert len(diagnostics) == len(expected_errors)
    for diagnostic, expected in zip(diagnostics, expected_errors, strict=True):
        assert diagnostic.startswith(expected)


@pytest.mark.parametrize(
    ("source", "expected_kinds", "expected_errors"),
    [case for case in GOLDEN_CASES if not case.values[2]],
)
def test_diagnostic_free_cases_parse(
    source: str, expected_kinds: list[K], expected_errors: list[str]
) -> None:
    """Inputs that scan cleanly always parse without raising."""
    parse(source)


class TestLiterals:
    """Token payloads for the golden inputs."""

    def test_tag_opener_literals(self) -> None:
        tokens, _ = tokenize("<div></div>")
        assert [t.literal for t in tokens] == ["<div", ">", "</div", ">"]

    def test_executable_literal_excludes_braces(self) -> None:
        tokens, _ = tokenize("<div>{{ if(x) {{ y }} }}</div>")
        assert tokens[2].literal == " if(x) {{ y }} "

    def test_string_literal_excludes_quotes(self) -> None:
        tokens, _ = tokenize("<div class='abc'>")
        string = tokens[3]
        assert string.literal == "abc"
        assert string.quote_char == "'"

    def test_escaped_quote_backslash_kept_in_token(self) -> None:
        tokens, _ = tokenize('<div title="a \\"b\\" c">')
        assert tokens[3].literal == 'a \\"b\\" c'

    def test_interpolation_segments(self) -> None:
        tokens, _ = tokenize('<div title="Hello {{name}}!">')
        assert [t.literal for t in tokens[3:6]] == ["Hello ", "name", "!"]
        assert tokens[3].quote_char == '"'
        assert tokens[5].quote_char == '"'

    def test_comment_body(self) -> None:
        tokens, _ = tokenize("<!-- comment -->")
        assert tokens[0].literal == "<!--"
        assert tokens[1].literal == " comment "

    def test_namespaced_tag_name(self) -> None:
        tokens, _ = tokenize("<Foo::Bar::Banner />")
        assert tokens[0].literal == "<Foo::Bar::Banner"
