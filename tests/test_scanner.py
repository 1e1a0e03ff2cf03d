import pytest

from gcfg.scanner import Scanner
from gcfg.token import Kind, Position

TEST_CONFIG = """[sect "sub"]
name = value ; comment
"""


def kinds(text: str, **kwargs) -> list[tuple[Kind, str]]:
    return [(tok.kind, tok.lit) for tok in Scanner(text, **kwargs)]


def test_scanner_tokens():
    assert kinds(TEST_CONFIG) == [
        (Kind.LBRACK, ""),
        (Kind.IDENT, "sect"),
        (Kind.STRING, '"sub"'),
        (Kind.RBRACK, ""),
        (Kind.EOL, ""),
        (Kind.IDENT, "name"),
        (Kind.ASSIGN, ""),
        (Kind.STRING, "value"),
        (Kind.EOL, ""),
        (Kind.EOF, ""),
    ]


def test_scanner_positions():
    scanner = Scanner(TEST_CONFIG, "test.ini")
    toks = list(scanner)

    assert toks[0].pos == Position("test.ini", 0, 1, 1)
    assert toks[5].pos == Position("test.ini", 13, 2, 1)
    assert toks[7].pos.line == 2
    assert toks[7].pos.column == 8
    assert toks[-1].pos.line == 3

    assert str(toks[5].pos) == "test.ini:2:1"
    assert str(Position(line=4, column=2)) == "4:2"
    assert str(Position()) == "-"


def test_scanner_comments():
    assert kinds("; hello\n# world", scan_comments=True) == [
        (Kind.COMMENT, "; hello"),
        (Kind.EOL, ""),
        (Kind.COMMENT, "# world"),
        (Kind.EOF, ""),
    ]


def test_scanner_identifier():
    assert kinds("foo-bar2_baz")[0] == (Kind.IDENT, "foo-bar2_baz")


def test_scanner_value_quoted_comment():
    assert kinds('name = "a ; b" # comment')[2] == (Kind.STRING, '"a ; b"')


def test_scanner_value_trailing_whitespace():
    assert kinds("name = some value  \t\n")[2] == (Kind.STRING, "some value")

    # Quoted whitespace is kept.
    assert kinds('name = "value  "  \n')[2] == (Kind.STRING, '"value  "')


def test_scanner_value_empty():
    assert kinds("name =\n") == [
        (Kind.IDENT, "name"),
        (Kind.ASSIGN, ""),
        (Kind.STRING, ""),
        (Kind.EOL, ""),
        (Kind.EOF, ""),
    ]


def test_scanner_value_continuation():
    toks = kinds("name = a\\\nb\n")
    assert toks[2] == (Kind.STRING, "a\\\nb")
    assert toks[3] == (Kind.EOL, "")


def test_scanner_value_crlf():
    toks = kinds("name = a\\\r\nb\r\n")
    assert toks[2] == (Kind.STRING, "a\\\nb")
    assert toks[3] == (Kind.EOL, "")


def test_scanner_bom():
    assert kinds("\ufeff[a]")[:2] == [(Kind.LBRACK, ""), (Kind.IDENT, "a")]


def test_scanner_illegal_character():
    scanner = Scanner("[a]\n!")
    toks = list(scanner)

    assert (toks[4].kind, toks[4].lit) == (Kind.ILLEGAL, "!")
    assert len(scanner.errors) == 1
    assert str(scanner.errors) == "2:1: illegal character '!'"


def test_scanner_unterminated_subsection():
    scanner = Scanner('[a "sub\n]')
    list(scanner)

    assert [e.msg for e in scanner.errors] == ["string not terminated"]


def test_scanner_unterminated_value():
    scanner = Scanner('[a]\nname = "value\n')
    list(scanner)

    assert [e.msg for e in scanner.errors] == ["string not terminated"]


def test_scanner_unknown_escape():
    scanner = Scanner('name = "\\q"')
    list(scanner)
    assert [e.msg for e in scanner.errors] == ["unknown escape sequence"]

    # Subsection names only allow escaped quotes and backslashes.
    scanner = Scanner('[a "\\n"]')
    list(scanner)
    assert [e.msg for e in scanner.errors] == ["unknown escape sequence"]


def test_scanner_escape_not_terminated():
    scanner = Scanner("name = a\\")
    list(scanner)

    assert [e.msg for e in scanner.errors] == ["escape sequence not terminated"]


def test_scanner_error_list():
    scanner = Scanner("!\n?")
    list(scanner)

    assert len(scanner.errors) == 2
    assert str(scanner.errors) == "1:1: illegal character '!' (and 1 more errors)"


def test_scanner_eof_repeats():
    scanner = Scanner("")

    assert scanner.scan().kind == Kind.EOF
    assert scanner.scan().kind == Kind.EOF
