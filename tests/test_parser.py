import pytest

from gcfg import ParseError, ScanErrorList
from gcfg.parser import Parser, ParseState, parse
from gcfg.scanner import Scanner

TEST_CONFIG = """; A comment.
[core]
name = value
flag

[remote "origin"]
url = "https://example.com/repo.git" # trailing comment
empty =
"""


def requests(text: str) -> list[tuple[str, str, str, bool, str]]:
    return [(r.section, r.subsection, r.name, r.blank, r.value) for r in parse(text)]


def test_parse():
    assert requests(TEST_CONFIG) == [
        ("core", "", "", True, ""),
        ("core", "", "name", False, "value"),
        ("core", "", "flag", True, ""),
        ("remote", "origin", "", True, ""),
        ("remote", "origin", "url", False, "https://example.com/repo.git"),
        ("remote", "origin", "empty", False, ""),
    ]


def test_parse_positions():
    reqs = list(parse(TEST_CONFIG, "test.ini"))

    assert str(reqs[0].pos) == "test.ini:2:1"
    assert str(reqs[1].pos) == "test.ini:3:1"


def test_parse_state():
    parser = Parser(Scanner('[a]\nx = 1\n[b "c"]\n'))
    it = parser.parse()

    next(it)
    assert parser.state == ParseState("a", "")

    next(it)
    assert parser.state == ParseState("a", "")

    next(it)
    assert parser.state == ParseState("b", "c")


def test_parse_escaped_subsection():
    assert requests('[a "say \\"hi\\""]')[0][1] == 'say "hi"'


def test_parse_quoted_value():
    assert requests('[a]\nx = "a\\"b\\nc"')[1][4] == 'a"b\nc'
    assert requests('[a]\nx = a" ; "b')[1][4] == "a ; b"


def test_parse_empty():
    assert requests("") == []
    assert requests("\n\n; only comments\n") == []


@pytest.mark.parametrize(
    "text, message",
    [
        ("x = 1", "1:1: expected section header"),
        ("\n\n= 1", "3:1: expected section header"),
        ("[]", "1:2: expected section name"),
        ('[a ""]', "1:4: empty subsection name"),
        ("[a b]", "1:4: expected subsection name or right bracket"),
        ('[a "b" c]', "1:8: expected right bracket"),
        ("[a] b", "1:5: expected EOL, EOF, or comment"),
        ("[a]\nx y", "2:3: expected '='"),
        ("[a]\n]", "2:1: expected section header or variable declaration"),
        ("[a]\n= 1", "2:1: expected section header or variable declaration"),
    ],
)
def test_parse_error(text, message):
    with pytest.raises(ParseError) as exc:
        list(parse(text))

    assert str(exc.value) == message


def test_parse_error_filename():
    with pytest.raises(ParseError) as exc:
        list(parse("x = 1", "test.ini"))

    assert exc.value.pos.filename == "test.ini"
    assert exc.value.msg == "expected section header"
    assert str(exc.value) == "test.ini:1:1: expected section header"


def test_parse_scan_error():
    with pytest.raises(ScanErrorList) as exc:
        list(parse('[a]\nx = "unterminated\n'))

    assert exc.value.errors[0].msg == "string not terminated"


def test_parse_yields_before_error():
    it = parse("[a]\nx = 1\n[")

    assert next(it).name == ""
    assert next(it).value == "1"

    with pytest.raises(ParseError):
        next(it)
