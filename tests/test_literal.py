import pytest

from gcfg import MalformedLiteralError, unquote


def test_unquote_plain():
    assert unquote("value") == "value"


def test_unquote_escapes():
    assert unquote('"a\\"b\\nc"') == 'a"b\nc'
    assert unquote('"tab\\there"') == "tab\there"
    assert unquote('"back\\\\slash"') == "back\\slash"


def test_unquote_mixed():
    assert unquote('a" b "c') == "a b c"
    assert unquote('"; not a comment"') == "; not a comment"


def test_unquote_continuation():
    assert unquote("first \\\nsecond") == "first second"


def test_unquote_empty():
    assert unquote("") == ""
    assert unquote('""') == ""


def test_unquote_missing_end_quote():
    with pytest.raises(MalformedLiteralError):
        unquote('"abc')


def test_unquote_invalid_escape():
    with pytest.raises(MalformedLiteralError):
        unquote("\\q")

    with pytest.raises(MalformedLiteralError):
        unquote("abc\\")

    # Continuations are not allowed inside quotes.
    with pytest.raises(MalformedLiteralError):
        unquote('"a\\\nb"')
