"""A scanner for gcfg text.

The scanner turns source text into a stream of tokens, one per call to `Scanner.scan()`.
Malformed input does not stop the scanner: errors are collected in `Scanner.errors`
and it is up to the caller to check them after each token.
"""

import bisect
from collections.abc import Iterator

import attrs

from .errors import GcfgError
from .token import Kind, Position, Token

BOM = "\ufeff"

# Escapes allowed in subsection names and values respectively.
_STRING_ESCAPES = frozenset('\\"')
_VALUE_ESCAPES = frozenset('\\"nt')


@attrs.frozen
class ScanError:
    """A lexical error at a position."""

    pos: Position
    msg: str

    def __str__(self) -> str:
        if self.pos.filename or self.pos.valid:
            return f"{self.pos}: {self.msg}"

        return self.msg


class ScanErrorList(GcfgError):
    """Errors reported by the scanner, in the order they were found.

    Attributes:
        errors: The errors.
    """

    errors: list[ScanError]

    def __init__(self, errors: list[ScanError] | None = None):
        super().__init__()
        self.errors = errors or []

    def add(self, pos: Position, msg: str):
        self.errors.append(ScanError(pos, msg))

    def __len__(self) -> int:
        return len(self.errors)

    def __iter__(self) -> Iterator[ScanError]:
        return iter(self.errors)

    def __str__(self) -> str:
        match len(self.errors):
            case 0:
                return "no errors"
            case 1:
                return str(self.errors[0])
            case n:
                return f"{self.errors[0]} (and {n - 1} more errors)"


def _is_letter(ch: str) -> bool:
    return ch == "_" or ch.isalpha()


def _is_digit(ch: str) -> bool:
    return ch.isdigit()


def _is_whitespace(ch: str) -> bool:
    return ch in (" ", "\t", "\r")


class Scanner:
    """Tokenizer for gcfg text.

    Attributes:
        filename: The filename reported in token positions.
        scan_comments: Whether or not comments are returned as COMMENT tokens.
            If False, comments are skipped.
        errors: Errors found so far.

    Args:
        src: The text to scan.
    """

    filename: str
    scan_comments: bool
    errors: ScanErrorList

    def __init__(self, src: str, filename: str = "", *, scan_comments: bool = False):
        self.filename = filename
        self.scan_comments = scan_comments
        self.errors = ScanErrorList()

        self._src = src
        # The current character ("" at the end of the text) and its offset.
        self._ch = ""
        self._offset = 0
        self._rd_offset = 0
        # Offsets where each line starts.
        self._lines = [0]
        # Set after '=' so that the rest of the line is scanned as a value.
        self._next_val = False

        self._next()
        if self._ch == BOM:
            self._next()

    def _next(self):
        if self._ch == "\n":
            self._lines.append(self._rd_offset)

        self._offset = self._rd_offset
        if self._rd_offset < len(self._src):
            self._ch = self._src[self._rd_offset]
            self._rd_offset += 1
        else:
            self._ch = ""

    def position(self, offset: int) -> Position:
        """Get the position of an offset into the text.

        Args:
            offset: The offset. It must not be past the current scanning position.

        Returns:
            The position.
        """

        line = bisect.bisect_right(self._lines, offset)
        column = offset - self._lines[line - 1] + 1

        return Position(self.filename, offset, line, column)

    def _error(self, offset: int, msg: str):
        self.errors.add(self.position(offset), msg)

    def _skip_whitespace(self):
        while _is_whitespace(self._ch):
            self._next()

    def _scan_comment(self) -> str:
        # The comment character was already consumed.
        offs = self._offset - 1

        while self._ch and self._ch != "\n":
            self._next()

        return self._src[offs : self._offset].replace("\r", "")

    def _scan_identifier(self) -> str:
        offs = self._offset

        while _is_letter(self._ch) or _is_digit(self._ch) or self._ch == "-":
            self._next()

        return self._src[offs : self._offset]

    def _scan_escape(self, allowed: frozenset[str]):
        offs = self._offset
        ch = self._ch

        if not ch:
            self._error(offs, "escape sequence not terminated")
            return

        # Always make progress.
        self._next()

        if ch not in allowed:
            self._error(offs, "unknown escape sequence")

    def _scan_string(self) -> str:
        # The opening quote was already consumed.
        offs = self._offset - 1

        while self._ch != '"':
            ch = self._ch
            self._next()

            if ch == "\n" or not ch:
                self._error(offs, "string not terminated")
                return self._src[offs : self._offset]

            if ch == "\\":
                self._scan_escape(_STRING_ESCAPES)

        self._next()

        return self._src[offs : self._offset]

    def _scan_value(self) -> str:
        offs = self._offset
        end = offs
        in_quote = False
        has_cr = False

        while in_quote or (self._ch and self._ch not in "\n;#"):
            ch = self._ch
            self._next()

            if ch == "\\" and in_quote:
                self._scan_escape(_VALUE_ESCAPES)
            elif ch == "\\":
                if self._ch == "\r":
                    has_cr = True
                    self._next()

                # Backslash-newline continues the value on the next line.
                if self._ch == "\n":
                    self._next()
                else:
                    self._scan_escape(_VALUE_ESCAPES)
            elif ch == '"':
                in_quote = not in_quote
            elif ch == "\r":
                has_cr = True
            elif not ch or (in_quote and ch == "\n"):
                self._error(offs, "string not terminated")
                break

            # Trailing whitespace outside quotes is not part of the value.
            if in_quote or not _is_whitespace(ch):
                end = self._offset

        lit = self._src[offs:end]
        if has_cr:
            lit = lit.replace("\r", "")

        return lit

    def scan(self) -> Token:
        """Scan the next token.

        At the end of the text, EOF tokens are returned indefinitely.
        If the token is malformed, an error is added to `self.errors`
        and the token may be ILLEGAL.

        Returns:
            The token.
        """

        while True:
            self._skip_whitespace()

            pos = self.position(self._offset)
            ch = self._ch

            if self._next_val:
                self._next_val = False
                return Token(pos, Kind.STRING, self._scan_value())

            if _is_letter(ch):
                return Token(pos, Kind.IDENT, self._scan_identifier())

            self._next()

            match ch:
                case "":
                    return Token(pos, Kind.EOF)
                case "\n":
                    return Token(pos, Kind.EOL)
                case '"':
                    return Token(pos, Kind.STRING, self._scan_string())
                case "[":
                    return Token(pos, Kind.LBRACK)
                case "]":
                    return Token(pos, Kind.RBRACK)
                case ";" | "#":
                    lit = self._scan_comment()
                    if self.scan_comments:
                        return Token(pos, Kind.COMMENT, lit)
                case "=":
                    self._next_val = True
                    return Token(pos, Kind.ASSIGN)
                case _:
                    self._error(pos.offset, f"illegal character {ch!r}")
                    return Token(pos, Kind.ILLEGAL, ch)

    def __iter__(self) -> Iterator[Token]:
        """Iterate over tokens up to and including EOF."""

        while True:
            tok = self.scan()
            yield tok

            if tok.kind == Kind.EOF:
                return
