"""Parser for gcfg text.

The grammar is line-oriented:

    section-header := '[' IDENT (STRING)? ']'
    assignment     := IDENT ('=' STRING)?

Each section header or assignment line becomes a `BindingRequest`.
Comments (starting with ';' or '#') and blank lines are skipped.
"""

from collections.abc import Iterator

import attrs

from .errors import ParseError
from .literal import unquote
from .scanner import Scanner
from .token import LINE_END, Kind, Position, Token


@attrs.frozen
class ParseState:
    """The section the parser is in.

    Attributes:
        section: The name of the last section header, or empty if no header was seen yet.
        subsection: The subsection of the last section header, if any.
    """

    section: str = ""
    subsection: str = ""


@attrs.frozen
class BindingRequest:
    """A request to set a value in the target object.

    Attributes:
        section: The section name.
        subsection: The subsection name, or empty if none.
        name: The variable name. If empty, the request only ensures the section exists.
        blank: Whether or not the variable was given without a value, i.e. `name` instead of `name = value`.
        value: The decoded value.
        pos: Where the section header or assignment starts.
    """

    section: str
    subsection: str
    name: str = ""
    blank: bool = False
    value: str = ""
    pos: Position = Position()


class Parser:
    """State machine over the scanner's tokens.

    Attributes:
        state: The section the parser is in.

    Args:
        scanner: The scanner to read tokens from.
    """

    state: ParseState

    def __init__(self, scanner: Scanner):
        self.state = ParseState()

        self._scanner = scanner
        self._tok = Token(Position(), Kind.ILLEGAL)

    def _next(self) -> Token:
        self._tok = self._scanner.scan()

        # Lexical errors make the rest of the input unreliable.
        if self._scanner.errors:
            raise self._scanner.errors

        return self._tok

    def _error(self, msg: str) -> ParseError:
        return ParseError(self._tok.pos, msg)

    def _expect_line_end(self):
        if self._tok.kind not in LINE_END:
            raise self._error("expected EOL, EOF, or comment")

    def _header(self) -> tuple[ParseState, BindingRequest]:
        # The current token is '['.
        pos = self._tok.pos

        if self._next().kind != Kind.IDENT:
            raise self._error("expected section name")

        section, subsection = self._tok.lit, ""

        if self._next().kind == Kind.STRING:
            subsection = unquote(self._tok.lit)
            if not subsection:
                raise self._error("empty subsection name")

            self._next()

        if self._tok.kind != Kind.RBRACK:
            if not subsection:
                raise self._error("expected subsection name or right bracket")

            raise self._error("expected right bracket")

        self._next()
        self._expect_line_end()

        # A blank request makes sure the section exists even if it has no variables.
        return ParseState(section, subsection), BindingRequest(
            section, subsection, blank=True, pos=pos
        )

    def _variable(self) -> BindingRequest:
        # The current token is the variable name.
        pos = self._tok.pos
        name = self._tok.lit

        if self._next().kind in LINE_END:
            return BindingRequest(
                self.state.section, self.state.subsection, name, blank=True, pos=pos
            )

        if self._tok.kind != Kind.ASSIGN:
            raise self._error("expected '='")

        if self._next().kind != Kind.STRING:
            raise self._error("expected value")

        value = unquote(self._tok.lit)

        self._next()
        self._expect_line_end()

        return BindingRequest(
            self.state.section, self.state.subsection, name, value=value, pos=pos
        )

    def parse(self) -> Iterator[BindingRequest]:
        """Parse the text, one construct at a time.

        Yields:
            A binding request for each section header and assignment, in order.

        Raises:
            ParseError: The text has invalid syntax.
            ScanErrorList: The scanner found malformed tokens.
        """

        self._next()

        while True:
            match self._tok.kind:
                case Kind.EOF:
                    return

                case Kind.EOL | Kind.COMMENT:
                    self._next()

                case Kind.LBRACK:
                    self.state, request = self._header()
                    yield request

                case Kind.IDENT:
                    if not self.state.section:
                        raise self._error("expected section header")

                    yield self._variable()

                case _:
                    if not self.state.section:
                        raise self._error("expected section header")

                    raise self._error("expected section header or variable declaration")


def parse(text: str, filename: str = "") -> Iterator[BindingRequest]:
    """Parse gcfg text.

    Args:
        text: The text to parse.
        filename: The filename to report in error positions.

    Returns:
        An iterator over binding requests. See Parser.parse().
    """

    return Parser(Scanner(text, filename)).parse()
