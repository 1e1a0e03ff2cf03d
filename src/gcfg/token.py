"""Tokens and source positions produced by the scanner."""

import enum

import attrs


class Kind(enum.Enum):
    """The kind of a token."""

    ILLEGAL = enum.auto()
    EOF = enum.auto()
    COMMENT = enum.auto()

    IDENT = enum.auto()
    STRING = enum.auto()

    ASSIGN = enum.auto()
    LBRACK = enum.auto()
    RBRACK = enum.auto()
    EOL = enum.auto()

    def __str__(self) -> str:
        return _NAMES[self]


_NAMES = {
    Kind.ILLEGAL: "ILLEGAL",
    Kind.EOF: "EOF",
    Kind.COMMENT: "COMMENT",
    Kind.IDENT: "IDENT",
    Kind.STRING: "STRING",
    Kind.ASSIGN: "=",
    Kind.LBRACK: "[",
    Kind.RBRACK: "]",
    Kind.EOL: "EOL",
}

# Tokens that may end a section header or a variable declaration.
LINE_END = frozenset([Kind.EOL, Kind.EOF, Kind.COMMENT])


@attrs.frozen
class Position:
    """A location in the source text.

    Attributes:
        filename: The name of the file, if any.
        offset: Offset from the start of the text, starting at 0.
        line: Line number, starting at 1.
        column: Column number (in characters), starting at 1.
    """

    filename: str = ""
    offset: int = 0
    line: int = 0
    column: int = 0

    @property
    def valid(self) -> bool:
        return self.line > 0

    def __str__(self) -> str:
        s = self.filename
        if self.valid:
            if s:
                s += ":"
            s += f"{self.line}:{self.column}"

        return s or "-"


@attrs.frozen
class Token:
    """A single token.

    Attributes:
        pos: Where the token starts.
        kind: The kind of token.
        lit: The literal text of the token. Only identifiers, strings and comments carry one.
    """

    pos: Position
    kind: Kind
    lit: str = ""
