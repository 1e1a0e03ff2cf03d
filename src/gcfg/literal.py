"""Decoding of quoted string literals."""

from .errors import MalformedLiteralError

UNESCAPE = {"\\": "\\", '"': '"', "n": "\n", "t": "\t"}


def unquote(lit: str) -> str:
    """Decode a string literal as returned by the scanner.

    Quoted and unquoted parts may be mixed, i.e. `a" b "c` decodes to `a b c`.
    Outside quotes, a backslash followed by a newline continues the literal on the next line.

    Args:
        lit: The literal.

    Returns:
        The decoded string.

    Raises:
        MalformedLiteralError: The literal has a missing end quote or an invalid escape sequence.
            The scanner rejects such literals, so this should never happen.
    """

    chars: list[str] = []
    quoted = False
    escaped = False

    for c in lit:
        if escaped:
            escaped = False

            if c in UNESCAPE:
                chars.append(UNESCAPE[c])
            elif c != "\n" or quoted:
                raise MalformedLiteralError(f"invalid escape sequence in {lit!r}")

            continue

        match c:
            case '"':
                quoted = not quoted
            case "\\":
                escaped = True
            case _:
                chars.append(c)

    if quoted:
        raise MalformedLiteralError(f"missing end quote in {lit!r}")

    if escaped:
        raise MalformedLiteralError(f"invalid escape sequence in {lit!r}")

    return "".join(chars)
