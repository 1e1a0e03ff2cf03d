"""Reading configuration into a target object."""

import logging
import os
import pathlib
from collections.abc import Iterable, Sequence
from typing import IO, Any

import attrs
import chardet

from .binder import bind, check_target
from .errors import BindError, ErrorAction, Handler, default_handler, resolve_action
from .parser import Parser
from .scanner import Scanner

_log = logging.getLogger(__name__)


@attrs.frozen
class ReadOptions:
    """Options for the read functions.

    Attributes:
        handlers: Error handlers, tried in order before the default handler.
        stop_on_target_not_found: Whether or not unknown names stop reading.
            By default, they are logged and skipped.
        logger: Where the default handler reports skipped names to.
            Defaults to the 'gcfg.errors' logger.
    """

    handlers: Sequence[Handler] = attrs.field(default=(), converter=tuple)
    stop_on_target_not_found: bool = False
    logger: logging.Logger | None = None

    def chain(self) -> list[Handler]:
        """Get the full handler chain, ending with the default handler."""

        return [
            *self.handlers,
            default_handler(
                self.logger, stop_on_target_not_found=self.stop_on_target_not_found
            ),
        ]


def detect_encoding(file: Iterable[bytes]) -> str | None:
    """Determine the encoding of a binary file.

    Args:
        file: The file to detect the encoding of.

    Returns:
        The encoding if detected successfully, otherwise None.
    """

    detector = chardet.UniversalDetector()

    for line in file:
        if not detector.done:
            detector.feed(line)
        else:
            break

    result = detector.close()

    if encoding := result["encoding"]:
        return encoding.lower()

    return None


def decode(data: bytes, encoding: str | None = None) -> str:
    """Decode configuration bytes.

    Args:
        data: The bytes to decode.
        encoding: The encoding of the bytes.
            If None, UTF-8 is tried first and then the encoding is detected.

    Returns:
        The text.

    Raises:
        ValueError: The encoding could not be detected.
    """

    if encoding is not None:
        return data.decode(encoding)

    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        pass

    encoding = detect_encoding(data.splitlines(keepends=True))
    if encoding is None:
        raise ValueError("failed to detect encoding")

    _log.debug("detected encoding %s", encoding)
    return data.decode(encoding)


def _read(config: Any, text: str, filename: str, options: ReadOptions):
    check_target(config)
    handlers = options.chain()

    _log.debug("reading %s into %s", filename or "<string>", type(config).__name__)

    for request in Parser(Scanner(text, filename)).parse():
        try:
            bind(config, request)
        except BindError as e:
            if resolve_action(handlers, e) is ErrorAction.STOP:
                raise

    _log.debug("finished reading %s", filename or "<string>")


def read_into(config: Any, reader: IO[bytes] | IO[str], *, encoding: str | None = None, **options: Any):
    """Read configuration from a file object and set the values in config.

    Args:
        config: The target object, an instance of an attrs class or dataclass.
        reader: The file object to read from, in binary or text mode.
        encoding: The encoding of binary data. See decode().
            It must not be given for text readers, which are already decoded.
        **options: Passed to ReadOptions.

    Raises:
        TypeError: config is not an instance of an attrs class or dataclass,
            or an encoding was given for a text reader.
        ParseError: The configuration has invalid syntax.
        ScanErrorList: The configuration has malformed tokens.
        BindError: An error handler (or the default handler) stopped on a binding error.
        InvalidContainerError: The target has a field that cannot hold configuration,
            and no error handler dealt with it.
    """

    data = reader.read()

    if isinstance(data, bytes):
        text = decode(data, encoding)
    elif encoding is not None:
        raise TypeError("encoding is only supported for binary readers")
    else:
        text = data

    _read(config, text, "", ReadOptions(**options))


def read_string_into(config: Any, text: str, **options: Any):
    """Read configuration from a string and set the values in config.

    Args:
        config: See read_into().
        text: The configuration text.
        **options: Passed to ReadOptions.

    Raises:
        See read_into().
    """

    _read(config, text, "", ReadOptions(**options))


def read_file_into(
    config: Any, filename: str | os.PathLike[str], encoding: str | None = None, **options: Any
):
    """Read configuration from a file and set the values in config.
    Error positions include the filename.

    Args:
        config: See read_into().
        filename: The path to the file.
        encoding: The encoding of the file. See decode().
        **options: Passed to ReadOptions.

    Raises:
        OSError: The file could not be read.
        See read_into() for the rest.
    """

    path = pathlib.Path(filename)

    with path.open("rb") as f:
        text = decode(f.read(), encoding)

    _read(config, text, str(filename), ReadOptions(**options))
