"""Errors raised while reading configuration, and the handlers that decide what to do about them.

There are two families of errors:

* Syntax errors (`ParseError`, and `ScanErrorList` from the scanner) always stop reading,
  since the rest of the text cannot be parsed reliably.
* Binding errors (`TargetNotFoundError`, `InvalidValueError` and `InvalidContainerError`)
  are passed to error handlers, which decide whether reading stops or the error is ignored.

An error handler is any callable taking a binding error and returning an `ErrorAction`.
Handlers are tried in order until one of them has an opinion. If none do, the default handler is used:

* `TargetNotFoundError` is logged and ignored.
* `InvalidValueError` stops reading.
* `InvalidContainerError` is raised straight away, since it indicates a bug in the target class.
"""

import enum
import logging
from collections.abc import Callable, Iterable

import attrs

from .token import Position

_log = logging.getLogger(__name__)


class ErrorAction(enum.Enum):
    """What an error handler wants done about an error."""

    # The handler has no opinion. The error is passed to the next handler.
    NONE = enum.auto()

    # Stop reading and raise the error to the caller.
    STOP = enum.auto()

    # Ignore the error. It is not passed to any other handler.
    SUPPRESS = enum.auto()


@attrs.frozen
class ErrorLocation:
    """Where in the configuration a binding error occurred.

    If field is not empty, the problem is with that variable.
    Otherwise the problem is with the section and/or subsection.
    If all attributes are empty, the problem is with the target object itself.

    Attributes:
        section: The section name.
        subsection: The subsection name, if any.
        field: The variable name, if any.
    """

    section: str = ""
    subsection: str = ""
    field: str = ""

    def __str__(self) -> str:
        if self.field:
            return f"section {self.section!r} subsection {self.subsection!r} variable {self.field!r}"

        if self.subsection:
            return f"section {self.section!r} subsection {self.subsection!r}"

        return f"section {self.section!r}"


class GcfgError(Exception):
    """Base class for all errors reported while reading configuration."""


class ParseError(GcfgError):
    """The configuration text has invalid syntax.

    Attributes:
        pos: Where the problem is.
        msg: What the problem is.
    """

    pos: Position
    msg: str

    def __init__(self, pos: Position, msg: str):
        super().__init__(pos, msg)
        self.pos = pos
        self.msg = msg

    def __str__(self) -> str:
        return f"{self.pos}: {self.msg}"


class BindError(GcfgError):
    """Base class for errors found while setting values in the target object.

    Attributes:
        location: Where in the configuration the error occurred.
    """

    location: ErrorLocation

    def __init__(self, location: ErrorLocation):
        super().__init__(location)
        self.location = location

    @property
    def section(self) -> str:
        return self.location.section

    @property
    def subsection(self) -> str:
        return self.location.subsection

    @property
    def field(self) -> str:
        return self.location.field


class TargetNotFoundError(BindError):
    """A section or variable does not exist in the target object."""

    def __str__(self) -> str:
        if self.field:
            return f"invalid variable: {self.location}"

        return f"invalid section: {self.location}"


class InvalidValueError(BindError, ValueError):
    """A value could not be converted to the type of its variable.

    Attributes:
        reason: What was wrong with the value.
    """

    reason: str

    def __init__(self, location: ErrorLocation, reason: str):
        super().__init__(location)
        self.reason = reason

    def __str__(self) -> str:
        return f"{self.reason}: {self.location}"


class InvalidContainerError(BindError):
    """Part of the target object cannot hold configuration values.

    For example, a section attribute that is neither a record nor a dict of records.

    Attributes:
        message: What the problem is.
    """

    message: str

    def __init__(self, location: ErrorLocation, message: str):
        super().__init__(location)
        self.message = message

    def __str__(self) -> str:
        return f"{self.message}: {self.location}"


class MalformedLiteralError(RuntimeError):
    """A string literal that the scanner accepted could not be decoded.

    This is never caused by bad input, only by a bug in the scanner.
    """


Handler = Callable[[BindError], ErrorAction]


def stop_on_target_not_found(error: BindError) -> ErrorAction:
    """Error handler that stops reading on unknown names instead of skipping them.

    Args:
        error: The binding error.

    Returns:
        STOP for TargetNotFoundError, otherwise NONE.
    """

    if isinstance(error, TargetNotFoundError):
        return ErrorAction.STOP

    return ErrorAction.NONE


def default_handler(
    logger: logging.Logger | None = None, *, stop_on_target_not_found: bool = False
) -> Handler:
    """Create the fallback error handler.

    Args:
        logger: Where skipped names are reported to.
            Defaults to this module's logger.
        stop_on_target_not_found: Whether or not unknown names stop reading instead of being skipped.

    Returns:
        The handler.
    """

    if logger is None:
        logger = _log

    def handle(error: BindError) -> ErrorAction:
        match error:
            case TargetNotFoundError():
                if stop_on_target_not_found:
                    return ErrorAction.STOP

                logger.warning("gcfg: %s", error)
                return ErrorAction.SUPPRESS

            case InvalidContainerError():
                # The target class is unusable, so there is no point in carrying on.
                raise error

            case _:
                return ErrorAction.STOP

    return handle


def resolve_action(handlers: Iterable[Handler], error: BindError) -> ErrorAction:
    """Ask each handler in turn what to do about an error.

    Args:
        handlers: The handlers. The default handler should be the last one.
        error: The binding error.

    Returns:
        The first action that is not NONE, or NONE if every handler had no opinion.
    """

    for handler in handlers:
        # Handlers returning None are treated as having no opinion.
        action = handler(error)
        if action is not None and action is not ErrorAction.NONE:
            return action

    return ErrorAction.NONE
