"""Read INI-style configuration files into typed attrs classes and dataclasses.

A configuration file consists of sections, optionally with a quoted subsection name,
containing variables:

    ; Comments start with ';' or '#'.
    [server]
    host = example.com
    port = 8080
    verbose

    [remote "origin"]
    url = "https://example.com/repo.git"

Sections are bound to attributes of the target object, which must be records
(attrs classes or dataclasses) or, for sections with subsections, dicts of records.
"""

from .binder import bind, check_target
from .errors import (
    BindError,
    ErrorAction,
    ErrorLocation,
    GcfgError,
    InvalidContainerError,
    InvalidValueError,
    MalformedLiteralError,
    ParseError,
    TargetNotFoundError,
    stop_on_target_not_found,
)
from .literal import unquote
from .parser import BindingRequest, Parser, parse
from .read import ReadOptions, read_file_into, read_into, read_string_into
from .scanner import ScanError, ScanErrorList, Scanner
from .schema import field, metadata
from .types import (
    IntMode,
    Int8,
    Int16,
    Int32,
    Int64,
    Uint8,
    Uint16,
    Uint32,
    Uint64,
)
