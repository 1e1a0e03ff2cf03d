"""Descriptions of the record classes that configuration is read into.

A record is an attrs class or a dataclass. Each of its fields is classified once into a `Kind`,
so that binding a value only needs a dictionary lookup.

Fields are matched to configuration names case-insensitively, ignoring '-' and '_',
so `[http-server]` matches an attribute named `http_server`.
The configuration name can be overridden with field metadata (see `field()`),
and fields named '-' or starting with '_' are never set.

A class with a `from_text(text)` classmethod is parsed by that method instead.
It must raise ValueError for invalid text, so that the error is reported with its location.
Other exceptions are treated as bugs and propagate out of the read functions.
"""

import dataclasses
import datetime
import enum
import functools
import types as _types
import typing
from typing import Any

import attrs

from .types import DEFAULT_INT_MODE, IntMode

# Field metadata keys.
NAME = "gcfg.name"
INT_MODE = "gcfg.int"


class Kind(enum.Enum):
    """How a field is set from configuration."""

    BOOL = enum.auto()
    INT = enum.auto()
    FLOAT = enum.auto()
    STRING = enum.auto()
    DURATION = enum.auto()
    CUSTOM = enum.auto()

    RECORD = enum.auto()
    MAP = enum.auto()
    LIST = enum.auto()

    # Fields that can't be set. The reason is kept so it can be reported when the field is used.
    INVALID = enum.auto()

    @property
    def scalar(self) -> bool:
        return self in _SCALARS


_SCALARS = frozenset(
    [Kind.BOOL, Kind.INT, Kind.FLOAT, Kind.STRING, Kind.DURATION, Kind.CUSTOM]
)


@attrs.frozen
class FieldSpec:
    """How to set a single field.

    Attributes:
        attr: The attribute name on the record.
        kind: The kind of field.
        type: The type of value to create.
            For LIST this is the element type, and for MAP it is the record type of the values.
        elem: The kind of each element in a LIST.
        int_mode: The bases allowed for integers.
        reason: Why the field is INVALID.
    """

    attr: str
    kind: Kind
    type: Any = None
    elem: Kind | None = None
    int_mode: IntMode = DEFAULT_INT_MODE
    reason: str = ""


@attrs.frozen
class Schema:
    """The settable fields of a record class.

    Attributes:
        cls: The record class.
        fields: Field specs by normalized configuration name.
    """

    cls: type
    fields: dict[str, FieldSpec]

    def lookup(self, name: str) -> FieldSpec | None:
        """Find the field for a configuration name.

        Args:
            name: The section or variable name.

        Returns:
            The field spec, or None if there is no such field.
        """

        return self.fields.get(normalize(name))


def normalize(name: str) -> str:
    """Normalize a name for case-insensitive matching, ignoring '-' and '_'."""

    return name.replace("-", "").replace("_", "").casefold()


def metadata(name: str | None = None, int_mode: str | IntMode | None = None) -> dict[str, Any]:
    """Create field metadata for an attrs or dataclass field.

    Args:
        name: The configuration name of the field. '-' excludes the field.
        int_mode: The bases allowed for integers, either as an IntMode or letters like 'dho'.

    Returns:
        The metadata dictionary.
    """

    md: dict[str, Any] = {}
    if name is not None:
        md[NAME] = name

    if int_mode is not None:
        md[INT_MODE] = IntMode.parse(int_mode) if isinstance(int_mode, str) else int_mode

    return md


def field(
    *, name: str | None = None, int_mode: str | IntMode | None = None, **kwargs
) -> Any:
    """Shorthand for attrs.field() with gcfg metadata.

    Args:
        name: See metadata().
        int_mode: See metadata().
        **kwargs: Passed to attrs.field().

    Returns:
        The attrs field.
    """

    md = kwargs.pop("metadata", {}) | metadata(name, int_mode)
    return attrs.field(metadata=md, **kwargs)


def is_record(tp: Any) -> bool:
    """Check if a type is an attrs class or a dataclass."""

    return isinstance(tp, type) and (attrs.has(tp) or dataclasses.is_dataclass(tp))


def _strip_optional(tp: Any) -> Any:
    if typing.get_origin(tp) is typing.Annotated:
        tp = typing.get_args(tp)[0]

    if typing.get_origin(tp) in (typing.Union, _types.UnionType):
        args = [a for a in typing.get_args(tp) if a is not type(None)]
        if len(args) == 1:
            return _strip_optional(args[0])

    return tp


def _classify_scalar(tp: Any) -> Kind | None:
    if not isinstance(tp, type):
        return None

    # Checked first so that a custom str or int subclass is still parsed by itself.
    if callable(getattr(tp, "from_text", None)):
        return Kind.CUSTOM

    if issubclass(tp, bool):
        return Kind.BOOL

    if issubclass(tp, int):
        return Kind.INT

    if issubclass(tp, float):
        return Kind.FLOAT

    if issubclass(tp, str):
        return Kind.STRING

    if issubclass(tp, datetime.timedelta):
        return Kind.DURATION

    return None


def _classify(attr: str, tp: Any, int_mode: IntMode) -> FieldSpec:
    tp = _strip_optional(tp)

    if kind := _classify_scalar(tp):
        return FieldSpec(attr, kind, tp, int_mode=int_mode)

    if is_record(tp):
        return FieldSpec(attr, Kind.RECORD, tp)

    origin, args = typing.get_origin(tp), typing.get_args(tp)

    if origin is dict:
        value = _strip_optional(args[1]) if len(args) == 2 else None

        if args and args[0] is str and is_record(value):
            return FieldSpec(attr, Kind.MAP, value)

        return FieldSpec(
            attr,
            Kind.INVALID,
            reason="dict field for section must have str keys and record values",
        )

    if origin is list:
        elem = _strip_optional(args[0]) if args else None

        if kind := _classify_scalar(elem):
            return FieldSpec(attr, Kind.LIST, elem, elem=kind, int_mode=int_mode)

        return FieldSpec(
            attr, Kind.INVALID, reason=f"unsupported list element type {elem!r}"
        )

    return FieldSpec(attr, Kind.INVALID, reason=f"unsupported type {tp!r}")


def _record_fields(cls: type) -> list[tuple[str, Any]]:
    if attrs.has(cls):
        return [(a.name, a.metadata) for a in attrs.fields(cls)]

    return [(f.name, f.metadata) for f in dataclasses.fields(cls)]


@functools.cache
def schema(cls: type) -> Schema:
    """Describe a record class.

    Args:
        cls: The record class.

    Returns:
        The schema.

    Raises:
        TypeError: The class is not a record.
    """

    if not is_record(cls):
        raise TypeError(f"{cls!r} is not an attrs class or dataclass")

    hints = typing.get_type_hints(cls, include_extras=True)
    fields: dict[str, FieldSpec] = {}

    for attr, md in _record_fields(cls):
        name = md.get(NAME, attr)
        if name == "-" or attr.startswith("_"):
            continue

        spec = _classify(attr, hints.get(attr), md.get(INT_MODE, DEFAULT_INT_MODE))

        # The first field wins if two names normalize to the same thing.
        fields.setdefault(normalize(name), spec)

    return Schema(cls, fields)
