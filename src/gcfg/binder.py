"""Setting parsed values in the target object."""

from typing import Any

from . import types
from ._conv import converter
from .errors import ErrorLocation, InvalidContainerError, InvalidValueError, TargetNotFoundError
from .parser import BindingRequest
from .schema import FieldSpec, Kind, is_record, schema


def check_target(config: Any):
    """Check that an object can be read into.

    Args:
        config: The target object.

    Raises:
        TypeError: The object is not an instance of an attrs class or dataclass.
    """

    if isinstance(config, type) or not is_record(type(config)):
        raise TypeError(
            f"config must be an instance of an attrs class or dataclass, not {type(config).__name__}"
        )


def _new(cls: type, loc: ErrorLocation) -> Any:
    try:
        return cls()
    except TypeError as e:
        raise InvalidContainerError(
            loc, f"cannot create {cls.__name__} without arguments ({e})"
        ) from e


def _set(obj: Any, attr: str, value: Any, loc: ErrorLocation):
    try:
        setattr(obj, attr, value)
    except AttributeError as e:
        # Frozen attrs classes and dataclasses raise subclasses of AttributeError.
        raise InvalidContainerError(loc, f"cannot set attribute {attr!r} ({e})") from e
    except (TypeError, ValueError) as e:
        # attrs validators run on assignment.
        raise InvalidValueError(loc, str(e)) from e


def _section(config: Any, spec: FieldSpec, request: BindingRequest) -> Any:
    loc = ErrorLocation(request.section, request.subsection)
    current = getattr(config, spec.attr)

    match spec.kind:
        case Kind.RECORD:
            # Every subsection of a record section goes into the same record.
            if current is None:
                current = _new(spec.type, loc)
                _set(config, spec.attr, current, loc)

            return current

        case Kind.MAP:
            if not request.subsection:
                raise InvalidContainerError(loc, "section requires a subsection name")

            if current is None:
                current = {}
                _set(config, spec.attr, current, loc)

            if (record := current.get(request.subsection)) is None:
                record = current[request.subsection] = _new(spec.type, loc)

            return record

        case Kind.INVALID:
            raise InvalidContainerError(loc, spec.reason)

        case _:
            raise InvalidContainerError(loc, "section must be a record or a dict of records")


def _coerce(kind: Kind, tp: type, spec: FieldSpec, text: str, loc: ErrorLocation) -> Any:
    try:
        match kind:
            case Kind.CUSTOM:
                return tp.from_text(text)
            case Kind.INT:
                return converter.structure(types.parse_int(text, spec.int_mode), tp)
            case _:
                return converter.structure(text, tp)
    except ValueError as e:
        raise InvalidValueError(loc, str(e)) from e


def _variable(record: Any, spec: FieldSpec, request: BindingRequest, loc: ErrorLocation):
    match spec.kind:
        case Kind.LIST:
            # A blank variable resets the list.
            if request.blank:
                _set(record, spec.attr, [], loc)
                return

            value = _coerce(spec.elem, spec.type, spec, request.value, loc)
            _set(record, spec.attr, [*(getattr(record, spec.attr) or []), value], loc)

        case Kind.BOOL if request.blank:
            _set(record, spec.attr, True, loc)

        case kind if kind.scalar:
            if request.blank:
                raise InvalidValueError(loc, "blank value not supported for type")

            _set(record, spec.attr, _coerce(kind, spec.type, spec, request.value, loc), loc)

        case Kind.INVALID:
            raise InvalidContainerError(loc, spec.reason)

        case _:
            raise InvalidContainerError(loc, "variable must be a scalar or a list of scalars")


def bind(config: Any, request: BindingRequest):
    """Set a value in the target object.

    Args:
        config: The target object, which must have passed check_target().
        request: What to set.

    Raises:
        TargetNotFoundError: The section or variable does not exist in the target.
        InvalidValueError: The value could not be converted to the variable's type.
        InvalidContainerError: The target cannot hold the section or variable.
    """

    if (sect_spec := schema(type(config)).lookup(request.section)) is None:
        raise TargetNotFoundError(ErrorLocation(request.section))

    record = _section(config, sect_spec, request)

    # Blank requests without a name only create the section.
    if not request.name:
        return

    loc = ErrorLocation(request.section, request.subsection, request.name)

    if (spec := schema(type(record)).lookup(request.name)) is None:
        raise TargetNotFoundError(loc)

    _variable(record, spec, request, loc)
