import datetime

import cattrs

from . import types


def _structure_int(value: str | int, cl: type[int]) -> int:
    # Integers are usually parsed beforehand with the variable's int mode.
    if not isinstance(value, int):
        value = types.parse_int(value)

    return cl(value)


converter = cattrs.Converter()
converter.register_structure_hook(bool, lambda v, _: types.parse_bool(v))
converter.register_structure_hook(int, _structure_int)
converter.register_structure_hook(float, lambda v, _: float(v))
converter.register_structure_hook(str, lambda v, cl: v if cl is str else cl(v))
converter.register_structure_hook(
    datetime.timedelta, lambda v, _: types.parse_duration(v)
)
