## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘
#
# Typed conversions between the four value variants, and the "most generic type" rule.
#

from typing import Any

from .types import Value, ORDINALS, type_name
from .errors import RpnTypeMismatch
from .formatting import format_value


INT64_MIN, INT64_MAX = -2**63, 2**63 - 1


def wrap_i64(x: int) -> int:
    """Reduce an integer result to signed 64-bit two's complement."""
    return ((x - INT64_MIN) % 2**64) + INT64_MIN


def ordinal(x: Any) -> int:
    if (rank := ORDINALS.get(type(x))) is None:
        raise RpnTypeMismatch(f"Item of type {type(x).__name__} is not a stack value.")
    return rank

def most_generic_type(first: Value, second: Value) -> type:
    """Type of the operand ranked highest in Int < Float < Str < Bool."""
    return type(first) if ordinal(first) >= ordinal(second) else type(second)


## CONVERSIONS
def as_int(x: Value) -> int:
    if type(x) is int: return x
    raise RpnTypeMismatch(f"Cannot convert {type_name(x)} to Int.")

def as_float(x: Value) -> float:
    if type(x) in (int, float): return float(x)
    raise RpnTypeMismatch(f"Cannot convert {type_name(x)} to Float.")

def as_str(x: Value) -> str:
    ordinal(x)
    return x if type(x) is str else format_value(x)

def as_bool(x: Value) -> bool:
    if type(x) is bool: return x
    raise RpnTypeMismatch(f"Cannot convert {type_name(x)} to Bool.")


CONVERSIONS = {int: as_int, float: as_float, str: as_str, bool: as_bool}
