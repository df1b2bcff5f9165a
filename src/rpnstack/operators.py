## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import sys
import math
import operator

from .types import Value, type_name
from .errors import RpnTypeMismatch, RpnDivideByZero, RpnNegativeRepeatCount, RpnRepeatTooLarge
from .coercion import most_generic_type, wrap_i64, as_int, as_float, as_str, as_bool, CONVERSIONS


def _dispatch(name: str, branches: dict, first: Value, second: Value) -> Value:
    """Pick the implementation for the most generic operand type; `first` was pushed earlier."""
    kind = most_generic_type(first, second)
    if (impl := branches.get(kind)) is None:
        raise RpnTypeMismatch(f"`{name}` is not defined for {type_name(first)} and {type_name(second)}.",
                              rpn_token=name)
    return impl(first, second)

def _on(convert, fn):
    return lambda first, second: fn(convert(first), convert(second))


## INTEGER & FLOAT HELPERS
def _int_div(a: int, b: int) -> int:
    if b == 0: raise RpnDivideByZero("Cannot divide by 0!")
    q = abs(a) // abs(b)
    return wrap_i64(-q if (a < 0) != (b < 0) else q)

def _int_rem(a: int, b: int) -> int:
    # Truncated remainder, the sign follows the dividend.
    if b == -1: return 0
    return a - b * _int_div(a, b)

def _int_pow(a: int, b: int) -> int:
    if b < 0: raise RpnTypeMismatch(f"Cannot use negative Int {b} as an exponent.")
    return wrap_i64(pow(a, b, 2**64))

def _float_div(a: float, b: float) -> float:
    if b == 0.0: raise RpnDivideByZero("Cannot divide by 0!")
    return a / b

def _float_rem(a: float, b: float) -> float:
    if b == 0.0: raise RpnDivideByZero("Cannot divide by 0!")
    return math.nan if math.isinf(a) else math.fmod(a, b)

def _is_odd_integer(x: float) -> bool:
    return x.is_integer() and x % 2 == 1

def _float_pow(a: float, b: float) -> float:
    try:
        return math.pow(a, b)
    except OverflowError:
        return -math.inf if a < 0 and _is_odd_integer(b) else math.inf
    except ValueError:
        # Zero to a negative power, or a negative base with a fractional exponent.
        if a == 0.0:
            return -math.inf if math.copysign(1.0, a) < 0 and _is_odd_integer(b) else math.inf
        return math.nan

def _repeat(first: Value, second: Value) -> str:
    text, count = (first, second) if type(first) is str else (second, first)
    if (count := as_int(count)) < 0:
        raise RpnNegativeRepeatCount(f"Cannot repeat a string {count} times.")
    if count and len(text) > sys.maxsize // count:
        raise RpnRepeatTooLarge(f"Repeating a string of length {len(text)} {count} times is too large.")
    try:
        return text * count
    except MemoryError as exc:
        raise RpnRepeatTooLarge(f"Not enough memory to repeat a string {count} times.") from exc


## BRANCH TABLES
def _int_op(fn): return _on(as_int, lambda a, b: wrap_i64(fn(a, b)))

_ADD = {int: _int_op(operator.add), float: _on(as_float, operator.add), str: _on(as_str, operator.add)}
_SUB = {int: _int_op(operator.sub), float: _on(as_float, operator.sub)}
_MUL = {int: _int_op(operator.mul), float: _on(as_float, operator.mul), str: _repeat}
_DIV = {int: _on(as_int, _int_div), float: _on(as_float, _float_div)}
_REM = {int: _on(as_int, _int_rem), float: _on(as_float, _float_rem)}
_POW = {int: _on(as_int, _int_pow), float: _on(as_float, _float_pow)}
_SHL = {int: _int_op(lambda a, b: a << (b & 63))}
_SHR = {int: _on(as_int, lambda a, b: a >> (b & 63))}
_AND = {bool: _on(as_bool, operator.and_)}
_OR = {bool: _on(as_bool, operator.or_)}
_XOR = {int: _on(as_int, operator.xor), bool: _on(as_bool, operator.xor)}

def _every_branch(fn): return {kind: _on(convert, fn) for kind, convert in CONVERSIONS.items()}
def _numeric(fn): return {int: _on(as_int, fn), float: _on(as_float, fn)}

_EQ, _NE = _every_branch(operator.eq), _every_branch(operator.ne)
_GT, _LT, _GE, _LE = _numeric(operator.gt), _numeric(operator.lt), _numeric(operator.ge), _numeric(operator.le)


## ARITHMETIC
def op_add(first: Value, second: Value) -> Value: return _dispatch('+', _ADD, first, second)
def op_sub(first: Value, second: Value) -> Value: return _dispatch('-', _SUB, first, second)
def op_mul(first: Value, second: Value) -> Value: return _dispatch('*', _MUL, first, second)
def op_div(first: Value, second: Value) -> Value: return _dispatch('/', _DIV, first, second)
def op_rem(first: Value, second: Value) -> Value: return _dispatch('%', _REM, first, second)
def op_pow(first: Value, second: Value) -> Value: return _dispatch('**', _POW, first, second)
## BITWISE
def op_shl(first: Value, second: Value) -> Value: return _dispatch('<<', _SHL, first, second)
def op_shr(first: Value, second: Value) -> Value: return _dispatch('>>', _SHR, first, second)
## COMPARISON
def op_equal_q(first: Value, second: Value) -> bool: return _dispatch('==', _EQ, first, second)
def op_differ_q(first: Value, second: Value) -> bool: return _dispatch('!=', _NE, first, second)
def op_gt(first: Value, second: Value) -> bool: return _dispatch('>', _GT, first, second)
def op_lt(first: Value, second: Value) -> bool: return _dispatch('<', _LT, first, second)
def op_gte(first: Value, second: Value) -> bool: return _dispatch('>=', _GE, first, second)
def op_lte(first: Value, second: Value) -> bool: return _dispatch('<=', _LE, first, second)
## BOOLEAN LOGIC
def op_and(first: Value, second: Value) -> bool: return _dispatch('&', _AND, first, second)
def op_or(first: Value, second: Value) -> bool: return _dispatch('|', _OR, first, second)
def op_xor(first: Value, second: Value) -> Value: return _dispatch('^', _XOR, first, second)
