## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘
#
# Stack shuffling words.  Fixed-size ones pop their arguments through the library
# wrapper; ROLL and ROLLD take the whole stack since their size is only known at runtime.
#

from .types import Stack, Value, type_name
from .errors import RpnStackUnderflow, RpnTypeMismatch
from .library import pop_items


ROLL_MIN_DEPTH = 4


def op_drop(_: Value) -> None: return None
def op_dup(x: Value) -> tuple[Value, Value]: return (x, x)
def op_swap(first: Value, second: Value) -> tuple[Value, Value]: return (second, first)
def op_rot(a: Value, b: Value, c: Value) -> tuple[Value, Value, Value]: return (b, c, a)

def op_ifelse(when_true: Value, when_false: Value, condition: Value) -> Value:
    if type(condition) is not bool:
        raise RpnTypeMismatch(f"`IFELSE` expects a Bool condition on top, got {type_name(condition)}.",
                              rpn_token='IFELSE')
    return when_true if condition else when_false


def _rotation_count(name: str, stack: Stack) -> tuple[Stack, int]:
    if (depth := stack.depth(ROLL_MIN_DEPTH)) < ROLL_MIN_DEPTH:
        raise RpnStackUnderflow(f"`{name}` needs at least {ROLL_MIN_DEPTH} item(s) on the stack, but {depth} available.",
                                rpn_token=name)
    base, count = stack
    if type(count) is not int:
        raise RpnTypeMismatch(f"`{name}` expects an Int count on top, got {type_name(count)}.", rpn_token=name)
    if count < 0:
        raise RpnTypeMismatch(f"`{name}` cannot rotate a negative number of items ({count}).", rpn_token=name)
    return base, count

def op_roll(stack: Stack) -> Stack:
    """Move the Nth item from the top up to the top, shifting the ones above it down."""
    base, count = _rotation_count('ROLL', stack)
    base, items = pop_items(base, count, 'ROLL')
    return base.pushed(*items[1:], *items[:1])

def op_rolld(stack: Stack) -> Stack:
    """Move the top item down to the Nth position, shifting the ones below it up."""
    base, count = _rotation_count('ROLLD', stack)
    base, items = pop_items(base, count, 'ROLLD')
    return base.pushed(*items[-1:], *items[:-1])
