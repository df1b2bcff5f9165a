## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import re
import math
from decimal import Decimal

from .types import stack_list, Stack, nil


def stack_to_list(stk: Stack) -> stack_list:
    """Items from head (top) down to the bottom of the stack."""
    result = []
    while stk is not nil:
        stk, head = stk
        result.append(head)
    return stack_list(result)

def list_to_stack(values: list, base=None) -> Stack:
    """Inverse of `stack_to_list`; `values[0]` becomes the new head."""
    stack = nil if base is None else base
    for value in reversed(values):
        stack = Stack(stack, value)
    return stack


def format_float(x: float) -> str:
    # Positional notation only, no exponent, and no trailing `.0` on integral values.
    if math.isnan(x): return 'NaN'
    if math.isinf(x): return 'inf' if x > 0 else '-inf'
    text = format(Decimal(repr(x)), 'f')
    return text.rstrip('0').rstrip('.') if '.' in text else text

def format_value(it) -> str:
    """Canonical text of a value, as compared against expected fixture output."""
    if isinstance(it, bool): return 'true' if it else 'false'
    if isinstance(it, float): return format_float(it)
    return str(it)


def write_without_ansi(write_fn):
    """Wrapper function that strips ANSI codes before calling the original writer."""
    ansi_re = re.compile(r'\033\[[0-9;]*m')
    return lambda text: write_fn(ansi_re.sub('', text))

def format_item(it, abbreviate: bool = False) -> str:
    if isinstance(it, str):
        return f'≪string:{len(it)}≫' if abbreviate else '"' + it + '"'
    return format_value(it)

def show_stack(stack, width=72, end='\n', file=None, abbreviate: bool = False):
    if stack is nil:
        stack_str = '∅'
    else:
        items = stack_to_list(stack)
        stack_str = ' '.join(format_item(s) for s in reversed(items))
        # If abbreviation requested and the rendered output is long, re-render abbreviated.
        if abbreviate and len(stack_str) > 144:
            stack_str = ' '.join(format_item(s, abbreviate=True) for s in reversed(items))

    if width is not None and len(stack_str) > width:
        stack_str = '… ' + stack_str[-width+2:]
    print(f"{stack_str:>{width}}" if width else stack_str, end=end, file=file)

def show_lexemes_and_stack(lexemes, stack, width=72):
    prog_str = ' '.join(text for text, _ in lexemes) if lexemes else '∅'
    if len(prog_str) > width:
        prog_str = prog_str[:+width-2] + ' …'
    show_stack(stack, end='')
    print(f" \033[36m <=> \033[0m {prog_str:<{width}}")
