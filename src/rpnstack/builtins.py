## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from . import operators as O
from . import primitives as P
from .library import Library


KEYWORDS = {
    # Arithmetic
    '+': O.op_add, '-': O.op_sub, '*': O.op_mul, '/': O.op_div, '%': O.op_rem, '**': O.op_pow,
    # Bitwise
    '<<': O.op_shl, '>>': O.op_shr,
    # Comparison
    '==': O.op_equal_q, '!=': O.op_differ_q,
    '>': O.op_gt, '<': O.op_lt, '>=': O.op_gte, '<=': O.op_lte,
    # Boolean logic
    '&': O.op_and, '|': O.op_or, '^': O.op_xor,
    # Stack primitives
    'DROP': P.op_drop, 'DUP': P.op_dup, 'SWAP': P.op_swap, 'ROT': P.op_rot,
    'ROLL': P.op_roll, 'ROLLD': P.op_rolld, 'IFELSE': P.op_ifelse,
}


def load_builtins_library() -> Library:
    lib = Library()
    for keyword, fn in KEYWORDS.items():
        lib.add_function(keyword, fn)
    return lib
