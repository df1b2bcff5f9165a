## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import collections

from .types import Stack, nil
from .library import Library
from .literals import parse_literal
from .builtins import load_builtins_library
from .formatting import show_lexemes_and_stack


def interpret_step(lexemes, stack: Stack, lib: Library):
    """Consume one lexeme: push it if it is a literal, otherwise run the keyword it names."""
    text, meta = lexemes.popleft()
    if (value := parse_literal(text)) is not None:
        return Stack(stack, value), lexemes

    function = lib.get_function(text, meta=meta)
    return function(stack), lexemes


def interpret(lexemes: list, stack=None, lib: Library = None, verbosity=0, stats=None):
    stack = nil if stack is None else stack
    lib = load_builtins_library() if lib is None else lib
    lexemes = collections.deque(lexemes)

    def is_notable(lexeme):
        return parse_literal(lexeme[0]) is None

    step = 0
    while lexemes:
        if verbosity == 2 or (verbosity == 1 and (is_notable(lexemes[0]) or step == 0)):
            print(f"\033[90m{step:>3} :\033[0m  ", end='')
            show_lexemes_and_stack(lexemes, stack)

        step += 1
        try:
            text, meta = lexemes[0]
            stack, lexemes = interpret_step(lexemes, stack, lib)
        except Exception as exc:
            exc.rpn_token = text
            exc.rpn_meta = meta
            exc.rpn_stack = stack
            raise

    if verbosity > 0:
        print(f"\033[90m{step:>3} :\033[0m  ", end='')
        show_lexemes_and_stack(lexemes, stack)
    if stats is not None:
        stats['steps'] = stats.get('steps', 0) + step

    return stack
