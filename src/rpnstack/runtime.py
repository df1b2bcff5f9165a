## rpnstack — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from typing import Callable
from collections import deque

from .types import Stack, is_value, type_name
from .errors import RpnTypeMismatch
from .lexer import read_lexemes
from .library import Library
from .builtins import load_builtins_library
from .formatting import format_value, list_to_stack as _list_to_stack, stack_to_list as _stack_to_list
from .interpreter import interpret, interpret_step


class Runtime:
    """Minimal runtime facade focused on embedding and extension."""

    def __init__(self, library: Library | None = None):
        self.library = library or load_builtins_library()

    # Execution ───────────────────────────────────────────────────────────────────────────────
    def run(self, source: str, stack: Stack | None = None, filename: str | None = None,
            verbosity: int = 0, stats: dict | None = None) -> Stack:
        lexemes = read_lexemes(source, filename=filename)
        return interpret(lexemes, stack=stack, lib=self.library, verbosity=verbosity, stats=stats)

    def evaluate(self, source: str, filename: str | None = None) -> list[str]:
        """Run on a fresh stack and render the result bottom-to-top in canonical text."""
        stack = self.run(source, filename=filename)
        return [format_value(v) for v in reversed(_stack_to_list(stack))]

    def do_step(self, lexemes, stack):
        queue = deque((l, {}) if isinstance(l, str) else l for l in lexemes)
        return interpret_step(queue, stack, self.library)

    def apply(self, name: str, stack: Stack) -> Stack:
        stack, _ = self.do_step([name], stack)
        return stack

    # Registration ────────────────────────────────────────────────────────────────────────────
    def register_operation(self, name: str, func: Callable) -> None:
        self.library.add_function(name, func)

    # Introspection ───────────────────────────────────────────────────────────────────────────
    def get_signature(self, name: str) -> dict:
        fn = self.library.get_function(name)
        return fn.__rpn_meta__

    def list_operations(self) -> dict[str, dict]:
        return {n: fn.__rpn_meta__ for n, fn in self.library.functions.items()}

    def to_stack(self, values: list) -> Stack:
        """Build a stack from values listed bottom-to-top."""
        for v in values:
            if not is_value(v):
                raise RpnTypeMismatch(f"Cannot push {type_name(v)} `{v!r}`; expected Int, Float, Str or Bool.")
        return _list_to_stack(list(reversed(values)))

    def from_stack(self, stack: Stack) -> list:
        """Values of the stack listed bottom-to-top."""
        return list(reversed(_stack_to_list(stack)))
