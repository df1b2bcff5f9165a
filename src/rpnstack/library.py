## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from typing import Any, Callable
from dataclasses import dataclass, field

from .types import Stack
from .errors import RpnUnsupportedToken, RpnStackUnderflow
from .effects import get_stack_effects


@dataclass
class Library:
    """Single mapping from keyword to the wrapped operation it dispatches to."""
    functions: dict[str, Callable[[Stack], Stack]] = field(default_factory=dict)

    # Registration helpers
    def add_function(self, name: str, fn: Callable[..., Any]) -> None:
        wrapped, meta = _make_wrapper(fn, name)
        wrapped.__rpn_meta__ = meta
        wrapped.__name__ = getattr(fn, '__name__', name)
        self.functions[name] = wrapped

    def get_function(self, name: str, *, meta: dict | None = None) -> Callable[[Stack], Stack]:
        if (function := self.functions.get(name)) is not None:
            return function
        raise RpnUnsupportedToken(f"Unsupported stack element `{name}`.", rpn_token=name, rpn_meta=meta)

    def __contains__(self, name: str) -> bool:
        return name in self.functions


def pop_items(stk: Stack, count: int, name: str) -> tuple[Stack, tuple]:
    """Remove `count` items, returned bottom-first, after checking they all exist."""
    if (depth := stk.depth(count)) < count:
        raise RpnStackUnderflow(f"`{name}` needs at least {count} item(s) on the stack, but {depth} available.",
                                rpn_token=name)
    args = ()
    for _ in range(count):
        stk, h = stk
        args = (h,) + args
    return stk, args


def _make_wrapper(fn: Callable[..., Any], name: str) -> tuple[Callable[[Stack], Stack], dict]:
    meta = get_stack_effects(fn=fn, name=name)

    match meta['valency']:
        case -1:
            def push(_, res): return res
        case 0:
            def push(base, _): return base
        case 1:
            def push(base, res): return Stack(base, res)
        case _:
            def push(base, res):
                for v in res: base = Stack(base, v)
                return base

    match meta['arity']:
        case -2: # pass stack as-is
            def w_s(stk: Stack):
                return push(stk, fn(stk))
            return w_s, meta
        case 0: # no arguments
            def w_0(stk: Stack):
                return push(stk, fn())
            return w_0, meta
        case 1:
            def w_1(stk: Stack):
                base, (a,) = pop_items(stk, 1, name)
                return push(base, fn(a))
            return w_1, meta
        case 2:
            def w_2(stk: Stack):
                base, (b, a) = pop_items(stk, 2, name)
                return push(base, fn(b, a))
            return w_2, meta
        case _:
            def w_x(stk: Stack):
                base, args = pop_items(stk, meta['arity'], name)
                return push(base, fn(*args))
            return w_x, meta
