## rpnstack — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from typing import Any
from collections import namedtuple


class stack_list(list): pass


# Stack type is a namedtuple to save memory, yet provide tail/head accessors.
class Stack(namedtuple('Stack', ['tail', 'head'])):
    __slots__ = ()
    _nil_singleton = None

    def __new__(cls, tail, head):
        if tail is None and head is None:
            # Only one singleton creation is allowed, and it's the one just below.
            if cls._nil_singleton is None:
                self = super(Stack, cls).__new__(cls, tail, head)
                cls._nil_singleton = self
                return self
            # By convention, all other code should use `nil` explicitly.
            raise ValueError("Use the canonical `nil` instance for empty stacks")
        return super(Stack, cls).__new__(cls, tail, head)

    def __repr__(self):
        if self is nil:
            return "< nil >"

        items = []
        current = self
        while current is not nil:
            items.append(repr(current.head))
            current = current.tail
        return "< " + " ".join(reversed(items)) + " >"

    def __bool__(self):
        raise TypeError("Stack truth value is ambiguous; compare with `is nil` or `is not nil`.")

    def pushed(self, *items):
        """Push items in order of tail (left) to head (right) onto new Stack and return."""
        stack = self
        for it in items:
            stack = Stack(stack, it)
        return stack

    def depth(self, limit: int | None = None) -> int:
        """Count items from the head down, stopping early once `limit` is reached."""
        count, current = 0, self
        while current is not nil and (limit is None or count < limit):
            current = current.tail
            count += 1
        return count


# All checks for empty stack must be done by comparing to this.
nil = Stack(None, None)


# The four value variants, by exact Python type; `bool` is never an `int` here.
Value = int | float | str | bool

TYPE_NAMES: dict[type, str] = {int: 'Int', float: 'Float', str: 'Str', bool: 'Bool'}

# Coercion rank of each variant; higher is more generic.
ORDINALS: dict[type, int] = {int: 1, float: 2, str: 3, bool: 4}


def is_value(x: Any) -> bool:
    return type(x) in ORDINALS

def type_name(x: Any) -> str:
    return TYPE_NAMES.get(type(x), type(x).__name__)
