## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import re

from .types import Value
from .coercion import INT64_MIN, INT64_MAX


INTEGER = re.compile(r'[+-]?[0-9]+')
FLOAT = re.compile(r'[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf|infinity|nan)', re.IGNORECASE)
BOOLEANS = {'true': True, 'false': False}


def parse_int(text: str) -> int | None:
    if not INTEGER.fullmatch(text): return None
    value = int(text)
    return value if INT64_MIN <= value <= INT64_MAX else None

def parse_float(text: str) -> float | None:
    return float(text) if FLOAT.fullmatch(text) else None

def parse_string(text: str) -> str | None:
    if len(text) < 2 or text[0] != '"' or text[-1] != '"': return None
    return text[1:-1]

def parse_bool(text: str) -> bool | None:
    return BOOLEANS.get(text)


_RESOLVERS = (parse_int, parse_float, parse_string, parse_bool)

def parse_literal(text: str) -> Value | None:
    """Classify a lexeme as Int, Float, Str or Bool in that order, else None for a keyword."""
    for resolve in _RESOLVERS:
        if (value := resolve(text)) is not None:
            return value
    return None
