## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import inspect
from typing import Any, Callable, ForwardRef, get_origin, get_args

from .types import Stack
from .errors import RpnSignatureError


def _is_stack_annotation(annotation: Any) -> bool:
    if isinstance(annotation, ForwardRef) or hasattr(annotation, '__forward_arg__'):
        annotation = annotation.__forward_arg__
    if annotation is Stack:
        return True
    if isinstance(annotation, str):
        return annotation == 'Stack' or annotation.endswith('.Stack')
    return False


def get_stack_effects(*, fn: Callable, name: str = None) -> dict:
    """Read the annotations of a Python function to determine its stack effects.

    Arity (input) conventions:
        -2: pass entire stack as-is to function
        >=0: pop that many items from the stack

    Valency (output) conventions:
        -1: replace stack with retval
        0: no changes to stack
        1: single output expected
        >=1: tuple of multiple outputs expected
    """
    sig = inspect.signature(fn)
    params = list(sig.parameters.values())
    op_name = name or getattr(fn, '__name__', '<unnamed>')

    if any(p.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD) for p in params):
        raise RpnSignatureError(f"Operation `{op_name}` cannot take variadic arguments.")
    positional = [p for p in params if p.kind in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)]

    ret_ann = sig.return_annotation
    if ret_ann is inspect.Signature.empty:
        raise RpnSignatureError(f"Operation `{op_name}` must declare a return annotation.")
    if missing := [p.name for p in positional if p.annotation is inspect.Parameter.empty]:
        raise RpnSignatureError(f"Operation `{op_name}` must annotate parameters: {', '.join(missing)}.")

    returns_none = (ret_ann is type(None) or ret_ann is None)
    returns_tuple = (ret_ann is tuple or get_origin(ret_ann) is tuple)
    outputs = [] if returns_none else list(get_args(ret_ann) if returns_tuple else (ret_ann,))

    # Special case when the stack is passed in directly and replaced by the result.
    pass_stack = (len(positional) == 1 and _is_stack_annotation(positional[0].annotation))
    if pass_stack and not _is_stack_annotation(ret_ann):
        raise RpnSignatureError(f"Operation `{op_name}` takes the whole stack so must return a Stack.")

    return {
        'arity': -2 if pass_stack else len(positional),
        'valency': -1 if pass_stack else (0 if returns_none else (len(outputs) if returns_tuple else 1)),
        'inputs': [] if pass_stack else list(reversed([p.annotation for p in positional])),
        'outputs': [] if pass_stack else list(reversed(outputs)),
    }
