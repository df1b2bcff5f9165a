## rpnstack — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import pytest

from rpnstack.runtime import Runtime
from rpnstack.types import Value
from rpnstack.errors import RpnSignatureError, RpnUnsupportedToken, RpnTypeMismatch


def test_evaluate_renders_bottom_to_top():
    rt = Runtime()
    assert rt.evaluate("1.0 2 3 9 - + 2 * + 3 *") == ['-21']
    assert rt.evaluate('"a" 1.5 true 7') == ['a', '1.5', 'true', '7']
    assert rt.evaluate("") == []


def test_evaluate_renders_floats_without_exponent():
    rt = Runtime()
    assert rt.evaluate("1.0 10 / 0.0000001 1e21 -0.0") == ['0.1', '0.0000001', '1000000000000000000000', '-0']


def test_evaluate_uses_a_fresh_stack_each_time():
    rt = Runtime()
    assert rt.evaluate("1 2") == ['1', '2']
    assert rt.evaluate("1 2") == ['1', '2']


def test_to_and_from_stack_are_bottom_to_top():
    rt = Runtime()
    stack = rt.to_stack([1, 2, 3])
    assert stack.head == 3
    assert rt.from_stack(stack) == [1, 2, 3]


def test_to_stack_rejects_non_values():
    rt = Runtime()
    with pytest.raises(RpnTypeMismatch):
        rt.to_stack([1, None])
    with pytest.raises(RpnTypeMismatch):
        rt.to_stack([[1, 2]])
    assert rt.from_stack(rt.to_stack([True, "a", 1.5])) == [True, "a", 1.5]


def test_apply_keyword():
    rt = Runtime()
    assert rt.from_stack(rt.apply('SWAP', rt.to_stack([1, 2]))) == [2, 1]
    with pytest.raises(RpnUnsupportedToken):
        rt.apply('NOPE', rt.to_stack([1]))


def test_register_operation_and_run():
    rt = Runtime()
    def inc(x: Value) -> Value: return x + 1
    rt.register_operation('INC', inc)
    assert rt.from_stack(rt.run("4 INC INC")) == [6]
    assert 'INC' not in Runtime().list_operations()


def test_register_operation_requires_annotations():
    rt = Runtime()
    def double(x): return x * 2
    with pytest.raises(RpnSignatureError):
        rt.register_operation('DOUBLE', double)


def test_signatures():
    rt = Runtime()
    assert rt.get_signature('+')['arity'] == 2 and rt.get_signature('+')['valency'] == 1
    assert rt.get_signature('DROP')['valency'] == 0
    assert rt.get_signature('DUP')['valency'] == 2
    assert rt.get_signature('IFELSE')['arity'] == 3
    assert rt.get_signature('ROLL')['arity'] == -2 and rt.get_signature('ROLL')['valency'] == -1


def test_all_keywords_are_listed():
    ops = Runtime().list_operations()
    assert set(ops) == {'+', '-', '*', '/', '%', '**', '<<', '>>', '==', '!=', '>', '<', '>=', '<=',
                        '&', '|', '^', 'DROP', 'DUP', 'SWAP', 'ROT', 'ROLL', 'ROLLD', 'IFELSE'}
