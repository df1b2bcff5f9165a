## rpnstack — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import pytest

from rpnstack.runtime import Runtime
from rpnstack.errors import RpnStackUnderflow, RpnTypeMismatch


def run_and_items(src: str):
    rt = Runtime()
    return rt.from_stack(rt.run(src))


def test_drop_dup():
    assert run_and_items("1 2 3 DROP DUP") == [1, 2, 2]


def test_swap_and_rot():
    assert run_and_items("1 2 SWAP") == [2, 1]
    assert run_and_items("1 2 3 ROT") == [2, 3, 1]
    assert run_and_items("0 1 2 3 ROT") == [0, 2, 3, 1]


def test_rolld_moves_top_down():
    assert run_and_items("0 1 2 3 4 4 ROLLD") == [0, 4, 1, 2, 3]


def test_roll_moves_nth_up():
    assert run_and_items("0 1 2 3 4 4 ROLL") == [0, 2, 3, 4, 1]
    assert run_and_items("1 2 3 3 ROLL") == [2, 3, 1]


def test_roll_and_rolld_are_inverses():
    assert run_and_items('"a" 2 3.5 true 4 ROLL 4 ROLLD') == ['a', 2, 3.5, True]


def test_roll_with_zero_or_one_is_identity():
    assert run_and_items("1 2 3 0 ROLL") == [1, 2, 3]
    assert run_and_items("1 2 3 1 ROLLD") == [1, 2, 3]


def test_roll_needs_four_items_including_count():
    with pytest.raises(RpnStackUnderflow):
        run_and_items("1 2 2 ROLL")
    with pytest.raises(RpnStackUnderflow):
        run_and_items("1 2 2 ROLLD")


def test_roll_count_beyond_depth_underflows():
    with pytest.raises(RpnStackUnderflow):
        run_and_items("1 2 3 4 ROLL")
    with pytest.raises(RpnStackUnderflow):
        run_and_items("1 2 3 5 ROLLD")


def test_roll_count_must_be_non_negative_int():
    with pytest.raises(RpnTypeMismatch):
        run_and_items("1 2 3 -1 ROLL")
    with pytest.raises(RpnTypeMismatch):
        run_and_items("1 2 3 1.0 ROLLD")
    with pytest.raises(RpnTypeMismatch):
        run_and_items('1 2 3 "2" ROLL')


def test_ifelse_selects_branch():
    assert run_and_items('"yes" "no" true IFELSE') == ['yes']
    assert run_and_items('"yes" "no" false IFELSE') == ['no']
    assert run_and_items('0 1 2 3 2 > IFELSE') == [0, 1]


def test_ifelse_requires_bool_and_depth():
    with pytest.raises(RpnTypeMismatch):
        run_and_items("1 2 3 IFELSE")
    with pytest.raises(RpnStackUnderflow):
        run_and_items("1 true IFELSE")


@pytest.mark.parametrize("src", ["DROP", "DUP", "1 SWAP", "1 2 ROT", "1 +", "==", "true IFELSE"])
def test_underflow(src):
    with pytest.raises(RpnStackUnderflow):
        run_and_items(src)


def test_underflow_leaves_stack_untouched():
    rt = Runtime()
    stack = rt.run("1 2 3")
    with pytest.raises(RpnStackUnderflow):
        rt.apply('ROLL', stack)
    with pytest.raises(RpnStackUnderflow):
        rt.run("9 ROLLD", stack=stack)
    assert rt.from_stack(stack) == [1, 2, 3]
