## rpnstack — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import pytest

from rpnstack.types import nil
from rpnstack.lexer import read_lexemes
from rpnstack.interpreter import interpret
from rpnstack.formatting import stack_to_list, list_to_stack
from rpnstack.errors import RpnUnsupportedToken, RpnStackUnderflow, RpnDivideByZero


def test_interpret_pushes_literals_and_dispatches_keywords():
    stack = interpret(read_lexemes("1 2 DUP + +"))
    assert stack_to_list(stack) == [5]


def test_interpret_empty_program_gives_empty_stack():
    assert interpret(read_lexemes("")) is nil


def test_interpret_continues_from_given_stack():
    stack = interpret(read_lexemes("+"), stack=list_to_stack([2, 1]))
    assert stack_to_list(stack) == [3]


def test_unsupported_token_carries_text_and_position():
    with pytest.raises(RpnUnsupportedToken) as exc:
        interpret(read_lexemes("1 2\n FOO +", filename="prog.txt"))
    assert exc.value.rpn_token == 'FOO'
    assert exc.value.rpn_meta == {'filename': 'prog.txt', 'line': 2, 'column': 2}
    assert stack_to_list(exc.value.rpn_stack) == [2, 1]


def test_keywords_are_case_sensitive():
    with pytest.raises(RpnUnsupportedToken):
        interpret(read_lexemes("1 dup"))


def test_errors_abort_without_running_later_lexemes():
    stats = {}
    with pytest.raises(RpnDivideByZero) as exc:
        interpret(read_lexemes("1 0 / 5"), stats=stats)
    assert exc.value.rpn_token == '/'
    assert stats == {}


def test_error_reports_stack_before_failing_step():
    with pytest.raises(RpnStackUnderflow) as exc:
        interpret(read_lexemes("7 SWAP"))
    assert stack_to_list(exc.value.rpn_stack) == [7]


def test_stats_count_steps():
    stats = {}
    interpret(read_lexemes("1 2 +"), stats=stats)
    interpret(read_lexemes("DROP"), stack=list_to_stack([1]), stats=stats)
    assert stats['steps'] == 4


def test_verbose_trace_prints_stack_and_program(capsys):
    interpret(read_lexemes("1 2 +"), verbosity=2)
    out = capsys.readouterr().out
    assert '<=>' in out
    assert out.count('\n') == 4


def test_same_source_gives_same_result():
    lexemes = read_lexemes('"a" 2 * 1.5 DUP ==')
    assert stack_to_list(interpret(lexemes)) == stack_to_list(interpret(lexemes)) == [True, 'aa']
