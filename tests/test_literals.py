## rpnstack — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import math

import pytest

from rpnstack.literals import parse_literal


@pytest.mark.parametrize("text, value", [
    ("42", 42), ("-7", -7), ("+5", 5), ("0", 0),
    ("9223372036854775807", 2**63 - 1), ("-9223372036854775808", -2**63),
])
def test_integers(text, value):
    result = parse_literal(text)
    assert type(result) is int and result == value


@pytest.mark.parametrize("text, value", [
    ("1.0", 1.0), ("-2.5", -2.5), (".5", 0.5), ("5.", 5.0), ("1e3", 1000.0), ("-2.5E-3", -0.0025),
    ("inf", math.inf), ("-Infinity", -math.inf),
])
def test_floats(text, value):
    result = parse_literal(text)
    assert type(result) is float and result == value


def test_integer_outside_64_bits_becomes_float():
    result = parse_literal("9223372036854775808")
    assert type(result) is float and result == 2.0**63


def test_nan_is_a_float():
    assert math.isnan(parse_literal("NaN"))


def test_quoted_strings_lose_their_quotes():
    assert parse_literal('"hello"') == 'hello'
    assert parse_literal('""') == ''
    assert parse_literal('"42"') == '42'


def test_booleans_are_exact_lowercase():
    assert parse_literal("true") is True
    assert parse_literal("false") is False
    assert parse_literal("True") is None


@pytest.mark.parametrize("text", ['+', '-', '**', 'DUP', 'ROLLD', '"', 'hello"', '"hello', '1_000', '0x10', '1.2.3'])
def test_keywords_and_garbage_are_not_literals(text):
    assert parse_literal(text) is None
