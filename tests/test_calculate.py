from concurrent.futures import ThreadPoolExecutor
from math import e, pi

import pytest

from scicalc.calculator import calculate, insert_function
from scicalc.errors import (CalculationError, CalculatorError, ConsecutiveOperators, DivisionByZero, DomainError,
                            EmptyExpression, InsufficientOperands, InvalidInput, InvalidToken, MalformedExpression,
                            MismatchedParentheses, ModuloByZero)


@pytest.mark.parametrize("expression, expected", [
    ("2+2", "4"),
    ("2*3", "6"),
    ("3-2", "1"),
    ("4/2", "2"),
    ("sin(90)", "1"),
    ("2^2", "4"),
    ("3!", "6"),
    ("√4", "2"),
])
def test_basic_operations(expression, expected):
    assert calculate(expression) == expected


@pytest.mark.parametrize("expression, expected", [
    ("2+3*4", "14"),
    ("(2+3)*4", "20"),
    ("10-4-3", "3"),
    ("100/10/5", "2"),
    ("2^3^2", "512"),
    ("-2^2", "-4"),
    ("-5+3", "-2"),
    ("7.5%2", "1.5"),
    ("2*3^2-4/2", "16"),
    ("2^3!", "64"),
    ("3!^2", "36"),
    ("3!-2", "4"),
    ("0^0", "1"),
])
def test_precedence(expression, expected):
    assert calculate(expression) == expected


@pytest.mark.parametrize("expression, expected", [
    ("9sin(90)", "9"),
    ("2(3+1)", "8"),
    ("(2)(3)", "6"),
    ("2√9", "6"),
    ("9π", "28.2743338823"),
])
def test_implicit_multiplication(expression, expected):
    assert calculate(expression) == expected


@pytest.mark.parametrize("expression, expected", [
    ("π", pi),
    ("e", e),
    ("πe", pi * e),
    ("2e", 2 * e),
])
def test_constants(expression, expected):
    assert abs(float(calculate(expression)) - expected) < 1e-9


@pytest.mark.parametrize("expression, expected", [
    ("sin(30)", "0.5"),
    ("cos(90)", "0"),
    ("asin(1)", "90"),
    ("acos(0.5)", "60"),
    ("log(1000)", "3"),
    ("ln(e)", "1"),
    ("exp(0)", "1"),
    ("10^x(3)", "1000"),
    ("x²(12)", "144"),
    ("√(16)+1", "5"),
    ("20!", "2432902008176640000"),
])
def test_functions(expression, expected):
    assert calculate(expression) == expected


def test_input_normalization():
    assert calculate(" 2 + 2 ") == "4"
    assert calculate("2÷4") == "0.5"
    assert calculate("1 0 + 1") == "11"


@pytest.mark.parametrize("expression, position", [("٣+١", 0), ("2\u00a0+2", 1)])
def test_only_ascii_digits_and_whitespace_are_accepted(expression, position):
    with pytest.raises(InvalidToken) as excinfo:
        calculate(expression)

    assert excinfo.value.position == position


def test_rounding_applies_to_result():
    assert calculate("1/3") == "0.3333333333"
    assert calculate("0.00000000005") == "0.0000000001"


def test_floating_point_edge_results():
    assert calculate("(-8)^(1/3)") == "NaN"
    assert calculate("10^x(400)") == "∞"
    assert calculate("ln((-8)^(1/3))") == "NaN"


@pytest.mark.parametrize("expression, error", [
    ("1/0", DivisionByZero),
    ("5%0", ModuloByZero),
    ("2++2", ConsecutiveOperators),
    ("2**3", ConsecutiveOperators),
    ("2^-1", ConsecutiveOperators),
    ("(-4)!", DomainError),
    ("2.5!", DomainError),
    ("21!", DomainError),
    ("asin(2)", DomainError),
    ("ln(0)", DomainError),
    ("√(-4)", DomainError),
    ("", EmptyExpression),
    ("   ", EmptyExpression),
    (None, EmptyExpression),
    ("2+a", InvalidToken),
    ("(2+3", MismatchedParentheses),
    ("2+3)", MismatchedParentheses),
    ("()", MalformedExpression),
    ("(2)3", MalformedExpression),
    ("sin()", InsufficientOperands),
    ("2+", InsufficientOperands),
])
def test_errors(expression, error):
    with pytest.raises(error):
        calculate(expression)


def test_error_kinds():
    with pytest.raises(CalculationError):
        calculate("1/0")

    with pytest.raises(ZeroDivisionError):
        calculate("1/0")

    with pytest.raises(InvalidInput, match="Consecutive operators"):
        calculate("2++2")

    with pytest.raises(DomainError, match="Factorial is only defined for non-negative integers"):
        calculate("(-4)!")

    with pytest.raises(InvalidInput, match="Input is empty"):
        calculate("")


@pytest.mark.parametrize("expression", ["1/0", "2++2", "(-4)!", "2+a"])
def test_all_errors_share_a_base(expression):
    with pytest.raises(CalculatorError):
        calculate(expression)


def test_calls_share_no_state():
    expressions = ["2+2", "9sin(90)", "3!", "2^10", "1/3"] * 40

    with ThreadPoolExecutor(max_workers=8) as executor:
        results = list(executor.map(calculate, expressions))

    assert results == [calculate(i) for i in expressions]


def test_insert_function():
    assert insert_function("3+", "sin") == "3+sin()"
    assert insert_function("", "√") == "√()"
    assert insert_function(None, "ln") == "ln()"
