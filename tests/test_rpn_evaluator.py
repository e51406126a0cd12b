import math

import numpy as np
import pandas as pd
import pytest

from infixeval.core import (
    Token, TokenType, BinaryOperator, UnaryOperator, RPNEvaluator, RPNValidator,
    calc, convert, parse_rpn, format_rpn,
    FactorExpectedError, OperatorExpectedError, UnknownVariableError,
    UnknownFunctionError, UnknownSymbolError, EvalError,
)


@pytest.mark.parametrize(
    "rpn, expected",
    [
        ("12", 12.0),
        ("10 4 -", 6.0),
        ("8 2 /", 4.0),
        ("2 3 ^", 8.0),
        ("2 3 2 ^ ^", 512.0),
        ("5 ~", -5.0),
        ("9 sqrt", 3.0),
        ("2 5 3 * +", 17.0),
    ],
)
def test_operand_order(rpn, expected):
    assert calc(parse_rpn(rpn)) == expected


def test_division_by_zero_follows_ieee():
    assert calc(parse_rpn("1 0 /")) == math.inf
    assert calc(parse_rpn("1 ~ 0 /")) == -math.inf
    assert math.isnan(calc(parse_rpn("0 0 /")))


def test_domain_errors_produce_nan_or_inf():
    assert math.isnan(calc(parse_rpn("1 ~ sqrt")))
    assert calc(parse_rpn("0 ln")) == -math.inf
    assert math.isnan(calc(parse_rpn("8 ~ 1 3 / ^")))


def test_result_is_float64():
    result = calc(parse_rpn("1 2 +"))
    assert isinstance(result, np.float64)


@pytest.mark.parametrize(
    "tokens",
    [
        [],
        [Token.number(1), Token(TokenType.BINARY_OP, BinaryOperator.ADD)],
        [Token(TokenType.UNARY_OP, UnaryOperator.NEG)],
        parse_rpn("sqrt"),
        parse_rpn("5 3 * +"),
    ],
)
def test_factor_expected(tokens):
    with pytest.raises(FactorExpectedError):
        calc(tokens)


def test_operator_expected():
    with pytest.raises(OperatorExpectedError) as excinfo:
        calc([Token.number(5), Token.number(3)])
    assert isinstance(excinfo.value, EvalError)
    assert excinfo.value.position is None


def test_unknown_function_tag_is_reported():
    with pytest.raises(UnknownFunctionError):
        calc([Token.number(1), Token(TokenType.FUNCTION, "cosh")])


def test_unknown_binary_tag_is_reported():
    with pytest.raises(UnknownSymbolError):
        calc([Token.number(1), Token.number(2), Token(TokenType.BINARY_OP, "%")])


def test_variables_from_mapping():
    tokens = convert("3*(2+x)+x^2", allow_variables=True)
    assert calc(tokens, {"x": 4}) == 34.0
    assert calc(tokens, {"x": 0}) == 6.0


def test_variables_from_callable():
    tokens = convert("a*b", allow_variables=True)
    bindings = {"a": 6.0, "b": 7.0}
    assert RPNEvaluator.evaluate(tokens, bindings.get) == 42.0


@pytest.mark.parametrize("variables", [None, {}, {"y": 1.0}, lambda name: None])
def test_missing_variable(variables):
    tokens = convert("x+1", allow_variables=True)
    with pytest.raises(UnknownVariableError):
        calc(tokens, variables)


def test_array_and_series_bindings_evaluate_elementwise():
    tokens = convert("x^2 + 1", allow_variables=True)
    np.testing.assert_allclose(calc(tokens, {"x": np.array([1, 2, 3])}), [2.0, 5.0, 10.0])

    series = pd.Series([0.0, 1.0], index=["a", "b"])
    result = calc(tokens, {"x": series})
    pd.testing.assert_series_equal(result, pd.Series([1.0, 2.0], index=["a", "b"]))


def test_parse_rpn_round_trip_of_converted_expression():
    tokens = convert("-(2+pi)*sqrt(4)^2")
    assert parse_rpn(format_rpn(tokens)) == tokens


@pytest.mark.parametrize(
    "expression",
    ["sin+1", "nan*2", "inf-x", "e^ln", "-sqrt(cos)", "PI/tan", "Inf + NaN"],
)
def test_parse_rpn_round_trip_keeps_variables(expression):
    tokens = convert(expression, allow_variables=True)
    assert parse_rpn(format_rpn(tokens), allow_variables=True) == tokens


@pytest.mark.parametrize(
    "word, expected",
    [("12", 12.0), ("0.5", 0.5), ("3.", 3.0), ("1e+30", 1e30), ("1e-05", 1e-05), ("-2.0", -2.0)],
)
def test_parse_rpn_number_words(word, expected):
    assert parse_rpn(word) == [Token.number(expected)]


def test_parse_rpn_special_floats():
    assert parse_rpn("inf")[0].value == math.inf
    assert math.isnan(parse_rpn("nan")[0].value)
    assert parse_rpn(format_rpn(convert("1" * 400)))[0].value == math.inf


@pytest.mark.parametrize("word", ["Infinity", "1_000", "0x10", "+5", ".5", "1e5e5"])
def test_parse_rpn_rejects_other_float_spellings(word):
    with pytest.raises(UnknownSymbolError):
        parse_rpn(word, allow_variables=True)


def test_parse_rpn_rejects_unknown_words():
    with pytest.raises(UnknownSymbolError):
        parse_rpn("1 2 %")
    with pytest.raises(UnknownSymbolError):
        parse_rpn("$x 1 +")
    assert parse_rpn("$x 1 +", allow_variables=True)[0] == Token.variable("x")
    with pytest.raises(UnknownSymbolError):
        parse_rpn("x 1 +", allow_variables=True)


@pytest.mark.parametrize(
    "rpn, size, complete",
    [
        ("1 2 +", 1, True),
        ("1 2", 2, False),
        ("1 +", 0, False),
        ("1 ~ sqrt", 1, True),
        ("+ 1 2", 1, False),
        ("", 0, False),
    ],
)
def test_rpn_validator(rpn, size, complete):
    tokens = parse_rpn(rpn)
    assert RPNValidator.calculate_stack_size(tokens) == size
    assert RPNValidator.is_complete_expression(tokens) is complete
