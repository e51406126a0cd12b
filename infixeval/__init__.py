"""infixeval - 中缀算术表达式求值：调度场转换 + RPN栈求值"""
import numpy as np

from .core import (
    ErrorKind, ParseError, EvalError, UnknownSymbolError, UnknownFunctionError,
    UnknownConstantError, UnbalancedParensError, FactorExpectedError,
    OperatorExpectedError, UnknownVariableError, ExpressionTooLongError,
    Token, TokenType, RPNValidator, convert, calc, format_rpn, parse_rpn
)
from .formula import FormulaEvaluator

__version__ = "0.3.0"


def _to_result(value):
    # 0维结果返回普通 float，数组/Series 原样返回
    if np.ndim(value) == 0:
        return float(value)
    return value


def evaluate(expression):
    """
    计算中缀表达式的值

    >>> evaluate("2+5*3")
    17.0
    >>> evaluate("2^3^2")
    512.0
    """
    tokens = convert(expression)
    return _to_result(calc(tokens))


def evaluate_with_variables(expression, variables):
    """
    计算含变量的中缀表达式，既不是函数也不是常量的标识符从 variables 中查找

    >>> evaluate_with_variables("3*(2+x) + x^2", {"x": 4})
    34.0
    """
    tokens = convert(expression, allow_variables=True)
    return _to_result(calc(tokens, variables))


__all__ = [
    'evaluate', 'evaluate_with_variables', 'convert', 'calc', 'format_rpn', 'parse_rpn',
    'Token', 'TokenType', 'RPNValidator', 'FormulaEvaluator',
    'ErrorKind', 'ParseError', 'EvalError', 'UnknownSymbolError', 'UnknownFunctionError',
    'UnknownConstantError', 'UnbalancedParensError', 'FactorExpectedError',
    'OperatorExpectedError', 'UnknownVariableError', 'ExpressionTooLongError',
]
