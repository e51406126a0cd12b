"""core/errors.py"""
from enum import Enum


class ErrorKind(Enum):
    UNKNOWN_SYMBOL = "UnknownSymbol"
    UNKNOWN_FUNCTION = "UnknownFunction"
    UNKNOWN_CONSTANT = "UnknownConstant"
    UNBALANCED_PARENS = "UnbalancedParens"
    FACTOR_EXPECTED = "FactorExpected"
    OPERATOR_EXPECTED = "OperatorExpected"
    UNKNOWN_VARIABLE = "UnknownVariable"
    EXPRESSION_TOO_LONG = "ExpressionTooLong"


class ParseError(ValueError):
    """解析或求值过程中的任何错误，kind 区分具体类型"""

    kind = None

    def __init__(self, detail=None, position=None):
        self.detail = detail
        self.position = position  # 出错字符的位置（从0开始），求值阶段为 None
        super().__init__(str(self))

    def __str__(self):
        text = self.kind.value
        if self.detail:
            text = f"{text}: {self.detail}"
        if self.position is not None:
            text = f"{text} (at position {self.position})"
        return text


class EvalError(ParseError):
    """RPN求值阶段的错误"""


class UnknownSymbolError(ParseError):
    kind = ErrorKind.UNKNOWN_SYMBOL


class UnknownFunctionError(ParseError):
    kind = ErrorKind.UNKNOWN_FUNCTION


class UnknownConstantError(ParseError):
    kind = ErrorKind.UNKNOWN_CONSTANT


class UnbalancedParensError(ParseError):
    kind = ErrorKind.UNBALANCED_PARENS


class ExpressionTooLongError(ParseError):
    kind = ErrorKind.EXPRESSION_TOO_LONG


class FactorExpectedError(EvalError):
    kind = ErrorKind.FACTOR_EXPECTED


class OperatorExpectedError(EvalError):
    kind = ErrorKind.OPERATOR_EXPECTED


class UnknownVariableError(EvalError):
    kind = ErrorKind.UNKNOWN_VARIABLE
