"""RPN表达式求值器 - 调用统一的操作符定义表"""
import logging
from collections.abc import Mapping

import numpy as np

from infixeval.core.errors import (
    FactorExpectedError, OperatorExpectedError, UnknownVariableError,
    UnknownFunctionError, UnknownSymbolError
)
from infixeval.core.operators import Operators
from infixeval.core.token_system import TokenType, OPERATOR_DEFINITIONS, format_rpn

logger = logging.getLogger(__name__)


class RPNEvaluator:
    """评估RPN表达式的值"""

    @staticmethod
    def evaluate(token_sequence, variables=None):
        """
        Args:
            token_sequence: 后缀顺序的Token序列
            variables: 变量绑定，dict(name -> 值) 或可调用对象 name -> 值/None；
                       值可以是标量、numpy数组或pandas Series
        Returns:
            np.float64，若绑定了数组/Series则为逐元素结果
        """
        stack = []

        # 除零、溢出、定义域错误一律按 IEEE 得到 inf/NaN，不受全局 np.seterr 影响
        with np.errstate(all='ignore'):
            for token in token_sequence:
                if token.type is TokenType.NUMBER:
                    stack.append(token.value)

                elif token.type is TokenType.VARIABLE:
                    stack.append(RPNEvaluator._lookup(token.value, variables))

                elif token.type is TokenType.BINARY_OP:
                    info = OPERATOR_DEFINITIONS.get(token.value)
                    if info is None:
                        raise UnknownSymbolError(f"unknown binary operator {token.value!r}")
                    if len(stack) < 2:
                        logger.debug(f"Insufficient operands for {info.symbol}")
                        raise FactorExpectedError(f"'{info.symbol}' needs two operands")
                    a = stack.pop()  # 右操作数（后入栈）
                    b = stack.pop()  # 左操作数
                    stack.append(info.apply(b, a))

                elif token.type in (TokenType.UNARY_OP, TokenType.FUNCTION):
                    info = OPERATOR_DEFINITIONS.get(token.value)
                    if info is None:
                        if token.type is TokenType.FUNCTION:
                            raise UnknownFunctionError(f"{token.value!r}")
                        raise UnknownSymbolError(f"unknown unary operator {token.value!r}")
                    if not stack:
                        logger.debug(f"Insufficient operands for {info.symbol}")
                        raise FactorExpectedError(f"'{info.symbol}' needs an operand")
                    stack.append(info.apply(stack.pop()))

                else:
                    raise UnknownSymbolError(f"unknown token {token!r}")

        if len(stack) == 0:
            raise FactorExpectedError("empty expression")
        if len(stack) > 1:
            logger.debug(f"Stack has {len(stack)} elements after evaluation, expected 1; "
                         f"RPN expression: {format_rpn(token_sequence)}")
            raise OperatorExpectedError(f"{len(stack)} values left without an operator between them")
        return stack[0]

    @staticmethod
    def _lookup(name, variables):
        if variables is None:
            raise UnknownVariableError(f"'{name}' (no variables bound)")
        if isinstance(variables, Mapping):
            if name not in variables:
                raise UnknownVariableError(f"'{name}'")
            value = variables[name]
        else:
            value = variables(name)
            if value is None:
                raise UnknownVariableError(f"'{name}'")
        return Operators.as_operand(value)


def calc(token_sequence, variables=None):
    """计算后缀Token序列的值"""
    return RPNEvaluator.evaluate(token_sequence, variables)
