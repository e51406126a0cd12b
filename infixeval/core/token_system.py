"""core/token_system.py"""
import re
from enum import Enum
from typing import Any, NamedTuple

import numpy as np

from infixeval.core.errors import UnknownSymbolError
from infixeval.core.operators import Operators


class TokenType(Enum):
    NUMBER = "number"  # 数值字面量或已解析的常量
    BINARY_OP = "binary_op"  # 二元操作符，消耗2个操作数
    UNARY_OP = "unary_op"  # 一元操作符（取负），消耗1个操作数
    FUNCTION = "function"  # 单参数函数
    VARIABLE = "variable"  # 变量，求值时按绑定解析


class BinaryOperator(Enum):
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    POW = "^"


class UnaryOperator(Enum):
    NEG = "~"


class Function(Enum):
    SIN = "sin"
    COS = "cos"
    TAN = "tan"
    SQRT = "sqrt"
    LN = "ln"


class BracketKind(Enum):
    PAREN = "()"
    SQUARE = "[]"

    @property
    def opening(self):
        return self.value[0]

    @property
    def closing(self):
        return self.value[1]


class OperatorInfo:
    def __init__(self, symbol, precedence, arity, apply, right_assoc=False):
        self.symbol = symbol
        self.precedence = precedence  # 数字越大结合越紧
        self.arity = arity
        self.apply = apply
        self.right_assoc = right_assoc


# 操作符定义表：每个 BinaryOperator / UnaryOperator / Function 成员都必须在此出现
OPERATOR_DEFINITIONS = {
    # 函数（优先级1，只在对应括号闭合后出栈）
    Function.SIN: OperatorInfo('sin', 1, 1, Operators.sin),
    Function.COS: OperatorInfo('cos', 1, 1, Operators.cos),
    Function.TAN: OperatorInfo('tan', 1, 1, Operators.tan),
    Function.SQRT: OperatorInfo('sqrt', 1, 1, Operators.sqrt),
    Function.LN: OperatorInfo('ln', 1, 1, Operators.ln),

    # 二元操作符
    BinaryOperator.ADD: OperatorInfo('+', 2, 2, Operators.add),
    BinaryOperator.SUB: OperatorInfo('-', 2, 2, Operators.sub),
    BinaryOperator.MUL: OperatorInfo('*', 4, 2, Operators.mul),
    BinaryOperator.DIV: OperatorInfo('/', 4, 2, Operators.div),
    BinaryOperator.POW: OperatorInfo('^', 5, 2, Operators.pow, right_assoc=True),

    # 一元操作符：比 + - 紧，比 * / ^ 松，所以 -5^2 = -25
    UnaryOperator.NEG: OperatorInfo('~', 3, 1, Operators.neg),
}

FUNCTION_NAMES = {f.value: f for f in Function}
OPERATOR_SYMBOLS = {op.value: op for op in BinaryOperator}
OPENING_BRACKETS = {kind.opening: kind for kind in BracketKind}
CLOSING_BRACKETS = {kind.closing: kind for kind in BracketKind}

# 常量：区分大小写，pi/PI 为同义词
CONSTANT_DEFINITIONS = {
    'pi': np.float64(np.pi),
    'PI': np.float64(np.pi),
    'e': np.float64(np.e),
}

# 后缀字符串中的变量前缀，避免与函数名、inf/nan 等数字写法冲突
VARIABLE_MARKER = "$"
# repr(float) 的输出形式：12.0、1e+30、inf、nan 等
_NUMBER_WORD = re.compile(r"-?(?:\d+(?:\.\d*)?(?:e[+-]?\d+)?|inf|nan)")
_VARIABLE_WORD = re.compile(r"\$[A-Za-z]+")


class Token(NamedTuple):
    """后缀序列中的一个单元，创建后不可变"""
    type: TokenType
    value: Any

    @classmethod
    def number(cls, value):
        return cls(TokenType.NUMBER, np.float64(value))

    @classmethod
    def variable(cls, name):
        return cls(TokenType.VARIABLE, name)

    @classmethod
    def from_operator(cls, op):
        """把操作符栈上的条目转换为Token"""
        if isinstance(op, BinaryOperator):
            return cls(TokenType.BINARY_OP, op)
        if isinstance(op, UnaryOperator):
            return cls(TokenType.UNARY_OP, op)
        if isinstance(op, Function):
            return cls(TokenType.FUNCTION, op)
        raise TypeError(f"not an operator: {op!r}")

    @property
    def name(self):
        if self.type is TokenType.NUMBER:
            return repr(float(self.value))
        if self.type is TokenType.VARIABLE:
            return VARIABLE_MARKER + self.value
        return self.value.value


def format_rpn(token_sequence):
    """Token序列 → 空格分隔的后缀字符串，如 '2.0 $x +'（变量带 $ 前缀）"""
    return ' '.join(t.name for t in token_sequence)


def parse_rpn(text, allow_variables=False):
    """空格分隔的后缀字符串 → Token序列（format_rpn 的逆操作）"""
    token_sequence = []
    for word in text.split():
        if word in OPERATOR_SYMBOLS:
            token_sequence.append(Token(TokenType.BINARY_OP, OPERATOR_SYMBOLS[word]))
        elif word == UnaryOperator.NEG.value:
            token_sequence.append(Token(TokenType.UNARY_OP, UnaryOperator.NEG))
        elif word in FUNCTION_NAMES:
            token_sequence.append(Token(TokenType.FUNCTION, FUNCTION_NAMES[word]))
        elif word in CONSTANT_DEFINITIONS:
            token_sequence.append(Token.number(CONSTANT_DEFINITIONS[word]))
        elif _NUMBER_WORD.fullmatch(word):
            token_sequence.append(Token.number(float(word)))
        elif allow_variables and _VARIABLE_WORD.fullmatch(word):
            token_sequence.append(Token.variable(word[len(VARIABLE_MARKER):]))
        else:
            raise UnknownSymbolError(f"unknown token '{word}'")
    return token_sequence


class RPNValidator:
    """只模拟栈深度，不计算数值"""

    @staticmethod
    def _stack_effect(token):
        if token.type in (TokenType.NUMBER, TokenType.VARIABLE):
            return 0, 1
        arity = OPERATOR_DEFINITIONS[token.value].arity
        return arity, 1 - arity

    @staticmethod
    def calculate_stack_size(token_sequence):
        """计算求值结束后栈中的元素数量"""
        stack_size = 0
        for token in token_sequence:
            stack_size += RPNValidator._stack_effect(token)[1]
        return stack_size

    @staticmethod
    def is_complete_expression(token_sequence):
        """每一步操作数都足够，且最终栈中恰好剩1个值"""
        stack_size = 0
        for token in token_sequence:
            required, effect = RPNValidator._stack_effect(token)
            if stack_size < required:
                return False
            stack_size += effect
        return stack_size == 1
