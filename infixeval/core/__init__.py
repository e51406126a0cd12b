"""核心模块 - Token系统、调度场转换器、RPN求值器和操作符"""
from .errors import (
    ErrorKind, ParseError, EvalError, UnknownSymbolError, UnknownFunctionError,
    UnknownConstantError, UnbalancedParensError, FactorExpectedError,
    OperatorExpectedError, UnknownVariableError, ExpressionTooLongError
)
from .token_system import (
    TokenType, Token, BinaryOperator, UnaryOperator, Function, BracketKind,
    OPERATOR_DEFINITIONS, CONSTANT_DEFINITIONS, RPNValidator, format_rpn, parse_rpn
)
from .operators import Operators
from .shunting_yard import ShuntingYardConverter, ScanState, convert
from .rpn_evaluator import RPNEvaluator, calc

__all__ = [
    'ErrorKind', 'ParseError', 'EvalError', 'UnknownSymbolError', 'UnknownFunctionError',
    'UnknownConstantError', 'UnbalancedParensError', 'FactorExpectedError',
    'OperatorExpectedError', 'UnknownVariableError', 'ExpressionTooLongError',
    'TokenType', 'Token', 'BinaryOperator', 'UnaryOperator', 'Function', 'BracketKind',
    'OPERATOR_DEFINITIONS', 'CONSTANT_DEFINITIONS', 'RPNValidator', 'format_rpn', 'parse_rpn',
    'Operators', 'ShuntingYardConverter', 'ScanState', 'convert',
    'RPNEvaluator', 'calc'
]
