"""core/shunting_yard.py - 中缀表达式 → 后缀(RPN) Token序列"""
import logging
import string
from enum import Enum

from infixeval.config.config import PARSER_CONFIG
from infixeval.core.errors import (
    UnknownSymbolError, UnknownFunctionError, UnknownConstantError,
    UnbalancedParensError, ExpressionTooLongError
)
from infixeval.core.token_system import (
    Token, BinaryOperator, UnaryOperator, Function,
    OPERATOR_DEFINITIONS, FUNCTION_NAMES, OPERATOR_SYMBOLS,
    OPENING_BRACKETS, CLOSING_BRACKETS, CONSTANT_DEFINITIONS, format_rpn
)

logger = logging.getLogger(__name__)

DIGITS = frozenset(string.digits)
LETTERS = frozenset(string.ascii_letters)


class ScanState(Enum):
    """决定下一个 + - 是一元还是二元"""
    START = "start"  # 尚未读入任何内容
    AFTER_OPERAND = "after_operand"  # 数字、常量、变量或右括号之后 → 二元
    AFTER_OPERATOR = "after_operator"  # 操作符、左括号或函数名之后 → 一元


class ShuntingYardConverter:
    """调度场算法：一次从左到右扫描，操作符栈按优先级/结合性重排"""

    def __init__(self, allow_variables=False):
        # 为 True 时，既不是函数也不是常量的标识符输出为 VARIABLE Token
        self.allow_variables = allow_variables

    def convert(self, expression):
        """
        Args:
            expression: 中缀表达式字符串
        Returns:
            后缀顺序的Token列表
        """
        if not isinstance(expression, str):
            raise TypeError(f"expression must be str, not {type(expression).__name__}")

        max_len = PARSER_CONFIG["max_expression_length"]
        if max_len is not None and len(expression) > max_len:
            raise ExpressionTooLongError(f"{len(expression)} characters, limit is {max_len}")

        output = []
        # 栈条目：BinaryOperator | UnaryOperator | Function（函数标记）| (BracketKind, 位置)
        op_stack = []
        state = ScanState.START
        pos = 0
        length = len(expression)

        while pos < length:
            chr_ = expression[pos]

            # 空白：跳过，不改变状态
            if chr_.isspace():
                pos += 1
                continue

            if chr_ in DIGITS:
                pos = self._scan_number(expression, pos, output)
                state = ScanState.AFTER_OPERAND

            elif chr_ in LETTERS:
                end = pos
                while end < length and expression[end] in LETTERS:
                    end += 1
                name = expression[pos:end]

                # 紧跟 '(' → 函数名；否则为常量（或变量），'[' 不开启函数调用
                if end < length and expression[end] == '(':
                    function = FUNCTION_NAMES.get(name)
                    if function is None:
                        raise UnknownFunctionError(f"'{name}'", position=pos)
                    op_stack.append(function)
                    state = ScanState.AFTER_OPERATOR
                else:
                    output.append(self._resolve_identifier(name, pos))
                    state = ScanState.AFTER_OPERAND
                pos = end

            elif chr_ in OPERATOR_SYMBOLS:
                if state is ScanState.AFTER_OPERAND:
                    self._push_binary(OPERATOR_SYMBOLS[chr_], op_stack, output)
                elif chr_ == '-':
                    op_stack.append(UnaryOperator.NEG)
                elif chr_ != '+':
                    # 一元 + 直接忽略，其他操作符不能出现在一元位置
                    raise UnknownSymbolError(f"'{chr_}' cannot be used as a unary operator", position=pos)
                state = ScanState.AFTER_OPERATOR
                pos += 1

            elif chr_ in OPENING_BRACKETS:
                op_stack.append((OPENING_BRACKETS[chr_], pos))
                state = ScanState.AFTER_OPERATOR
                pos += 1

            elif chr_ in CLOSING_BRACKETS:
                self._close_group(CLOSING_BRACKETS[chr_], pos, op_stack, output)
                state = ScanState.AFTER_OPERAND
                pos += 1

            else:
                raise UnknownSymbolError(f"'{chr_}'", position=pos)

        # 剩余操作符按栈顶优先输出，剩下的括号说明左括号过多
        while op_stack:
            entry = op_stack.pop()
            if isinstance(entry, tuple):
                kind, open_pos = entry
                raise UnbalancedParensError(f"'{kind.opening}' is never closed", position=open_pos)
            output.append(Token.from_operator(entry))

        logger.debug(f"RPN expression: {format_rpn(output)}")
        return output

    @staticmethod
    def _scan_number(expression, pos, output):
        """贪婪读取数字，最多一个小数点；第二个小数点结束数字但不被消耗"""
        start = pos
        point = False
        pos += 1
        while pos < len(expression):
            next_chr = expression[pos]
            if next_chr in DIGITS:
                pos += 1
            elif next_chr == '.' and not point:
                point = True
                pos += 1
            else:
                break
        output.append(Token.number(float(expression[start:pos])))
        return pos

    def _resolve_identifier(self, name, pos):
        if name in CONSTANT_DEFINITIONS:
            return Token.number(CONSTANT_DEFINITIONS[name])
        if self.allow_variables:
            return Token.variable(name)
        raise UnknownConstantError(f"'{name}'", position=pos)

    @staticmethod
    def _push_binary(o1, op_stack, output):
        info1 = OPERATOR_DEFINITIONS[o1]
        while op_stack:
            o2 = op_stack[-1]
            # 只有操作符参与比较，括号和函数标记是屏障
            if not isinstance(o2, (BinaryOperator, UnaryOperator)):
                break
            prec2 = OPERATOR_DEFINITIONS[o2].precedence
            # 左结合：弹出优先级 >= 自己的；右结合：只弹出严格更高的
            if (not info1.right_assoc and info1.precedence <= prec2) or \
                    (info1.right_assoc and info1.precedence < prec2):
                output.append(Token.from_operator(op_stack.pop()))
            else:
                break
        op_stack.append(o1)

    @staticmethod
    def _close_group(kind, pos, op_stack, output):
        while True:
            if not op_stack:
                raise UnbalancedParensError(f"'{kind.closing}' has no matching opening bracket", position=pos)
            entry = op_stack.pop()
            if isinstance(entry, tuple):
                open_kind, open_pos = entry
                if open_kind is not kind:
                    raise UnbalancedParensError(
                        f"'{open_kind.opening}' at position {open_pos} closed by '{kind.closing}'",
                        position=pos
                    )
                break
            output.append(Token.from_operator(entry))

        # 函数绑定到刚闭合的括号组
        if op_stack and isinstance(op_stack[-1], Function):
            output.append(Token.from_operator(op_stack.pop()))


def convert(expression, allow_variables=False):
    """中缀表达式 → 后缀Token列表"""
    return ShuntingYardConverter(allow_variables=allow_variables).convert(expression)
