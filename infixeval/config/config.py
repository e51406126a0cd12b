"""配置文件"""
import logging

logger = logging.getLogger(__name__)

# 解析器（调度场算法）参数
PARSER_CONFIG = {
    "max_expression_length": None,  # 输入长度上限，None 表示不限制
}

# 公式列（DataFrame）求值参数
FORMULA_CONFIG = {
    "raise_errors": False,  # False 时失败返回全NaN Series 并记录日志
    "replace_inf": True,  # 结果中的 ±inf 替换为 NaN
}


# 验证配置
def validate_config():
    """验证配置的合理性"""
    from infixeval.core.token_system import (
        OPERATOR_DEFINITIONS, BinaryOperator, UnaryOperator, Function
    )

    max_len = PARSER_CONFIG["max_expression_length"]
    assert max_len is None or (isinstance(max_len, int) and max_len > 0), \
        "max_expression_length 必须为正整数或 None"
    assert isinstance(FORMULA_CONFIG["raise_errors"], bool)
    assert isinstance(FORMULA_CONFIG["replace_inf"], bool)

    # 每个操作符/函数都必须在操作符表中有定义
    for member in (*BinaryOperator, *UnaryOperator, *Function):
        assert member in OPERATOR_DEFINITIONS, f"操作符表缺少定义: {member}"

    prec = {op: info.precedence for op, info in OPERATOR_DEFINITIONS.items()}
    assert prec[Function.SQRT] < prec[BinaryOperator.ADD] < prec[UnaryOperator.NEG] \
        < prec[BinaryOperator.MUL] < prec[BinaryOperator.POW], "优先级顺序错误"
    assert OPERATOR_DEFINITIONS[BinaryOperator.POW].right_assoc, "^ 必须右结合"
    logger.info("Configuration validated successfully!")
