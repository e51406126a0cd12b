"""core/operators.py"""
import numpy as np
import pandas as pd


class Operators:
    """所有操作符和函数的静态方法集合

    全部基于 numpy ufunc：标量得到 np.float64，数组/Series 逐元素计算。
    除零、定义域错误按 IEEE 规则得到 inf/NaN，不抛异常（需在 np.errstate 内调用以屏蔽警告）。
    """

    @staticmethod
    def as_operand(value):
        """把绑定值转换为可入栈的操作数"""
        if isinstance(value, pd.Series):
            return value.astype(float)
        if isinstance(value, (np.ndarray, list, tuple)):
            return np.asarray(value, dtype=float)
        return np.float64(value)

    # 二元操作符========================================
    @staticmethod
    def add(operand1, operand2):
        """加法操作符"""
        return np.add(operand1, operand2)

    @staticmethod
    def sub(operand1, operand2):
        """减法操作符"""
        return np.subtract(operand1, operand2)

    @staticmethod
    def mul(operand1, operand2):
        """乘法操作符"""
        return np.multiply(operand1, operand2)

    @staticmethod
    def div(operand1, operand2):
        """除法操作符：x/0 得到 ±inf，0/0 得到 NaN"""
        return np.divide(operand1, operand2)

    @staticmethod
    def pow(operand1, operand2):
        """幂运算：负数的非整数次幂得到 NaN（不支持复数）"""
        return np.power(operand1, operand2)

    # 一元操作符====================
    @staticmethod
    def neg(operand):
        return np.negative(operand)

    # 函数====================
    @staticmethod
    def sin(operand):
        return np.sin(operand)

    @staticmethod
    def cos(operand):
        return np.cos(operand)

    @staticmethod
    def tan(operand):
        return np.tan(operand)

    @staticmethod
    def sqrt(operand):
        """平方根，负数得到 NaN"""
        return np.sqrt(operand)

    @staticmethod
    def ln(operand):
        """自然对数：ln(0) = -inf，负数得到 NaN"""
        return np.log(operand)
