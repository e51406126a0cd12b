"""公式模块 - 表格数据上的公式列求值"""
from .evaluator import FormulaEvaluator

__all__ = ['FormulaEvaluator']
