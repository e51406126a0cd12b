import logging
from typing import Union, Dict, Optional, Any

import numpy as np
import pandas as pd

from infixeval.config.config import FORMULA_CONFIG
from infixeval.core import ParseError, RPNEvaluator, ShuntingYardConverter, format_rpn

logger = logging.getLogger(__name__)


class FormulaEvaluator:
    """在表格数据上计算中缀公式，标识符解析为同名列"""

    def __init__(self, raise_errors=None, replace_inf=None):
        self.converter = ShuntingYardConverter(allow_variables=True)
        self.rpn_evaluator = RPNEvaluator
        self.raise_errors = FORMULA_CONFIG["raise_errors"] if raise_errors is None else raise_errors
        self.replace_inf = FORMULA_CONFIG["replace_inf"] if replace_inf is None else replace_inf

    def evaluate(self, formula: str, data: Union[pd.DataFrame, Dict]) -> pd.Series:
        """
        Args:
            formula: 中缀公式字符串，如 "(high - low) / close"
            data: 数据（DataFrame或字典），键/列名即变量名
        Returns:
            评估结果的Series，失败时返回NaN Series（raise_errors=True 时抛出 ParseError）
        """
        try:
            token_sequence = self.converter.convert(formula)
        except ParseError as e:
            return self._handle_error(formula, data, e)

        data_dict = self._prepare_data(data)
        if data_dict is None:
            return self._create_nan_series(data)

        try:
            result = self.rpn_evaluator.evaluate(token_sequence, data_dict)
        except ParseError as e:
            logger.debug(f"Token sequence: {format_rpn(token_sequence)}")
            return self._handle_error(formula, data, e)

        series_result = self._convert_to_series(result, data)
        if self.replace_inf:
            series_result = series_result.replace([np.inf, -np.inf], np.nan)
        return series_result

    def apply_formulas(self, data: pd.DataFrame, formulas) -> pd.DataFrame:
        """
        对数据集应用一组公式，返回包含原始列和新公式列的数据集

        Parameters:
        - data: 原始DataFrame
        - formulas: 公式列表，列名即公式文本

        Returns:
        - transformed: 包含原始列和新公式列的数据集
        """
        transformed = data.copy()
        for formula in formulas:
            if formula in transformed.columns:
                logger.warning(f"Column '{formula}' already exists, overwriting")
            transformed[formula] = self.evaluate(formula, data)
        return transformed

    def _handle_error(self, formula, data, error):
        if self.raise_errors:
            raise error
        logger.error(f"Error evaluating formula '{formula[:50]}': {error}")
        return self._create_nan_series(data)

    def _prepare_data(self, data: Union[pd.DataFrame, Dict]) -> Optional[Dict]:
        """准备数据为字典格式 - 直接引用列，不复制"""
        if isinstance(data, pd.DataFrame):
            return {col: data[col] for col in data.columns}
        if isinstance(data, dict):
            ref_index = self._reference_index(data)
            prepared = {}
            for key, value in data.items():
                if isinstance(value, pd.Series):
                    prepared[key] = value
                elif isinstance(value, (np.ndarray, list, tuple)):
                    if len(value) != len(ref_index):
                        logger.error(f"Column '{key}' has length {len(value)}, expected {len(ref_index)}")
                        return None
                    prepared[key] = pd.Series(value, index=ref_index, dtype=float)
                else:
                    # 标量保持标量，由 numpy 广播
                    prepared[key] = value
            return prepared
        logger.error(f"Unsupported data type: {type(data)}")
        return None

    @staticmethod
    def _reference_index(data: Dict):
        for value in data.values():
            if isinstance(value, pd.Series):
                return value.index
        for value in data.values():
            if isinstance(value, (np.ndarray, list, tuple)):
                return pd.RangeIndex(len(value))
        return None

    def _convert_to_series(self, result: Any, original_data: Union[pd.DataFrame, Dict]) -> pd.Series:
        """将评估结果转换为Series"""
        if isinstance(result, pd.Series):
            return result.astype(float)

        if isinstance(original_data, pd.DataFrame):
            index = original_data.index
        elif isinstance(original_data, dict):
            index = self._reference_index(original_data)
        else:
            index = None

        if isinstance(result, np.ndarray) and result.ndim > 0:
            return pd.Series(result, index=index, dtype=float)
        # 标量结果（公式不含列）广播到整个索引
        if index is not None:
            return pd.Series(float(result), index=index)
        return pd.Series([float(result)])

    def _create_nan_series(self, data: Union[pd.DataFrame, Dict]) -> pd.Series:
        """创建NaN Series作为错误返回值"""
        if isinstance(data, pd.DataFrame):
            return pd.Series(np.nan, index=data.index)
        if isinstance(data, dict):
            index = self._reference_index(data)
            if index is not None:
                return pd.Series(np.nan, index=index)
        return pd.Series([np.nan])
