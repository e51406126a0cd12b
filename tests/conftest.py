import pandas as pd
import pytest

from infixeval.config import config


@pytest.fixture
def price_frame():
    index = pd.Index(["AAPL", "MSFT", "NVDA", "TSLA"], name="ticker")
    return pd.DataFrame(
        {
            "open": [10.0, 11.0, 12.0, 0.0],
            "close": [11.0, 11.0, 15.0, 3.0],
            "volume": [100.0, 0.0, 400.0, 900.0],
        },
        index=index,
    )


@pytest.fixture
def parser_config(monkeypatch):
    """允许在单个测试中修改 PARSER_CONFIG，测试结束自动还原"""
    def _set(key, value):
        monkeypatch.setitem(config.PARSER_CONFIG, key, value)
    return _set


@pytest.fixture
def formula_config(monkeypatch):
    def _set(key, value):
        monkeypatch.setitem(config.FORMULA_CONFIG, key, value)
    return _set
