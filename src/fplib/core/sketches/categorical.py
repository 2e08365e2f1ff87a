"""
Exact frequency table for categorical data.
"""
# 说明：类别型数据的精确频数表，缺失值单独计数。
# 约定：
# - 假设类别基数相对行数较小，内存占用与不同取值个数成正比（不做强制限制）
# - 与 Histogram 共享 count / missing_count / total_count / bins 的读取接口

from __future__ import annotations

from collections import Counter
from typing import Any, Dict, Hashable

from fplib.core.reducers.base import FunctionReducer, Reducer


class CategoricalHistogram:
    """Frequency table with a dedicated bucket for missing values."""

    def __init__(self) -> None:
        self._counts: Counter = Counter()
        self._missing = 0

    def insert(self, value: Hashable) -> "CategoricalHistogram":
        if value is None:
            self._missing += 1
        else:
            self._counts[value] += 1
        return self

    @property
    def count(self) -> int:
        return sum(self._counts.values())

    @property
    def missing_count(self) -> int:
        return self._missing

    @property
    def total_count(self) -> int:
        return self.count + self._missing

    def bins(self) -> Dict[Hashable, int]:
        return dict(self._counts)

    def __repr__(self) -> str:
        return f"CategoricalHistogram(categories={len(self._counts)}, missing={self._missing})"


def _insert(state: CategoricalHistogram, value: Any) -> CategoricalHistogram:
    return state.insert(value)


def histogram_categorical() -> Reducer:
    """Reducer summarising categorical input with a ``CategoricalHistogram``."""
    return FunctionReducer(CategoricalHistogram, _insert, name="histogram_categorical")
