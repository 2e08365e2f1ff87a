"""
Helpers that read finalized sketches into fingerprint fields.
"""
# 说明：从已完成的草图中读取指纹字段的公共工具。
# 职责：
# - pmf：直方图的概率质量函数（分箱计数 / 非缺失总数）
# - binned_entropy：概率质量函数的香农熵
# - nil_fields：统一生成 nil_count / has_nils 字段

from __future__ import annotations

from typing import Any, Dict, Hashable, Union

from fplib.core.sketches import CategoricalHistogram, Histogram
from fplib.core.utils.math_utils import entropy

AnyHistogram = Union[Histogram, CategoricalHistogram]


def pmf(histogram: AnyHistogram) -> Dict[Hashable, float]:
    """Probability mass function over the non-missing values."""
    total = histogram.count
    if not total:
        return {}
    return {key: count / total for key, count in histogram.bins().items()}


def binned_entropy(histogram: AnyHistogram) -> float:
    return entropy(pmf(histogram).values())


def nil_fields(histogram: AnyHistogram) -> Dict[str, Any]:
    missing = histogram.missing_count
    return {"nil_count": missing, "has_nils": missing > 0}
