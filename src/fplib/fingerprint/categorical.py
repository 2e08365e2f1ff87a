"""
Categorical and text fingerprints.
"""
# 说明：类别型与文本型列的指纹计算。
# 职责：
# - category_fingerprinter：精确频数表 + HyperLogLog，派生概率质量函数、基数比、是否全不同与熵
# - text_fingerprinter：对字符串长度建立直方图，报告最短 / 最长长度与缺失信息
# 约定：
# - 低基数文本列在注册表中优先走类别流水线

from __future__ import annotations

from typing import Any, Dict, Optional

from fplib.core.reducers import Reducer, fuse, post_complete, pre_step
from fplib.core.sketches import cardinality, histogram, histogram_categorical
from fplib.types import TagSpec, TypeCategory

from .options import FingerprintOptions
from .summary import binned_entropy, nil_fields, pmf


def _summarize_categories(options: FingerprintOptions, parts: Dict[str, Any]) -> Dict[str, Any]:
    hist = parts["histogram"]
    card = parts["cardinality"]
    total_count = hist.total_count
    unique_ratio = card / max(total_count, 1)
    return {
        "histogram": pmf(hist),
        "cardinality_vs_count": unique_ratio,
        **nil_fields(hist),
        "cardinality": card,
        "count": total_count,
        "all_distinct": unique_ratio >= 1 - options.cardinality_error,
        "entropy": binned_entropy(hist),
        "type": TypeCategory.CATEGORY,
    }


def category_fingerprinter(options: FingerprintOptions, tag: TagSpec) -> Reducer:
    return post_complete(
        fuse(
            {
                "histogram": histogram_categorical(),
                "cardinality": cardinality(options.cardinality_error),
            }
        ),
        lambda parts: _summarize_categories(options, parts),
    )


def _length(value: Any) -> Optional[int]:
    if value is None:
        return None
    return len(value) if isinstance(value, str) else len(str(value))


def _summarize_text(parts: Dict[str, Any]) -> Dict[str, Any]:
    hist = parts["histogram"]
    return {
        "min": hist.minimum,
        "max": hist.maximum,
        "histogram": pmf(hist),
        "count": hist.total_count,
        **nil_fields(hist),
        "type": TypeCategory.TEXT,
    }


def text_fingerprinter(options: FingerprintOptions, tag: TagSpec) -> Reducer:
    """Histogram of value lengths, not of the values themselves."""
    return post_complete(
        fuse({"histogram": pre_step(histogram(options.histogram_bins), _length)}),
        _summarize_text,
    )
