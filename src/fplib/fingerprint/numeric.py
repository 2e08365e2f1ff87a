"""
Numeric fingerprints.

Responsibilities
  - Fuse a histogram, a cardinality sketch, skewness, kurtosis, a running
    sum and a running sum of squares into one pass.
  - Derive dispersion, shape and range statistics from the finalized
    sketches, with ``None`` for ratios whose denominator is zero.
  - Summarise paired numeric columns (correlation, covariance, regression).

Usage Context
  - Registered for ``TypeCategory.NUMBER`` and ``TypeCategory.NUMBER_NUMBER``.
"""
# 说明：数值型列的指纹计算。
# 职责：
# - number_fingerprinter：单遍融合直方图、HyperLogLog、偏度、峰度、求和与平方和
# - _summarize_numbers：派生方差、标准差、分位数、概率质量函数、熵、各类比率与取值范围标志
# - number_pair_fingerprinter：成对数值列的相关系数、协方差与一元线性回归
# 约定：
# - 没有任何输入时结果恰为 {"count": 0, "type": NUMBER}
# - 全部为缺失值时只报告计数与缺失信息

from __future__ import annotations

import math
from typing import Any, Dict

from fplib.core.reducers import (
    Reducer,
    correlation,
    covariance,
    count,
    fuse,
    kurtosis,
    post_complete,
    simple_linear_regression,
    skewness,
    sum_of_squares,
    total,
)
from fplib.core.sketches import cardinality, histogram
from fplib.core.utils.math_utils import safe_divide
from fplib.types import TagSpec, TypeCategory

from .options import FingerprintOptions
from .summary import binned_entropy, nil_fields, pmf


def _summarize_numbers(options: FingerprintOptions, parts: Dict[str, Any]) -> Dict[str, Any]:
    hist = parts["histogram"]
    total_count = hist.total_count
    if total_count == 0:
        return {"count": 0, "type": TypeCategory.NUMBER}
    if hist.count == 0:
        return {"count": total_count, **nil_fields(hist), "type": TypeCategory.NUMBER}

    card = parts["cardinality"]
    unique_ratio = card / max(total_count, 1)
    var = max(hist.variance or 0.0, 0.0)
    sd = math.sqrt(var)
    lo, hi = hist.minimum, hist.maximum
    mean, median = hist.mean, hist.median
    span = hi - lo
    return {
        "histogram": pmf(hist),
        "percentiles": hist.percentiles(*options.percentiles),
        "sum": parts["sum"],
        "sum_of_squares": parts["sum_of_squares"],
        "positive_definite": lo >= 0,
        "pct_above_mean": 1.0 - hist.cdf(mean),
        "cardinality_vs_count": unique_ratio,
        "var_gt_sd": var > sd,
        **nil_fields(hist),
        "in_unit_interval": 0 <= lo <= hi <= 1,
        "in_signed_unit_interval": -1 <= lo <= hi <= 1,
        "span_vs_sd": safe_divide(span, sd),
        "mean_median_spread": safe_divide(span, mean - median),
        "min_vs_max": safe_divide(lo, hi),
        "span": span,
        "cardinality": card,
        "min": lo,
        "max": hi,
        "mean": mean,
        "median": median,
        "var": var,
        "sd": sd,
        "count": total_count,
        "kurtosis": parts["kurtosis"],
        "skewness": parts["skewness"],
        "all_distinct": unique_ratio >= 1 - options.cardinality_error,
        "entropy": binned_entropy(hist),
        "type": TypeCategory.NUMBER,
    }


def number_fingerprinter(options: FingerprintOptions, tag: TagSpec) -> Reducer:
    return post_complete(
        fuse(
            {
                "histogram": histogram(options.histogram_bins),
                "cardinality": cardinality(options.cardinality_error),
                "kurtosis": kurtosis(),
                "skewness": skewness(),
                "sum": total(),
                "sum_of_squares": sum_of_squares(),
            }
        ),
        lambda parts: _summarize_numbers(options, parts),
    )


def number_pair_fingerprinter(options: FingerprintOptions, tags: TagSpec) -> Reducer:
    """Fingerprint of ``(x, y)`` numeric pairs."""
    return post_complete(
        fuse(
            {
                "correlation": correlation(),
                "covariance": covariance(),
                "linear_regression": simple_linear_regression(),
                "count": count(),
            }
        ),
        lambda parts: {**parts, "type": TypeCategory.NUMBER_NUMBER},
    )
