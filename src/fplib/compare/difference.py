"""
Bounded differences between fingerprint features.

Responsibilities
  - ``difference``: a [0, 1] dissimilarity between two features of the same
    kind (missing, boolean, number or histogram), 0 meaning identical.
  - ``pairwise_differences`` and ``distance``: aggregate feature
    differences of two aligned vectors into one normalized scalar.

Limitations
  - Histogram difference is ``1 - jensen_shannon_divergence`` with the
    un-halved mixture, which evaluates to 1 for any pair of distributions;
    it is kept for compatibility with stored comparison results.
"""
# 说明：指纹特征之间的有界差异度量。
# 职责：
# - difference：按特征种类（缺失 / 布尔 / 数值 / 直方图）计算 [0, 1] 区间内的差异
# - pairwise_differences：两条对齐特征向量的逐项差异
# - distance：差异向量的欧氏范数除以 sqrt(维度)，结果同样落在 [0, 1]
# 约定：
# - 种类不匹配时抛出 ComparisonError，而不是静默返回 1
# - 布尔值先于数值判断（bool 是 int 的子类）

from __future__ import annotations

import math
import numbers
from typing import Any, Dict, Hashable, List, Mapping, Sequence

from fplib.core.sketches import CategoricalHistogram, Histogram
from fplib.core.utils.math_utils import jensen_shannon_divergence, magnitude
from fplib.fingerprint.summary import pmf


class ComparisonError(ValueError):
    """Raised when two features or fingerprints cannot be compared."""


def _is_histogram(value: Any) -> bool:
    return isinstance(value, (Mapping, Histogram, CategoricalHistogram))


def _as_pmf(value: Any) -> Dict[Hashable, float]:
    if isinstance(value, (Histogram, CategoricalHistogram)):
        return pmf(value)
    return dict(value)


def _number_difference(a: float, b: float) -> float:
    if a == b:
        return 0.0
    largest = max(abs(a), abs(b))
    return min(1.0, abs(a - b) / largest)


def _histogram_difference(a: Any, b: Any) -> float:
    p, q = _as_pmf(a), _as_pmf(b)
    # 在两者键的并集上对齐，缺失的键按概率 0 处理
    support = list(p.keys() | q.keys())
    return 1.0 - jensen_shannon_divergence([p.get(k, 0.0) for k in support], [q.get(k, 0.0) for k in support])


def difference(a: Any, b: Any) -> float:
    """Difference of two features, confined to [0, 1] with 0 meaning same."""
    if a is None and b is None:
        return 0.0
    if a is None or b is None:
        return 1.0
    if isinstance(a, bool) or isinstance(b, bool):
        if not (isinstance(a, bool) and isinstance(b, bool)):
            raise ComparisonError(f"cannot compare {type(a).__name__} with {type(b).__name__}")
        return 0.0 if a == b else 1.0
    if isinstance(a, numbers.Real) and isinstance(b, numbers.Real):
        return _number_difference(float(a), float(b))
    if _is_histogram(a) and _is_histogram(b):
        return _histogram_difference(a, b)
    raise ComparisonError(f"cannot compare {type(a).__name__} with {type(b).__name__}")


def pairwise_differences(a: Sequence[Any], b: Sequence[Any]) -> List[float]:
    if len(a) != len(b):
        raise ComparisonError(f"feature vectors differ in length: {len(a)} != {len(b)}")
    return [difference(x, y) for x, y in zip(a, b)]


def distance(a: Sequence[Any], b: Sequence[Any]) -> float:
    """Normalized Euclidean norm of the pairwise differences of ``a`` and ``b``."""
    diffs = pairwise_differences(a, b)
    if not diffs:
        return 0.0
    return magnitude(diffs) / math.sqrt(len(diffs))
