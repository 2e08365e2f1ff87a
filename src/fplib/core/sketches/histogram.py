"""
Adaptive-binning streaming histogram.

Responsibilities
  - Summarise a stream of numbers (or epoch milliseconds) in at most
    ``max_bins`` bins by merging the two closest bins on overflow.
  - Answer min/max/mean/variance exactly and median, percentiles and the
    cumulative distribution approximately from the bins.
  - Track missing values in a dedicated counter.

Usage Context
  - Backbone of numeric, text-length and datetime fingerprints; wrapped as a
    Reducer by ``histogram()``.

Limitations
  - Percentiles and the CDF interpolate linearly between bin centers
    (trapezoid rule), so they are approximate once bins have been merged.
  - Not thread-safe; a histogram belongs to one fold.
"""
# 说明：自适应分箱的流式直方图（Ben-Haim & Tom-Tov 风格），内存上界为 max_bins 个分箱。
# 职责：
# - insert：插入一个数值，超出分箱上限时合并中心距离最近的两个分箱（按计数加权）
# - minimum / maximum / mean / variance：精确统计量，随插入在线维护
# - percentile / percentiles / cdf：基于分箱的梯形插值近似
# - missing_count：缺失值单独计数，total_count = count + missing_count
# 约定：
# - 在首尾各补一个计数为 0 的伪分箱（位于 min 与 max），使插值覆盖完整取值范围

from __future__ import annotations

import math
from bisect import bisect_left
from typing import Any, Dict, List, Optional, Tuple

from fplib.core.reducers.base import FunctionReducer, Reducer
from fplib.core.utils.param_validation import ensure

DEFAULT_MAX_BINS = 64


class Histogram:
    """
    Streaming approximate histogram.

    - Configuration
      - max_bins: Upper bound on the number of bins kept.

    - Behavior
      - Exact count, missing count, min, max, mean and variance.
      - Approximate median, percentiles and CDF.

    - Usage Notes
      - ``bins()`` returns bin center -> count; divide by ``count`` for a pmf.
    """

    def __init__(self, max_bins: int = DEFAULT_MAX_BINS):
        ensure(max_bins >= 1, "max_bins must be positive")
        self.max_bins = int(max_bins)
        self._centers: List[float] = []
        self._counts: List[int] = []
        self._count = 0
        self._missing = 0
        self._min: Optional[float] = None
        self._max: Optional[float] = None
        self._mean = 0.0
        self._m2 = 0.0

    # ------------------------------------------------------------------ update
    def insert(self, value: Any) -> "Histogram":
        if value is None:
            self._missing += 1
            return self
        x = float(value)
        self._count += 1
        # Welford 递推维护精确的均值与二阶矩
        delta = x - self._mean
        self._mean += delta / self._count
        self._m2 += delta * (x - self._mean)
        self._min = x if self._min is None else min(self._min, x)
        self._max = x if self._max is None else max(self._max, x)

        idx = bisect_left(self._centers, x)
        if idx < len(self._centers) and self._centers[idx] == x:
            self._counts[idx] += 1
            return self
        self._centers.insert(idx, x)
        self._counts.insert(idx, 1)
        if len(self._centers) > self.max_bins:
            self._merge_closest()
        return self

    def _merge_closest(self) -> None:
        gaps = [self._centers[i + 1] - self._centers[i] for i in range(len(self._centers) - 1)]
        i = min(range(len(gaps)), key=gaps.__getitem__)
        left_count, right_count = self._counts[i], self._counts[i + 1]
        merged_count = left_count + right_count
        merged_center = (self._centers[i] * left_count + self._centers[i + 1] * right_count) / merged_count
        # 舍入误差不应让合并后的中心越出两侧分箱
        merged_center = min(max(merged_center, self._centers[i]), self._centers[i + 1])
        self._centers[i : i + 2] = [merged_center]
        self._counts[i : i + 2] = [merged_count]

    # ------------------------------------------------------------------ exact summaries
    @property
    def count(self) -> int:
        """Number of non-missing values."""
        return self._count

    @property
    def missing_count(self) -> int:
        return self._missing

    @property
    def total_count(self) -> int:
        return self._count + self._missing

    @property
    def minimum(self) -> Optional[float]:
        return self._min

    @property
    def maximum(self) -> Optional[float]:
        return self._max

    @property
    def mean(self) -> Optional[float]:
        return self._mean if self._count else None

    @property
    def variance(self) -> Optional[float]:
        """Population variance of the non-missing values."""
        return self._m2 / self._count if self._count else None

    def bins(self) -> Dict[float, int]:
        return dict(zip(self._centers, self._counts))

    # ------------------------------------------------------------------ approximate summaries
    def _points(self) -> List[Tuple[float, float]]:
        # 首尾补零计数伪分箱
        return [(self._min, 0.0)] + list(zip(self._centers, map(float, self._counts))) + [(self._max, 0.0)]

    def percentile(self, q: float) -> Optional[float]:
        ensure(0.0 <= q <= 1.0, "percentile must lie in [0, 1]")
        if not self._count:
            return None
        target = q * self._count
        points = self._points()
        cumulative = 0.0
        for (p_i, c_i), (p_j, c_j) in zip(points, points[1:]):
            mass = (c_i + c_j) / 2.0
            if mass > 0 and cumulative + mass >= target:
                d = target - cumulative
                a = c_j - c_i
                if a == 0:
                    z = d / c_i
                else:
                    # 解 a z^2 + 2 c_i z - 2d = 0 得到区间内的插值位置
                    z = (-c_i + math.sqrt(max(c_i * c_i + 2.0 * a * d, 0.0))) / a
                z = min(max(z, 0.0), 1.0)
                return min(max(p_i + (p_j - p_i) * z, self._min), self._max)
            cumulative += mass
        return self._max

    def percentiles(self, *qs: float) -> Dict[float, Optional[float]]:
        return {q: self.percentile(q) for q in qs}

    @property
    def median(self) -> Optional[float]:
        return self.percentile(0.5)

    def cdf(self, x: float) -> Optional[float]:
        """Approximate fraction of non-missing values ``<= x``."""
        if not self._count:
            return None
        if x < self._min:
            return 0.0
        if x >= self._max:
            return 1.0
        points = self._points()
        cumulative = 0.0
        for (p_i, c_i), (p_j, c_j) in zip(points, points[1:]):
            if x < p_j:
                z = (x - p_i) / (p_j - p_i)
                partial = c_i * z + (c_j - c_i) * z * z / 2.0
                return (cumulative + partial) / self._count
            cumulative += (c_i + c_j) / 2.0
        return 1.0

    def __repr__(self) -> str:
        return f"Histogram(bins={len(self._centers)}, count={self._count}, missing={self._missing})"


def _insert(state: Histogram, value: Any) -> Histogram:
    return state.insert(value)


def histogram(max_bins: int = DEFAULT_MAX_BINS) -> Reducer:
    """Reducer summarising numeric input with a ``Histogram``."""
    return FunctionReducer(lambda: Histogram(max_bins), _insert, name="histogram")
