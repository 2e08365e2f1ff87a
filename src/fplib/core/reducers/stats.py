"""
Streaming statistical reducers.

Responsibilities
  - Counting, summation and list accumulation reducers.
  - Higher moments (skewness, kurtosis) using one-pass central moment updates.
  - Bivariate statistics (covariance, Pearson correlation, simple linear
    regression) over pairs extracted with ``x_fn``/``y_fn``.

Usage Context
  - Fused with sketches inside fingerprint pipelines.

Limitations
  - Missing values (``None``) are skipped; bivariate reducers skip a pair if
    either side is missing.
  - Statistics that need more points than were seen return ``None``.
"""
# 说明：流式统计归约器，全部为单遍、常数内存的在线算法。
# 职责：
# - count / nil_count / total / sum_of_squares / collect：基础计数、求和与序列累积
# - RunningMoments：基于 Terriberry 递推的一至四阶中心矩，派生样本偏度与峰度
# - RunningCoMoments：基于 Welford 递推的协方差累积量，派生协方差、相关系数与一元线性回归
# 约定：
# - 缺失值（None）不参与统计；样本不足或方差为零时结果为 None

from __future__ import annotations

import math
from dataclasses import dataclass
from operator import itemgetter
from typing import Any, Callable, Dict, List, Optional

from fplib.core.utils.math_utils import safe_divide

from .base import FunctionReducer, Reducer
from .combinators import remove_nil, with_filter

first = itemgetter(0)
second = itemgetter(1)


def count() -> Reducer:
    """Count every input, missing or not."""
    return FunctionReducer(lambda: 0, lambda acc, _: acc + 1, name="count")


def nil_count() -> Reducer:
    """Count missing (``None``) inputs."""
    return with_filter(count(), lambda value: value is None)


def total() -> Reducer:
    """Sum of non-missing inputs."""
    return remove_nil(FunctionReducer(lambda: 0, lambda acc, x: acc + x, name="total"))


def sum_of_squares() -> Reducer:
    return remove_nil(FunctionReducer(lambda: 0, lambda acc, x: acc + x * x, name="sum_of_squares"))


def _append(acc: List[Any], value: Any) -> List[Any]:
    acc.append(value)
    return acc


def collect() -> Reducer:
    """Accumulate inputs into a list, preserving arrival order."""
    return FunctionReducer(list, _append, name="collect")


@dataclass
class RunningMoments:
    """Online central moments up to the fourth order."""
    # Terriberry 递推：一次遍历同时维护 M2/M3/M4，数值上比原始幂和更稳定

    count: int = 0
    mean: float = 0.0
    m2: float = 0.0
    m3: float = 0.0
    m4: float = 0.0

    def update(self, value: float) -> None:
        n1 = self.count
        self.count += 1
        n = self.count
        delta = value - self.mean
        delta_n = delta / n
        delta_n2 = delta_n * delta_n
        term1 = delta * delta_n * n1
        self.mean += delta_n
        self.m4 += term1 * delta_n2 * (n * n - 3 * n + 3) + 6 * delta_n2 * self.m2 - 4 * delta_n * self.m3
        self.m3 += term1 * delta_n * (n - 2) - 3 * delta_n * self.m2
        self.m2 += term1

    @property
    def skewness(self) -> Optional[float]:
        # 样本偏度 G1 = g1 * sqrt(n(n-1)) / (n-2)
        n = self.count
        if n < 3 or self.m2 == 0:
            return None
        g1 = math.sqrt(n) * (self.m3 / self.m2) / math.sqrt(self.m2)
        return g1 * math.sqrt(n * (n - 1)) / (n - 2)

    @property
    def kurtosis(self) -> Optional[float]:
        # 样本超额峰度 G2 = ((n+1) g2 + 6)(n-1) / ((n-2)(n-3))
        n = self.count
        if n < 4 or self.m2 == 0:
            return None
        g2 = n * (self.m4 / self.m2) / self.m2 - 3.0
        return ((n + 1) * g2 + 6.0) * (n - 1) / ((n - 2) * (n - 3))


def _moments_step(state: RunningMoments, value: Any) -> RunningMoments:
    state.update(float(value))
    return state


def skewness() -> Reducer:
    return remove_nil(FunctionReducer(RunningMoments, _moments_step, lambda s: s.skewness, name="skewness"))


def kurtosis() -> Reducer:
    return remove_nil(FunctionReducer(RunningMoments, _moments_step, lambda s: s.kurtosis, name="kurtosis"))


@dataclass
class RunningCoMoments:
    """Online co-moments of paired observations."""

    count: int = 0
    mean_x: float = 0.0
    mean_y: float = 0.0
    m2_x: float = 0.0
    m2_y: float = 0.0
    c_xy: float = 0.0

    def update(self, x: float, y: float) -> None:
        self.count += 1
        n = self.count
        dx = x - self.mean_x
        dy = y - self.mean_y
        self.mean_x += dx / n
        self.mean_y += dy / n
        self.m2_x += dx * (x - self.mean_x)
        self.m2_y += dy * (y - self.mean_y)
        self.c_xy += dx * (y - self.mean_y)

    @property
    def covariance(self) -> Optional[float]:
        if self.count < 2:
            return None
        return self.c_xy / (self.count - 1)

    @property
    def correlation(self) -> Optional[float]:
        if self.count < 2:
            return None
        return safe_divide(self.c_xy, math.sqrt(self.m2_x * self.m2_y))

    @property
    def linear_regression(self) -> Optional[Dict[str, float]]:
        slope = safe_divide(self.c_xy, self.m2_x) if self.count >= 2 else None
        if slope is None:
            return None
        return {"intercept": self.mean_y - slope * self.mean_x, "slope": slope}


def _bivariate(
    derive: Callable[[RunningCoMoments], Any],
    x_fn: Callable[[Any], Any],
    y_fn: Callable[[Any], Any],
    name: str,
) -> Reducer:
    def step(state: RunningCoMoments, value: Any) -> RunningCoMoments:
        x, y = x_fn(value), y_fn(value)
        if x is None or y is None:
            return state
        state.update(float(x), float(y))
        return state

    return FunctionReducer(RunningCoMoments, step, derive, name=name)


def covariance(x_fn: Callable[[Any], Any] = first, y_fn: Callable[[Any], Any] = second) -> Reducer:
    """Sample covariance of ``(x_fn(v), y_fn(v))`` pairs."""
    return _bivariate(lambda s: s.covariance, x_fn, y_fn, "covariance")


def correlation(x_fn: Callable[[Any], Any] = first, y_fn: Callable[[Any], Any] = second) -> Reducer:
    """Pearson correlation; ``None`` when either side has zero variance."""
    return _bivariate(lambda s: s.correlation, x_fn, y_fn, "correlation")


def simple_linear_regression(
    x_fn: Callable[[Any], Any] = first,
    y_fn: Callable[[Any], Any] = second,
) -> Reducer:
    """Least-squares ``y = intercept + slope * x`` as ``{"intercept", "slope"}``."""
    return _bivariate(lambda s: s.linear_regression, x_fn, y_fn, "simple_linear_regression")
