"""
DateTime x Number fingerprints (time series).

Responsibilities
  - Parse the timestamp side to epoch milliseconds, then fuse a simple
    linear regression with an ordered series accumulator.
  - Gap-fill the series on a calendar grid when a scale is requested.
  - Decompose the filled series into trend, seasonal and residual
    components with ``statsmodels`` STL when the cost ceiling allows it.
  - Report period-over-period growth rates for the requested scale.

Usage Context
  - Registered for ``TypeCategory.DATETIME_NUMBER``; fed ``(timestamp, value)``
    pairs, typically the result of a time-bucketed aggregation query.

Limitations
  - The series keeps arrival order; callers are expected to supply sorted
    timestamps. Filling runs from the first to the last observed timestamp.
  - Pairs with a missing timestamp or value feed neither the regression
    nor the series.
"""
# 说明：时间序列（日期时间 × 数值）指纹计算。
# 职责：
# - fill_timeseries：按日 / 周 / 月步长补齐缺失周期，缺失值补 0
# - decompose_timeseries：基于 statsmodels STL 的趋势 / 季节 / 残差分解（至少两个完整周期）
# - timeseries_fingerprinter：融合线性回归与序列累积，完成阶段计算分解与同比 / 环比增长率
# 约定：
# - 季节周期：month = 12，week = 52，day = 365
# - 增长率基于倒序序列，下标越界时为 None

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence, Tuple

import numpy as np
from statsmodels.tsa.seasonal import STL

from fplib.core.reducers import (
    Reducer,
    collect,
    fuse,
    post_complete,
    pre_step,
    simple_linear_regression,
    with_filter,
)
from fplib.core.utils.logging import get_logger
from fplib.core.utils.math_utils import growth
from fplib.types import TagSpec, TypeCategory

from .cost_policy import unbounded_computation
from .options import FingerprintOptions, Scale
from .timestamps import from_epoch_ms, parse_to_epoch_ms, step_timestamp, to_epoch_ms

logger = get_logger(__name__)

Point = Tuple[float, Any]

SEASONAL_PERIODS: Dict[Scale, int] = {
    Scale.MONTH: 12,
    Scale.WEEK: 52,
    Scale.DAY: 365,
}


def fill_timeseries(scale: Scale, series: Sequence[Point]) -> List[Point]:
    """
    Fill missing periods of ``series`` with 0.

    ``series`` holds ``(epoch_ms, value)`` pairs. The grid starts at the first
    observed timestamp and stops at the last one; observed timestamps that
    do not fall on the grid are dropped.
    """
    if not series:
        return []
    index = dict(series)
    start = from_epoch_ms(series[0][0])
    end = series[-1][0]
    filled: List[Point] = []
    n = 0
    while True:
        t = to_epoch_ms(step_timestamp(start, scale, n))
        if t > end:
            break
        filled.append((t, index.get(t, 0)))
        n += 1
    return filled


def decompose_timeseries(scale: Scale, series: Sequence[Point]) -> Optional[Dict[str, List[float]]]:
    """STL decomposition, or ``None`` with fewer than two full seasonal periods."""
    period = SEASONAL_PERIODS.get(scale)
    if period is None or len(series) < 2 * period:
        logger.debug("skipping seasonal decomposition: %d points at scale %s", len(series), scale.value)
        return None
    values = np.asarray([float(y) for _, y in series], dtype=float)
    result = STL(values, period=period).fit()
    return {
        "trend": result.trend.tolist(),
        "seasonal": result.seasonal.tolist(),
        "residual": result.resid.tolist(),
    }


def _nth(values: Sequence[Any], n: int) -> Any:
    return values[n] if n < len(values) else None


def _growth_rates(scale: Scale, ys_r: Sequence[Any]) -> Dict[str, Any]:
    # ys_r 为倒序序列：下标 0 为最新一期
    latest, previous = _nth(ys_r, 0), _nth(ys_r, 1)
    if scale is Scale.MONTH:
        return {
            "YoY": growth(latest, _nth(ys_r, 11)),
            "YoY_previous": growth(previous, _nth(ys_r, 12)),
            "MoM": growth(latest, previous),
            "MoM_previous": growth(previous, _nth(ys_r, 2)),
        }
    if scale is Scale.WEEK:
        return {
            "YoY": growth(latest, _nth(ys_r, 51)),
            "YoY_previous": growth(previous, _nth(ys_r, 52)),
            "WoW": growth(latest, previous),
            "WoW_previous": growth(previous, _nth(ys_r, 2)),
        }
    if scale is Scale.DAY:
        return {
            "DoD": growth(latest, previous),
            "DoD_previous": growth(previous, _nth(ys_r, 2)),
        }
    return {}


def _parse_point(pair: Sequence[Any]) -> Point:
    x, y = pair[0], pair[1]
    return parse_to_epoch_ms(x), y


def _complete_point(point: Point) -> bool:
    return point[0] is not None and point[1] is not None


def timeseries_fingerprinter(options: FingerprintOptions, tags: TagSpec) -> Reducer:
    scale = options.scale
    series = with_filter(collect(), _complete_point)
    if scale is not Scale.RAW:
        series = post_complete(series, lambda points: fill_timeseries(scale, points))

    def finalize(parts: Dict[str, Any]) -> Dict[str, Any]:
        points = parts["series"]
        ys_r = [y for _, y in reversed(points)]
        decomposition = None
        if scale is not Scale.RAW:
            if unbounded_computation(options.max_cost):
                decomposition = decompose_timeseries(scale, points)
            else:
                logger.debug("skipping seasonal decomposition: computation ceiling is %s", options.max_cost.computation.value)
        result: Dict[str, Any] = {
            "series": [(from_epoch_ms(t), y) for t, y in points],
            "linear_regression": parts["linear_regression"],
            "seasonal_decomposition": decomposition,
            "type": TypeCategory.DATETIME_NUMBER,
        }
        result.update(_growth_rates(scale, ys_r))
        return result

    fused = fuse({"linear_regression": simple_linear_regression(), "series": series})
    return post_complete(pre_step(fused, _parse_point), finalize)

