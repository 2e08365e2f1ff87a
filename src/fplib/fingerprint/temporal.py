"""
Datetime fingerprints.

Responsibilities
  - Parse each value once and fan it out to a histogram over epoch
    milliseconds and to categorical histograms of hour of day, ISO day of
    week, month and quarter.
  - Convert numeric summaries back to UTC datetimes when finalizing.

Usage Context
  - Registered for ``TypeCategory.DATETIME``.
"""
# 说明：日期时间列的指纹计算。
# 职责：
# - 先统一解析时间戳，再融合 epoch 毫秒直方图与小时 / 星期 / 月份 / 季度四个类别直方图
# - 完成阶段将最小值、最大值、分位数与直方图键换算回 UTC datetime
# 约定：
# - 星期采用 ISO 编号（1 = 周一，7 = 周日），季度为 ceil(month / 3)

from __future__ import annotations

from datetime import datetime
from typing import Any, Callable, Dict, Optional

from fplib.core.reducers import Reducer, fuse, post_complete, pre_step
from fplib.core.sketches import histogram, histogram_categorical
from fplib.types import TagSpec, TypeCategory

from .options import FingerprintOptions
from .summary import binned_entropy, nil_fields, pmf
from .timestamps import from_epoch_ms, parse_timestamp, quarter, to_epoch_ms


def _somef(fn: Callable[[datetime], Any]) -> Callable[[Optional[datetime]], Any]:
    # 缺失值直接透传为 None，交给直方图的缺失计数
    return lambda value: None if value is None else fn(value)


def _maybe_datetime(ms: Optional[float]) -> Optional[datetime]:
    return None if ms is None else from_epoch_ms(ms)


def _summarize_datetimes(parts: Dict[str, Any]) -> Dict[str, Any]:
    hist = parts["histogram"]
    return {
        "min": _maybe_datetime(hist.minimum),
        "max": _maybe_datetime(hist.maximum),
        "histogram": {from_epoch_ms(ms): p for ms, p in pmf(hist).items()},
        "percentiles": {q: _maybe_datetime(ms) for q, ms in parts["percentiles"].items()},
        "histogram_hour": pmf(parts["histogram_hour"]),
        "histogram_day": pmf(parts["histogram_day"]),
        "histogram_month": pmf(parts["histogram_month"]),
        "histogram_quarter": pmf(parts["histogram_quarter"]),
        "count": hist.total_count,
        **nil_fields(hist),
        "entropy": binned_entropy(hist),
        "type": TypeCategory.DATETIME,
    }


def datetime_fingerprinter(options: FingerprintOptions, tag: TagSpec) -> Reducer:
    fused = fuse(
        {
            "histogram": pre_step(histogram(options.histogram_bins), _somef(to_epoch_ms)),
            "histogram_hour": pre_step(histogram_categorical(), _somef(lambda dt: dt.hour)),
            "histogram_day": pre_step(histogram_categorical(), _somef(lambda dt: dt.isoweekday())),
            "histogram_month": pre_step(histogram_categorical(), _somef(lambda dt: dt.month)),
            "histogram_quarter": pre_step(histogram_categorical(), _somef(quarter)),
        }
    )

    def finalize(parts: Dict[str, Any]) -> Dict[str, Any]:
        parts["percentiles"] = parts["histogram"].percentiles(*options.percentiles)
        return _summarize_datetimes(parts)

    return post_complete(pre_step(fused, parse_timestamp), finalize)
