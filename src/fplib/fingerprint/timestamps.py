"""
Timestamp coercion helpers shared by datetime and time-series pipelines.
"""
# 说明：时间戳解析与换算工具。
# 职责：
# - parse_timestamp：将 ISO-8601 字符串、datetime、date 或毫秒时间戳统一为 UTC 时区的 datetime
# - to_epoch_ms / from_epoch_ms：datetime 与 epoch 毫秒之间的精确换算
# - add_months / step_timestamp：按日 / 周 / 月生成周期序列（月末日期按目标月份天数截断）
# 约定：
# - 不带时区的时间一律视为 UTC

from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta, timezone
from typing import Any, Optional

from fplib.core.utils.param_validation import ParamValidationError

from .options import Scale

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_ONE_MS = timedelta(milliseconds=1)


def parse_timestamp(value: Any) -> Optional[datetime]:
    """
    Coerce ``value`` into an aware UTC datetime; ``None`` stays ``None``.

    Strings accept what ``datetime.fromisoformat`` accepts on Python 3.11+
    (extended and basic ISO-8601 forms such as ``2017-01-01T10:00:00.5``
    or ``20170101``), plus a trailing ``Z``. Numbers are epoch milliseconds.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return from_epoch_ms(value)
    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            return parse_timestamp(datetime.fromisoformat(text))
        except ValueError as exc:
            raise ParamValidationError(f"cannot parse timestamp {value!r}") from exc
    raise ParamValidationError(f"unsupported timestamp value {value!r}")


def to_epoch_ms(value: datetime) -> float:
    return float((value - EPOCH) // _ONE_MS)


def from_epoch_ms(ms: float) -> datetime:
    return EPOCH + timedelta(milliseconds=float(ms))


def parse_to_epoch_ms(value: Any) -> Optional[float]:
    parsed = parse_timestamp(value)
    return None if parsed is None else to_epoch_ms(parsed)


def add_months(value: datetime, months: int) -> datetime:
    index = value.year * 12 + (value.month - 1) + months
    year, month = divmod(index, 12)
    month += 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return value.replace(year=year, month=month, day=day)


def step_timestamp(start: datetime, scale: Scale, n: int) -> datetime:
    """The ``n``-th timestamp of the periodic sequence starting at ``start``."""
    # 每一项都从起点直接推算，避免 1 月 31 日之后的月份被逐步截断到 28 日
    if scale is Scale.DAY:
        return start + timedelta(days=n)
    if scale is Scale.WEEK:
        return start + timedelta(weeks=n)
    if scale is Scale.MONTH:
        return add_months(start, n)
    raise ParamValidationError(f"scale {scale.value!r} has no period")


def quarter(value: datetime) -> int:
    return (value.month + 2) // 3
