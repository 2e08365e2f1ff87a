"""
Per-call fingerprinting options.

Responsibilities
  - Define the cost ceiling (``MaxCost``) and time scale enums.
  - Carry every tunable constant (sketch error, sample cap, percentiles,
    histogram bins) explicitly into pipeline builders.
  - Build options from the runtime config or from a plain mapping.

Usage Context
  - Passed as the first argument to ``build_pipeline`` and engine helpers.
"""
# 说明：单次指纹计算的参数载体。
# 职责：
# - Computation / QueryCost / MaxCost：声明式的计算与查询成本上限
# - Scale：时间序列的聚合粒度（raw / day / week / month）
# - FingerprintOptions：显式携带基数误差、采样上限、分位点与分箱数，避免模块级常量
# 约定：
# - 字符串取值大小写不敏感，兼容 ":month" 这类写法；未知取值抛出 ParamValidationError

from __future__ import annotations

import enum
from dataclasses import dataclass, field, replace
from typing import Any, Mapping, Optional, Tuple

from fplib.core.utils.config import RuntimeConfig, get_config
from fplib.core.utils.param_validation import ensure, ensure_choice


class Computation(enum.Enum):
    LINEAR = "linear"
    UNBOUNDED = "unbounded"
    YOLO = "yolo"


class QueryCost(enum.Enum):
    CACHE = "cache"
    SAMPLE = "sample"
    FULL_SCAN = "full-scan"
    JOINS = "joins"


class Scale(enum.Enum):
    RAW = "raw"
    DAY = "day"
    WEEK = "week"
    MONTH = "month"


@dataclass(frozen=True)
class MaxCost:
    """Ceiling on computation complexity and query shape."""

    computation: Computation = Computation.LINEAR
    query: QueryCost = QueryCost.FULL_SCAN

    @classmethod
    def from_mapping(cls, payload: Optional[Mapping[str, Any]]) -> "MaxCost":
        payload = payload or {}
        config = get_config()
        return cls(
            computation=ensure_choice(
                payload.get("computation", config.default_computation), Computation, label="max_cost.computation"
            ),
            query=ensure_choice(payload.get("query", config.default_query), QueryCost, label="max_cost.query"),
        )


@dataclass(frozen=True)
class FingerprintOptions:
    """
    Options threaded through every pipeline builder.

    - Configuration
      - max_cost: Computation/query ceiling gating optional statistics.
      - scale: Time-series aggregation scale.
      - cardinality_error: Relative error bound of the cardinality sketch.
      - max_sample_size: Row limit hinted to the data source when sampling.
      - percentiles: Quantiles reported by numeric and datetime pipelines.
      - histogram_bins: Bin budget of streaming histograms.
    """

    max_cost: MaxCost = field(default_factory=MaxCost)
    scale: Scale = Scale.RAW
    cardinality_error: float = 0.01
    max_sample_size: int = 10000
    percentiles: Tuple[float, ...] = tuple(round(i * 0.1, 1) for i in range(10))
    histogram_bins: int = 64

    def __post_init__(self) -> None:
        ensure(0.0 < self.cardinality_error < 1.0, "cardinality_error must lie in (0, 1)")
        ensure(self.max_sample_size > 0, "max_sample_size must be positive")
        ensure(self.histogram_bins > 0, "histogram_bins must be positive")
        ensure(all(0.0 <= q <= 1.0 for q in self.percentiles), "percentiles must lie in [0, 1]")

    @classmethod
    def from_config(cls, config: Optional[RuntimeConfig] = None, **overrides: Any) -> "FingerprintOptions":
        # 以运行时配置为默认值构造选项，关键字参数优先
        config = config or get_config()
        options = cls(
            max_cost=MaxCost(
                computation=ensure_choice(config.default_computation, Computation, label="computation"),
                query=ensure_choice(config.default_query, QueryCost, label="query"),
            ),
            scale=ensure_choice(config.default_scale, Scale, label="scale"),
            cardinality_error=config.cardinality_error,
            max_sample_size=config.max_sample_size,
            percentiles=tuple(config.percentiles),
            histogram_bins=config.histogram_bins,
        )
        return options.with_overrides(**overrides) if overrides else options

    @classmethod
    def from_mapping(cls, payload: Optional[Mapping[str, Any]] = None) -> "FingerprintOptions":
        """Build options from ``{"max_cost": {...}, "scale": ..., ...}``."""
        payload = dict(payload or {})
        overrides = {k: v for k, v in payload.items() if k not in ("max_cost", "scale")}
        if "max_cost" in payload:
            overrides["max_cost"] = MaxCost.from_mapping(payload["max_cost"])
        if "scale" in payload and payload["scale"] is not None:
            overrides["scale"] = payload["scale"]
        return cls.from_config(**overrides)

    def with_overrides(self, **overrides: Any) -> "FingerprintOptions":
        if "scale" in overrides:
            overrides["scale"] = ensure_choice(overrides["scale"], Scale, label="scale")
        if isinstance(overrides.get("max_cost"), Mapping):
            overrides["max_cost"] = MaxCost.from_mapping(overrides["max_cost"])
        if "percentiles" in overrides:
            overrides["percentiles"] = tuple(overrides["percentiles"])
        return replace(self, **overrides)
