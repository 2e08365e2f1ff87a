"""
Runtime configuration utilities.

Centralises the library's tunable fingerprinting defaults and exposes
helpers to read them from environment variables or update them at runtime.
"""
# 说明：运行时配置管理工具，集中管理指纹计算的默认参数，并支持环境变量覆写与运行期更新。
# 职责：
# - RuntimeConfig：封装严格校验开关、日志等级、基数估计误差、采样上限、直方图分箱数、分位点等配置项
# - load_from_env(...)：按统一前缀（FPLIB_）从环境变量加载并解析配置值
# - get_config()：获取全局 RuntimeConfig 单例，作为库级默认配置入口
# - configure(...)：通过关键字参数更新全局配置并返回更新后的实例
# 约定：
# - 全局配置只提供默认值；单次计算使用的参数由 FingerprintOptions 显式传递
# - 未知配置键在 update(...) 中会触发 AttributeError

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, Dict, Tuple

DEFAULT_PERCENTILES: Tuple[float, ...] = tuple(round(i * 0.1, 1) for i in range(10))


@dataclass
class RuntimeConfig:
    strict_validation: bool = True
    log_level: str = field(default_factory=lambda: os.environ.get("FPLIB_LOG_LEVEL", "INFO"))
    cardinality_error: float = 0.01
    max_sample_size: int = 10000
    histogram_bins: int = 64
    percentiles: Tuple[float, ...] = DEFAULT_PERCENTILES
    default_scale: str = "raw"
    default_computation: str = "linear"
    default_query: str = "full-scan"
    extra: Dict[str, Any] = field(default_factory=dict)

    def update(self, **kwargs: Any) -> None:
        # 按关键字参数更新当前配置实例，未知字段名将显式报错
        for key, value in kwargs.items():
            if not hasattr(self, key):
                raise AttributeError(f"unknown config option '{key}'")
            setattr(self, key, value)

    def load_from_env(self, prefix: str = "FPLIB_") -> None:
        # 从带有指定前缀的环境变量中加载配置，并按字段类型转换后写回实例
        parsers = {
            "STRICT_VALIDATION": lambda v: v.lower() in {"1", "true", "yes"},
            "LOG_LEVEL": str,
            "CARDINALITY_ERROR": float,
            "MAX_SAMPLE_SIZE": int,
            "HISTOGRAM_BINS": int,
            "PERCENTILES": lambda v: tuple(float(p) for p in v.split(",") if p.strip()),
            "DEFAULT_SCALE": str.lower,
            "DEFAULT_COMPUTATION": str.lower,
            "DEFAULT_QUERY": str.lower,
        }
        for key, parse in parsers.items():
            env_key = f"{prefix}{key}"
            if env_key not in os.environ:
                continue
            setattr(self, key.lower(), parse(os.environ[env_key]))


_GLOBAL_CONFIG = RuntimeConfig()


def get_config() -> RuntimeConfig:
    # 返回全局 RuntimeConfig 实例
    return _GLOBAL_CONFIG


def configure(**kwargs: Any) -> RuntimeConfig:
    # 以关键字参数更新全局配置，并返回更新后的实例
    _GLOBAL_CONFIG.update(**kwargs)
    return _GLOBAL_CONFIG
