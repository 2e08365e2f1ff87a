"""
Unit tests for runtime configuration utilities.
"""
# 说明：RuntimeConfig（运行时配置）及全局配置访问辅助函数的单元测试。
# 覆盖：
# - configure(...)：通过关键字参数更新全局配置实例字段
# - RuntimeConfig.load_from_env(...)：从环境变量加载并覆写配置选项
# - get_config()：返回全局 RuntimeConfig 单例并保持状态一致性

import pytest

from fplib.core.utils import RuntimeConfig, configure, get_config


def test_defaults() -> None:
    cfg = RuntimeConfig()
    assert cfg.cardinality_error == 0.01
    assert cfg.max_sample_size == 10000
    assert cfg.histogram_bins == 64
    assert cfg.percentiles == (0.0, 0.1, 0.2, 0.3, 0.4, 0.5, 0.6, 0.7, 0.8, 0.9)
    assert cfg.default_scale == "raw"


def test_configure_updates_values() -> None:
    # 验证 configure(...) 能正确更新全局配置的字段值
    cfg = configure(strict_validation=False, max_sample_size=500)
    assert cfg.strict_validation is False
    assert cfg.max_sample_size == 500


def test_configure_rejects_unknown_key() -> None:
    with pytest.raises(AttributeError):
        configure(default_dtype="float32")


def test_runtime_config_env_override(monkeypatch) -> None:
    # 验证 RuntimeConfig.load_from_env(...) 按环境变量覆写默认配置
    cfg = RuntimeConfig()
    monkeypatch.setenv("FPLIB_LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("FPLIB_STRICT_VALIDATION", "false")
    monkeypatch.setenv("FPLIB_CARDINALITY_ERROR", "0.05")
    monkeypatch.setenv("FPLIB_PERCENTILES", "0.25,0.5,0.75")
    monkeypatch.setenv("FPLIB_DEFAULT_SCALE", "MONTH")
    cfg.load_from_env()
    assert cfg.log_level == "DEBUG"
    assert cfg.strict_validation is False
    assert cfg.cardinality_error == pytest.approx(0.05)
    assert cfg.percentiles == (0.25, 0.5, 0.75)
    assert cfg.default_scale == "month"


def test_get_config_returns_singleton() -> None:
    # 验证 get_config() 每次返回的是同一全局实例（单例行为）
    cfg = get_config()
    cfg.strict_validation = True
    assert get_config().strict_validation is True
