"""
Unit tests for logging utilities.
"""
# 说明：日志配置相关的单元测试。
# 覆盖：
# - configure_logging(...)：根据给定日志级别初始化 logging 系统
# - get_logger(...)：获取库内 logger，并确认流水线选择在 DEBUG 级别记录

import logging

from fplib.core.utils import configure_logging, get_logger
from fplib.fingerprint import FingerprintOptions, build_pipeline
from fplib.types import NUMBER_TAG


def test_configure_logging_sets_level() -> None:
    configure_logging(level="WARNING")
    assert logging.getLogger("fplib").level == logging.WARNING
    configure_logging(level="INFO")
    assert logging.getLogger("fplib").level == logging.INFO


def test_get_logger_returns_named_logger(caplog) -> None:
    logger = get_logger("fplib.test")
    assert logger.name == "fplib.test"
    with caplog.at_level(logging.INFO, logger="fplib.test"):
        logger.info("message")
    assert "message" in caplog.text


def test_pipeline_selection_logged_at_debug(caplog) -> None:
    # 验证流水线选择只在 DEBUG 级别输出
    with caplog.at_level(logging.DEBUG, logger="fplib"):
        build_pipeline(FingerprintOptions(), NUMBER_TAG)
    assert "number_fingerprinter" in caplog.text
