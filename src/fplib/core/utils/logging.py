"""
Lightweight logging helpers with library-wide defaults.
"""
# 说明：轻量级日志工具，提供统一的 logger 获取入口。
# 职责：
# - configure_logging(...)：初始化 logging 基本配置
# - get_logger(...)：按名称获取 logger，必要时自动完成日志系统初始化
# 约定：
# - 日志级别优先级：显式参数 level > 环境变量 FPLIB_LOG_LEVEL > 运行时配置的 log_level
# - 指纹计算本身只在 DEBUG 级别记录流水线选择等细节，避免在热路径上输出

from __future__ import annotations

import logging
import os
from typing import Optional

from .config import get_config

LOG_FORMAT = "[%(levelname)s] %(name)s %(asctime)s | %(message)s"


def configure_logging(level: Optional[str] = None) -> None:
    log_level = level or os.environ.get("FPLIB_LOG_LEVEL", get_config().log_level)
    logging.basicConfig(level=log_level, format=LOG_FORMAT)
    logging.getLogger("fplib").setLevel(log_level)


def get_logger(name: str) -> logging.Logger:
    # 获取指定名称的 logger，若根 logger 尚无 handler，则懒加载方式调用 configure_logging
    logger = logging.getLogger(name)
    if not logging.getLogger().handlers:
        configure_logging()
    return logger
