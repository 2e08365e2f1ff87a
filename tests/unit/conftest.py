"""Fixtures shared by unit tests."""

from dataclasses import fields, replace

import pytest

from fplib.core.utils.config import get_config


@pytest.fixture(autouse=True)
def restore_runtime_config():
    # 每个测试结束后恢复全局配置，避免 configure(...) 的修改相互污染
    cfg = get_config()
    snapshot = replace(cfg, extra=dict(cfg.extra))
    yield
    for f in fields(snapshot):
        setattr(cfg, f.name, getattr(snapshot, f.name))
