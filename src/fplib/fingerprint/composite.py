"""
Category x Any fingerprints.
"""
# 说明：类别 × 任意类型的分组指纹。
# 职责：按第一列的取值分组（rollup），每组对第二列运行其类型对应的指纹流水线，单遍完成。
# 约定：分组状态按需惰性创建，组键需可哈希；类别列基数较小的假设不做强制检查

from __future__ import annotations

from fplib.core.reducers import Reducer, first, pre_step, rollup, second
from fplib.types import TagSpec

from .options import FingerprintOptions


def category_any_fingerprinter(options: FingerprintOptions, tags: TagSpec) -> Reducer:
    # 延迟导入：注册表本身引用本模块
    from .registry import build_pipeline

    _, y_tag = tags
    return rollup(pre_step(build_pipeline(options, y_tag), second), first)
