"""
Fallback fingerprint for types without a dedicated pipeline.
"""
# 说明：未识别类型的兜底指纹，只统计总数与缺失数，并回传实际类型标签以便排查。

from __future__ import annotations

from typing import Any, Dict

from fplib.core.reducers import Reducer, count, fuse, nil_count, post_complete
from fplib.types import TagSpec


def default_fingerprinter(options: Any, tag: TagSpec) -> Reducer:
    def finalize(parts: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "count": parts["total_count"],
            "nil_count": parts["nil_count"],
            "has_nils": parts["nil_count"] > 0,
            "type": None,
            "actual_type": tag,
        }

    return post_complete(fuse({"total_count": count(), "nil_count": nil_count()}), finalize)
