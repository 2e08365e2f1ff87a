"""
Registry mapping type tags to fingerprint pipeline builders.

Resolves a single tag or a pair of tags onto the closed ``TypeCategory``
set through one precedence table, then looks up the builder for that
category. Unknown tags never raise; they fall through to the default
pipeline.
"""
# 说明：类型标签到指纹流水线构建函数的注册表。
# 职责：
# - PRECEDENCE：单列类型的唯一优先级表（数值 > 日期时间 > 类别 > 文本）
# - resolve_category：将单个标签或标签二元组归约为 TypeCategory
# - PIPELINE_REGISTRY / build_pipeline：按类别查找并构建归约器
# - registered_pipelines_snapshot：为文档与调试导出当前注册的流水线

from __future__ import annotations

from typing import Callable, Dict, Optional, Tuple

from fplib.core.reducers import Reducer
from fplib.core.utils.logging import get_logger
from fplib.types import (
    ANY_TAG,
    CATEGORY_TAG,
    DATETIME_TAG,
    NUMBER_TAG,
    TEXT_TAG,
    TagSpec,
    TypeCategory,
    TypeTag,
)

from .categorical import category_fingerprinter, text_fingerprinter
from .composite import category_any_fingerprinter
from .default import default_fingerprinter
from .numeric import number_fingerprinter, number_pair_fingerprinter
from .options import FingerprintOptions
from .temporal import datetime_fingerprinter
from .timeseries import timeseries_fingerprinter

logger = get_logger(__name__)

Builder = Callable[[FingerprintOptions, TagSpec], Reducer]

# 单列类型优先级：靠前者胜出，例如 [type/Integer type/Category] 归为 NUMBER
PRECEDENCE: Tuple[Tuple[TypeTag, TypeCategory], ...] = (
    (NUMBER_TAG, TypeCategory.NUMBER),
    (DATETIME_TAG, TypeCategory.DATETIME),
    (CATEGORY_TAG, TypeCategory.CATEGORY),
    (TEXT_TAG, TypeCategory.TEXT),
)

# 二元组对原始标签逐项做 isa 匹配，靠前者胜出；
# 因此 [type/Integer type/Category] 作为分组列仍可匹配 CATEGORY_ANY
PAIR_CATEGORIES: Tuple[Tuple[Tuple[TypeTag, TypeTag], TypeCategory], ...] = (
    ((DATETIME_TAG, NUMBER_TAG), TypeCategory.DATETIME_NUMBER),
    ((NUMBER_TAG, NUMBER_TAG), TypeCategory.NUMBER_NUMBER),
    ((CATEGORY_TAG, ANY_TAG), TypeCategory.CATEGORY_ANY),
)

PIPELINE_REGISTRY: Dict[TypeCategory, Builder] = {
    TypeCategory.NUMBER: number_fingerprinter,
    TypeCategory.DATETIME: datetime_fingerprinter,
    TypeCategory.CATEGORY: category_fingerprinter,
    TypeCategory.TEXT: text_fingerprinter,
    TypeCategory.NUMBER_NUMBER: number_pair_fingerprinter,
    TypeCategory.DATETIME_NUMBER: timeseries_fingerprinter,
    TypeCategory.CATEGORY_ANY: category_any_fingerprinter,
    TypeCategory.DEFAULT: default_fingerprinter,
}


def _resolve_single(tag: Optional[TypeTag]) -> TypeCategory:
    if not isinstance(tag, TypeTag):
        return TypeCategory.DEFAULT
    for parent, category in PRECEDENCE:
        if tag.isa(parent):
            return category
    return TypeCategory.DEFAULT


def resolve_category(tag_or_tags: TagSpec) -> TypeCategory:
    """Map a tag, or a ``(x, y)`` tag pair, onto its ``TypeCategory``."""
    if isinstance(tag_or_tags, tuple):
        if len(tag_or_tags) != 2:
            return TypeCategory.DEFAULT
        x, y = tag_or_tags
        if not (isinstance(x, TypeTag) and isinstance(y, TypeTag)):
            return TypeCategory.DEFAULT
        for (x_parent, y_parent), category in PAIR_CATEGORIES:
            if x.isa(x_parent) and y.isa(y_parent):
                return category
        return TypeCategory.DEFAULT
    return _resolve_single(tag_or_tags)


def build_pipeline(options: FingerprintOptions, tag_or_tags: TagSpec) -> Reducer:
    """Build the reducer that fingerprints values tagged ``tag_or_tags``."""
    category = resolve_category(tag_or_tags)
    builder = PIPELINE_REGISTRY[category]
    logger.debug("pipeline %s selected for %s", builder.__name__, _describe(tag_or_tags))
    return builder(options, tag_or_tags)


def _describe(tag_or_tags: TagSpec) -> str:
    if isinstance(tag_or_tags, tuple):
        return " x ".join(str(tag) for tag in tag_or_tags)
    return str(tag_or_tags)


def registered_pipelines_snapshot() -> Dict[str, str]:
    """Snapshot of registered pipelines for tooling or docs."""
    return {category.value: builder.__name__ for category, builder in PIPELINE_REGISTRY.items()}
