"""
Per-type feature vectors extracted from fingerprints for comparison.
"""
# 说明：从指纹中按类型抽取用于比较的有序特征向量。
# 约定：缺失的特征记为 None；只有数值、类别、文本与日期时间四类指纹可比较

from __future__ import annotations

from typing import Any, Dict, Mapping, Tuple

from fplib.types import TypeCategory

from .difference import ComparisonError, distance

COMPARISON_FIELDS: Dict[TypeCategory, Tuple[str, ...]] = {
    TypeCategory.NUMBER: (
        "histogram",
        "mean",
        "median",
        "min",
        "max",
        "sd",
        "count",
        "kurtosis",
        "skewness",
        "entropy",
        "nil_count",
        "cardinality_vs_count",
        "span",
    ),
    TypeCategory.CATEGORY: (
        "histogram",
        "count",
        "nil_count",
        "cardinality_vs_count",
        "entropy",
        "all_distinct",
    ),
    TypeCategory.TEXT: ("histogram", "min", "max", "count", "nil_count"),
    TypeCategory.DATETIME: (
        "histogram",
        "histogram_hour",
        "histogram_day",
        "histogram_month",
        "histogram_quarter",
        "count",
        "nil_count",
        "entropy",
    ),
}


def fingerprint_type(fingerprint: Mapping[str, Any]) -> TypeCategory:
    value = fingerprint.get("type")
    if isinstance(value, TypeCategory):
        return value
    try:
        return TypeCategory(value)
    except ValueError as exc:
        raise ComparisonError(f"fingerprint type {value!r} is not comparable") from exc


def comparison_vector(fingerprint: Mapping[str, Any]) -> Dict[str, Any]:
    """Ordered selection of the features used to compare ``fingerprint``."""
    category = fingerprint_type(fingerprint)
    if category not in COMPARISON_FIELDS:
        raise ComparisonError(f"fingerprint type {category.value!r} is not comparable")
    return {key: fingerprint.get(key) for key in COMPARISON_FIELDS[category]}


def fingerprint_distance(a: Mapping[str, Any], b: Mapping[str, Any]) -> float:
    """Distance between two fingerprints of the same type."""
    type_a, type_b = fingerprint_type(a), fingerprint_type(b)
    if type_a is not type_b:
        raise ComparisonError(f"cannot compare {type_a.value} fingerprint with {type_b.value} fingerprint")
    return distance(list(comparison_vector(a).values()), list(comparison_vector(b).values()))
