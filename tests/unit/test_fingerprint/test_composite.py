"""
Unit tests for Category x Any fingerprints.
"""
# 说明：按类别分组的指纹单元测试：每组独立运行第二列类型对应的流水线。

import pytest

from fplib.core.reducers import transduce
from fplib.fingerprint import FingerprintOptions, build_pipeline, fingerprint_values
from fplib.types import CATEGORY_TAG, NUMBER_TAG, TEXT_TAG, TypeCategory, TypeTag


def test_category_by_number_rollup() -> None:
    rows = [("a", 1), ("b", 10), ("a", 3), ("b", None)]
    result = transduce(build_pipeline(FingerprintOptions(), (CATEGORY_TAG, NUMBER_TAG)), rows)
    assert set(result) == {"a", "b"}
    assert result["a"]["type"] is TypeCategory.NUMBER
    assert result["a"]["count"] == 2
    assert result["a"]["mean"] == pytest.approx(2.0)
    assert result["b"]["count"] == 2
    assert result["b"]["nil_count"] == 1
    assert result["b"]["max"] == 10.0


def test_category_by_text_rollup() -> None:
    rows = [("x", "hello"), ("y", "hi"), ("x", "hey")]
    result = transduce(build_pipeline(FingerprintOptions(), (CATEGORY_TAG, TEXT_TAG)), rows)
    assert result["x"]["type"] is TypeCategory.TEXT
    assert result["x"]["min"] == 3.0 and result["x"]["max"] == 5.0
    assert result["y"]["histogram"] == {2.0: 1.0}


def test_empty_rollup() -> None:
    assert transduce(build_pipeline(FingerprintOptions(), (CATEGORY_TAG, NUMBER_TAG)), []) == {}


def test_rollup_groups_match_separate_fingerprints() -> None:
    options = FingerprintOptions()
    result = transduce(build_pipeline(options, (CATEGORY_TAG, NUMBER_TAG)), [("a", 1), ("b", 2), ("a", 3)])
    assert set(result) == {"a", "b"}
    assert result["a"] == transduce(build_pipeline(options, NUMBER_TAG), [1, 3])
    assert result["b"] == transduce(build_pipeline(options, NUMBER_TAG), [2])


def test_numeric_category_column_groups_text() -> None:
    # 同时属于数值与类别的分组列仍按类别分组
    group_tag = TypeTag("Integer", "Category")
    rows = [(1, "x"), (2, "yy"), (1, "zzz")]
    result = transduce(build_pipeline(FingerprintOptions(), (group_tag, TEXT_TAG)), rows)
    assert set(result) == {1, 2}
    assert result[1]["type"] is TypeCategory.TEXT
    assert result[1]["count"] == 2
    assert result[1]["min"] == 1.0 and result[1]["max"] == 3.0
    assert result[2]["histogram"] == {2.0: 1.0}


def test_group_named_field_survives_field_attachment() -> None:
    rows = [("field", 1), ("other", 2), ("field", 5)]
    fp = fingerprint_values(FingerprintOptions(), (CATEGORY_TAG, NUMBER_TAG), rows, field="status x total")
    assert fp["field"] == "status x total"
    assert set(fp["groups"]) == {"field", "other"}
    assert fp["groups"]["field"]["count"] == 2
    assert fp["groups"]["field"]["max"] == 5.0
