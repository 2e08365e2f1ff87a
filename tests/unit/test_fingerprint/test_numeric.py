"""
Unit tests for numeric fingerprints.
"""
# 说明：数值型与成对数值型指纹的单元测试。
# 覆盖：
# - 空输入、全缺失输入的精确结果
# - 派生统计量（方差、标准差、中位数、范围、比率、熵）
# - 零分母比率返回 None
# - 成对数值列的相关系数、协方差与线性回归

import math

import pytest

from fplib.core.reducers import transduce
from fplib.fingerprint import FingerprintOptions, build_pipeline
from fplib.types import NUMBER_TAG, TypeCategory


def _fingerprint(values, tag=NUMBER_TAG, **overrides):
    return transduce(build_pipeline(FingerprintOptions(**overrides), tag), values)


def test_empty_numeric_fingerprint_is_exact() -> None:
    assert _fingerprint([]) == {"count": 0, "type": TypeCategory.NUMBER}


def test_all_missing_numeric_fingerprint() -> None:
    assert _fingerprint([None, None]) == {
        "count": 2,
        "nil_count": 2,
        "has_nils": True,
        "type": TypeCategory.NUMBER,
    }


def test_numeric_fingerprint_statistics() -> None:
    fp = _fingerprint([1, 2, 3, 4, None])
    assert fp["type"] is TypeCategory.NUMBER
    assert fp["count"] == 5
    assert fp["nil_count"] == 1 and fp["has_nils"] is True
    assert fp["min"] == 1.0 and fp["max"] == 4.0
    assert fp["span"] == 3.0
    assert fp["mean"] == pytest.approx(2.5)
    assert fp["median"] == pytest.approx(2.5)
    assert fp["var"] == pytest.approx(1.25)
    assert fp["sd"] == pytest.approx(math.sqrt(1.25))
    assert fp["var_gt_sd"] is True
    assert fp["sum"] == 10
    assert fp["sum_of_squares"] == 30
    assert fp["cardinality"] == 4
    assert fp["cardinality_vs_count"] == pytest.approx(0.8)
    assert fp["all_distinct"] is False
    assert fp["histogram"] == {1.0: 0.25, 2.0: 0.25, 3.0: 0.25, 4.0: 0.25}
    assert fp["entropy"] == pytest.approx(math.log(4))
    assert fp["pct_above_mean"] == pytest.approx(0.5)
    assert fp["positive_definite"] is True
    assert fp["in_unit_interval"] is False
    assert fp["in_signed_unit_interval"] is False
    assert fp["min_vs_max"] == pytest.approx(0.25)
    assert fp["span_vs_sd"] == pytest.approx(3.0 / math.sqrt(1.25))
    # 均值与中位数相等，分母为零
    assert fp["mean_median_spread"] is None
    assert fp["skewness"] == pytest.approx(0.0, abs=1e-9)
    assert fp["kurtosis"] == pytest.approx(-1.2)
    assert list(fp["percentiles"]) == list(FingerprintOptions().percentiles)
    assert fp["percentiles"][0.0] == pytest.approx(1.0)


def test_constant_column_has_undefined_ratios() -> None:
    fp = _fingerprint([5, 5, 5])
    assert fp["sd"] == 0.0
    assert fp["span_vs_sd"] is None
    assert fp["mean_median_spread"] is None
    assert fp["min_vs_max"] == pytest.approx(1.0)
    assert fp["skewness"] is None and fp["kurtosis"] is None
    assert fp["var_gt_sd"] is False


def test_unit_interval_flags_and_distinctness() -> None:
    fp = _fingerprint([0.1, 0.5, 0.9, 0.3])
    assert fp["in_unit_interval"] is True
    assert fp["in_signed_unit_interval"] is True
    assert fp["all_distinct"] is True
    signed = _fingerprint([-0.5, 0.5])
    assert signed["in_unit_interval"] is False
    assert signed["in_signed_unit_interval"] is True
    assert signed["positive_definite"] is False
    assert signed["min_vs_max"] == pytest.approx(-1.0)


def test_custom_percentiles_and_bins() -> None:
    fp = _fingerprint(range(100), percentiles=(0.25, 0.75), histogram_bins=4)
    assert set(fp["percentiles"]) == {0.25, 0.75}
    assert len(fp["histogram"]) == 4
    assert sum(fp["histogram"].values()) == pytest.approx(1.0)


def test_number_pair_fingerprint() -> None:
    fp = _fingerprint([(1, 2), (2, 4), (3, 6), (None, 1)], tag=(NUMBER_TAG, NUMBER_TAG))
    assert fp["type"] is TypeCategory.NUMBER_NUMBER
    assert fp["count"] == 4
    assert fp["correlation"] == pytest.approx(1.0)
    assert fp["covariance"] == pytest.approx(2.0)
    assert fp["linear_regression"]["slope"] == pytest.approx(2.0)
    assert fp["linear_regression"]["intercept"] == pytest.approx(0.0, abs=1e-12)
