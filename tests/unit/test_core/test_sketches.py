"""
Unit tests for bounded-memory sketches.
"""
# 说明：流式直方图、类别频数表与 HyperLogLog 的单元测试。
# 覆盖：
# - Histogram：精确统计量、分箱上限、分位数与累积分布插值、缺失值计数
# - CategoricalHistogram：频数与缺失计数
# - HyperLogLog：精度推导、误差界、合并与种子校验

import numpy as np
import pytest

from fplib.core.reducers import transduce
from fplib.core.sketches import (
    CategoricalHistogram,
    Histogram,
    HyperLogLog,
    cardinality,
    hash64,
    histogram,
    histogram_categorical,
    precision_for_error,
)
from fplib.core.utils import ParamValidationError


# ------------------------------------------------------------------ Histogram
def test_histogram_exact_summaries() -> None:
    hist = Histogram()
    for value in [4, 1, 3, None, 2]:
        hist.insert(value)
    assert hist.count == 4
    assert hist.missing_count == 1
    assert hist.total_count == 5
    assert hist.minimum == 1.0
    assert hist.maximum == 4.0
    assert hist.mean == pytest.approx(2.5)
    assert hist.variance == pytest.approx(1.25)
    assert hist.bins() == {1.0: 1, 2.0: 1, 3.0: 1, 4.0: 1}


def test_histogram_respects_max_bins() -> None:
    hist = transduce(histogram(max_bins=8), range(1000))
    bins = hist.bins()
    assert len(bins) <= 8
    assert sum(bins.values()) == 1000
    assert hist.minimum == 0.0 and hist.maximum == 999.0
    assert hist.mean == pytest.approx(499.5)


def test_histogram_merge_keeps_weighted_center() -> None:
    hist = Histogram(max_bins=2)
    hist.insert(0.0).insert(10.0).insert(11.0)
    assert hist.bins() == {0.0: 1, 10.5: 2}


def test_histogram_percentiles_and_cdf() -> None:
    rng = np.random.default_rng(7)
    data = rng.uniform(0, 100, size=5000)
    hist = transduce(histogram(max_bins=64), data)
    assert hist.median == pytest.approx(float(np.median(data)), abs=3.0)
    qs = hist.percentiles(0.1, 0.9)
    assert qs[0.1] == pytest.approx(float(np.quantile(data, 0.1)), abs=3.0)
    assert qs[0.9] == pytest.approx(float(np.quantile(data, 0.9)), abs=3.0)
    assert hist.percentile(0.0) == pytest.approx(hist.minimum)
    assert hist.cdf(50.0) == pytest.approx(float(np.mean(data <= 50.0)), abs=0.03)
    assert hist.cdf(-1.0) == 0.0
    assert hist.cdf(1000.0) == 1.0


def test_histogram_single_value() -> None:
    hist = Histogram().insert(5)
    assert hist.median == 5.0
    assert hist.percentile(0.9) == 5.0
    assert hist.variance == 0.0


def test_histogram_empty() -> None:
    hist = Histogram()
    assert hist.mean is None and hist.variance is None
    assert hist.median is None
    assert hist.cdf(0.0) is None
    with pytest.raises(ParamValidationError):
        hist.percentile(1.5)


# ------------------------------------------------------------------ Categorical
def test_categorical_histogram_counts() -> None:
    hist = transduce(histogram_categorical(), ["a", "b", "a", None])
    assert isinstance(hist, CategoricalHistogram)
    assert hist.bins() == {"a": 2, "b": 1}
    assert hist.count == 3
    assert hist.missing_count == 1
    assert hist.total_count == 4


# ------------------------------------------------------------------ HyperLogLog
def test_precision_for_error() -> None:
    assert precision_for_error(0.01) == 14
    assert precision_for_error(0.05) == 9
    with pytest.raises(ParamValidationError):
        precision_for_error(0.0)


def test_hash64_is_stable() -> None:
    assert hash64("abc") == hash64("abc")
    assert hash64("abc") != hash64("abd")
    assert 0 <= hash64(12345) < 2 ** 64


def test_cardinality_within_error_bound() -> None:
    n = 10000
    estimate = transduce(cardinality(0.01), range(n))
    assert abs(estimate - n) / n < 0.025


def test_cardinality_small_range_and_duplicates() -> None:
    assert transduce(cardinality(), ["a", "b", "a", "c", None]) == 3
    assert transduce(cardinality(), []) == 0


def test_hyperloglog_merge() -> None:
    left = HyperLogLog(0.02)
    right = HyperLogLog(0.02)
    for i in range(3000):
        left.insert(i)
    for i in range(2000, 5000):
        right.insert(i)
    merged = left.merge(right)
    assert abs(merged.estimate() - 5000) / 5000 < 0.06
    with pytest.raises(ParamValidationError):
        left.merge(HyperLogLog(0.02, seed=1))


def test_cardinality_raw_estimator_regime() -> None:
    # 超过 5m 的基数走原始 HyperLogLog 估计而非线性计数
    n = 100000
    estimate = transduce(cardinality(0.01), range(n))
    assert abs(estimate - n) / n < 0.03
