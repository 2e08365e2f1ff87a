"""
Property-based tests for reducers and sketches.
"""
# 说明：归约器组合子与基数草图的属性测试。
# 覆盖：
# - fuse 与分别折叠的结果一致
# - 交换律成立的草图对输入顺序不敏感
# - HyperLogLog 在大基数下的相对误差界

import pytest
from hypothesis import given, settings, strategies as st

from fplib.core.reducers import count, fuse, nil_count, sum_of_squares, total, transduce
from fplib.core.sketches import cardinality, histogram

ints = st.one_of(st.none(), st.integers(min_value=-1000, max_value=1000))


@given(st.lists(ints, max_size=100))
def test_fuse_matches_separate_folds(values):
    fused = transduce(fuse({"n": count(), "nil": nil_count(), "sum": total(), "sq": sum_of_squares()}), values)
    assert fused["n"] == transduce(count(), values)
    assert fused["nil"] == transduce(nil_count(), values)
    assert fused["sum"] == transduce(total(), values)
    assert fused["sq"] == transduce(sum_of_squares(), values)


@given(st.lists(ints, max_size=100), st.randoms(use_true_random=False))
def test_commutative_sketches_ignore_order(values, rnd):
    shuffled = list(values)
    rnd.shuffle(shuffled)
    assert transduce(cardinality(), values) == transduce(cardinality(), shuffled)
    a, b = transduce(histogram(), values), transduce(histogram(), shuffled)
    assert (a.count, a.missing_count, a.minimum, a.maximum) == (b.count, b.missing_count, b.minimum, b.maximum)
    if a.count:
        assert a.mean == pytest.approx(b.mean)


@settings(max_examples=5)
@given(st.integers(min_value=1000, max_value=30000), st.integers(min_value=0, max_value=10 ** 6))
def test_cardinality_relative_error(n, offset):
    estimate = transduce(cardinality(0.01), range(offset, offset + n))
    assert abs(estimate - n) / n < 0.03
