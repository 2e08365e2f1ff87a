"""
Property-based tests for fingerprint comparison.
"""
# 说明：差异与距离函数的属性测试。
# 覆盖：
# - 数值与布尔值的自差异为 0；直方图的自差异恒为 1
# - 差异对称且落在 [0, 1]
# - 差异全为 0 的向量距离为 0，距离落在 [0, 1]

import pytest
from hypothesis import given, strategies as st

from fplib.compare import difference, distance

finite_floats = st.floats(min_value=-1e9, max_value=1e9, allow_nan=False, allow_infinity=False)
features = st.one_of(st.none(), st.booleans(), finite_floats)
pmfs = st.dictionaries(st.sampled_from("abcdef"), st.floats(min_value=0.01, max_value=1.0), min_size=1).map(
    lambda d: {k: v / sum(d.values()) for k, v in d.items()}
)


@given(finite_floats)
def test_number_self_difference_is_zero(x):
    assert difference(x, x) == 0.0


@given(st.booleans())
def test_boolean_self_difference_is_zero(b):
    assert difference(b, b) == 0.0


@given(pmfs)
def test_histogram_self_difference_is_one(p):
    assert difference(p, p) == 1.0


@given(finite_floats, finite_floats)
def test_number_difference_symmetric_and_bounded(a, b):
    d = difference(a, b)
    assert 0.0 <= d <= 1.0
    assert d == pytest.approx(difference(b, a))


@given(st.lists(features, max_size=20))
def test_distance_of_vector_with_itself_is_zero(v):
    assert distance(v, v) == 0.0


@given(st.lists(st.tuples(finite_floats, finite_floats), max_size=20))
def test_distance_bounded(pairs):
    a = [x for x, _ in pairs]
    b = [y for _, y in pairs]
    assert 0.0 <= distance(a, b) <= 1.0 + 1e-12
