"""
Unit tests for the reducer contract and its combinators.
"""
# 说明：归约器基础抽象、组合子与流式统计量的单元测试。
# 覆盖：
# - FunctionReducer / transduce：init/step/complete 三段式折叠
# - fuse / pre_step / post_complete / with_filter / remove_nil / rollup
# - count / nil_count / total / sum_of_squares / collect
# - 偏度、峰度、协方差、相关系数与一元线性回归

import numpy as np
import pytest

from fplib.core.reducers import (
    FunctionReducer,
    collect,
    correlation,
    count,
    covariance,
    fuse,
    kurtosis,
    nil_count,
    post_complete,
    pre_step,
    remove_nil,
    rollup,
    simple_linear_regression,
    skewness,
    sum_of_squares,
    total,
    transduce,
    with_filter,
)


def test_function_reducer_fold() -> None:
    reducer = FunctionReducer(lambda: 0, lambda acc, x: acc + x, lambda acc: acc * 10)
    assert transduce(reducer, [1, 2, 3]) == 60
    assert reducer.reduce([]) == 0


def test_fuse_runs_reducers_in_lockstep() -> None:
    result = transduce(fuse({"n": count(), "sum": total()}), [1, 2, 3, None])
    assert result == {"n": 4, "sum": 6}


def test_pre_step_and_post_complete() -> None:
    reducer = post_complete(pre_step(total(), lambda x: x * 2), lambda s: s + 1)
    assert transduce(reducer, [1, 2]) == 7


def test_filters() -> None:
    evens = with_filter(count(), lambda x: x % 2 == 0)
    assert transduce(evens, range(10)) == 5
    assert transduce(remove_nil(count()), [1, None, 2]) == 2
    assert transduce(nil_count(), [1, None, None]) == 2


def test_rollup_groups_independently() -> None:
    reducer = rollup(pre_step(total(), lambda pair: pair[1]), lambda pair: pair[0])
    rows = [("a", 1), ("b", 10), ("a", 2), ("b", 20), ("c", None)]
    assert transduce(reducer, rows) == {"a": 3, "b": 30, "c": 0}


def test_rollup_states_are_not_shared() -> None:
    # 每个分组的状态都由 init() 独立创建，列表累积器不会串组
    reducer = rollup(collect(), lambda x: x % 2)
    assert transduce(reducer, [1, 2, 3, 4]) == {1: [1, 3], 0: [2, 4]}


def test_collect_preserves_order_and_reducer_is_reusable() -> None:
    reducer = collect()
    assert transduce(reducer, [3, 1, 2]) == [3, 1, 2]
    assert transduce(reducer, [5]) == [5]


def test_sum_of_squares_skips_nil() -> None:
    assert transduce(sum_of_squares(), [1, 2, None, 3]) == 14


def test_skewness_and_kurtosis_match_sample_estimators() -> None:
    data = [1.0, 2.0, 2.0, 3.0, 7.0, 11.0]
    x = np.asarray(data)
    n = len(x)
    d = x - x.mean()
    m2, m3, m4 = (d ** 2).mean(), (d ** 3).mean(), (d ** 4).mean()
    g1 = m3 / m2 ** 1.5
    g2 = m4 / m2 ** 2 - 3.0
    expected_skew = g1 * np.sqrt(n * (n - 1)) / (n - 2)
    expected_kurt = ((n + 1) * g2 + 6.0) * (n - 1) / ((n - 2) * (n - 3))
    assert transduce(skewness(), data + [None]) == pytest.approx(expected_skew)
    assert transduce(kurtosis(), data) == pytest.approx(expected_kurt)


def test_moments_undefined_for_small_or_constant_input() -> None:
    assert transduce(skewness(), [1.0, 2.0]) is None
    assert transduce(kurtosis(), [1.0, 2.0, 3.0]) is None
    assert transduce(skewness(), [4.0] * 10) is None


def test_bivariate_statistics() -> None:
    pairs = [(1, 3), (2, 5), (3, 7), (4, 9), (None, 1), (5, None)]
    assert transduce(correlation(), pairs) == pytest.approx(1.0)
    assert transduce(covariance(), pairs) == pytest.approx(np.cov([1, 2, 3, 4], [3, 5, 7, 9])[0, 1])
    regression = transduce(simple_linear_regression(), pairs)
    assert regression["slope"] == pytest.approx(2.0)
    assert regression["intercept"] == pytest.approx(1.0)


def test_bivariate_undefined_cases() -> None:
    assert transduce(covariance(), [(1, 1)]) is None
    assert transduce(correlation(), [(1, 1), (1, 2)]) is None
    assert transduce(simple_linear_regression(), [(1, 1), (1, 2)]) is None
