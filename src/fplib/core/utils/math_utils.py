"""
Numerical utilities shared across the library.

Responsibilities
  - Provide closed-form information measures over discrete distributions
    (Shannon entropy, Kullback-Leibler and Jensen-Shannon divergence).
  - Provide the "undefined instead of error" arithmetic used by derived
    fingerprint ratios (safe division, period-over-period growth).
  - Expose the Euclidean norm used by fingerprint distances.

Usage Context
  - Use when deriving fingerprint statistics from finalized sketches or when
    comparing two fingerprints.

Limitations
  - Inputs are assumed to be probability vectors already aligned on the same
    support; no renormalization is performed.
"""
# 说明：库内共享的数值工具函数集合，集中实现信息论度量与“除零返回 None”的安全运算。
# 职责：
# - entropy / kl_divergence / jensen_shannon_divergence：离散分布上的闭式计算
# - safe_divide / growth：派生比率与环比/同比增长，分母为零时返回 None 而不是抛错
# - magnitude：特征差异向量的欧氏范数
# 约定：
# - 0 * ln(0) 按 0 处理
# - Jensen-Shannon 中的 m 为 p + q 的逐元素和（不做 0.5 平均），与既有下游行为保持一致

from __future__ import annotations

import math
from typing import Iterable, Optional, Sequence, Union

import numpy as np

ArrayLike = Union[Sequence[float], np.ndarray]
Number = Union[int, float]


def _as_array(values: Union[ArrayLike, Iterable[float]]) -> np.ndarray:
    if isinstance(values, np.ndarray):
        return values.astype(np.float64)
    return np.asarray(list(values), dtype=np.float64)


def entropy(probabilities: Union[ArrayLike, Iterable[float]]) -> float:
    """Shannon entropy (natural log) of a discrete distribution."""
    p = _as_array(probabilities)
    nonzero = p[p > 0]
    return float(-np.sum(nonzero * np.log(nonzero)))


def kl_divergence(p: Union[ArrayLike, Iterable[float]], q: Union[ArrayLike, Iterable[float]]) -> float:
    """
    Kullback-Leibler divergence D(p || q) of two aligned distributions.

    Terms with ``p_i == 0`` contribute 0. A zero ``q_i`` under a non-zero
    ``p_i`` yields ``inf``: aligning both supports is the caller's job.
    """
    p_arr = _as_array(p)
    q_arr = _as_array(q)
    if p_arr.shape != q_arr.shape:
        raise ValueError("kl_divergence requires distributions of equal length")
    mask = p_arr > 0
    with np.errstate(divide="ignore", invalid="ignore"):
        terms = p_arr[mask] * np.log(p_arr[mask] / q_arr[mask])
    return float(np.sum(terms))


def jensen_shannon_divergence(p: Union[ArrayLike, Iterable[float]], q: Union[ArrayLike, Iterable[float]]) -> float:
    """
    Square root of the Jensen-Shannon divergence of ``p`` and ``q``.

    The mixture is ``m = p + q`` (elementwise, not halved). With that mixture
    both KL terms are non-positive for probability vectors, so the radicand
    is clamped at 0 before taking the square root.
    """
    # m 不做 0.5 缩放：D(p||m) <= 0 恒成立，开方前截断到 0，结果恒为 0
    p_arr = _as_array(p)
    q_arr = _as_array(q)
    m = p_arr + q_arr
    radicand = 0.5 * kl_divergence(p_arr, m) + 0.5 * kl_divergence(q_arr, m)
    return math.sqrt(max(radicand, 0.0))


def safe_divide(numerator: Optional[Number], *denominators: Optional[Number]) -> Optional[float]:
    """Divide like ``numerator / d1 / d2 ...`` but return None on a zero denominator.

    With no denominators returns the reciprocal of ``numerator`` (None if it is 0).
    """
    if numerator is None or any(d is None for d in denominators):
        return None
    if not denominators:
        return None if numerator == 0 else 1.0 / numerator
    if any(d == 0 for d in denominators):
        return None
    result = float(numerator)
    for d in denominators:
        result /= d
    return result


def growth(x2: Optional[Number], x1: Optional[Number]) -> Optional[float]:
    """Relative difference of ``x2`` against the baseline ``x1``.

    The sign is flipped for negative baselines so that moving up is positive.
    """
    if x2 is None or x1 is None:
        return None
    sign = -1 if x1 < 0 else 1
    return safe_divide(sign * (x2 - x1), x1)


def magnitude(values: Union[ArrayLike, Iterable[float]]) -> float:
    """Euclidean norm of ``values``."""
    arr = _as_array(values)
    return float(np.sqrt(np.sum(arr * arr)))
