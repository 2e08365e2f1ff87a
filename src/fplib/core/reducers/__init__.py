"""Reducer contract, combinators and streaming statistics."""

from __future__ import annotations

from .base import FunctionReducer, Reducer, transduce
from .combinators import (
    Filtered,
    Fuse,
    PostComplete,
    PreStep,
    Rollup,
    fuse,
    post_complete,
    pre_step,
    remove_nil,
    rollup,
    with_filter,
)
from .stats import (
    first,
    second,
    RunningCoMoments,
    RunningMoments,
    collect,
    correlation,
    count,
    covariance,
    kurtosis,
    nil_count,
    simple_linear_regression,
    skewness,
    sum_of_squares,
    total,
)

__all__ = [
    "Filtered",
    "FunctionReducer",
    "Fuse",
    "PostComplete",
    "PreStep",
    "Reducer",
    "Rollup",
    "RunningCoMoments",
    "RunningMoments",
    "collect",
    "correlation",
    "count",
    "covariance",
    "first",
    "fuse",
    "kurtosis",
    "nil_count",
    "post_complete",
    "pre_step",
    "remove_nil",
    "rollup",
    "second",
    "simple_linear_regression",
    "skewness",
    "sum_of_squares",
    "total",
    "transduce",
    "with_filter",
]
