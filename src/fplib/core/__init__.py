"""Entry point for the core library components: reducers, sketches and utilities."""

from __future__ import annotations

from .reducers import (
    Reducer,
    fuse,
    post_complete,
    pre_step,
    remove_nil,
    rollup,
    transduce,
    with_filter,
)
from .sketches import CategoricalHistogram, Histogram, HyperLogLog
from .utils import (
    ParamValidationError,
    RuntimeConfig,
    configure,
    get_config,
    get_logger,
)

__all__ = [
    "CategoricalHistogram",
    "Histogram",
    "HyperLogLog",
    "ParamValidationError",
    "Reducer",
    "RuntimeConfig",
    "configure",
    "fuse",
    "get_config",
    "get_logger",
    "post_complete",
    "pre_step",
    "remove_nil",
    "rollup",
    "transduce",
    "with_filter",
]
