"""
Cost policy gate.

Pure predicates over a ``MaxCost`` ceiling. They decide which expensive
sub-computations run (seasonal decomposition needs unbounded computation)
and translate the query ceiling into a row-limit hint for the data source.
"""
# 说明：成本策略闸门，纯函数谓词集合。
# 职责：
# - linear / unbounded / yolo：计算复杂度上限判断（unbounded 包含 yolo）
# - cache_only / sample_only / full_scan / allow_joins：查询形态上限判断（full_scan 包含 joins）
# - extract_query_opts：采样模式下向外部数据源传递行数上限

from __future__ import annotations

from typing import Any, Dict

from .options import Computation, FingerprintOptions, MaxCost, QueryCost


def linear_computation(max_cost: MaxCost) -> bool:
    return max_cost.computation is Computation.LINEAR


def unbounded_computation(max_cost: MaxCost) -> bool:
    return max_cost.computation in (Computation.UNBOUNDED, Computation.YOLO)


def yolo_computation(max_cost: MaxCost) -> bool:
    return max_cost.computation is Computation.YOLO


def cache_only(max_cost: MaxCost) -> bool:
    return max_cost.query is QueryCost.CACHE


def sample_only(max_cost: MaxCost) -> bool:
    return max_cost.query is QueryCost.SAMPLE


def full_scan(max_cost: MaxCost) -> bool:
    return max_cost.query in (QueryCost.FULL_SCAN, QueryCost.JOINS)


def allow_joins(max_cost: MaxCost) -> bool:
    return max_cost.query is QueryCost.JOINS


def extract_query_opts(options: FingerprintOptions) -> Dict[str, Any]:
    """Query hints for the data source derived from the cost ceiling."""
    opts: Dict[str, Any] = {}
    if sample_only(options.max_cost):
        opts["limit"] = options.max_sample_size
    return opts
