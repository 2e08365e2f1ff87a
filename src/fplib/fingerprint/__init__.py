"""Type-dispatched fingerprint pipelines, cost policy and engine."""

from __future__ import annotations

from .cost_policy import (
    allow_joins,
    cache_only,
    extract_query_opts,
    full_scan,
    linear_computation,
    sample_only,
    unbounded_computation,
    yolo_computation,
)
from .engine import (
    ColumnSpec,
    DataSource,
    FieldRef,
    MetricRef,
    QueryResult,
    build_query,
    compare_fingerprints,
    fingerprint,
    fingerprint_card,
    fingerprint_field,
    fingerprint_rows,
    fingerprint_segment,
    fingerprint_table,
    fingerprint_values,
    multifield_fingerprint,
)
from .options import Computation, FingerprintOptions, MaxCost, QueryCost, Scale
from .registry import (
    PIPELINE_REGISTRY,
    PRECEDENCE,
    build_pipeline,
    registered_pipelines_snapshot,
    resolve_category,
)
from .timeseries import decompose_timeseries, fill_timeseries

__all__ = [
    "ColumnSpec",
    "Computation",
    "DataSource",
    "FieldRef",
    "FingerprintOptions",
    "MaxCost",
    "MetricRef",
    "PIPELINE_REGISTRY",
    "PRECEDENCE",
    "QueryCost",
    "QueryResult",
    "Scale",
    "allow_joins",
    "build_pipeline",
    "build_query",
    "cache_only",
    "compare_fingerprints",
    "decompose_timeseries",
    "extract_query_opts",
    "fill_timeseries",
    "fingerprint",
    "fingerprint_card",
    "fingerprint_field",
    "fingerprint_rows",
    "fingerprint_segment",
    "fingerprint_table",
    "fingerprint_values",
    "full_scan",
    "linear_computation",
    "multifield_fingerprint",
    "registered_pipelines_snapshot",
    "resolve_category",
    "sample_only",
    "unbounded_computation",
    "yolo_computation",
]
