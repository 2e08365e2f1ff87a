"""
fplib: streaming statistical fingerprints of tabular data.

Single-pass, bounded-memory summaries (histograms, cardinality estimates,
percentiles, entropy, regression, time-series decomposition) dispatched on
semantic column types, plus bounded difference functions for comparing two
fingerprints.
"""

from __future__ import annotations

from .compare import ComparisonError, comparison_vector, difference, distance, fingerprint_distance
from .core.utils import ParamValidationError, serialize_fingerprint, to_jsonable
from .fingerprint import (
    ColumnSpec,
    FingerprintOptions,
    MaxCost,
    Scale,
    build_pipeline,
    fingerprint_rows,
    fingerprint_values,
)
from .types import TypeCategory, TypeTag

__version__ = "0.1.0"

__all__ = [
    "ColumnSpec",
    "ComparisonError",
    "FingerprintOptions",
    "MaxCost",
    "ParamValidationError",
    "Scale",
    "TypeCategory",
    "TypeTag",
    "build_pipeline",
    "comparison_vector",
    "difference",
    "distance",
    "fingerprint_distance",
    "fingerprint_rows",
    "fingerprint_values",
    "serialize_fingerprint",
    "to_jsonable",
    "__version__",
]
