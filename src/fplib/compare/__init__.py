"""Fingerprint comparison: feature differences, vectors and distances."""

from __future__ import annotations

from .difference import ComparisonError, difference, distance, pairwise_differences
from .vectors import COMPARISON_FIELDS, comparison_vector, fingerprint_distance, fingerprint_type

__all__ = [
    "COMPARISON_FIELDS",
    "ComparisonError",
    "comparison_vector",
    "difference",
    "distance",
    "fingerprint_distance",
    "fingerprint_type",
    "pairwise_differences",
]
