"""Bounded-memory sketches and their reducer wrappers."""

from __future__ import annotations

from .cardinality import HyperLogLog, cardinality, hash64, precision_for_error
from .categorical import CategoricalHistogram, histogram_categorical
from .histogram import DEFAULT_MAX_BINS, Histogram, histogram

__all__ = [
    "CategoricalHistogram",
    "DEFAULT_MAX_BINS",
    "Histogram",
    "HyperLogLog",
    "cardinality",
    "hash64",
    "histogram",
    "histogram_categorical",
    "precision_for_error",
]
