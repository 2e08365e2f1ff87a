"""
Toy data generation helpers for examples.
"""
from datetime import datetime, timedelta, timezone
from typing import Any, List, Optional, Tuple

import numpy as np

from fplib.fingerprint import ColumnSpec
from fplib.types import CATEGORY_TAG, DATETIME_TAG, NUMBER_TAG, TEXT_TAG

ORDER_COLUMNS = [
    ColumnSpec("created_at", DATETIME_TAG),
    ColumnSpec("total", NUMBER_TAG),
    ColumnSpec("status", CATEGORY_TAG),
    ColumnSpec("note", TEXT_TAG),
]

def make_rng(seed: Optional[int]) -> np.random.Generator:
    """Create a fresh numpy Generator from a seed."""
    if seed is None:
        return np.random.default_rng()
    return np.random.default_rng(seed)

def build_orders_dataset(
    n_rows: int,
    start: datetime = datetime(2015, 1, 1, tzinfo=timezone.utc),
    days: int = 3 * 365,
    nil_rate: float = 0.05,
    rng: Optional[np.random.Generator] = None,
) -> List[Tuple[Any, ...]]:
    """
    Generate order rows matching ``ORDER_COLUMNS``.

    Order totals follow a yearly cycle on top of a slow upward trend, so
    monthly sums carry a visible seasonal component.

    Args:
        n_rows: Number of rows.
        start: Timestamp of the earliest possible order.
        days: Width of the time window in days.
        nil_rate: Probability that a total or a status is missing.
        rng: Random number generator.

    Returns:
        List of ``(created_at, total, status, note)`` tuples.
    """
    if rng is None:
        rng = np.random.default_rng()

    offsets = np.sort(rng.uniform(0, days, size=n_rows))
    statuses = rng.choice(["paid", "pending", "refunded"], size=n_rows, p=[0.8, 0.15, 0.05])
    notes = ["", "gift", "leave at door", "call before delivery"]
    rows = []
    for offset, status in zip(offsets, statuses):
        created_at = start + timedelta(days=float(offset))
        season = 1.0 + 0.5 * np.sin(2 * np.pi * created_at.month / 12)
        total = float(rng.gamma(2.0, 20.0) * season * (1.0 + offset / days))
        rows.append((
            created_at.isoformat(),
            None if rng.random() < nil_rate else round(total, 2),
            None if rng.random() < nil_rate else str(status),
            notes[int(rng.integers(len(notes)))],
        ))
    return rows

def monthly_totals(rows: List[Tuple[Any, ...]]) -> List[Tuple[str, float]]:
    """Sum ``total`` per calendar month, keyed by the first day of the month."""
    buckets = {}
    for created_at, total, *_ in rows:
        month = created_at[:7] + "-01"
        buckets[month] = buckets.get(month, 0.0) + (total or 0.0)
    return sorted(buckets.items())
