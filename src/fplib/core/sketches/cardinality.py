"""
HyperLogLog distinct-count sketch.

Responsibilities
  - Size the register array from a target relative error.
  - Insert hashed values, merge compatible sketches, and estimate the number
    of distinct values with the small-range (linear counting) correction.

Usage Context
  - Cardinality statistics of numeric and categorical fingerprints; wrapped
    as a Reducer by ``cardinality()``.

Limitations
  - Write-only: individual values cannot be queried or removed.
  - Requires ``xxhash`` (preferred) or ``mmh3`` for 64-bit hashing.
"""
# 说明：HyperLogLog 基数估计草图，按目标相对误差确定寄存器个数。
# 职责：
# - 通过 64 位哈希将取值映射到寄存器并记录前导零位置的最大值
# - merge：寄存器逐位取最大值，满足结合律与交换律
# - estimate：原始调和平均估计，小基数区间使用线性计数修正
# 约定：
# - 误差 0.01 对应 p = ceil(log2((1.04 / 0.01)^2)) = 14，即 16384 个寄存器
# - 缺失值（None）不计入基数

from __future__ import annotations

import math
from typing import Any

import numpy as np

from fplib.core.reducers.base import FunctionReducer, Reducer
from fplib.core.utils.param_validation import ParamValidationError, ensure

try:
    import xxhash
except Exception:  # pragma: no cover - optional dependency
    # xxhash 缺失时回退到 mmh3
    xxhash = None  # type: ignore

try:
    import mmh3
except Exception:  # pragma: no cover - optional dependency
    mmh3 = None  # type: ignore

DEFAULT_ERROR = 0.01
_MIN_PRECISION = 4
_MAX_PRECISION = 18


def hash64(value: Any, seed: int = 0) -> int:
    """64-bit hash of ``str(value)`` using xxhash (preferred) or mmh3."""
    payload = value if isinstance(value, bytes) else str(value).encode("utf-8")
    if xxhash is not None:
        return xxhash.xxh64(payload, seed=seed).intdigest()
    if mmh3 is not None:
        return mmh3.hash64(payload, seed=seed, signed=False)[0]
    raise ImportError("xxhash or mmh3 is required for hashing")


def precision_for_error(error: float) -> int:
    # 标准误差约为 1.04 / sqrt(m)，反解得到寄存器位数
    ensure(0.0 < error < 1.0, "cardinality error must lie in (0, 1)")
    bits = math.ceil(math.log2((1.04 / error) ** 2))
    return min(max(bits, _MIN_PRECISION), _MAX_PRECISION)


class HyperLogLog:
    """
    Probabilistic distinct counter.

    - Configuration
      - error: Target relative standard error (default 0.01).
      - seed: Hash seed; sketches only merge when seeds and sizes match.

    - Behavior
      - ``insert`` is O(1); ``estimate`` is O(m).
    """

    def __init__(self, error: float = DEFAULT_ERROR, seed: int = 0):
        self.error = float(error)
        self.seed = int(seed)
        self.precision = precision_for_error(self.error)
        self.num_registers = 1 << self.precision
        self.registers = np.zeros(self.num_registers, dtype=np.uint8)

    def insert(self, value: Any) -> "HyperLogLog":
        if value is None:
            return self
        h = hash64(value, self.seed)
        tail_bits = 64 - self.precision
        idx = h >> tail_bits
        tail = h & ((1 << tail_bits) - 1)
        rank = tail_bits - tail.bit_length() + 1
        if rank > self.registers[idx]:
            self.registers[idx] = rank
        return self

    def merge(self, other: "HyperLogLog") -> "HyperLogLog":
        """Return a new sketch holding the union of both inputs."""
        if other.precision != self.precision or other.seed != self.seed:
            raise ParamValidationError("cannot merge HyperLogLog sketches with different precision or seed")
        merged = HyperLogLog(self.error, self.seed)
        merged.registers = np.maximum(self.registers, other.registers)
        return merged

    def _alpha(self) -> float:
        m = self.num_registers
        if m == 16:
            return 0.673
        if m == 32:
            return 0.697
        if m == 64:
            return 0.709
        return 0.7213 / (1.0 + 1.079 / m)

    def estimate(self) -> int:
        m = float(self.num_registers)
        raw = self._alpha() * m * m / float(np.sum(np.power(2.0, -self.registers.astype(np.float64))))
        zeros = int(np.count_nonzero(self.registers == 0))
        if raw <= 2.5 * m and zeros:
            # 小基数区间：线性计数修正
            raw = m * math.log(m / zeros)
        return int(round(raw))

    def __repr__(self) -> str:
        return f"HyperLogLog(precision={self.precision}, error={self.error})"


def _insert(state: HyperLogLog, value: Any) -> HyperLogLog:
    return state.insert(value)


def cardinality(error: float = DEFAULT_ERROR) -> Reducer:
    """Reducer estimating the distinct count of its input."""
    return FunctionReducer(lambda: HyperLogLog(error), _insert, lambda s: s.estimate(), name="cardinality")
