"""
Base abstractions for single-pass streaming reducers.

Responsibilities
  - Define the reducer contract: ``init`` a fresh state, ``step`` it with one
    input, ``complete`` it into a result.
  - Provide a function-backed reducer for small ad-hoc accumulators.
  - Provide ``transduce`` to fold an iterable through a reducer.

Usage Context
  - Every sketch, statistic and fingerprint pipeline in the library is a
    Reducer; combinators in ``combinators`` build larger reducers from
    smaller ones.

Limitations
  - Reducers describe a fold, they hold no per-fold data themselves. A state
    returned by ``init`` belongs to exactly one fold and must not be shared.
"""
# 说明：单遍流式归约器（reducer）的基础抽象，所有草图、统计量与指纹流水线都遵循该契约。
# 职责：
# - Reducer：定义 init/step/complete 三段式接口
# - FunctionReducer：以三个可调用对象快速构造简单归约器
# - transduce：对可迭代数据执行一次完整折叠并返回最终结果
# 约定：
# - reducer 本身无状态，状态由 init() 产生并只属于一次折叠
# - step 可以原地修改状态，但必须返回（可能是同一个）状态对象

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable, Generic, Iterable, Optional, TypeVar

S = TypeVar("S")
R = TypeVar("R")


class Reducer(ABC, Generic[S, R]):
    """
    Abstract single-pass accumulator.

    - Behavior
      - ``init()`` returns a fresh state.
      - ``step(state, x)`` folds one input and returns the new state.
      - ``complete(state)`` derives the final result.

    - Usage Notes
      - Combine reducers with ``fuse``, ``pre_step``, ``post_complete``,
        ``with_filter`` and ``rollup`` instead of scanning data twice.
    """

    @abstractmethod
    def init(self) -> S:
        raise NotImplementedError

    @abstractmethod
    def step(self, state: S, value: Any) -> S:
        raise NotImplementedError

    def complete(self, state: S) -> R:
        # 默认直接返回状态本身，子类按需派生结果
        return state  # type: ignore[return-value]

    def reduce(self, values: Iterable[Any]) -> R:
        """Fold ``values`` and return the completed result."""
        return transduce(self, values)


class FunctionReducer(Reducer[Any, Any]):
    """Reducer assembled from plain callables."""

    def __init__(
        self,
        init: Callable[[], Any],
        step: Callable[[Any, Any], Any],
        complete: Optional[Callable[[Any], Any]] = None,
        *,
        name: Optional[str] = None,
    ):
        self._init = init
        self._step = step
        self._complete = complete
        self.name = name or getattr(step, "__name__", "reducer")

    def init(self) -> Any:
        return self._init()

    def step(self, state: Any, value: Any) -> Any:
        return self._step(state, value)

    def complete(self, state: Any) -> Any:
        if self._complete is None:
            return state
        return self._complete(state)

    def __repr__(self) -> str:
        return f"FunctionReducer({self.name})"


def transduce(reducer: Reducer[Any, R], values: Iterable[Any]) -> R:
    """Run one fold of ``reducer`` over ``values``."""
    state = reducer.init()
    for value in values:
        state = reducer.step(state, value)
    return reducer.complete(state)
