"""
Combinators that build new reducers from existing ones.

Responsibilities
  - ``fuse``: run several reducers over the same input in lockstep.
  - ``pre_step`` / ``post_complete``: map the input or the result.
  - ``with_filter``: step only the inputs that pass a predicate.
  - ``rollup``: partition inputs by key and reduce each partition.

Usage Context
  - Used to compute many statistics, or many columns, in one pass.

Limitations
  - Order independence only holds when every fused reducer is commutative.
"""
# 说明：归约器组合子，通过组合已有 reducer 在一次遍历内完成多项统计。
# 职责：
# - Fuse：并行乘积，状态为各子状态组成的字典，结果为按名称组织的字典
# - PreStep / PostComplete：分别对输入与最终结果做映射（逆变 / 协变）
# - Filtered：按谓词过滤输入，例如去除缺失值
# - Rollup：按 key 分组，首次见到某个 key 时才惰性创建该组的状态
# 约定：
# - 组合子不持有折叠状态，可安全地在多次折叠之间复用

from __future__ import annotations

from typing import Any, Callable, Dict, Hashable, Mapping

from .base import Reducer


class Fuse(Reducer[Dict[str, Any], Dict[str, Any]]):
    """Product reducer: every component sees every input."""

    def __init__(self, reducers: Mapping[str, Reducer]):
        self.reducers = dict(reducers)

    def init(self) -> Dict[str, Any]:
        return {name: reducer.init() for name, reducer in self.reducers.items()}

    def step(self, state: Dict[str, Any], value: Any) -> Dict[str, Any]:
        for name, reducer in self.reducers.items():
            state[name] = reducer.step(state[name], value)
        return state

    def complete(self, state: Dict[str, Any]) -> Dict[str, Any]:
        return {name: reducer.complete(state[name]) for name, reducer in self.reducers.items()}


class PreStep(Reducer[Any, Any]):
    """Transform each input with ``fn`` before delegating."""

    def __init__(self, reducer: Reducer, fn: Callable[[Any], Any]):
        self.reducer = reducer
        self.fn = fn

    def init(self) -> Any:
        return self.reducer.init()

    def step(self, state: Any, value: Any) -> Any:
        return self.reducer.step(state, self.fn(value))

    def complete(self, state: Any) -> Any:
        return self.reducer.complete(state)


class PostComplete(Reducer[Any, Any]):
    """Transform the completed result with ``fn``."""

    def __init__(self, reducer: Reducer, fn: Callable[[Any], Any]):
        self.reducer = reducer
        self.fn = fn

    def init(self) -> Any:
        return self.reducer.init()

    def step(self, state: Any, value: Any) -> Any:
        return self.reducer.step(state, value)

    def complete(self, state: Any) -> Any:
        return self.fn(self.reducer.complete(state))


class Filtered(Reducer[Any, Any]):
    """Step only inputs for which ``predicate`` holds."""

    def __init__(self, reducer: Reducer, predicate: Callable[[Any], bool]):
        self.reducer = reducer
        self.predicate = predicate

    def init(self) -> Any:
        return self.reducer.init()

    def step(self, state: Any, value: Any) -> Any:
        if self.predicate(value):
            return self.reducer.step(state, value)
        return state

    def complete(self, state: Any) -> Any:
        return self.reducer.complete(state)


class Rollup(Reducer[Dict[Hashable, Any], Dict[Hashable, Any]]):
    """
    Group inputs by ``key_fn`` and reduce each group independently.

    Per-key states are created from ``reducer.init()`` the first time a key
    is seen, so groups never share a state.
    """

    def __init__(self, reducer: Reducer, key_fn: Callable[[Any], Hashable]):
        self.reducer = reducer
        self.key_fn = key_fn

    def init(self) -> Dict[Hashable, Any]:
        return {}

    def step(self, state: Dict[Hashable, Any], value: Any) -> Dict[Hashable, Any]:
        key = self.key_fn(value)
        if key not in state:
            # 惰性创建：首次出现的分组才分配独立状态
            state[key] = self.reducer.init()
        state[key] = self.reducer.step(state[key], value)
        return state

    def complete(self, state: Dict[Hashable, Any]) -> Dict[Hashable, Any]:
        return {key: self.reducer.complete(group) for key, group in state.items()}


def fuse(reducers: Mapping[str, Reducer]) -> Fuse:
    return Fuse(reducers)


def pre_step(reducer: Reducer, fn: Callable[[Any], Any]) -> PreStep:
    return PreStep(reducer, fn)


def post_complete(reducer: Reducer, fn: Callable[[Any], Any]) -> PostComplete:
    return PostComplete(reducer, fn)


def with_filter(reducer: Reducer, predicate: Callable[[Any], bool]) -> Filtered:
    return Filtered(reducer, predicate)


def remove_nil(reducer: Reducer) -> Filtered:
    """Shorthand for ``with_filter(reducer, lambda x: x is not None)``."""
    return Filtered(reducer, lambda value: value is not None)


def rollup(reducer: Reducer, key_fn: Callable[[Any], Hashable]) -> Rollup:
    return Rollup(reducer, key_fn)
