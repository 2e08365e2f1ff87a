"""
Reusable validation helpers.
"""
# 说明：参数验证相关的辅助函数，用于在库内部统一进行轻量级参数检查。
# 职责：
# - ParamValidationError：专门用于参数校验失败的异常类型
# - ensure：基于布尔条件触发参数校验错误的轻量断言工具
# - ensure_type：检查参数是否属于指定类型集合，并在失败时给出带 label 的错误提示
# - ensure_choice：将字符串或枚举值规范化为指定枚举成员

from __future__ import annotations

import enum
from typing import Any, Tuple, Type, TypeVar

E = TypeVar("E", bound=enum.Enum)


class ParamValidationError(ValueError):
    """Raised when parameter validation fails."""


def ensure(condition: bool, message: str, *, error: Type[Exception] = ParamValidationError) -> None:
    if not condition:
        raise error(message)


def ensure_type(value: Any, expected: Tuple[type, ...], *, label: str = "value") -> None:
    # 检查 value 是否为 expected 集合中的任意类型，否则抛出带字段标签的 ParamValidationError
    if not isinstance(value, expected):
        names = ", ".join(t.__name__ for t in expected)
        raise ParamValidationError(f"{label} must be instance of {names}")


def ensure_choice(value: Any, choices: Type[E], *, label: str = "value") -> E:
    """Coerce a string (optionally ``:``-prefixed) or enum member into ``choices``."""
    # 接受枚举成员或大小写不敏感的字符串（兼容 ":month" 这类关键字写法）
    if isinstance(value, choices):
        return value
    if isinstance(value, str):
        name = value.strip().lstrip(":").lower()
        for member in choices:
            if member.value == name:
                return member
    allowed = ", ".join(member.value for member in choices)
    raise ParamValidationError(f"{label} must be one of {allowed}, got {value!r}")
