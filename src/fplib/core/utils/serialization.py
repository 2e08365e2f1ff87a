"""
Serialization helpers for fingerprints.

Fingerprints are plain mappings, but probability-mass-function keys may be
floats, datetimes or ``None`` and values may be enums, datetimes or numpy
scalars. These helpers coerce both sides into JSON-friendly structures at
the serialization boundary.
"""
# 说明：指纹序列化辅助工具，在序列化边界统一完成键与值的类型规整。
# 职责：
# - to_jsonable：递归地把 dict 键强制转为字符串，把枚举/时间/numpy 类型转换为基础类型
# - serialize_to_json / deserialize_from_json：带可选 version 包装的 JSON 编解码
# - 内部 _prepare：支持 dataclass 与实现了 to_dict 的对象

from __future__ import annotations

import enum
import json
from dataclasses import asdict, is_dataclass
from datetime import date, datetime
from typing import Any, Optional

import numpy as np


def _coerce_key(key: Any) -> str:
    # 非字符串键（数值分箱中心、时间戳、None 缺失桶）统一转为字符串
    if isinstance(key, str):
        return key
    if key is None:
        return "null"
    if isinstance(key, enum.Enum):
        return str(key.value)
    if isinstance(key, (datetime, date)):
        return key.isoformat()
    if isinstance(key, np.generic):
        return repr(key.item())
    if isinstance(key, tuple):
        return ",".join(_coerce_key(k) for k in key)
    return repr(key)


def _prepare(obj: Any) -> Any:
    if is_dataclass(obj) and not isinstance(obj, type):
        return asdict(obj)
    if hasattr(obj, "to_dict"):
        return obj.to_dict()
    return obj


def to_jsonable(obj: Any) -> Any:
    """Return a structure made only of JSON-native types."""
    obj = _prepare(obj)
    if isinstance(obj, dict):
        return {_coerce_key(k): to_jsonable(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [to_jsonable(v) for v in obj]
    if isinstance(obj, np.ndarray):
        return [to_jsonable(v) for v in obj.tolist()]
    if isinstance(obj, enum.Enum):
        return obj.value
    if isinstance(obj, (datetime, date)):
        return obj.isoformat()
    if isinstance(obj, np.generic):
        return obj.item()
    return obj


def serialize_to_json(obj: Any, *, version: Optional[str] = None) -> str:
    # 将对象序列化为 JSON 字符串，支持可选 version 包装
    payload = to_jsonable(obj)
    if version is not None:
        payload = {"version": version, "payload": payload}
    return json.dumps(payload, ensure_ascii=False)


def deserialize_from_json(text: str) -> Any:
    return json.loads(text)


def serialize_fingerprint(fingerprint: Any) -> str:
    """JSON text of a fingerprint (or a mapping of fingerprints)."""
    return serialize_to_json(fingerprint)
