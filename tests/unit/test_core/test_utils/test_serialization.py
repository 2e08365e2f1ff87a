"""
Unit tests for serialization utilities.
"""
# 说明：指纹序列化工具的单元测试。
# 覆盖：
# - to_jsonable：非字符串键、枚举、时间与 numpy 类型的规整
# - serialize_to_json / deserialize_from_json：带可选 version 包装的 JSON 往返
# - serialize_fingerprint：真实指纹的序列化

import dataclasses
from datetime import datetime, timezone

import numpy as np

from fplib.core.utils import deserialize_from_json, serialize_fingerprint, serialize_to_json, to_jsonable
from fplib.fingerprint import FingerprintOptions, fingerprint_values
from fplib.types import DATETIME_TAG, TypeCategory, TypeTag


@dataclasses.dataclass
class Sample:
    a: int
    b: str


def test_to_jsonable_coerces_keys_and_values() -> None:
    stamp = datetime(2017, 1, 1, tzinfo=timezone.utc)
    payload = {
        1.5: np.float64(0.25),
        None: 2,
        stamp: TypeCategory.NUMBER,
        "values": np.array([1, 2]),
    }
    out = to_jsonable(payload)
    assert out == {
        "1.5": 0.25,
        "null": 2,
        "2017-01-01T00:00:00+00:00": "number",
        "values": [1, 2],
    }


def test_to_jsonable_handles_dataclasses() -> None:
    assert to_jsonable(Sample(a=1, b="x")) == {"a": 1, "b": "x"}
    assert to_jsonable(TypeTag("Number")) == {"base": "type/Number", "semantic": "type/*"}


def test_json_roundtrip_with_version() -> None:
    text = serialize_to_json({"a": 1}, version="1.0")
    assert deserialize_from_json(text) == {"version": "1.0", "payload": {"a": 1}}


def test_serialize_datetime_fingerprint() -> None:
    fp = fingerprint_values(FingerprintOptions(), DATETIME_TAG, ["2017-01-01T10:00:00Z", None])
    decoded = deserialize_from_json(serialize_fingerprint(fp))
    assert decoded["type"] == "datetime"
    assert decoded["min"] == "2017-01-01T10:00:00+00:00"
    assert decoded["histogram_hour"] == {"10": 1.0}
    assert decoded["nil_count"] == 1
