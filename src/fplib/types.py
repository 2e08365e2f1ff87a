"""
Semantic type tags and the closed set of fingerprint dispatch categories.

Responsibilities
  - Normalise type names (``Integer``, ``type/Integer``, ``:type/Integer``).
  - Encode the type hierarchy used for ``isa`` checks, with ``type/*``
    matching everything.
  - Define ``TypeTag`` (base kind, semantic kind) and ``TypeCategory``.

Usage Context
  - Column metadata handed in by the data-source layer is expressed as
    ``TypeTag`` values; the registry maps tags onto ``TypeCategory``.

Limitations
  - Unknown type names are accepted; they only match ``type/*`` and end up
    in the default pipeline.
"""
# 说明：语义类型标签与指纹分派类别的定义。
# 职责：
# - normalize_type_name：统一类型名写法
# - TYPE_PARENTS / isa：维护类型继承关系，type/* 匹配一切类型
# - TypeTag：(基础类型, 语义类型) 二元组，复合列以 TypeTag 元组表示
# - TypeCategory：封闭的分派类别枚举，歧义由注册表中的单一优先级表裁决

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Dict, Optional, Tuple, Union

ANY = "type/*"
NUMBER = "type/Number"
INTEGER = "type/Integer"
BIG_INTEGER = "type/BigInteger"
FLOAT = "type/Float"
DECIMAL = "type/Decimal"
TEXT = "type/Text"
DATETIME = "type/DateTime"
DATE = "type/Date"
TIME = "type/Time"
BOOLEAN = "type/Boolean"
CATEGORY = "type/Category"
ENUM = "type/Enum"
STATE = "type/State"
COUNTRY = "type/Country"
CITY = "type/City"
NAME = "type/Name"
PK = "type/PK"
FK = "type/FK"
URL = "type/URL"
EMAIL = "type/Email"

TYPE_PARENTS: Dict[str, str] = {
    NUMBER: ANY,
    INTEGER: NUMBER,
    BIG_INTEGER: INTEGER,
    FLOAT: NUMBER,
    DECIMAL: FLOAT,
    TEXT: ANY,
    DATETIME: ANY,
    DATE: DATETIME,
    TIME: DATETIME,
    BOOLEAN: ANY,
    CATEGORY: ANY,
    ENUM: CATEGORY,
    STATE: CATEGORY,
    COUNTRY: CATEGORY,
    CITY: CATEGORY,
    NAME: CATEGORY,
    PK: ANY,
    FK: ANY,
    URL: TEXT,
    EMAIL: TEXT,
}


def normalize_type_name(name: Optional[str]) -> str:
    if name is None:
        return ANY
    cleaned = str(name).strip().lstrip(":")
    if cleaned in ("", "*"):
        return ANY
    if not cleaned.startswith("type/"):
        cleaned = f"type/{cleaned}"
    return cleaned


def isa(child: str, parent: str) -> bool:
    """True if ``child`` equals ``parent`` or descends from it."""
    child = normalize_type_name(child)
    parent = normalize_type_name(parent)
    if parent == ANY:
        return True
    current: Optional[str] = child
    while current is not None:
        if current == parent:
            return True
        current = TYPE_PARENTS.get(current)
    return False


@dataclass(frozen=True)
class TypeTag:
    """(base kind, semantic kind) pair attached to a column."""

    base: str = ANY
    semantic: str = ANY

    def __post_init__(self) -> None:
        object.__setattr__(self, "base", normalize_type_name(self.base))
        object.__setattr__(self, "semantic", normalize_type_name(self.semantic))

    @classmethod
    def parse(cls, base: Optional[str], semantic: Optional[str] = None) -> "TypeTag":
        return cls(normalize_type_name(base), normalize_type_name(semantic))

    def isa(self, other: "TypeTag") -> bool:
        return isa(self.base, other.base) and isa(self.semantic, other.semantic)

    def __str__(self) -> str:
        return f"[{self.base} {self.semantic}]"


TagSpec = Union[TypeTag, Tuple[TypeTag, ...]]

NUMBER_TAG = TypeTag(NUMBER, ANY)
DATETIME_TAG = TypeTag(DATETIME, ANY)
CATEGORY_TAG = TypeTag(ANY, CATEGORY)
TEXT_TAG = TypeTag(TEXT, ANY)
ANY_TAG = TypeTag(ANY, ANY)


class TypeCategory(enum.Enum):
    """Closed set of fingerprint pipelines."""

    NUMBER = "number"
    DATETIME = "datetime"
    CATEGORY = "category"
    TEXT = "text"
    NUMBER_NUMBER = "number*number"
    DATETIME_NUMBER = "datetime*number"
    CATEGORY_ANY = "category*any"
    DEFAULT = "default"
