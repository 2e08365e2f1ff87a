"""
Fingerprinting engine and data-source boundary.

Responsibilities
  - Fold a single column, or every column of a row set in one shared pass,
    through the pipelines chosen by the registry.
  - Describe the external data source as a small protocol
    (``field_values`` / ``query_values``) and translate the cost ceiling
    into query hints for it.
  - Fingerprint fields, tables, segments and saved queries (cards), pair two
    fields into a multi-field fingerprint and build the abstract query
    shape used for it.

Usage Context
  - Entry point for callers that hold data-source handles; callers with
    in-memory rows can use ``fingerprint_values``/``fingerprint_rows``
    directly.

Limitations
  - The engine never executes queries itself; query shapes are plain
    mappings handed to the data source.
  - Rows of a card are materialized once because the pair fingerprint and
    both single-column fingerprints are computed from them.
"""
# 说明：指纹计算引擎与外部数据源之间的边界层。
# 职责：
# - fingerprint_values / fingerprint_rows：单列折叠，以及多列共享一次遍历（fuse + pre_step 取列）
# - DataSource：外部数据源协议，只需提供按字段取值与按查询取行两种能力
# - fingerprint_field / table / segment / card：按模型类型取数并计算指纹
# - multifield_fingerprint / compare_fingerprints / build_query：双字段指纹与抽象查询形态
# 约定：
# - 采样上限等查询提示统一由 cost_policy.extract_query_opts 生成并合并进查询
# - 列描述不合法（名称非字符串、标签类型错误、列名重复）时抛出 ParamValidationError

from __future__ import annotations

from dataclasses import dataclass, field
from operator import itemgetter
from typing import Any, Dict, Iterable, List, Mapping, Protocol, Sequence, Union

from fplib.core.reducers import Reducer, fuse, post_complete, pre_step, transduce
from fplib.core.utils.logging import get_logger
from fplib.core.utils.param_validation import ParamValidationError, ensure, ensure_type
from fplib.types import DATETIME_TAG, NUMBER_TAG, TagSpec, TypeCategory, TypeTag

from .cost_policy import extract_query_opts
from .options import FingerprintOptions, Scale
from .registry import build_pipeline, resolve_category

logger = get_logger(__name__)


@dataclass(frozen=True)
class ColumnSpec:
    """Column metadata: name, type tag and its role in the producing query."""

    name: str
    tag: TypeTag
    source: str = "fields"

    def __post_init__(self) -> None:
        ensure_type(self.name, (str,), label="column name")
        ensure_type(self.tag, (TypeTag,), label=f"tag of column {self.name!r}")


@dataclass(frozen=True)
class FieldRef:
    """Handle on a single field of a table."""

    id: Any
    name: str
    tag: TypeTag
    table_id: Any = None


@dataclass(frozen=True)
class MetricRef:
    """Handle on a saved metric; ``definition`` is its query fragment."""

    id: Any
    name: str
    definition: Mapping[str, Any] = field(default_factory=dict)
    table_id: Any = None


Model = Union[FieldRef, MetricRef]


@dataclass
class QueryResult:
    rows: List[Sequence[Any]]
    columns: List[ColumnSpec]


class DataSource(Protocol):
    """What the engine needs from whatever stores the data."""

    def field_values(self, field: FieldRef, query_opts: Mapping[str, Any]) -> Iterable[Any]:
        ...

    def query_values(self, query: Mapping[str, Any]) -> QueryResult:
        ...


def model_tag(model: Model) -> TypeTag:
    # 指标（metric）总是按数值处理
    if isinstance(model, MetricRef):
        return NUMBER_TAG
    if isinstance(model, FieldRef):
        return model.tag
    raise ParamValidationError(f"unsupported model {type(model).__name__}")


def fingerprint_values(
    options: FingerprintOptions,
    tag: TagSpec,
    values: Iterable[Any],
    field: Any = None,
) -> Dict[str, Any]:
    """
    Fold one column (or one column of pairs) and attach ``field``.

    Category x Any results are keyed by group value, so they are nested
    under ``"groups"`` rather than sharing a namespace with ``"field"``.
    """
    result = transduce(build_pipeline(options, tag), values)
    if resolve_category(tag) is TypeCategory.CATEGORY_ANY:
        result = {"groups": result}
    else:
        result = dict(result)
    result["field"] = field if field is not None else tag
    return result


def _column_reducer(options: FingerprintOptions, index: int, column: ColumnSpec) -> Reducer:
    return post_complete(
        pre_step(build_pipeline(options, column.tag), itemgetter(index)),
        lambda fingerprint: {**fingerprint, "field": column},
    )


def fingerprint_rows(
    options: FingerprintOptions,
    columns: Sequence[ColumnSpec],
    rows: Iterable[Sequence[Any]],
) -> Dict[str, Dict[str, Any]]:
    """Fingerprint every column of ``rows`` in a single pass."""
    names = [column.name for column in columns]
    ensure(len(set(names)) == len(names), f"duplicate column names in {names}")
    logger.info("fingerprinting %d columns: %s", len(columns), ", ".join(names))
    reducer = fuse({column.name: _column_reducer(options, i, column) for i, column in enumerate(columns)})
    return transduce(reducer, rows)


def fingerprint_field(options: FingerprintOptions, field: FieldRef, source: DataSource) -> Dict[str, Any]:
    values = source.field_values(field, extract_query_opts(options))
    return fingerprint_values(options, field.tag, values, field=field)


def _fingerprint_query(options: FingerprintOptions, query: Mapping[str, Any], source: DataSource) -> Dict[str, Any]:
    result = source.query_values({**extract_query_opts(options), **query})
    return fingerprint_rows(options, result.columns, result.rows)


def fingerprint_table(options: FingerprintOptions, table_id: Any, source: DataSource) -> Dict[str, Any]:
    return _fingerprint_query(options, {"source_table": table_id}, source)


def fingerprint_segment(
    options: FingerprintOptions,
    definition: Mapping[str, Any],
    source: DataSource,
) -> Dict[str, Any]:
    return _fingerprint_query(options, definition, source)


def fingerprint_card(options: FingerprintOptions, query: Mapping[str, Any], source: DataSource) -> Dict[str, Any]:
    """
    Fingerprint a saved query.

    The pair is the first breakout column and the first aggregation column
    (or, without aggregations, the second breakout column).
    """
    result = source.query_values({**extract_query_opts(options), **query})
    by_source: Dict[str, List[int]] = {}
    for i, column in enumerate(result.columns):
        by_source.setdefault(column.source, []).append(i)
    breakout = by_source.get("breakout", [])
    aggregation = by_source.get("aggregation", [])
    candidates = breakout[:1] + (aggregation[:1] or breakout[1:2])
    if len(candidates) != 2:
        raise ParamValidationError("card needs a breakout and an aggregation or a second breakout column")
    i, j = candidates
    a, b = result.columns[i], result.columns[j]
    rows = list(result.rows)
    pairs = [(row[i], row[j]) for row in rows]
    return {
        "fingerprint": fingerprint_values(options, (a.tag, b.tag), pairs, field=(a, b)),
        "fields": [
            fingerprint_values(options, a.tag, (x for x, _ in pairs), field=a),
            fingerprint_values(options, b.tag, (y for _, y in pairs), field=b),
        ],
    }


def fingerprint(options: FingerprintOptions, model: Model, source: DataSource) -> Dict[str, Any]:
    """Fingerprint a field; metrics are returned as-is."""
    if isinstance(model, FieldRef):
        return fingerprint_field(options, model, source)
    if isinstance(model, MetricRef):
        return {"metric": model}
    raise ParamValidationError(f"unsupported model {type(model).__name__}")


def compare_fingerprints(
    options: FingerprintOptions,
    a: Model,
    b: Model,
    source: DataSource,
) -> Dict[str, List[Dict[str, Any]]]:
    return {"models": [fingerprint(options, a, source), fingerprint(options, b, source)]}


def build_query(options: FingerprintOptions, a: Model, b: Model) -> Dict[str, Any]:
    """
    Abstract query shape for fingerprinting ``a`` against ``b``.

    - datetime ``a`` with a metric ``b``: the metric definition broken out by
      ``a`` at the configured scale;
    - datetime ``a`` with a numeric ``b``: ``sum(b)`` broken out by ``a``;
    - otherwise a raw projection of both fields.
    """
    query = extract_query_opts(options)
    time_bucketed = model_tag(a).isa(DATETIME_TAG) and options.scale is not Scale.RAW
    breakout = [{"datetime_field": a.id, "unit": options.scale.value}]
    if time_bucketed and isinstance(b, MetricRef):
        query.update(b.definition)
        query["breakout"] = breakout
    elif time_bucketed and model_tag(b).isa(NUMBER_TAG):
        query.update({"source_table": a.table_id, "breakout": breakout, "aggregation": [{"sum": b.id}]})
    else:
        query.update({"source_table": a.table_id, "fields": [a.id, b.id]})
    return query


def multifield_fingerprint(
    options: FingerprintOptions,
    a: Model,
    b: Model,
    source: DataSource,
) -> Dict[str, Any]:
    """Fingerprint two fields of the same table jointly and separately."""
    ensure(a.table_id == b.table_id, f"fields belong to different tables: {a.table_id!r} != {b.table_id!r}")
    result = source.query_values(build_query(options, a, b))
    return {
        "fingerprint": fingerprint_values(options, (model_tag(a), model_tag(b)), result.rows, field=(a, b)),
        "fields": [fingerprint(options, a, source), fingerprint(options, b, source)],
    }
