"""Helpers that turn merged options into request bodies and query strings."""

from __future__ import annotations

import datetime
from collections.abc import Iterable, Mapping
from typing import Any

from .fields import select_subset, to_wire_case

QueryPairs = list[tuple[str, str]]


def compact(mapping: Mapping[str, Any], keep: Iterable[str] = ()) -> dict[str, Any]:
    """Drop ``None`` values except for the keys listed in ``keep``."""

    keep = set(keep)
    return {key: value for key, value in mapping.items() if value is not None or key in keep}


def as_list(value: Any) -> list[Any]:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def reference(value: Any, key: str = "id") -> dict[str, Any] | None:
    """Wrap an identifier into a ``{key: identifier}`` reference object.

    Mappings (for example an entity returned by the server) are reduced to
    the same single key.
    """

    if value is None:
        return None
    if isinstance(value, Mapping):
        return {key: value.get(key)}
    return {key: value}


def named_objects(values: Any, name: str = "name") -> list[dict[str, Any]]:
    """Flatten scalars into single-key objects: ``["ram"]`` -> ``[{"name": "ram"}]``."""

    return [{name: value} for value in as_list(values)]


def reference_list(values: Any, key: str = "id") -> list[dict[str, Any]]:
    """Like `named_objects` but accepts entities as well as bare identifiers."""

    return [reference(value, key) for value in as_list(values) if value is not None]


def attribute_objects(attributes: Mapping[str, Any] | None) -> list[dict[str, Any]]:
    return [{"name": name, "value": value} for name, value in (attributes or {}).items()]


def shape_body(
    options: Mapping[str, Any],
    fields: Iterable[str],
    *,
    references: Mapping[str, str] | None = None,
    named_lists: Mapping[str, str] | None = None,
    keep_null: Iterable[str] = (),
) -> dict[str, Any]:
    """Build a JSON body from ``options``.

    The steps run in a fixed order: pick ``fields``, rename them to camel
    case, wrap the keys in ``references`` into ``{ref_key: value}`` objects,
    flatten the keys in ``named_lists`` into lists of single-key objects and
    finally drop nulls that are not listed in ``keep_null``.
    """

    references = references or {}
    named_lists = named_lists or {}
    subset = select_subset(options, fields)

    body: dict[str, Any] = {}
    kept: list[str] = []
    for key, value in subset.items():
        wire_key = to_wire_case(key)
        if key in references:
            value = reference(value, references[key])
        elif key in named_lists:
            value = named_objects(value, named_lists[key])
        body[wire_key] = value
        if key in keep_null:
            kept.append(wire_key)
    return compact(body, keep=kept)


def query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (datetime.date, datetime.datetime)):
        return value.isoformat()
    return str(value)


def query_params(options: Mapping[str, Any], keys: Iterable[str] | None = None) -> QueryPairs:
    """Return ordered ``(name, value)`` pairs for a query string.

    Null values are skipped and list values become repeated parameters.
    """

    subset = select_subset(options, keys) if keys is not None else dict(options)
    pairs: QueryPairs = []
    for key, value in subset.items():
        if value is None:
            continue
        if isinstance(value, (list, tuple)):
            pairs.extend((key, query_value(item)) for item in value if item is not None)
        else:
            pairs.append((key, query_value(value)))
    return pairs


__all__ = [
    "as_list",
    "attribute_objects",
    "compact",
    "named_objects",
    "query_params",
    "query_value",
    "reference",
    "reference_list",
    "shape_body",
]
