"""Field name conversion between Python and Candlepin's JSON conventions."""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from typing import Any

from .exceptions import MissingKeyError

_WIRE_BOUNDARY = re.compile(r"(?<=[a-z0-9])([A-Z])")


def to_wire_case(key: str) -> str:
    """Convert ``snake_case`` into ``camelCase``.

    >>> to_wire_case("display_name")
    'displayName'
    """

    first, *rest = key.split("_")
    return first + "".join(segment.capitalize() for segment in rest)


def from_wire_case(key: str) -> str:
    """Convert ``camelCase`` into ``snake_case``.

    >>> from_wire_case("idCert")
    'id_cert'
    """

    return _WIRE_BOUNDARY.sub(r"_\1", key).lower()


def snakify(value: Any) -> Any:
    """Recursively rename every mapping key in ``value`` with `from_wire_case`."""

    if isinstance(value, Mapping):
        return {
            from_wire_case(k) if isinstance(k, str) else k: snakify(v) for k, v in value.items()
        }
    if isinstance(value, list):
        return [snakify(item) for item in value]
    return value


def select_subset(options: Mapping[str, Any], keys: Iterable[str]) -> dict[str, Any]:
    """Return the ``keys`` of ``options`` in the requested order.

    Raises:
        MissingKeyError: listing every requested key ``options`` lacks.
    """

    keys = list(keys)
    missing = [key for key in keys if key not in options]
    if missing:
        raise MissingKeyError(missing)
    return {key: options[key] for key in keys}


def map_fields(
    options: Mapping[str, Any], keys: Iterable[str] | None = None
) -> dict[str, Any]:
    """Rename option keys to the wire convention, optionally restricted to ``keys``.

    Values are passed through untouched; nested objects are the caller's job.
    """

    subset = select_subset(options, keys) if keys is not None else options
    return {to_wire_case(key): value for key, value in subset.items()}


__all__ = ["from_wire_case", "map_fields", "select_subset", "snakify", "to_wire_case"]
