"""Merge caller options with per-operation defaults.

Every operation declares a fresh table of defaults and merges the caller's
keyword options over it.  Unknown keys are rejected and required keys are
checked before anything goes over the wire::

    defaults = {"key": None, "display_name": None}
    opts = merge_options(opts, defaults)
    validate_required(opts, "key")
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from .exceptions import MissingRequiredParameterError, UnknownParameterError

Predicate = Callable[[Any], bool]


def merge_options(
    supplied: Mapping[str, Any] | None, defaults: Mapping[str, Any]
) -> dict[str, Any]:
    """Return ``defaults`` overridden by ``supplied``.

    Raises:
        UnknownParameterError: if ``supplied`` has keys absent from ``defaults``.
    """

    supplied = supplied or {}
    unknown = [key for key in supplied if key not in defaults]
    if unknown:
        raise UnknownParameterError(unknown)

    merged = dict(defaults)
    merged.update(supplied)
    return merged


def validate_required(
    options: Mapping[str, Any],
    *keys: str,
    predicate: Predicate | None = None,
) -> None:
    """Check that ``keys`` (all keys when none are given) hold valid values.

    A value is invalid when it is ``None`` or, if ``predicate`` is given, when
    the predicate returns a false value.  Every violation is reported at once.
    """

    check_keys = keys or tuple(options)
    invalid: list[str] = []
    for key in check_keys:
        value = options.get(key)
        if predicate is None:
            if value is None:
                invalid.append(key)
        elif not predicate(value):
            invalid.append(key)

    if invalid:
        raise MissingRequiredParameterError(invalid)


__all__ = ["merge_options", "validate_required"]
