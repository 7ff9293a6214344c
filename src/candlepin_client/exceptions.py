"""Custom exception hierarchy for the Candlepin client."""
from __future__ import annotations

from collections.abc import Iterable
from typing import Any


class CandlepinError(RuntimeError):
    """Base error for Candlepin client failures."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        details: Any | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.details = details


class _KeyListError(CandlepinError):
    """Error that names a list of offending option keys."""

    prefix = "Invalid keys"

    def __init__(self, keys: Iterable[str], message: str | None = None) -> None:
        self.keys = tuple(keys)
        super().__init__(message or f"{self.prefix}: {', '.join(map(str, self.keys))}")


class UnknownParameterError(_KeyListError, ValueError):
    """Raised when an option is not recognised by the operation."""

    prefix = "Unknown keys"


class MissingRequiredParameterError(_KeyListError, ValueError):
    """Raised when required options are null or fail validation."""

    prefix = "Options cannot be null or invalid for keys"


class MissingKeyError(_KeyListError, LookupError):
    """Raised when a subset asks for keys the options do not carry."""

    prefix = "Missing keys"


class ArgumentError(CandlepinError, ValueError):
    """Raised when a constructor receives conflicting credential sources."""


class ConfigurationError(CandlepinError):
    """Raised when the transport cannot be built from the configuration."""


class RequestError(CandlepinError):
    """Raised when a successful response was required but not received."""


class UnexpectedResponseError(CandlepinError):
    """Raised when the API returns an unexpected payload structure."""
