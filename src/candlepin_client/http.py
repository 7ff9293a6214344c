"""HTTP utilities for Candlepin API access."""

from __future__ import annotations

import datetime
import json
import re
from collections.abc import Mapping, MutableMapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from requests import Response, Session

from .exceptions import RequestError, UnexpectedResponseError
from .fields import snakify

JSON_CONTENT_TYPE = re.compile(r"(application|text)/(x-)?json", re.IGNORECASE)


@dataclass(slots=True)
class HttpResponse:
    """Typed response wrapper with helper accessors.

    ``content`` holds snake_cased JSON for JSON responses, text for other
    ``text/*`` responses and raw bytes otherwise.
    """

    status_code: int
    content: Any
    headers: Mapping[str, str] = field(default_factory=dict)
    content_type: str = ""
    raw: bytes = b""

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def is_json(self) -> bool:
        return bool(JSON_CONTENT_TYPE.search(self.content_type))

    def ok_content(self) -> Any:
        """Return ``content``, raising `RequestError` unless the status is 2xx."""

        if self.ok:
            return self.content
        text = self.raw.decode("utf-8", errors="replace")
        message = f"Candlepin API error {self.status_code}: {text[:200]}"
        raise RequestError(message, status_code=self.status_code, details=self.content)


def _json_default(value: Any) -> Any:
    if isinstance(value, (datetime.date, datetime.datetime)):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def encode_json(payload: Any) -> str:
    return json.dumps(payload, default=_json_default)


def decode_content(response: Response) -> Any:
    """Decode the body according to the response content type."""

    if not response.content:
        return None
    content_type = response.headers.get("Content-Type", "")
    if JSON_CONTENT_TYPE.search(content_type):
        try:
            return snakify(response.json())
        except ValueError as exc:
            raise UnexpectedResponseError(
                "Response did not contain valid JSON",
                status_code=response.status_code,
                details=response.text[:200],
            ) from exc
    if content_type.lower().startswith("text/"):
        return response.text
    return response.content


def request(
    session: Session,
    method: str,
    url: str,
    *,
    params: Sequence[tuple[str, str]] | None = None,
    headers: MutableMapping[str, str] | None = None,
    body: Any = None,
    timeout: float | tuple[float | None, float | None] | None = None,
    verify: bool | str | None = None,
) -> HttpResponse:
    """Send one request and return a decoded response envelope.

    Any HTTP status is returned as-is; transport failures raised by
    ``requests`` propagate to the caller.
    """

    headers = dict(headers or {})
    data = None
    if body is not None:
        headers["Content-Type"] = "application/json"
        data = encode_json(body)

    response = session.request(
        method=method,
        url=url,
        params=params,
        headers=headers,
        data=data,
        timeout=timeout,
        verify=verify,
    )

    return HttpResponse(
        status_code=response.status_code,
        content=decode_content(response),
        headers=response.headers,
        content_type=response.headers.get("Content-Type", ""),
        raw=response.content,
    )


__all__ = ["HttpResponse", "JSON_CONTENT_TYPE", "decode_content", "encode_json", "request"]
