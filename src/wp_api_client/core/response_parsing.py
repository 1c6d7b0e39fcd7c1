"""Response parsing helpers for the transport."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Protocol

from .errors import WpApiError, WpProtocolError, WpServerError, WpValidationError


class JsonPayloadResponse(Protocol):
    def json(self) -> object: ...


@dataclass(slots=True, frozen=True)
class RawResponse:
    """Decoded body plus the headers a paged collection needs."""

    payload: object
    http_status: int | None = None
    headers: Mapping[str, str] = field(default_factory=dict)


def parse_json_payload(
    response: JsonPayloadResponse,
    *,
    http_status: int | None,
) -> object:
    """Parse response JSON payload and map parse failures to domain errors."""

    try:
        payload = response.json()
    except Exception as exc:
        raise _json_parse_error(http_status=http_status) from exc

    if not isinstance(payload, dict | list):
        raise WpProtocolError(
            "response JSON root must be an object or a list",
            http_status=http_status,
        )
    return payload


def _json_parse_error(*, http_status: int | None) -> WpApiError:
    message = "response body is not valid JSON"
    if http_status is not None and http_status >= 500:
        return WpServerError(
            message,
            http_status=http_status,
            cause="server",
        )
    if http_status is not None and http_status >= 400:
        return WpValidationError(
            message,
            http_status=http_status,
        )
    return WpProtocolError(
        message,
        http_status=http_status,
    )


__all__ = [
    "RawResponse",
    "parse_json_payload",
]
