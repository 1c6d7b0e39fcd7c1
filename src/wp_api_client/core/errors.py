"""Error types and status mapping."""

from __future__ import annotations

from collections.abc import Mapping


def extract_error_code(payload: object) -> str | None:
    if not isinstance(payload, Mapping):
        return None
    value = payload.get("code")
    return str(value) if value is not None else None


def extract_error_message(payload: object) -> str | None:
    if not isinstance(payload, Mapping):
        return None
    value = payload.get("message")
    return str(value) if value is not None else None


class WpApiError(Exception):
    """Base exception for this package."""

    def __init__(
        self,
        message: str,
        *,
        http_status: int | None = None,
        code: str | None = None,
        cause: str | None = None,
    ) -> None:
        super().__init__(message)
        self.http_status = http_status
        self.code = code
        self.cause = cause


class WpTransportError(WpApiError):
    """Network/transport-level failure."""


class WpClientClosedError(WpApiError):
    """Raised when a client or collection is used after close."""


class WpValidationError(WpApiError):
    """Invalid input / request rejected."""


class WpServerError(WpApiError):
    """Server-side unexpected error."""


class WpProtocolError(WpApiError):
    """Response shape cannot be decoded into a collection page."""


class WpFilterError(WpApiError):
    """Raised when an item field filter fails inside a batch."""

    def __init__(self, message: str, *, endpoint: str, index: int) -> None:
        super().__init__(message, cause="filter")
        self.endpoint = endpoint
        self.index = index


def classify_http_error(
    payload: object,
    *,
    http_status: int | None,
) -> WpApiError | None:
    """Map HTTP status and a WordPress error body to domain exceptions."""

    if http_status is None:
        return WpProtocolError("Missing HTTP status")
    if 200 <= http_status < 300:
        return None

    code = extract_error_code(payload)
    message = extract_error_message(payload) or "WordPress API request failed"
    if http_status >= 500:
        return WpServerError(message, http_status=http_status, code=code, cause="server")
    if http_status >= 400:
        return WpValidationError(message, http_status=http_status, code=code)
    return WpProtocolError(
        f"Unexpected HTTP status {http_status}",
        http_status=http_status,
        code=code,
    )


__all__ = [
    "WpApiError",
    "WpTransportError",
    "WpClientClosedError",
    "WpValidationError",
    "WpServerError",
    "WpProtocolError",
    "WpFilterError",
    "extract_error_code",
    "extract_error_message",
    "classify_http_error",
]
