"""Async HTTP transport with status evaluation."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Protocol

import httpx

from .errors import WpApiError, WpClientClosedError, WpTransportError, classify_http_error
from .response_parsing import RawResponse, parse_json_payload
from .transport_shared import build_default_headers, build_default_timeout

if TYPE_CHECKING:
    from ..config import WpClientConfig

logger = logging.getLogger("wp_api_client")


class AsyncTransportClient(Protocol):
    async def get(self, url: str, params: Mapping[str, str]) -> object: ...
    async def aclose(self) -> None: ...


class AsyncTransport:
    """Asynchronous transport for the WordPress REST API.

    Each call to :meth:`request` performs exactly one attempt. A host that
    needs to decorate requests (authentication headers, route allow-lists)
    passes its own configured ``httpx.AsyncClient`` as ``client``.
    """

    def __init__(
        self,
        config: WpClientConfig,
        *,
        client: AsyncTransportClient | None = None,
    ) -> None:
        self._config = config
        self._closed = False
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            headers=build_default_headers(config),
            timeout=build_default_timeout(config),
        )

    @property
    def closed(self) -> bool:
        return self._closed

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._owns_client and hasattr(self._client, "aclose"):
            await self._client.aclose()

    async def request(self, url: str, *, params: Mapping[str, str]) -> RawResponse:
        if self._closed:
            raise WpClientClosedError("transport is already closed")

        logger.debug("request start url=%s params=%s", url, dict(params))
        try:
            response = await self._client.get(url, params=params)
        except Exception as exc:
            logger.error(
                "request network error url=%s error=%s",
                url,
                exc.__class__.__name__,
            )
            raise WpTransportError(
                "network/transport error",
                cause="network",
            ) from exc

        http_status = getattr(response, "status_code", None)
        logger.debug("response received url=%s http_status=%s", url, http_status)
        try:
            payload = parse_json_payload(response, http_status=http_status)
        except WpApiError:
            logger.error("response parse error url=%s http_status=%s", url, http_status)
            raise

        mapped_error = classify_http_error(payload, http_status=http_status)
        if mapped_error is not None:
            logger.error(
                "request failed url=%s http_status=%s code=%s",
                url,
                http_status,
                mapped_error.code,
            )
            raise mapped_error

        logger.info("request success url=%s http_status=%s", url, http_status)
        return RawResponse(
            payload=payload,
            http_status=http_status,
            headers=getattr(response, "headers", None) or {},
        )


__all__ = [
    "AsyncTransport",
    "AsyncTransportClient",
]
