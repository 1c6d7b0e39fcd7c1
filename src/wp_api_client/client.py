"""Public client entrypoint."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from types import TracebackType

from .collection.ref import PageSource, WpCollectionRef
from .collection.service import CollectionService
from .config import WpClientConfig
from .core.async_transport import AsyncTransport
from .core.errors import WpApiError, WpClientClosedError, WpValidationError
from .core.streams import Broadcast

logger = logging.getLogger("wp_api_client")


def validate_client_config(config: WpClientConfig) -> None:
    try:
        config.validate()
    except ValueError as exc:
        raise WpValidationError(str(exc)) from exc


class WpClient:
    """Creates collection controllers that share one transport and error channel."""

    def __init__(
        self,
        *,
        config: WpClientConfig | None = None,
        transport: AsyncTransport | None = None,
        service: PageSource | None = None,
    ) -> None:
        self._config = config or WpClientConfig()
        validate_client_config(self._config)

        self._transport = transport or AsyncTransport(self._config)
        self._service = service or CollectionService(self._transport)
        self.errors: Broadcast[WpApiError] = Broadcast(name="errors")
        self._refs: list[WpCollectionRef] = []
        self._closed = False

    @property
    def config(self) -> WpClientConfig:
        return self._config

    def _ensure_open(self) -> None:
        if self._closed:
            raise WpClientClosedError("WpClient is already closed")

    def collection(self, endpoint: str, query: Mapping[str, object] | None = None) -> WpCollectionRef:
        self._ensure_open()
        if not endpoint:
            raise WpValidationError("endpoint must not be empty")
        ref = WpCollectionRef(self._service, self._config, endpoint, self.errors, query)
        self._refs = [existing for existing in self._refs if not existing.destroyed]
        self._refs.append(ref)
        logger.debug("collection created endpoint=%s url=%s", endpoint, ref.url)
        return ref

    def rebind(
        self,
        ref: WpCollectionRef,
        endpoint: str,
        query: Mapping[str, object] | None = None,
    ) -> WpCollectionRef:
        """Destroy ``ref`` and return a fresh controller for ``endpoint``."""

        self._ensure_open()
        ref.destroy()
        return self.collection(endpoint, query)

    async def close(self) -> None:
        if self._closed:
            return
        for ref in self._refs:
            ref.destroy()
        self._refs = []
        self.errors.complete()
        await self._transport.close()
        self._closed = True

    async def __aenter__(self) -> "WpClient":
        self._ensure_open()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> bool:
        await self.close()
        return False


__all__ = [
    "validate_client_config",
    "WpClient",
]
