"""Stateful controller for one paged remote collection."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Protocol

from ..core.errors import WpApiError, WpClientClosedError, WpTransportError
from ..core.pagination import Pagination
from ..core.streams import Broadcast, ReplayLatest, Selection
from .filters import process_batch
from .query import Query, QueryBuilder
from .service import CollectionPage
from .state import CollectionState, ItemRecord
from .store import StateStore

if TYPE_CHECKING:
    from ..config import WpClientConfig

logger = logging.getLogger("wp_api_client")


class PageSource(Protocol):
    async def get(self, url: str, query: Mapping[str, object]) -> CollectionPage: ...


class WpCollectionRef:
    """Fetches, pages and caches one collection endpoint.

    ``get``, ``next`` and ``prev`` replace ``data``; ``more`` appends the next
    page to it. Paging gates are read once from the current snapshot when the
    call is made. Overlapping calls are not serialized: the most recently
    issued fetch wins, and a fetch that settles after a newer one was issued
    leaves the state untouched. Fetch failures are never raised; they land in
    ``state.error`` and on the shared ``errors`` channel.
    """

    def __init__(
        self,
        service: PageSource,
        config: WpClientConfig,
        endpoint: str,
        errors: Broadcast[WpApiError],
        query: Mapping[str, object] | None = None,
    ) -> None:
        self._service = service
        self._endpoint = endpoint
        self._url = config.collection_url(endpoint)
        self._filter = config.filter_for(endpoint)
        self._errors = errors
        self._query = QueryBuilder(config.collection.base_query(), query)
        self._store = StateStore()
        self._ticket = 0
        self._destroyed = False

        self.state: ReplayLatest[CollectionState] = self._store.stream
        self.loading: Selection[CollectionState, bool] = self._store.select(lambda s: s.loading)
        self.data: Selection[CollectionState, tuple[ItemRecord, ...]] = self._store.select(
            lambda s: s.data, skip_none=True
        )
        self.pagination: Selection[CollectionState, Pagination] = self._store.select(lambda s: s.pagination)
        self.error: Selection[CollectionState, BaseException | None] = self._store.select(
            lambda s: s.error, skip_none=True
        )

    @property
    def endpoint(self) -> str:
        return self._endpoint

    @property
    def url(self) -> str:
        return self._url

    @property
    def query(self) -> Query:
        return self._query.current

    @property
    def snapshot(self) -> CollectionState:
        return self._store.value

    @property
    def destroyed(self) -> bool:
        return self._destroyed

    async def get(self, query: Mapping[str, object] | None = None) -> CollectionState:
        """Fetch the first page, replacing the current data."""

        self._ensure_open()
        return await self._fetch(self._query.build_for_first_page(query))

    async def more(self) -> CollectionState | None:
        """Append the next page to the current data; None when there is no next page."""

        self._ensure_open()
        state = self._store.value
        if not state.pagination.has_more:
            logger.debug("more skipped endpoint=%s page=%s", self._endpoint, state.pagination.current_page)
            return None
        query = self._query.build_for_page(state.pagination.current_page + 1)
        return await self._fetch(query, merge_data=state.data)

    async def next(self) -> CollectionState | None:
        """Replace the current data with the next page."""

        self._ensure_open()
        state = self._store.value
        if not state.pagination.has_more:
            logger.debug("next skipped endpoint=%s page=%s", self._endpoint, state.pagination.current_page)
            return None
        return await self._fetch(self._query.build_for_page(state.pagination.current_page + 1))

    async def prev(self) -> CollectionState | None:
        """Replace the current data with the previous page."""

        self._ensure_open()
        state = self._store.value
        if not state.pagination.has_prev:
            logger.debug("prev skipped endpoint=%s page=%s", self._endpoint, state.pagination.current_page)
            return None
        return await self._fetch(self._query.build_for_page(state.pagination.current_page - 1))

    def destroy(self) -> None:
        if self._destroyed:
            return
        self._destroyed = True
        self._store.terminate()
        logger.debug("collection destroyed endpoint=%s", self._endpoint)

    def _ensure_open(self) -> None:
        if self._destroyed:
            raise WpClientClosedError(f"collection {self._endpoint!r} is already destroyed")

    async def _fetch(
        self,
        query: Query,
        *,
        merge_data: Sequence[ItemRecord] = (),
    ) -> CollectionState:
        self._ticket += 1
        ticket = self._ticket
        self._store.update(loading=True)
        logger.debug("fetch start endpoint=%s page=%s ticket=%s", self._endpoint, query.get("page"), ticket)

        try:
            page = await self._service.get(self._url, query)
            items = await process_batch(page.data, self._filter, endpoint=self._endpoint)
        except WpApiError as exc:
            return self._on_error(exc, ticket)
        except asyncio.CancelledError:
            if self._is_current(ticket):
                self._store.update(loading=False)
            raise
        except Exception as exc:
            wrapped = WpTransportError("network/transport error", cause="network")
            wrapped.__cause__ = exc
            return self._on_error(wrapped, ticket)
        return self._on_success(page.pagination, [*merge_data, *items], ticket)

    def _on_success(self, pagination: Pagination, data: list[ItemRecord], ticket: int) -> CollectionState:
        if self._destroyed:
            logger.debug("fetch result after destroy dropped endpoint=%s ticket=%s", self._endpoint, ticket)
            return self._store.value
        if not self._is_current(ticket):
            logger.warning("stale fetch result dropped endpoint=%s ticket=%s", self._endpoint, ticket)
            return self._store.value
        logger.info(
            "fetch success endpoint=%s page=%s/%s items=%s",
            self._endpoint,
            pagination.current_page,
            pagination.total_pages,
            len(data),
        )
        return self._store.update(
            pagination=pagination,
            data=data,
            loading=False,
            error=None,
        )

    def _on_error(self, err: WpApiError, ticket: int) -> CollectionState:
        logger.error(
            "fetch failed endpoint=%s ticket=%s error=%s",
            self._endpoint,
            ticket,
            err.__class__.__name__,
        )
        state = self._store.value
        if self._is_current(ticket):
            state = self._store.update(error=err, loading=False)
        self._errors.publish(err)
        return state

    def _is_current(self, ticket: int) -> bool:
        return not self._destroyed and ticket == self._ticket


__all__ = [
    "PageSource",
    "WpCollectionRef",
]
