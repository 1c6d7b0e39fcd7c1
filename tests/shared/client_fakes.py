from __future__ import annotations

import asyncio
from collections.abc import Mapping, Sequence

from wp_api_client.collection.service import CollectionPage
from wp_api_client.core.errors import WpTransportError
from wp_api_client.core.pagination import Pagination
from wp_api_client.core.response_parsing import RawResponse
from tests.shared.payloads import make_page_payload, make_post


class DummyTransport:
    def __init__(self):
        self.closed = False
        self.calls: list[tuple[str, dict[str, str]]] = []

    async def close(self):
        self.closed = True

    async def request(self, url: str, *, params: Mapping[str, str]) -> RawResponse:
        self.calls.append((url, dict(params)))
        return RawResponse(payload=[], http_status=200)


class PagedPostsTransport(DummyTransport):
    """Serves ``total`` posts in pages of the requested ``per_page``."""

    def __init__(self, total: int = 18):
        super().__init__()
        self.total = total
        self.fail_next: Exception | None = None

    async def request(self, url: str, *, params: Mapping[str, str]) -> RawResponse:
        self.calls.append((url, dict(params)))
        if self.fail_next is not None:
            err, self.fail_next = self.fail_next, None
            raise err
        page = int(params.get("page", "1"))
        per_page = int(params.get("per_page", "6"))
        total_pages = max(1, -(-self.total // per_page))
        first = (page - 1) * per_page + 1
        last = min(self.total, page * per_page)
        items = [make_post(post_id) for post_id in range(first, last + 1)]
        return RawResponse(
            payload=make_page_payload(
                items,
                current_page=page,
                total_pages=total_pages,
                total_objects=self.total,
            ),
            http_status=200,
        )


class GatedPageSource:
    """Page source whose requests settle only when the test says so."""

    def __init__(self):
        self.calls: list[tuple[str, dict[str, object]]] = []
        self.pending: list[asyncio.Future[CollectionPage]] = []

    async def get(self, url: str, query: Mapping[str, object]) -> CollectionPage:
        future: asyncio.Future[CollectionPage] = asyncio.get_running_loop().create_future()
        self.calls.append((url, dict(query)))
        self.pending.append(future)
        return await future

    def resolve(self, index: int, page: CollectionPage) -> None:
        self.pending[index].set_result(page)

    def fail(self, index: int, err: Exception | None = None) -> None:
        self.pending[index].set_exception(err or WpTransportError("network/transport error", cause="network"))


def make_collection_page(
    items: Sequence[dict[str, object]],
    *,
    current_page: int,
    total_pages: int,
    total_objects: int | None = None,
) -> CollectionPage:
    return CollectionPage(
        data=list(items),
        pagination=Pagination(
            current_page=current_page,
            total_pages=total_pages,
            total_objects=len(items) if total_objects is None else total_objects,
            has_prev=current_page > 1,
            has_more=current_page < total_pages,
        ),
    )
