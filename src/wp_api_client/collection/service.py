"""Paged collection requests on top of the transport."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Protocol

from ..core.errors import WpProtocolError
from ..core.pagination import Pagination
from ..core.response_parsing import RawResponse
from ..core.transport_shared import build_request_params
from .state import ItemRecord


class CollectionTransport(Protocol):
    async def request(self, url: str, *, params: Mapping[str, str]) -> RawResponse: ...


@dataclass(slots=True, frozen=True)
class CollectionPage:
    data: tuple[ItemRecord, ...] | list[ItemRecord]
    pagination: Pagination

    def __post_init__(self) -> None:
        if isinstance(self.data, tuple):
            return
        object.__setattr__(self, "data", tuple(self.data))


class CollectionService:
    """Fetches one page of a remote collection."""

    def __init__(self, transport: CollectionTransport) -> None:
        self._transport = transport

    async def get(self, url: str, query: Mapping[str, object]) -> CollectionPage:
        response = await self._transport.request(url, params=build_request_params(query))
        requested_page = query.get("page", 1)
        return parse_collection_page(
            response,
            requested_page=requested_page if isinstance(requested_page, int) else 1,
        )


def parse_collection_page(response: RawResponse, *, requested_page: int) -> CollectionPage:
    """Decode either a ``{data, pagination}`` body or a bare WordPress list.

    A bare list takes its pagination from the ``X-WP-Total`` headers and the
    requested page.
    """

    payload = response.payload
    if isinstance(payload, list):
        items = payload
        pagination = Pagination.from_headers(response.headers, current_page=requested_page)
    elif isinstance(payload, Mapping) and "data" in payload:
        items = payload["data"]
        block = payload.get("pagination")
        if block is None:
            pagination = Pagination.from_headers(response.headers, current_page=requested_page)
        else:
            pagination = Pagination.from_block(block)  # type: ignore[arg-type]
    else:
        raise WpProtocolError(
            "collection response must be a list or an object with data",
            http_status=response.http_status,
        )
    return CollectionPage(data=_as_items(items), pagination=pagination)


def _as_items(raw: object) -> list[ItemRecord]:
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise WpProtocolError("collection data must be a list")
    for item in raw:
        if not isinstance(item, dict):
            raise WpProtocolError("collection item must be an object")
    return raw


__all__ = [
    "CollectionTransport",
    "CollectionPage",
    "CollectionService",
    "parse_collection_page",
]
