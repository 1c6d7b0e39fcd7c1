"""Pagination model and parsers for paged collection responses."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from .errors import WpProtocolError

TOTAL_HEADER = "X-WP-Total"
TOTAL_PAGES_HEADER = "X-WP-TotalPages"


@dataclass(slots=True, frozen=True)
class Pagination:
    """Page position reported by the server.

    ``has_prev`` and ``has_more`` are taken verbatim from the response and are
    never recomputed from the page counters on the client.
    """

    current_page: int = 1
    total_pages: int = 1
    total_objects: int = 0
    has_prev: bool = False
    has_more: bool = False

    @classmethod
    def from_block(cls, block: Mapping[str, object]) -> "Pagination":
        if not isinstance(block, Mapping):
            raise WpProtocolError("pagination must be an object")
        current_page = _parse_int(block.get("currentPage", 1), "currentPage", minimum=1)
        total_pages = _parse_int(block.get("totalPages", 1), "totalPages", minimum=1)
        total_objects = _parse_int(block.get("totalObjects", 0), "totalObjects", minimum=0)
        return cls(
            current_page=current_page,
            total_pages=total_pages,
            total_objects=total_objects,
            has_prev=_parse_flag(block.get("hasPrev"), current_page > 1),
            has_more=_parse_flag(block.get("hasMore"), current_page < total_pages),
        )

    @classmethod
    def from_headers(cls, headers: Mapping[str, str], *, current_page: int) -> "Pagination":
        """Derive the pagination block from WordPress collection headers."""

        total_objects = _parse_int(_header(headers, TOTAL_HEADER, "0"), TOTAL_HEADER, minimum=0)
        total_pages = _parse_int(_header(headers, TOTAL_PAGES_HEADER, "1"), TOTAL_PAGES_HEADER, minimum=0)
        # WordPress reports 0 pages for an empty collection.
        total_pages = max(1, total_pages)
        return cls(
            current_page=current_page,
            total_pages=total_pages,
            total_objects=total_objects,
            has_prev=current_page > 1,
            has_more=current_page < total_pages,
        )

    def to_block(self) -> dict[str, object]:
        return {
            "currentPage": self.current_page,
            "totalPages": self.total_pages,
            "totalObjects": self.total_objects,
            "hasPrev": self.has_prev,
            "hasMore": self.has_more,
        }


DEFAULT_PAGINATION = Pagination()


def _header(headers: Mapping[str, str], name: str, default: str) -> str:
    value = headers.get(name)
    if value is None:
        value = headers.get(name.lower())
    return default if value is None else value


def _parse_int(raw: object, name: str, *, minimum: int) -> int:
    if isinstance(raw, bool):
        raise WpProtocolError(f"{name} must be an integer")
    if isinstance(raw, str):
        text = raw.strip()
        if not text.isdigit():
            raise WpProtocolError(f"{name} is not a valid integer")
        raw = int(text)
    if not isinstance(raw, int):
        raise WpProtocolError(f"{name} has unsupported type")
    if raw < minimum:
        raise WpProtocolError(f"{name} must be >= {minimum}")
    return raw


def _parse_flag(raw: object, default: bool) -> bool:
    if raw is None:
        return default
    if not isinstance(raw, bool):
        raise WpProtocolError("pagination flags must be booleans")
    return raw


__all__ = [
    "TOTAL_HEADER",
    "TOTAL_PAGES_HEADER",
    "Pagination",
    "DEFAULT_PAGINATION",
]
