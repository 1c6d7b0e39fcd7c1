"""Client configuration."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from .collection.filters import FieldFilter


@dataclass(slots=True, frozen=True)
class TransportConfig:
    """Transport-related settings."""

    timeout_connect_seconds: float = 5.0
    timeout_read_seconds: float = 30.0
    timeout_write_seconds: float = 30.0
    timeout_pool_seconds: float = 5.0

    def validate(self) -> None:
        for field_name in (
            "timeout_connect_seconds",
            "timeout_read_seconds",
            "timeout_write_seconds",
            "timeout_pool_seconds",
        ):
            if getattr(self, field_name) <= 0:
                raise ValueError(f"transport.{field_name} must be > 0")


@dataclass(slots=True, frozen=True)
class CollectionConfig:
    """Defaults applied to every collection query."""

    per_page: int = 6
    embed: bool = True

    def validate(self) -> None:
        if isinstance(self.per_page, bool) or not isinstance(self.per_page, int):
            raise ValueError("collection.per_page must be int")
        if self.per_page < 1:
            raise ValueError("collection.per_page must be >= 1")
        if not isinstance(self.embed, bool):
            raise ValueError("collection.embed must be bool")

    def base_query(self) -> dict[str, object]:
        query: dict[str, object] = {"page": 1, "per_page": self.per_page}
        if self.embed:
            query["_embed"] = True
        return query


@dataclass(slots=True, frozen=True)
class WpClientConfig:
    """Runtime configuration for the WordPress REST client."""

    base_url: str = "http://localhost"
    rest_url: str = "/wp-json/wp/v2/"
    user_agent: str = "wp-api-client/0.1.0"

    transport: TransportConfig = field(default_factory=TransportConfig)
    collection: CollectionConfig = field(default_factory=CollectionConfig)
    filters: Mapping[str, FieldFilter] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "filters", MappingProxyType(dict(self.filters)))

    def filter_for(self, endpoint: str) -> FieldFilter | None:
        return self.filters.get(endpoint)

    def collection_url(self, endpoint: str) -> str:
        parts = [self.base_url.rstrip("/"), self.rest_url.strip("/"), endpoint.strip("/")]
        return "/".join(part for part in parts if part)

    def validate(self) -> None:
        if not self.base_url:
            raise ValueError("base_url must not be empty")
        for endpoint, spec in self.filters.items():
            if not isinstance(spec, FieldFilter):
                raise ValueError(f"filters[{endpoint!r}] must be FieldFilter")
        self.transport.validate()
        self.collection.validate()


__all__ = [
    "TransportConfig",
    "CollectionConfig",
    "WpClientConfig",
]
