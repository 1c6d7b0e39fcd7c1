"""Query building for collection requests."""

from __future__ import annotations

from collections.abc import Mapping

from ..core.errors import WpValidationError

Query = dict[str, object]


class QueryBuilder:
    """Merges defaults, the persisted query, the page, and caller overrides.

    Merge order is fixed: defaults, then the last persisted query, then the
    explicit page, then overrides. Overrides may therefore replace the page.
    """

    def __init__(self, defaults: Mapping[str, object], initial: Mapping[str, object] | None = None) -> None:
        self._defaults = dict(defaults)
        self._query: Query = {**self._defaults, **(initial or {})}
        _validate_page(self._query.get("page", 1))

    @property
    def current(self) -> Query:
        return dict(self._query)

    def build_for_first_page(self, overrides: Mapping[str, object] | None = None) -> Query:
        return self.build_for_page(1, overrides)

    def build_for_page(self, target_page: int, overrides: Mapping[str, object] | None = None) -> Query:
        merged: Query = {**self._defaults, **self._query, "page": target_page, **(overrides or {})}
        _validate_page(merged["page"])
        self._query = merged
        return dict(merged)


def _validate_page(page: object) -> None:
    if isinstance(page, bool) or not isinstance(page, int):
        raise WpValidationError("page must be int")
    if page < 1:
        raise WpValidationError("page must be >= 1")


__all__ = [
    "Query",
    "QueryBuilder",
]
