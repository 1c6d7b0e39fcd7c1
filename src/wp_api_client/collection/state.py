"""Collection state snapshot and its structural merge."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields, replace

from ..core.pagination import DEFAULT_PAGINATION, Pagination

ItemRecord = dict[str, object]

_STATE_FIELDS = frozenset({"data", "loading", "error", "pagination"})
_PAGINATION_FIELDS = frozenset(f.name for f in fields(Pagination))


@dataclass(slots=True, frozen=True)
class CollectionState:
    data: tuple[ItemRecord, ...] | list[ItemRecord] = ()
    loading: bool = False
    error: BaseException | None = None
    pagination: Pagination = DEFAULT_PAGINATION

    def __post_init__(self) -> None:
        if isinstance(self.data, tuple):
            return
        object.__setattr__(self, "data", tuple(self.data))


DEFAULT_COLLECTION_STATE = CollectionState()


def merge_pagination(current: Pagination, patch: Pagination | Mapping[str, object]) -> Pagination:
    """Merge pagination fields individually; keys are attribute names."""

    if isinstance(patch, Pagination):
        return patch
    unknown = set(patch) - _PAGINATION_FIELDS
    if unknown:
        raise ValueError(f"unknown pagination fields: {sorted(unknown)}")
    return replace(current, **patch)


def merge_state(current: CollectionState, patch: Mapping[str, object]) -> CollectionState:
    """Merge a partial state onto ``current``.

    ``pagination`` merges field by field, ``data`` is replaced wholesale and
    ``error`` may be cleared by passing ``None``. Keys absent from ``patch``
    keep their current value.
    """

    unknown = set(patch) - _STATE_FIELDS
    if unknown:
        raise ValueError(f"unknown state fields: {sorted(unknown)}")

    data = current.data
    if "data" in patch:
        if patch["data"] is None:
            raise ValueError("data must not be None")
        data = tuple(patch["data"])  # type: ignore[arg-type]

    pagination = current.pagination
    if "pagination" in patch:
        pagination = merge_pagination(current.pagination, patch["pagination"])  # type: ignore[arg-type]

    return CollectionState(
        data=data,
        loading=bool(patch.get("loading", current.loading)),
        error=patch["error"] if "error" in patch else current.error,  # type: ignore[arg-type]
        pagination=pagination,
    )


__all__ = [
    "ItemRecord",
    "CollectionState",
    "DEFAULT_COLLECTION_STATE",
    "merge_pagination",
    "merge_state",
]
