"""Authoritative state store for one collection."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TypeVar

from ..core.streams import ReplayLatest, Selection
from .state import DEFAULT_COLLECTION_STATE, CollectionState, merge_state

S = TypeVar("S")

logger = logging.getLogger("wp_api_client")


class StateStore:
    """Single-writer, multi-reader holder of the current :class:`CollectionState`."""

    def __init__(self, initial: CollectionState = DEFAULT_COLLECTION_STATE) -> None:
        self._stream: ReplayLatest[CollectionState] = ReplayLatest(initial, name="collection-state")

    @property
    def stream(self) -> ReplayLatest[CollectionState]:
        return self._stream

    @property
    def value(self) -> CollectionState:
        return self._stream.value

    @property
    def terminated(self) -> bool:
        return self._stream.completed

    def select(self, selector: Callable[[CollectionState], S], *, skip_none: bool = False) -> Selection[CollectionState, S]:
        return self._stream.select(selector, skip_none=skip_none)

    def update(self, **patch: object) -> CollectionState:
        if self.terminated:
            logger.debug("state update after terminate ignored fields=%s", sorted(patch))
            return self.value
        merged = merge_state(self.value, patch)
        self._stream.publish(merged)
        return merged

    def terminate(self) -> None:
        self._stream.complete()


__all__ = [
    "StateStore",
]
