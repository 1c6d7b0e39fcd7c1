"""Push-based multi-subscriber streams."""

from __future__ import annotations

import asyncio
import logging
from collections import deque
from collections.abc import AsyncIterator, Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")
S = TypeVar("S")

logger = logging.getLogger("wp_api_client")

_COMPLETE = object()


@dataclass(slots=True, eq=False)
class _Observer(Generic[T]):
    on_next: Callable[[T], None]
    on_complete: Callable[[], None] | None = None


class Subscription:
    """Handle returned by ``subscribe``; call :meth:`unsubscribe` to detach."""

    def __init__(self, cancel: Callable[[], None] | None = None) -> None:
        self._cancel = cancel
        self._closed = cancel is None

    @property
    def closed(self) -> bool:
        return self._closed

    def unsubscribe(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._cancel is not None:
            self._cancel()


class Stream(Generic[T]):
    """Base for subscribable streams that can also be consumed with ``async for``."""

    def subscribe(
        self,
        on_next: Callable[[T], None],
        on_complete: Callable[[], None] | None = None,
    ) -> Subscription:
        raise NotImplementedError

    def __aiter__(self) -> AsyncIterator[T]:
        return self._iterate()

    async def _iterate(self) -> AsyncIterator[T]:
        queue: asyncio.Queue[object] = asyncio.Queue()
        subscription = self.subscribe(
            queue.put_nowait,
            lambda: queue.put_nowait(_COMPLETE),
        )
        try:
            while True:
                item = await queue.get()
                if item is _COMPLETE:
                    return
                yield item  # type: ignore[misc]
        finally:
            subscription.unsubscribe()


class Broadcast(Stream[T]):
    """Non-replaying channel: subscribers only see values published after they join."""

    def __init__(self, name: str = "broadcast") -> None:
        self._name = name
        self._observers: list[_Observer[T]] = []
        self._completed = False
        self._pending: deque[T] = deque()
        self._delivering = False

    @property
    def completed(self) -> bool:
        return self._completed

    @property
    def subscriber_count(self) -> int:
        return len(self._observers)

    def subscribe(
        self,
        on_next: Callable[[T], None],
        on_complete: Callable[[], None] | None = None,
    ) -> Subscription:
        if self._completed:
            if on_complete is not None:
                on_complete()
            return Subscription()
        observer = _Observer(on_next, on_complete)
        self._observers.append(observer)
        return Subscription(lambda: self._detach(observer))

    def publish(self, value: T) -> bool:
        """Deliver ``value`` to every subscriber; returns False once completed."""

        if self._completed:
            logger.debug("%s: publish after completion dropped", self._name)
            return False
        self._deliver(value)
        return True

    def complete(self) -> None:
        if self._completed:
            return
        self._completed = True
        observers, self._observers = self._observers, []
        for observer in observers:
            if observer.on_complete is None:
                continue
            try:
                observer.on_complete()
            except Exception:
                logger.exception("%s: completion handler failed", self._name)

    def _deliver(self, value: T) -> None:
        # Values published from inside a callback are queued so every
        # subscriber sees values in publication order.
        self._pending.append(value)
        if self._delivering:
            return
        self._delivering = True
        try:
            while self._pending:
                current = self._pending.popleft()
                for observer in list(self._observers):
                    try:
                        observer.on_next(current)
                    except Exception:
                        logger.exception("%s: subscriber failed", self._name)
        finally:
            self._delivering = False

    def _detach(self, observer: _Observer[T]) -> None:
        if observer in self._observers:
            self._observers.remove(observer)


class ReplayLatest(Broadcast[T]):
    """Holds a current value and replays it to each new subscriber.

    After :meth:`complete`, new subscribers receive only the completion
    signal; :attr:`value` still reports the last published value.
    """

    def __init__(self, initial: T, name: str = "state") -> None:
        super().__init__(name)
        self._value = initial

    @property
    def value(self) -> T:
        return self._value

    def subscribe(
        self,
        on_next: Callable[[T], None],
        on_complete: Callable[[], None] | None = None,
    ) -> Subscription:
        subscription = super().subscribe(on_next, on_complete)
        if not subscription.closed:
            try:
                on_next(self._value)
            except Exception:
                logger.exception("%s: subscriber failed", self._name)
        return subscription

    def publish(self, value: T) -> bool:
        if self._completed:
            logger.debug("%s: publish after completion dropped", self._name)
            return False
        self._value = value
        self._deliver(value)
        return True

    def select(
        self,
        selector: Callable[[T], S],
        *,
        skip_none: bool = False,
    ) -> "Selection[T, S]":
        return Selection(self, selector, skip_none=skip_none)


class Selection(Stream[S], Generic[T, S]):
    """Read-only projection of a :class:`ReplayLatest` stream.

    Consecutive equal values are suppressed per subscriber, and ``None`` is
    suppressed when ``skip_none`` is set.
    """

    def __init__(
        self,
        source: ReplayLatest[T],
        selector: Callable[[T], S],
        *,
        skip_none: bool = False,
    ) -> None:
        self._source = source
        self._selector = selector
        self._skip_none = skip_none

    @property
    def value(self) -> S:
        return self._selector(self._source.value)

    def subscribe(
        self,
        on_next: Callable[[S], None],
        on_complete: Callable[[], None] | None = None,
    ) -> Subscription:
        missing = object()
        last: list[object] = [missing]

        def _forward(state: T) -> None:
            selected = self._selector(state)
            if self._skip_none and selected is None:
                return
            if last[0] is not missing and last[0] == selected:
                return
            last[0] = selected
            on_next(selected)

        return self._source.subscribe(_forward, on_complete)


__all__ = [
    "Subscription",
    "Stream",
    "Broadcast",
    "ReplayLatest",
    "Selection",
]
