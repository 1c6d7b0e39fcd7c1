"""Per-endpoint item field filters."""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import Awaitable, Callable, Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType

from ..core.errors import WpFilterError

FieldTransform = Callable[[Mapping[str, object]], object | Awaitable[object]]


@dataclass(slots=True, frozen=True)
class FieldFilter:
    """Field filter applied to each raw item of one endpoint.

    ``include`` keeps only the named fields, ``exclude`` drops fields, and each
    entry of ``transforms`` sets a field from a callable that receives a copy
    of the raw item. Transforms may be coroutine functions.
    """

    include: Sequence[str] | None = None
    exclude: Sequence[str] = ()
    transforms: Mapping[str, FieldTransform] = field(default_factory=dict)

    def __post_init__(self) -> None:
        for name in ("include", "exclude"):
            value = getattr(self, name)
            if value is None:
                continue
            if isinstance(value, str):
                raise TypeError(f"{name} must be a sequence of str, not str")
            object.__setattr__(self, name, tuple(value))
        for key, transform in self.transforms.items():
            if not callable(transform):
                raise TypeError(f"transform for {key!r} must be callable")
        object.__setattr__(self, "transforms", MappingProxyType(dict(self.transforms)))


async def apply_filter(item: Mapping[str, object], spec: FieldFilter | None) -> dict[str, object]:
    """Return a filtered shallow copy of ``item``; ``item`` is never mutated."""

    result = dict(item)
    if spec is None:
        return result
    if spec.include is not None:
        result = {key: value for key, value in result.items() if key in spec.include}
    for key in spec.exclude:
        result.pop(key, None)
    for key, transform in spec.transforms.items():
        value = transform(dict(item))
        if inspect.isawaitable(value):
            value = await value
        result[key] = value
    return result


async def process_batch(
    items: Sequence[Mapping[str, object]],
    spec: FieldFilter | None,
    *,
    endpoint: str,
) -> list[dict[str, object]]:
    """Filter every item concurrently, preserving order.

    The first failing item fails the whole batch; unfinished transforms are
    cancelled.
    """

    async def _one(index: int, item: Mapping[str, object]) -> dict[str, object]:
        try:
            return await apply_filter(item, spec)
        except Exception as exc:
            raise WpFilterError(
                f"field filter failed for item {index} of {endpoint}",
                endpoint=endpoint,
                index=index,
            ) from exc

    tasks = [asyncio.ensure_future(_one(index, item)) for index, item in enumerate(items)]
    try:
        return list(await asyncio.gather(*tasks))
    except BaseException:
        for task in tasks:
            if not task.done():
                task.cancel()
            elif not task.cancelled():
                task.exception()
        # Let cancelled transforms unwind before the failure propagates.
        await asyncio.gather(*tasks, return_exceptions=True)
        raise


__all__ = [
    "FieldTransform",
    "FieldFilter",
    "apply_filter",
    "process_batch",
]
