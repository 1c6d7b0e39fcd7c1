"""Shared helpers for the transport implementation."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING

import httpx

if TYPE_CHECKING:
    from ..config import WpClientConfig


def build_default_headers(config: WpClientConfig) -> Mapping[str, str]:
    return {
        "Accept": "application/json",
        "Accept-Encoding": "gzip",
        "User-Agent": config.user_agent,
    }


def build_default_timeout(config: WpClientConfig) -> httpx.Timeout:
    return httpx.Timeout(
        connect=config.transport.timeout_connect_seconds,
        read=config.transport.timeout_read_seconds,
        write=config.transport.timeout_write_seconds,
        pool=config.transport.timeout_pool_seconds,
    )


def build_request_params(query: Mapping[str, object]) -> dict[str, str]:
    """Stringify a collection query for the wire."""

    params: dict[str, str] = {}
    for key, value in query.items():
        if value is None:
            continue
        if isinstance(value, bool):
            params[key] = "true" if value else "false"
        elif isinstance(value, str):
            params[key] = value
        elif isinstance(value, Sequence):
            params[key] = ",".join(str(item) for item in value)
        else:
            params[key] = str(value)
    return params


__all__ = [
    "build_default_headers",
    "build_default_timeout",
    "build_request_params",
]
