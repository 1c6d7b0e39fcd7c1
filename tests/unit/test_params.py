from __future__ import annotations

from wp_api_client.config import WpClientConfig
from wp_api_client.core.transport_shared import (
    build_default_headers,
    build_default_timeout,
    build_request_params,
)


def test_build_request_params_stringifies_values():
    params = build_request_params(
        {"page": 2, "per_page": 6, "_embed": True, "sticky": False, "categories": [3, 5], "search": "wp"}
    )
    assert params == {
        "page": "2",
        "per_page": "6",
        "_embed": "true",
        "sticky": "false",
        "categories": "3,5",
        "search": "wp",
    }


def test_build_request_params_drops_none():
    assert build_request_params({"page": 1, "author": None}) == {"page": "1"}


def test_default_headers_and_timeout_follow_config():
    cfg = WpClientConfig(user_agent="agent/1.0")
    assert build_default_headers(cfg)["User-Agent"] == "agent/1.0"
    timeout = build_default_timeout(cfg)
    assert timeout.connect == cfg.transport.timeout_connect_seconds
    assert timeout.read == cfg.transport.timeout_read_seconds
