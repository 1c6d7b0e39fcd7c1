from __future__ import annotations

import pytest

from wp_api_client import FieldFilter, WpClient
from wp_api_client.core.async_transport import AsyncTransport
from wp_api_client.core.errors import WpValidationError
from tests.shared.payloads import make_page_payload, make_posts, make_wp_error
from tests.shared.transport import AsyncSequencedClient, Response, build_config


def _wp_headers(total: int, total_pages: int) -> dict[str, str]:
    return {"X-WP-Total": str(total), "X-WP-TotalPages": str(total_pages)}


@pytest.mark.asyncio
async def test_posts_scenario_over_http_transport():
    http = AsyncSequencedClient(
        [
            Response(200, make_posts(1, 6), _wp_headers(18, 3)),
            Response(200, make_posts(7, 6), _wp_headers(18, 3)),
            Response(200, make_posts(1, 6), _wp_headers(18, 3)),
        ]
    )
    config = build_config(filters={"posts": FieldFilter(transforms={"title": lambda p: p["title"]["rendered"]})})
    async with WpClient(config=config, transport=AsyncTransport(config, client=http)) as client:
        posts = client.collection("posts")

        state = await posts.get()
        assert len(state.data) == 6
        assert state.pagination.has_more is True
        first_page = state.data

        state = await posts.more()
        assert len(state.data) == 12
        assert state.data[:6] == first_page
        assert state.pagination.current_page == 2

        state = await posts.prev()
        assert len(state.data) == 6
        assert state.pagination.current_page == 1
        assert state.data[0]["title"] == "Post 1"

    assert [params["page"] for _, params in http.calls] == ["1", "2", "1"]
    assert http.calls[0][0] == "https://blog.example.test/wp-json/wp/v2/posts"


@pytest.mark.asyncio
async def test_wordpress_error_body_lands_in_state_and_error_channel():
    http = AsyncSequencedClient(
        [
            Response(200, make_page_payload(make_posts(1, 6), current_page=1, total_pages=2, total_objects=12)),
            Response(400, make_wp_error()),
        ]
    )
    config = build_config()
    async with WpClient(config=config, transport=AsyncTransport(config, client=http)) as client:
        broadcast = []
        client.errors.subscribe(broadcast.append)
        posts = client.collection("posts")
        await posts.get()

        state = await posts.next()

        assert isinstance(state.error, WpValidationError)
        assert state.error.code == "rest_invalid_param"
        assert len(state.data) == 6
        assert state.pagination.current_page == 1
        assert broadcast == [state.error]
