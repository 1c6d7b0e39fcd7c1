from __future__ import annotations

import pytest

from wp_api_client.core.errors import (
    WpApiError,
    WpFilterError,
    WpProtocolError,
    WpServerError,
    WpValidationError,
    classify_http_error,
)
from tests.shared.payloads import make_wp_error


def test_classify_2xx_is_success():
    assert classify_http_error([], http_status=200) is None
    assert classify_http_error({"data": []}, http_status=201) is None


def test_classify_400_maps_to_validation_error_with_code():
    err = classify_http_error(make_wp_error(), http_status=400)
    assert isinstance(err, WpValidationError)
    assert err.code == "rest_invalid_param"
    assert err.http_status == 400
    assert str(err) == "Invalid parameter(s): page"


def test_classify_500_maps_to_server_error():
    err = classify_http_error({"code": "internal", "message": "boom"}, http_status=500)
    assert isinstance(err, WpServerError)
    assert err.cause == "server"


def test_classify_redirect_is_protocol_error():
    err = classify_http_error({}, http_status=302)
    assert isinstance(err, WpProtocolError)


def test_classify_missing_status_is_protocol_error():
    assert isinstance(classify_http_error({}, http_status=None), WpProtocolError)


def test_classify_uses_default_message_for_list_body():
    err = classify_http_error([1, 2], http_status=404)
    assert isinstance(err, WpValidationError)
    assert err.code is None
    assert "request failed" in str(err)


def test_filter_error_carries_endpoint_and_index():
    err = WpFilterError("filter failed", endpoint="posts", index=3)
    assert isinstance(err, WpApiError)
    assert err.endpoint == "posts"
    assert err.index == 3
    assert err.cause == "filter"


def test_all_errors_share_base_class():
    with pytest.raises(WpApiError):
        raise WpProtocolError("bad shape")
