"""
Unit tests for the FMC HTTP client.

Usage:
    uv run pytest connectors/fmc_connector/tests/test_request_handler.py -v
"""
from unittest.mock import MagicMock

import pytest
import requests

from connectors.fmc_connector import (
    ClientConfig,
    FmcHttpClient,
    FMCConnectionError,
    RequestError,
)
from connectors.fmc_connector.models import default_validate_status


@pytest.mark.parametrize("status,accepted", [(200, True), (204, True), (401, True), (499, True), (500, False), (199, False)])
def test_default_status_predicate(status, accepted):
    assert default_validate_status(status) is accepted


def test_builds_url_and_forwards_settings(fmc_client, http_response):
    fmc_client.session.request.return_value = http_response(200, {"items": []})

    response = fmc_client.get("/api/fmc_platform/v1/info/domain", headers={"X-auth-access-token": "t"})

    assert response.ok
    assert response.json == {"items": []}
    fmc_client.session.request.assert_called_once_with(
        method="GET",
        url="https://fmc.test/api/fmc_platform/v1/info/domain",
        headers={"X-auth-access-token": "t"},
        params=None,
        auth=None,
        verify=True,
        timeout=5.0,
    )


def test_no_content_has_no_json(fmc_client, http_response):
    fmc_client.session.request.return_value = http_response(204, headers={"X-auth-access-token": "abc"})

    response = fmc_client.post("api/fmc_platform/v1/auth/generatetoken")

    assert response.status_code == 204
    assert response.json is None
    assert response.headers["x-auth-access-token"] == "abc"


def test_non_json_body_is_kept_as_text(fmc_client, http_response):
    fmc_client.session.request.return_value = http_response(502, text="<html>gateway</html>", reason="Bad Gateway")
    fmc_client.config.validate_status = lambda status: True

    response = fmc_client.get("anything")

    assert response.json is None
    assert response.text == "<html>gateway</html>"
    assert response.reason == "Bad Gateway"
    assert not response.ok


def test_server_error_is_rejected_by_default_predicate(fmc_client, http_response):
    fmc_client.session.request.return_value = http_response(503, reason="Service Unavailable")

    with pytest.raises(FMCConnectionError) as exc:
        fmc_client.get("api/fmc_platform/v1/info/domain")

    assert exc.value.status_code == 503
    assert "503 Service Unavailable" in str(exc.value)
    assert isinstance(exc.value, RequestError)


def test_custom_status_predicate():
    client = FmcHttpClient(ClientConfig(base_url="https://fmc.test", validate_status=lambda s: s == 200))
    client.session.request = MagicMock(return_value=requests.Response())
    client.session.request.return_value.status_code = 404
    client.session.request.return_value._content = b""

    with pytest.raises(FMCConnectionError):
        client.get("api/fmc_platform/v1/info/domain")


def test_transport_failure_raises_connection_error(fmc_client):
    fmc_client.session.request.side_effect = requests.ConnectionError("connection refused")

    with pytest.raises(FMCConnectionError, match="connection refused") as exc:
        fmc_client.get("api/fmc_platform/v1/info/domain")

    assert exc.value.status_code is None
