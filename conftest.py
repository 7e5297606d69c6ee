"""
Shared pytest fixtures.

HTTP calls are never sent: tests patch requests.Session.request on the client
under test and hand back real requests.Response objects built here.
"""
import json
from typing import Any, Callable, Dict, Optional
from unittest.mock import MagicMock

import pytest
import requests
from requests.structures import CaseInsensitiveDict

from connectors.fmc_connector.models import ClientConfig
from connectors.fmc_connector.request_handler import FmcHttpClient

FMC_TEST_URL = "https://fmc.test"


def make_http_response(
    status_code: int,
    json_body: Optional[Any] = None,
    headers: Optional[Dict[str, str]] = None,
    reason: str = "OK",
    text: Optional[str] = None,
) -> requests.Response:
    """Build a requests.Response the way the transport adapter would."""
    response = requests.Response()
    response.status_code = status_code
    response.reason = reason
    response.headers = CaseInsensitiveDict(headers or {})
    if text is not None:
        response._content = text.encode("utf-8")
    elif json_body is not None:
        response._content = json.dumps(json_body).encode("utf-8")
        response.headers.setdefault("Content-Type", "application/json")
    else:
        response._content = b""
    response.encoding = "utf-8"
    return response


@pytest.fixture
def http_response() -> Callable[..., requests.Response]:
    return make_http_response


@pytest.fixture
def fmc_client() -> FmcHttpClient:
    """FMC client whose session.request is a MagicMock."""
    client = FmcHttpClient(ClientConfig(base_url=FMC_TEST_URL + "/", verify_ssl=True, timeout=5))
    client.session.request = MagicMock()
    return client
