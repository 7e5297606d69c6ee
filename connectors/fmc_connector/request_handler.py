"""
HTTP client for the Cisco FMC REST API.

The client only carries connection settings. Tokens are never stored on it:
every call receives the headers it needs from the API functions.
"""
from __future__ import annotations

import logging
import requests
import urllib3
from requests.auth import HTTPBasicAuth
from requests.structures import CaseInsensitiveDict
from typing import Optional, Any, Dict, Tuple

from connectors.fmc_connector.exceptions import FMCConnectionError
from connectors.fmc_connector.models import ClientConfig

logger = logging.getLogger("fmc_explorer.connectors.fmc.request_handler")


class Response:
    """Lightweight response wrapper for consistent API handling."""

    def __init__(
        self,
        text: str,
        status_code: int,
        json: Optional[Any] = None,
        headers: Optional[Dict[str, str]] = None,
        reason: str = "",
    ) -> None:
        self.text = text
        self.status_code = status_code
        self.json = json
        self.headers = CaseInsensitiveDict(headers or {})
        self.reason = reason

    @property
    def ok(self) -> bool:
        """Returns True if status code is 2xx."""
        return 200 <= self.status_code < 300

    def __repr__(self) -> str:
        return f"Response(status_code={self.status_code}, text_length={len(self.text)})"


class FmcHttpClient:
    """
    Simple HTTP client for the FMC REST API.

    Usage:
        client = FmcHttpClient(ClientConfig(base_url="https://fmcrestapisandbox.cisco.com"))
        response = client.get(
            "api/fmc_platform/v1/info/domain",
            headers={"X-auth-access-token": token},
        )
    """

    def __init__(self, config: ClientConfig) -> None:
        self.config = config
        if not config.verify_ssl:
            # Lab FMCs commonly run with self-signed certs
            urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)
        self._base_url = config.base_url.rstrip("/")
        self.session = requests.Session()
        self.session.headers.update({"Accept": "application/json"})

    def _handle_response(self, response: requests.Response) -> Tuple[str, Optional[Any]]:
        """Handle response, including 204 No Content."""
        if response.status_code == 204 or not response.text.strip():
            return response.text, None
        try:
            return response.text, response.json()
        except ValueError:
            logger.debug("Response body is not JSON.")
            return response.text, None

    def _send_request(
        self,
        method: str,
        path: str,
        headers: Optional[Dict[str, str]] = None,
        params: Optional[Dict[str, Any]] = None,
        auth: Optional[HTTPBasicAuth] = None,
    ) -> Response:
        """
        Send one HTTP request to FMC.

        Args:
            method: HTTP method (GET, POST)
            path: API path (appended to base_url)
            headers: Extra request headers, e.g. the X-auth-* tokens
            params: Query string parameters
            auth: Basic auth credentials, only used for token generation

        Returns:
            Response object with text, status_code, json, headers and reason

        Raises:
            FMCConnectionError: transport failure or a status rejected by
                ClientConfig.validate_status
        """
        url = f"{self._base_url}/{path.lstrip('/')}"
        logger.info("FMC %s: %s", method.upper(), url)
        if params:
            logger.debug("Query params: %s", params)

        try:
            response = self.session.request(
                method=method.upper(),
                url=url,
                headers=headers,
                params=params,
                auth=auth,
                verify=self.config.verify_ssl,
                timeout=self.config.timeout,
            )
        except requests.RequestException as err:
            logger.error("FMC request error: %s", err)
            raise FMCConnectionError(f"Request to {url} failed: {err}") from err

        logger.debug("Response status: %s", response.status_code)
        if not self.config.validate_status(response.status_code):
            logger.error("FMC API Error (%s): %s", response.status_code, response.text[:500])
            raise FMCConnectionError(
                f"Request failed with status code {response.status_code} {response.reason}",
                status_code=response.status_code,
                status_text=response.reason or "",
            )

        text, json_data = self._handle_response(response)
        return Response(text, response.status_code, json_data, dict(response.headers), response.reason or "")

    def get(self, path: str, headers: Optional[Dict[str, str]] = None, params: Optional[Dict[str, Any]] = None) -> Response:
        """Send GET request."""
        return self._send_request("GET", path, headers=headers, params=params)

    def post(
        self,
        path: str,
        headers: Optional[Dict[str, str]] = None,
        params: Optional[Dict[str, Any]] = None,
        auth: Optional[HTTPBasicAuth] = None,
    ) -> Response:
        """Send POST request with an empty body."""
        return self._send_request("POST", path, headers=headers, params=params, auth=auth)
