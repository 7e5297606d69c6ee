"""
FMC REST API functions for authentication, domains, access policies and rules.

Every function issues exactly one request, checks the status code and reshapes
the response. Tokens are passed in explicitly; nothing is cached between calls.
Paging is driven by the caller through limit/offset.
"""
import logging
from typing import Optional, Dict, List, Any, NoReturn

from pydantic import ValidationError
from requests.auth import HTTPBasicAuth

from config.config import FMC_BASE_URL, FMC_VERIFY_SSL, FMC_TIMEOUT
from connectors.fmc_connector.exceptions import AuthError, UnauthorizedError, RequestError, FMCConnectionError
from connectors.fmc_connector.models import AuthTokens, ClientConfig, Domain, Page
from connectors.fmc_connector.request_handler import FmcHttpClient, Response

logger = logging.getLogger("fmc_explorer.connectors.fmc.api")

ACCESS_TOKEN_HEADER = "X-auth-access-token"
REFRESH_TOKEN_HEADER = "X-auth-refresh-token"

GENERATE_TOKEN_PATH = "api/fmc_platform/v1/auth/generatetoken"
REFRESH_TOKEN_PATH = "api/fmc_platform/v1/auth/refreshtoken"
DOMAIN_INFO_PATH = "api/fmc_platform/v1/info/domain"
ACCESS_POLICIES_PATH = "api/fmc_config/v1/domain/{domain_uuid}/policy/accesspolicies"

_CLIENT: Optional[FmcHttpClient] = None


def get_fmc_client() -> FmcHttpClient:
    """
    Factory returning the shared FMC client built from config.

    Returns:
        FmcHttpClient configured from the FMC_* environment settings
    """
    global _CLIENT
    if _CLIENT is None:
        _CLIENT = FmcHttpClient(
            ClientConfig(base_url=FMC_BASE_URL, verify_ssl=FMC_VERIFY_SSL, timeout=FMC_TIMEOUT)
        )
    return _CLIENT


def _token_headers(access_token: str) -> Dict[str, str]:
    return {ACCESS_TOKEN_HEADER: access_token}


def _policy_path(domain_uuid: str, policy_id: Optional[str] = None) -> str:
    path = ACCESS_POLICIES_PATH.format(domain_uuid=domain_uuid)
    if policy_id is not None:
        path = f"{path}/{policy_id}"
    return path


def _paging_params(limit: int, offset: int) -> Dict[str, Any]:
    return {"expanded": "true", "limit": limit, "offset": offset}


def _fail(error_cls: type, label: str, response: Response) -> NoReturn:
    message = f"{label} failed: {response.status_code} {response.reason}"
    logger.error("%s (body=%s)", message, response.text[:500])
    raise error_cls(message, status_code=response.status_code, status_text=response.reason)


def _check_unauthorized(response: Response) -> None:
    if response.status_code == 401:
        logger.error("FMC rejected the access token: %s %s", response.status_code, response.reason)
        raise UnauthorizedError("Unauthorized", status_code=401, status_text=response.reason)


def _post_auth(client: FmcHttpClient, label: str, path: str, **kwargs: Any) -> Response:
    """POST to a token endpoint; statuses rejected by the client still surface as AuthError."""
    try:
        return client.post(path, **kwargs)
    except FMCConnectionError as err:
        if err.status_code is None:
            raise
        message = f"{label} failed: {err.status_code} {err.status_text}"
        logger.error("%s", message)
        raise AuthError(message, status_code=err.status_code, status_text=err.status_text) from err


def _json_body(response: Response, label: str) -> Dict[str, Any]:
    data = response.json
    if data is None:
        return {}
    if not isinstance(data, dict):
        logger.error("%s: expected a JSON object, got %s", label, type(data).__name__)
        raise RequestError(
            f"{label} failed: unexpected response body",
            status_code=response.status_code,
            status_text=response.reason,
        )
    return data


def _page(response: Response, label: str) -> Page:
    try:
        return Page.model_validate(_json_body(response, label))
    except ValidationError as err:
        logger.error("%s: malformed page: %s", label, err)
        raise RequestError(
            f"{label} failed: malformed response body",
            status_code=response.status_code,
            status_text=response.reason,
        ) from err


def login(username: str, password: str, client: Optional[FmcHttpClient] = None) -> AuthTokens:
    """
    Generate a token pair with HTTP basic auth.

    Args:
        username: FMC username
        password: FMC password
        client: Optional client, defaults to get_fmc_client()

    Returns:
        AuthTokens read from the X-auth-* response headers

    Raises:
        AuthError: status other than 200/204, or no access token header
    """
    if not username or not password:
        raise ValueError("username and password are required")

    client = client or get_fmc_client()
    logger.info("Requesting FMC token for user %s", username)
    response = _post_auth(client, "Auth", GENERATE_TOKEN_PATH, auth=HTTPBasicAuth(username, password))

    if response.status_code not in (200, 204):
        _fail(AuthError, "Auth", response)

    access_token = response.headers.get(ACCESS_TOKEN_HEADER)
    refresh_token = response.headers.get(REFRESH_TOKEN_HEADER)
    if not access_token:
        logger.error("Token response %s carried no %s header", response.status_code, ACCESS_TOKEN_HEADER)
        raise AuthError(
            f"Missing {ACCESS_TOKEN_HEADER} header",
            status_code=response.status_code,
            status_text=response.reason,
        )

    logger.info("Authentication successful. Token acquired.")
    return AuthTokens(access_token=access_token, refresh_token=refresh_token)


def refresh_tokens(access_token: str, refresh_token: str, client: Optional[FmcHttpClient] = None) -> AuthTokens:
    """
    Refresh a token pair.

    A token whose header is missing from the response is kept as it was.

    Raises:
        AuthError: status other than 200/204
    """
    client = client or get_fmc_client()
    response = _post_auth(
        client,
        "Refresh",
        REFRESH_TOKEN_PATH,
        headers={ACCESS_TOKEN_HEADER: access_token, REFRESH_TOKEN_HEADER: refresh_token},
    )

    if response.status_code not in (200, 204):
        _fail(AuthError, "Refresh", response)

    logger.info("FMC tokens refreshed")
    return AuthTokens(
        access_token=response.headers.get(ACCESS_TOKEN_HEADER) or access_token,
        refresh_token=response.headers.get(REFRESH_TOKEN_HEADER) or refresh_token,
    )


def list_domains(access_token: str, client: Optional[FmcHttpClient] = None) -> List[Domain]:
    """
    List the domains visible to the token owner.

    Returns:
        Domains in upstream order, empty when the body has no items

    Raises:
        UnauthorizedError: 401
        RequestError: any other status than 200
    """
    client = client or get_fmc_client()
    response = client.get(DOMAIN_INFO_PATH, headers=_token_headers(access_token))

    _check_unauthorized(response)
    if response.status_code != 200:
        _fail(RequestError, "Domains", response)

    items = _json_body(response, "Domains").get("items") or []
    logger.info("Found %d domains", len(items))
    try:
        return [Domain.model_validate(item) for item in items]
    except ValidationError as err:
        logger.error("Domains: malformed domain entry: %s", err)
        raise RequestError(
            "Domains failed: malformed response body",
            status_code=response.status_code,
            status_text=response.reason,
        ) from err


def list_access_policies(
    access_token: str,
    domain_uuid: str,
    limit: int = 50,
    offset: int = 0,
    client: Optional[FmcHttpClient] = None,
) -> Page:
    """
    Fetch one page of access policies in a domain.

    Args:
        access_token: Valid FMC access token
        domain_uuid: Domain UUID
        limit: Page size
        offset: Index of the first policy

    Returns:
        Page with the policies and FMC paging metadata

    Raises:
        UnauthorizedError: 401
        RequestError: any other status than 200
    """
    client = client or get_fmc_client()
    response = client.get(
        _policy_path(domain_uuid),
        headers=_token_headers(access_token),
        params=_paging_params(limit, offset),
    )

    _check_unauthorized(response)
    if response.status_code != 200:
        _fail(RequestError, "Policies", response)

    return _page(response, "Policies")


def get_policy_detail(
    access_token: str,
    domain_uuid: str,
    policy_id: str,
    client: Optional[FmcHttpClient] = None,
) -> Dict[str, Any]:
    """Fetch a single access policy document."""
    client = client or get_fmc_client()
    response = client.get(_policy_path(domain_uuid, policy_id), headers=_token_headers(access_token))

    _check_unauthorized(response)
    if response.status_code != 200:
        _fail(RequestError, "Policy detail", response)

    return _json_body(response, "Policy detail")


def count_access_rules(
    access_token: str,
    domain_uuid: str,
    policy_id: str,
    client: Optional[FmcHttpClient] = None,
) -> int:
    """
    Count the rules of a policy by requesting a single rule and reading paging.count.

    Returns:
        paging.count, else the top-level count, else 0. A 404 (policy without
        rules, or unknown policy) also counts as 0.

    Raises:
        UnauthorizedError: 401
        RequestError: any other status than 200/404
    """
    client = client or get_fmc_client()
    response = client.get(
        f"{_policy_path(domain_uuid, policy_id)}/accessrules",
        headers=_token_headers(access_token),
        params=_paging_params(1, 0),
    )

    _check_unauthorized(response)
    if response.status_code == 404:
        logger.info("No access rules found for policy %s", policy_id)
        return 0
    if response.status_code != 200:
        _fail(RequestError, "Rules count", response)

    data = _json_body(response, "Rules count")
    paging = data.get("paging")
    count = paging.get("count") if isinstance(paging, dict) else None
    if count is None:
        count = data.get("count")
    try:
        return int(count or 0)
    except (TypeError, ValueError) as err:
        logger.error("Rules count: unexpected count %r", count)
        raise RequestError(
            f"Rules count failed: unexpected count {count!r}",
            status_code=response.status_code,
            status_text=response.reason,
        ) from err


def list_access_rules(
    access_token: str,
    domain_uuid: str,
    policy_id: str,
    limit: int = 25,
    offset: int = 0,
    client: Optional[FmcHttpClient] = None,
) -> Page:
    """
    Fetch one page of access rules of a policy.

    Raises:
        UnauthorizedError: 401
        RequestError: any other status than 200
    """
    client = client or get_fmc_client()
    response = client.get(
        f"{_policy_path(domain_uuid, policy_id)}/accessrules",
        headers=_token_headers(access_token),
        params=_paging_params(limit, offset),
    )

    _check_unauthorized(response)
    if response.status_code != 200:
        _fail(RequestError, "Rules", response)

    return _page(response, "Rules")
