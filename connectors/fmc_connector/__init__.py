"""
FMC REST Connector package.

Provides the FMC HTTP client, the error hierarchy and the read-only API functions.
"""
from connectors.fmc_connector.request_handler import (
    FmcHttpClient,
    Response
)
from connectors.fmc_connector.exceptions import (
    FMCError,
    AuthError,
    UnauthorizedError,
    RequestError,
    FMCConnectionError,
)
from connectors.fmc_connector.models import (
    ClientConfig,
    AuthTokens,
    Domain,
    Paging,
    Page,
)
from connectors.fmc_connector.api.fmc_requests import (
    get_fmc_client,
    login,
    refresh_tokens,
    list_domains,
    list_access_policies,
    get_policy_detail,
    count_access_rules,
    list_access_rules,
)

__all__ = [
    # HTTP Client
    "FmcHttpClient",
    "Response",
    "ClientConfig",
    # Errors
    "FMCError",
    "AuthError",
    "UnauthorizedError",
    "RequestError",
    "FMCConnectionError",
    # Models
    "AuthTokens",
    "Domain",
    "Paging",
    "Page",
    # Factory
    "get_fmc_client",
    # Auth functions
    "login",
    "refresh_tokens",
    # Read functions
    "list_domains",
    "list_access_policies",
    "get_policy_detail",
    "count_access_rules",
    "list_access_rules",
]
