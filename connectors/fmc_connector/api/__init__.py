"""
FMC REST API functions subpackage.
"""
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
    "get_fmc_client",
    "login",
    "refresh_tokens",
    "list_domains",
    "list_access_policies",
    "get_policy_detail",
    "count_access_rules",
    "list_access_rules",
]
