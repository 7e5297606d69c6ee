#!/usr/bin/env python3
"""
Command line explorer for FMC domains, access policies and access rules.

Examples:
    python fmc_cli.py login
    python fmc_cli.py domains
    python fmc_cli.py policies --domain <uuid> --limit 50 --offset 0
    python fmc_cli.py rules --domain <uuid> --policy <id> --limit 25 --offset 25
    python fmc_cli.py rules-count --domain <uuid> --policy <id>

Credentials default to FMC_USERNAME / FMC_PASSWORD. Pass --token to reuse an
access token instead of logging in on every call.
"""
import argparse
import json
import logging
import sys
from typing import Any, List, Optional

from config.config import FMC_USERNAME, FMC_PASSWORD
from config.logging_config import setup_logging
from connectors.fmc_connector import (
    FMCError,
    login,
    refresh_tokens,
    list_domains,
    list_access_policies,
    get_policy_detail,
    count_access_rules,
    list_access_rules,
)

logger = logging.getLogger("fmc_explorer.cli")


def _dump(data: Any) -> None:
    if hasattr(data, "model_dump"):
        data = data.model_dump()
    elif isinstance(data, list):
        data = [item.model_dump() if hasattr(item, "model_dump") else item for item in data]
    print(json.dumps(data, indent=2, default=str))


def _access_token(args: argparse.Namespace) -> str:
    if args.token:
        return args.token
    return login(args.username, args.password).access_token


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Explore FMC access policies over the REST API")
    parser.add_argument("--username", default=FMC_USERNAME, help="FMC username (default: $FMC_USERNAME)")
    parser.add_argument("--password", default=FMC_PASSWORD, help="FMC password (default: $FMC_PASSWORD)")
    parser.add_argument("--token", help="Existing X-auth-access-token, skips login")
    parser.add_argument("--log-level", help="Override LOGGING_LEVEL")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("login", help="Generate a token pair")

    refresh = sub.add_parser("refresh", help="Refresh a token pair")
    refresh.add_argument("--refresh-token", required=True)

    sub.add_parser("domains", help="List domains")

    policies = sub.add_parser("policies", help="List one page of access policies")
    policies.add_argument("--domain", required=True, help="Domain UUID")
    policies.add_argument("--limit", type=int, default=50)
    policies.add_argument("--offset", type=int, default=0)

    policy = sub.add_parser("policy", help="Show one access policy")
    policy.add_argument("--domain", required=True, help="Domain UUID")
    policy.add_argument("--policy", required=True, help="Access policy id")

    count = sub.add_parser("rules-count", help="Count the rules of an access policy")
    count.add_argument("--domain", required=True, help="Domain UUID")
    count.add_argument("--policy", required=True, help="Access policy id")

    rules = sub.add_parser("rules", help="List one page of access rules")
    rules.add_argument("--domain", required=True, help="Domain UUID")
    rules.add_argument("--policy", required=True, help="Access policy id")
    rules.add_argument("--limit", type=int, default=25)
    rules.add_argument("--offset", type=int, default=0)

    return parser


def run(args: argparse.Namespace) -> None:
    if args.command == "login":
        _dump(login(args.username, args.password))
    elif args.command == "refresh":
        if not args.token:
            raise SystemExit("--token is required to refresh")
        _dump(refresh_tokens(args.token, args.refresh_token))
    elif args.command == "domains":
        _dump(list_domains(_access_token(args)))
    elif args.command == "policies":
        _dump(list_access_policies(_access_token(args), args.domain, limit=args.limit, offset=args.offset))
    elif args.command == "policy":
        _dump(get_policy_detail(_access_token(args), args.domain, args.policy))
    elif args.command == "rules-count":
        print(count_access_rules(_access_token(args), args.domain, args.policy))
    elif args.command == "rules":
        _dump(
            list_access_rules(_access_token(args), args.domain, args.policy, limit=args.limit, offset=args.offset)
        )


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    try:
        run(args)
    except FMCError as err:
        logger.error("FMC call failed: %s", err)
        print(f"❌ {err}", file=sys.stderr)
        return 1
    except ValueError as err:
        print(f"❌ {err}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
