"""
Tests for the fmc_cli command line front end.

The API functions are patched in the fmc_cli namespace; no request is sent.
"""
import json
from unittest.mock import patch

import pytest

import fmc_cli
from connectors.fmc_connector import AuthTokens, Domain, Page, UnauthorizedError


@pytest.fixture
def mock_login():
    with patch.object(fmc_cli, "login", return_value=AuthTokens(access_token="acc", refresh_token="ref")) as m:
        yield m


def test_login_prints_tokens(mock_login, capsys):
    assert fmc_cli.main(["--username", "api-user", "--password", "secret", "login"]) == 0

    assert json.loads(capsys.readouterr().out) == {"access_token": "acc", "refresh_token": "ref"}
    mock_login.assert_called_once_with("api-user", "secret")


def test_domains_logs_in_first(mock_login, capsys):
    domains = [Domain(uuid="d1", name="Global", type="Domain")]
    with patch.object(fmc_cli, "list_domains", return_value=domains) as list_domains:
        assert fmc_cli.main(["--username", "u", "--password", "p", "domains"]) == 0

    list_domains.assert_called_once_with("acc")
    assert json.loads(capsys.readouterr().out) == [{"uuid": "d1", "name": "Global", "type": "Domain"}]


def test_rules_page_with_existing_token(mock_login, capsys):
    page = Page(items=[{"id": "r1"}], paging={"count": 1, "offset": 25, "limit": 25})
    with patch.object(fmc_cli, "list_access_rules", return_value=page) as list_rules:
        code = fmc_cli.main(
            ["--token", "tok", "rules", "--domain", "d1", "--policy", "p1", "--limit", "25", "--offset", "25"]
        )

    assert code == 0
    mock_login.assert_not_called()
    list_rules.assert_called_once_with("tok", "d1", "p1", limit=25, offset=25)
    assert json.loads(capsys.readouterr().out)["paging"]["count"] == 1


def test_rules_count_prints_integer(capsys):
    with patch.object(fmc_cli, "count_access_rules", return_value=342):
        assert fmc_cli.main(["--token", "tok", "rules-count", "--domain", "d1", "--policy", "p1"]) == 0

    assert capsys.readouterr().out.strip() == "342"


def test_fmc_error_exit_code(capsys):
    with patch.object(fmc_cli, "list_access_policies", side_effect=UnauthorizedError("Unauthorized", status_code=401)):
        assert fmc_cli.main(["--token", "expired", "policies", "--domain", "d1"]) == 1

    assert "Unauthorized" in capsys.readouterr().err


def test_refresh_prints_new_tokens(capsys):
    tokens = AuthTokens(access_token="acc-2", refresh_token="ref-2")
    with patch.object(fmc_cli, "refresh_tokens", return_value=tokens) as refresh:
        assert fmc_cli.main(["--token", "acc", "refresh", "--refresh-token", "ref"]) == 0

    refresh.assert_called_once_with("acc", "ref")
    assert json.loads(capsys.readouterr().out) == {"access_token": "acc-2", "refresh_token": "ref-2"}


def test_refresh_requires_access_token():
    with patch.object(fmc_cli, "refresh_tokens") as refresh:
        with pytest.raises(SystemExit, match="--token is required"):
            fmc_cli.main(["refresh", "--refresh-token", "ref"])

    refresh.assert_not_called()


def test_policy_prints_document(mock_login, capsys):
    document = {"id": "p1", "name": "Corporate"}
    with patch.object(fmc_cli, "get_policy_detail", return_value=document) as detail:
        assert fmc_cli.main(["--token", "tok", "policy", "--domain", "d1", "--policy", "p1"]) == 0

    mock_login.assert_not_called()
    detail.assert_called_once_with("tok", "d1", "p1")
    assert json.loads(capsys.readouterr().out) == document


def test_missing_credentials_exit_code(capsys):
    with patch.object(fmc_cli, "login", side_effect=ValueError("username and password are required")):
        assert fmc_cli.main(["--username", "", "--password", "", "login"]) == 2

    assert "username and password are required" in capsys.readouterr().err
