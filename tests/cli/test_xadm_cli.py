from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest
from click.testing import CliRunner

import xadm.interfaces.cli.__main__ as cli_main
from xadm.interfaces.cli import auth as auth_module
from xadm.interfaces.cli import context as context_module
from xadm.interfaces.cli import cli
from xadm.infrastructure.http import XoloHttpClient, server_url

FUTURE_COOKIE = "rack.session=abc123; expires=Fri, 01 Jan 2999 00:00:00 GMT"
PAST_COOKIE = "rack.session=abc123; expires=Mon, 01 Jan 2000 00:00:00 GMT"


@pytest.fixture
def config_file(tmp_path: Path, fake_server, monkeypatch) -> Path:
    path = tmp_path / "config.yaml"
    path.write_text("hostname: xolo.example.edu\nadmin: jdoe\npw: secret\n", encoding="utf-8")

    def build_fake_client(config) -> XoloHttpClient:
        client = XoloHttpClient(base_url=server_url(config.hostname))
        client.session.mount("https://", fake_server)
        return client

    monkeypatch.setattr(auth_module, "build_http_client", build_fake_client)
    monkeypatch.setattr(context_module, "build_http_client", build_fake_client)
    monkeypatch.setattr(cli_main, "configure_logging", lambda **_kwargs: None)
    return path


def _invoke(config_file: Path, *args: str, **kwargs):
    return CliRunner().invoke(cli, ["--config", str(config_file), *args], **kwargs)


def test_ping(config_file: Path, fake_server) -> None:
    fake_server.add("GET", "/ping", text="pong")

    result = _invoke(config_file, "ping")

    assert result.exit_code == 0
    assert "is responding" in result.output


def test_ping_without_pong_fails(config_file: Path, fake_server) -> None:
    fake_server.add("GET", "/ping", text="hello")

    result = _invoke(config_file, "ping")

    assert result.exit_code == 1
    assert "No pong" in result.output


def test_login_reports_expiry(config_file: Path, fake_server) -> None:
    fake_server.add("POST", "/auth/login", json_body={}, headers={"Set-Cookie": FUTURE_COOKIE})

    result = _invoke(config_file, "login")

    assert result.exit_code == 0
    assert "Logged in to https://xolo.example.edu" in result.output
    assert "session expires" in result.output


def test_login_rejected(config_file: Path, fake_server) -> None:
    fake_server.add("POST", "/auth/login", status=401, json_body={"error": "Incorrect username or password"})

    result = _invoke(config_file, "login")

    assert result.exit_code == 1
    assert "Authentication failed: Incorrect username or password" in result.output


def test_jamf_packages_lists_names(config_file: Path, fake_server) -> None:
    fake_server.add("POST", "/auth/login", json_body={}, headers={"Set-Cookie": FUTURE_COOKIE})
    fake_server.add("GET", "/jamf/package-names", json_body=["Firefox", "Zoom"])

    result = _invoke(config_file, "jamf", "packages")

    assert result.exit_code == 0
    assert "2 packages:" in result.output
    assert "Firefox" in result.output
    assert fake_server.requests[-1].headers["Cookie"] == "rack.session=abc123"


def test_titles_json_output(config_file: Path, fake_server) -> None:
    fake_server.add("POST", "/auth/login", json_body={}, headers={"Set-Cookie": FUTURE_COOKIE})
    fake_server.add("GET", "/title-editor/titles", json_body=["firefox", "zoom"])

    result = _invoke(config_file, "titles", "--json-output")

    assert result.exit_code == 0
    assert json.loads(result.output) == ["firefox", "zoom"]


def test_empty_list(config_file: Path, fake_server) -> None:
    fake_server.add("POST", "/auth/login", json_body={}, headers={"Set-Cookie": FUTURE_COOKIE})
    fake_server.add("GET", "/jamf/computer-group-names", json_body=[])

    result = _invoke(config_file, "jamf", "groups")

    assert result.exit_code == 0
    assert "No computer groups found." in result.output


def test_expired_session_asks_for_reauthentication(config_file: Path, fake_server) -> None:
    fake_server.add("POST", "/auth/login", json_body={}, headers={"Set-Cookie": PAST_COOKIE})
    fake_server.add("GET", "/jamf/category-names", json_body=["Apps"])

    result = _invoke(config_file, "jamf", "categories")

    assert result.exit_code == 1
    assert "Server session expired, please re-authenticate." in result.output
    assert fake_server.paths() == ["/auth/login"]


def test_password_prompt_when_not_configured(config_file: Path, fake_server) -> None:
    config_file.write_text("hostname: xolo.example.edu\nadmin: jdoe\n", encoding="utf-8")
    fake_server.add("POST", "/auth/login", json_body={}, headers={"Set-Cookie": FUTURE_COOKIE})

    result = _invoke(config_file, "login", input="typed-secret\n")

    assert result.exit_code == 0
    assert b'"password": "typed-secret"' in fake_server.requests[0].body


def test_missing_config(tmp_path: Path, config_file: Path) -> None:
    result = _invoke(tmp_path / "nope.yaml", "ping")

    assert result.exit_code == 1
    assert "No xadm config" in result.output


def test_log_file_option_reaches_logging_setup(tmp_path: Path, config_file: Path, fake_server, monkeypatch) -> None:
    calls: list[dict] = []
    monkeypatch.setattr(cli_main, "configure_logging", lambda **kwargs: calls.append(kwargs))
    fake_server.add("GET", "/ping", text="pong")
    log_file = tmp_path / "xadm.log"

    result = _invoke(config_file, "--log-file", str(log_file), "-v", "ping")

    assert result.exit_code == 0
    assert calls == [{"level": logging.DEBUG, "log_file": str(log_file)}]
