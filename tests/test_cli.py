"""CLI commands against a mocked admin endpoint."""

import base64
import json

import httpx
import pytest
from click.testing import CliRunner

from pulsar_admin.cli import main as cli_main
from pulsar_admin.client import AsyncPulsarAdmin
from pulsar_admin.protocol.batch import pack_batch
from pulsar_admin.protocol.response import BATCH_HEADER


@pytest.fixture
def config_file(tmp_path, monkeypatch):
    path = tmp_path / "config.json"
    monkeypatch.setattr(cli_main, "CONFIG_FILE", path)
    return path


@pytest.fixture
def seen_requests(monkeypatch):
    """Route CLI clients to a mock transport; returns the list of seen requests."""
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        path = request.url.path
        if path.endswith("/subscriptions"):
            return httpx.Response(200, json=["audit", "billing"])
        if "/position/" in path:
            return httpx.Response(
                200,
                headers={"X-Pulsar-Message-ID": "8:1:-1", BATCH_HEADER: "2", "X-Pulsar-PROPERTY-app": "shop"},
                content=pack_batch([(b"first", {}), (b"\xff\xfe", {})]),
            )
        if path.endswith("/subscription/missing"):
            return httpx.Response(404, text="Subscription not found")
        return httpx.Response(204)

    monkeypatch.setattr(
        cli_main, "_get_client",
        lambda: AsyncPulsarAdmin(base_url="http://broker:8080", transport=httpx.MockTransport(handler)),
    )
    return seen


def test_config_set_and_show(config_file):
    runner = CliRunner()
    result = runner.invoke(cli_main.main, ["config", "set", "--url", "http://broker:8080", "--token", "t0k"])
    assert result.exit_code == 0
    assert json.loads(config_file.read_text()) == {"base_url": "http://broker:8080", "token": "t0k"}

    result = runner.invoke(cli_main.main, ["config", "show"])
    assert "http://broker:8080" in result.output
    assert "t0k" not in result.output


def test_config_clear(config_file):
    config_file.write_text(json.dumps({"base_url": "http://x"}))
    result = CliRunner().invoke(cli_main.main, ["config", "clear"])
    assert result.exit_code == 0
    assert json.loads(config_file.read_text()) == {}


def test_list_json(seen_requests):
    result = CliRunner().invoke(cli_main.main, ["subscriptions", "list", "orders", "--json"])
    assert result.exit_code == 0
    assert json.loads(result.output) == ["audit", "billing"]


def test_peek_json(seen_requests):
    result = CliRunner().invoke(cli_main.main, ["subscriptions", "peek", "orders", "audit", "-n", "2", "--json"])
    assert result.exit_code == 0
    messages = json.loads(result.output)
    assert [m["message_id"] for m in messages] == ["8:1:-1:0", "8:1:-1:1"]
    assert base64.b64decode(messages[1]["payload"]) == b"\xff\xfe"
    assert messages[0]["properties"]["app"] == "shop"
    assert len(seen_requests) == 1


def test_create_earliest(seen_requests):
    result = CliRunner().invoke(cli_main.main, ["subscriptions", "create", "orders", "audit", "--earliest"])
    assert result.exit_code == 0
    assert json.loads(seen_requests[0].content)["ledgerId"] == -1


def test_create_rejects_bad_message_id(seen_requests):
    result = CliRunner().invoke(cli_main.main, ["subscriptions", "create", "orders", "audit", "--message-id", "x"])
    assert result.exit_code == 2
    assert seen_requests == []


def test_reset_cursor_requires_one_target(seen_requests):
    result = CliRunner().invoke(cli_main.main, ["subscriptions", "reset-cursor", "orders", "audit"])
    assert result.exit_code == 2


def test_reset_cursor_by_time(seen_requests):
    result = CliRunner().invoke(
        cli_main.main, ["subscriptions", "reset-cursor", "orders", "audit", "--time", "1700000000000"],
    )
    assert result.exit_code == 0
    assert seen_requests[0].url.path.endswith("/subscription/audit/resetcursor/1700000000000")


def test_skip(seen_requests):
    result = CliRunner().invoke(cli_main.main, ["subscriptions", "skip", "orders", "audit", "5"])
    assert result.exit_code == 0
    assert seen_requests[0].url.path.endswith("/subscription/audit/skip/5")


def test_error_exits_nonzero(seen_requests):
    result = CliRunner().invoke(cli_main.main, ["subscriptions", "delete", "orders", "missing"])
    assert result.exit_code == 1
    assert "transport_error" in result.output
