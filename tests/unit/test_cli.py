"""Tests for CLI commands using Click's CliRunner."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import yaml
from click.testing import CliRunner

from edgeform.cli import main
from edgeform.client.transport import Err, Ok


def test_main_help():
    runner = CliRunner()
    result = runner.invoke(main, ["--help"])
    assert result.exit_code == 0
    assert "edgeform" in result.output
    assert "validate" in result.output
    assert "submit" in result.output


def test_main_version():
    runner = CliRunner()
    result = runner.invoke(main, ["--version"])
    assert result.exit_code == 0
    assert "0.1.0" in result.output


def test_schema_lists_resource_types():
    runner = CliRunner()
    result = runner.invoke(main, ["schema"])
    assert result.exit_code == 0
    assert "traffic_policy" in result.output
    assert "/apps" in result.output


def test_schema_shows_nested_fields():
    runner = CliRunner()
    result = runner.invoke(main, ["schema", "app"])
    assert result.exit_code == 0
    assert "ports[].protocol" in result.output
    assert "tcp | udp | sctp" in result.output


def test_schema_rejects_unknown_resource():
    runner = CliRunner()
    result = runner.invoke(main, ["schema", "router"])
    assert result.exit_code == 2


def test_new_prints_blank_app():
    runner = CliRunner()
    result = runner.invoke(main, ["new", "app"])
    assert result.exit_code == 0
    model = yaml.safe_load(result.output)
    assert model["ports"] == [{"port": 0, "protocol": ""}]
    assert model["cores"] == 0
    assert "id" not in model


def test_validate_valid_file(traffic_policy_path: Path):
    runner = CliRunner()
    result = runner.invoke(main, ["validate", "traffic_policy", str(traffic_policy_path)])
    assert result.exit_code == 0
    assert "is valid" in result.output


def test_validate_app_skips_untouched_port(app_path: Path):
    runner = CliRunner()
    result = runner.invoke(main, ["validate", "app", str(app_path)])
    assert result.exit_code == 0


def test_validate_invalid_file(invalid_policy_path: Path):
    runner = CliRunner()
    result = runner.invoke(main, ["validate", "traffic_policy", str(invalid_policy_path)])
    assert result.exit_code == 1
    assert "5 violation(s)" in result.output
    assert "Please, enter a valid IP address." in result.output


def test_validate_malformed_file(tmp_path: Path):
    path = tmp_path / "bad.yaml"
    path.write_text("- not a mapping\n", encoding="utf-8")
    runner = CliRunner()
    result = runner.invoke(main, ["validate", "node", str(path)])
    assert result.exit_code == 1
    assert "mapping" in result.output


def test_submit_creates_resource(traffic_policy_path: Path, tmp_path: Path, monkeypatch):
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path))
    calls = []

    async def fake_create(self, path, model):
        calls.append((path, model))
        return Ok({"id": "new-id", **model})

    runner = CliRunner()
    with patch("edgeform.client.transport.HttpTransport.create_resource", fake_create):
        result = runner.invoke(main, ["submit", "traffic_policy", str(traffic_policy_path)])

    assert result.exit_code == 0, result.output
    assert calls[0][0] == "/traffic_policies"
    assert calls[0][1]["name"] == "edge-breakout"
    assert "Successfully added traffic policy." in result.output
    assert "new-id" in result.output


def test_submit_update_targets_resource_id(traffic_policy_path: Path, tmp_path: Path, monkeypatch):
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path))
    calls = []

    async def fake_update(self, path, model):
        calls.append(path)
        return Ok(None)

    runner = CliRunner()
    with patch("edgeform.client.transport.HttpTransport.update_resource", fake_update):
        result = runner.invoke(
            main, ["submit", "traffic_policy", str(traffic_policy_path), "--id", "abc"]
        )

    assert result.exit_code == 0, result.output
    assert calls == ["/traffic_policies/abc"]


def test_submit_invalid_does_not_send(invalid_policy_path: Path, tmp_path: Path, monkeypatch):
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path))

    async def fake_create(self, path, model):
        raise AssertionError("should not be sent")

    runner = CliRunner()
    with patch("edgeform.client.transport.HttpTransport.create_resource", fake_create):
        result = runner.invoke(main, ["submit", "traffic_policy", str(invalid_policy_path)])

    assert result.exit_code == 1
    assert "violation(s)" in result.output


def test_submit_reports_server_error(traffic_policy_path: Path, tmp_path: Path, monkeypatch):
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path))

    async def fake_create(self, path, model):
        return Err("name already taken", status=409)

    runner = CliRunner()
    with patch("edgeform.client.transport.HttpTransport.create_resource", fake_create):
        result = runner.invoke(main, ["submit", "traffic_policy", str(traffic_policy_path)])

    assert result.exit_code == 1
    assert "name already taken" in result.output


def test_submit_rejects_resources_without_endpoint(tmp_path: Path):
    path = tmp_path / "policy.yaml"
    path.write_text("id: abc\n", encoding="utf-8")
    runner = CliRunner()
    result = runner.invoke(main, ["submit", "node_interface_policy", str(path)])
    assert result.exit_code == 2


def test_login_and_logout(tmp_path: Path, monkeypatch):
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path))
    token_path = tmp_path / "edgeform" / "token"

    async def fake_login(self, username, password):
        self.session.set_token(f"jwt-for-{username}")
        return Ok(self.session.token)

    runner = CliRunner()
    with patch("edgeform.client.transport.HttpTransport.login", fake_login):
        result = runner.invoke(main, ["login", "admin", "--password", "pw"])

    assert result.exit_code == 0, result.output
    assert token_path.read_text(encoding="utf-8") == "jwt-for-admin"

    result = runner.invoke(main, ["logout"])
    assert result.exit_code == 0
    assert not token_path.exists()


def test_login_failure(tmp_path: Path, monkeypatch):
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path))

    async def fake_login(self, username, password):
        return Err("Login Failed Try again Later")

    runner = CliRunner()
    with patch("edgeform.client.transport.HttpTransport.login", fake_login):
        result = runner.invoke(main, ["login", "admin", "--password", "pw"])

    assert result.exit_code == 1
    assert "Login Failed" in result.output
    assert not (tmp_path / "edgeform" / "token").exists()
