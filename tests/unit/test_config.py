"""Tests for configuration loading."""

from __future__ import annotations

from pathlib import Path

from edgeform.config import EdgeFormConfig


def test_defaults_follow_xdg(tmp_path: Path, monkeypatch):
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    monkeypatch.delenv("EDGEFORM_CONTROLLER_URL", raising=False)
    monkeypatch.delenv("EDGEFORM_TIMEOUT", raising=False)

    config = EdgeFormConfig.load()

    assert config.data_dir == tmp_path / "data" / "edgeform"
    assert config.token_path == tmp_path / "data" / "edgeform" / "token"
    assert config.controller_url == "http://127.0.0.1:8080"
    assert config.timeout == 10.0


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("EDGEFORM_CONTROLLER_URL", "https://controller.example.com/")
    monkeypatch.setenv("EDGEFORM_TIMEOUT", "2.5")

    config = EdgeFormConfig.load()

    assert config.controller_url == "https://controller.example.com"
    assert config.timeout == 2.5
