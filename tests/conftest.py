"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest


@pytest.fixture
def fixtures_dir() -> Path:
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def traffic_policy_path(fixtures_dir: Path) -> Path:
    return fixtures_dir / "traffic_policy.yaml"


@pytest.fixture
def invalid_policy_path(fixtures_dir: Path) -> Path:
    return fixtures_dir / "invalid_traffic_policy.yaml"


@pytest.fixture
def app_path(fixtures_dir: Path) -> Path:
    return fixtures_dir / "app.yaml"


@pytest.fixture
def default_policy() -> dict:
    return {
        "name": "default",
        "traffic_rules": [
            {"priority": 10, "target": {"action": "accept"}},
        ],
    }


@pytest.fixture
def full_policy() -> dict:
    return {
        "id": "5e1a3c1e-8c4b-4a4f-9d0e-6b7f1c2d3e4f",
        "name": "edge-breakout",
        "traffic_rules": [
            {
                "description": "Video to local cache",
                "priority": 1,
                "source": {
                    "description": "UE subnet",
                    "mac_filter": {"mac_addresses": ["F0-59-8E-7B-36-8A"]},
                    "ip_filter": {
                        "address": "192.168.1.1",
                        "mask": 24,
                        "begin_port": 7000,
                        "end_port": 7999,
                        "protocol": "tcp",
                    },
                },
                "destination": {
                    "gtp_filter": {
                        "address": "10.6.7.2",
                        "mask": 12,
                        "imsis": ["310150123456789", "310150123456790"],
                    },
                },
                "target": {
                    "description": "Rewrite to cache",
                    "action": "accept",
                    "mac_modifier": {"mac_address": "C7:5A:E7:98:1B:A3"},
                    "ip_modifier": {"address": "123.2.3.4", "port": 1600},
                },
            },
        ],
    }


@pytest.fixture
def valid_app() -> dict:
    return {
        "name": "video-analytics",
        "type": "container",
        "version": "1.2.0",
        "vendor": "acme",
        "description": "Object detection",
        "cores": 4,
        "memory": 4096,
        "source": "https://example.com/apps/video-analytics.tar.gz",
        "ports": [{"port": 8080, "protocol": "tcp"}],
        "epafeatures": [{"key": "hugepages", "value": "2M"}],
    }
