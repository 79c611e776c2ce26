"""Shared fixtures for the vcd_acctest test suite."""

from __future__ import annotations

import copy
import json
import os
from pathlib import Path
from typing import Any, Dict

import pytest

from vcd_acctest.render.renderer import set_default_renderer

pytest_plugins = ["pytester"]

_VCD_VARS = (
    "VCD_CONFIG",
    "VCD_SHORT_TEST",
    "VCD_SKIP_TEMPLATE_WRITING",
    "TF_ACC",
    "VCD_USER",
    "VCD_PASSWORD",
    "VCD_URL",
    "VCD_ORG",
    "VCD_ALLOW_UNVERIFIED_SSL",
)

FULL_CONFIG: Dict[str, Any] = {
    "provider": {
        "user": "admin",
        "password": "s3cret",
        "url": "https://vcd.example.com/api",
        "sysOrg": "System",
        "allowInsecure": True,
        "tfAcceptanceTests": True,
    },
    "vcd": {
        "org": "acc-org",
        "vdc": "acc-vdc",
        "catalog": {"name": "acc-catalog", "catalogItem": "photon"},
    },
    "networking": {
        "externalIp": "192.168.1.110",
        "internalIp": "10.10.102.60",
        "edgeGateway": "acc-edge",
        "sharedSecret": "psk",
        "local": {"localIp": "10.10.10.1", "localSubnetGw": "10.10.10.254"},
        "peer": {"peerIp": "20.20.20.1", "peerSubnetGw": "20.20.20.254"},
    },
}


@pytest.fixture(autouse=True)
def _isolated_environment():
    """Strip VCD variables before each test and restore os.environ after."""
    saved = dict(os.environ)
    for name in _VCD_VARS:
        os.environ.pop(name, None)
    yield
    os.environ.clear()
    os.environ.update(saved)
    set_default_renderer(None)


@pytest.fixture
def write_config(tmp_path: Path):
    """Return a helper that writes *data* as JSON and returns the path."""

    def _write(data: Any, name: str = "vcd_test_config.json") -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def full_config() -> Dict[str, Any]:
    """A fresh copy of a configuration with every section filled in."""
    return copy.deepcopy(FULL_CONFIG)
