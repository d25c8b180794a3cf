"""Shared test fixtures for fluxcli tests."""

from unittest.mock import AsyncMock

import pytest

from fluxcli.core.flux import Flux
from fluxcli.host import BINARY_TABLE
from fluxcli.models import OperationResult

FAKE_BINARY = "/opt/fluxcli/bin/flux-linux-x64"


@pytest.fixture
def mock_runner():
    """Mock process runner returning a successful result."""
    return AsyncMock(return_value=OperationResult(exit_code=0, output=""))


@pytest.fixture
def flux(mock_runner):
    """Flux instance with a fixed binary and the mocked runner."""
    return Flux(binary=FAKE_BINARY, runner=mock_runner)


@pytest.fixture
def install_dir(tmp_path):
    """Installation directory containing every packaged flux binary."""
    for name in BINARY_TABLE.values():
        (tmp_path / name).write_bytes(b"")
    return tmp_path


@pytest.fixture
def clean_bin_dir_env(monkeypatch):
    """Remove the binary directory override from the environment."""
    monkeypatch.delenv("FLUX_CLI_BIN_DIR", raising=False)
