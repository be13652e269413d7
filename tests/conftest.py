"""Shared test fixtures and marker registration."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from share_transfer._config import ShareSettings
from share_transfer._manager import TransferManager
from share_transfer.clients._local import LocalShareClient

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path


def pytest_configure(config: object) -> None:
    """Register custom markers."""
    if isinstance(config, pytest.Config):
        config.addinivalue_line("markers", "integration: requires external services")


@pytest.fixture
def share_dir(tmp_path: Path) -> Path:
    """Directory standing in for the server; shares are its subdirectories."""
    root = tmp_path / "server"
    root.mkdir()
    return root


@pytest.fixture
def settings() -> ShareSettings:
    return ShareSettings(
        hostname="fileserver",
        username="alice",
        password="s3cret",
        share="data",
        path="/repos/main",
    )


@pytest.fixture
def local_client(share_dir: Path) -> LocalShareClient:
    return LocalShareClient(str(share_dir))


@pytest.fixture
def manager(settings: ShareSettings, local_client: LocalShareClient) -> Iterator[TransferManager]:
    """Manager over an initialized repository on the local client."""
    with TransferManager(settings, local_client) as mgr:
        mgr.init(create_if_missing=True)
        yield mgr


@pytest.fixture
def repo_dir(share_dir: Path) -> Path:
    """Local directory behind the repository root of ``settings``."""
    return share_dir / "data" / "repos" / "main"
