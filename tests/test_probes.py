"""Tests for ReadinessProbes."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING
from unittest.mock import patch

import pytest

from share_transfer._config import ShareSettings
from share_transfer._connection import ConnectionManager
from share_transfer._probes import ReadinessProbes

if TYPE_CHECKING:
    from pathlib import Path

    from share_transfer.clients._local import LocalShareClient


@pytest.fixture
def probes(settings: ShareSettings, local_client: LocalShareClient) -> ReadinessProbes:
    return ReadinessProbes(ConnectionManager(settings, local_client))


class TestMissingTarget:
    """A missing root degrades to False without raising."""

    def test_target_exists(self, probes: ReadinessProbes) -> None:
        assert probes.target_exists() is False

    def test_target_can_write(self, probes: ReadinessProbes) -> None:
        assert probes.target_can_write() is False

    def test_repository_marker_exists(self, probes: ReadinessProbes) -> None:
        assert probes.repository_marker_exists() is False

    def test_target_can_create_when_parent_missing(self, probes: ReadinessProbes) -> None:
        assert probes.target_can_create() is False

    def test_target_can_create_when_parent_exists(self, probes: ReadinessProbes, share_dir: Path) -> None:
        (share_dir / "data" / "repos").mkdir(parents=True)
        assert probes.target_can_create() is True
        assert list((share_dir / "data" / "repos").iterdir()) == []


class TestExistingTarget:
    @pytest.fixture(autouse=True)
    def _repo(self, repo_dir: Path) -> None:
        repo_dir.mkdir(parents=True)

    def test_target_exists(self, probes: ReadinessProbes) -> None:
        assert probes.target_exists() is True

    def test_target_can_write_leaves_no_artifact(self, probes: ReadinessProbes, repo_dir: Path) -> None:
        assert probes.target_can_write() is True
        assert list(repo_dir.iterdir()) == []

    def test_target_can_create(self, probes: ReadinessProbes) -> None:
        assert probes.target_can_create() is True

    def test_marker_file(self, probes: ReadinessProbes, repo_dir: Path) -> None:
        (repo_dir / "syncany").write_bytes(b"repo")
        assert probes.repository_marker_exists() is True

    def test_marker_folder_is_not_a_marker(self, probes: ReadinessProbes, repo_dir: Path) -> None:
        (repo_dir / "syncany").mkdir()
        assert probes.repository_marker_exists() is False

    def test_root_is_a_file(self, probes: ReadinessProbes, repo_dir: Path) -> None:
        repo_dir.rmdir()
        repo_dir.write_bytes(b"not a folder")
        assert probes.target_exists() is False
        assert probes.target_can_write() is False


class TestBackendFailures:
    """Backend errors become False and are only logged."""

    @pytest.fixture(autouse=True)
    def _repo(self, repo_dir: Path) -> None:
        repo_dir.mkdir(parents=True)

    @pytest.mark.parametrize(
        "probe", ["target_exists", "target_can_write", "target_can_create", "repository_marker_exists"]
    )
    def test_stat_failure(
        self, probes: ReadinessProbes, local_client: LocalShareClient, probe: str, caplog: pytest.LogCaptureFixture
    ) -> None:
        with (
            patch.object(local_client, "is_folder", side_effect=OSError("network down")),
            patch.object(local_client, "is_file", side_effect=OSError("network down")),
            caplog.at_level(logging.INFO, logger="share_transfer._probes"),
        ):
            assert getattr(probes, probe)() is False
        assert "network down" in caplog.text

    def test_write_failure(self, probes: ReadinessProbes, local_client: LocalShareClient) -> None:
        with patch.object(local_client, "open_write", side_effect=PermissionError("read-only")):
            assert probes.target_can_write() is False

    def test_cleanup_failure(self, probes: ReadinessProbes, local_client: LocalShareClient) -> None:
        with patch.object(local_client, "delete", side_effect=PermissionError("no delete")):
            assert probes.target_can_write() is False

    def test_folder_cleanup_failure(self, probes: ReadinessProbes, local_client: LocalShareClient) -> None:
        with patch.object(local_client, "remove_folder", side_effect=PermissionError("no delete")):
            assert probes.target_can_create() is False

    def test_probe_names_are_unique(self, probes: ReadinessProbes, local_client: LocalShareClient) -> None:
        seen = []
        real = local_client.open_write

        def spy(address):  # type: ignore[no-untyped-def]
            seen.append(address)
            return real(address)

        with patch.object(local_client, "open_write", side_effect=spy):
            probes.target_can_write()
            probes.target_can_write()
        assert len(set(seen)) == 2
        assert all(a.name.startswith("write-test-") for a in seen)


def test_share_root_parent_is_share_itself(local_client: LocalShareClient, share_dir: Path) -> None:
    settings = ShareSettings(hostname="h", username="u", password="p", share="data")
    (share_dir / "data").mkdir()
    probes = ReadinessProbes(ConnectionManager(settings, local_client))
    assert probes.target_can_create() is True
