"""Client test fixtures -- parameterized for conformance testing."""

from __future__ import annotations

import tempfile
import uuid
from typing import TYPE_CHECKING

import pytest

from share_transfer._address import ShareAddress
from share_transfer.clients._local import LocalShareClient

if TYPE_CHECKING:
    from collections.abc import Iterator

    from share_transfer._client import ShareClient


def _sftp_available() -> bool:
    try:
        import paramiko  # noqa: F401

        return True
    except ImportError:
        return False


@pytest.fixture(scope="session")
def sftp_server() -> Iterator[tuple[int, str] | None]:
    """Start an in-process SFTP server for the test session."""
    if not _sftp_available():
        yield None
        return

    from tests.clients.sftp_server import start_sftp_server, stop_sftp_server

    tmpdir = tempfile.mkdtemp(prefix="sftp_test_")

    thread, port, _host_key, stop_event, server_socket = start_sftp_server(root=tmpdir, host="127.0.0.1")

    yield port, tmpdir

    stop_sftp_server(thread, stop_event, server_socket)

    import shutil

    shutil.rmtree(tmpdir, ignore_errors=True)


def make_sftp_client(port: int) -> ShareClient:
    from share_transfer.clients._sftp import HostKeyPolicy, SFTPShareClient

    return SFTPShareClient(
        "127.0.0.1",
        port=port,
        username="testuser",
        password="testpass",
        base_path=f"/test_{uuid.uuid4().hex[:8]}",
        host_key_policy=HostKeyPolicy.AUTO_ADD,
        connect_kwargs={"allow_agent": False, "look_for_keys": False},
    )


_sftp_param = pytest.param(
    "sftp",
    marks=pytest.mark.skipif(not _sftp_available(), reason="paramiko not installed"),
)


@pytest.fixture(params=["local", _sftp_param])
def client(request: pytest.FixtureRequest, sftp_server: tuple[int, str] | None) -> Iterator[ShareClient]:
    """Parameterized client fixture. Add new clients here."""
    if request.param == "local":
        with tempfile.TemporaryDirectory() as tmp:
            yield LocalShareClient(tmp)
    elif request.param == "sftp":
        assert sftp_server is not None
        c = make_sftp_client(sftp_server[0])
        yield c
        c.close()
    else:
        pytest.skip(f"Unknown client: {request.param}")


@pytest.fixture
def share(client: ShareClient) -> ShareAddress:
    """Share root address with the share folder already created."""
    addr = ShareAddress(client.scheme, "127.0.0.1", "data")
    client.makedirs(addr)
    return addr
