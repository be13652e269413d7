"""SFTP client using pure paramiko."""

from __future__ import annotations

import contextlib
import logging
import os
import stat
from enum import Enum
from typing import TYPE_CHECKING, Any, BinaryIO

from share_transfer._client import ShareClient

if TYPE_CHECKING:
    from share_transfer._address import ShareAddress

log = logging.getLogger(__name__)


# region: host key policy


class HostKeyPolicy(Enum):
    """Controls how unknown remote host keys are handled.

    :cvar STRICT: Reject unknown hosts (production default).
    :cvar TRUST_ON_FIRST_USE: Save on first connect, verify after.
    :cvar AUTO_ADD: Accept any key (dev/testing ONLY).
    """

    STRICT = "strict"
    TRUST_ON_FIRST_USE = "tofu"
    AUTO_ADD = "auto"


# endregion


class SFTPShareClient(ShareClient):
    """SFTP client exposing server directories as shares.

    A share is a top-level directory below ``base_path`` on the server, so
    ``sftp://host/<share>/<key>`` maps to ``<base_path>/<share>/<key>``.

    :param hostname: SFTP server hostname (required, non-empty).
    :param port: SSH port (default: 22).
    :param username: SSH username.
    :param password: SSH password.
    :param base_path: Directory on the server holding the shares (default: ``/``).
    :param host_key_policy: Host key verification policy.
    :param host_keys_path: Path to known_hosts file (default: ``~/.ssh/known_hosts``).
    :param timeout: SSH connection timeout in seconds.
    :param connect_kwargs: Extra kwargs passed to ``SSHClient.connect()``.
    """

    def __init__(
        self,
        hostname: str,
        *,
        port: int = 22,
        username: str | None = None,
        password: str | None = None,
        base_path: str = "/",
        host_key_policy: HostKeyPolicy = HostKeyPolicy.STRICT,
        host_keys_path: str | None = None,
        timeout: int = 10,
        connect_kwargs: dict[str, Any] | None = None,
    ) -> None:
        if not hostname or not hostname.strip():
            raise ValueError("hostname must be a non-empty string")
        self._hostname = hostname
        self._port = port
        self._username = username
        self._password = password
        self._base_path = base_path.rstrip("/") or "/"
        self._host_key_policy = host_key_policy
        self._host_keys_path = host_keys_path
        self._timeout = timeout
        self._connect_kwargs = connect_kwargs or {}

        self._ssh_client: Any = None
        self._sftp_client: Any = None

    @property
    def scheme(self) -> str:
        return "sftp"

    def __repr__(self) -> str:
        return f"SFTPShareClient(hostname={self._hostname!r}, port={self._port}, base_path={self._base_path!r})"

    # region: lazy connection

    @property
    def _sftp(self) -> Any:
        """Lazy SFTP client, reconnecting when the session went stale."""
        if not self._is_connected():
            self._connect()
        return self._sftp_client

    def _connect(self) -> None:
        """Establish the SSH + SFTP connection (single attempt)."""
        self._close_clients()

        ssh = self._create_ssh_client()
        log.info("Connecting to %s:%d as %s", self._hostname, self._port, self._username)
        ssh.connect(
            hostname=self._hostname,
            port=self._port,
            username=self._username,
            password=self._password,
            timeout=self._timeout,
            banner_timeout=self._timeout,
            auth_timeout=self._timeout,
            channel_timeout=self._timeout,
            **self._connect_kwargs,
        )
        self._ssh_client = ssh
        self._sftp_client = ssh.open_sftp()
        log.info("SFTP connection established.")

    def _create_ssh_client(self) -> Any:
        """Create and configure an SSHClient with host key policy."""
        import paramiko

        ssh = paramiko.SSHClient()

        if self._host_key_policy in (HostKeyPolicy.STRICT, HostKeyPolicy.TRUST_ON_FIRST_USE):
            keys_path = self._host_keys_path or os.path.expanduser("~/.ssh/known_hosts")
            if os.path.isfile(keys_path):
                ssh.load_host_keys(keys_path)

        if self._host_key_policy == HostKeyPolicy.TRUST_ON_FIRST_USE:
            ssh.set_missing_host_key_policy(paramiko.AutoAddPolicy())
        elif self._host_key_policy == HostKeyPolicy.AUTO_ADD:
            log.warning("AUTO_ADD host key policy -- NOT safe for production.")
            ssh.set_missing_host_key_policy(paramiko.AutoAddPolicy())

        return ssh

    def _is_connected(self) -> bool:
        """Check if the SFTP connection is alive."""
        if self._sftp_client is None or self._ssh_client is None:
            return False
        try:
            self._sftp_client.stat(".")
            return True
        except Exception:  # pragma: no cover -- requires transport failure
            return False

    def _close_clients(self) -> None:
        """Close SFTP and SSH clients if open."""
        if self._sftp_client is not None:
            with contextlib.suppress(Exception):
                self._sftp_client.close()
            self._sftp_client = None
        if self._ssh_client is not None:
            with contextlib.suppress(Exception):
                self._ssh_client.close()
            self._ssh_client = None

    # endregion

    # region: path helpers

    def _sftp_path(self, address: ShareAddress) -> str:
        """Convert an address to an absolute path on the server."""
        rel = "/".join((address.share, *address.parts))
        if self._base_path == "/":
            return f"/{rel}"
        return f"{self._base_path}/{rel}"

    def _mode(self, address: ShareAddress) -> int | None:
        try:
            return int(self._sftp.stat(self._sftp_path(address)).st_mode)
        except FileNotFoundError:
            return None

    # endregion

    # region: existence checks

    def exists(self, address: ShareAddress) -> bool:
        return self._mode(address) is not None

    def is_file(self, address: ShareAddress) -> bool:
        mode = self._mode(address)
        return mode is not None and stat.S_ISREG(mode)

    def is_folder(self, address: ShareAddress) -> bool:
        mode = self._mode(address)
        return mode is not None and stat.S_ISDIR(mode)

    # endregion

    # region: streams

    def open_read(self, address: ShareAddress) -> BinaryIO:
        f = self._sftp.file(self._sftp_path(address), "rb")
        f.prefetch()
        return f  # type: ignore[no-any-return]

    def open_write(self, address: ShareAddress) -> BinaryIO:
        f = self._sftp.file(self._sftp_path(address), "wb")
        f.set_pipelined(True)
        return f  # type: ignore[no-any-return]

    # endregion

    # region: folders

    def list_names(self, address: ShareAddress) -> list[str]:
        return list(self._sftp.listdir(self._sftp_path(address)))

    def makedirs(self, address: ShareAddress) -> None:
        current = ""
        for part in self._sftp_path(address).strip("/").split("/"):
            current = f"{current}/{part}"
            try:
                attrs = self._sftp.stat(current)
            except FileNotFoundError:
                self._sftp.mkdir(current)
                continue
            if not stat.S_ISDIR(attrs.st_mode):
                raise NotADirectoryError(f"Not a folder: {current}")

    def mkdir(self, address: ShareAddress, *, exist_ok: bool = False) -> None:
        sftp_path = self._sftp_path(address)
        try:
            self._sftp.mkdir(sftp_path)
        except OSError:
            # SFTP servers report an existing folder as a generic failure.
            if exist_ok and self.is_folder(address):
                return
            raise

    def remove_folder(self, address: ShareAddress) -> None:
        self._sftp.rmdir(self._sftp_path(address))

    # endregion

    # region: delete and rename

    def delete(self, address: ShareAddress) -> None:
        self._sftp.remove(self._sftp_path(address))

    def rename(self, src: ShareAddress, dst: ShareAddress) -> None:
        if src.share != dst.share:
            raise OSError(f"Cannot rename across shares: {src} -> {dst}")
        src_path, dst_path = self._sftp_path(src), self._sftp_path(dst)
        try:
            self._sftp.posix_rename(src_path, dst_path)
        except OSError:  # pragma: no cover -- fallback for servers without posix_rename
            log.debug("posix_rename unsupported, falling back to rename for %s", src_path)
            self._sftp.rename(src_path, dst_path)

    # endregion

    # region: lifecycle

    def close(self) -> None:
        self._close_clients()

    # endregion
