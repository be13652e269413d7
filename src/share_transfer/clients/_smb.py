"""SMB/CIFS client using smbprotocol's ``smbclient`` module."""

from __future__ import annotations

import errno
import logging
from typing import TYPE_CHECKING, Any, BinaryIO

from share_transfer._client import ShareClient

if TYPE_CHECKING:
    from share_transfer._address import ShareAddress

log = logging.getLogger(__name__)


class SMBShareClient(ShareClient):
    """SMB client for Windows/Samba shares.

    The session is registered lazily on first use, so construction never
    touches the network.

    :param hostname: SMB server hostname (required, non-empty).
    :param username: Account name.
    :param password: Account password.
    :param port: SMB port (default: 445).
    :param encrypt: Require SMB3 encryption when ``True``.
    :param connection_timeout: Seconds to wait for the TCP connection.
    """

    def __init__(
        self,
        hostname: str,
        *,
        username: str | None = None,
        password: str | None = None,
        port: int = 445,
        encrypt: bool | None = None,
        connection_timeout: int = 60,
    ) -> None:
        if not hostname or not hostname.strip():
            raise ValueError("hostname must be a non-empty string")
        self._hostname = hostname
        self._username = username
        self._password = password
        self._port = port
        self._encrypt = encrypt
        self._connection_timeout = connection_timeout
        self._registered = False

    @property
    def scheme(self) -> str:
        return "smb"

    def __repr__(self) -> str:
        return f"SMBShareClient(hostname={self._hostname!r}, port={self._port}, username={self._username!r})"

    # region: lazy session

    @property
    def _smb(self) -> Any:
        """The ``smbclient`` module with this client's session registered."""
        import smbclient

        if not self._registered:
            log.info("Registering SMB session to %s:%d as %s", self._hostname, self._port, self._username)
            smbclient.register_session(
                self._hostname,
                username=self._username,
                password=self._password,
                port=self._port,
                encrypt=self._encrypt,
                connection_timeout=self._connection_timeout,
            )
            self._registered = True
        return smbclient

    # endregion

    # region: path helpers

    def _unc(self, address: ShareAddress) -> str:
        """Convert an address to a UNC path on this client's server."""
        unc = f"\\\\{self._hostname}\\{address.share}"
        if address.parts:
            unc = unc + "\\" + "\\".join(address.parts)
        return unc

    # endregion

    # region: existence checks

    def exists(self, address: ShareAddress) -> bool:
        return bool(self._smb.path.exists(self._unc(address), port=self._port))

    def is_file(self, address: ShareAddress) -> bool:
        return bool(self._smb.path.isfile(self._unc(address), port=self._port))

    def is_folder(self, address: ShareAddress) -> bool:
        return bool(self._smb.path.isdir(self._unc(address), port=self._port))

    # endregion

    # region: streams

    def open_read(self, address: ShareAddress) -> BinaryIO:
        return self._smb.open_file(self._unc(address), mode="rb", port=self._port)  # type: ignore[no-any-return]

    def open_write(self, address: ShareAddress) -> BinaryIO:
        return self._smb.open_file(self._unc(address), mode="wb", port=self._port)  # type: ignore[no-any-return]

    # endregion

    # region: folders

    def list_names(self, address: ShareAddress) -> list[str]:
        return list(self._smb.listdir(self._unc(address), port=self._port))

    def makedirs(self, address: ShareAddress) -> None:
        self._smb.makedirs(self._unc(address), exist_ok=True, port=self._port)

    def mkdir(self, address: ShareAddress, *, exist_ok: bool = False) -> None:
        try:
            self._smb.mkdir(self._unc(address), port=self._port)
        except OSError as exc:
            if exist_ok and getattr(exc, "errno", None) == errno.EEXIST:
                return
            raise

    def remove_folder(self, address: ShareAddress) -> None:
        self._smb.rmdir(self._unc(address), port=self._port)

    # endregion

    # region: delete and rename

    def delete(self, address: ShareAddress) -> None:
        self._smb.remove(self._unc(address), port=self._port)

    def rename(self, src: ShareAddress, dst: ShareAddress) -> None:
        self._smb.replace(self._unc(src), self._unc(dst), port=self._port)

    # endregion

    # region: lifecycle

    def close(self) -> None:
        if self._registered:
            import smbclient

            log.info("Closing SMB session to %s:%d", self._hostname, self._port)
            smbclient.delete_session(self._hostname, port=self._port)
            self._registered = False

    # endregion
