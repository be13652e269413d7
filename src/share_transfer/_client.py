"""ShareClient abstract base class -- the network share collaborator contract."""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING, BinaryIO

if TYPE_CHECKING:
    from share_transfer._address import ShareAddress


class ShareClient(abc.ABC):
    """Primitive file operations offered by a network share client.

    Methods receive fully resolved :class:`ShareAddress` values. Clients may
    raise their native exceptions; the gateway translates them into
    ``share_transfer`` errors at the operation boundary.
    """

    @property
    @abc.abstractmethod
    def scheme(self) -> str:
        """Address scheme served by this client (e.g. ``'smb'``)."""

    @abc.abstractmethod
    def exists(self, address: ShareAddress) -> bool:
        """Return ``True`` if a file or folder exists at ``address``."""

    @abc.abstractmethod
    def is_file(self, address: ShareAddress) -> bool:
        """Return ``True`` if ``address`` is an existing regular file."""

    @abc.abstractmethod
    def is_folder(self, address: ShareAddress) -> bool:
        """Return ``True`` if ``address`` is an existing folder."""

    @abc.abstractmethod
    def open_read(self, address: ShareAddress) -> BinaryIO:
        """Open a binary stream for reading."""

    @abc.abstractmethod
    def open_write(self, address: ShareAddress) -> BinaryIO:
        """Open a binary stream for writing, creating or truncating the file."""

    @abc.abstractmethod
    def list_names(self, address: ShareAddress) -> list[str]:
        """Names of the direct children of the folder at ``address``."""

    @abc.abstractmethod
    def makedirs(self, address: ShareAddress) -> None:
        """Create ``address`` and any missing parents; existing folders are fine."""

    @abc.abstractmethod
    def mkdir(self, address: ShareAddress, *, exist_ok: bool = False) -> None:
        """Create a single folder whose parent must already exist."""

    @abc.abstractmethod
    def delete(self, address: ShareAddress) -> None:
        """Delete the file at ``address``."""

    @abc.abstractmethod
    def remove_folder(self, address: ShareAddress) -> None:
        """Delete the empty folder at ``address``."""

    @abc.abstractmethod
    def rename(self, src: ShareAddress, dst: ShareAddress) -> None:
        """Rename ``src`` to ``dst`` within one share, replacing ``dst``."""

    def close(self) -> None:  # noqa: B027
        """Release resources. Default is a no-op."""
