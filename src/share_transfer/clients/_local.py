"""Local filesystem client -- stdlib-only reference implementation."""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING, BinaryIO

from share_transfer._client import ShareClient
from share_transfer._errors import InvalidPath

if TYPE_CHECKING:
    from share_transfer._address import ShareAddress


class LocalShareClient(ShareClient):
    """Serves shares from a local directory, one subdirectory per share.

    The address ``<scheme>://<host>/<share>/<key>`` maps to
    ``<root>/<share>/<key>``; the host is ignored.

    :param root: Directory holding the share directories.
    :param scheme: Scheme this client answers to (default ``"smb"``).
    """

    def __init__(self, root: str, *, scheme: str = "smb") -> None:
        self._root = Path(root).resolve()
        self._root.mkdir(parents=True, exist_ok=True)
        self._scheme = scheme

    @property
    def scheme(self) -> str:
        return self._scheme

    def __repr__(self) -> str:
        return f"LocalShareClient(root={str(self._root)!r}, scheme={self._scheme!r})"

    # region: path safety
    def _resolve(self, address: ShareAddress) -> Path:
        """Map an address onto the local root.

        :raises InvalidPath: If the resolved path escapes the root.
        """
        resolved = self._root.joinpath(address.share, *address.parts).resolve()
        try:
            resolved.relative_to(self._root)
        except ValueError:
            raise InvalidPath(f"Address escapes root directory: {address}", path=str(address)) from None
        return resolved

    # endregion

    # region: existence checks
    def exists(self, address: ShareAddress) -> bool:
        return self._resolve(address).exists()

    def is_file(self, address: ShareAddress) -> bool:
        return self._resolve(address).is_file()

    def is_folder(self, address: ShareAddress) -> bool:
        return self._resolve(address).is_dir()

    # endregion

    # region: streams
    def open_read(self, address: ShareAddress) -> BinaryIO:
        return self._resolve(address).open("rb")

    def open_write(self, address: ShareAddress) -> BinaryIO:
        return self._resolve(address).open("wb")

    # endregion

    # region: folders
    def list_names(self, address: ShareAddress) -> list[str]:
        return os.listdir(self._resolve(address))

    def makedirs(self, address: ShareAddress) -> None:
        self._resolve(address).mkdir(parents=True, exist_ok=True)

    def mkdir(self, address: ShareAddress, *, exist_ok: bool = False) -> None:
        self._resolve(address).mkdir(exist_ok=exist_ok)

    def remove_folder(self, address: ShareAddress) -> None:
        self._resolve(address).rmdir()

    # endregion

    # region: delete and rename
    def delete(self, address: ShareAddress) -> None:
        self._resolve(address).unlink()

    def rename(self, src: ShareAddress, dst: ShareAddress) -> None:
        if src.share != dst.share:
            raise OSError(f"Cannot rename across shares: {src} -> {dst}")
        os.replace(self._resolve(src), self._resolve(dst))

    # endregion
