"""Transfer operations -- temp-then-rename uploads/downloads and typed listing."""

from __future__ import annotations

import contextlib
import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING

from share_transfer._errors import InvalidPath, MoveFailed, NotFound, StorageIOError
from share_transfer._models import RemoteFile

if TYPE_CHECKING:
    from share_transfer._category import Category
    from share_transfer._connection import ConnectionManager
    from share_transfer._types import PathLike

log = logging.getLogger(__name__)

_CHUNK_SIZE = 65536
_TEMP_PREFIX = "temp-"


class TransferOperations:
    """Upload, download, delete, move and list categorized remote files.

    Operations run strictly in call order; nothing is queued or retried.

    :param connection: Connection owning the client and addresses.
    """

    def __init__(self, connection: ConnectionManager) -> None:
        self._connection = connection

    def download(self, remote: RemoteFile, destination: PathLike) -> None:
        """Download ``remote`` into the local file ``destination``.

        Bytes land in a temporary file next to ``destination`` first, which
        then replaces ``destination`` in one step. A remote file named ``.``
        is skipped.

        :raises InvalidPath: If ``remote`` escapes its category folder.
        :raises NotFound: If the remote file cannot be opened or read.
        :raises StorageIOError: On local temp-file failures.
        """
        if remote.name == ".":
            return

        conn = self._connection
        address = conn.resolve(remote)
        target = Path(destination)

        with conn.errors(StorageIOError, "Cannot create local temp file", path=target):
            fd, tmp_name = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".part", dir=target.parent)
        tmp_path = Path(tmp_name)
        promoted = False
        try:
            log.info("Downloading %s to temp file %s", address, tmp_path)
            with os.fdopen(fd, "wb") as local:
                with conn.errors(NotFound, "Downloading failed", path=address):
                    with conn.client.open_read(address) as stream:
                        shutil.copyfileobj(stream, local, _CHUNK_SIZE)

            log.info("Renaming temp file %s to file %s", tmp_path, target)
            with conn.errors(StorageIOError, "Cannot move temp file into place", path=target):
                os.replace(tmp_path, target)
            promoted = True
        finally:
            if not promoted:
                with contextlib.suppress(OSError):
                    tmp_path.unlink()

    def upload(self, source: PathLike, remote: RemoteFile) -> None:
        """Upload the local file ``source`` as ``remote``.

        The bytes go to ``temp-<name>`` at the repository root and are then
        renamed into the category folder, so the final name only appears
        once the content is complete.

        :raises InvalidPath: If ``remote`` escapes its category folder.
        :raises StorageIOError: If reading, writing or renaming fails.
        """
        conn = self._connection
        address = conn.resolve(remote)
        temp = conn.root.join(_TEMP_PREFIX + remote.name)
        written = False

        with conn.errors(StorageIOError, f"Could not upload file {source} to {remote.name}", path=address):
            try:
                with open(source, "rb") as local:
                    log.info("Uploading %s to temp file %s", source, temp)
                    with conn.client.open_write(temp) as stream:
                        written = True
                        shutil.copyfileobj(local, stream, _CHUNK_SIZE)

                log.info("Renaming temp file %s to %s", temp, address)
                conn.client.rename(temp, address)
            except Exception:
                if written:
                    with contextlib.suppress(Exception):
                        conn.client.delete(temp)
                raise

    def delete(self, remote: RemoteFile) -> bool:
        """Delete ``remote``.

        A missing file counts as a failure unless the client says otherwise.

        :raises InvalidPath: If ``remote`` escapes its category folder.
        :raises StorageIOError: If the client cannot delete the file.
        """
        conn = self._connection
        address = conn.resolve(remote)
        with conn.errors(StorageIOError, f"Could not delete file {remote.name}", path=address):
            conn.client.delete(address)
        return True

    def move(self, source: RemoteFile, target: RemoteFile) -> None:
        """Rename ``source`` to ``target`` with a single client call.

        :raises InvalidPath: If either name escapes its category folder.
        :raises MoveFailed: If the client rejects the rename.
        """
        conn = self._connection
        src = conn.resolve(source)
        dst = conn.resolve(target)
        with conn.errors(MoveFailed, f"Could not rename/move file {source} to {target}", path=src):
            conn.client.rename(src, dst)

    def list(self, category: Category) -> dict[str, RemoteFile]:
        """Map each valid entry name of ``category``'s folder to its ``RemoteFile``.

        Entries that do not follow the category's naming pattern are skipped.

        :raises StorageIOError: If the folder cannot be listed.
        """
        conn = self._connection
        folder = conn.folder(category)
        with conn.errors(StorageIOError, "Unable to list directory", path=folder):
            names = conn.client.list_names(folder)

        remote_files: dict[str, RemoteFile] = {}
        for name in names:
            try:
                remote_files[name] = RemoteFile(name, category)
            except InvalidPath:
                log.debug("Ignoring %r in %s: not a valid %s file name", name, folder, category)
        return remote_files
