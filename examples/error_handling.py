"""Error handling -- catching the typed error hierarchy.

Demonstrates:
- InvalidPath for names that break their category's pattern
- NotFound for missing remote files
- ConnectionFailed for unusable repository addresses
- Catching everything via the StorageError base class
"""

from __future__ import annotations

import tempfile
from pathlib import Path

from share_transfer import (
    Category,
    ConnectionFailed,
    InvalidPath,
    NotFound,
    RemoteFile,
    ShareSettings,
    StorageError,
    TransferManager,
)
from share_transfer.clients import LocalShareClient

if __name__ == "__main__":
    with tempfile.TemporaryDirectory() as tmp:
        client = LocalShareClient(str(Path(tmp) / "server"))
        settings = ShareSettings(hostname="nas", username="bob", password="pw", share="repo")

        # Names are validated before anything touches the share
        try:
            RemoteFile("not-a-chunk", Category.MULTICHUNK)
        except InvalidPath as exc:
            print(f"InvalidPath: {exc}")

        with TransferManager(settings, client) as manager:
            manager.init(create_if_missing=True)
            try:
                manager.download(RemoteFile("multichunk-ff", Category.MULTICHUNK), Path(tmp) / "out")
            except NotFound as exc:
                print(f"NotFound: {exc} (backend={exc.backend})")

        # A share name with a separator cannot form a repository address
        try:
            TransferManager(ShareSettings(hostname="nas", username="bob", password="pw", share="a/b"), client)
        except ConnectionFailed as exc:
            print(f"ConnectionFailed: {exc}")

        # Every error derives from StorageError
        try:
            RemoteFile("", Category.GENERIC)
        except StorageError as exc:
            print(f"Caught via base class: {type(exc).__name__}: {exc}")
