"""Atomic transfers -- final names only appear once content is complete.

Demonstrates:
- Uploads staged as ``temp-<name>`` at the repository root
- Moving a file between categories (temporary -> transactions)
- Downloads that never leave a partial local file behind
"""

from __future__ import annotations

import tempfile
from pathlib import Path

from share_transfer import Category, NotFound, RemoteFile, ShareSettings, TransferManager
from share_transfer.clients import LocalShareClient

if __name__ == "__main__":
    with tempfile.TemporaryDirectory() as tmp:
        settings = ShareSettings(hostname="nas", username="bob", password="pw", share="repo")
        client = LocalShareClient(str(Path(tmp) / "server"))

        with TransferManager(settings, client) as manager:
            manager.init(create_if_missing=True)

            source = Path(tmp) / "tx.xml"
            source.write_text("<transaction/>")

            # Stage under the temporary category, then publish in one rename
            staged = RemoteFile("temp-4f2a", Category.TEMP)
            final = RemoteFile("transaction-4f2a", Category.TRANSACTION)
            manager.upload(source, staged)
            manager.move(staged, final)
            print(f"Transactions: {sorted(manager.list(Category.TRANSACTION))}")
            print(f"Temporary: {sorted(manager.list(Category.TEMP))}")

            # A failed download leaves the existing local file untouched
            target = Path(tmp) / "db.bin"
            target.write_bytes(b"previous version")
            try:
                manager.download(RemoteFile("db-bob-7", Category.DATABASE), target)
            except NotFound as exc:
                print(f"Download failed: {exc}")
            print(f"Local file still holds: {target.read_bytes()!r}")
