"""Quickstart -- upload, list and download a categorized file.

Demonstrates:
- Building ShareSettings for a repository on a share
- Serving the share from a local directory with LocalShareClient
- Initializing the repository layout
- Uploading, listing and downloading a multichunk
"""

from __future__ import annotations

import logging
import tempfile
from pathlib import Path

from share_transfer import Category, RemoteFile, ShareSettings, TransferManager
from share_transfer.clients import LocalShareClient

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    with tempfile.TemporaryDirectory() as tmp:
        settings = ShareSettings(
            hostname="fileserver",
            username="alice",
            password="s3cret",
            share="data",
            path="/backups/laptop",
        )
        client = LocalShareClient(str(Path(tmp) / "server"))

        with TransferManager(settings, client) as manager:
            manager.init(create_if_missing=True)

            source = Path(tmp) / "chunk.bin"
            source.write_bytes(b"Hello, share!")
            chunk = RemoteFile("multichunk-0a1b2c", Category.MULTICHUNK)
            manager.upload(source, chunk)

            print(f"Multichunks: {sorted(manager.list(Category.MULTICHUNK))}")

            restored = Path(tmp) / "restored.bin"
            manager.download(chunk, restored)
            print(f"Content: {restored.read_bytes()!r}")

    print("Done! Temp directory cleaned up automatically.")
