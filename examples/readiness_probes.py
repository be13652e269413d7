"""Readiness probes -- ask whether a target is usable without raising.

Demonstrates:
- test_target() before and after init
- Writing the repository marker file and detecting it
"""

from __future__ import annotations

import tempfile
from pathlib import Path

from share_transfer import RemoteFile, ShareSettings, TransferManager
from share_transfer.clients import LocalShareClient

if __name__ == "__main__":
    with tempfile.TemporaryDirectory() as tmp:
        settings = ShareSettings(hostname="nas", username="bob", password="pw", share="repo", path="/team/main")
        client = LocalShareClient(str(Path(tmp) / "server"))

        with TransferManager(settings, client) as manager:
            client.makedirs(manager.connection.share_root)
            print(f"Before init: {manager.test_target()}")

            manager.init(create_if_missing=True)
            marker = Path(tmp) / "syncany"
            marker.write_text("repo")
            manager.upload(marker, RemoteFile.marker())
            print(f"After init:  {manager.test_target()}")
