"""Layout initializer -- creates the repository root and category folders."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from share_transfer._errors import InitFailed
from share_transfer._probes import ReadinessProbes

if TYPE_CHECKING:
    from share_transfer._connection import ConnectionManager

log = logging.getLogger(__name__)


class LayoutInitializer:
    """Ensures the repository folder layout exists on the share.

    :param connection: Connection owning the client and addresses.
    """

    def __init__(self, connection: ConnectionManager) -> None:
        self._connection = connection
        self._probes = ReadinessProbes(connection)

    def init(self, create_if_missing: bool = False) -> None:
        """Create the repository layout.

        When ``create_if_missing`` is false and the root is absent, the
        category folders are still attempted and fail with ``InitFailed``.

        :param create_if_missing: Create the repository root (recursively)
            if it does not exist yet.
        :raises ConnectionFailed: If the root cannot be reached.
        :raises InitFailed: If a folder cannot be created.
        """
        conn = self._connection
        with conn.session():
            with conn.errors(InitFailed, "Cannot create required directories", path=conn.root):
                if not self._probes.target_exists() and create_if_missing:
                    log.info("Creating repository root %s", conn.root)
                    conn.client.makedirs(conn.root)
                for address in conn.folders.values():
                    log.debug("Ensuring folder %s", address)
                    conn.client.mkdir(address, exist_ok=True)
