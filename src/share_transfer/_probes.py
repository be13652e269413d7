"""Readiness probes -- best-effort, non-raising checks of the share."""

from __future__ import annotations

import logging
import uuid
from typing import TYPE_CHECKING

from share_transfer._models import RemoteFile

if TYPE_CHECKING:
    from share_transfer._connection import ConnectionManager

log = logging.getLogger(__name__)

_PROBE_CONTENT = b"test"


class ReadinessProbes:
    """Answers "is the target usable" without ever raising.

    Failure reasons are only logged; every probe returns ``False`` instead.

    :param connection: Connection owning the client and addresses.
    """

    def __init__(self, connection: ConnectionManager) -> None:
        self._connection = connection

    def target_exists(self) -> bool:
        """``True`` iff the repository root is a folder."""
        conn = self._connection
        try:
            if conn.client.is_folder(conn.root):
                log.info("target_exists: Target does exist at %s", conn.root)
                return True
            log.info("target_exists: Target does NOT exist at %s", conn.root)
            return False
        except Exception:
            log.warning("target_exists: Target does NOT exist, error occurred.", exc_info=True)
            return False

    def target_can_write(self) -> bool:
        """``True`` iff a probe file can be written and deleted in the root."""
        conn = self._connection
        try:
            if not conn.client.is_folder(conn.root):
                log.info("target_can_write: Can NOT write, target does not exist.")
                return False
            probe = conn.root.join(f"write-test-{uuid.uuid4().hex}")
            with conn.client.open_write(probe) as f:
                f.write(_PROBE_CONTENT)
            conn.client.delete(probe)
            log.info("target_can_write: Can write, test file created/deleted successfully.")
            return True
        except Exception:
            log.info("target_can_write: Can NOT write to target.", exc_info=True)
            return False

    def target_can_create(self) -> bool:
        """``True`` iff a probe folder can be created in the root's parent.

        Checks the parent on purpose: the question is whether the root could
        be created if it does not exist yet.
        """
        conn = self._connection
        parent = conn.root.parent
        try:
            if not conn.client.is_folder(parent):
                log.info("target_can_create: Can NOT create target at %s", parent)
                return False
            probe = parent.join(f"folder-test-{uuid.uuid4().hex}")
            conn.client.makedirs(probe)
            conn.client.remove_folder(probe)
            log.info("target_can_create: Can create target at %s", parent)
            return True
        except Exception:
            log.info("target_can_create: Can NOT create target at %s.", parent, exc_info=True)
            return False

    def repository_marker_exists(self) -> bool:
        """``True`` iff the repository marker is a regular file at the root."""
        conn = self._connection
        try:
            marker = conn.resolve(RemoteFile.marker())
            if conn.client.is_file(marker):
                log.info("repository_marker_exists: Repo file exists at %s", marker)
                return True
            log.info("repository_marker_exists: Repo file DOES NOT exist at %s", marker)
            return False
        except Exception:
            log.info("repository_marker_exists: Exception when checking repo file existence.", exc_info=True)
            return False
