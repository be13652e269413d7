"""TransferManager -- the primary user-facing facade."""

from __future__ import annotations

import dataclasses
from typing import TYPE_CHECKING

from share_transfer._connection import ConnectionManager
from share_transfer._layout import LayoutInitializer
from share_transfer._probes import ReadinessProbes
from share_transfer._registry import create_client
from share_transfer._transfer import TransferOperations

if TYPE_CHECKING:
    from types import TracebackType

    from share_transfer._category import Category
    from share_transfer._client import ShareClient
    from share_transfer._config import ShareSettings
    from share_transfer._models import RemoteFile
    from share_transfer._types import PathLike


@dataclasses.dataclass(frozen=True)
class TargetStatus:
    """Snapshot of all readiness probes.

    :param exists: The repository root is a folder.
    :param can_write: A file can be written to the root.
    :param can_create: The root could be created in its parent.
    :param repo_file_exists: The repository marker file is present.
    """

    exists: bool
    can_write: bool
    can_create: bool
    repo_file_exists: bool


class TransferManager:
    """Typed remote-file gateway for one repository on a network share.

    :param settings: Validated connection settings.
    :param client: Share client performing the primitive operations.
    :raises ConnectionFailed: If the repository address is malformed.
    """

    def __init__(self, settings: ShareSettings, client: ShareClient) -> None:
        self._connection = ConnectionManager(settings, client)
        self._layout = LayoutInitializer(self._connection)
        self._transfer = TransferOperations(self._connection)
        self._probes = ReadinessProbes(self._connection)

    @classmethod
    def from_settings(cls, settings: ShareSettings, scheme: str = "smb") -> TransferManager:
        """Build a manager whose client comes from the scheme registry.

        :raises ValueError: If no client is registered for ``scheme``.
        """
        return cls(settings, create_client(scheme, settings))

    def __repr__(self) -> str:
        return f"TransferManager(root={str(self._connection.root)!r}, settings={self._connection.settings!r})"

    @property
    def connection(self) -> ConnectionManager:
        return self._connection

    @property
    def settings(self) -> ShareSettings:
        return self._connection.settings

    # region: lifecycle
    def connect(self) -> None:
        """Check that the repository root is reachable."""
        self._connection.connect()

    def disconnect(self) -> None:
        self._connection.disconnect()

    def init(self, create_if_missing: bool = False) -> None:
        """Create the repository layout (see :class:`LayoutInitializer`)."""
        self._layout.init(create_if_missing)

    def close(self) -> None:
        """Close the underlying client, releasing any held resources."""
        self._connection.close()

    def __enter__(self) -> TransferManager:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    # endregion

    # region: transfers
    def download(self, remote: RemoteFile, destination: PathLike) -> None:
        self._transfer.download(remote, destination)

    def upload(self, source: PathLike, remote: RemoteFile) -> None:
        self._transfer.upload(source, remote)

    def delete(self, remote: RemoteFile) -> bool:
        return self._transfer.delete(remote)

    def move(self, source: RemoteFile, target: RemoteFile) -> None:
        self._transfer.move(source, target)

    def list(self, category: Category) -> dict[str, RemoteFile]:
        return self._transfer.list(category)

    # endregion

    # region: probes
    def test_target_exists(self) -> bool:
        return self._probes.target_exists()

    def test_target_can_write(self) -> bool:
        return self._probes.target_can_write()

    def test_target_can_create(self) -> bool:
        return self._probes.target_can_create()

    def test_repo_file_exists(self) -> bool:
        return self._probes.repository_marker_exists()

    def test_target(self) -> TargetStatus:
        """Run every probe and collect the answers."""
        return TargetStatus(
            exists=self.test_target_exists(),
            can_write=self.test_target_can_write(),
            can_create=self.test_target_can_create(),
            repo_file_exists=self.test_repo_file_exists(),
        )

    # endregion
