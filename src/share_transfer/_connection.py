"""Connection manager -- session state and connect/disconnect lifecycle."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING

from share_transfer._address import ShareAddress
from share_transfer._category import CATEGORY_FOLDERS, Category
from share_transfer._errors import ConnectionFailed, InvalidPath, StorageError

if TYPE_CHECKING:
    from collections.abc import Iterator
    from contextlib import AbstractContextManager

    from share_transfer._client import ShareClient
    from share_transfer._config import ShareSettings
    from share_transfer._models import RemoteFile

log = logging.getLogger(__name__)


@contextmanager
def _errors(
    kind: type[StorageError],
    message: str,
    *,
    path: str | None = None,
    backend: str | None = None,
) -> Iterator[None]:
    """Re-raise any non-``StorageError`` as ``kind``, keeping the cause."""
    try:
        yield
    except StorageError:
        raise
    except Exception as exc:
        log.error("%s: %s", message, exc)
        raise kind(f"{message}: {exc}", path=path, backend=backend) from exc


class ConnectionManager:
    """Owns the settings, the client and the resolved repository addresses.

    Addresses are computed once here and never change afterwards.

    :param settings: Validated connection settings.
    :param client: Share client performing the primitive operations.
    """

    def __init__(self, settings: ShareSettings, client: ShareClient) -> None:
        self._settings = settings
        self._client = client
        try:
            self._share_root = ShareAddress(client.scheme, settings.hostname, settings.share)
            self._root = self._share_root.join(settings.path, confine=False)
        except InvalidPath as exc:
            raise ConnectionFailed(f"Malformed repository address: {exc}", backend=client.scheme) from exc
        self._folders: dict[Category, ShareAddress] = {
            category: self._root / folder for category, folder in CATEGORY_FOLDERS.items()
        }
        log.info("Repository root is %s", self._root)

    def __repr__(self) -> str:
        return f"ConnectionManager(root={str(self._root)!r}, client={self._client!r})"

    @property
    def settings(self) -> ShareSettings:
        return self._settings

    @property
    def client(self) -> ShareClient:
        return self._client

    @property
    def root(self) -> ShareAddress:
        """Address of the repository root."""
        return self._root

    @property
    def share_root(self) -> ShareAddress:
        """Address of the share itself."""
        return self._share_root

    @property
    def folders(self) -> dict[Category, ShareAddress]:
        """Addresses of the category subfolders."""
        return dict(self._folders)

    def folder(self, category: Category) -> ShareAddress:
        """Address of the folder holding files of ``category``."""
        return self._folders.get(category, self._root)

    def resolve(self, remote: RemoteFile) -> ShareAddress:
        """Address of ``remote``, confined to its category folder.

        :raises InvalidPath: If the name escapes the folder.
        """
        return self.folder(remote.category).join(remote.name)

    def errors(self, kind: type[StorageError], message: str, *, path: object = None) -> AbstractContextManager[None]:
        """Error-mapping context for one operation on this connection."""
        return _errors(kind, message, path=None if path is None else str(path), backend=self._client.scheme)

    # region: lifecycle

    def connect(self) -> None:
        """Check that the repository root is reachable.

        :raises ConnectionFailed: If the existence check raises.
        """
        try:
            self._client.exists(self._root)
        except Exception as exc:
            log.error("Unable to connect to target at %s: %s", self._root, exc)
            raise ConnectionFailed(
                f"Unable to connect to target: {exc}", path=str(self._root), backend=self._client.scheme
            ) from exc

    def disconnect(self) -> None:
        """Nothing to release; every client call stands on its own."""
        log.debug("Disconnect from %s (no-op)", self._root)

    @contextmanager
    def session(self) -> Iterator[ConnectionManager]:
        """Connect, and disconnect again on every exit path."""
        try:
            self.connect()
            yield self
        finally:
            self.disconnect()

    def close(self) -> None:
        """Close the underlying client."""
        self._client.close()

    # endregion

