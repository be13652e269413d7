"""Client registry -- maps address schemes to share client factories."""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from share_transfer._client import ShareClient
    from share_transfer._config import ShareSettings

ClientFactory = Callable[["ShareSettings"], "ShareClient"]

# Global client factory registry: maps scheme strings to factories.
_CLIENT_FACTORIES: dict[str, ClientFactory] = {}


def register_client(scheme: str, factory: ClientFactory) -> None:
    """Register a client factory for a given scheme.

    :param scheme: The scheme identifier (e.g. ``"smb"``).
    :param factory: Callable building a client from settings.
    """
    _CLIENT_FACTORIES[scheme] = factory


def _smb_factory(settings: ShareSettings) -> ShareClient:
    from share_transfer.clients._smb import SMBShareClient

    return SMBShareClient(settings.hostname, username=settings.username, password=settings.password)


def _sftp_factory(settings: ShareSettings) -> ShareClient:
    from share_transfer.clients._sftp import SFTPShareClient

    return SFTPShareClient(settings.hostname, username=settings.username, password=settings.password)


def _register_builtin_clients() -> None:
    """Register the built-in network clients."""
    _CLIENT_FACTORIES.setdefault("smb", _smb_factory)
    _CLIENT_FACTORIES.setdefault("sftp", _sftp_factory)


def registered_schemes() -> list[str]:
    """Sorted list of schemes with a registered factory."""
    _register_builtin_clients()
    return sorted(_CLIENT_FACTORIES)


def create_client(scheme: str, settings: ShareSettings) -> ShareClient:
    """Build the client registered for ``scheme``.

    :raises ValueError: If no factory is registered for ``scheme``.
    """
    _register_builtin_clients()
    if scheme not in _CLIENT_FACTORIES:
        raise ValueError(f"Unknown client scheme '{scheme}'. Registered schemes: {sorted(_CLIENT_FACTORIES)}")
    return _CLIENT_FACTORIES[scheme](settings)
