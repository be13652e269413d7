"""Typed remote-file storage gateway for network shares."""

from share_transfer._address import ShareAddress
from share_transfer._category import CATEGORY_FOLDERS, Category, folder_for
from share_transfer._client import ShareClient
from share_transfer._config import OPTION_SPECS, OptionSpec, ShareSettings
from share_transfer._connection import ConnectionManager
from share_transfer._errors import (
    ConnectionFailed,
    InitFailed,
    InvalidPath,
    MoveFailed,
    NotFound,
    StorageError,
    StorageIOError,
    ValidationError,
)
from share_transfer._layout import LayoutInitializer
from share_transfer._manager import TargetStatus, TransferManager
from share_transfer._models import MARKER_NAME, RemoteFile
from share_transfer._probes import ReadinessProbes
from share_transfer._registry import create_client, register_client, registered_schemes
from share_transfer._transfer import TransferOperations

__version__ = "0.1.0"

__all__ = [
    # Core
    "TransferManager",
    "TargetStatus",
    "ConnectionManager",
    "LayoutInitializer",
    "TransferOperations",
    "ReadinessProbes",
    # Clients
    "ShareClient",
    "register_client",
    "create_client",
    "registered_schemes",
    # Models & routing
    "RemoteFile",
    "MARKER_NAME",
    "Category",
    "CATEGORY_FOLDERS",
    "folder_for",
    "ShareAddress",
    # Config
    "ShareSettings",
    "OptionSpec",
    "OPTION_SPECS",
    # Errors
    "StorageError",
    "ConnectionFailed",
    "InitFailed",
    "NotFound",
    "StorageIOError",
    "MoveFailed",
    "InvalidPath",
    "ValidationError",
    # Version
    "__version__",
]
