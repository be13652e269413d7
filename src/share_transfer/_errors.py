"""Error taxonomy for share_transfer.

Every backend failure is re-raised as exactly one of these kinds, with the
original exception kept as ``__cause__``.
"""

from __future__ import annotations

from typing import Optional


class StorageError(Exception):
    """Base class for all share_transfer errors.

    :param message: Human-readable error description.
    :param path: The remote address or local path involved, if any.
    :param backend: The client scheme involved, if any.
    """

    def __init__(self, message: str = "", *, path: Optional[str] = None, backend: Optional[str] = None) -> None:
        self.path = path
        self.backend = backend
        super().__init__(message)

    def __str__(self) -> str:
        parts = [super().__str__()]
        if self.path is not None:
            parts.append(f"path={self.path!r}")
        if self.backend is not None:
            parts.append(f"backend={self.backend!r}")
        return " | ".join(parts) if len(parts) > 1 else parts[0]

    def __repr__(self) -> str:
        cls = type(self).__name__
        args = [repr(super().__str__())]
        if self.path is not None:
            args.append(f"path={self.path!r}")
        if self.backend is not None:
            args.append(f"backend={self.backend!r}")
        return f"{cls}({', '.join(args)})"


class ConnectionFailed(StorageError):
    """Raised when the repository root cannot be reached or is malformed."""


class InitFailed(StorageError):
    """Raised when the repository layout cannot be created."""


class NotFound(StorageError):
    """Raised when a remote object cannot be opened for reading."""


class StorageIOError(StorageError):
    """Raised for local or remote byte-stream, listing and temp-file failures."""


class MoveFailed(StorageError):
    """Raised when the backend rejects a rename between two remote paths."""


class InvalidPath(StorageError):
    """Raised for names that are malformed or escape their category folder."""


class ValidationError(StorageError):
    """Raised when settings are missing required fields or hold invalid values.

    :param fields: Every offending field name, in declaration order.
    """

    def __init__(self, message: str = "", *, fields: tuple[str, ...] = ()) -> None:
        self.fields = tuple(fields)
        super().__init__(message)

    def __str__(self) -> str:
        base = super().__str__()
        if self.fields:
            return f"{base} | fields={list(self.fields)!r}"
        return base

    def __repr__(self) -> str:
        cls = type(self).__name__
        args = [repr(self.args[0] if self.args else "")]
        if self.fields:
            args.append(f"fields={self.fields!r}")
        return f"{cls}({', '.join(args)})"
