"""ShareAddress -- immutable, normalized address on a network share."""

from __future__ import annotations

from typing import Final

from share_transfer._errors import InvalidPath


class ShareAddress:
    """An immutable address ``<scheme>://<host>/<share>/<parts...>``.

    ``parts`` is the normalized key below the share. An address with no
    parts is the share root.

    :param scheme: Client scheme (e.g. ``"smb"``).
    :param host: Server hostname.
    :param share: Share name.
    :param key: Raw path below the share; normalized on construction.
    :raises InvalidPath: If any component is malformed or ``key`` climbs
        above the share root.
    """

    __slots__ = ("_host", "_parts", "_scheme", "_share")
    _scheme: Final[str]  # type: ignore[misc]
    _host: Final[str]  # type: ignore[misc]
    _share: Final[str]  # type: ignore[misc]
    _parts: Final[tuple[str, ...]]  # type: ignore[misc]

    def __init__(self, scheme: str, host: str, share: str, key: str = "") -> None:
        for label, value in (("scheme", scheme), ("host", host), ("share", share)):
            if not value or "/" in value or "\\" in value or "\0" in value:
                raise InvalidPath(f"Malformed {label}: {value!r}", path=key)
        object.__setattr__(self, "_scheme", scheme)
        object.__setattr__(self, "_host", host)
        object.__setattr__(self, "_share", share)
        object.__setattr__(self, "_parts", normalize_parts((), key))

    @classmethod
    def _with_parts(cls, base: ShareAddress, parts: tuple[str, ...]) -> ShareAddress:
        addr = object.__new__(cls)
        object.__setattr__(addr, "_scheme", base._scheme)
        object.__setattr__(addr, "_host", base._host)
        object.__setattr__(addr, "_share", base._share)
        object.__setattr__(addr, "_parts", parts)
        return addr

    @property
    def scheme(self) -> str:
        return self._scheme

    @property
    def host(self) -> str:
        return self._host

    @property
    def share(self) -> str:
        return self._share

    @property
    def parts(self) -> tuple[str, ...]:
        """Normalized path components below the share."""
        return self._parts

    @property
    def key(self) -> str:
        """Path below the share joined with ``/`` (empty for the share root)."""
        return "/".join(self._parts)

    @property
    def name(self) -> str:
        """Final component, or the share name for the share root."""
        return self._parts[-1] if self._parts else self._share

    @property
    def parent(self) -> ShareAddress:
        """Parent address; the share root is its own parent."""
        return self._with_parts(self, self._parts[:-1])

    def join(self, raw: str, *, confine: bool = True) -> ShareAddress:
        """Append ``raw`` below this address.

        :param confine: If ``True``, reject results that leave this address.
        :raises InvalidPath: If the result escapes this address (when
            ``confine`` is set) or the share root.
        """
        parts = normalize_parts(self._parts, raw)
        if confine and (len(parts) <= len(self._parts) or parts[: len(self._parts)] != self._parts):
            raise InvalidPath(f"Name escapes {str(self)!r}: {raw!r}", path=raw)
        return self._with_parts(self, parts)

    def __truediv__(self, other: str) -> ShareAddress:
        return self.join(other)

    def __str__(self) -> str:
        base = f"{self._scheme}://{self._host}/{self._share}"
        if self._parts:
            return f"{base}/{self.key}"
        return base

    def __repr__(self) -> str:
        return f"ShareAddress({str(self)!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ShareAddress):
            return str(self) == str(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(str(self))

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError(f"ShareAddress is immutable: cannot set '{name}'")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"ShareAddress is immutable: cannot delete '{name}'")


def normalize_parts(base: tuple[str, ...], raw: str) -> tuple[str, ...]:
    """Resolve ``raw`` relative to ``base``.

    Empty and ``.`` segments are dropped, backslashes count as separators
    and ``..`` removes the previous segment.

    :raises InvalidPath: On null bytes or if ``..`` climbs above the share root.
    """
    if "\0" in raw:
        raise InvalidPath("Path contains null byte", path=raw)
    parts = list(base)
    for segment in raw.replace("\\", "/").split("/"):
        if segment == "" or segment == ".":
            continue
        if segment == "..":
            if not parts:
                raise InvalidPath("Path climbs above the share root", path=raw)
            parts.pop()
            continue
        parts.append(segment)
    return tuple(parts)
