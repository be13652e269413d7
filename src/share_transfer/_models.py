"""Immutable identity models."""

from __future__ import annotations

import dataclasses
from typing import Final

from share_transfer._category import Category, matches_category
from share_transfer._errors import InvalidPath

MARKER_NAME: Final = "syncany"


@dataclasses.dataclass(frozen=True)
class RemoteFile:
    """Immutable value object identifying one object in the repository.

    :param name: Bare file name inside the category folder.
    :param category: Category deciding the folder the file lives in.
    :raises InvalidPath: If ``name`` is empty or does not follow the
        naming pattern of ``category``.
    """

    name: str
    category: Category = Category.GENERIC

    def __post_init__(self) -> None:
        if not isinstance(self.category, Category):
            raise InvalidPath(f"Unknown category: {self.category!r}", path=self.name)
        if not self.name:
            raise InvalidPath("Remote file name must not be empty", path=self.name)
        if not matches_category(self.name, self.category):
            raise InvalidPath(
                f"Name does not match the {self.category.value} naming pattern",
                path=self.name,
            )

    @classmethod
    def marker(cls) -> RemoteFile:
        """The repository identity file stored directly at the root."""
        return cls(MARKER_NAME, Category.GENERIC)

    def __str__(self) -> str:
        return f"{self.category.value}:{self.name}"
