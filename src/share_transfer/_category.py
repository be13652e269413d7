"""Remote file categories and their fixed repository subfolders."""

from __future__ import annotations

import enum
import re
from typing import Final


class Category(enum.Enum):
    """Closed set of remote file categories."""

    MULTICHUNK = "multichunk"
    DATABASE = "database"
    ACTION = "action"
    TRANSACTION = "transaction"
    TEMP = "temp"
    GENERIC = "generic"


CATEGORY_FOLDERS: Final[dict[Category, str]] = {
    Category.MULTICHUNK: "multichunks",
    Category.DATABASE: "databases",
    Category.ACTION: "actions",
    Category.TRANSACTION: "transactions",
    Category.TEMP: "temporary",
}

# Names a listing may legitimately contain for each category folder.
NAME_PATTERNS: Final[dict[Category, re.Pattern[str]]] = {
    Category.MULTICHUNK: re.compile(r"multichunk-[0-9a-f]+"),
    Category.DATABASE: re.compile(r"db-[^-/]+-[0-9]+"),
    Category.ACTION: re.compile(r"action-[a-z]+-[^-/]+-[0-9]+"),
    Category.TRANSACTION: re.compile(r"transaction-[^/]+"),
    Category.TEMP: re.compile(r"temp-[^/]+"),
}


def folder_for(category: object) -> str:
    """Return the subfolder name for ``category``.

    Anything outside the known folder table, ``Category.GENERIC`` included,
    lives at the repository root and maps to ``""``.
    """
    if isinstance(category, Category):
        return CATEGORY_FOLDERS.get(category, "")
    return ""


def matches_category(name: str, category: Category) -> bool:
    """Check ``name`` against the naming pattern of ``category``.

    Categories without a pattern accept any single non-empty path segment.
    """
    pattern = NAME_PATTERNS.get(category)
    if pattern is None:
        return bool(name) and "/" not in name and "\\" not in name
    return pattern.fullmatch(name) is not None
