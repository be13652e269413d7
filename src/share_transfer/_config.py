"""Configuration model -- validated, immutable connection settings."""

from __future__ import annotations

import dataclasses
from typing import TYPE_CHECKING, Final

from share_transfer._address import normalize_parts
from share_transfer._errors import InvalidPath, ValidationError

if TYPE_CHECKING:
    from collections.abc import Mapping


@dataclasses.dataclass(frozen=True)
class OptionSpec:
    """Declared constraints of one settings field.

    :param name: Key in the raw option mapping.
    :param description: Human-readable label.
    :param required: Whether a non-empty value must be supplied.
    :param sensitive: Whether the value must be hidden in any dump.
    :param default: Value used when an optional key is absent.
    """

    name: str
    description: str
    required: bool = True
    sensitive: bool = False
    default: str | None = None


OPTION_SPECS: Final[tuple[OptionSpec, ...]] = (
    OptionSpec("hostname", "Hostname"),
    OptionSpec("username", "Username"),
    OptionSpec("password", "Password", sensitive=True),
    OptionSpec("share", "Share"),
    OptionSpec("path", "Path", required=False, default="/"),
)

_HIDDEN = "<hidden>"


def _is_blank(value: object, *, sensitive: bool = False) -> bool:
    if value is None:
        return True
    # Secrets are taken verbatim; whitespace is a valid password.
    return not str(value) if sensitive else not str(value).strip()


@dataclasses.dataclass(frozen=True, repr=False)
class ShareSettings:
    """Connection settings for one gateway session.

    Instances are validated on construction; an invalid ``ShareSettings``
    cannot exist.

    :param hostname: Server hostname.
    :param username: Login name.
    :param password: Login password (never rendered in ``repr``).
    :param share: Network share name.
    :param path: Repository root inside the share.
    :raises ValidationError: Listing every missing or invalid field.
    """

    hostname: str
    username: str
    password: str
    share: str
    path: str = "/"

    def __post_init__(self) -> None:
        missing = tuple(
            spec.name
            for spec in OPTION_SPECS
            if spec.required and _is_blank(getattr(self, spec.name), sensitive=spec.sensitive)
        )
        if missing:
            raise ValidationError(f"Missing required settings: {', '.join(missing)}", fields=missing)
        try:
            normalize_parts((), self.path)
        except InvalidPath as exc:
            raise ValidationError(f"Invalid repository path {self.path!r}: {exc}", fields=("path",)) from exc

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> ShareSettings:
        """Construct from a plain mapping (e.g. parsed TOML/JSON).

        Optional keys fall back to their declared default.

        :raises ValidationError: Listing every missing required key.
        """
        values: dict[str, str] = {}
        missing: list[str] = []
        for spec in OPTION_SPECS:
            raw = data.get(spec.name)
            if _is_blank(raw, sensitive=spec.sensitive):
                if spec.required:
                    missing.append(spec.name)
                elif spec.default is not None:
                    values[spec.name] = spec.default
                continue
            values[spec.name] = str(raw)
        if missing:
            raise ValidationError(f"Missing required settings: {', '.join(missing)}", fields=tuple(missing))
        return cls(**values)

    def redacted(self) -> dict[str, str]:
        """Field values with sensitive ones replaced by ``<hidden>``."""
        return {
            spec.name: _HIDDEN if spec.sensitive else str(getattr(self, spec.name))
            for spec in OPTION_SPECS
        }

    def __repr__(self) -> str:
        fields = ", ".join(f"{key}={value!r}" for key, value in self.redacted().items())
        return f"ShareSettings({fields})"

    __str__ = __repr__
