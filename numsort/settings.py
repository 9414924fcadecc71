"""Typed comparison settings with Pydantic validation."""

from __future__ import annotations

import json
from enum import Enum
from pathlib import Path
from typing import Literal

import tomllib
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from .errors import InvalidConfiguration

__all__ = ["Backend", "CaseSensitivity", "ComparisonConfig", "load_config"]

Backend = Literal["codepoint", "system", "icu"]


class CaseSensitivity(str, Enum):
    """Enumerate how letter case takes part in text ordering."""

    SENSITIVE = "sensitive"
    INSENSITIVE = "insensitive"


class ComparisonConfig(BaseModel):
    """Options shared by every comparison made with one comparator."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    numeric: bool = True
    case_sensitivity: CaseSensitivity = CaseSensitivity.SENSITIVE
    locale: str | None = None
    backend: Backend | None = None

    @field_validator("case_sensitivity", mode="before")
    @classmethod
    def _normalize_case_sensitivity(cls, value: object) -> object:
        if isinstance(value, str) and not isinstance(value, CaseSensitivity):
            return value.strip().lower()
        return value

    @field_validator("locale", mode="before")
    @classmethod
    def _normalize_locale(cls, value: object) -> object:
        """Treat blank locale identifiers as "use the default"."""
        if isinstance(value, str):
            cleaned = value.strip()
            return cleaned or None
        return value

    @property
    def ignore_case(self) -> bool:
        return self.case_sensitivity is CaseSensitivity.INSENSITIVE

    @property
    def effective_backend(self) -> Backend:
        """Return the collation backend, inferring it from ``locale`` if unset."""
        if self.backend is not None:
            return self.backend
        return "system" if self.locale else "codepoint"


def load_config(path: str | Path) -> ComparisonConfig:
    """Load :class:`ComparisonConfig` from *path* with validation.

    Format is detected by file extension: ``.toml`` uses :mod:`tomllib`,
    everything else is treated as JSON.  Unreadable or malformed files and
    validation errors are wrapped into :class:`InvalidConfiguration`.
    """
    p = Path(path)
    try:
        with p.open("rb") as fh:
            data = tomllib.load(fh) if p.suffix.lower() == ".toml" else json.load(fh)
    except OSError as exc:
        raise InvalidConfiguration(f"{p}: cannot read settings: {exc.strerror or exc}") from exc
    except (UnicodeDecodeError, json.JSONDecodeError, tomllib.TOMLDecodeError) as exc:
        raise InvalidConfiguration(f"{p}: {exc}") from exc
    if not isinstance(data, dict):
        raise InvalidConfiguration(f"{p}: settings must be a mapping")
    try:
        return ComparisonConfig.model_validate(data)
    except ValidationError as exc:
        raise InvalidConfiguration(str(exc)) from exc
