"""Pluggable collation strategies for the non-numeric parts of strings.

Every collator turns a text segment into a sort key; two segments are ordered
by comparing their keys. Keys of one collator are only comparable with each
other.
"""

from __future__ import annotations

import locale
import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, Protocol

from .errors import InvalidConfiguration
from .settings import ComparisonConfig

__all__ = [
    "CodepointCollator",
    "Collator",
    "IcuCollator",
    "SystemLocaleCollator",
    "build_collator",
]

logger = logging.getLogger(__name__)

# LC_COLLATE is process-wide state; every switch happens under this lock.
_LOCALE_LOCK = threading.RLock()


class Collator(Protocol):
    """Produce ordering keys for text segments."""

    def sort_key(self, text: str) -> Any:
        ...


class CodepointCollator:
    """Order text by Unicode code point, optionally ignoring case."""

    def __init__(self, *, ignore_case: bool = False) -> None:
        self.ignore_case = ignore_case

    def sort_key(self, text: str) -> str:
        return text.casefold() if self.ignore_case else text

    def __repr__(self) -> str:
        return f"CodepointCollator(ignore_case={self.ignore_case})"


@contextmanager
def _collate_locale(name: str) -> Iterator[None]:
    with _LOCALE_LOCK:
        previous = locale.setlocale(locale.LC_COLLATE)
        locale.setlocale(locale.LC_COLLATE, name)
        try:
            yield
        finally:
            locale.setlocale(locale.LC_COLLATE, previous)


def _utf8_variant(name: str) -> str | None:
    base, dot, rest = name.partition(".")
    if not dot:
        return None
    _encoding, at, modifier = rest.partition("@")
    return f"{base}.UTF-8{at}{modifier}"


def _locale_candidates(identifier: str) -> list[str]:
    """Return the names tried for *identifier*, most literal first.

    BCP 47 tags such as ``de-DE`` are also tried in POSIX form, and the
    ``locale.normalize`` alias is tried with a UTF-8 codeset as well.
    """
    names = [identifier]
    posix = identifier.replace("-", "_")
    if posix != identifier:
        names.append(posix)
    candidates: list[str] = []
    for name in names:
        candidates.append(name)
        if "." not in name:
            candidates.append(f"{name}.UTF-8")
        normalized = locale.normalize(name)
        candidates.append(normalized)
        utf8 = _utf8_variant(normalized)
        if utf8 is not None:
            candidates.append(utf8)
    unique: list[str] = []
    for candidate in candidates:
        if candidate and candidate not in unique:
            unique.append(candidate)
    return unique


def _probe_locale(name: str) -> bool:
    try:
        with _collate_locale(name):
            return True
    except (locale.Error, ValueError):
        # ValueError: names with embedded NUL characters
        return False


def resolve_system_locale(identifier: str | None) -> str:
    """Return a name ``setlocale`` accepts for *identifier*.

    ``None`` selects the collation of the process environment, falling back to
    the ``C`` locale when the environment names a locale the host lacks.
    """
    if identifier is None:
        if _probe_locale(""):
            return ""
        logger.info("Environment locale unavailable, collating with C locale")
        return "C"
    for candidate in _locale_candidates(identifier):
        if _probe_locale(candidate):
            if candidate != identifier:
                logger.info("Locale %s resolved as %s", identifier, candidate)
            return candidate
    logger.info("Cannot resolve locale %s", identifier)
    raise InvalidConfiguration(
        f"Locale {identifier!r} is not available on this system",
        locale=identifier,
    )


class SystemLocaleCollator:
    """Collate with the C library rules of a system locale."""

    def __init__(self, identifier: str | None = None, *, ignore_case: bool = False) -> None:
        self.identifier = identifier
        self.ignore_case = ignore_case
        self.locale_name = resolve_system_locale(identifier)

    def sort_key(self, text: str) -> str:
        if self.ignore_case:
            text = text.casefold()
        with _collate_locale(self.locale_name):
            return locale.strxfrm(text)

    def __repr__(self) -> str:
        return (
            f"SystemLocaleCollator({self.locale_name!r}, "
            f"ignore_case={self.ignore_case})"
        )


class IcuCollator:
    """Collate with ICU rules via PyICU.

    Case-insensitive collation uses secondary strength, so accents still
    matter while letter case does not.
    """

    def __init__(self, identifier: str | None = None, *, ignore_case: bool = False) -> None:
        try:
            import icu
        except ImportError as exc:
            raise InvalidConfiguration(
                "The 'icu' backend requires PyICU (pip install numsort[icu])",
                locale=identifier,
            ) from exc

        self.identifier = identifier
        self.ignore_case = ignore_case
        if identifier is None:
            icu_locale = icu.Locale.getDefault()
        else:
            icu_locale = icu.Locale(identifier)
            known = {
                available.getLanguage()
                for available in icu.Locale.getAvailableLocales().values()
            }
            if not icu_locale.getLanguage() or icu_locale.getLanguage() not in known:
                logger.info("ICU does not know locale %s", identifier)
                raise InvalidConfiguration(
                    f"Locale {identifier!r} is not known to ICU",
                    locale=identifier,
                )
        self._collator = icu.Collator.createInstance(icu_locale)
        self._collator.setStrength(
            icu.Collator.SECONDARY if ignore_case else icu.Collator.TERTIARY
        )
        self.locale_name = icu_locale.getName()

    def sort_key(self, text: str) -> bytes:
        return self._collator.getSortKey(text)

    def __repr__(self) -> str:
        return f"IcuCollator({self.locale_name!r}, ignore_case={self.ignore_case})"


def build_collator(config: ComparisonConfig) -> Collator:
    """Return the collator selected by *config*."""
    backend = config.effective_backend
    if backend == "icu":
        collator: Collator = IcuCollator(config.locale, ignore_case=config.ignore_case)
    elif backend == "system":
        collator = SystemLocaleCollator(config.locale, ignore_case=config.ignore_case)
    else:
        if config.locale is not None:
            logger.info(
                "Locale %s ignored by the codepoint backend", config.locale
            )
        collator = CodepointCollator(ignore_case=config.ignore_case)
    logger.debug("Using %r", collator)
    return collator
