"""
Locale table

The static registry of supported locales, the default locale, and the
per-locale map between canonical route segments and their localized
aliases.

Invariants of a built LocaleTable:
- the default locale is one of the supported locales;
- every supported locale maps every canonical segment to exactly one alias;
- per locale, no two canonical segments share an alias;
- the default locale's aliases are the canonical segments themselves (any
  aliases configured for it are ignored).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from functools import lru_cache
from types import MappingProxyType
from typing import Mapping

from app.config import settings
from app.exceptions import UnknownRouteSegment, UnsupportedLocaleRequested

logger = logging.getLogger(__name__)

# ── Constants ─────────────────────────────────────────────────────────────────

# Internal route vocabulary used by the application's page routes
CANONICAL_SEGMENTS: tuple[str, ...] = ("recipes", "login", "signup", "my-cookbook", "all-recipes")

# canonical segment -> localized alias, per locale; English is the canonical vocabulary
ROUTE_SEGMENT_ALIASES: dict[str, dict[str, str]] = {
    "en": {
        "recipes": "recipes",
        "login": "login",
        "signup": "signup",
        "my-cookbook": "my-cookbook",
        "all-recipes": "all-recipes",
    },
    "fr": {
        "recipes": "recettes",
        "login": "connexion",
        "signup": "inscription",
        "my-cookbook": "mon-livre-de-cuisine",
        "all-recipes": "toutes-les-recettes",
    },
    "es": {
        "recipes": "recetas",
        "login": "iniciar-sesion",
        "signup": "registrarse",
        "my-cookbook": "mi-libro-de-cocina",
        "all-recipes": "todas-las-recetas",
    },
    "de": {
        "recipes": "rezepte",
        "login": "anmelden",
        "signup": "registrieren",
        "my-cookbook": "mein-kochbuch",
        "all-recipes": "alle-rezepte",
    },
}

# Human-readable names for supported locales
LANGUAGE_NAMES: dict[str, str] = {
    "en": "English",
    "fr": "Français",
    "es": "Español",
    "de": "Deutsch",
}


@dataclass(frozen=True)
class LocaleTable:
    """Supported locales plus the bijective canonical ⇄ alias segment maps.

    Build with :meth:`build`; the dataclass fields hold read-only views so a
    table can be shared freely between concurrent requests.
    """

    locales: tuple[str, ...]
    default: str
    segments: tuple[str, ...]
    _to_alias: Mapping[str, Mapping[str, str]] = field(repr=False)
    _to_canonical: Mapping[str, Mapping[str, str]] = field(repr=False)

    @classmethod
    def build(
        cls,
        locales: list[str] | tuple[str, ...],
        default: str,
        aliases: Mapping[str, Mapping[str, str]],
        segments: tuple[str, ...] = CANONICAL_SEGMENTS,
    ) -> LocaleTable:
        """Validate the alias maps and return an immutable table.

        Raises:
            ValueError: if any of the table invariants does not hold.
        """
        locales = tuple(locales)
        if not locales:
            raise ValueError("At least one locale must be supported")
        if len(set(locales)) != len(locales):
            raise ValueError(f"Duplicate locale codes in {locales}")
        if default not in locales:
            raise ValueError(f"Default locale '{default}' is not in supported locales {locales}")

        to_alias: dict[str, Mapping[str, str]] = {}
        to_canonical: dict[str, Mapping[str, str]] = {}
        for locale in locales:
            if locale == default:
                # The default locale always shows canonical segments
                if locale in aliases and any(aliases[locale].get(s, s) != s for s in segments):
                    logger.warning("Ignoring route segment aliases of default locale '%s'", locale)
                mapping = {s: s for s in segments}
            else:
                if locale not in aliases:
                    raise ValueError(f"No route segment aliases configured for locale '{locale}'")
                mapping = dict(aliases[locale])
                missing = set(segments) - set(mapping)
                if missing:
                    raise ValueError(f"Locale '{locale}' has no alias for segments {sorted(missing)}")
                unknown = set(mapping) - set(segments)
                if unknown:
                    raise ValueError(f"Locale '{locale}' aliases unknown segments {sorted(unknown)}")

            reverse = {alias: canonical for canonical, alias in mapping.items()}
            if len(reverse) != len(mapping):
                raise ValueError(f"Locale '{locale}' maps two segments to the same alias")

            to_alias[locale] = MappingProxyType(mapping)
            to_canonical[locale] = MappingProxyType(reverse)

        return cls(
            locales=locales,
            default=default,
            segments=tuple(segments),
            _to_alias=MappingProxyType(to_alias),
            _to_canonical=MappingProxyType(to_canonical),
        )

    def is_supported(self, locale: str | None) -> bool:
        return locale is not None and locale in self._to_alias

    def require(self, locale: str | None) -> str:
        """Return ``locale`` if supported.

        Raises:
            UnsupportedLocaleRequested: for anything outside the supported set.
        """
        if not self.is_supported(locale):
            raise UnsupportedLocaleRequested(locale)
        return locale

    def coerce(self, locale: str | None) -> str:
        """Return ``locale`` if supported, otherwise the default locale."""
        try:
            return self.require(locale)
        except UnsupportedLocaleRequested:
            return self.default

    def alias_for(self, locale: str, canonical: str) -> str:
        """Localized alias of a known canonical segment.

        Raises:
            UnsupportedLocaleRequested: unknown locale.
            UnknownRouteSegment: ``canonical`` is not a canonical segment.
        """
        mapping = self._to_alias.get(self.require(locale), {})
        try:
            return mapping[canonical]
        except KeyError:
            raise UnknownRouteSegment(locale, canonical) from None

    def canonical_for(self, locale: str, alias: str) -> str:
        """Canonical segment behind a localized alias.

        Raises:
            UnsupportedLocaleRequested: unknown locale.
            UnknownRouteSegment: ``alias`` is not an alias in this locale.
        """
        mapping = self._to_canonical.get(self.require(locale), {})
        try:
            return mapping[alias]
        except KeyError:
            raise UnknownRouteSegment(locale, alias) from None

    def aliases(self, locale: str) -> Mapping[str, str]:
        """Read-only canonical -> alias view for one locale."""
        return self._to_alias[self.require(locale)]


@lru_cache
def get_locale_table() -> LocaleTable:
    """The process-wide locale table built from settings."""
    return LocaleTable.build(
        locales=settings.supported_languages,
        default=settings.default_language,
        aliases=ROUTE_SEGMENT_ALIASES,
    )


def get_language_info(locale: str, table: LocaleTable | None = None) -> dict[str, str | bool]:
    """Return a metadata dict describing the given locale.

    Returns:
        Dict with keys: ``code`` (str), ``name`` (str), ``is_default`` (bool).
    """
    table = table or get_locale_table()
    return {
        "code": locale,
        "name": LANGUAGE_NAMES.get(locale, locale),
        "is_default": locale == table.default,
    }
