"""
Locale negotiation

Picks exactly one supported locale from the request signals:

1. the locale prefix already present in the path (authoritative);
2. the Accept-Language header (quality-weighted, best match);
3. a previously stored preference, if one is available and supported;
4. the default locale.

All functions here are pure. The stored preference is an optional
capability: components receive a PreferenceSource at construction time
and NoPreferenceSource is the "not available" variant.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Mapping

    from app.i18n.locale import LocaleTable


def parse_accept_language(header: str | None) -> list[tuple[str, float]]:
    """Parse an Accept-Language header into ``(tag, q)`` pairs, best first.

    Missing or malformed q-values count as 1.0. Entries whose q is zero, not
    finite or above 1 are dropped; equal weights keep their header order.

    Example:
        >>> parse_accept_language("fr-CA,fr;q=0.9,en;q=0.7")
        [('fr-CA', 1.0), ('fr', 0.9), ('en', 0.7)]
    """
    if not header:
        return []

    weighted: list[tuple[str, float]] = []
    for part in header.split(","):
        part = part.strip()
        if not part:
            continue
        tag, _, params = part.partition(";")
        q = 1.0
        for param in params.split(";"):
            name, _, value = param.strip().partition("=")
            if name.strip().lower() == "q":
                try:
                    q = float(value.strip())
                except ValueError:
                    q = 1.0
        tag = tag.strip()
        if not tag or not math.isfinite(q) or not 0 < q <= 1:
            continue
        weighted.append((tag, q))

    # Stable sort preserves original order at same q
    weighted.sort(key=lambda x: x[1], reverse=True)
    return weighted


def match_accept_language(header: str | None, supported: tuple[str, ...] | list[str]) -> str | None:
    """Return the best supported locale for an Accept-Language header, or None.

    Each tag is tried by exact match, then by base language ("fr-CA" → "fr").
    A ``*`` wildcard and unsupported tags are ignored.
    """
    supported_lower = [s.lower() for s in supported]

    for tag, _ in parse_accept_language(header):
        tag_lower = tag.lower()
        if tag_lower in supported_lower:
            return supported[supported_lower.index(tag_lower)]
        base = tag_lower.split("-")[0]
        if base in supported_lower:
            return supported[supported_lower.index(base)]

    return None


def negotiate(
    path_prefix: str | None,
    accept_language: str | None,
    stored_preference: str | None,
    table: LocaleTable,
) -> str:
    """Choose the request locale. Never fails; always returns a supported locale."""
    if table.is_supported(path_prefix):
        return path_prefix

    matched = match_accept_language(accept_language, table.locales)
    if matched is not None:
        return matched

    return table.coerce(stored_preference)


# ── Stored preference capability ──────────────────────────────────────────────


class PreferenceSource(Protocol):
    """Where a previously chosen locale can be read from, if anywhere."""

    def get_preference(self, cookies: Mapping[str, str]) -> str | None: ...


class NoPreferenceSource:
    """No stored preference is available."""

    def get_preference(self, cookies: Mapping[str, str]) -> str | None:
        return None


class CookiePreferenceSource:
    """Reads the preferred locale from a cookie set by the language switcher."""

    def __init__(self, cookie_name: str):
        self.cookie_name = cookie_name

    def get_preference(self, cookies: Mapping[str, str]) -> str | None:
        value = cookies.get(self.cookie_name)
        return value.strip() if value else None
