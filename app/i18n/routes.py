"""
Path localization

Bidirectional translation between canonical route segments (what the
application's routes are declared with) and localized aliases (what users
see in the address bar), plus the small path helpers built on top.

    to_localized("fr", "recipes")        -> "recettes"
    to_canonical("fr", "recettes")       -> "recipes"
    localize_path("/recipes/pasta", "fr") -> "/fr/recettes/pasta"
"""

from __future__ import annotations

import logging

from app.exceptions import UnknownRouteSegment, UnsupportedLocaleRequested
from app.i18n.locale import LocaleTable, get_locale_table

logger = logging.getLogger(__name__)


def to_localized(locale: str, canonical_segment: str, table: LocaleTable | None = None) -> str:
    """Localized alias for ``canonical_segment``.

    Unknown segments (dynamic values such as handles) come back unchanged.
    """
    table = table or get_locale_table()
    try:
        return table.alias_for(locale, canonical_segment)
    except (UnknownRouteSegment, UnsupportedLocaleRequested):
        return canonical_segment


def to_canonical(locale: str, alias: str, table: LocaleTable | None = None) -> str | None:
    """Canonical segment behind ``alias``, or None when it is not a known alias.

    None tells the caller to treat the raw segment as a literal.
    """
    table = table or get_locale_table()
    try:
        return table.canonical_for(locale, alias)
    except UnknownRouteSegment:
        return None
    except UnsupportedLocaleRequested:
        logger.debug("to_canonical called with unsupported locale %r", locale)
        return None


def split_path(path: str) -> list[str]:
    """Non-empty segments of a URL path."""
    return [segment for segment in path.split("/") if segment]


def split_locale_prefix(path: str, table: LocaleTable | None = None) -> tuple[str | None, list[str]]:
    """Split ``/{locale}/rest...`` into ``(locale, [rest...])``.

    The locale is None when the first segment is not a supported locale, in
    which case all segments are returned.
    """
    table = table or get_locale_table()
    segments = split_path(path)
    if segments and table.is_supported(segments[0]):
        return segments[0], segments[1:]
    return None, segments


def localize_path(internal_path: str, locale: str, table: LocaleTable | None = None) -> str:
    """Turn a canonical, unprefixed path into the public path for ``locale``.

    External URLs are returned untouched; an empty path maps to the locale root.
    """
    if internal_path.startswith(("http://", "https://")):
        return internal_path

    segments = split_path(internal_path)
    if not segments:
        return f"/{locale}"

    segments[0] = to_localized(locale, segments[0], table)
    return f"/{locale}/{'/'.join(segments)}"


def canonicalize_segments(locale: str, segments: list[str], table: LocaleTable | None = None) -> list[str]:
    """Replace a localized first segment with its canonical segment."""
    if not segments:
        return segments
    canonical = to_canonical(locale, segments[0], table)
    if canonical is None:
        return list(segments)
    return [canonical, *segments[1:]]


def build_path(pattern: str, params: dict[str, str] | None = None) -> str:
    """Substitute ``[name]`` placeholders in a route pattern.

    Example: build_path("/recipes/[handle]", {"handle": "pasta"}) -> "/recipes/pasta"
    """
    result = pattern
    for key, value in (params or {}).items():
        result = result.replace(f"[{key}]", value)
    return result


def extract_params(pattern: str, path: str) -> dict[str, str]:
    """Pull ``[name]`` placeholder values out of a concrete path.

    Example: extract_params("/recipes/[handle]", "/recipes/pasta") -> {"handle": "pasta"}
    """
    pattern_segments = split_path(pattern)
    path_segments = split_path(path)

    params: dict[str, str] = {}
    for index, segment in enumerate(pattern_segments):
        if segment.startswith("[") and segment.endswith("]"):
            params[segment[1:-1]] = path_segments[index] if index < len(path_segments) else ""
    return params
