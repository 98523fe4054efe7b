"""
i18n (Internationalization) package

Locale table, locale negotiation, and canonical ⇄ localized path
translation for the multi-locale recipe site.
"""

from .locale import (
    CANONICAL_SEGMENTS,
    LANGUAGE_NAMES,
    ROUTE_SEGMENT_ALIASES,
    LocaleTable,
    get_language_info,
    get_locale_table,
)
from .negotiation import (
    CookiePreferenceSource,
    NoPreferenceSource,
    PreferenceSource,
    match_accept_language,
    negotiate,
    parse_accept_language,
)
from .routes import (
    build_path,
    extract_params,
    localize_path,
    split_locale_prefix,
    to_canonical,
    to_localized,
)

__all__ = [
    "CANONICAL_SEGMENTS",
    "LANGUAGE_NAMES",
    "ROUTE_SEGMENT_ALIASES",
    "CookiePreferenceSource",
    "LocaleTable",
    "NoPreferenceSource",
    "PreferenceSource",
    "build_path",
    "extract_params",
    "get_language_info",
    "get_locale_table",
    "localize_path",
    "match_accept_language",
    "negotiate",
    "parse_accept_language",
    "split_locale_prefix",
    "to_canonical",
    "to_localized",
]
