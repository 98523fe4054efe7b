"""
Cross-Locale Handle Resolver

Maps a recipe handle seen in one locale to the handle the same recipe uses
in another locale. Used by the language switcher and by outbound links.

Resolution never fails: a missing translation, a missing recipe, a store
error or a timeout all fall back to the handle we started with, so the
worst case is a link to the untranslated page rather than a broken one.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from app.config import settings
from app.exceptions import ContentNotFoundError, TranslationNotFound
from app.i18n.locale import LocaleTable, get_locale_table
from app.i18n.routes import canonicalize_segments, localize_path, split_locale_prefix

if TYPE_CHECKING:
    from app.services.content_store import ContentStore

logger = logging.getLogger(__name__)

# Canonical route whose second segment is a recipe handle
RECIPE_SEGMENT = "recipes"


async def _recipe_id_from_translation(store: ContentStore, handle: str, locale: str) -> int:
    translation = await store.get_translation_by_handle(handle, locale)
    if translation is None:
        raise TranslationNotFound(locale, handle=handle)
    return translation.recipe_id


async def _translated_handle(store: ContentStore, recipe_id: int, locale: str) -> str:
    translation = await store.get_translation(recipe_id, locale)
    if translation is None:
        raise TranslationNotFound(locale, recipe_id=recipe_id)
    return translation.handle


async def _lookup(
    store: ContentStore,
    current_handle: str,
    source_locale: str,
    target_locale: str,
    default_locale: str,
) -> str:
    # Into the default locale: the recipe's own handle
    if target_locale == default_locale:
        recipe_id = await _recipe_id_from_translation(store, current_handle, source_locale)
        recipe = await store.get_canonical_content(recipe_id)
        if recipe is None:
            raise ContentNotFoundError(recipe_id=recipe_id)
        return recipe.handle

    # Out of the default locale: current_handle is the recipe's own handle
    if source_locale == default_locale:
        recipe = await store.get_canonical_content_by_default_handle(current_handle)
        if recipe is None:
            raise ContentNotFoundError(handle=current_handle)
        return await _translated_handle(store, recipe.id, target_locale)

    recipe_id = await _recipe_id_from_translation(store, current_handle, source_locale)
    return await _translated_handle(store, recipe_id, target_locale)


async def resolve_handle(
    store: ContentStore,
    current_handle: str,
    source_locale: str,
    target_locale: str,
    *,
    table: LocaleTable | None = None,
    timeout: float | None = None,
) -> str:
    """Return the handle ``target_locale`` uses for the recipe behind ``current_handle``.

    Unsupported locales are treated as the default locale. Never raises;
    returns ``current_handle`` unchanged whenever the counterpart cannot be found.
    """
    table = table or get_locale_table()
    timeout = settings.resolve_timeout_seconds if timeout is None else timeout
    source_locale = table.coerce(source_locale)
    target_locale = table.coerce(target_locale)

    if source_locale == target_locale:
        return current_handle

    try:
        return await asyncio.wait_for(
            _lookup(store, current_handle, source_locale, target_locale, table.default),
            timeout=timeout,
        )
    except (TranslationNotFound, ContentNotFoundError) as e:
        logger.debug("Keeping handle %s (%s -> %s): %s", current_handle, source_locale, target_locale, e.message)
    except asyncio.TimeoutError:
        logger.warning("Handle resolution timed out after %.2fs for %s (%s -> %s)", timeout, current_handle, source_locale, target_locale)
    except Exception as e:
        # Any store implementation may fail; links fall back to the current handle
        logger.warning(
            "Handle resolution failed for %s (%s -> %s): %s",
            current_handle,
            source_locale,
            target_locale,
            e,
            exc_info=True,
        )
    return current_handle


async def switch_locale_path(
    store: ContentStore,
    path: str,
    target_locale: str,
    *,
    table: LocaleTable | None = None,
) -> str:
    """Public path of the page at ``path`` in ``target_locale``.

    ``path`` is a public (localized, prefixed) path such as
    ``/fr/recettes/tarte-citron?tab=steps``. Route segments are translated and
    a recipe handle is resolved to the target locale's handle; the query
    string is kept as is.
    """
    table = table or get_locale_table()
    target_locale = table.coerce(target_locale)

    path, sep, query = path.partition("?")
    source_locale, segments = split_locale_prefix(path, table)
    source_locale = source_locale or table.default
    segments = canonicalize_segments(source_locale, segments, table)

    if len(segments) == 2 and segments[0] == RECIPE_SEGMENT:
        segments[1] = await resolve_handle(store, segments[1], source_locale, target_locale, table=table)

    switched = localize_path("/".join(segments), target_locale, table)
    return f"{switched}{sep}{query}"
