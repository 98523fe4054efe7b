"""
Handle Service

Generates per-locale recipe handles and creates/updates translations.

Functions:
    generate_handle            — deterministic slug from a title
    is_handle_taken            — (locale, handle) lookup, optionally ignoring one recipe
    ensure_unique_handle       — base, base-1, base-2, ... up to the attempt ceiling
    create_translation         — insert with retry on (locale, handle) conflicts
    update_translation         — partial update, re-slugging on title change
    get_or_create_translation  — lazily create a locale's translation from the recipe

Uniqueness checks are advisory: two requests can pick the same free
candidate. The (locale, handle) unique constraint decides at insert time,
and the loser regenerates its handle.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.config import settings
from app.exceptions import (
    ContentNotFoundError,
    DuplicateTranslationError,
    HandleCollisionExhausted,
    HandleTakenError,
    TranslationNotFound,
)
from app.i18n.locale import LocaleTable, get_locale_table
from app.models.recipe_translation import RecipeTranslation
from app.utils.slugify import slugify

if TYPE_CHECKING:
    from app.services.content_store import ContentStore

logger = logging.getLogger(__name__)


def generate_handle(title: str) -> str:
    """Base handle for a title, e.g. "Crème Brûlée!!" -> "creme-brulee"."""
    return slugify(title)


async def is_handle_taken(
    store: ContentStore,
    handle: str,
    locale: str,
    exclude_content_id: int | None = None,
    table: LocaleTable | None = None,
) -> bool:
    """True when ``handle`` is used in ``locale`` by a recipe other than ``exclude_content_id``.

    In the default locale a recipe's own default handle counts as a use.
    """
    table = table or get_locale_table()

    translation = await store.get_translation_by_handle(handle, locale)
    if translation is not None and translation.recipe_id != exclude_content_id:
        return True

    if locale == table.default:
        recipe = await store.get_canonical_content_by_default_handle(handle)
        if recipe is not None and recipe.id != exclude_content_id:
            return True

    return False


async def ensure_unique_handle(
    store: ContentStore,
    base_handle: str,
    locale: str,
    exclude_content_id: int | None = None,
    *,
    max_attempts: int | None = None,
    table: LocaleTable | None = None,
) -> str:
    """Return ``base_handle`` or the first free ``base_handle-N``.

    Raises:
        HandleCollisionExhausted: every candidate up to ``base_handle-{max_attempts}`` is taken.
    """
    max_attempts = settings.handle_max_attempts if max_attempts is None else max_attempts

    candidate = base_handle
    for counter in range(max_attempts + 1):
        if counter:
            candidate = f"{base_handle}-{counter}"
        if not await is_handle_taken(store, candidate, locale, exclude_content_id, table):
            return candidate

    logger.warning("No free handle for base=%s locale=%s after %d attempts", base_handle, locale, max_attempts)
    raise HandleCollisionExhausted(base_handle, locale, max_attempts)


async def create_translation(
    store: ContentStore,
    recipe_id: int,
    locale: str,
    title: str,
    description: str | None = None,
    handle: str | None = None,
    *,
    table: LocaleTable | None = None,
) -> RecipeTranslation:
    """Insert a new translation and return it.

    ``handle`` defaults to the slug of ``title``; either way it is made unique
    within ``locale`` before insert.

    Raises:
        ContentNotFoundError: the recipe does not exist.
        DuplicateTranslationError: the recipe already has a ``locale`` translation.
        HandleCollisionExhausted: no free handle could be reserved.
        ContentStoreUnavailable: the store failed.
    """
    table = table or get_locale_table()
    locale = table.require(locale)

    if await store.get_canonical_content(recipe_id) is None:
        raise ContentNotFoundError(recipe_id=recipe_id)

    base_handle = handle or generate_handle(title)
    retries = settings.handle_insert_retries

    for attempt in range(1, retries + 1):
        candidate = await ensure_unique_handle(store, base_handle, locale, recipe_id, table=table)
        record = RecipeTranslation(
            recipe_id=recipe_id,
            locale=locale,
            handle=candidate,
            title=title,
            description=description or "",
        )
        try:
            return await store.insert_translation(record)
        except HandleTakenError:
            logger.info(
                "Handle %s in %s was taken concurrently (attempt %d/%d), retrying",
                candidate,
                locale,
                attempt,
                retries,
            )

    raise HandleCollisionExhausted(base_handle, locale, retries)


async def update_translation(
    store: ContentStore,
    recipe_id: int,
    locale: str,
    *,
    title: str | None = None,
    description: str | None = None,
    handle: str | None = None,
    table: LocaleTable | None = None,
) -> RecipeTranslation:
    """Apply a partial update to an existing translation.

    A new title without an explicit handle re-slugs the handle; the recipe's
    own rows do not count as collisions.

    Raises:
        TranslationNotFound: there is no ``locale`` translation for the recipe.
        HandleCollisionExhausted: no free handle could be reserved.
    """
    table = table or get_locale_table()
    retries = settings.handle_insert_retries
    base_handle = handle

    for attempt in range(1, retries + 1):
        translation = await store.get_translation(recipe_id, locale)
        if translation is None:
            raise TranslationNotFound(locale, recipe_id=recipe_id)

        if handle is None and title and title != translation.title:
            base_handle = generate_handle(title)

        if title is not None:
            translation.title = title
        if description is not None:
            translation.description = description
        if base_handle is not None and base_handle != translation.handle:
            translation.handle = await ensure_unique_handle(store, base_handle, locale, recipe_id, table=table)

        try:
            return await store.update_translation(translation)
        except HandleTakenError:
            logger.info("Handle conflict updating recipe_id=%d locale=%s (attempt %d/%d)", recipe_id, locale, attempt, retries)

    raise HandleCollisionExhausted(base_handle or "", locale, retries)


async def get_or_create_translation(
    store: ContentStore,
    recipe_id: int,
    locale: str,
    *,
    table: LocaleTable | None = None,
) -> RecipeTranslation:
    """Return the recipe's ``locale`` translation, creating it from the recipe if absent.

    The new translation copies the recipe's title and description and gets a
    fresh handle unique within ``locale``.

    Raises:
        ContentNotFoundError: the recipe does not exist.
        HandleCollisionExhausted: no free handle could be reserved.
        ContentStoreUnavailable: the store failed.
    """
    existing = await store.get_translation(recipe_id, locale)
    if existing is not None:
        return existing

    recipe = await store.get_canonical_content(recipe_id)
    if recipe is None:
        raise ContentNotFoundError(recipe_id=recipe_id)

    try:
        return await create_translation(
            store,
            recipe_id,
            locale,
            title=recipe.title,
            description=recipe.description,
            table=table,
        )
    except DuplicateTranslationError:
        # Lost a race with another request creating the same translation
        winner = await store.get_translation(recipe_id, locale)
        if winner is None:
            raise
        return winner
