"""
Page Routes

Declared with canonical segments only (/{lang}/recipes/...). Localized
URLs such as /fr/recettes/... reach these handlers through the locale
routing middleware's rewrite. This is the final content-fetch stage: the
only place a missing recipe becomes a 404.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel

from app.exceptions import ContentNotFoundError
from app.i18n.context import LocaleContext, get_locale_context
from app.services.content_store import SQLAlchemyContentStore, get_content_store
from app.services.seo_service import build_link_metadata

router = APIRouter(tags=["Pages"])
logger = logging.getLogger(__name__)


class PageLinks(BaseModel):
    canonical: str
    alternates: dict[str, str]


class RecipePage(BaseModel):
    recipe_id: int
    locale: str
    handle: str
    title: str
    description: str | None
    is_translated: bool
    links: PageLinks


def _check_locale(lang: str, context: LocaleContext) -> None:
    if not context.table.is_supported(lang):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Page not found")


@router.get("/{lang}")
async def home_page(lang: str, context: LocaleContext = Depends(get_locale_context)) -> dict:
    _check_locale(lang, context)
    return {
        "locale": lang,
        "links": {"recipes": context.url_for("/recipes", lang)},
    }


@router.get("/{lang}/recipes")
async def recipes_page(lang: str, context: LocaleContext = Depends(get_locale_context)) -> dict:
    _check_locale(lang, context)
    return {
        "locale": lang,
        "canonical": context.url_for("/recipes", lang),
        "alternates": {locale: context.url_for("/recipes", locale) for locale in context.table.locales},
    }


@router.get("/{lang}/recipes/{handle}", response_model=RecipePage)
async def recipe_page(
    lang: str,
    handle: str,
    context: LocaleContext = Depends(get_locale_context),
    store: SQLAlchemyContentStore = Depends(get_content_store),
) -> RecipePage:
    """A recipe in ``lang``, falling back to the default content when untranslated."""
    _check_locale(lang, context)

    translation = await store.get_translation_by_handle(handle, lang)
    if translation is not None:
        recipe = await store.get_canonical_content(translation.recipe_id)
        title, description = translation.title, translation.description
    else:
        recipe = await store.get_canonical_content_by_default_handle(handle)
        if recipe is not None:
            title, description = recipe.title, recipe.description

    if recipe is None:
        raise ContentNotFoundError(handle=handle)

    links = await build_link_metadata(store, recipe.id, lang, table=context.table)
    return RecipePage(
        recipe_id=recipe.id,
        locale=lang,
        handle=handle,
        title=title,
        description=description,
        is_translated=translation is not None,
        links=PageLinks(canonical=links.canonical, alternates=links.alternates),
    )
