"""
Translation & i18n Routes

Two APIRouter objects exported from this module:

translations_router  (prefix: /api/v1/recipes)
    GET    /{recipe_id}/translations/          → list all translations
    POST   /{recipe_id}/translations/{locale}  → get or create translation
    PUT    /{recipe_id}/translations/{locale}  → update translation (re-slugs on title change)

i18n_router  (prefix: /api/v1/i18n)
    GET    /languages                          → supported languages
    GET    /resolve                            → handle of a recipe in another locale
    GET    /switch                             → language switcher destination
    GET    /recipes/{recipe_id}/links          → canonical + alternate URLs

Authentication is handled in front of this service; these routes only
deal with locales and handles.
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from pydantic import BaseModel, ConfigDict

from app.config import settings
from app.i18n.locale import LocaleTable, get_language_info, get_locale_table
from app.services.content_store import SQLAlchemyContentStore, get_content_store
from app.services.handle_resolver import resolve_handle, switch_locale_path
from app.services.handle_service import get_or_create_translation, update_translation
from app.services.seo_service import build_link_metadata

translations_router = APIRouter(tags=["Translations"])
i18n_router = APIRouter(tags=["Internationalization"])
logger = logging.getLogger(__name__)


# ── Pydantic schemas ───────────────────────────────────────────────────────────


class TranslationUpdate(BaseModel):
    title: str | None = None
    description: str | None = None
    handle: str | None = None


class TranslationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    recipe_id: int
    locale: str
    handle: str
    title: str
    description: str | None
    created_at: str
    updated_at: str

    @classmethod
    def from_translation(cls, t: Any) -> "TranslationResponse":
        return cls(
            id=t.id,
            recipe_id=t.recipe_id,
            locale=t.locale,
            handle=t.handle,
            title=t.title,
            description=t.description,
            created_at=t.created_at.isoformat(),
            updated_at=t.updated_at.isoformat(),
        )


class LanguageInfo(BaseModel):
    code: str
    name: str
    is_default: bool


class ResolvedHandle(BaseModel):
    handle: str
    source: str
    target: str


class SwitchTarget(BaseModel):
    path: str
    locale: str


class LinkMetadata(BaseModel):
    locale: str
    canonical: str
    alternates: dict[str, str]
    has_translation: bool


def _require_locale(locale: str, table: LocaleTable) -> str:
    if not table.is_supported(locale):
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Locale '{locale}' is not in supported_languages.",
        )
    return locale


# ── Translation routes ─────────────────────────────────────────────────────────


@translations_router.get(
    "/{recipe_id}/translations/",
    response_model=list[TranslationResponse],
)
async def list_translations_route(
    recipe_id: int,
    store: SQLAlchemyContentStore = Depends(get_content_store),
) -> list[TranslationResponse]:
    """List all translations for a recipe."""
    translations = await store.list_translations(recipe_id)
    return [TranslationResponse.from_translation(t) for t in translations]


@translations_router.post(
    "/{recipe_id}/translations/{locale}",
    response_model=TranslationResponse,
)
async def get_or_create_translation_route(
    recipe_id: int,
    locale: str,
    store: SQLAlchemyContentStore = Depends(get_content_store),
    table: LocaleTable = Depends(get_locale_table),
) -> TranslationResponse:
    """Return the recipe's translation in ``locale``, creating it from the recipe if needed."""
    _require_locale(locale, table)
    translation = await get_or_create_translation(store, recipe_id, locale, table=table)
    return TranslationResponse.from_translation(translation)


@translations_router.put(
    "/{recipe_id}/translations/{locale}",
    response_model=TranslationResponse,
)
async def update_translation_route(
    recipe_id: int,
    locale: str,
    payload: TranslationUpdate,
    store: SQLAlchemyContentStore = Depends(get_content_store),
    table: LocaleTable = Depends(get_locale_table),
) -> TranslationResponse:
    """Update a translation; a new title without a handle generates a new handle."""
    _require_locale(locale, table)
    translation = await update_translation(
        store,
        recipe_id,
        locale,
        title=payload.title,
        description=payload.description,
        handle=payload.handle,
        table=table,
    )
    return TranslationResponse.from_translation(translation)


# ── i18n routes ────────────────────────────────────────────────────────────────


@i18n_router.get("/languages", response_model=list[LanguageInfo])
async def list_supported_languages(table: LocaleTable = Depends(get_locale_table)) -> list[LanguageInfo]:
    """List all supported languages, default first as configured."""
    return [LanguageInfo(**get_language_info(code, table)) for code in table.locales]


@i18n_router.get("/resolve", response_model=ResolvedHandle)
async def resolve_handle_route(
    handle: str = Query(..., min_length=1),
    source: str = Query(...),
    target: str = Query(...),
    store: SQLAlchemyContentStore = Depends(get_content_store),
    table: LocaleTable = Depends(get_locale_table),
) -> ResolvedHandle:
    """Handle of the same recipe in ``target``; the input handle when there is none."""
    resolved = await resolve_handle(store, handle, source, target, table=table)
    return ResolvedHandle(handle=resolved, source=table.coerce(source), target=table.coerce(target))


@i18n_router.get("/switch", response_model=SwitchTarget)
async def switch_locale_route(
    response: Response,
    path: str = Query(..., min_length=1),
    target: str = Query(...),
    store: SQLAlchemyContentStore = Depends(get_content_store),
    table: LocaleTable = Depends(get_locale_table),
) -> SwitchTarget:
    """Where the language switcher should send the user, remembering the choice."""
    locale = table.coerce(target)
    switched = await switch_locale_path(store, path, locale, table=table)
    response.set_cookie(settings.locale_cookie_name, locale, max_age=60 * 60 * 24 * 365, samesite="lax")
    return SwitchTarget(path=switched, locale=locale)


@i18n_router.get("/recipes/{recipe_id}/links", response_model=LinkMetadata)
async def recipe_links_route(
    recipe_id: int,
    locale: str = Query(...),
    store: SQLAlchemyContentStore = Depends(get_content_store),
    table: LocaleTable = Depends(get_locale_table),
) -> LinkMetadata:
    """Canonical and per-locale alternate URLs for a recipe page."""
    links = await build_link_metadata(store, recipe_id, locale, table=table)
    return LinkMetadata(
        locale=links.locale,
        canonical=links.canonical,
        alternates=links.alternates,
        has_translation=links.has_translation,
    )
