"""
SEO Service

Canonical and alternate (hreflang) URLs for recipe pages, and a
multilingual sitemap.xml built from them.

For every supported locale a recipe page has one URL: the translation's
handle when that locale has a translation, the recipe's default handle
otherwise. A page shown in a locale without its own translation declares
the default-locale URL as canonical, since it mirrors the default content.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import TYPE_CHECKING
from xml.etree.ElementTree import Element, SubElement, tostring  # nosec B405

from sqlalchemy import select

from app.config import settings
from app.exceptions import ContentNotFoundError
from app.i18n.locale import LocaleTable, get_locale_table
from app.i18n.routes import build_path, localize_path
from app.models.recipe import Recipe
from app.models.recipe_translation import RecipeTranslation

if TYPE_CHECKING:
    from collections.abc import Iterable

    from sqlalchemy.ext.asyncio import AsyncSession

    from app.services.content_store import ContentStore

logger = logging.getLogger(__name__)

RECIPE_PATTERN = "/recipes/[handle]"


@dataclass
class LocalizedLinks:
    """Link metadata for one recipe page in one locale."""

    locale: str
    canonical: str
    alternates: dict[str, str] = field(default_factory=dict)
    has_translation: bool = False


def build_alternate_urls(
    default_handle: str,
    translations: Iterable[RecipeTranslation],
    pattern: str = RECIPE_PATTERN,
    table: LocaleTable | None = None,
) -> dict[str, str]:
    """One public URL per supported locale, keyed by locale."""
    table = table or get_locale_table()
    handles = {t.locale: t.handle for t in translations if t.handle}

    alternates: dict[str, str] = {}
    for locale in table.locales:
        handle = handles.get(locale, default_handle)
        alternates[locale] = localize_path(build_path(pattern, {"handle": handle}), locale, table)
    return alternates


def select_canonical(
    current_locale: str,
    alternates: dict[str, str],
    translated_locales: Iterable[str],
    table: LocaleTable | None = None,
) -> str:
    """The page's own URL if it is translated (or default), else the default-locale URL."""
    table = table or get_locale_table()
    if current_locale == table.default or current_locale in set(translated_locales):
        return alternates[current_locale]
    return alternates[table.default]


async def build_link_metadata(
    store: ContentStore,
    recipe_id: int,
    current_locale: str,
    pattern: str = RECIPE_PATTERN,
    table: LocaleTable | None = None,
) -> LocalizedLinks:
    """Canonical and alternate URLs for a recipe page viewed in ``current_locale``.

    Raises:
        ContentNotFoundError: the recipe does not exist.
    """
    table = table or get_locale_table()
    current_locale = table.coerce(current_locale)

    recipe = await store.get_canonical_content(recipe_id)
    if recipe is None:
        raise ContentNotFoundError(recipe_id=recipe_id)

    translations = await store.list_translations(recipe_id)
    translated_locales = {t.locale for t in translations}
    alternates = build_alternate_urls(recipe.handle, translations, pattern, table)

    return LocalizedLinks(
        locale=current_locale,
        canonical=select_canonical(current_locale, alternates, translated_locales, table),
        alternates=alternates,
        has_translation=current_locale in translated_locales,
    )


class SEOService:
    """Service for generating SEO-related content."""

    def __init__(self, db: AsyncSession, base_url: str | None = None, table: LocaleTable | None = None):
        self.db = db
        self.base_url = (base_url or settings.base_url).rstrip("/")
        self.table = table or get_locale_table()

    async def generate_sitemap(self) -> str:
        """
        Generate an XML sitemap with one <url> per recipe page and locale.

        Each entry lists every language version through
        ``<xhtml:link rel="alternate" hreflang="..">``.

        Returns:
            XML string in sitemap format
        """
        urlset = Element("urlset")
        urlset.set("xmlns", "http://www.sitemaps.org/schemas/sitemap/0.9")
        urlset.set("xmlns:xhtml", "http://www.w3.org/1999/xhtml")

        # Locale home pages and recipe listings
        for internal_path in ("/", "/recipes"):
            alternates = {locale: localize_path(internal_path, locale, self.table) for locale in self.table.locales}
            for locale in self.table.locales:
                self._add_url(urlset, alternates[locale], alternates, changefreq="daily")

        result = await self.db.execute(select(Recipe).order_by(Recipe.id))
        recipes = result.scalars().all()

        result = await self.db.execute(select(RecipeTranslation))
        translations_by_recipe: dict[int, list[RecipeTranslation]] = defaultdict(list)
        for translation in result.scalars().all():
            translations_by_recipe[translation.recipe_id].append(translation)

        for recipe in recipes:
            alternates = build_alternate_urls(recipe.handle, translations_by_recipe[recipe.id], table=self.table)
            lastmod = recipe.updated_at.strftime("%Y-%m-%d") if recipe.updated_at else None
            # Untranslated locale pages canonicalize to the default page; leave them out
            translated = {t.locale for t in translations_by_recipe[recipe.id]} | {self.table.default}
            for locale in self.table.locales:
                if locale in translated:
                    self._add_url(urlset, alternates[locale], alternates, lastmod=lastmod, changefreq="weekly")

        xml_declaration = '<?xml version="1.0" encoding="UTF-8"?>\n'
        xml_content = tostring(urlset, encoding="unicode")

        logger.info("Generated sitemap with %d recipes", len(recipes))
        return xml_declaration + xml_content

    def _add_url(
        self,
        urlset: Element,
        path: str,
        alternates: dict[str, str],
        lastmod: str | None = None,
        changefreq: str | None = None,
    ) -> None:
        url = SubElement(urlset, "url")
        loc = SubElement(url, "loc")
        loc.text = f"{self.base_url}{path}"

        for locale, alternate_path in alternates.items():
            link = SubElement(url, "xhtml:link")
            link.set("rel", "alternate")
            link.set("hreflang", locale)
            link.set("href", f"{self.base_url}{alternate_path}")

        if lastmod:
            lastmod_el = SubElement(url, "lastmod")
            lastmod_el.text = lastmod

        if changefreq:
            changefreq_el = SubElement(url, "changefreq")
            changefreq_el.text = changefreq
