"""
Tests for cross-locale handle resolution and the language switcher path.
"""

import asyncio
from unittest.mock import AsyncMock

import pytest
from sqlalchemy.exc import OperationalError

from app.exceptions import ContentStoreUnavailable
from app.services.handle_resolver import resolve_handle, switch_locale_path
from utils.factories import add_translation


@pytest.fixture
async def multilingual_tart(test_db, lemon_tart):
    """lemon_tart plus a Spanish translation."""
    await add_translation(test_db, 42, "es", "tarta-de-limon", "Tarta de limón")
    return lemon_tart


class TestResolveHandle:
    async def test_translation_to_default_locale(self, store, lemon_tart):
        assert await resolve_handle(store, "tarte-citron", "fr", "en") == "lemon-tart"

    async def test_missing_target_translation_keeps_handle(self, store, lemon_tart):
        assert await resolve_handle(store, "lemon-tart", "en", "de") == "lemon-tart"

    async def test_default_locale_to_translation(self, store, lemon_tart):
        assert await resolve_handle(store, "lemon-tart", "en", "fr") == "tarte-citron"

    async def test_between_translations(self, store, multilingual_tart):
        assert await resolve_handle(store, "tarte-citron", "fr", "es") == "tarta-de-limon"
        assert await resolve_handle(store, "tarta-de-limon", "es", "fr") == "tarte-citron"

    async def test_same_locale_is_identity(self, store, lemon_tart):
        assert await resolve_handle(store, "whatever", "fr", "fr") == "whatever"

    async def test_unknown_handle(self, store, lemon_tart):
        assert await resolve_handle(store, "no-such-recipe", "fr", "en") == "no-such-recipe"
        assert await resolve_handle(store, "no-such-recipe", "en", "fr") == "no-such-recipe"

    async def test_untranslated_source_handle(self, store, lemon_tart):
        # A German page without a translation shows the default handle
        assert await resolve_handle(store, "lemon-tart", "de", "fr") == "lemon-tart"

    async def test_unsupported_locales_treated_as_default(self, store, lemon_tart):
        assert await resolve_handle(store, "lemon-tart", "it", "fr") == "tarte-citron"
        assert await resolve_handle(store, "tarte-citron", "fr", "it") == "lemon-tart"

    async def test_store_unavailable(self, caplog):
        store = AsyncMock()
        store.get_translation_by_handle.side_effect = ContentStoreUnavailable(operation="get_translation_by_handle")

        assert await resolve_handle(store, "tarte-citron", "fr", "en") == "tarte-citron"
        assert "Handle resolution failed" in caplog.text

    async def test_raw_database_error(self):
        store = AsyncMock()
        store.get_canonical_content_by_default_handle.side_effect = OperationalError("SELECT", {}, Exception("gone"))

        assert await resolve_handle(store, "lemon-tart", "en", "fr") == "lemon-tart"

    async def test_connection_error_from_store(self, caplog):
        store = AsyncMock()
        store.get_translation_by_handle.side_effect = ConnectionError("store down")

        assert await resolve_handle(store, "tarte-citron", "fr", "en") == "tarte-citron"
        assert "store down" in caplog.text

    async def test_switch_path_survives_store_error(self):
        store = AsyncMock()
        store.get_canonical_content_by_default_handle.side_effect = OSError("network unreachable")

        assert await switch_locale_path(store, "/en/recipes/lemon-tart", "fr") == "/fr/recettes/lemon-tart"

    async def test_timeout(self, caplog):
        async def slow(*args, **kwargs):
            await asyncio.sleep(1)

        store = AsyncMock()
        store.get_translation_by_handle.side_effect = slow

        assert await resolve_handle(store, "tarte-citron", "fr", "en", timeout=0.01) == "tarte-citron"
        assert "timed out" in caplog.text


class TestSwitchLocalePath:
    async def test_recipe_page_to_default(self, store, lemon_tart):
        assert await switch_locale_path(store, "/fr/recettes/tarte-citron", "en") == "/en/recipes/lemon-tart"

    async def test_recipe_page_from_default(self, store, lemon_tart):
        assert await switch_locale_path(store, "/en/recipes/lemon-tart", "fr") == "/fr/recettes/tarte-citron"

    async def test_untranslated_target(self, store, lemon_tart):
        assert await switch_locale_path(store, "/en/recipes/lemon-tart", "de") == "/de/rezepte/lemon-tart"

    async def test_query_string_kept(self, store, lemon_tart):
        result = await switch_locale_path(store, "/fr/recettes/tarte-citron?tab=steps", "en")
        assert result == "/en/recipes/lemon-tart?tab=steps"

    async def test_listing_page(self, store):
        assert await switch_locale_path(store, "/de/rezepte", "es") == "/es/recetas"

    async def test_locale_root(self, store):
        assert await switch_locale_path(store, "/fr", "de") == "/de"

    async def test_unprefixed_path(self, store, lemon_tart):
        assert await switch_locale_path(store, "/recipes/lemon-tart", "fr") == "/fr/recettes/tarte-citron"

    async def test_unknown_page_kept_literal(self, store):
        assert await switch_locale_path(store, "/fr/a-propos", "es") == "/es/a-propos"

    async def test_unsupported_target(self, store, lemon_tart):
        assert await switch_locale_path(store, "/fr/recettes/tarte-citron", "it") == "/en/recipes/lemon-tart"
