"""
Content Store

Narrow async interface to the recipe and recipe-translation tables. The
handle services and the resolver depend on the ContentStore protocol only;
SQLAlchemyContentStore is the implementation used by the application.

Both uniqueness invariants, (recipe_id, locale) and (locale, handle), are
enforced by the database. Violations surface as DuplicateTranslationError
or HandleTakenError; any other driver failure as ContentStoreUnavailable.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol

from fastapi import Depends
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession  # noqa: TC002

from app.database import get_db
from app.exceptions import ContentStoreUnavailable, DuplicateTranslationError, HandleTakenError
from app.models.recipe import Recipe
from app.models.recipe_translation import RecipeTranslation

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable
    from typing import TypeVar

    T = TypeVar("T")

logger = logging.getLogger(__name__)


class ContentStore(Protocol):
    async def get_canonical_content(self, recipe_id: int) -> Recipe | None: ...

    async def get_canonical_content_by_default_handle(self, handle: str) -> Recipe | None: ...

    async def get_translation(self, recipe_id: int, locale: str) -> RecipeTranslation | None: ...

    async def get_translation_by_handle(self, handle: str, locale: str) -> RecipeTranslation | None: ...

    async def list_translations(self, recipe_id: int) -> list[RecipeTranslation]: ...

    async def insert_translation(self, record: RecipeTranslation) -> RecipeTranslation: ...

    async def update_translation(self, record: RecipeTranslation) -> RecipeTranslation: ...


class SQLAlchemyContentStore:
    """ContentStore backed by an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _run(self, operation: str, query: Callable[[], Awaitable[T]]) -> T:
        try:
            return await query()
        except SQLAlchemyError as e:
            logger.error("Content store %s failed: %s", operation, e)
            raise ContentStoreUnavailable(operation=operation) from e

    async def get_canonical_content(self, recipe_id: int) -> Recipe | None:
        async def query():
            return await self.db.get(Recipe, recipe_id)

        return await self._run("get_canonical_content", query)

    async def get_canonical_content_by_default_handle(self, handle: str) -> Recipe | None:
        async def query():
            result = await self.db.execute(select(Recipe).where(Recipe.handle == handle))
            return result.scalars().first()

        return await self._run("get_canonical_content_by_default_handle", query)

    async def get_translation(self, recipe_id: int, locale: str) -> RecipeTranslation | None:
        async def query():
            result = await self.db.execute(
                select(RecipeTranslation).where(
                    RecipeTranslation.recipe_id == recipe_id,
                    RecipeTranslation.locale == locale,
                )
            )
            return result.scalars().first()

        return await self._run("get_translation", query)

    async def get_translation_by_handle(self, handle: str, locale: str) -> RecipeTranslation | None:
        async def query():
            result = await self.db.execute(
                select(RecipeTranslation).where(
                    RecipeTranslation.handle == handle,
                    RecipeTranslation.locale == locale,
                )
            )
            return result.scalars().first()

        return await self._run("get_translation_by_handle", query)

    async def list_translations(self, recipe_id: int) -> list[RecipeTranslation]:
        async def query():
            result = await self.db.execute(
                select(RecipeTranslation)
                .where(RecipeTranslation.recipe_id == recipe_id)
                .order_by(RecipeTranslation.locale)
            )
            return list(result.scalars().all())

        return await self._run("list_translations", query)

    async def insert_translation(self, record: RecipeTranslation) -> RecipeTranslation:
        """Insert a translation row.

        Raises:
            DuplicateTranslationError: the recipe already has this locale.
            HandleTakenError: the handle is already used in this locale.
            ContentStoreUnavailable: any other database failure.
        """
        recipe_id, locale, handle = record.recipe_id, record.locale, record.handle
        try:
            self.db.add(record)
            await self.db.commit()
            await self.db.refresh(record)
        except IntegrityError:
            await self.db.rollback()
            if await self.get_translation(recipe_id, locale) is not None:
                raise DuplicateTranslationError(recipe_id, locale) from None
            raise HandleTakenError(handle, locale) from None
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error("Content store insert_translation failed: %s", e)
            raise ContentStoreUnavailable(operation="insert_translation") from e

        logger.info("Translation created: recipe_id=%d locale=%s handle=%s", recipe_id, locale, handle)
        return record

    async def update_translation(self, record: RecipeTranslation) -> RecipeTranslation:
        """Persist changes made to a loaded translation row.

        Raises:
            HandleTakenError: the new handle is already used in this locale.
            ContentStoreUnavailable: any other database failure.
        """
        locale, handle = record.locale, record.handle
        try:
            await self.db.commit()
            await self.db.refresh(record)
        except IntegrityError:
            await self.db.rollback()
            raise HandleTakenError(handle, locale) from None
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error("Content store update_translation failed: %s", e)
            raise ContentStoreUnavailable(operation="update_translation") from e

        logger.info("Translation updated: recipe_id=%d locale=%s handle=%s", record.recipe_id, locale, handle)
        return record


def get_content_store(db: AsyncSession = Depends(get_db)) -> SQLAlchemyContentStore:
    """FastAPI dependency wrapping the request's session."""
    return SQLAlchemyContentStore(db)
