"""
RecipeTranslation model

Stores the per-locale handle and display text of a Recipe using the
translation-table pattern. One canonical Recipe row + zero or many
RecipeTranslation rows.

Handles share one slug space per locale: (locale, handle) is unique
across all recipes, which is what lets a localized URL identify a
recipe without its id.
"""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from app.database import Base

# Constraint names shared with the migration
UQ_RECIPE_LOCALE = "uq_recipe_translation_locale"
UQ_LOCALE_HANDLE = "uq_recipe_translation_handle"


class RecipeTranslation(Base):
    """Per-locale translation of a Recipe record."""

    __tablename__ = "recipe_translations"

    id = Column(Integer, primary_key=True, index=True)
    recipe_id = Column(
        Integer,
        ForeignKey("recipes.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    locale = Column(String(10), nullable=False, index=True)

    # ── Translatable fields ───────────────────────────────────────────────────
    handle = Column(String, nullable=False)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)

    created_at = Column(
        DateTime,
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at = Column(
        DateTime,
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    recipe = relationship("Recipe", back_populates="translations")

    __table_args__ = (
        UniqueConstraint("recipe_id", "locale", name=UQ_RECIPE_LOCALE),
        UniqueConstraint("locale", "handle", name=UQ_LOCALE_HANDLE),
        Index("idx_rt_recipe_locale", "recipe_id", "locale"),
    )

    def __repr__(self) -> str:
        return f"<RecipeTranslation recipe_id={self.recipe_id} locale={self.locale!r} handle={self.handle!r}>"
