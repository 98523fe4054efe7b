"""
Recipe model — the canonical record of a recipe.

One row per recipe, created by the authoring workflow. ``handle`` is the
default-locale handle and is globally unique; per-locale handles live in
RecipeTranslation.
"""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from app.database import Base


class Recipe(Base):
    __tablename__ = "recipes"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    handle = Column(String, nullable=False, index=True)
    default_locale = Column(String(10), nullable=False, default="en")
    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(
        DateTime,
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    translations = relationship("RecipeTranslation", back_populates="recipe", cascade="all, delete-orphan")

    __table_args__ = (UniqueConstraint("handle", name="uq_recipe_handle"),)

    def __repr__(self) -> str:
        return f"<Recipe id={self.id} handle={self.handle!r}>"
