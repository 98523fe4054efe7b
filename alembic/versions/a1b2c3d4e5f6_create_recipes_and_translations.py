"""create_recipes_and_translations

Revision ID: a1b2c3d4e5f6
Revises:
Create Date: 2026-10-19

Creates the canonical `recipes` table and the per-locale
`recipe_translations` table. Handles are unique per locale.
"""

from __future__ import annotations

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "a1b2c3d4e5f6"
down_revision: str | None = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "recipes",
        sa.Column("id", sa.Integer, primary_key=True, index=True, autoincrement=True),
        sa.Column("handle", sa.String, nullable=False),
        sa.Column("default_locale", sa.String(10), nullable=False, server_default="en"),
        sa.Column("title", sa.String, nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("created_at", sa.DateTime, nullable=False),
        sa.Column("updated_at", sa.DateTime, nullable=False),
        sa.UniqueConstraint("handle", name="uq_recipe_handle"),
    )
    op.create_index("ix_recipes_handle", "recipes", ["handle"])

    op.create_table(
        "recipe_translations",
        sa.Column("id", sa.Integer, primary_key=True, index=True),
        sa.Column(
            "recipe_id",
            sa.Integer,
            sa.ForeignKey("recipes.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("locale", sa.String(10), nullable=False),
        sa.Column("handle", sa.String, nullable=False),
        sa.Column("title", sa.String, nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("created_at", sa.DateTime, nullable=False),
        sa.Column("updated_at", sa.DateTime, nullable=False),
        # One translation per (recipe, locale) pair
        sa.UniqueConstraint("recipe_id", "locale", name="uq_recipe_translation_locale"),
        # One slug space per locale
        sa.UniqueConstraint("locale", "handle", name="uq_recipe_translation_handle"),
    )
    op.create_index("ix_recipe_translations_recipe_id", "recipe_translations", ["recipe_id"])
    op.create_index("ix_recipe_translations_locale", "recipe_translations", ["locale"])
    op.create_index("idx_rt_recipe_locale", "recipe_translations", ["recipe_id", "locale"])


def downgrade() -> None:
    op.drop_index("idx_rt_recipe_locale", table_name="recipe_translations")
    op.drop_index("ix_recipe_translations_locale", table_name="recipe_translations")
    op.drop_index("ix_recipe_translations_recipe_id", table_name="recipe_translations")
    op.drop_table("recipe_translations")
    op.drop_index("ix_recipes_handle", table_name="recipes")
    op.drop_table("recipes")
