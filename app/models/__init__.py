from .recipe import Recipe
from .recipe_translation import RecipeTranslation

__all__ = [
    "Recipe",
    "RecipeTranslation",
]
