"""
Custom Exception Classes for the recipe site

Locale routing and handle resolution errors. Only a few of these ever
reach an HTTP response: most are recovered where they are raised
(unsupported locale → default locale, unknown segment → literal,
missing translation → keep the current handle).
"""

from typing import Any

from fastapi import status


class RecipeI18nError(Exception):
    """Base exception class for all locale routing and content errors"""

    error_code: str = "INTERNAL_ERROR"

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


# ============================================================================
# Locale & Routing Exceptions (recovered, never surfaced to clients)
# ============================================================================


class UnsupportedLocaleRequested(RecipeI18nError):
    """Raised when a locale outside the supported set is requested"""

    error_code = "LOCALE_UNSUPPORTED"

    def __init__(self, locale: str | None):
        super().__init__(
            message=f"Locale '{locale}' is not supported",
            status_code=status.HTTP_404_NOT_FOUND,
            details={"locale": locale},
        )
        self.locale = locale


class UnknownRouteSegment(RecipeI18nError):
    """Raised when a path segment has no entry in a locale's alias table"""

    error_code = "ROUTE_SEGMENT_UNKNOWN"

    def __init__(self, locale: str, segment: str):
        super().__init__(
            message=f"Segment '{segment}' is not a localizable route segment for '{locale}'",
            status_code=status.HTTP_404_NOT_FOUND,
            details={"locale": locale, "segment": segment},
        )
        self.locale = locale
        self.segment = segment


# ============================================================================
# Handle & Translation Exceptions
# ============================================================================


class HandleCollisionExhausted(RecipeI18nError):
    """Raised when no free handle was found within the attempt ceiling"""

    error_code = "HANDLE_COLLISION_EXHAUSTED"

    def __init__(self, base_handle: str, locale: str, attempts: int):
        super().__init__(
            message=f"Could not find a free handle for '{base_handle}' in '{locale}' after {attempts} attempts",
            status_code=status.HTTP_409_CONFLICT,
            details={"base_handle": base_handle, "locale": locale, "attempts": attempts},
        )
        self.base_handle = base_handle
        self.locale = locale
        self.attempts = attempts


class HandleTakenError(RecipeI18nError):
    """Raised by the store when an insert hits the (locale, handle) constraint"""

    error_code = "HANDLE_TAKEN"

    def __init__(self, handle: str, locale: str):
        super().__init__(
            message=f"Handle '{handle}' is already used in '{locale}'",
            status_code=status.HTTP_409_CONFLICT,
            details={"handle": handle, "locale": locale},
        )
        self.handle = handle
        self.locale = locale


class DuplicateTranslationError(RecipeI18nError):
    """Raised when a translation for (recipe, locale) already exists"""

    error_code = "TRANSLATION_DUPLICATE"

    def __init__(self, recipe_id: int, locale: str):
        super().__init__(
            message=f"Recipe {recipe_id} already has a '{locale}' translation",
            status_code=status.HTTP_409_CONFLICT,
            details={"recipe_id": recipe_id, "locale": locale},
        )
        self.recipe_id = recipe_id
        self.locale = locale


class TranslationNotFound(RecipeI18nError):
    """Raised when a translation lookup misses"""

    error_code = "TRANSLATION_NOT_FOUND"

    def __init__(self, locale: str, recipe_id: int | None = None, handle: str | None = None):
        details: dict[str, Any] = {"locale": locale}
        if recipe_id is not None:
            details["recipe_id"] = recipe_id
        if handle is not None:
            details["handle"] = handle
        super().__init__(
            message=f"No '{locale}' translation found",
            status_code=status.HTTP_404_NOT_FOUND,
            details=details,
        )
        self.locale = locale


# ============================================================================
# Content & Store Exceptions
# ============================================================================


class ContentNotFoundError(RecipeI18nError):
    """Raised when a recipe is not found"""

    error_code = "RESOURCE_RECIPE_NOT_FOUND"

    def __init__(self, recipe_id: Any | None = None, handle: str | None = None):
        if handle is not None:
            message = f"Recipe with handle '{handle}' not found"
        elif recipe_id is not None:
            message = f"Recipe with id '{recipe_id}' not found"
        else:
            message = "Recipe not found"
        super().__init__(
            message=message,
            status_code=status.HTTP_404_NOT_FOUND,
            details={"resource_type": "Recipe", "resource_id": recipe_id, "handle": handle},
        )


class ContentStoreUnavailable(RecipeI18nError):
    """Raised when the content store cannot be reached or fails a query"""

    error_code = "SERVICE_UNAVAILABLE"

    def __init__(self, message: str = "Content store is unavailable", operation: str | None = None):
        details = {"operation": operation} if operation else {}
        super().__init__(message=message, status_code=status.HTTP_503_SERVICE_UNAVAILABLE, details=details)
