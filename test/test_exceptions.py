"""
Tests for custom exception classes and the error response handlers

Tests exception initialization, messages, status codes, and details.
"""

from fastapi import FastAPI, HTTPException, status
from fastapi.testclient import TestClient

from app.exception_handlers import create_error_response, get_error_type, register_exception_handlers
from app.exceptions import (
    ContentNotFoundError,
    ContentStoreUnavailable,
    DuplicateTranslationError,
    HandleCollisionExhausted,
    HandleTakenError,
    RecipeI18nError,
    TranslationNotFound,
    UnknownRouteSegment,
    UnsupportedLocaleRequested,
)


class TestRecipeI18nError:
    """Test base RecipeI18nError class"""

    def test_default(self):
        exc = RecipeI18nError("Test error")
        assert str(exc) == "Test error"
        assert exc.message == "Test error"
        assert exc.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert exc.details == {}
        assert exc.error_code == "INTERNAL_ERROR"

    def test_with_details(self):
        exc = RecipeI18nError("Test error", status_code=400, details={"field": "locale"})
        assert exc.status_code == 400
        assert exc.details == {"field": "locale"}


class TestLocaleErrors:
    def test_unsupported_locale(self):
        exc = UnsupportedLocaleRequested("it")
        assert exc.locale == "it"
        assert "'it'" in exc.message
        assert exc.status_code == status.HTTP_404_NOT_FOUND
        assert exc.error_code == "LOCALE_UNSUPPORTED"

    def test_unknown_segment(self):
        exc = UnknownRouteSegment("fr", "panier")
        assert exc.details == {"locale": "fr", "segment": "panier"}
        assert isinstance(exc, RecipeI18nError)


class TestHandleErrors:
    def test_collision_exhausted(self):
        exc = HandleCollisionExhausted("pasta", "fr", 100)
        assert exc.status_code == status.HTTP_409_CONFLICT
        assert exc.details == {"base_handle": "pasta", "locale": "fr", "attempts": 100}
        assert "after 100 attempts" in exc.message

    def test_handle_taken(self):
        exc = HandleTakenError("pasta", "fr")
        assert exc.error_code == "HANDLE_TAKEN"
        assert exc.status_code == status.HTTP_409_CONFLICT

    def test_duplicate_translation(self):
        exc = DuplicateTranslationError(42, "fr")
        assert exc.message == "Recipe 42 already has a 'fr' translation"


class TestNotFoundErrors:
    def test_translation_not_found_details(self):
        exc = TranslationNotFound("de", recipe_id=42)
        assert exc.details == {"locale": "de", "recipe_id": 42}

    def test_translation_not_found_by_handle(self):
        exc = TranslationNotFound("fr", handle="tarte-citron")
        assert exc.details == {"locale": "fr", "handle": "tarte-citron"}

    def test_content_not_found_by_handle(self):
        exc = ContentNotFoundError(handle="lemon-tart")
        assert exc.message == "Recipe with handle 'lemon-tart' not found"
        assert exc.status_code == status.HTTP_404_NOT_FOUND

    def test_content_not_found_by_id(self):
        assert ContentNotFoundError(recipe_id=42).message == "Recipe with id '42' not found"

    def test_content_not_found_bare(self):
        assert ContentNotFoundError().message == "Recipe not found"

    def test_store_unavailable(self):
        exc = ContentStoreUnavailable(operation="get_translation")
        assert exc.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
        assert exc.details == {"operation": "get_translation"}


class TestErrorResponses:
    def test_error_type(self):
        assert get_error_type(409) == "Conflict"
        assert get_error_type(418) == "Error"

    def test_create_error_response_omits_empty_fields(self):
        response = create_error_response(404, "Not here")
        assert response.status_code == 404
        assert response.body == b'{"error":{"status_code":404,"message":"Not here","type":"Not Found"}}'

    def test_registered_handlers(self):
        app = FastAPI()
        register_exception_handlers(app)

        @app.get("/conflict")
        async def conflict():
            raise HandleCollisionExhausted("pasta", "fr", 3)

        @app.get("/missing")
        async def missing():
            raise HTTPException(status_code=404, detail="Page not found")

        @app.get("/items/{item_id}")
        async def item(item_id: int):
            return {"item_id": item_id}

        client = TestClient(app)

        body = client.get("/conflict").json()["error"]
        assert body["status_code"] == 409
        assert body["error_code"] == "HANDLE_COLLISION_EXHAUSTED"
        assert body["details"]["attempts"] == 3
        assert body["path"] == "/conflict"

        response = client.get("/missing")
        assert response.status_code == 404
        assert response.json()["error"]["message"] == "Page not found"

        response = client.get("/items/not-a-number")
        assert response.status_code == 422
        assert response.json()["error"]["error_code"] == "VALIDATION_FAILED"
