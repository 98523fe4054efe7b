from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

load_dotenv()


class Settings(BaseSettings):
    # Application settings
    app_name: str = "Recipe Site"
    app_version: str = "1.0.0"
    debug: bool = False
    environment: str = "development"
    base_url: str = "http://localhost:8000"

    # Database settings
    database_url: str = "sqlite+aiosqlite:///./recipes.db"

    # Locale settings
    default_language: str = "en"
    supported_languages: list[str] = ["en", "fr", "es", "de"]
    locale_cookie_name: str = "preferred_locale"

    # Paths the locale router never touches (assets, API namespace, docs)
    passthrough_prefixes: list[str] = ["/api", "/_next", "/static", "/docs", "/redoc", "/openapi.json", "/health"]

    # Handle generation
    handle_max_attempts: int = 100
    handle_insert_retries: int = 5

    # Cross-locale resolution
    resolve_timeout_seconds: float = 2.0

    # Logging
    log_level: str = "INFO"
    log_json: bool = True

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


settings = Settings()
