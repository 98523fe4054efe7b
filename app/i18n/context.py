"""
Request-scoped locale context

The routing middleware decides the locale once per request and stores a
LocaleContext on ``request.state``. Route handlers take it as a dependency
instead of re-parsing the locale out of the path.
"""

from __future__ import annotations

from dataclasses import dataclass

from fastapi import Request

from app.i18n.locale import LocaleTable, get_locale_table
from app.i18n.routes import localize_path


@dataclass(frozen=True)
class LocaleContext:
    locale: str
    table: LocaleTable
    canonical_path: str
    public_path: str

    @property
    def is_default(self) -> bool:
        return self.locale == self.table.default

    def url_for(self, internal_path: str, locale: str | None = None) -> str:
        """Public URL of a canonical path in this (or another) locale."""
        return localize_path(internal_path, locale or self.locale, self.table)


def get_locale_context(request: Request) -> LocaleContext:
    """FastAPI dependency returning the context set by LocaleRoutingMiddleware.

    Requests that bypassed the middleware get a default-locale context.
    """
    context = getattr(request.state, "locale_context", None)
    if context is None:
        table = get_locale_table()
        context = LocaleContext(
            locale=table.default,
            table=table,
            canonical_path=request.url.path,
            public_path=request.url.path,
        )
    return context
