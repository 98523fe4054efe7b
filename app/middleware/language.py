"""
Locale Routing Middleware

Every page request ends in exactly one of three outcomes:

  REDIRECT     the path has no locale prefix; send the client to
               /{negotiated-locale}{path} with the query string untouched.
  REWRITE      the segment after the prefix is a localized alias
               (/fr/recettes/...); the application sees the canonical path
               (/fr/recipes/...) while the browser keeps the localized URL.
  PASSTHROUGH  assets, API calls, and paths that are already canonical.

The decision itself (route_request) is a pure function; the middleware
only applies it. No DB lookups.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from urllib.parse import quote
from typing import TYPE_CHECKING

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import RedirectResponse

from app.config import settings
from app.i18n.context import LocaleContext
from app.i18n.locale import LocaleTable, get_locale_table
from app.i18n.negotiation import NoPreferenceSource, PreferenceSource, negotiate
from app.i18n.routes import split_locale_prefix, to_canonical

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from fastapi import Request
    from starlette.responses import Response
    from starlette.types import ASGIApp

logger = logging.getLogger(__name__)


class RoutingOutcome(str, enum.Enum):
    REDIRECT = "redirect"
    REWRITE = "rewrite"
    PASSTHROUGH = "passthrough"


@dataclass(frozen=True)
class RoutingDecision:
    """Result of routing one inbound path.

    ``path`` is the path the application should see; ``location`` is only set
    for redirects and already carries the query string.
    """

    outcome: RoutingOutcome
    path: str
    locale: str | None = None
    location: str | None = None


def is_passthrough_path(path: str, prefixes: list[str] | tuple[str, ...]) -> bool:
    """True for static assets and non-page namespaces."""
    for prefix in prefixes:
        if path == prefix or path.startswith(prefix.rstrip("/") + "/"):
            return True
    last_segment = path.rsplit("/", 1)[-1]
    return "." in last_segment


# RFC 3986 pchar plus "/", left unescaped
PATH_SAFE_CHARS = "/:@!$&'()*+,;=-._~"


def encode_path(path: str) -> str:
    """Percent-encode a decoded URL path for use in a Location header or raw_path."""
    return quote(path, safe=PATH_SAFE_CHARS)


def route_request(
    path: str,
    query_string: str,
    accept_language: str | None,
    stored_preference: str | None,
    table: LocaleTable,
    passthrough_prefixes: list[str] | tuple[str, ...] = (),
    raw_path: str | None = None,
) -> RoutingDecision:
    """Decide what to do with one inbound path.

    ``path`` is the decoded path. ``raw_path``, when known, is the path exactly
    as received and is reused verbatim in redirect locations; otherwise
    ``path`` is re-encoded.
    """
    if is_passthrough_path(path, passthrough_prefixes):
        return RoutingDecision(RoutingOutcome.PASSTHROUGH, path)

    locale, segments = split_locale_prefix(path, table)

    if locale is None:
        locale = negotiate(None, accept_language, stored_preference, table)
        location = f"/{locale}" if path in ("", "/") else f"/{locale}{raw_path or encode_path(path)}"
        if query_string:
            location = f"{location}?{query_string}"
        return RoutingDecision(RoutingOutcome.REDIRECT, path, locale=locale, location=location)

    # Locale root: nothing to substitute
    if not segments:
        return RoutingDecision(RoutingOutcome.PASSTHROUGH, path, locale=locale)

    segment = segments[0]
    canonical = to_canonical(locale, segment, table)
    if canonical is None or canonical == segment:
        return RoutingDecision(RoutingOutcome.PASSTHROUGH, path, locale=locale)

    # Only the first path segment after the prefix is swapped; the rest,
    # including a trailing slash, stays as received
    start = path.index(segment, len(locale) + 1)
    rewritten = path[:start] + canonical + path[start + len(segment):]
    return RoutingDecision(RoutingOutcome.REWRITE, rewritten, locale=locale)


class LocaleRoutingMiddleware(BaseHTTPMiddleware):
    """Apply route_request to every request and attach a LocaleContext.

    The stored-preference capability is fixed at construction; pass
    ``preferences=NoPreferenceSource()`` (the default) when there is none.
    """

    def __init__(
        self,
        app: ASGIApp,
        table: LocaleTable | None = None,
        preferences: PreferenceSource | None = None,
        passthrough_prefixes: list[str] | None = None,
    ):
        super().__init__(app)
        self.table = table or get_locale_table()
        self.preferences = preferences or NoPreferenceSource()
        self.passthrough_prefixes = tuple(
            settings.passthrough_prefixes if passthrough_prefixes is None else passthrough_prefixes
        )

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        path = request.url.path
        decision = route_request(
            path=path,
            query_string=request.url.query,
            accept_language=request.headers.get("Accept-Language"),
            stored_preference=self._stored_preference(request.cookies),
            table=self.table,
            passthrough_prefixes=self.passthrough_prefixes,
            raw_path=self._raw_path(request),
        )
        request.state.routing_outcome = decision.outcome.value

        if decision.outcome is RoutingOutcome.REDIRECT:
            logger.debug("Locale redirect %s -> %s", path, decision.location)
            return RedirectResponse(decision.location, status_code=307)

        if decision.outcome is RoutingOutcome.REWRITE:
            logger.debug("Locale rewrite %s -> %s", path, decision.path)
            # Same scope dict the downstream app receives
            request.scope["path"] = decision.path
            request.scope["raw_path"] = encode_path(decision.path).encode("ascii")

        if decision.locale is not None:
            request.state.locale_context = LocaleContext(
                locale=decision.locale,
                table=self.table,
                canonical_path=decision.path,
                public_path=path,
            )

        response = await call_next(request)
        if decision.outcome is RoutingOutcome.REWRITE:
            response.headers["X-Canonical-Path"] = encode_path(decision.path)
        return response

    def _stored_preference(self, cookies: Mapping[str, str]) -> str | None:
        return self.preferences.get_preference(cookies)

    @staticmethod
    def _raw_path(request: Request) -> str | None:
        raw = request.scope.get("raw_path")
        if not raw:
            return None
        # Some servers include the query string in raw_path
        return raw.split(b"?", 1)[0].decode("latin-1")
