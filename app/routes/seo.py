"""
SEO Routes

Provides the multilingual sitemap.xml.
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.services.seo_service import SEOService

router = APIRouter(tags=["SEO"])


def get_base_url(request: Request) -> str:
    """Extract base URL from request."""
    return str(request.base_url).rstrip("/")


@router.get("/sitemap.xml")
async def get_sitemap(
    request: Request,
    db: AsyncSession = Depends(get_db),
) -> Response:
    """
    Generate XML sitemap for search engines.

    Lists locale home pages, recipe listings and every translated recipe
    page, each with hreflang alternates.
    """
    base_url = get_base_url(request)
    service = SEOService(db, base_url)

    sitemap_xml = await service.generate_sitemap()

    return Response(
        content=sitemap_xml,
        media_type="application/xml",
        headers={"Cache-Control": "public, max-age=3600"},
    )
