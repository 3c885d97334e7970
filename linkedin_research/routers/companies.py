"""
Companies Router - Discover companies and decision makers

Endpoints:
- GET /api/high-fit - High-fit cloud companies (static, or live with ?live=true)
- GET /api/icp-similar - Companies similar to existing ICPs
- GET /api/search - Search the whole static catalog
- GET /api/linkedin-search - LinkedIn people-search link for a company
- GET /api/google-verify - Google verification links for a company
- GET /api/stats - Catalog counts
- GET /api/brightdata/status - BrightData credential check
- POST /api/profiles/scrape - Live scrape of decision-maker profiles
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel

from ..services.db.static_catalog import ICP_REFERENCE, TARGET_ROLES, StaticCatalog
from ..services.models import ResolveFilters, ResolveResult
from ..services.reconciler import CompanyReconciler
from ..services.scraping.brightdata_client import LiveScraper, create_live_scraper
from ..services.scraping.cache import SnapshotCache
from ..services.scraping.errors import ScrapeError
from ..services.scraping.linkedin_urls import build_google_verify_links, build_people_search

router = APIRouter()

# Process-wide state, shared by every request
_catalog = StaticCatalog()
_cache = SnapshotCache()
_scraper: Optional[LiveScraper] = None
_scraper_checked = False


# ============================================
# Dependencies
# ============================================

def get_catalog() -> StaticCatalog:
    return _catalog


def get_live_scraper() -> Optional[LiveScraper]:
    """Build the scraper once; None when BRIGHTDATA_API_KEY is not set."""
    global _scraper, _scraper_checked
    if not _scraper_checked:
        _scraper = create_live_scraper(_cache)
        _scraper_checked = True
    return _scraper


def get_reconciler(
    catalog: StaticCatalog = Depends(get_catalog),
    scraper: Optional[LiveScraper] = Depends(get_live_scraper),
) -> CompanyReconciler:
    return CompanyReconciler(catalog, scraper)


# ============================================
# Pydantic Models
# ============================================

class ICPSimilarResponse(ResolveResult):
    icp_reference: List[dict]


class ProfileScrapeRequest(BaseModel):
    urls: List[str]


class ProfileScrapeResponse(BaseModel):
    total: int
    profiles: List[dict]


# ============================================
# Endpoints
# ============================================

@router.get("/api/high-fit", response_model=ResolveResult)
async def high_fit(
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1),
    search: Optional[str] = None,
    region: Optional[str] = None,
    complexity: Optional[str] = None,
    live: bool = False,
    reconciler: CompanyReconciler = Depends(get_reconciler),
):
    """High-fit cloud companies, shuffled on every call."""
    filters = ResolveFilters(
        search=search, region=region, complexity=complexity, live=live, page=page, limit=limit
    )
    return await reconciler.resolve("high-fit", filters)


@router.get("/api/icp-similar", response_model=ICPSimilarResponse)
async def icp_similar(
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1),
    search: Optional[str] = None,
    region: Optional[str] = None,
    complexity: Optional[str] = None,
    live: bool = False,
    reconciler: CompanyReconciler = Depends(get_reconciler),
):
    """Companies similar to the existing ICP reference set."""
    filters = ResolveFilters(
        search=search, region=region, complexity=complexity, live=live, page=page, limit=limit
    )
    result = await reconciler.resolve("icp-similar", filters)
    return ICPSimilarResponse(**result.model_dump(), icp_reference=ICP_REFERENCE)


@router.get("/api/search")
async def search_companies(q: Optional[str] = None, catalog: StaticCatalog = Depends(get_catalog)):
    """Search across both categories."""
    try:
        results = catalog.search(q)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"total": len(results), "results": results}


@router.get("/api/linkedin-search")
async def linkedin_search(company: Optional[str] = None, role: Optional[str] = None):
    """LinkedIn search URL that shows decision makers at a company."""
    try:
        links = build_people_search(company, role)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"company": company, **links, "target_roles": TARGET_ROLES}


@router.get("/api/google-verify")
async def google_verify(company: Optional[str] = None):
    try:
        links = build_google_verify_links(company)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"company": company, "links": links}


@router.get("/api/stats")
async def stats(catalog: StaticCatalog = Depends(get_catalog)):
    return {**catalog.stats(), "icpReference": ICP_REFERENCE}


@router.get("/api/brightdata/status")
async def brightdata_status(scraper: Optional[LiveScraper] = Depends(get_live_scraper)):
    """Check whether the BrightData credential works."""
    if scraper is None:
        return {"connected": False, "api_key": "NOT SET"}
    return await scraper.client.check_status()


@router.post("/api/profiles/scrape", response_model=ProfileScrapeResponse)
async def scrape_profiles(
    request: ProfileScrapeRequest,
    scraper: Optional[LiveScraper] = Depends(get_live_scraper),
):
    """
    Live scrape of decision-maker profiles.

    Unlike company listings there is no static fallback here, so provider
    failures are reported to the caller.
    """
    if not request.urls:
        raise HTTPException(status_code=400, detail="At least one profile URL is required")
    if scraper is None:
        raise HTTPException(status_code=503, detail="Live scraping is not configured")

    try:
        profiles = await scraper.scrape_profiles(request.urls)
    except ScrapeError as e:
        raise HTTPException(status_code=502, detail=str(e))

    return ProfileScrapeResponse(total=len(profiles), profiles=profiles)
