"""
Reconciler - Merge live LinkedIn data with the static catalog.

Handles:
- Live scraping of a category's known companies (through the cache)
- Merging live over static by company name (live wins)
- Silent fallback to static data on any live-path failure
- Filtering, shuffling and pagination of the merged set

Results are shuffled on every call so repeated requests surface different
companies from the catalog. Never rely on result order.
"""

import random
from typing import Callable, Dict, List, Optional, Tuple

from .db.static_catalog import StaticCatalog
from .matching.normalizer import normalize
from .models import CompanyRecord, ResolveFilters, ResolveResult
from .scraping.brightdata_client import LiveScraper
from .scraping.errors import ConfigurationError
from .scraping.linkedin_urls import build_company_urls

# Max companies sent to BrightData per resolve
LIVE_BATCH_LIMIT = 20

FallbackHandler = Callable[[str, Exception], None]


def log_fallback(category: str, error: Exception) -> None:
    """Default fallback handler: log and carry on with static data."""
    print(f"[Reconciler] Live scrape for {category} failed, using static data: "
          f"{type(error).__name__}: {error}", flush=True)


def merge_records(live: List[CompanyRecord], static: List[CompanyRecord]) -> List[CompanyRecord]:
    """
    Merge live records over static ones by case-insensitive company name.

    Live records replace static records with the same name; static records
    with no live counterpart are kept. Duplicate names within the live set
    keep the first occurrence.
    """
    merged: Dict[str, CompanyRecord] = {}
    for record in live:
        merged.setdefault(record.key, record)
    for record in static:
        merged.setdefault(record.key, record)
    return list(merged.values())


def filter_records(
    records: List[CompanyRecord],
    category: str,
    search: Optional[str] = None,
    region: Optional[str] = None,
    complexity: Optional[str] = None
) -> List[CompanyRecord]:
    """Case-insensitive search / region / complexity filters."""
    if search:
        q = search.lower()

        def matches(r: CompanyRecord) -> bool:
            fields = [r.company, r.industry, r.hq, *r.cloud_providers]
            if category == "icp-similar":
                fields.append(r.icp_similarity)
            return any(q in f.lower() for f in fields)

        records = [r for r in records if matches(r)]

    if region:
        records = [r for r in records if r.region.lower() == region.lower()]

    if complexity:
        records = [r for r in records if r.cloud_complexity.lower() == complexity.lower()]

    return records


def paginate(records: List[CompanyRecord], page: int, limit: int) -> List[CompanyRecord]:
    """1-based page slice; past the end is an empty list."""
    start = (page - 1) * limit
    return records[start:start + limit]


class CompanyReconciler:
    """
    Resolve a category into a page of companies plus provenance.

    Args:
        catalog: Static data source (anything with get_all(category))
        scraper: Cached live scraper, or None when no credential is set
        on_fallback: Called with (category, error) whenever the live path
            is skipped or fails
        rng: Random source for shuffling
    """

    def __init__(
        self,
        catalog: StaticCatalog,
        scraper: Optional[LiveScraper] = None,
        on_fallback: FallbackHandler = log_fallback,
        rng: Optional[random.Random] = None
    ):
        self.catalog = catalog
        self.scraper = scraper
        self.on_fallback = on_fallback
        self.rng = rng or random.Random()

    async def _live_records(self, category: str, static: List[CompanyRecord]) -> List[CompanyRecord]:
        names = [r.company for r in static][:LIVE_BATCH_LIMIT]
        raw = await self.scraper.scrape_companies(build_company_urls(names))
        return normalize(raw, category)

    async def _merged(self, category: str, live: bool) -> Tuple[List[CompanyRecord], str]:
        static = self.catalog.get_all(category)
        if not live:
            return static, "static"

        if self.scraper is None:
            self.on_fallback(category, ConfigurationError("BRIGHTDATA_API_KEY not set"))
            return static, "static"

        try:
            live_records = await self._live_records(category, static)
        except Exception as e:
            self.on_fallback(category, e)
            return static, "static"

        merged = merge_records(live_records, static)
        if not live_records:
            source = "static"
        elif all(r.source == "live" for r in merged):
            source = "live"
        else:
            source = "hybrid"
        print(f"[Reconciler] {category}: {len(live_records)} live + "
              f"{len(merged) - len(live_records)} static -> {source}", flush=True)
        return merged, source

    async def resolve(self, category: str, filters: Optional[ResolveFilters] = None) -> ResolveResult:
        """
        Resolve a category into a filtered, shuffled page of companies.

        Never raises for live-path failures - those fall back to static data
        with source="static".
        """
        filters = filters or ResolveFilters()

        companies, source = await self._merged(category, filters.live)
        companies = filter_records(
            companies,
            category,
            search=filters.search,
            region=filters.region,
            complexity=filters.complexity,
        )
        self.rng.shuffle(companies)

        return ResolveResult(
            total=len(companies),
            page=filters.page,
            limit=filters.limit,
            source=source,
            companies=paginate(companies, filters.page, filters.limit),
        )
