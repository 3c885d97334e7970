# Scraping services
from .brightdata_client import BrightDataClient, LiveScraper, ScrapeJob, JobStatus, create_live_scraper
from .cache import SnapshotCache
from .errors import ScrapeError, ConfigurationError, ProviderError, ProviderUnreachable, ScrapeFailed, ScrapeTimedOut
from .linkedin_urls import build_company_urls, build_people_search, build_google_verify_links

__all__ = [
    "BrightDataClient",
    "LiveScraper",
    "ScrapeJob",
    "JobStatus",
    "create_live_scraper",
    "SnapshotCache",
    "ScrapeError",
    "ConfigurationError",
    "ProviderError",
    "ProviderUnreachable",
    "ScrapeFailed",
    "ScrapeTimedOut",
    "build_company_urls",
    "build_people_search",
    "build_google_verify_links"
]
