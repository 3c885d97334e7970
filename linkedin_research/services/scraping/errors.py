"""
Scraping errors raised by the BrightData client.

Company listings turn every error here into a static-data fallback at the
reconciler. Profile scrapes have no fallback and report them as a 502.
"""

from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .brightdata_client import ScrapeJob


class ScrapeError(Exception):
    """Base exception for live scraping errors."""
    pass


class ConfigurationError(ScrapeError):
    """Live scraping requested but no provider credential is configured."""
    pass


class ProviderError(ScrapeError):
    """Provider answered with a non-2xx HTTP status."""

    def __init__(self, status_code: int, body: str, operation: str = "request"):
        self.status_code = status_code
        self.body = body
        self.operation = operation
        super().__init__(f"BrightData {operation} error: {status_code} - {body[:500]}")


class ScrapeFailed(ScrapeError):
    """Provider reported the snapshot job as failed."""

    def __init__(self, job: "ScrapeJob", status: Optional[str] = None):
        self.job = job
        self.status = status or "failed"
        super().__init__(f"BrightData scrape {job.job_id} failed (status: {self.status})")


class ScrapeTimedOut(ScrapeError):
    """Polling budget exhausted before the job reached a terminal status."""

    def __init__(self, job: "ScrapeJob", waited_ms: float):
        self.job = job
        self.waited_ms = waited_ms
        super().__init__(f"BrightData scrape {job.job_id} timed out after {waited_ms / 1000:.1f}s")


class ProviderUnreachable(ScrapeError):
    """Request never got an HTTP answer (connection refused, timeout, ...)."""

    def __init__(self, operation: str, cause: Exception):
        self.operation = operation
        self.cause = cause
        super().__init__(f"BrightData {operation} unreachable: {type(cause).__name__}: {cause}")
