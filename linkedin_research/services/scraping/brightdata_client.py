"""
BrightData LinkedIn Scraper Service
Live scraping of LinkedIn companies and profiles via BrightData datasets v3.

Flow for one batch:
1. POST /trigger with a JSON array of {"url": ...} inputs -> snapshot_id
2. GET /progress/{snapshot_id} every 3s until ready / failed / timeout
3. GET /snapshot/{snapshot_id} to download the result array

One job per batch: all requested URLs go into a single snapshot, we never
run jobs in parallel. There is no retry - a failed or timed-out job is
reported to the caller, who falls back to static data.
"""

import asyncio
import os
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, List, Optional

import httpx
from dotenv import load_dotenv

from .cache import SnapshotCache
from .errors import ConfigurationError, ProviderError, ProviderUnreachable, ScrapeFailed, ScrapeTimedOut

load_dotenv()

# ============================================================================
# CONFIGURATION
# ============================================================================

BRIGHTDATA_API_KEY = os.getenv("BRIGHTDATA_API_KEY")
BRIGHTDATA_BASE_URL = os.getenv("BRIGHTDATA_BASE_URL", "https://api.brightdata.com/datasets/v3")

# Dataset IDs
COMPANY_DATASET_ID = "gd_l1vikfnt1wgvvqz95w"   # LinkedIn Company Information
PROFILES_DATASET_ID = "gd_l1viktl72bvl7bjuj0"  # LinkedIn People Profiles

# Polling settings
POLL_INTERVAL_SECONDS = 3
MAX_WAIT_MS = 120_000         # 2 minutes, measured from submission
HTTP_TIMEOUT_SECONDS = 30.0


# ============================================================================
# JOB STATE
# ============================================================================

class JobStatus(str, Enum):
    PENDING = "pending"
    RUNNING = "running"
    READY = "ready"
    FAILED = "failed"
    TIMED_OUT = "timed_out"


# Provider statuses that keep the poll loop going
POLLING_STATUSES = {JobStatus.PENDING.value, JobStatus.RUNNING.value}


@dataclass
class ScrapeJob:
    """A submitted snapshot job and where it is in its lifecycle."""
    job_id: str
    inputs: List[str]
    dataset_id: str
    status: JobStatus = JobStatus.PENDING
    result: Optional[List[Dict[str, Any]]] = None
    polls: int = 0

    @property
    def is_terminal(self) -> bool:
        return self.status in (JobStatus.READY, JobStatus.FAILED, JobStatus.TIMED_OUT)


# ============================================================================
# CLIENT
# ============================================================================

class BrightDataClient:
    """
    Async client for the BrightData datasets API.

    clock and sleep are injectable so the poll loop can be driven by a fake
    clock in tests instead of real wall-clock delays.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: str = BRIGHTDATA_BASE_URL,
        http_client: Optional[httpx.AsyncClient] = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
        poll_interval_seconds: float = POLL_INTERVAL_SECONDS,
    ):
        self.api_key = api_key if api_key is not None else BRIGHTDATA_API_KEY
        if not self.api_key:
            raise ConfigurationError("Missing BRIGHTDATA_API_KEY environment variable")

        self.base_url = base_url.rstrip("/")
        self.poll_interval_seconds = poll_interval_seconds
        self._client = http_client or httpx.AsyncClient(timeout=HTTP_TIMEOUT_SECONDS)
        self._clock = clock
        self._sleep = sleep

    @property
    def headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

    async def _request(
        self,
        method: str,
        path: str,
        operation: str,
        params: Optional[Dict[str, str]] = None,
        json: Any = None
    ) -> httpx.Response:
        url = f"{self.base_url}{path}"
        try:
            response = await self._client.request(method, url, params=params, json=json, headers=self.headers)
        except httpx.HTTPError as e:
            print(f"[BrightData] {operation} error: {method} {url} - {type(e).__name__}: {e}", flush=True)
            raise ProviderUnreachable(operation, e) from e
        if not response.is_success:
            print(f"[BrightData] {operation} error: {method} {url}", flush=True)
            print(f"[BrightData] Status: {response.status_code} - {response.text[:500]}", flush=True)
            raise ProviderError(response.status_code, response.text, operation)
        return response

    @staticmethod
    def _json(response: httpx.Response, operation: str) -> Any:
        try:
            return response.json()
        except ValueError:
            raise ProviderError(response.status_code, response.text, operation)

    def _json_object(self, response: httpx.Response, operation: str) -> Dict[str, Any]:
        data = self._json(response, operation)
        if not isinstance(data, dict):
            raise ProviderError(response.status_code, response.text, operation)
        return data

    # ========================================================================
    # CORE API CALLS
    # ========================================================================

    async def submit(self, inputs: List[str], dataset_id: str = COMPANY_DATASET_ID) -> str:
        """
        Trigger a snapshot job for a batch of URLs.

        Returns:
            The provider's snapshot_id
        """
        response = await self._request(
            "POST",
            "/trigger",
            "trigger",
            params={"dataset_id": dataset_id, "format": "json", "uncompressed_webhook": "true"},
            json=[{"url": url} for url in inputs],
        )
        snapshot_id = self._json_object(response, "trigger").get("snapshot_id")
        if not snapshot_id:
            raise ProviderError(response.status_code, response.text, "trigger")
        return snapshot_id

    async def poll(self, job_id: str) -> str:
        """Get the provider status string for a job (pending, running, ready, failed)."""
        response = await self._request("GET", f"/progress/{job_id}", "progress")
        return str(self._json_object(response, "progress").get("status", "unknown")).lower()

    async def fetch_result(self, job_id: str) -> List[Dict[str, Any]]:
        """Download the result array of a ready snapshot."""
        response = await self._request("GET", f"/snapshot/{job_id}", "snapshot", params={"format": "json"})
        data = self._json(response, "snapshot")

        if isinstance(data, list):
            return data
        if isinstance(data, dict) and isinstance(data.get("data"), list):
            return data["data"]

        print(f"[BrightData] Unexpected snapshot payload for {job_id}: {str(data)[:200]}", flush=True)
        return []

    # ========================================================================
    # POLL LOOP
    # ========================================================================

    async def run_to_completion(
        self,
        inputs: List[str],
        max_wait_ms: float = MAX_WAIT_MS,
        dataset_id: str = COMPANY_DATASET_ID
    ) -> List[Dict[str, Any]]:
        """
        Submit a job and poll until it is ready, failed or out of time.

        Args:
            inputs: URLs to scrape in one snapshot
            max_wait_ms: Budget from submission (not from the first poll)
            dataset_id: BrightData dataset to run

        Returns:
            The snapshot result array

        Raises:
            ProviderError: any call returned a non-2xx status or an unreadable body
            ProviderUnreachable: a call got no HTTP answer
            ScrapeFailed: provider reported the job as failed
            ScrapeTimedOut: budget exhausted while still pending/running
        """
        start = self._clock()
        job_id = await self.submit(inputs, dataset_id=dataset_id)
        job = ScrapeJob(job_id=job_id, inputs=list(inputs), dataset_id=dataset_id)
        print(f"[BrightData] Snapshot {job_id} submitted ({len(inputs)} inputs)", flush=True)

        while (self._clock() - start) * 1000 < max_wait_ms:
            status = await self.poll(job_id)
            job.polls += 1

            if status == JobStatus.READY.value:
                job.result = await self.fetch_result(job_id)
                job.status = JobStatus.READY
                elapsed = self._clock() - start
                print(f"[BrightData] Snapshot {job_id} ready in {elapsed:.1f}s ({len(job.result)} records)", flush=True)
                return job.result

            if status not in POLLING_STATUSES:
                job.status = JobStatus.FAILED
                print(f"[BrightData] Snapshot {job_id} failed (status: {status})", flush=True)
                raise ScrapeFailed(job, status)

            job.status = JobStatus(status)
            await self._sleep(self.poll_interval_seconds)

        job.status = JobStatus.TIMED_OUT
        waited_ms = (self._clock() - start) * 1000
        print(f"[BrightData] Snapshot {job_id} timed out after {job.polls} polls", flush=True)
        raise ScrapeTimedOut(job, waited_ms)

    # ========================================================================
    # STATUS
    # ========================================================================

    async def check_status(self) -> Dict[str, Any]:
        """Probe the API with our credential. Never raises."""
        masked = "***" + self.api_key[-6:]
        try:
            response = await self._client.get(f"{self.base_url}/progress/test", headers=self.headers)
            return {"connected": response.status_code != 401, "api_key": masked}
        except httpx.HTTPError as e:
            return {"connected": False, "api_key": masked, "error": str(e)}

    async def aclose(self) -> None:
        await self._client.aclose()


# ============================================================================
# CACHED SCRAPING
# ============================================================================

class LiveScraper:
    """
    Cached front door for live scraping.

    The cache is checked before submitting and written only after a
    successful snapshot, so failures and timeouts are retried on the next
    request.
    """

    def __init__(self, client: BrightDataClient, cache: SnapshotCache):
        self.client = client
        self.cache = cache

    async def _scrape(self, namespace: str, dataset_id: str, urls: List[str]) -> List[Dict[str, Any]]:
        key = self.cache.make_key(urls, namespace=namespace)
        cached = self.cache.get(key)
        if cached is not None:
            return cached

        results = await self.client.run_to_completion(urls, dataset_id=dataset_id)
        self.cache.put(key, results)
        return results

    async def scrape_companies(self, company_urls: List[str]) -> List[Dict[str, Any]]:
        """Scrape LinkedIn company pages."""
        return await self._scrape("companies", COMPANY_DATASET_ID, company_urls)

    async def scrape_profiles(self, profile_urls: List[str]) -> List[Dict[str, Any]]:
        """Scrape profiles of decision makers."""
        return await self._scrape("profiles", PROFILES_DATASET_ID, profile_urls)


def create_live_scraper(cache: SnapshotCache, api_key: Optional[str] = None) -> Optional[LiveScraper]:
    """Build a LiveScraper, or None when no credential is configured."""
    try:
        client = BrightDataClient(api_key=api_key)
    except ConfigurationError:
        print("[BrightData] BRIGHTDATA_API_KEY not set - live scraping disabled", flush=True)
        return None
    return LiveScraper(client, cache)
