"""
Shared fixtures for the test suite.

Nothing here touches the network: BrightData is faked with
httpx.MockTransport and time is driven by a FakeClock.
"""

import json
from typing import Any, Dict, List, Optional

import httpx
import pytest

from linkedin_research.services.db.static_catalog import StaticCatalog
from linkedin_research.services.scraping.brightdata_client import BrightDataClient

TEST_API_KEY = "test-key-abc123456"
BASE_URL = "https://api.brightdata.test/datasets/v3"


class FakeClock:
    """Monotonic clock that only moves when told to (or when sleep is awaited)."""

    def __init__(self, start: float = 1000.0):
        self.now = start
        self.sleeps: List[float] = []

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


class FakeBrightData:
    """
    Minimal stand-in for the BrightData datasets API.

    statuses are returned one per /progress call; the last one repeats.
    """

    def __init__(
        self,
        statuses: Optional[List[str]] = None,
        snapshot: Any = None,
        snapshot_id: str = "s_test1",
        fail: Optional[Dict[str, int]] = None,
        on_trigger=None,
    ):
        self.statuses = list(statuses or ["ready"])
        self.snapshot = snapshot if snapshot is not None else []
        self.snapshot_id = snapshot_id
        self.fail = fail or {}
        self.on_trigger = on_trigger
        self.requests: List[httpx.Request] = []
        self.progress_calls = 0

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if path.endswith("/trigger"):
            if "trigger" in self.fail:
                return httpx.Response(self.fail["trigger"], text="invalid dataset")
            if self.on_trigger:
                self.on_trigger()
            return httpx.Response(200, json={"snapshot_id": self.snapshot_id})

        if "/progress/" in path:
            if "progress" in self.fail:
                return httpx.Response(self.fail["progress"], text="progress unavailable")
            index = min(self.progress_calls, len(self.statuses) - 1)
            self.progress_calls += 1
            return httpx.Response(200, json={"status": self.statuses[index]})

        if "/snapshot/" in path:
            if "snapshot" in self.fail:
                return httpx.Response(self.fail["snapshot"], text="snapshot missing")
            return httpx.Response(200, json=self.snapshot)

        return httpx.Response(404, text="not found")

    def trigger_body(self) -> Any:
        trigger = next(r for r in self.requests if r.url.path.endswith("/trigger"))
        return json.loads(trigger.content)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def make_client(clock):
    """Factory for a BrightDataClient wired to a FakeBrightData."""

    def _make(provider: FakeBrightData, **kwargs) -> BrightDataClient:
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(provider.handler))
        return BrightDataClient(
            api_key=TEST_API_KEY,
            base_url=BASE_URL,
            http_client=http_client,
            clock=clock,
            sleep=clock.sleep,
            **kwargs,
        )

    return _make


@pytest.fixture
def abc_catalog() -> StaticCatalog:
    """Three high-fit companies A, B, C and one icp-similar company."""
    return StaticCatalog([
        {"company": "A", "industry": "Fintech", "category": "high-fit", "region": "India",
         "hq": "Mumbai", "cloud_providers": ["AWS"], "cloud_complexity": "High"},
        {"company": "B", "industry": "SaaS", "category": "high-fit", "region": "Global",
         "hq": "London", "cloud_providers": ["GCP"], "cloud_complexity": "Medium"},
        {"company": "C", "industry": "Gaming", "category": "high-fit", "region": "India",
         "hq": "Pune", "cloud_providers": ["Azure"], "cloud_complexity": "Low"},
        {"company": "Z", "industry": "FMCG", "category": "icp-similar", "region": "India",
         "hq": "Delhi", "icp_similarity": "TCPL / Coca-Cola"},
    ])
