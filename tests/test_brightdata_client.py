"""
Tests for the BrightData job client.

Covers:
- Trigger / progress / snapshot calls and their ProviderError handling
- The poll loop: ready, failed, unknown status and timeout
- Timeout measured from submission, not from the first poll
- Credential handling and the status probe
"""

import httpx
import pytest

from conftest import BASE_URL, TEST_API_KEY, FakeBrightData
from linkedin_research.services.scraping import brightdata_client
from linkedin_research.services.scraping.brightdata_client import (
    COMPANY_DATASET_ID,
    PROFILES_DATASET_ID,
    BrightDataClient,
    JobStatus,
)
from linkedin_research.services.scraping.errors import (
    ConfigurationError,
    ProviderError,
    ProviderUnreachable,
    ScrapeError,
    ScrapeFailed,
    ScrapeTimedOut,
)

URLS = ["https://www.linkedin.com/company/swiggy", "https://www.linkedin.com/company/razorpay"]


class TestConfiguration:

    def test_missing_api_key_raises_configuration_error(self, monkeypatch):
        monkeypatch.setattr(brightdata_client, "BRIGHTDATA_API_KEY", None)
        with pytest.raises(ConfigurationError):
            BrightDataClient()

    def test_empty_api_key_raises_configuration_error(self):
        with pytest.raises(ConfigurationError):
            BrightDataClient(api_key="")

    def test_env_api_key_is_used(self, monkeypatch):
        monkeypatch.setattr(brightdata_client, "BRIGHTDATA_API_KEY", "from-env-key")
        client = BrightDataClient()
        assert client.headers["Authorization"] == "Bearer from-env-key"


class TestSubmit:

    @pytest.mark.asyncio
    async def test_submit_posts_url_inputs_and_returns_snapshot_id(self, make_client):
        provider = FakeBrightData(snapshot_id="s_abc")
        client = make_client(provider)

        job_id = await client.submit(URLS)

        assert job_id == "s_abc"
        request = provider.requests[0]
        assert request.method == "POST"
        assert request.url.params["dataset_id"] == COMPANY_DATASET_ID
        assert request.url.params["format"] == "json"
        assert request.headers["Authorization"] == f"Bearer {TEST_API_KEY}"
        assert provider.trigger_body() == [{"url": url} for url in URLS]

    @pytest.mark.asyncio
    async def test_submit_uses_requested_dataset(self, make_client):
        provider = FakeBrightData()
        client = make_client(provider)

        await client.submit(URLS, dataset_id=PROFILES_DATASET_ID)

        assert provider.requests[0].url.params["dataset_id"] == PROFILES_DATASET_ID

    @pytest.mark.asyncio
    async def test_submit_non_2xx_raises_provider_error_with_status_and_body(self, make_client):
        client = make_client(FakeBrightData(fail={"trigger": 400}))

        with pytest.raises(ProviderError) as exc_info:
            await client.submit(URLS)

        assert exc_info.value.status_code == 400
        assert exc_info.value.body == "invalid dataset"
        assert "400" in str(exc_info.value)


class TestPollAndFetch:

    @pytest.mark.asyncio
    async def test_poll_returns_status(self, make_client):
        client = make_client(FakeBrightData(statuses=["running"]))
        assert await client.poll("s_test1") == "running"

    @pytest.mark.asyncio
    async def test_poll_non_2xx_raises_provider_error(self, make_client):
        client = make_client(FakeBrightData(fail={"progress": 500}))

        with pytest.raises(ProviderError) as exc_info:
            await client.poll("s_test1")

        assert exc_info.value.status_code == 500

    @pytest.mark.asyncio
    async def test_fetch_result_returns_array(self, make_client):
        client = make_client(FakeBrightData(snapshot=[{"name": "Swiggy"}]))
        assert await client.fetch_result("s_test1") == [{"name": "Swiggy"}]

    @pytest.mark.asyncio
    async def test_fetch_result_non_2xx_raises_provider_error(self, make_client):
        client = make_client(FakeBrightData(fail={"snapshot": 404}))

        with pytest.raises(ProviderError) as exc_info:
            await client.fetch_result("s_test1")

        assert exc_info.value.status_code == 404

    @pytest.mark.asyncio
    async def test_fetch_result_non_list_payload_is_empty(self, make_client):
        client = make_client(FakeBrightData(snapshot={"status": "building"}))
        assert await client.fetch_result("s_test1") == []


class TestRunToCompletion:

    @pytest.mark.asyncio
    async def test_ready_after_pending_and_running(self, make_client, clock):
        provider = FakeBrightData(statuses=["pending", "running", "ready"], snapshot=[{"name": "Swiggy"}])
        client = make_client(provider)

        result = await client.run_to_completion(URLS)

        assert result == [{"name": "Swiggy"}]
        assert provider.progress_calls == 3
        assert clock.sleeps == [3, 3]

    @pytest.mark.asyncio
    async def test_immediately_ready_does_not_sleep(self, make_client, clock):
        client = make_client(FakeBrightData(statuses=["ready"], snapshot=[]))

        assert await client.run_to_completion(URLS) == []
        assert clock.sleeps == []

    @pytest.mark.asyncio
    async def test_failed_status_raises_scrape_failed(self, make_client):
        client = make_client(FakeBrightData(statuses=["running", "failed"]))

        with pytest.raises(ScrapeFailed) as exc_info:
            await client.run_to_completion(URLS)

        job = exc_info.value.job
        assert job.status == JobStatus.FAILED
        assert job.is_terminal
        assert job.inputs == URLS
        assert job.polls == 2

    @pytest.mark.asyncio
    async def test_unknown_status_is_terminal(self, make_client):
        client = make_client(FakeBrightData(statuses=["cancelled"]))

        with pytest.raises(ScrapeFailed) as exc_info:
            await client.run_to_completion(URLS)

        assert exc_info.value.status == "cancelled"

    @pytest.mark.asyncio
    async def test_timeout_raises_scrape_timed_out(self, make_client, clock):
        provider = FakeBrightData(statuses=["running"])
        client = make_client(provider)

        with pytest.raises(ScrapeTimedOut) as exc_info:
            await client.run_to_completion(URLS, max_wait_ms=10_000)

        # Polls at t=0, 3, 6, 9; at t=12 the 10s budget is spent
        assert provider.progress_calls == 4
        assert exc_info.value.job.status == JobStatus.TIMED_OUT
        assert exc_info.value.waited_ms == 12_000

    @pytest.mark.asyncio
    async def test_timeout_counts_slow_submission(self, make_client, clock):
        provider = FakeBrightData(statuses=["ready"], on_trigger=lambda: clock.advance(130))
        client = make_client(provider)

        with pytest.raises(ScrapeTimedOut):
            await client.run_to_completion(URLS, max_wait_ms=120_000)

        assert provider.progress_calls == 0

    @pytest.mark.asyncio
    async def test_provider_error_while_polling_propagates(self, make_client):
        client = make_client(FakeBrightData(fail={"progress": 503}))

        with pytest.raises(ProviderError):
            await client.run_to_completion(URLS)


def _raw_client(handler) -> BrightDataClient:
    transport = httpx.MockTransport(handler)
    return BrightDataClient(api_key=TEST_API_KEY, base_url=BASE_URL, http_client=httpx.AsyncClient(transport=transport))


class TestMalformedResponses:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("error", [httpx.ConnectError, httpx.ReadTimeout])
    async def test_transport_error_is_a_scrape_error(self, error):
        def fail(request):
            raise error("boom", request=request)

        client = _raw_client(fail)

        with pytest.raises(ProviderUnreachable) as exc_info:
            await client.submit(URLS)

        assert isinstance(exc_info.value, ScrapeError)
        assert exc_info.value.operation == "trigger"
        assert isinstance(exc_info.value.cause, error)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", [b'["unexpected"]', b"not json", b"42"])
    async def test_poll_non_object_body_is_provider_error(self, body):
        client = _raw_client(lambda request: httpx.Response(200, content=body))

        with pytest.raises(ProviderError) as exc_info:
            await client.poll("s_test1")

        assert exc_info.value.status_code == 200
        assert exc_info.value.operation == "progress"

    @pytest.mark.asyncio
    async def test_submit_non_object_body_is_provider_error(self):
        client = _raw_client(lambda request: httpx.Response(200, json=["s_abc"]))

        with pytest.raises(ProviderError):
            await client.submit(URLS)

    @pytest.mark.asyncio
    async def test_submit_without_snapshot_id_is_provider_error(self):
        client = _raw_client(lambda request: httpx.Response(200, json={"status": "ok"}))

        with pytest.raises(ProviderError):
            await client.submit(URLS)

    @pytest.mark.asyncio
    async def test_snapshot_invalid_json_is_provider_error(self):
        client = _raw_client(lambda request: httpx.Response(200, content=b"<html>oops</html>"))

        with pytest.raises(ProviderError) as exc_info:
            await client.fetch_result("s_test1")

        assert exc_info.value.operation == "snapshot"


class TestCheckStatus:

    @pytest.mark.asyncio
    async def test_status_masks_api_key(self, make_client):
        client = make_client(FakeBrightData())

        status = await client.check_status()

        assert status["connected"] is True
        assert status["api_key"] == "***" + TEST_API_KEY[-6:]
        assert TEST_API_KEY not in status["api_key"]

    @pytest.mark.asyncio
    async def test_unauthorized_reports_disconnected(self, clock):
        transport = httpx.MockTransport(lambda request: httpx.Response(401, text="unauthorized"))
        client = BrightDataClient(
            api_key=TEST_API_KEY, base_url=BASE_URL, http_client=httpx.AsyncClient(transport=transport)
        )

        status = await client.check_status()

        assert status["connected"] is False

    @pytest.mark.asyncio
    async def test_connection_error_never_raises(self):
        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        client = BrightDataClient(
            api_key=TEST_API_KEY, base_url=BASE_URL, http_client=httpx.AsyncClient(transport=httpx.MockTransport(refuse))
        )

        status = await client.check_status()

        assert status["connected"] is False
        assert "connection refused" in status["error"]
