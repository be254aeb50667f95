import asyncio

import aiohttp
import pytest
from aioresponses import aioresponses
from yarl import URL

from sgai.adapters.aiohttp_transport_adapter import AioHttpTransportAdapter
from sgai.core.config import ClientConfig
from sgai.core.exceptions import HttpStatusError, NetworkError, RequestTimeoutError

"""
Tests for AioHttpTransportAdapter behavior.

Each test checks how one upstream outcome maps onto the transport contract:
- 2xx JSON bodies come back as a TransportResult with a non-negative elapsed time.
- Non-2xx responses raise HttpStatusError whose message combines the status
  category with the `detail` field of a JSON error body, when present.
- Timeouts raise RequestTimeoutError, distinct from other network failures.
- Connection failures and undecodable bodies raise NetworkError carrying the
  native library message.
"""

BASE = "https://api.scrapegraphai.com/v1"
API_KEY = "test-sgai-key-abc123"


@pytest.fixture
def config():
    return ClientConfig(base_url=BASE, timeout_s=5.0)


class RecordingTracer:
    def __init__(self):
        self.events = []

    def trace(self, label, data=None):
        self.events.append((label, data))


@pytest.mark.asyncio
async def test_post_sends_credential_and_json_body(config):
    # Happy path: the body is sent as JSON with the credential header and the
    # decoded payload is returned.
    url = f"{BASE}/smartscraper"
    with aioresponses() as m:
        m.post(url, payload={"status": "completed"}, status=200)

        async with AioHttpTransportAdapter(config) as transport:
            result = await transport.send("POST", "/smartscraper", API_KEY, {"user_prompt": "x"})

        assert result.data == {"status": "completed"}
        assert result.elapsed_ms >= 0
        call = m.requests[("POST", URL(url))][0]
        assert call.kwargs["headers"]["SGAI-APIKEY"] == API_KEY
        assert call.kwargs["headers"]["Content-Type"] == "application/json"
        assert call.kwargs["json"] == {"user_prompt": "x"}


@pytest.mark.asyncio
async def test_get_carries_no_body_and_no_content_type(config):
    url = f"{BASE}/credits"
    with aioresponses() as m:
        m.get(url, payload={"remaining_credits": 1, "total_credits_used": 2})

        async with AioHttpTransportAdapter(config) as transport:
            await transport.send("GET", "/credits", API_KEY)

        call = m.requests[("GET", URL(url))][0]
        assert call.kwargs["headers"] == {"SGAI-APIKEY": API_KEY}
        assert call.kwargs["json"] is None


@pytest.mark.asyncio
async def test_send_without_context_uses_transient_session(config):
    # Outside `async with` each call opens and closes its own session
    url = f"{BASE}/credits"
    with aioresponses() as m:
        m.get(url, payload={"ok": True})

        transport = AioHttpTransportAdapter(config)
        result = await transport.send("GET", "/credits", API_KEY)

        assert result.data == {"ok": True}


@pytest.mark.asyncio
async def test_base_url_override_and_query(config):
    url = "https://api.scrapegraphai.com/history/crawl?page=2&page_size=5"
    with aioresponses() as m:
        m.get(url, payload={"requests": []})

        async with AioHttpTransportAdapter(config) as transport:
            result = await transport.send(
                "GET",
                "/history/crawl",
                API_KEY,
                base_url="https://api.scrapegraphai.com",
                query={"page": "2", "page_size": "5"},
            )

        assert result.data == {"requests": []}


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "status, category",
    [
        (401, "Invalid or missing API key"),
        (402, "Insufficient credits"),
        (422, "Invalid parameters"),
        (429, "Rate limited"),
        (500, "Server error"),
        (503, "HTTP 503"),
    ],
)
async def test_http_errors_map_to_categories(config, status, category):
    url = f"{BASE}/scrape"
    with aioresponses() as m:
        m.post(url, status=status, payload={})

        async with AioHttpTransportAdapter(config) as transport:
            with pytest.raises(HttpStatusError) as excinfo:
                await transport.send("POST", "/scrape", API_KEY, {})

    assert category in str(excinfo.value)
    assert excinfo.value.status_code == status


@pytest.mark.asyncio
async def test_http_error_detail_is_appended(config):
    url = f"{BASE}/scrape"
    with aioresponses() as m:
        m.post(url, status=402, payload={"detail": "quota exceeded"})

        async with AioHttpTransportAdapter(config) as transport:
            with pytest.raises(HttpStatusError) as excinfo:
                await transport.send("POST", "/scrape", API_KEY, {})

    message = str(excinfo.value)
    assert message.startswith("Insufficient credits")
    assert message.endswith(": quota exceeded")


@pytest.mark.asyncio
async def test_structured_detail_is_json_encoded(config):
    url = f"{BASE}/scrape"
    detail = [{"loc": ["body", "website_url"], "msg": "field required"}]
    with aioresponses() as m:
        m.post(url, status=422, payload={"detail": detail})

        async with AioHttpTransportAdapter(config) as transport:
            with pytest.raises(HttpStatusError) as excinfo:
                await transport.send("POST", "/scrape", API_KEY, {})

    assert "field required" in str(excinfo.value)


@pytest.mark.asyncio
async def test_non_json_error_body_keeps_category_only(config):
    url = f"{BASE}/scrape"
    with aioresponses() as m:
        m.post(url, status=500, body="<html>Server Error</html>", headers={"Content-Type": "text/html"})

        async with AioHttpTransportAdapter(config) as transport:
            with pytest.raises(HttpStatusError) as excinfo:
                await transport.send("POST", "/scrape", API_KEY, {})

    assert str(excinfo.value) == "Server error — try again later"


@pytest.mark.asyncio
async def test_timeout_maps_to_request_timeout(config):
    url = f"{BASE}/slow"
    with aioresponses() as m:
        m.get(url, exception=asyncio.TimeoutError())

        async with AioHttpTransportAdapter(config) as transport:
            with pytest.raises(RequestTimeoutError) as excinfo:
                await transport.send("GET", "/slow", API_KEY)

    assert str(excinfo.value) == "Request timed out"


@pytest.mark.asyncio
async def test_connection_error_keeps_native_message(config):
    url = f"{BASE}/down"
    with aioresponses() as m:
        m.get(url, exception=aiohttp.ClientConnectionError("fetch failed"))

        async with AioHttpTransportAdapter(config) as transport:
            with pytest.raises(NetworkError) as excinfo:
                await transport.send("GET", "/down", API_KEY)

    assert str(excinfo.value) == "fetch failed"


@pytest.mark.asyncio
async def test_malformed_success_body_is_a_network_error(config):
    url = f"{BASE}/garbled"
    with aioresponses() as m:
        m.get(url, status=200, body="not-json{", headers={"Content-Type": "application/json"})

        async with AioHttpTransportAdapter(config) as transport:
            with pytest.raises(NetworkError):
                await transport.send("GET", "/garbled", API_KEY)


@pytest.mark.asyncio
async def test_trace_events_only_when_debug_enabled():
    tracer = RecordingTracer()
    url = f"{BASE}/credits"
    with aioresponses() as m:
        m.get(url, payload={"remaining_credits": 1}, repeat=True)

        quiet = AioHttpTransportAdapter(ClientConfig(base_url=BASE, debug=False), tracer)
        await quiet.send("GET", "/credits", API_KEY)
        assert tracer.events == []

        loud = AioHttpTransportAdapter(ClientConfig(base_url=BASE, debug=True), tracer)
        await loud.send("GET", "/credits", API_KEY)

    labels = [label for label, _ in tracer.events]
    assert labels[0] == f"→ GET {url}"
    assert labels[1].startswith("← 200 (")
    assert tracer.events[1][1] == {"remaining_credits": 1}
    # The credential never reaches the trace channel
    assert all(API_KEY not in repr(event) for event in tracer.events)


@pytest.mark.asyncio
async def test_failing_tracer_does_not_change_outcome():
    class BrokenTracer:
        def trace(self, label, data=None):
            raise RuntimeError("stderr closed")

    url = f"{BASE}/credits"
    with aioresponses() as m:
        m.get(url, payload={"remaining_credits": 1})

        transport = AioHttpTransportAdapter(ClientConfig(base_url=BASE, debug=True), BrokenTracer())
        result = await transport.send("GET", "/credits", API_KEY)

    assert result.data == {"remaining_credits": 1}
