"""Public entry points for the ScrapeGraph extraction API.

Every operation returns an `ApiResult` envelope and never raises. Use
`ScrapeGraphClient` as an async context manager to share one HTTP session
between calls, or the module-level coroutines for one-off requests:

    async with ScrapeGraphClient(api_key="sgai-...") as client:
        res = await client.crawl({"url": "https://example.com", "prompt": "Extract"})
        if res.is_success:
            print(res.data.crawled_urls, res.elapsed_ms)
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Union

from sgai.adapters.aiohttp_transport_adapter import AioHttpTransportAdapter
from sgai.adapters.poll_policy_tenacity import TenacityPollPolicyAdapter
from sgai.adapters.rich_trace_adapter import RichTraceAdapter
from sgai.core.config import ClientConfig
from sgai.core.exceptions import MissingCredentialError
from sgai.core.interfaces.observers import PollObserver
from sgai.core.interfaces.tracing import TracePort
from sgai.core.interfaces.transport import TransportPort
from sgai.core.managers.endpoint_caller import Endpoint, EndpointCaller, ParamsInput
from sgai.core.managers.envelope_builder import fail
from sgai.core.managers.job_orchestrator import JobOrchestrator
from sgai.core.managers.poller import Poller
from sgai.core.managers.status_classifier import DEFAULT_CLASSIFIER, StatusClassifier
from sgai.core.models.envelope import ApiResult
from sgai.core.models.params import (
    AgenticScraperParams,
    CrawlParams,
    FeedbackParams,
    GenerateSchemaParams,
    HistoryParams,
    MarkdownifyParams,
    ScrapeParams,
    SearchScraperParams,
    SitemapParams,
    SmartScraperParams,
)
from sgai.core.models.responses import (
    AgenticScraperResponse,
    CrawlResponse,
    CreditsResponse,
    FeedbackResponse,
    GenerateSchemaResponse,
    HealthResponse,
    HistoryResponse,
    MarkdownifyResponse,
    RequestStatusResponse,
    ScrapeResponse,
    SearchScraperResponse,
    SitemapResponse,
    SmartScraperResponse,
)
from sgai.core.settings import app_settings

SMART_SCRAPER = Endpoint("smart_scraper", "/smartscraper", SmartScraperResponse, params_model=SmartScraperParams)
SEARCH_SCRAPER = Endpoint("search_scraper", "/searchscraper", SearchScraperResponse, params_model=SearchScraperParams)
MARKDOWNIFY = Endpoint("markdownify", "/markdownify", MarkdownifyResponse, params_model=MarkdownifyParams)
SCRAPE = Endpoint("scrape", "/scrape", ScrapeResponse, params_model=ScrapeParams)
CRAWL = Endpoint("crawl", "/crawl", CrawlResponse, params_model=CrawlParams, id_field="task_id")
AGENTIC_SCRAPER = Endpoint(
    "agentic_scraper", "/agentic-scrapper", AgenticScraperResponse, params_model=AgenticScraperParams
)
GENERATE_SCHEMA = Endpoint(
    "generate_schema", "/generate_schema", GenerateSchemaResponse, params_model=GenerateSchemaParams
)
SITEMAP = Endpoint("sitemap", "/sitemap", SitemapResponse, params_model=SitemapParams)
FEEDBACK = Endpoint("send_feedback", "/feedback", FeedbackResponse, params_model=FeedbackParams)
CREDITS = Endpoint("get_credits", "/credits", CreditsResponse, method="GET")
HEALTH = Endpoint("check_health", "/healthz", HealthResponse, method="GET", root="health")
HISTORY = Endpoint("history", "/history", HistoryResponse, method="GET")

# Services whose individual requests can be looked up by id
STATUS_SERVICES = {
    "smartscraper": "/smartscraper",
    "searchscraper": "/searchscraper",
    "markdownify": "/markdownify",
    "crawl": "/crawl",
    "generate_schema": "/generate_schema",
    "agentic-scrapper": "/agentic-scrapper",
}


class ScrapeGraphClient:
    """Facade wiring transport, poller, orchestrator and endpoint caller.

    Args:
        api_key: Credential sent with every request; falls back to SGAI_API_KEY
        config: Injected settings; built from the environment when omitted
        transport: Replacement transport (e.g. `InMemoryTransportAdapter`)
        classifier: Status vocabulary used for completion detection
        tracer: Debug channel; defaults to stderr when `config.debug` is set
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        config: Optional[ClientConfig] = None,
        transport: Optional[TransportPort] = None,
        classifier: Optional[StatusClassifier] = None,
        tracer: Optional[TracePort] = None,
    ) -> None:
        self.config = config or ClientConfig.from_app_settings(app_settings)
        if api_key is None and app_settings.SGAI_API_KEY is not None:
            api_key = app_settings.SGAI_API_KEY.get_secret_value()
        self._api_key = api_key
        if transport is None:
            if tracer is None and self.config.debug:
                tracer = RichTraceAdapter()
            transport = AioHttpTransportAdapter(self.config, tracer)
        self._transport = transport
        classifier = classifier or DEFAULT_CLASSIFIER
        poller = Poller(transport, self.config, TenacityPollPolicyAdapter(), classifier)
        orchestrator = JobOrchestrator(transport, poller, classifier)
        self._caller = EndpointCaller(transport, orchestrator, self.config)

    async def __aenter__(self) -> "ScrapeGraphClient":
        await self._transport.__aenter__()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self._transport.__aexit__(exc_type, exc_val, exc_tb)
        return False

    async def close(self) -> None:
        await self._transport.close()

    async def _call(
        self,
        endpoint: Endpoint,
        params: ParamsInput = None,
        on_poll: Optional[PollObserver] = None,
        path_suffix: str = "",
        query: Optional[Dict[str, str]] = None,
    ) -> ApiResult[Any]:
        if not self._api_key:
            return fail(MissingCredentialError())
        return await self._caller.call(
            endpoint, self._api_key, params, on_poll=on_poll, path_suffix=path_suffix, query=query
        )

    async def smart_scraper(
        self, params: Union[SmartScraperParams, Mapping[str, Any]]
    ) -> ApiResult[SmartScraperResponse]:
        return await self._call(SMART_SCRAPER, params)

    async def search_scraper(
        self, params: Union[SearchScraperParams, Mapping[str, Any]]
    ) -> ApiResult[SearchScraperResponse]:
        return await self._call(SEARCH_SCRAPER, params)

    async def markdownify(
        self, params: Union[MarkdownifyParams, Mapping[str, Any]]
    ) -> ApiResult[MarkdownifyResponse]:
        return await self._call(MARKDOWNIFY, params)

    async def scrape(self, params: Union[ScrapeParams, Mapping[str, Any]]) -> ApiResult[ScrapeResponse]:
        return await self._call(SCRAPE, params)

    async def crawl(
        self,
        params: Union[CrawlParams, Mapping[str, Any]],
        on_poll: Optional[PollObserver] = None,
    ) -> ApiResult[CrawlResponse]:
        """Submit a crawl and wait for it; `on_poll` sees every polled status."""
        return await self._call(CRAWL, params, on_poll=on_poll)

    async def agentic_scraper(
        self, params: Union[AgenticScraperParams, Mapping[str, Any]]
    ) -> ApiResult[AgenticScraperResponse]:
        return await self._call(AGENTIC_SCRAPER, params)

    async def generate_schema(
        self, params: Union[GenerateSchemaParams, Mapping[str, Any]]
    ) -> ApiResult[GenerateSchemaResponse]:
        return await self._call(GENERATE_SCHEMA, params)

    async def sitemap(self, params: Union[SitemapParams, Mapping[str, Any]]) -> ApiResult[SitemapResponse]:
        return await self._call(SITEMAP, params)

    async def send_feedback(
        self, params: Union[FeedbackParams, Mapping[str, Any]]
    ) -> ApiResult[FeedbackResponse]:
        return await self._call(FEEDBACK, params)

    async def get_credits(self) -> ApiResult[CreditsResponse]:
        return await self._call(CREDITS)

    async def check_health(self) -> ApiResult[HealthResponse]:
        return await self._call(HEALTH)

    async def history(self, params: Union[HistoryParams, Mapping[str, Any]]) -> ApiResult[HistoryResponse]:
        try:
            if not isinstance(params, HistoryParams):
                params = HistoryParams.model_validate(params)
        except ValueError as exc:
            return fail(exc)
        return await self._call(HISTORY, path_suffix=f"/{params.service}", query=params.to_query())

    async def get_request_status(self, service: str, request_id: str) -> ApiResult[RequestStatusResponse]:
        """Fetch one snapshot of a previously submitted request, without polling."""
        path = STATUS_SERVICES.get(service)
        if path is None:
            return fail(f"Unknown service '{service}' — expected one of {', '.join(STATUS_SERVICES)}")
        if not request_id:
            return fail("request_id is required")
        endpoint = Endpoint(f"{service}_status", path, RequestStatusResponse, method="GET")
        return await self._call(endpoint, path_suffix=f"/{request_id}")


# Module-level coroutines, one transient client per call


async def smart_scraper(
    api_key: Optional[str], params: Union[SmartScraperParams, Mapping[str, Any]], *, config: Optional[ClientConfig] = None
) -> ApiResult[SmartScraperResponse]:
    async with ScrapeGraphClient(api_key, config) as client:
        return await client.smart_scraper(params)


async def search_scraper(
    api_key: Optional[str], params: Union[SearchScraperParams, Mapping[str, Any]], *, config: Optional[ClientConfig] = None
) -> ApiResult[SearchScraperResponse]:
    async with ScrapeGraphClient(api_key, config) as client:
        return await client.search_scraper(params)


async def markdownify(
    api_key: Optional[str], params: Union[MarkdownifyParams, Mapping[str, Any]], *, config: Optional[ClientConfig] = None
) -> ApiResult[MarkdownifyResponse]:
    async with ScrapeGraphClient(api_key, config) as client:
        return await client.markdownify(params)


async def scrape(
    api_key: Optional[str], params: Union[ScrapeParams, Mapping[str, Any]], *, config: Optional[ClientConfig] = None
) -> ApiResult[ScrapeResponse]:
    async with ScrapeGraphClient(api_key, config) as client:
        return await client.scrape(params)


async def crawl(
    api_key: Optional[str],
    params: Union[CrawlParams, Mapping[str, Any]],
    on_poll: Optional[PollObserver] = None,
    *,
    config: Optional[ClientConfig] = None,
) -> ApiResult[CrawlResponse]:
    async with ScrapeGraphClient(api_key, config) as client:
        return await client.crawl(params, on_poll)


async def agentic_scraper(
    api_key: Optional[str], params: Union[AgenticScraperParams, Mapping[str, Any]], *, config: Optional[ClientConfig] = None
) -> ApiResult[AgenticScraperResponse]:
    async with ScrapeGraphClient(api_key, config) as client:
        return await client.agentic_scraper(params)


async def generate_schema(
    api_key: Optional[str], params: Union[GenerateSchemaParams, Mapping[str, Any]], *, config: Optional[ClientConfig] = None
) -> ApiResult[GenerateSchemaResponse]:
    async with ScrapeGraphClient(api_key, config) as client:
        return await client.generate_schema(params)


async def sitemap(
    api_key: Optional[str], params: Union[SitemapParams, Mapping[str, Any]], *, config: Optional[ClientConfig] = None
) -> ApiResult[SitemapResponse]:
    async with ScrapeGraphClient(api_key, config) as client:
        return await client.sitemap(params)


async def send_feedback(
    api_key: Optional[str], params: Union[FeedbackParams, Mapping[str, Any]], *, config: Optional[ClientConfig] = None
) -> ApiResult[FeedbackResponse]:
    async with ScrapeGraphClient(api_key, config) as client:
        return await client.send_feedback(params)


async def get_credits(api_key: Optional[str], *, config: Optional[ClientConfig] = None) -> ApiResult[CreditsResponse]:
    async with ScrapeGraphClient(api_key, config) as client:
        return await client.get_credits()


async def check_health(api_key: Optional[str], *, config: Optional[ClientConfig] = None) -> ApiResult[HealthResponse]:
    async with ScrapeGraphClient(api_key, config) as client:
        return await client.check_health()


async def history(
    api_key: Optional[str], params: Union[HistoryParams, Mapping[str, Any]], *, config: Optional[ClientConfig] = None
) -> ApiResult[HistoryResponse]:
    async with ScrapeGraphClient(api_key, config) as client:
        return await client.history(params)


async def get_request_status(
    api_key: Optional[str], service: str, request_id: str, *, config: Optional[ClientConfig] = None
) -> ApiResult[RequestStatusResponse]:
    async with ScrapeGraphClient(api_key, config) as client:
        return await client.get_request_status(service, request_id)
