"""Request parameter models for the extraction endpoints.

Bodies are sent with `exclude_none=True, by_alias=True`, so only the fields a
caller actually set reach the server.
"""

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

HISTORY_SERVICES = (
    "markdownify",
    "smartscraper",
    "searchscraper",
    "scrape",
    "crawl",
    "agentic-scraper",
    "sitemap",
)

HistoryService = Literal[
    "markdownify",
    "smartscraper",
    "searchscraper",
    "scrape",
    "crawl",
    "agentic-scraper",
    "sitemap",
]

TimeRange = Literal["past_hour", "past_24_hours", "past_week", "past_month", "past_year"]


class RequestParams(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    def to_body(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True, by_alias=True)


class SmartScraperParams(RequestParams):
    website_url: Optional[str] = None
    website_html: Optional[str] = None
    website_markdown: Optional[str] = None
    user_prompt: str = Field(min_length=1)
    output_schema: Optional[Dict[str, Any]] = None
    number_of_scrolls: Optional[int] = Field(None, ge=0)
    total_pages: Optional[int] = Field(None, ge=1)
    stealth: Optional[bool] = None
    cookies: Optional[Dict[str, str]] = None
    headers: Optional[Dict[str, str]] = None
    plain_text: Optional[bool] = None
    webhook_url: Optional[str] = None
    mock: Optional[bool] = None
    steps: Optional[List[str]] = None
    wait_ms: Optional[int] = Field(None, ge=0)
    country_code: Optional[str] = None

    @model_validator(mode="after")
    def check_single_source(self) -> "SmartScraperParams":
        sources = [s for s in (self.website_url, self.website_html, self.website_markdown) if s]
        if len(sources) != 1:
            raise ValueError(
                "exactly one of website_url, website_html or website_markdown is required"
            )
        return self


class SearchScraperParams(RequestParams):
    user_prompt: str = Field(min_length=1)
    num_results: Optional[int] = Field(None, ge=3, le=20)
    extraction_mode: Optional[bool] = None
    output_schema: Optional[Dict[str, Any]] = None
    stealth: Optional[bool] = None
    headers: Optional[Dict[str, str]] = None
    webhook_url: Optional[str] = None
    mock: Optional[bool] = None
    time_range: Optional[TimeRange] = None
    location_geo_code: Optional[str] = None


class MarkdownifyParams(RequestParams):
    website_url: str
    stealth: Optional[bool] = None
    headers: Optional[Dict[str, str]] = None
    webhook_url: Optional[str] = None
    mock: Optional[bool] = None
    wait_ms: Optional[int] = Field(None, ge=0)
    country_code: Optional[str] = None


class CrawlParams(RequestParams):
    """Crawl request in extraction mode (default) or markdown mode.

    Extraction mode requires a `prompt`; markdown mode
    (`extraction_mode=False`) forbids `prompt` and `schema`.
    """

    url: str
    extraction_mode: Optional[bool] = None
    prompt: Optional[str] = None
    # `schema` would shadow a BaseModel attribute
    schema_: Optional[Dict[str, Any]] = Field(None, alias="schema")
    max_pages: Optional[int] = Field(None, ge=1)
    depth: Optional[int] = Field(None, ge=0)
    rules: Optional[Dict[str, Any]] = None
    sitemap: Optional[bool] = None
    stealth: Optional[bool] = None
    webhook_url: Optional[str] = None
    cache_website: Optional[bool] = None
    breadth: Optional[int] = Field(None, ge=1)
    same_domain_only: Optional[bool] = None
    batch_size: Optional[int] = Field(None, ge=1)
    wait_ms: Optional[int] = Field(None, ge=0)
    headers: Optional[Dict[str, str]] = None
    number_of_scrolls: Optional[int] = Field(None, ge=0)
    website_html: Optional[str] = None

    @model_validator(mode="after")
    def check_mode(self) -> "CrawlParams":
        if self.extraction_mode is False:
            if self.prompt is not None or self.schema_ is not None:
                raise ValueError("prompt and schema are not allowed when extraction_mode is false")
        elif not self.prompt:
            raise ValueError("prompt is required in extraction mode")
        return self


class ScrapeParams(RequestParams):
    website_url: str
    stealth: Optional[bool] = None
    branding: Optional[bool] = None
    country_code: Optional[str] = None
    wait_ms: Optional[int] = Field(None, ge=0)


class AgenticScraperParams(RequestParams):
    url: str
    steps: List[str] = Field(min_length=1)
    user_prompt: Optional[str] = None
    output_schema: Optional[Dict[str, Any]] = None
    ai_extraction: Optional[bool] = None
    use_session: Optional[bool] = None

    @model_validator(mode="after")
    def check_extraction_prompt(self) -> "AgenticScraperParams":
        if self.ai_extraction and not self.user_prompt:
            raise ValueError("user_prompt is required when ai_extraction is enabled")
        return self


class GenerateSchemaParams(RequestParams):
    user_prompt: str = Field(min_length=1)
    existing_schema: Optional[Dict[str, Any]] = None


class SitemapParams(RequestParams):
    website_url: str
    headers: Optional[Dict[str, str]] = None
    mock: Optional[bool] = None
    stealth: Optional[bool] = None


class HistoryParams(RequestParams):
    service: HistoryService
    page: int = Field(1, ge=1)
    page_size: int = Field(10, ge=1, le=100)

    def to_query(self) -> Dict[str, str]:
        return {"page": str(self.page), "page_size": str(self.page_size)}


class FeedbackParams(RequestParams):
    request_id: str = Field(min_length=1)
    rating: int = Field(ge=1, le=5, strict=True)
    feedback_text: Optional[str] = None
