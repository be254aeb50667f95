"""Response shapes returned by the extraction endpoints.

Unknown keys are kept (`extra="allow"`) and almost everything is optional:
the server adds fields over time and job payloads differ between flat and
hoisted results. `model_dump(exclude_unset=True)` gives back what was received.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict


class ApiResponse(BaseModel):
    model_config = ConfigDict(extra="allow")


class SmartScraperResponse(ApiResponse):
    request_id: Optional[str] = None
    status: Optional[str] = None
    website_url: Optional[str] = None
    user_prompt: Optional[str] = None
    result: Optional[Any] = None
    error: Optional[str] = None


class SearchScraperResponse(ApiResponse):
    request_id: Optional[str] = None
    status: Optional[str] = None
    user_prompt: Optional[str] = None
    num_results: Optional[int] = None
    result: Optional[Any] = None
    markdown_content: Optional[str] = None
    reference_urls: List[str] = []
    error: Optional[str] = None


class MarkdownifyResponse(ApiResponse):
    request_id: Optional[str] = None
    status: Optional[str] = None
    website_url: Optional[str] = None
    result: Optional[str] = None
    error: Optional[str] = None


class CrawlPage(ApiResponse):
    url: Optional[str] = None
    markdown: Optional[str] = None


class CrawlResponse(ApiResponse):
    task_id: Optional[str] = None
    status: Optional[str] = None
    result: Optional[Any] = None
    llm_result: Optional[Dict[str, Any]] = None
    crawled_urls: Optional[List[str]] = None
    pages: Optional[List[CrawlPage]] = None
    credits_used: Optional[float] = None
    pages_processed: Optional[int] = None
    elapsed_time: Optional[float] = None
    error: Optional[str] = None


class ScrapeResponse(ApiResponse):
    scrape_request_id: Optional[str] = None
    status: Optional[str] = None
    html: Optional[str] = None
    branding: Optional[Dict[str, Any]] = None
    metadata: Optional[Dict[str, Any]] = None
    error: Optional[str] = None


class AgenticScraperResponse(ApiResponse):
    request_id: Optional[str] = None
    status: Optional[str] = None
    result: Optional[Any] = None
    error: Optional[str] = None


class GenerateSchemaResponse(ApiResponse):
    request_id: Optional[str] = None
    status: Optional[str] = None
    user_prompt: Optional[str] = None
    refined_prompt: Optional[str] = None
    generated_schema: Optional[Dict[str, Any]] = None
    error: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class SitemapResponse(ApiResponse):
    request_id: Optional[str] = None
    urls: List[str] = []
    status: Optional[str] = None
    website_url: Optional[str] = None
    error: Optional[str] = None


class CreditsResponse(ApiResponse):
    remaining_credits: Optional[float] = None
    total_credits_used: Optional[float] = None


class HealthResponse(ApiResponse):
    status: Optional[str] = None


class HistoryEntry(ApiResponse):
    request_id: Optional[str] = None
    status: Optional[str] = None


class HistoryResponse(ApiResponse):
    requests: List[HistoryEntry] = []
    total_count: int = 0
    page: int = 1
    page_size: int = 10


class FeedbackResponse(ApiResponse):
    feedback_id: Optional[str] = None
    request_id: Optional[str] = None
    message: Optional[str] = None
    feedback_timestamp: Optional[str] = None


class RequestStatusResponse(ApiResponse):
    """Generic job snapshot returned by `GET /{service}/{request_id}`."""

    request_id: Optional[str] = None
    status: Optional[str] = None
    result: Optional[Any] = None
    error: Optional[str] = None
