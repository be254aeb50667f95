"""Unit tests for request parameter validation and body serialization."""

import pytest
from pydantic import ValidationError

from sgai.core.models.params import (
    AgenticScraperParams,
    CrawlParams,
    FeedbackParams,
    HISTORY_SERVICES,
    HistoryParams,
    SearchScraperParams,
    SmartScraperParams,
)
from sgai.core.models.responses import CrawlResponse, SearchScraperResponse


class TestSmartScraperParams:

    def test_body_only_contains_set_fields(self):
        params = SmartScraperParams(user_prompt="Extract prices", website_url="https://example.com")

        assert params.to_body() == {"user_prompt": "Extract prices", "website_url": "https://example.com"}

    def test_mock_flag_is_passed_through(self):
        params = SmartScraperParams(user_prompt="p", website_html="<html/>", mock=True)

        assert params.to_body()["mock"] is True

    @pytest.mark.parametrize(
        "sources",
        [{}, {"website_url": "https://a", "website_html": "<html/>"}],
    )
    def test_exactly_one_source_required(self, sources):
        with pytest.raises(ValidationError):
            SmartScraperParams(user_prompt="p", **sources)

    def test_unknown_fields_are_rejected(self):
        with pytest.raises(ValidationError):
            SmartScraperParams(user_prompt="p", website_url="https://a", colour="blue")


class TestCrawlParams:

    def test_extraction_mode_requires_prompt(self):
        with pytest.raises(ValidationError):
            CrawlParams(url="https://example.com")

    def test_schema_is_serialized_under_its_wire_name(self):
        params = CrawlParams(url="https://example.com", prompt="p", schema={"type": "object"})

        assert params.to_body() == {
            "url": "https://example.com",
            "prompt": "p",
            "schema": {"type": "object"},
        }

    def test_markdown_mode_forbids_prompt(self):
        with pytest.raises(ValidationError):
            CrawlParams(url="https://example.com", extraction_mode=False, prompt="p")

    def test_markdown_mode_body(self):
        params = CrawlParams(url="https://example.com", extraction_mode=False, max_pages=3)

        assert params.to_body() == {"url": "https://example.com", "extraction_mode": False, "max_pages": 3}


def test_search_scraper_result_count_bounds():
    SearchScraperParams(user_prompt="q", num_results=3)
    with pytest.raises(ValidationError):
        SearchScraperParams(user_prompt="q", num_results=50)


def test_agentic_ai_extraction_needs_prompt():
    with pytest.raises(ValidationError):
        AgenticScraperParams(url="https://example.com", steps=["Click"], ai_extraction=True)


class TestHistoryParams:

    def test_defaults(self):
        params = HistoryParams(service="smartscraper")

        assert params.to_query() == {"page": "1", "page_size": "10"}

    def test_unknown_service(self):
        with pytest.raises(ValidationError):
            HistoryParams(service="teleport")

    def test_services_constant_matches_validation(self):
        for service in HISTORY_SERVICES:
            HistoryParams(service=service)


@pytest.mark.parametrize("rating", [0, 6, 3.5, "5"])
def test_feedback_rating_must_be_int_in_range(rating):
    with pytest.raises(ValidationError):
        FeedbackParams(request_id="123e4567-e89b-12d3-a456-426614174000", rating=rating)


def test_responses_keep_unknown_keys():
    body = {"status": "done", "pages": [{"url": "https://example.com", "content": "data"}]}

    assert CrawlResponse.model_validate(body).model_dump(exclude_unset=True) == body


def test_response_round_trip_with_nulls():
    body = {
        "request_id": "abc-123",
        "status": "completed",
        "result": {"answer": "Joe's Pizza"},
        "markdown_content": None,
        "reference_urls": ["https://example.com"],
        "error": None,
    }

    assert SearchScraperResponse.model_validate(body).model_dump(exclude_unset=True) == body
