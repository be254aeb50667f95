import json
from typing import Any, Optional


HTTP_ERROR_CATEGORIES = {
    401: "Invalid or missing API key",
    402: "Insufficient credits — purchase more at https://dashboard.scrapegraphai.com",
    422: "Invalid parameters — check your request",
    429: "Rate limited — slow down and retry",
    500: "Server error — try again later",
}


def describe_http_status(status_code: int) -> str:
    """Human-readable category for a non-2xx status code."""
    return HTTP_ERROR_CATEGORIES.get(status_code, f"HTTP {status_code}")


class SgaiError(Exception):
    """Base exception for every failure raised by the client.

    Attributes:
        message: Human-readable error description, also returned by str()
    """
    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class HttpStatusError(SgaiError):
    """Raised when the API answers with a non-2xx status.

    Attributes:
        status_code: HTTP status returned by the API
        detail: `detail` field of the JSON error body, if any
    """
    def __init__(self, status_code: int, detail: Any = None):
        self.status_code = status_code
        self.detail = detail
        message = describe_http_status(status_code)
        if detail:
            text = detail if isinstance(detail, str) else json.dumps(detail)
            message = f"{message}: {text}"
        super().__init__(message)


class RequestTimeoutError(SgaiError):
    """Raised when a single HTTP call exceeds the configured timeout."""
    def __init__(self, url: Optional[str] = None, timeout_s: Optional[float] = None):
        self.url = url
        self.timeout_s = timeout_s
        super().__init__("Request timed out")


class NetworkError(SgaiError):
    """Raised for connection failures and undecodable response bodies.

    The message is the one produced by the underlying library.
    """


class JobExecutionError(SgaiError):
    """Base exception for failures of a submitted job.

    Attributes:
        job_id: Identifier of the remote job, when known
    """
    def __init__(self, message: str, job_id: Optional[str] = None):
        self.job_id = job_id
        super().__init__(message)


class JobFailedError(JobExecutionError):
    """Raised when the server reports the job as failed."""


class DeadlineExceededError(SgaiError):
    """Raised by a poll policy when no further attempt fits before its deadline.

    The poller turns it into `PollingTimeoutError` with the job id attached.
    """
    def __init__(self, timeout_s: float):
        self.timeout_s = timeout_s
        super().__init__(f"Deadline of {timeout_s}s exceeded")


class PollingTimeoutError(JobExecutionError):
    """Raised when a job never reaches a terminal state within the polling budget.

    Attributes:
        timeout_s: Configured polling budget
    """
    def __init__(self, job_id: str, timeout_s: float):
        self.timeout_s = timeout_s
        super().__init__("Polling timed out", job_id=job_id)


class MissingIdentifierError(JobExecutionError):
    """Raised when a non-terminal submit response lacks the id needed to poll.

    Attributes:
        field: Name of the expected identifier field
    """
    def __init__(self, field: str):
        self.field = field
        super().__init__(f"Missing {field} in response")


class MissingCredentialError(SgaiError):
    """Raised when neither the caller nor the environment supplies an API key."""
    def __init__(self):
        super().__init__("Missing API key — pass api_key or set SGAI_API_KEY")
