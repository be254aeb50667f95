from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Dict, Generic, TypeVar

from sgai.core.exceptions import NetworkError

# Raw job payload as decoded from the API: always carries a `status` key,
# optionally `result`, `error` and an identifier field.
JobPayload = Dict[str, Any]

T = TypeVar("T")


class Completion(StrEnum):
    success = "success"
    failure = "failure"
    pending = "pending"


@dataclass(frozen=True)
class TransportResult(Generic[T]):
    """Payload of one HTTP round trip (or of a whole polled job) and its wall time."""

    data: T
    elapsed_ms: int


def as_job_payload(data: Any) -> JobPayload:
    """Return `data` if it is a JSON object, else fail: job payloads must be mappings."""
    if not isinstance(data, dict):
        raise NetworkError(
            f"Unexpected response shape: expected a JSON object, got {type(data).__name__}"
        )
    return data
