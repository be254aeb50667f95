# sgai/core/interfaces/transport.py
from abc import ABC, abstractmethod
from typing import Any, Dict, Literal, Optional

from sgai.core.models.job import JobPayload, TransportResult

HttpMethod = Literal["GET", "POST"]

CREDENTIAL_HEADER = "SGAI-APIKEY"


class TransportPort(ABC):
    @abstractmethod
    async def __aenter__(self) -> "TransportPort":
        """Async context manager entry method"""
        pass

    @abstractmethod
    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit method"""
        pass

    @abstractmethod
    async def send(
        self,
        method: HttpMethod,
        path: str,
        api_key: str,
        body: Optional[Dict[str, Any]] = None,
        *,
        base_url: Optional[str] = None,
        query: Optional[Dict[str, str]] = None,
    ) -> TransportResult[JobPayload]:
        """Perform one request against `base_url + path` and return its JSON payload.

        The credential travels in the `SGAI-APIKEY` header on every call; a JSON
        content type is declared only when a body is present. `base_url`
        defaults to the configured API base.

        Raises:
            RequestTimeoutError: the call exceeded the configured timeout
            HttpStatusError: the API answered with a non-2xx status
            NetworkError: connection failure or undecodable body
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Release any open HTTP session"""
        pass
