# sgai/adapters/aiohttp_transport_adapter.py
import asyncio
import time
from typing import Any, Dict, Optional

import aiohttp

from sgai.core.config import ClientConfig
from sgai.core.exceptions import HttpStatusError, NetworkError, RequestTimeoutError
from sgai.core.interfaces.tracing import TracePort
from sgai.core.interfaces.transport import CREDENTIAL_HEADER, HttpMethod, TransportPort
from sgai.core.models.job import JobPayload, TransportResult
from sgai.core.settings import logger


class AioHttpTransportAdapter(TransportPort):
    """aiohttp-backed transport.

    Used as an async context manager it keeps one `ClientSession` for its
    lifetime; outside a context each call opens and closes its own session.
    """

    def __init__(self, config: ClientConfig, tracer: Optional[TracePort] = None):
        self._config = config
        self._tracer = tracer if config.debug else None
        self._session: Optional[aiohttp.ClientSession] = None
        # One ceiling for the whole request: connect, send and read
        self._client_timeout = aiohttp.ClientTimeout(total=config.timeout_s)

    async def __aenter__(self):
        """Async context manager entry"""
        self._session = aiohttp.ClientSession()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit"""
        await self.close()
        return False

    async def close(self) -> None:
        """Close the session"""
        if self._session and not self._session.closed:
            await self._session.close()
        self._session = None

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
        url = f"{base_url or self._config.base_url}{path}"
        headers = {CREDENTIAL_HEADER: api_key}
        if body is not None:
            headers["Content-Type"] = "application/json"

        self._trace(f"→ {method} {url}", body)
        start = time.perf_counter()
        try:
            if self._session is None:
                async with aiohttp.ClientSession() as session:
                    return await self._exchange(session, method, url, headers, body, query, start)
            return await self._exchange(self._session, method, url, headers, body, query, start)

        except asyncio.TimeoutError:
            logger.warning("Timeout when requesting API. URL: %s, limit: %ss", url, self._config.timeout_s)
            self._trace(f"✗ {method} {url} timed out")
            raise RequestTimeoutError(url=url, timeout_s=self._config.timeout_s)

        except aiohttp.ClientError as client_error:
            logger.warning("Connection error when requesting API. URL: %s, Error: %s", url, str(client_error))
            self._trace(f"✗ {method} {url} {client_error}")
            raise NetworkError(str(client_error)) from client_error

    async def _exchange(
        self,
        session: aiohttp.ClientSession,
        method: HttpMethod,
        url: str,
        headers: Dict[str, str],
        body: Optional[Dict[str, Any]],
        query: Optional[Dict[str, str]],
        start: float,
    ) -> TransportResult[JobPayload]:
        async with session.request(
            method,
            url,
            params=query,
            json=body,
            headers=headers,
            timeout=self._client_timeout,
        ) as response:
            if not 200 <= response.status < 300:
                try:
                    error_body = await response.json(content_type=None)
                except ValueError:
                    # Error body isn't JSON; the status category alone is reported
                    error_body = None
                self._trace(f"← {response.status}", error_body)
                detail = error_body.get("detail") if isinstance(error_body, dict) else None
                logger.debug("HTTP error from API. URL: %s, Status: %s", url, response.status)
                raise HttpStatusError(response.status, detail)

            try:
                data = await response.json(content_type=None)
            except ValueError as decode_error:
                raise NetworkError(f"Invalid JSON response: {decode_error}") from decode_error

        elapsed_ms = max(0, round((time.perf_counter() - start) * 1000))
        self._trace(f"← {response.status} ({elapsed_ms}ms)", data)
        return TransportResult(data=data, elapsed_ms=elapsed_ms)

    def _trace(self, label: str, data: Any = None) -> None:
        if self._tracer is None:
            return
        try:
            self._tracer.trace(label, data)
        except Exception as trace_error:
            logger.error("Debug trace failed label=%s error=%s", label, str(trace_error))
