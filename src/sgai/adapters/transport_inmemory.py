"""In-memory implementation of TransportPort.

Replays scripted payloads or errors in order and records every call, so the
job lifecycle engine can run fully offline. Suitable for tests and local
dry runs; no network access happens.
"""
from __future__ import annotations

from collections import deque
from copy import deepcopy
from dataclasses import dataclass, field
from typing import Any, Deque, Dict, List, Optional

from sgai.core.interfaces.transport import CREDENTIAL_HEADER, HttpMethod, TransportPort
from sgai.core.models.job import JobPayload, TransportResult


@dataclass
class RecordedCall:
    method: str
    url: str
    headers: Dict[str, str]
    body: Optional[Dict[str, Any]] = None
    query: Optional[Dict[str, str]] = None


@dataclass
class _Scripted:
    payload: Optional[JobPayload] = None
    error: Optional[BaseException] = None
    elapsed_ms: int = 0


@dataclass
class InMemoryTransportAdapter(TransportPort):
    base_url: str = "https://api.scrapegraphai.com/v1"
    calls: List[RecordedCall] = field(default_factory=list)
    _script: Deque[_Scripted] = field(default_factory=deque, init=False, repr=False)

    def enqueue(self, payload: JobPayload, elapsed_ms: int = 0) -> "InMemoryTransportAdapter":
        self._script.append(_Scripted(payload=deepcopy(payload), elapsed_ms=elapsed_ms))
        return self

    def enqueue_error(self, error: BaseException) -> "InMemoryTransportAdapter":
        self._script.append(_Scripted(error=error))
        return self

    @property
    def pending(self) -> int:
        return len(self._script)

    async def __aenter__(self) -> "InMemoryTransportAdapter":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        return False

    async def close(self) -> None:
        return None

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
        headers = {CREDENTIAL_HEADER: api_key}
        if body is not None:
            headers["Content-Type"] = "application/json"
        self.calls.append(
            RecordedCall(
                method=method,
                url=f"{base_url or self.base_url}{path}",
                headers=headers,
                body=deepcopy(body),
                query=dict(query) if query else None,
            )
        )
        if not self._script:
            raise AssertionError(f"No scripted response left for {method} {path}")
        step = self._script.popleft()
        if step.error is not None:
            raise step.error
        return TransportResult(data=deepcopy(step.payload), elapsed_ms=step.elapsed_ms)
