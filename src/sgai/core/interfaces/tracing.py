from typing import Any, Protocol


class TracePort(Protocol):
    """Debug output channel for request/response/timing events.

    Separate from logging: it is switched on by `ClientConfig.debug` and
    receives full payloads.
    """

    def trace(self, label: str, data: Any = None) -> None:  # pragma: no cover - protocol
        ...
