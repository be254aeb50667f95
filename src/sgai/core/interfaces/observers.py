"""Observer protocol for job status polling.

A poll observer is told about every status the poller sees, terminal ones
included. It runs inline with the poll loop: a slow observer delays the next
poll but never extends the polling deadline.
"""

from typing import Awaitable, Optional, Protocol, Union


class PollObserver(Protocol):
    """Callable receiving the raw `status` value of each polled payload.

    Plain functions and coroutine functions are both accepted; an awaitable
    return value is awaited before the loop continues.
    """

    def __call__(self, status: Optional[str]) -> Union[None, Awaitable[None]]:  # pragma: no cover - protocol
        ...
