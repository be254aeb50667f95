from typing import Awaitable, Callable, TypeVar

from tenacity import AsyncRetrying, RetryError, retry_if_result, stop_before_delay, wait_fixed

from sgai.core.exceptions import DeadlineExceededError

T = TypeVar("T")


class TenacityPollPolicyAdapter:
    """Tenacity-based poll policy implementing PollPolicyPort.

    Retries on the result (still pending), never on exceptions. The first
    attempt always runs; afterwards tenacity stops before a wait would carry
    the next attempt past `timeout_s`.
    """

    async def run(
        self,
        attempt: Callable[[], Awaitable[T]],
        is_pending: Callable[[T], bool],
        *,
        timeout_s: float,
        interval_s: float,
    ) -> T:
        retrying = AsyncRetrying(
            stop=stop_before_delay(timeout_s),
            wait=wait_fixed(interval_s),
            retry=retry_if_result(is_pending),
        )
        try:
            return await retrying(attempt)
        except RetryError:
            raise DeadlineExceededError(timeout_s) from None
