from typing import Awaitable, Callable, Protocol, TypeVar

T = TypeVar("T")


class PollPolicyPort(Protocol):
    """Abstract repeat-until-terminal policy for async polls.

    The contract keeps the poller decoupled from a specific scheduling library.
    """
    async def run(
        self,
        attempt: Callable[[], Awaitable[T]],
        is_pending: Callable[[T], bool],
        *,
        timeout_s: float,
        interval_s: float,
    ) -> T:  # pragma: no cover - protocol
        """Invoke `attempt` until `is_pending` rejects its result.

        Args:
            attempt: Async callable performing one poll.
            is_pending: Predicate deciding whether to poll again.
            timeout_s: Deadline measured from the first attempt.
            interval_s: Fixed wait between two attempts.
        Returns:
            The first non-pending result.
        Raises:
            DeadlineExceededError: the next attempt would start past the deadline.
            Any exception raised by `attempt`, unchanged and without retry.
        """
        ...
