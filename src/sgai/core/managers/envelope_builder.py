"""Conversion of resolved values and raised failures into `ApiResult` envelopes.

Every public entry point funnels through `run_enveloped`, so callers only
ever receive a tagged envelope, never a raised exception.
"""

from typing import Any, Awaitable, Callable, Optional, Tuple, TypeVar

from sgai.core.models.envelope import ApiResult
from sgai.core.settings import logger

T = TypeVar("T")

UNKNOWN_ERROR = "Unknown error"


def ok(data: T, elapsed_ms: int) -> ApiResult[T]:
    return ApiResult[Any](status="success", data=data, elapsed_ms=max(0, elapsed_ms))


def fail(err: Optional[BaseException | str]) -> ApiResult[Any]:
    if isinstance(err, BaseException):
        message = str(err) or type(err).__name__
    elif isinstance(err, str):
        message = err
    else:
        message = UNKNOWN_ERROR
    return ApiResult[Any](status="error", data=None, error=message, elapsed_ms=0)


async def run_enveloped(
    operation: Callable[[], Awaitable[Tuple[T, int]]],
    name: str = "request",
) -> ApiResult[T]:
    """Await `operation` (returning `(data, elapsed_ms)`) and wrap the outcome."""
    try:
        data, elapsed_ms = await operation()
    except Exception as exc:
        logger.debug("[envelope] %s failed error_type=%s error=%s", name, type(exc).__name__, exc)
        return fail(exc)
    return ok(data, elapsed_ms)
