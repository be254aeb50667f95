"""Single-level hoisting of nested job results.

Some job kinds return their terminal data flat, others wrap it once more
under `result`. When that sub-object looks like a job payload itself it
replaces the outer payload.

Known limitation: only one level is inspected and only the markers below
are recognized. Deeper nesting or new marker fields are returned as-is.
"""

from typing import Any

from sgai.core.models.job import JobPayload

JOB_SHAPE_MARKERS = ("status", "pages", "crawled_urls")


def _looks_like_job(value: Any) -> bool:
    return isinstance(value, dict) and any(marker in value for marker in JOB_SHAPE_MARKERS)


def unwrap_result(payload: JobPayload) -> JobPayload:
    inner = payload.get("result")
    if not _looks_like_job(inner):
        return payload
    status = inner.get("status")
    if status is None:
        status = payload.get("status")
    return {**inner, "status": None if status is None else str(status)}
