"""Opt-in log sink for applications using the client.

The library never touches global logging: core code emits through
`LoggingPort`, whose adapter only forwards to the `SGAI` logger. Callers
that want output without setting up logging themselves call
`configure_logging` once; it attaches one stderr handler to the `SGAI`
logger and stamps every record with the id of the job currently being
polled (see `job_id_var`).
"""

from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO
import contextvars

LOGGER_NAME = "SGAI"

# Job id context variable (set by the poller for the length of a polling session)
job_id_var: contextvars.ContextVar[str] = contextvars.ContextVar(
    "job_id", default="-"
)

DEFAULT_FORMAT = "[%(asctime)s] %(levelname)s %(name)s job=%(job_id)s: %(message)s"


def coerce_level(level: int | str | None, default: int = logging.INFO) -> int:
    if level is None:
        return default
    if isinstance(level, int):
        return level
    key = str(level).upper().strip()
    mapping = logging.getLevelNamesMapping()
    return mapping.get(key, default)


class _JobIdFilter(logging.Filter):
    """Inject the current job id from contextvar into every log record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.job_id = job_id_var.get()
        return True


class _SgaiHandler(logging.StreamHandler):
    """Marker type so repeated configuration replaces instead of stacking."""


def configure_logging(
    level: int | str | None = None,
    fmt: Optional[str] = None,
    stream: Optional[TextIO] = None,
) -> logging.Handler:
    """Send `SGAI` records at `level` and above to `stream` (stderr by default).

    Records still propagate, so an application's own root handlers keep
    receiving them. Returns the installed handler.
    """
    numeric_level = coerce_level(level)
    sgai_logger = logging.getLogger(LOGGER_NAME)

    for h in list(sgai_logger.handlers):
        if isinstance(h, _SgaiHandler):
            sgai_logger.removeHandler(h)

    handler = _SgaiHandler(stream=stream or sys.stderr)
    handler.addFilter(_JobIdFilter())
    handler.setFormatter(logging.Formatter(fmt or DEFAULT_FORMAT))
    sgai_logger.addHandler(handler)
    sgai_logger.setLevel(numeric_level)
    sgai_logger.debug("Logging configured level=%s", logging.getLevelName(numeric_level))
    return handler
