import logging
from sgai.core.interfaces.logging import LoggingPort
from sgai.core.logging_config import coerce_level


class LoggingAdapter(LoggingPort):
    """Concrete logging adapter.

    Delegates to Python's logging. It does NOT add its own handlers: a
    library must leave sinks to the host application (or to
    `configure_logging`). The current job id is injected by the root
    handlers' filter; we simply emit.
    """

    def __init__(self, name: str = "SGAI", log_level: int | str = logging.WARNING):
        self.logger = logging.getLogger(name)
        self.logger.setLevel(coerce_level(log_level, default=logging.WARNING))
        # Allow messages to bubble to root handlers
        self.logger.propagate = True
        self.logger.debug("Initialized logger name=%s level=%s", name, self.logger.level)

    def info(self, msg: str, *args):
        self.logger.info(msg, *args)

    def warning(self, msg: str, *args):
        self.logger.warning(msg, *args)

    def error(self, msg: str, *args):
        self.logger.error(msg, *args)

    def debug(self, msg: str, *args):
        self.logger.debug(msg, *args)
