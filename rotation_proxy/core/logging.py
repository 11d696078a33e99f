import logging
from collections.abc import Generator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

NOISY_HTTP_LOGGERS = (
    "httpx",
    "httpcore",
    "httpcore.http11",
    "httpcore.connection",
)

UVICORN_LOGGERS = ("uvicorn", "uvicorn.access", "uvicorn.error")

_correlation_id: ContextVar[str | None] = ContextVar("correlation_id", default=None)


def normalize_log_level(value: str | None) -> str:
    """Upper-case a level name, falling back to INFO when unrecognised.

    Only the first word is used so inline comments in .env files are ignored.
    """
    parts = (value or "").split()
    level = parts[0].upper() if parts else "INFO"
    return level if level in VALID_LOG_LEVELS else "INFO"


def set_noisy_http_logger_levels(current_log_level: str) -> None:
    """Ensure HTTP client noise only surfaces at DEBUG level."""

    noisy_level = logging.DEBUG if current_log_level == "DEBUG" else logging.WARNING
    for logger_name in NOISY_HTTP_LOGGERS:
        logging.getLogger(logger_name).setLevel(noisy_level)


def current_correlation_id() -> str | None:
    return _correlation_id.get()


class ConversationLogger:
    """Logger with correlation ID support"""

    @staticmethod
    def get_logger() -> logging.Logger:
        return logging.getLogger("conversation")

    @staticmethod
    @contextmanager
    def correlation_context(request_id: str) -> Generator[None, None, None]:
        """Tag every record logged inside the block with ``request_id``.

        The id lives in a context variable, so concurrent requests on the
        same event loop each see their own.
        """
        token = _correlation_id.set(request_id)
        try:
            yield
        finally:
            _correlation_id.reset(token)


_base_record_factory = logging.getLogRecordFactory()


def _record_factory(*args: Any, **kwargs: Any) -> logging.LogRecord:
    record = _base_record_factory(*args, **kwargs)
    correlation_id = _correlation_id.get()
    if correlation_id is not None:
        record.correlation_id = correlation_id
    return record


# Custom formatter with correlation ID
class CorrelationFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        correlation_id = getattr(record, "correlation_id", None)
        if correlation_id:
            return f"[{correlation_id[:8]}] {message}"
        return message


class HttpRequestLogDowngradeFilter(logging.Filter):
    """Downgrade noisy third-party HTTP logs to DEBUG."""

    def __init__(self, *prefixes: str) -> None:
        super().__init__()
        self.prefixes = prefixes

    def filter(self, record: logging.LogRecord) -> bool:
        if record.levelno == logging.INFO:
            for prefix in self.prefixes:
                if record.name.startswith(prefix):
                    record.levelno = logging.DEBUG
                    record.levelname = logging.getLevelName(logging.DEBUG)
                    break
        return True


def configure_root_logging(log_level: str | None = None) -> str:
    """Install the proxy's single root handler.

    Safe to call more than once; the root handler list is replaced each time.

    Returns:
        The effective level name.
    """
    level = normalize_log_level(log_level)

    handler = logging.StreamHandler()
    handler.addFilter(HttpRequestLogDowngradeFilter(*NOISY_HTTP_LOGGERS))
    handler.setFormatter(
        CorrelationFormatter("%(asctime)s - %(levelname)s - %(message)s", datefmt="%H:%M:%S")
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, level))

    logging.setLogRecordFactory(_record_factory)

    # Configure uvicorn to be quieter
    for uvicorn_logger in UVICORN_LOGGERS:
        logging.getLogger(uvicorn_logger).setLevel(logging.WARNING)

    set_noisy_http_logger_levels(level)
    return level


conversation_logger = ConversationLogger.get_logger()
