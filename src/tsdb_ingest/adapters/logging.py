"""Python logging handler adapter for ingest diagnostics.

Bridges the standard library logging module to a LogStoragePort so that
recent warnings from the decoder (rejected lines and their reasons) can be
kept in bounded storage and queried later.
"""

import asyncio
import logging
import traceback

from tsdb_ingest.core.models import LogEntry
from tsdb_ingest.core.ports import LogStoragePort

# Standard LogRecord attributes that should not be treated as extra fields
_STANDARD_LOGRECORD_ATTRS = frozenset(
    {
        "args",
        "asctime",
        "created",
        "exc_info",
        "exc_text",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "message",
        "module",
        "msecs",
        "msg",
        "name",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "taskName",
        "thread",
        "threadName",
    }
)

_DEFAULT_INCLUDE_ATTRS = ["module", "funcName", "lineno", "pathname"]


class IngestLogHandler(logging.Handler):
    """Logging handler that writes log records to a LogStoragePort.

    Must be used from synchronous code; each record is written with its own
    event loop.

    Example:
        ```python
        storage = RingBufferLogStorage(max_size=500)
        logging.getLogger("tsdb_ingest").addHandler(IngestLogHandler(storage))
        ```
    """

    def __init__(
        self,
        storage: LogStoragePort,
        include_attrs: list[str] | None = None,
        level: int = logging.NOTSET,
    ) -> None:
        """Initialize the handler with a log storage backend.

        Args:
            storage: Storage adapter implementing LogStoragePort.
            include_attrs: LogRecord attributes to include. Defaults to
                ["module", "funcName", "lineno", "pathname"].
            level: Minimum level handled.
        """
        super().__init__(level)
        self._storage = storage
        self._include_attrs = include_attrs or _DEFAULT_INCLUDE_ATTRS

    def _to_entry(self, record: logging.LogRecord) -> LogEntry:
        attr_mapping: dict[str, str | int | float | bool] = {
            "module": record.name,
            "funcName": record.funcName or "",
            "lineno": record.lineno,
            "pathname": record.pathname,
        }
        attributes: dict[str, str | int | float | bool] = {
            key: attr_mapping[key] for key in self._include_attrs if key in attr_mapping
        }

        # extras passed via logger.warning(..., extra={...})
        for key, value in record.__dict__.items():
            if key not in _STANDARD_LOGRECORD_ATTRS and isinstance(
                value, (str, int, float, bool)
            ):
                attributes[key] = value

        if record.exc_info:
            exc_type, exc_value, exc_tb = record.exc_info
            if exc_type is not None:
                attributes["exc_type"] = exc_type.__name__
            if exc_value is not None:
                attributes["exc_message"] = str(exc_value)
            if exc_tb is not None:
                attributes["exc_traceback"] = "".join(
                    traceback.format_exception(exc_type, exc_value, exc_tb)
                )

        return LogEntry(
            timestamp=record.created,
            level=record.levelname,
            message=record.getMessage(),
            attributes=attributes,
        )

    def emit(self, record: logging.LogRecord) -> None:
        """Emit a log record to the storage backend."""
        try:
            entry = self._to_entry(record)
            asyncio.run(self._storage.write(entry))
        except Exception:
            self.handleError(record)
