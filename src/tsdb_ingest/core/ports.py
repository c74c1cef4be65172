"""Port interfaces for storage adapters.

These protocols define the contracts that storage adapters must implement.
The core domain depends only on these interfaces, not concrete implementations.
"""

from collections.abc import AsyncIterable
from typing import Protocol, runtime_checkable

from tsdb_ingest.core.models import LogEntry, MetricRecord


@runtime_checkable
class RecordStoragePort(Protocol):
    """Port for decoded metric record storage.

    Adapters implementing this protocol keep records for downstream windowed
    consumers. Example: RingBufferRecordStorage.
    """

    async def write(self, record: MetricRecord) -> None:
        """Write a metric record to storage."""
        ...

    def read(self, since: int = 0) -> AsyncIterable[MetricRecord]:
        """Read records newer than the given timestamp.

        Args:
            since: Epoch milliseconds. Returns records with
                   timestamp_millis > since. Default 0 returns all records.

        Returns:
            Async iterable of MetricRecord objects, ordered by timestamp.
        """
        ...


@runtime_checkable
class LogStoragePort(Protocol):
    """Port for log storage operations.

    Adapters implementing this protocol can store and retrieve log entries.
    Example: RingBufferLogStorage.
    """

    async def write(self, entry: LogEntry) -> None:
        """Write a log entry to storage."""
        ...

    def read(self, since: float = 0) -> AsyncIterable[LogEntry]:
        """Read log entries since the given timestamp.

        Args:
            since: Unix timestamp. Returns entries with timestamp > since.

        Returns:
            Async iterable of LogEntry objects, ordered by timestamp ascending.
        """
        ...
