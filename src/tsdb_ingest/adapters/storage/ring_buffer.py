"""Ring buffer storage adapters for metric records and logs.

Provides bounded in-memory storage backed by BoundedHistoryBuffer. Memory
use is fixed by the configured size regardless of ingest volume.
"""

from collections.abc import AsyncIterable

from tsdb_ingest.core.buffer import BoundedHistoryBuffer
from tsdb_ingest.core.models import LogEntry, MetricRecord, OverflowPolicy

SeriesKey = tuple[str, str]


class RingBufferRecordStorage:
    """Ring buffer implementation of RecordStoragePort.

    Keeps one bounded buffer per series, a series being the pair
    ``(metric_name, host)``. Each series holds at most ``max_size`` of its
    most recent records.

    Args:
        max_size: Maximum number of records kept per series.
        policy: Overflow policy applied to every series buffer. Under
            REJECT_ON_FULL, writing to a full series raises CapacityExceeded.
    """

    def __init__(
        self,
        max_size: int,
        policy: OverflowPolicy = OverflowPolicy.EVICT_OLDEST,
    ) -> None:
        if max_size <= 0:
            raise ValueError(f"max_size must be positive, got {max_size}")
        self._max_size = max_size
        self._policy = policy
        self._series: dict[SeriesKey, BoundedHistoryBuffer[MetricRecord]] = {}

    async def write(self, record: MetricRecord) -> None:
        """Write a metric record to its series buffer."""
        key = (record.metric_name, record.host)
        buffer = self._series.get(key)
        if buffer is None:
            buffer = BoundedHistoryBuffer(self._max_size, self._policy)
            self._series[key] = buffer
        buffer.force_append(record)

    async def read(self, since: int = 0) -> AsyncIterable[MetricRecord]:
        """Read records across all series newer than ``since``.

        Returns records with timestamp_millis > since, ordered by timestamp
        ascending.
        """
        filtered = [
            record
            for buffer in self._series.values()
            for record in buffer
            if record.timestamp_millis > since
        ]
        for record in sorted(filtered, key=lambda r: r.timestamp_millis):
            yield record

    def window(self, metric_name: str, host: str) -> list[MetricRecord]:
        """Return one series oldest to newest, empty if it was never written."""
        buffer = self._series.get((metric_name, host))
        if buffer is None:
            return []
        return buffer.to_list()

    def series(self) -> list[SeriesKey]:
        """Return the keys of every series written so far."""
        return list(self._series)


class RingBufferLogStorage:
    """Ring buffer implementation of LogStoragePort.

    Stores log entries in a fixed-size circular buffer. When the buffer
    is full, the oldest entry is automatically evicted to make room for
    new entries.

    Args:
        max_size: Maximum number of entries to store.
    """

    def __init__(self, max_size: int) -> None:
        self._buffer: BoundedHistoryBuffer[LogEntry] = BoundedHistoryBuffer(max_size)

    async def write(self, entry: LogEntry) -> None:
        """Write a log entry to storage."""
        self._buffer.append(entry)

    async def read(self, since: float = 0) -> AsyncIterable[LogEntry]:
        """Read log entries since the given timestamp.

        Returns entries with timestamp > since, ordered by timestamp ascending.
        """
        filtered = [e for e in self._buffer if e.timestamp > since]
        for entry in sorted(filtered, key=lambda e: e.timestamp):
            yield entry
