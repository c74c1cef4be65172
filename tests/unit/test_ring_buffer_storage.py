"""Tests for ring buffer storage adapters."""

import pytest

from tsdb_ingest.adapters.storage.ring_buffer import (
    RingBufferLogStorage,
    RingBufferRecordStorage,
)
from tsdb_ingest.core.errors import CapacityExceeded
from tsdb_ingest.core.models import LogEntry, MetricRecord, OverflowPolicy
from tsdb_ingest.core.ports import LogStoragePort, RecordStoragePort


def _record(ts: int, metric: str = "sys.load", host: str = "web-1") -> MetricRecord:
    return MetricRecord(
        customer="dummy",
        metric_name=metric,
        timestamp_millis=ts,
        value=float(ts),
        host=host,
    )


async def _collect(iterable) -> list:
    return [item async for item in iterable]


class TestRingBufferRecordStorage:
    """Tests for RingBufferRecordStorage adapter."""

    @pytest.mark.storage
    def test_implements_record_storage_port(self) -> None:
        assert isinstance(RingBufferRecordStorage(10), RecordStoragePort)

    @pytest.mark.storage
    def test_rejects_non_positive_size(self) -> None:
        with pytest.raises(ValueError):
            RingBufferRecordStorage(0)

    @pytest.mark.storage
    @pytest.mark.asyncio
    async def test_each_series_is_bounded(self) -> None:
        """Each (metric, host) series keeps only its newest records."""
        storage = RingBufferRecordStorage(max_size=2)
        for ts in (1, 2, 3):
            await storage.write(_record(ts))
        await storage.write(_record(10, host="web-2"))

        assert [r.timestamp_millis for r in storage.window("sys.load", "web-1")] == [2, 3]
        assert [r.timestamp_millis for r in storage.window("sys.load", "web-2")] == [10]
        assert storage.series() == [("sys.load", "web-1"), ("sys.load", "web-2")]

    @pytest.mark.storage
    def test_window_of_unknown_series_is_empty(self) -> None:
        assert RingBufferRecordStorage(2).window("nope", "none") == []

    @pytest.mark.storage
    @pytest.mark.asyncio
    async def test_read_orders_across_series_and_filters(self) -> None:
        storage = RingBufferRecordStorage(max_size=5)
        await storage.write(_record(30, host="b"))
        await storage.write(_record(10, host="a"))
        await storage.write(_record(20, metric="sys.mem", host="a"))

        all_records = await _collect(storage.read())
        recent = await _collect(storage.read(since=10))

        assert [r.timestamp_millis for r in all_records] == [10, 20, 30]
        assert [r.timestamp_millis for r in recent] == [20, 30]

    @pytest.mark.storage
    @pytest.mark.asyncio
    async def test_reject_policy_raises_on_full_series(self) -> None:
        storage = RingBufferRecordStorage(1, OverflowPolicy.REJECT_ON_FULL)
        await storage.write(_record(1))
        await storage.write(_record(1, host="other"))

        with pytest.raises(CapacityExceeded):
            await storage.write(_record(2))

        assert storage.window("sys.load", "web-1") == [_record(1)]


class TestRingBufferLogStorage:
    """Tests for RingBufferLogStorage adapter."""

    @pytest.mark.storage
    def test_implements_log_storage_port(self) -> None:
        assert isinstance(RingBufferLogStorage(10), LogStoragePort)

    @pytest.mark.storage
    @pytest.mark.asyncio
    async def test_evicts_oldest_entries(self) -> None:
        storage = RingBufferLogStorage(max_size=2)
        for i in range(3):
            await storage.write(LogEntry(timestamp=float(i), level="INFO", message=f"m{i}"))

        result = await _collect(storage.read())

        assert [e.message for e in result] == ["m1", "m2"]

    @pytest.mark.storage
    @pytest.mark.asyncio
    async def test_read_filters_by_since(self) -> None:
        storage = RingBufferLogStorage(max_size=5)
        await storage.write(LogEntry(timestamp=2.0, level="INFO", message="new"))
        await storage.write(LogEntry(timestamp=1.0, level="INFO", message="old"))

        result = await _collect(storage.read(since=1.0))

        assert [e.message for e in result] == ["new"]
