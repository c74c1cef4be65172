"""Storage adapters implementing core ports."""

from tsdb_ingest.adapters.storage.ring_buffer import (
    RingBufferLogStorage,
    RingBufferRecordStorage,
)

__all__ = ["RingBufferLogStorage", "RingBufferRecordStorage"]
