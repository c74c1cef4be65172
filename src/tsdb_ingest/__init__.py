"""Ingestion front end for put-protocol metrics.

Decodes ``put`` lines into MetricRecord objects and stages them in
fixed-capacity history buffers.
"""

from tsdb_ingest.adapters.logging import IngestLogHandler
from tsdb_ingest.adapters.storage import RingBufferLogStorage, RingBufferRecordStorage
from tsdb_ingest.core.buffer import BoundedHistoryBuffer
from tsdb_ingest.core.decoding import (
    IngestReport,
    LineDecoder,
    decode_line,
    decode_lines,
)
from tsdb_ingest.core.errors import (
    CapacityExceeded,
    DecodeError,
    InvalidTimestamp,
    InvalidValue,
    MissingDirective,
    MissingMetricName,
    MissingTimestamp,
    MissingValue,
)
from tsdb_ingest.core.models import (
    DEFAULT_CUSTOMER,
    DecoderConfig,
    LogEntry,
    MetricRecord,
    OverflowPolicy,
)

__all__ = [
    "DEFAULT_CUSTOMER",
    "BoundedHistoryBuffer",
    "CapacityExceeded",
    "DecodeError",
    "DecoderConfig",
    "IngestLogHandler",
    "IngestReport",
    "InvalidTimestamp",
    "InvalidValue",
    "LineDecoder",
    "LogEntry",
    "MetricRecord",
    "MissingDirective",
    "MissingMetricName",
    "MissingTimestamp",
    "MissingValue",
    "OverflowPolicy",
    "RingBufferLogStorage",
    "RingBufferRecordStorage",
    "decode_line",
    "decode_lines",
]
