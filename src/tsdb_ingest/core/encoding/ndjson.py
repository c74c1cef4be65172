"""NDJSON encoders for metric records and log entries."""

import json
from collections.abc import Iterable
from typing import Any

from tsdb_ingest.core.models import LogEntry, MetricRecord


def _join(objects: Iterable[dict[str, Any]]) -> str:
    lines = [json.dumps(obj) for obj in objects]
    if not lines:
        return ""
    return "\n".join(lines) + "\n"


def encode_records(records: Iterable[MetricRecord]) -> str:
    """Encode metric records to newline-delimited JSON.

    Args:
        records: An iterable of MetricRecord objects.

    Returns:
        NDJSON string with one JSON object per line.
        Empty string if no records.
    """
    return _join(
        {
            "customer": record.customer,
            "metric": record.metric_name,
            "timestamp": record.timestamp_millis,
            "value": record.value,
            "host": record.host,
            "annotations": record.annotations,
        }
        for record in records
    )


def encode_logs(entries: Iterable[LogEntry]) -> str:
    """Encode log entries to newline-delimited JSON.

    Args:
        entries: An iterable of LogEntry objects.

    Returns:
        NDJSON string with one JSON object per line.
        Empty string if no entries.
    """
    return _join(
        {
            "timestamp": entry.timestamp,
            "level": entry.level,
            "message": entry.message,
            "attributes": entry.attributes,
        }
        for entry in entries
    )
