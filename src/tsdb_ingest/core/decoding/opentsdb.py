"""Decoder for the OpenTSDB-style ``put`` line protocol.

A line has the form::

    put <metric> <timestamp> <value> [<tagk>=<tagv> ...]

Tokens are separated by any run of whitespace. Tag tokens that are not a
single ``key=value`` pair are dropped without failing the line.
"""

import logging
from collections import Counter
from collections.abc import Iterable, MutableSequence
from dataclasses import dataclass, field

from tsdb_ingest.core.decoding.timestamps import is_number, parse_timestamp_millis
from tsdb_ingest.core.errors import (
    DecodeError,
    InvalidValue,
    MissingDirective,
    MissingMetricName,
    MissingTimestamp,
    MissingValue,
)
from tsdb_ingest.core.models import DEFAULT_CUSTOMER, DecoderConfig, MetricRecord

logger = logging.getLogger(__name__)

DIRECTIVE = "put"
HOST_TAG = "host"


def _parse_tag(token: str) -> tuple[str, str] | None:
    """Split a ``key=value`` token, or return None if it is malformed."""
    if token.count("=") != 1:
        return None
    key, value = token.split("=")
    if not key or not value:
        return None
    return key, value


def _positional(tokens: list[str], index: int) -> str | None:
    # A token carrying "=" is a tag, so the positional field is absent.
    if len(tokens) <= index or "=" in tokens[index]:
        return None
    return tokens[index]


class LineDecoder:
    """Decodes put protocol lines into MetricRecord objects.

    The decoder holds only its immutable configuration, so one instance can
    be shared by concurrent callers as long as each passes its own output
    list.

    Example:
        ```python
        decoder = LineDecoder(DecoderConfig("localhost", ("fqdn",)))
        out: list[MetricRecord] = []
        decoder.decode("put sys.load 1447394143 0.5 fqdn=web-1", out)
        ```
    """

    def __init__(self, config: DecoderConfig | None = None) -> None:
        self._config = config or DecoderConfig()
        self._alternate_host_tags = tuple(
            name for name in self._config.host_tag_names if name != HOST_TAG
        )
        self._host_tags = frozenset((HOST_TAG, *self._alternate_host_tags))

    @property
    def config(self) -> DecoderConfig:
        return self._config

    def decode(
        self, line: str, out: MutableSequence[MetricRecord] | None = None
    ) -> MetricRecord:
        """Decode one line.

        The timestamp and value are positional. A token containing ``=`` in
        either position is a tag, so that field counts as absent: fewer than
        three positional tokens raise MissingTimestamp, fewer than four raise
        MissingValue.

        Args:
            line: Raw protocol line, surrounding whitespace allowed.
            out: Optional output sequence the record is appended to.

        Returns:
            The decoded record.

        Raises:
            DecodeError: If the line does not match the grammar. Nothing is
                appended to ``out`` in that case.
        """
        tokens = line.split()

        if not tokens or tokens[0] != DIRECTIVE:
            raise MissingDirective(f"Line must start with {DIRECTIVE!r}", line)
        metric_name = _positional(tokens, 1)
        if not metric_name:
            raise MissingMetricName("Missing metric name", line)
        raw_timestamp = _positional(tokens, 2)
        if raw_timestamp is None:
            raise MissingTimestamp("Missing timestamp", line)
        raw_value = _positional(tokens, 3)
        if raw_value is None:
            raise MissingValue("Missing value", line)
        if not is_number(raw_value):
            raise InvalidValue(f"Invalid value: {raw_value!r}", line)

        timestamp_millis = parse_timestamp_millis(raw_timestamp, line)
        host, annotations = self._resolve_tags(tokens[4:])

        record = MetricRecord(
            customer=DEFAULT_CUSTOMER,
            metric_name=metric_name,
            timestamp_millis=timestamp_millis,
            value=float(raw_value),
            host=host,
            annotations=annotations,
        )
        if out is not None:
            out.append(record)
        return record

    def _resolve_tags(self, tag_tokens: list[str]) -> tuple[str, dict[str, str]]:
        """Pick the host and collect the remaining tags as annotations.

        A literal ``host`` tag wins. Otherwise the configured alternate names
        are tried in configured order, taking the first occurrence on the
        line. Host-tag keys never appear in the annotations.
        """
        found_hosts: dict[str, str] = {}
        annotations: dict[str, str] = {}
        for token in tag_tokens:
            tag = _parse_tag(token)
            if tag is None:
                continue
            key, value = tag
            if key in self._host_tags:
                found_hosts.setdefault(key, value)
            else:
                annotations[key] = value

        for name in (HOST_TAG, *self._alternate_host_tags):
            if name in found_hosts:
                return found_hosts[name], annotations
        return self._config.default_host, annotations


def decode_line(
    line: str,
    config: DecoderConfig,
    out: MutableSequence[MetricRecord] | None = None,
) -> MetricRecord:
    """Decode a single line with the given configuration.

    Functional form of LineDecoder.decode().
    """
    return LineDecoder(config).decode(line, out)


@dataclass
class IngestReport:
    """Outcome of decoding a batch of lines."""

    accepted: int = 0
    rejected: int = 0
    skipped: int = 0
    reasons: Counter[str] = field(default_factory=Counter)


def decode_lines(
    lines: Iterable[str],
    config: DecoderConfig,
    out: MutableSequence[MetricRecord],
) -> IngestReport:
    """Decode a batch of lines, continuing past malformed ones.

    Blank lines are skipped. Each rejected line is logged at WARNING level
    with ``reason`` and ``line`` extras and counted in the report.

    Args:
        lines: Raw protocol lines.
        config: Decoder settings for the whole batch.
        out: Output sequence receiving every decoded record.

    Returns:
        IngestReport with per-outcome counts.
    """
    decoder = LineDecoder(config)
    report = IngestReport()
    for line in lines:
        if not line.strip():
            report.skipped += 1
            continue
        try:
            decoder.decode(line, out)
        except DecodeError as exc:
            report.rejected += 1
            report.reasons[exc.reason] += 1
            logger.warning(
                "Rejected line: %s",
                exc,
                extra={"reason": exc.reason, "line": line.strip()},
            )
        else:
            report.accepted += 1
    return report
