"""Core domain models for ingested metric data."""

import enum
from dataclasses import dataclass, field

# Tenant placeholder; customer resolution happens outside the decoder.
DEFAULT_CUSTOMER = "dummy"


@dataclass(frozen=True)
class MetricRecord:
    """A single decoded metric data point.

    Attributes:
        customer: Tenant the point belongs to.
        metric_name: Dotted metric identifier (e.g., sys.cpu.user).
        timestamp_millis: Unix epoch timestamp in milliseconds.
        value: The metric value.
        host: Source the point was reported for.
        annotations: Remaining tags in order of first appearance. Compared
            for equality but left out of the hash.
    """

    customer: str
    metric_name: str
    timestamp_millis: int
    value: float
    host: str
    annotations: dict[str, str] = field(default_factory=dict, hash=False)


@dataclass(frozen=True)
class DecoderConfig:
    """Settings for a line decoder.

    Attributes:
        default_host: Host used when a line carries no host tag.
        host_tag_names: Alternate tag keys, besides ``host``, whose value
            becomes the record host. Earlier names take priority.
    """

    default_host: str = "localhost"
    host_tag_names: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        # ordered set: drop duplicates, keep first position
        names = tuple(dict.fromkeys(self.host_tag_names))
        object.__setattr__(self, "host_tag_names", names)


class OverflowPolicy(enum.Enum):
    """What a bounded buffer does when appending to a full buffer."""

    EVICT_OLDEST = "evict_oldest"
    REJECT_ON_FULL = "reject_on_full"


@dataclass(frozen=True)
class LogEntry:
    """A structured log entry.

    Attributes:
        timestamp: Unix timestamp in seconds.
        level: Log level (e.g., INFO, WARNING, ERROR).
        message: The log message.
        attributes: Additional structured fields.
    """

    timestamp: float
    level: str
    message: str
    attributes: dict[str, str | int | float | bool] = field(default_factory=dict)
