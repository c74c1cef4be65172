"""Exceptions raised by the decoder and bounded buffers."""


class DecodeError(ValueError):
    """A line does not match the put protocol grammar.

    Attributes:
        reason: Name of the failure class (e.g., "MissingDirective").
        line: The offending raw line.
    """

    reason = "DecodeError"

    def __init__(self, message: str, line: str = "") -> None:
        super().__init__(message)
        self.line = line


class MissingDirective(DecodeError):
    reason = "MissingDirective"


class MissingMetricName(DecodeError):
    reason = "MissingMetricName"


class MissingTimestamp(DecodeError):
    reason = "MissingTimestamp"


class MissingValue(DecodeError):
    reason = "MissingValue"


class InvalidValue(DecodeError):
    reason = "InvalidValue"


class InvalidTimestamp(DecodeError):
    reason = "InvalidTimestamp"


class CapacityExceeded(Exception):
    """A buffer that rejects on overflow is already full."""

    def __init__(self, capacity: int) -> None:
        super().__init__(f"Buffer capacity exceeded: {capacity}")
        self.capacity = capacity
