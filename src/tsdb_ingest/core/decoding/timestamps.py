"""Numeric token parsing for the put line protocol.

Timestamps are resolved adaptively: a fractional or exponent form is read
as seconds, a bare integer is classified by its digit width.
"""

import math
import re

from tsdb_ingest.core.errors import InvalidTimestamp

# Decimal or exponential notation, no underscores, no nan/inf spellings.
NUMBER_PATTERN = re.compile(
    r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?"
)

_DIGITS_PATTERN = re.compile(r"[0-9]+")

SECONDS_WIDTH = 10
MILLIS_WIDTH = 13

MAX_MILLIS = 2**63 - 1


def is_number(token: str) -> bool:
    """Return True if the token is a decimal or exponential number."""
    return NUMBER_PATTERN.fullmatch(token) is not None


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def parse_timestamp_millis(token: str, line: str = "") -> int:
    """Convert a raw timestamp token to epoch milliseconds.

    Args:
        token: The timestamp token as it appears on the line.
        line: The full line, attached to any error raised.

    Returns:
        Non-negative Unix epoch milliseconds that fit a signed 64-bit integer.

    Raises:
        InvalidTimestamp: If the token is not numeric, is negative, exceeds
            the signed 64-bit millisecond range, or is an integer whose
            width is neither 10 (seconds) nor 13 (millis).
    """
    if "." in token or "e" in token or "E" in token:
        if not is_number(token):
            raise InvalidTimestamp(f"Invalid timestamp: {token!r}", line)
        seconds = float(token)
        if not math.isfinite(seconds) or seconds < 0:
            raise InvalidTimestamp(f"Timestamp out of range: {token!r}", line)
        millis = _round_half_up(seconds * 1000)
        if millis > MAX_MILLIS:
            raise InvalidTimestamp(f"Timestamp out of range: {token!r}", line)
        return millis

    if _DIGITS_PATTERN.fullmatch(token) is None:
        raise InvalidTimestamp(f"Invalid timestamp: {token!r}", line)
    if len(token) == SECONDS_WIDTH:
        return int(token) * 1000
    if len(token) == MILLIS_WIDTH:
        return int(token)
    raise InvalidTimestamp(
        f"Unsupported timestamp width {len(token)}: {token!r}, "
        f"expected {SECONDS_WIDTH} or {MILLIS_WIDTH} digits",
        line,
    )
