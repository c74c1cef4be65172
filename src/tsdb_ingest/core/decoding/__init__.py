"""Line protocol decoders."""

from tsdb_ingest.core.decoding.opentsdb import (
    IngestReport,
    LineDecoder,
    decode_line,
    decode_lines,
)

__all__ = ["IngestReport", "LineDecoder", "decode_line", "decode_lines"]
