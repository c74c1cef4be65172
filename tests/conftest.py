"""Shared test fixtures for all test modules."""

import pytest

from tsdb_ingest.core.decoding.opentsdb import LineDecoder
from tsdb_ingest.core.models import DecoderConfig


@pytest.fixture
def decoder_config() -> DecoderConfig:
    """Decoder settings used by the protocol examples: fqdn is a host tag."""
    return DecoderConfig(default_host="localhost", host_tag_names=("fqdn",))


@pytest.fixture
def decoder(decoder_config: DecoderConfig) -> LineDecoder:
    """A LineDecoder built from decoder_config."""
    return LineDecoder(decoder_config)
