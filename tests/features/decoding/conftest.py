"""Step definitions for put line decoding scenarios."""

from dataclasses import dataclass, field

import pytest
from pytest_bdd import given, parsers, then, when

from tsdb_ingest.core.decoding.opentsdb import LineDecoder
from tsdb_ingest.core.errors import DecodeError
from tsdb_ingest.core.models import DecoderConfig, MetricRecord


@dataclass
class DecodingContext:
    """Mutable state shared between the steps of one scenario."""

    decoder: LineDecoder | None = None
    out: list[MetricRecord] = field(default_factory=list)
    error: DecodeError | None = None

    @property
    def record(self) -> MetricRecord:
        assert self.error is None, f"decode failed: {self.error}"
        return self.out[-1]


@pytest.fixture
def ctx() -> DecodingContext:
    return DecodingContext()


@given(
    parsers.parse('a decoder with default host "{host}" and host tags "{tags}"')
)
def step_decoder(ctx: DecodingContext, host: str, tags: str) -> None:
    ctx.decoder = LineDecoder(DecoderConfig(host, tuple(tags.split(","))))


@when(parsers.parse('the line "{line}" is decoded'))
def step_decode(ctx: DecodingContext, line: str) -> None:
    assert ctx.decoder is not None
    try:
        ctx.decoder.decode(line, ctx.out)
    except DecodeError as exc:
        ctx.error = exc


@then(parsers.re(r"(?P<count>\d+) records? (is|are) produced"))
def step_count(ctx: DecodingContext, count: str) -> None:
    assert len(ctx.out) == int(count)


@then(parsers.parse('decoding fails with "{reason}"'))
def step_fails(ctx: DecodingContext, reason: str) -> None:
    assert ctx.error is not None
    assert ctx.error.reason == reason


@then(parsers.parse('the record metric is "{metric}"'))
def step_metric(ctx: DecodingContext, metric: str) -> None:
    assert ctx.record.metric_name == metric


@then(parsers.parse("the record value is {value:g}"))
def step_value(ctx: DecodingContext, value: float) -> None:
    assert ctx.record.value == value


@then(parsers.parse("the record timestamp is {millis:d}"))
def step_timestamp(ctx: DecodingContext, millis: int) -> None:
    assert ctx.record.timestamp_millis == millis


@then(parsers.parse('the record host is "{host}"'))
def step_host(ctx: DecodingContext, host: str) -> None:
    assert ctx.record.host == host


@then(parsers.parse('the record customer is "{customer}"'))
def step_customer(ctx: DecodingContext, customer: str) -> None:
    assert ctx.record.customer == customer


@then(parsers.parse('the record has no annotation "{key}"'))
def step_no_annotation(ctx: DecodingContext, key: str) -> None:
    assert key not in ctx.record.annotations


@then(parsers.parse('the record annotation "{key}" is "{value}"'))
def step_annotation(ctx: DecodingContext, key: str, value: str) -> None:
    assert ctx.record.annotations[key] == value
