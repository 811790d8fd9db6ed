from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest
from pydantic import BaseModel, TypeAdapter, ValidationError

from tailscale_client.models import Key, Webhook
from tailscale_client.policy import ACLDERPMap
from tailscale_client.types import (
    Duration,
    NullableDict,
    NullableList,
    Time,
    format_duration,
    parse_duration,
)

_TIME = TypeAdapter(Time)
_DURATION = TypeAdapter(Duration)


class _Schedule(BaseModel):
    period: Duration


def test_empty_time_is_unset() -> None:
    assert _TIME.validate_python("") is None
    assert _TIME.validate_python(None) is None


def test_time_parses_utc_instant() -> None:
    value = _TIME.validate_python("2022-03-05T17:10:27Z")
    assert value == datetime(2022, 3, 5, 17, 10, 27, tzinfo=UTC)


def test_time_rejects_invalid_month() -> None:
    with pytest.raises(ValidationError):
        _TIME.validate_python("2022-13-05T17:10:27Z")


@pytest.mark.parametrize("raw", ["", None, "0s", "0"])
def test_duration_zero_values(raw: str | None) -> None:
    assert _DURATION.validate_python(raw) == timedelta(0)


def test_zero_duration_encodes_as_0s() -> None:
    assert _Schedule(period=timedelta(0)).model_dump(mode="json") == {"period": "0s"}


def test_duration_encodes_go_style() -> None:
    assert _DURATION.dump_json(timedelta(seconds=15)) == b'"15s"'
    assert _DURATION.dump_json(timedelta(hours=20)) == b'"20h0m0s"'


@pytest.mark.parametrize(
    ("value", "text"),
    [
        (timedelta(seconds=90), "1m30s"),
        (timedelta(milliseconds=1500), "1.5s"),
        (timedelta(milliseconds=300), "300ms"),
        (timedelta(microseconds=1500), "1.5ms"),
        (timedelta(microseconds=7), "7µs"),
        (timedelta(hours=1, seconds=1), "1h0m1s"),
        (timedelta(days=1), "24h0m0s"),
        (-timedelta(minutes=2), "-2m0s"),
    ],
)
def test_format_duration(value: timedelta, text: str) -> None:
    assert format_duration(value) == text


@pytest.mark.parametrize(
    ("text", "value"),
    [
        ("20h", timedelta(hours=20)),
        ("1h30m", timedelta(minutes=90)),
        ("1.5s", timedelta(milliseconds=1500)),
        ("300ms", timedelta(milliseconds=300)),
        ("2us", timedelta(microseconds=2)),
        ("-2m", -timedelta(minutes=2)),
        ("20h0m0s", timedelta(hours=20)),
    ],
)
def test_parse_duration(text: str, value: timedelta) -> None:
    assert parse_duration(text) == value


@pytest.mark.parametrize("text", ["bogus", "10", "1x", "-", "h"])
def test_parse_duration_rejects_malformed(text: str) -> None:
    with pytest.raises(ValueError):
        parse_duration(text)


def test_malformed_duration_fails_validation() -> None:
    with pytest.raises(ValidationError):
        _DURATION.validate_python("bogus")


def test_null_collections_become_empty() -> None:
    assert TypeAdapter(NullableList[str]).validate_python(None) == []
    assert TypeAdapter(NullableDict[str, int]).validate_python(None) == {}
    assert TypeAdapter(NullableList[str]).validate_python(["a"]) == ["a"]
    with pytest.raises(ValidationError):
        TypeAdapter(NullableList[str]).validate_python("a,b")


def test_records_tolerate_null_collections() -> None:
    key = Key.model_validate(
        {"id": "k1", "capabilities": {"devices": {"create": {"tags": None}}}}
    )
    webhook = Webhook.model_validate({"endpointId": "w1", "subscriptions": None})
    derp = ACLDERPMap.model_validate({"regions": {"900": {"regionID": 900, "nodes": None}}})

    assert key.capabilities.devices.create.tags == []
    assert webhook.subscriptions == []
    assert derp.regions[900].nodes == []
    assert ACLDERPMap.model_validate({"regions": None}).regions == {}
