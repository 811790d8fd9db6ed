"""Wire types shared by the resource models.

`Duration` carries Go-style duration text (``"20h0m0s"``) on the wire and a
`timedelta` in Python. `Time` accepts the empty string the API emits for
devices without created/expiry timestamps. `NullableList` and `NullableDict`
read a `null` collection as empty.
"""

from __future__ import annotations

import re
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Annotated, Any, TypeVar

from pydantic import BeforeValidator, PlainSerializer

_T = TypeVar("_T")
_K = TypeVar("_K")
_V = TypeVar("_V")

_UNIT_MICROSECONDS: dict[str, Decimal] = {
    "ns": Decimal("0.001"),
    "us": Decimal(1),
    "µs": Decimal(1),  # U+00B5
    "μs": Decimal(1),  # U+03BC
    "ms": Decimal(1_000),
    "s": Decimal(1_000_000),
    "m": Decimal(60_000_000),
    "h": Decimal(3_600_000_000),
}

_COMPONENT_RE = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|μs|ms|s|m|h)")


def parse_duration(text: str) -> timedelta:
    """
    Parse Go duration text ("1h30m", "1.5s", "300ms", "-2m") into a timedelta.

    Precision below one microsecond is truncated. Raises ValueError on malformed input.
    """
    raw = text.strip()
    if raw in {"", "0", "+0", "-0"}:
        return timedelta(0)

    sign = 1
    body = raw
    if body[0] in "+-":
        sign = -1 if body[0] == "-" else 1
        body = body[1:]
    if not body:
        raise ValueError(f"invalid duration {text!r}")

    total = Decimal(0)
    pos = 0
    while pos < len(body):
        match = _COMPONENT_RE.match(body, pos)
        if match is None:
            raise ValueError(f"invalid duration {text!r}")
        number, unit = match.groups()
        total += Decimal(number) * _UNIT_MICROSECONDS[unit]
        pos = match.end()

    return timedelta(microseconds=sign * int(total))


def _trim_fraction(whole: int, frac: int, digits: int) -> str:
    if frac == 0:
        return str(whole)
    return f"{whole}.{frac:0{digits}d}".rstrip("0")


def format_duration(value: timedelta) -> str:
    """Format a timedelta the way Go's `time.Duration.String` does."""
    micros = (value.days * 86_400 + value.seconds) * 1_000_000 + value.microseconds
    if micros == 0:
        return "0s"

    sign = "-" if micros < 0 else ""
    micros = abs(micros)

    if micros < 1_000:
        return f"{sign}{micros}µs"
    if micros < 1_000_000:
        return f"{sign}{_trim_fraction(micros // 1_000, micros % 1_000, 3)}ms"

    hours, rest = divmod(micros, 3_600_000_000)
    minutes, rest = divmod(rest, 60_000_000)
    seconds = _trim_fraction(rest // 1_000_000, rest % 1_000_000, 6)

    if hours:
        return f"{sign}{hours}h{minutes}m{seconds}s"
    if minutes:
        return f"{sign}{minutes}m{seconds}s"
    return f"{sign}{seconds}s"


def _coerce_duration(value: Any) -> Any:
    if value is None:
        return timedelta(0)
    if isinstance(value, str):
        return parse_duration(value)
    return value


def _coerce_time(value: Any) -> Any:
    if value is None or value == "":
        return None
    return value


Duration = Annotated[
    timedelta,
    BeforeValidator(_coerce_duration),
    PlainSerializer(format_duration, return_type=str, when_used="json"),
]

Time = Annotated[datetime | None, BeforeValidator(_coerce_time)]


def _none_as_empty_list(value: Any) -> Any:
    return [] if value is None else value


def _none_as_empty_dict(value: Any) -> Any:
    return {} if value is None else value


# The API marshals nil slices and maps as `null`.
NullableList = Annotated[list[_T], BeforeValidator(_none_as_empty_list)]
NullableDict = Annotated[dict[_K, _V], BeforeValidator(_none_as_empty_dict)]
