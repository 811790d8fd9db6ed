"""Shared HTTP client utilities (timeouts, content types, body encoding, decoding)."""

from __future__ import annotations

import json
from functools import lru_cache
from typing import Any

import httpx
from pydantic import BaseModel, TypeAdapter, ValidationError
from pydantic_core import to_jsonable_python

from tailscale_client.errors import DecodeError

CONTENT_TYPE_JSON = "application/json"
CONTENT_TYPE_HUJSON = "application/hujson"

DEFAULT_TIMEOUT_SECONDS = 60.0


def timeouts_for(seconds: float) -> httpx.Timeout:
    """
    Per-phase httpx.Timeout with connect/pool capped at 5 s.

    httpx has no whole-request deadline; `AsyncTailscaleClient.do` enforces
    `seconds` end to end.
    """
    total = float(seconds)
    connect = min(5.0, total)
    return httpx.Timeout(connect=connect, read=total, write=total, pool=connect)


def encode_body(body: Any) -> bytes:
    """
    Encode a request body.

    Strings and bytes are sent verbatim (hand-written HuJSON policy files must
    keep their comments and formatting); everything else is marshalled as JSON.
    """
    if isinstance(body, str):
        return body.encode("utf-8")
    if isinstance(body, (bytes, bytearray)):
        return bytes(body)
    if isinstance(body, BaseModel):
        payload = body.model_dump(mode="json", by_alias=True, exclude_none=True)
    else:
        try:
            payload = to_jsonable_python(body, by_alias=True)
        except ValueError as exc:
            raise TypeError(f"Cannot encode request body of type {type(body).__name__}") from exc
    return json.dumps(payload, separators=(",", ":")).encode("utf-8")


@lru_cache(maxsize=128)
def _adapter(tp: Any) -> TypeAdapter[Any]:
    return TypeAdapter(tp)


def validate_as(tp: Any, data: Any, *, status: int | None = None) -> Any:
    """Validate decoded JSON `data` as `tp`; shape mismatches raise DecodeError."""
    try:
        return _adapter(tp).validate_python(data)
    except ValidationError as exc:
        raise DecodeError(f"unexpected response shape: {exc}", status=status) from exc
