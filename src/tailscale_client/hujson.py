"""HuJSON (JSON with comments and trailing commas) support."""

from __future__ import annotations

import json
from typing import Any

import json5


def standardize(data: bytes) -> bytes:
    """
    Convert HuJSON to strict JSON.

    HuJSON is a JSON superset, so a json5 parse accepts everything the API
    emits (`//` and `/* */` comments, trailing commas).
    Raises ValueError when the text is not valid HuJSON either.
    """
    value = json5.loads(data.decode("utf-8"))
    return json.dumps(value).encode("utf-8")


def loads(data: bytes) -> Any:
    """Parse strict JSON, standardizing HuJSON bodies first when they are not."""
    try:
        return json.loads(data)
    except ValueError:
        return json.loads(standardize(data))
