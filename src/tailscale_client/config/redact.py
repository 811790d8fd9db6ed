"""Keep Tailscale credentials out of logs and config dumps."""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from pydantic import SecretStr

REDACTED_VALUE = "[redacted]"

_SECRET_KEYS = frozenset(
    {
        "tailscale_api_key",
        "tailscale_oauth_client_secret",
        "api_key",
        "client_secret",
        "access_token",
    }
)
_SECRET_KEY_PARTS = ("password", "token", "secret", "authorization", "api_key", "apikey")

_SECRET_NAME = r"api[_-]?key|access[_-]?token|client[_-]?secret|token|secret|password"

# Applied in order; each entry is (pattern, replacement).
_TEXT_RULES: tuple[tuple[re.Pattern[str], Any], ...] = (
    # "Authorization: Basic dHNrZXk6" / "Authorization: Bearer eyJ..."
    (
        re.compile(r"(?i)\b(authorization)\s*[:=]\s*(bearer|basic)\s+[^\s,;]+"),
        r"\1: \2 " + REDACTED_VALUE,
    ),
    # API keys, auth keys and OAuth client secrets all start with "tskey-".
    (re.compile(r"\btskey-[A-Za-z0-9_-]+"), REDACTED_VALUE),
    (
        re.compile(rf"(?i)\b({_SECRET_NAME})\s*[:=]\s*[^\s,;]+"),
        lambda m: f"{m.group(1)}={REDACTED_VALUE}",
    ),
    (
        re.compile(rf"(?i)([?&](?:{_SECRET_NAME})=)[^&\s]+"),
        lambda m: f"{m.group(1)}{REDACTED_VALUE}",
    ),
)


def scrub_secrets_in_text(text: str) -> str:
    """Replace credentials embedded in free-form text such as exception messages or URLs."""
    if not text:
        return text
    for pattern, replacement in _TEXT_RULES:
        text = pattern.sub(replacement, text)
    return text


def _is_secret_key(key: str) -> bool:
    name = key.strip().lower()
    return name in _SECRET_KEYS or any(part in name for part in _SECRET_KEY_PARTS)


def _scrub(value: Any) -> Any:
    if isinstance(value, SecretStr):
        return REDACTED_VALUE
    if isinstance(value, str):
        return scrub_secrets_in_text(value)
    if isinstance(value, Mapping):
        return redact_settings_dict(value)
    if isinstance(value, list):
        return [_scrub(item) for item in value]
    if isinstance(value, tuple):
        return tuple(_scrub(item) for item in value)
    return value


def redact_settings_dict(data: Mapping[str, Any]) -> dict[str, Any]:
    """
    Deep copy of `data` that is safe to log.

    Secret-looking keys lose their value entirely; SecretStr values are masked
    wherever they appear, and remaining strings go through `scrub_secrets_in_text`.
    """
    return {
        str(key): REDACTED_VALUE if _is_secret_key(str(key)) else _scrub(value)
        for key, value in data.items()
    }
