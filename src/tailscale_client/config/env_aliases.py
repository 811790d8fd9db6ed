"""Flat environment variable names for the nested settings sections.

`TAILSCALE_API_KEY` reads nicer than `AUTH__API_KEY`; both are accepted.
"""
from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Any

# Env var name -> dotted settings path.
FLAT_ENV_ALIASES: dict[str, str] = {
    "TAILSCALE_BASE_URL": "api.base_url",
    "TAILSCALE_TAILNET": "api.tailnet",
    "TAILSCALE_USER_AGENT": "api.user_agent",
    "TAILSCALE_TIMEOUT_SECONDS": "api.timeout_seconds",
    "TAILSCALE_VERIFY_TLS": "api.verify_tls",
    "TAILSCALE_API_KEY": "auth.api_key",
    "TAILSCALE_OAUTH_CLIENT_ID": "auth.oauth.client_id",
    "TAILSCALE_OAUTH_CLIENT_SECRET": "auth.oauth.client_secret",
    "TAILSCALE_OAUTH_SCOPES": "auth.oauth.scopes",
    "LOG_LEVEL": "observability.log_level",
    "LOG_FORMAT": "observability.log_format",
    "LOG_JSON": "observability.json_logs",
    "TAILSCALE_ALLOW_INSECURE_HTTP": "hardening.allow_insecure_http",
    "TAILSCALE_ALLOW_INSECURE_TLS": "hardening.allow_insecure_tls",
    "TAILSCALE_TRUST_ENV": "hardening.trust_env",
}

_ENV_BY_PATH = {path: name for name, path in FLAT_ENV_ALIASES.items()}


def env_var_for(path: str) -> str | None:
    """Flat env var name for a dotted settings path, e.g. "auth.api_key" -> "TAILSCALE_API_KEY"."""
    return _ENV_BY_PATH.get(path)


def nest_flat_env(env: Mapping[str, str]) -> dict[str, Any]:
    """Fold the non-empty flat aliases found in `env` into nested section dicts."""
    nested: dict[str, Any] = {}
    for name, dotted in FLAT_ENV_ALIASES.items():
        value = env.get(name)
        if not value:
            continue
        *sections, leaf = dotted.split(".")
        target = nested
        for section in sections:
            target = target.setdefault(section, {})
        target[leaf] = value
    return nested


def get_flat_env_settings_source() -> dict[str, Any]:
    return nest_flat_env(os.environ)
