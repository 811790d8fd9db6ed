from __future__ import annotations

import asyncio
import os
import socket
import sys
from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import TYPE_CHECKING, Any

import pytest

if TYPE_CHECKING:
    from tailscale_client.client import AsyncTailscaleClient as _Client

_CONFIG_ENV_VARS = (
    "CONFIG_PATH",
    "TAILSCALE_BASE_URL",
    "TAILSCALE_TAILNET",
    "TAILSCALE_USER_AGENT",
    "TAILSCALE_TIMEOUT_SECONDS",
    "TAILSCALE_VERIFY_TLS",
    "TAILSCALE_API_KEY",
    "TAILSCALE_OAUTH_CLIENT_ID",
    "TAILSCALE_OAUTH_CLIENT_SECRET",
    "TAILSCALE_OAUTH_SCOPES",
    "TAILSCALE_ALLOW_INSECURE_HTTP",
    "TAILSCALE_ALLOW_INSECURE_TLS",
    "TAILSCALE_TRUST_ENV",
    "LOG_LEVEL",
    "LOG_FORMAT",
    "LOG_JSON",
    # Nested form (supported by pydantic-settings)
    "API",
    "AUTH",
    "OBSERVABILITY",
    "HARDENING",
    "API__BASE_URL",
    "API__TAILNET",
    "AUTH__API_KEY",
    "AUTH__OAUTH__CLIENT_ID",
    "AUTH__OAUTH__CLIENT_SECRET",
)


def pytest_configure() -> None:
    repo_root = Path(__file__).resolve().parents[1]
    src_path = repo_root / "src"
    sys.path.insert(0, str(src_path))


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Remove every environment variable the settings loader reads."""
    for key in _CONFIG_ENV_VARS:
        monkeypatch.delenv(key, raising=False)
    return monkeypatch


@pytest.fixture
def call_api() -> Callable[..., Any]:
    """Run `fn(client)` on a fresh API-key client inside its own event loop."""

    def _call(fn: Callable[[_Client], Awaitable[Any]], **kwargs: Any) -> Any:
        kwargs.setdefault("api_key", "tskey-api-test")

        from tailscale_client.client import AsyncTailscaleClient

        async def _main() -> Any:
            async with AsyncTailscaleClient(**kwargs) as client:
                return await fn(client)

        return asyncio.run(_main())

    return _call


@pytest.fixture(autouse=True)
def _disable_network(monkeypatch: pytest.MonkeyPatch) -> None:
    """
    Prevent accidental real network calls in tests.

    Respx mocks still work because they intercept at the httpx transport layer.
    """
    if (os.environ.get("ALLOW_NETWORK_TESTS") or "").strip().lower() in {"1", "true", "yes"}:
        return

    def _blocked(*_args: object, **_kwargs: object) -> None:
        raise RuntimeError(
            "Network access is disabled in tests (set ALLOW_NETWORK_TESTS=1 to override)."
        )

    monkeypatch.setattr(socket, "create_connection", _blocked)
    monkeypatch.setattr(socket.socket, "connect", _blocked, raising=True)
