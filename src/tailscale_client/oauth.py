from __future__ import annotations

import base64
import time
from collections.abc import Callable, Generator, Sequence
from dataclasses import dataclass, field
from typing import Any

import httpx
import structlog

from tailscale_client.errors import AuthError, DecodeError

log = structlog.get_logger(__name__)

TOKEN_PATH = "api/v2/oauth/token"

# Re-fetch this many seconds before the server-side expiry.
_EXPIRY_LEEWAY_SECONDS = 60.0
_DEFAULT_EXPIRES_IN_SECONDS = 3600.0


@dataclass(frozen=True, slots=True)
class OAuthConfig:
    client_id: str
    client_secret: str
    scopes: Sequence[str] = field(default_factory=tuple)


def token_url_for(base_url: httpx.URL | str) -> httpx.URL:
    url = httpx.URL(str(base_url))
    base_path = url.path.rstrip("/") + "/"
    return url.copy_with(path=base_path).join(TOKEN_PATH)


class ClientCredentialsAuth(httpx.Auth):
    """
    OAuth2 client-credentials flow for httpx.

    The token request goes out through the same transport as the API call it
    precedes. Tokens are cached on the instance until shortly before they expire.
    """

    requires_response_body = True

    def __init__(
        self,
        config: OAuthConfig,
        *,
        token_url: httpx.URL | str,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if not config.client_id or not config.client_secret:
            raise ValueError("OAuth client_id and client_secret are required")
        self._config = config
        self._token_url = httpx.URL(str(token_url))
        self._clock = clock
        self._access_token: str | None = None
        self._expires_at = 0.0

    @property
    def token_url(self) -> httpx.URL:
        return self._token_url

    def _token_valid(self) -> bool:
        return self._access_token is not None and self._clock() < self._expires_at

    def _build_token_request(self) -> httpx.Request:
        data = {"grant_type": "client_credentials"}
        if self._config.scopes:
            data["scope"] = " ".join(self._config.scopes)
        credentials = f"{self._config.client_id}:{self._config.client_secret}".encode()
        return httpx.Request(
            "POST",
            self._token_url,
            data=data,
            headers={
                "Authorization": "Basic " + base64.b64encode(credentials).decode("ascii"),
                "Accept": "application/json",
            },
        )

    def _store_token(self, response: httpx.Response) -> None:
        status = response.status_code
        try:
            payload: Any = response.json()
        except ValueError as exc:
            if 200 <= status < 300:
                raise DecodeError("OAuth token response is not JSON", status=status) from exc
            payload = {}

        if not 200 <= status < 300:
            message = "OAuth token request failed"
            if isinstance(payload, dict):
                message = str(
                    payload.get("error_description")
                    or payload.get("message")
                    or payload.get("error")
                    or message
                )
            raise AuthError(message, status=status)

        token = payload.get("access_token") if isinstance(payload, dict) else None
        if not token:
            raise DecodeError("OAuth token response has no access_token", status=status)

        try:
            expires_in = float(payload.get("expires_in") or _DEFAULT_EXPIRES_IN_SECONDS)
        except (TypeError, ValueError):
            expires_in = _DEFAULT_EXPIRES_IN_SECONDS

        self._access_token = str(token)
        self._expires_at = self._clock() + max(0.0, expires_in - _EXPIRY_LEEWAY_SECONDS)
        log.debug("tailscale.oauth.token_fetched", expires_in=expires_in)

    def auth_flow(self, request: httpx.Request) -> Generator[httpx.Request, httpx.Response, None]:
        if not self._token_valid():
            token_response = yield self._build_token_request()
            self._store_token(token_response)

        request.headers["Authorization"] = f"Bearer {self._access_token}"
        yield request
