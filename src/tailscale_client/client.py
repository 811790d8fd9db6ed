from __future__ import annotations

import asyncio
import base64
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, TypeVar, overload
from urllib.parse import quote

import httpx
import structlog

from tailscale_client import hujson
from tailscale_client._version import __version__
from tailscale_client.errors import APIErrorBody, DecodeError, TailscaleError, error_for_status
from tailscale_client.http_util import (
    CONTENT_TYPE_JSON,
    DEFAULT_TIMEOUT_SECONDS,
    encode_body,
    timeouts_for,
    validate_as,
)
from tailscale_client.oauth import ClientCredentialsAuth, OAuthConfig, token_url_for
from tailscale_client.resources.contacts import ContactsResource
from tailscale_client.resources.device_posture import DevicePostureResource
from tailscale_client.resources.devices import DevicesResource
from tailscale_client.resources.dns import DNSResource
from tailscale_client.resources.keys import KeysResource
from tailscale_client.resources.logstream import LoggingResource
from tailscale_client.resources.policy_file import PolicyFileResource
from tailscale_client.resources.tailnet_settings import TailnetSettingsResource
from tailscale_client.resources.users import UsersResource
from tailscale_client.resources.webhooks import WebhooksResource

if TYPE_CHECKING:
    from tailscale_client.config.settings import Settings

_T = TypeVar("_T")

log = structlog.get_logger(__name__)

DEFAULT_BASE_URL = "https://api.tailscale.com"
DEFAULT_TAILNET = "-"
DEFAULT_USER_AGENT = f"tailscale-client-python/{__version__}"

# Characters Go's url.PathEscape leaves literal in a path segment (besides unreserved).
_PATH_SEGMENT_SAFE = "$&+=:@"


def escape_path_segment(segment: object) -> str:
    return quote(str(segment), safe=_PATH_SEGMENT_SAFE)


class AsyncTailscaleClient:
    """
    Client for the Tailscale v2 REST API.

    Authenticates with either a static API key (HTTP Basic, empty password) or
    OAuth client credentials, never both. Resource facades are available as
    attributes (`devices`, `keys`, `policy_file`, `dns`, ...).
    """

    def __init__(
        self,
        *,
        tailnet: str = DEFAULT_TAILNET,
        api_key: str | None = None,
        oauth: OAuthConfig | None = None,
        base_url: str = DEFAULT_BASE_URL,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        verify_tls: bool = True,
        trust_env: bool = False,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        try:
            url = httpx.URL(base_url)
        except httpx.InvalidURL as exc:
            raise ValueError(f"invalid base_url {base_url!r}: {exc}") from exc
        if not url.scheme or not url.host:
            raise ValueError("base_url must include scheme and host, e.g. https://api.tailscale.com")

        if api_key and oauth is not None:
            raise ValueError("api_key and oauth are mutually exclusive")
        if not api_key and oauth is None and http_client is None:
            raise ValueError("no authentication credentials provided")

        # Trailing slash keeps httpx URL joining unambiguous.
        base_path = url.path.rstrip("/") + "/"
        self._base_url = url.copy_with(path=base_path)

        self.tailnet = tailnet
        self.user_agent = user_agent
        self._timeout_seconds = float(timeout_seconds)
        self._api_key = api_key or None

        self._auth: ClientCredentialsAuth | None = None
        if oauth is not None:
            self._auth = ClientCredentialsAuth(oauth, token_url=token_url_for(self._base_url))

        self._owns_http_client = http_client is None
        self._http = http_client or httpx.AsyncClient(
            timeout=timeouts_for(timeout_seconds),
            limits=httpx.Limits(
                max_connections=10,
                max_keepalive_connections=5,
                keepalive_expiry=30.0,
            ),
            verify=verify_tls,
            trust_env=trust_env,
            follow_redirects=False,
        )

        self.devices = DevicesResource(self)
        self.keys = KeysResource(self)
        self.policy_file = PolicyFileResource(self)
        self.dns = DNSResource(self)
        self.webhooks = WebhooksResource(self)
        self.users = UsersResource(self)
        self.contacts = ContactsResource(self)
        self.device_posture = DevicePostureResource(self)
        self.logging = LoggingResource(self)
        self.tailnet_settings = TailnetSettingsResource(self)

    @classmethod
    def from_settings(
        cls, settings: Settings, *, http_client: httpx.AsyncClient | None = None
    ) -> AsyncTailscaleClient:
        api = settings.api
        auth = settings.auth

        oauth: OAuthConfig | None = None
        if auth.oauth.client_id:
            secret = auth.oauth.client_secret
            oauth = OAuthConfig(
                client_id=auth.oauth.client_id,
                client_secret=secret.get_secret_value() if secret is not None else "",
                scopes=tuple(auth.oauth.scopes),
            )

        api_key = auth.api_key.get_secret_value() if auth.api_key is not None else None
        return cls(
            tailnet=api.tailnet,
            api_key=api_key,
            oauth=oauth,
            base_url=str(api.base_url),
            user_agent=api.user_agent,
            timeout_seconds=api.timeout_seconds,
            verify_tls=api.verify_tls,
            trust_env=settings.hardening.trust_env,
            http_client=http_client,
        )

    @property
    def base_url(self) -> httpx.URL:
        return self._base_url

    @property
    def oauth_enabled(self) -> bool:
        return self._auth is not None

    async def aclose(self) -> None:
        if self._owns_http_client:
            await self._http.aclose()

    async def __aenter__(self) -> AsyncTailscaleClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: Any,
    ) -> None:
        await self.aclose()

    def build_url(self, *segments: object, params: Mapping[str, Any] | None = None) -> httpx.URL:
        """`{base_url}/api/v2/<segments...>` with every segment escaped on its own."""
        path = "/".join(escape_path_segment(segment) for segment in segments)
        raw = f"{str(self._base_url).rstrip('/')}/api/v2/{path}"
        query = {key: str(value) for key, value in (params or {}).items() if value is not None}
        return httpx.URL(raw, params=query or None)

    def build_tailnet_url(
        self, *segments: object, params: Mapping[str, Any] | None = None
    ) -> httpx.URL:
        return self.build_url("tailnet", self.tailnet, *segments, params=params)

    def _resolve(self, url: httpx.URL | str) -> httpx.URL:
        try:
            target = url if isinstance(url, httpx.URL) else httpx.URL(url)
            if target.is_relative_url:
                target = self._base_url.join(target)
        except httpx.InvalidURL as exc:
            raise ValueError(f"invalid request URL {str(url)!r}: {exc}") from exc
        if not target.scheme or not target.host:
            raise ValueError(f"invalid request URL {str(url)!r}")
        return target

    def build_request(
        self,
        method: str,
        url: httpx.URL | str,
        *,
        body: Any = None,
        headers: Mapping[str, str] | None = None,
        content_type: str = CONTENT_TYPE_JSON,
    ) -> httpx.Request:
        """
        Build a wire-ready request.

        `body` may be a str or bytes (sent verbatim), a pydantic model, or any
        JSON-serializable value. `Accept` is set to `content_type` for requests
        without a body, `Content-Type` otherwise.
        """
        target = self._resolve(url)
        content = encode_body(body) if body is not None else None

        request_headers: dict[str, str] = {}
        if self.user_agent:
            request_headers["User-Agent"] = self.user_agent
        request_headers.update(headers or {})
        if content is None:
            request_headers["Accept"] = content_type
        else:
            request_headers["Content-Type"] = content_type
        if self._api_key and self._auth is None:
            token = base64.b64encode(f"{self._api_key}:".encode()).decode("ascii")
            request_headers["Authorization"] = f"Basic {token}"

        return self._http.build_request(method, target, content=content, headers=request_headers)

    @overload
    async def do(self, request: httpx.Request, out: None = None) -> None: ...

    @overload
    async def do(self, request: httpx.Request, out: type[bytes]) -> bytes: ...

    @overload
    async def do(self, request: httpx.Request, out: type[_T]) -> _T: ...

    @overload
    async def do(self, request: httpx.Request, out: Any) -> Any: ...

    async def do(self, request: httpx.Request, out: Any = None) -> Any:
        """
        Send `request` and normalize the response.

        2xx: returns None when `out` is None, the raw body when `out` is bytes,
        otherwise the body (HuJSON standardized when needed) validated as `out`.
        Anything else raises the APIError subclass for the status. The whole
        exchange, token fetch included, is bounded by `timeout_seconds` and
        raises httpx.TimeoutException past it.
        """
        try:
            async with asyncio.timeout(self._timeout_seconds):
                if self._auth is not None:
                    response = await self._http.send(request, auth=self._auth)
                else:
                    response = await self._http.send(request)
        except TimeoutError as exc:
            raise httpx.TimeoutException(
                f"request exceeded {self._timeout_seconds}s", request=request
            ) from exc
        content = response.content
        status = response.status_code

        log.debug(
            "tailscale.request",
            method=request.method,
            url=str(request.url),
            status=status,
        )

        if not 200 <= status < 300:
            raise _api_error(status, content)

        if out is None:
            return None
        if out is bytes:
            return bytes(content)
        return _decode(content, out, status)


def _decode(content: bytes, out: Any, status: int) -> Any:
    try:
        data = hujson.loads(content)
    except ValueError as exc:
        raise DecodeError(f"invalid JSON response body: {exc}", status=status) from exc
    return validate_as(out, data, status=status)


def _api_error(status: int, content: bytes) -> TailscaleError:
    try:
        body = APIErrorBody.model_validate_json(content)
    except ValueError as exc:
        return DecodeError(
            f"undecodable error response (status={status}): {exc}", status=status
        )
    return error_for_status(status, body)
