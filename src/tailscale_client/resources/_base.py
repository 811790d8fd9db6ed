from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

import httpx

from tailscale_client.http_util import CONTENT_TYPE_JSON, validate_as

if TYPE_CHECKING:
    from tailscale_client.client import AsyncTailscaleClient


class Resource:
    """Base for the per-area facades; holds the shared client."""

    def __init__(self, client: AsyncTailscaleClient) -> None:
        self._client = client

    def _url(self, *segments: object, params: Mapping[str, Any] | None = None) -> httpx.URL:
        return self._client.build_url(*segments, params=params)

    def _tailnet_url(
        self, *segments: object, params: Mapping[str, Any] | None = None
    ) -> httpx.URL:
        return self._client.build_tailnet_url(*segments, params=params)

    async def _call(
        self,
        method: str,
        url: httpx.URL,
        *,
        body: Any = None,
        out: Any = None,
        headers: Mapping[str, str] | None = None,
        content_type: str = CONTENT_TYPE_JSON,
    ) -> Any:
        request = self._client.build_request(
            method, url, body=body, headers=headers, content_type=content_type
        )
        return await self._client.do(request, out)

    async def _list(self, url: httpx.URL, envelope: str, item: Any) -> list[Any]:
        """GET a `{"<envelope>": [...]}` wrapper and return the list, `[]` for null/missing."""
        resp = await self._call("GET", url, out=dict[str, Any])
        return validate_as(list[item], resp.get(envelope) or [])
