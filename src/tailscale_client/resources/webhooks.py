from __future__ import annotations

from collections.abc import Sequence

from tailscale_client.models import CreateWebhookRequest, Webhook
from tailscale_client.resources._base import Resource


class WebhooksResource(Resource):
    async def create(self, request: CreateWebhookRequest) -> Webhook:
        """Create a webhook endpoint; the returned Webhook carries the signing secret."""
        return await self._call("POST", self._tailnet_url("webhooks"), body=request, out=Webhook)

    async def list(self) -> list[Webhook]:
        return await self._list(self._tailnet_url("webhooks"), "webhooks", Webhook)

    async def get(self, endpoint_id: str) -> Webhook:
        return await self._call("GET", self._url("webhooks", endpoint_id), out=Webhook)

    async def update(self, endpoint_id: str, subscriptions: Sequence[str]) -> Webhook:
        return await self._call(
            "PATCH",
            self._url("webhooks", endpoint_id),
            body={"subscriptions": [str(item) for item in subscriptions]},
            out=Webhook,
        )

    async def delete(self, endpoint_id: str) -> None:
        await self._call("DELETE", self._url("webhooks", endpoint_id))

    async def test(self, endpoint_id: str) -> None:
        """Ask the API to deliver a test event to the endpoint."""
        await self._call("POST", self._url("webhooks", endpoint_id, "test"))

    async def rotate_secret(self, endpoint_id: str) -> Webhook:
        return await self._call("POST", self._url("webhooks", endpoint_id, "rotate"), out=Webhook)
