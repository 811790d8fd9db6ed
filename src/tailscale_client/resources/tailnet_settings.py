from __future__ import annotations

from tailscale_client.models import TailnetSettings, UpdateTailnetSettingsRequest
from tailscale_client.resources._base import Resource


class TailnetSettingsResource(Resource):
    async def get(self) -> TailnetSettings:
        return await self._call("GET", self._tailnet_url("settings"), out=TailnetSettings)

    async def update(self, request: UpdateTailnetSettingsRequest) -> None:
        await self._call("PATCH", self._tailnet_url("settings"), body=request)
