from __future__ import annotations

from datetime import timedelta

from tailscale_client.models import CreateKeyRequest, Key, KeyCapabilities
from tailscale_client.resources._base import Resource


class KeysResource(Resource):
    async def create(
        self,
        capabilities: KeyCapabilities,
        *,
        expiry: timedelta | None = None,
        description: str | None = None,
    ) -> Key:
        """Create an auth key; `expiry` is sent as whole seconds."""
        request = CreateKeyRequest(
            capabilities=capabilities,
            expiry_seconds=int(expiry.total_seconds()) if expiry is not None else None,
            description=description,
        )
        return await self._call("POST", self._tailnet_url("keys"), body=request, out=Key)

    async def get(self, key_id: str) -> Key:
        return await self._call("GET", self._tailnet_url("keys", key_id), out=Key)

    async def list(self) -> list[Key]:
        return await self._list(self._tailnet_url("keys"), "keys", Key)

    async def delete(self, key_id: str) -> None:
        await self._call("DELETE", self._tailnet_url("keys", key_id))
