from __future__ import annotations

from tailscale_client.models import (
    Device,
    DeviceKey,
    DevicePostureAttributeRequest,
    DevicePostureAttributes,
    DeviceRoutes,
)
from tailscale_client.resources._base import Resource


class DevicesResource(Resource):
    """Devices of the tailnet. `device_id` may be the node ID (preferred) or the legacy ID."""

    async def list(self) -> list[Device]:
        return await self._list(self._tailnet_url("devices"), "devices", Device)

    async def get(self, device_id: str) -> Device:
        return await self._call("GET", self._url("device", device_id), out=Device)

    async def delete(self, device_id: str) -> None:
        await self._call("DELETE", self._url("device", device_id))

    async def authorize(self, device_id: str) -> None:
        await self.set_authorized(device_id, True)

    async def set_authorized(self, device_id: str, authorized: bool) -> None:
        await self._call(
            "POST",
            self._url("device", device_id, "authorized"),
            body={"authorized": authorized},
        )

    async def set_name(self, device_id: str, name: str) -> None:
        await self._call("POST", self._url("device", device_id, "name"), body={"name": name})

    async def set_tags(self, device_id: str, tags: list[str]) -> None:
        await self._call("POST", self._url("device", device_id, "tags"), body={"tags": tags})

    async def set_key(self, device_id: str, key: DeviceKey) -> None:
        await self._call("POST", self._url("device", device_id, "key"), body=key)

    async def set_ipv4_address(self, device_id: str, ipv4_address: str) -> None:
        await self._call(
            "POST",
            self._url("device", device_id, "ip"),
            body={"ipv4": ipv4_address},
        )

    async def set_subnet_routes(self, device_id: str, routes: list[str]) -> None:
        await self._call(
            "POST",
            self._url("device", device_id, "routes"),
            body={"routes": routes},
        )

    async def subnet_routes(self, device_id: str) -> DeviceRoutes:
        return await self._call("GET", self._url("device", device_id, "routes"), out=DeviceRoutes)

    async def get_posture_attributes(self, device_id: str) -> DevicePostureAttributes:
        return await self._call(
            "GET",
            self._url("device", device_id, "attributes"),
            out=DevicePostureAttributes,
        )

    async def set_posture_attribute(
        self,
        device_id: str,
        attribute_key: str,
        request: DevicePostureAttributeRequest,
    ) -> None:
        await self._call(
            "POST",
            self._url("device", device_id, "attributes", attribute_key),
            body=request,
        )
