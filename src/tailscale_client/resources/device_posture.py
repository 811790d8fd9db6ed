from __future__ import annotations

from tailscale_client.models import (
    CreatePostureIntegrationRequest,
    PostureIntegration,
    UpdatePostureIntegrationRequest,
)
from tailscale_client.resources._base import Resource


class DevicePostureResource(Resource):
    """Third-party device posture integrations (CrowdStrike Falcon, Intune, Jamf Pro, ...)."""

    async def list_integrations(self) -> list[PostureIntegration]:
        return await self._list(
            self._tailnet_url("posture", "integrations"), "integrations", PostureIntegration
        )

    async def get_integration(self, integration_id: str) -> PostureIntegration:
        return await self._call(
            "GET", self._url("posture", "integrations", integration_id), out=PostureIntegration
        )

    async def create_integration(
        self, request: CreatePostureIntegrationRequest
    ) -> PostureIntegration:
        return await self._call(
            "POST",
            self._tailnet_url("posture", "integrations"),
            body=request,
            out=PostureIntegration,
        )

    async def update_integration(
        self, integration_id: str, request: UpdatePostureIntegrationRequest
    ) -> PostureIntegration:
        return await self._call(
            "PATCH",
            self._url("posture", "integrations", integration_id),
            body=request,
            out=PostureIntegration,
        )

    async def delete_integration(self, integration_id: str) -> None:
        await self._call("DELETE", self._url("posture", "integrations", integration_id))
