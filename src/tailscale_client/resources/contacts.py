from __future__ import annotations

from tailscale_client.models import Contacts, UpdateContactRequest
from tailscale_client.resources._base import Resource


class ContactsResource(Resource):
    async def get(self) -> Contacts:
        return await self._call("GET", self._tailnet_url("contacts"), out=Contacts)

    async def update(self, contact_type: str, request: UpdateContactRequest) -> None:
        await self._call("PATCH", self._tailnet_url("contacts", contact_type), body=request)
