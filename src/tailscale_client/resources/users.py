from __future__ import annotations

from tailscale_client.models import User
from tailscale_client.resources._base import Resource


class UsersResource(Resource):
    async def list(self, *, user_type: str | None = None, role: str | None = None) -> list[User]:
        """List users, optionally filtered by type (`UserType`) and role (`UserRole`)."""
        params = {"type": user_type, "role": role}
        return await self._list(self._tailnet_url("users", params=params), "users", User)

    async def get(self, user_id: str) -> User:
        return await self._call("GET", self._url("users", user_id), out=User)
