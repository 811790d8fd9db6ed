from __future__ import annotations

from collections.abc import Mapping, Sequence

from tailscale_client.models import DNSPreferences, SplitDNSResponse
from tailscale_client.resources._base import Resource


class DNSResource(Resource):
    async def nameservers(self) -> list[str]:
        return await self._list(self._tailnet_url("dns", "nameservers"), "dns", str)

    async def set_nameservers(self, nameservers: Sequence[str]) -> None:
        await self._call(
            "POST",
            self._tailnet_url("dns", "nameservers"),
            body={"dns": list(nameservers)},
        )

    async def search_paths(self) -> list[str]:
        return await self._list(self._tailnet_url("dns", "searchpaths"), "searchPaths", str)

    async def set_search_paths(self, search_paths: Sequence[str]) -> None:
        await self._call(
            "POST",
            self._tailnet_url("dns", "searchpaths"),
            body={"searchPaths": list(search_paths)},
        )

    async def preferences(self) -> DNSPreferences:
        return await self._call("GET", self._tailnet_url("dns", "preferences"), out=DNSPreferences)

    async def set_preferences(self, preferences: DNSPreferences) -> None:
        await self._call("POST", self._tailnet_url("dns", "preferences"), body=preferences)

    async def split_dns(self) -> SplitDNSResponse:
        resp = await self._call(
            "GET",
            self._tailnet_url("dns", "split-dns"),
            out=dict[str, list[str] | None],
        )
        return _normalize_split_dns(resp)

    async def update_split_dns(
        self, request: Mapping[str, Sequence[str] | None]
    ) -> SplitDNSResponse:
        """
        Partially update split DNS (PATCH).

        Mapping a domain to an empty list or None clears it; domains not in
        `request` are left untouched. Returns the resulting configuration.
        """
        resp = await self._call(
            "PATCH",
            self._tailnet_url("dns", "split-dns"),
            body=_split_dns_body(request),
            out=dict[str, list[str] | None],
        )
        return _normalize_split_dns(resp)

    async def set_split_dns(self, request: Mapping[str, Sequence[str] | None]) -> None:
        """Replace the whole split DNS configuration (PUT); `{}` removes every mapping."""
        await self._call(
            "PUT",
            self._tailnet_url("dns", "split-dns"),
            body=_split_dns_body(request),
        )


def _split_dns_body(request: Mapping[str, Sequence[str] | None]) -> dict[str, list[str] | None]:
    return {
        domain: list(servers) if servers is not None else None
        for domain, servers in request.items()
    }


def _normalize_split_dns(resp: Mapping[str, list[str] | None] | None) -> SplitDNSResponse:
    return {domain: servers or [] for domain, servers in (resp or {}).items()}
