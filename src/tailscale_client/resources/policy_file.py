from __future__ import annotations

import json

from tailscale_client import hujson
from tailscale_client.errors import APIErrorBody, DecodeError, PolicyValidationError
from tailscale_client.http_util import CONTENT_TYPE_HUJSON, CONTENT_TYPE_JSON, validate_as
from tailscale_client.policy import ACL
from tailscale_client.resources._base import Resource


def _content_type_for(acl: ACL | str) -> str:
    if isinstance(acl, ACL):
        return CONTENT_TYPE_JSON
    if isinstance(acl, str):
        return CONTENT_TYPE_HUJSON
    raise TypeError(f"expected ACL content as a str or ACL model; got {type(acl).__name__}")


class PolicyFileResource(Resource):
    """The tailnet policy file, as a typed `ACL` or as raw HuJSON text."""

    async def get(self) -> ACL:
        return await self._call("GET", self._tailnet_url("acl"), out=ACL)

    async def raw(self) -> str:
        content = await self._call(
            "GET",
            self._tailnet_url("acl"),
            out=bytes,
            content_type=CONTENT_TYPE_HUJSON,
        )
        return content.decode("utf-8")

    async def set(self, acl: ACL | str, *, etag: str | None = None) -> None:
        """
        Replace the policy file.

        A str is sent verbatim as HuJSON. With `etag`, the update only applies
        if the stored policy still matches (`If-Match`).
        """
        content_type = _content_type_for(acl)
        # Quoted entity tag, escaped like Go's %q.
        headers = {"If-Match": json.dumps(etag)} if etag is not None else None
        await self._call(
            "POST",
            self._tailnet_url("acl"),
            body=acl,
            headers=headers,
            content_type=content_type,
        )

    async def validate(self, acl: ACL | str) -> None:
        """
        Validate without saving.

        An empty or `null` 2xx body means the policy is valid; a body carrying a
        message raises PolicyValidationError.
        """
        content_type = _content_type_for(acl)
        content = await self._call(
            "POST",
            self._tailnet_url("acl", "validate"),
            body=acl,
            out=bytes,
            content_type=content_type,
        )
        if not content.strip():
            return
        try:
            data = hujson.loads(content)
        except ValueError as exc:
            raise DecodeError(f"invalid validation response body: {exc}", status=200) from exc
        if data is None:
            return
        result = validate_as(APIErrorBody, data, status=200)
        if result.message:
            raise PolicyValidationError(result.message, status=200, data=result.data)
