from __future__ import annotations

from tailscale_client.models import (
    AWSExternalID,
    LogstreamConfiguration,
    SetLogstreamConfigurationRequest,
)
from tailscale_client.resources._base import Resource


class LoggingResource(Resource):
    """Log streaming destinations for configuration and network flow logs."""

    async def logstream_configuration(self, log_type: str) -> LogstreamConfiguration:
        return await self._call(
            "GET",
            self._tailnet_url("logging", log_type, "stream"),
            out=LogstreamConfiguration,
        )

    async def set_logstream_configuration(
        self, log_type: str, request: SetLogstreamConfigurationRequest
    ) -> None:
        await self._call("PUT", self._tailnet_url("logging", log_type, "stream"), body=request)

    async def delete_logstream_configuration(self, log_type: str) -> None:
        await self._call("DELETE", self._tailnet_url("logging", log_type, "stream"))

    async def create_or_get_aws_external_id(self, reusable: bool) -> AWSExternalID:
        """
        Get an AWS external ID for S3 streaming with role ARN authentication.

        With `reusable`, an existing unused ID may be returned instead of a new one.
        """
        return await self._call(
            "POST",
            self._tailnet_url("aws-external-id"),
            body={"reusable": reusable},
            out=AWSExternalID,
        )

    async def validate_aws_trust_policy(self, external_id: str, role_arn: str) -> None:
        await self._call(
            "POST",
            self._tailnet_url("aws-external-id", external_id, "validate-aws-trust-policy"),
            body={"roleArn": role_arn},
        )
