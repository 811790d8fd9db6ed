from __future__ import annotations

from tailscale_client._version import __version__
from tailscale_client.client import AsyncTailscaleClient
from tailscale_client.errors import (
    APIError,
    AuthError,
    ConflictError,
    DecodeError,
    NotFoundError,
    PolicyValidationError,
    PreconditionFailedError,
    RateLimitError,
    ServerError,
    TailscaleError,
    error_data,
    is_not_found,
)
from tailscale_client.oauth import OAuthConfig
from tailscale_client.policy import ACL

__all__ = [
    "ACL",
    "APIError",
    "AsyncTailscaleClient",
    "AuthError",
    "ConflictError",
    "DecodeError",
    "NotFoundError",
    "OAuthConfig",
    "PolicyValidationError",
    "PreconditionFailedError",
    "RateLimitError",
    "ServerError",
    "TailscaleError",
    "__version__",
    "error_data",
    "is_not_found",
]
