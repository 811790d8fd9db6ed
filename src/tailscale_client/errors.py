from __future__ import annotations

from http import HTTPStatus

from pydantic import BaseModel, ConfigDict, Field


class APIErrorData(BaseModel):
    """One entry of the `data` array in a Tailscale API error body."""

    model_config = ConfigDict(extra="ignore")

    user: str = ""
    errors: list[str] = Field(default_factory=list)


class APIErrorBody(BaseModel):
    """Wire shape of an error response: `{"message": ..., "data": [...]}`."""

    model_config = ConfigDict(extra="ignore")

    message: str = ""
    data: list[APIErrorData] | None = None


class TailscaleError(Exception):
    """Base class for Tailscale client errors."""


class APIError(TailscaleError):
    """The API answered with a non-2xx status.

    `status` is attached by the response normalizer after decoding the body;
    it is not part of the wire format.
    """

    def __init__(
        self,
        message: str,
        *,
        status: int,
        data: list[APIErrorData] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status = status
        self.data: list[APIErrorData] = list(data or [])

    def __str__(self) -> str:
        return f"{self.message} ({self.status})"


class AuthError(APIError):
    """Authentication/authorization failed (HTTP 401/403, or the OAuth token endpoint refused)."""


class NotFoundError(APIError):
    """Requested resource was not found (HTTP 404)."""


class ConflictError(APIError):
    """The request conflicts with the current state of the resource (HTTP 409)."""


class PreconditionFailedError(APIError):
    """An `If-Match` precondition did not hold (HTTP 412)."""


class RateLimitError(APIError):
    """Request was rate limited (HTTP 429)."""


class ServerError(APIError):
    """Server-side failure (HTTP 5xx)."""


class PolicyValidationError(APIError):
    """The policy file validation endpoint reported problems in a successful response."""

    def __str__(self) -> str:
        details = "; ".join(
            f"{entry.user}: {', '.join(entry.errors)}" if entry.user else ", ".join(entry.errors)
            for entry in self.data
        )
        if details:
            return f"ACL validation failed: {self.message}; {details}"
        return f"ACL validation failed: {self.message}"


class DecodeError(TailscaleError, ValueError):
    """A response body could not be decoded into the expected shape."""

    def __init__(self, message: str, *, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


_STATUS_ERRORS: dict[int, type[APIError]] = {
    HTTPStatus.UNAUTHORIZED: AuthError,
    HTTPStatus.FORBIDDEN: AuthError,
    HTTPStatus.NOT_FOUND: NotFoundError,
    HTTPStatus.CONFLICT: ConflictError,
    HTTPStatus.PRECONDITION_FAILED: PreconditionFailedError,
    HTTPStatus.TOO_MANY_REQUESTS: RateLimitError,
}


def error_for_status(status: int, body: APIErrorBody) -> APIError:
    """Build the APIError subclass matching `status` from a decoded error body."""
    cls = _STATUS_ERRORS.get(status)
    if cls is None:
        cls = ServerError if status >= 500 else APIError
    return cls(body.message, status=status, data=body.data)


def is_not_found(exc: BaseException) -> bool:
    """True if `exc` is an APIError carrying HTTP 404."""
    return isinstance(exc, APIError) and exc.status == HTTPStatus.NOT_FOUND


def error_data(exc: BaseException) -> list[APIErrorData]:
    """Return the per-entry error data of an APIError, or an empty list for anything else."""
    if isinstance(exc, APIError):
        return exc.data
    return []
