"""Cross-field checks that pydantic field validators cannot express."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from pydantic import SecretStr, ValidationError

from tailscale_client.config.settings import Settings

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")

_BOTH_AUTH_MODES = (
    "auth.api_key and auth.oauth are mutually exclusive. "
    "Set either TAILSCALE_API_KEY or the TAILSCALE_OAUTH_* variables."
)
_NO_AUTH = (
    "No authentication credentials provided. Set TAILSCALE_API_KEY, or "
    "TAILSCALE_OAUTH_CLIENT_ID and TAILSCALE_OAUTH_CLIENT_SECRET."
)
_PLAIN_HTTP = (
    "Plain HTTP is not allowed by default. "
    "Use https:// or set hardening.allow_insecure_http=true."
)
_NO_TLS_VERIFY = (
    "Disabling TLS verification is not allowed by default. "
    "Set hardening.allow_insecure_tls=true to override (not recommended)."
)


@dataclass(frozen=True)
class ConfigValidationIssue:
    path: str
    message: str

    def __str__(self) -> str:
        return f"- {self.path}: {self.message}"


class ConfigValidationError(ValueError):
    """All configuration problems found in one pass."""

    def __init__(self, issues: Iterable[ConfigValidationIssue]):
        self.issues = list(issues)
        super().__init__("\n".join(["Configuration is invalid:", *map(str, self.issues)]))


def issues_from_pydantic_error(error: ValidationError) -> list[ConfigValidationIssue]:
    return [
        ConfigValidationIssue(
            path=".".join(map(str, item.get("loc", ()))) or "<root>",
            message=item.get("msg", "Invalid value"),
        )
        for item in error.errors(include_url=False)
    ]


def _filled(value: str | SecretStr | None) -> bool:
    if isinstance(value, SecretStr):
        value = value.get_secret_value()
    return bool((value or "").strip())


def _auth_issues(settings: Settings) -> Iterator[ConfigValidationIssue]:
    auth = settings.auth
    key_set = _filled(auth.api_key)
    id_set = _filled(auth.oauth.client_id)
    secret_set = _filled(auth.oauth.client_secret)

    if key_set:
        if id_set or secret_set:
            yield ConfigValidationIssue("auth", _BOTH_AUTH_MODES)
        return
    if not (id_set or secret_set):
        yield ConfigValidationIssue("auth", _NO_AUTH)
        return
    # Half-configured OAuth client.
    if not id_set:
        yield ConfigValidationIssue("auth.oauth.client_id", "Field required")
    if not secret_set:
        yield ConfigValidationIssue("auth.oauth.client_secret", "Field required")


def _transport_issues(settings: Settings) -> Iterator[ConfigValidationIssue]:
    api, hardening = settings.api, settings.hardening
    if api.base_url.scheme == "http" and not hardening.allow_insecure_http:
        yield ConfigValidationIssue("api.base_url", _PLAIN_HTTP)
    if not api.verify_tls and not hardening.allow_insecure_tls:
        yield ConfigValidationIssue("api.verify_tls", _NO_TLS_VERIFY)


def validate_settings(settings: Settings) -> None:
    """Raise ConfigValidationError listing every cross-field problem in `settings`."""
    issues: list[ConfigValidationIssue] = []

    level = settings.observability.log_level
    if level.upper() not in LOG_LEVELS:
        issues.append(
            ConfigValidationIssue(
                "observability.log_level",
                f"Unsupported log level {level!r} (allowed: {', '.join(LOG_LEVELS)})",
            )
        )
    issues.extend(_auth_issues(settings))
    issues.extend(_transport_issues(settings))

    if issues:
        raise ConfigValidationError(issues)
