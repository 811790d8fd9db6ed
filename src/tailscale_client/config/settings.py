from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator
from pydantic.networks import AnyHttpUrl
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from tailscale_client.client import DEFAULT_BASE_URL, DEFAULT_TAILNET, DEFAULT_USER_AGENT
from tailscale_client.config.env_aliases import get_flat_env_settings_source
from tailscale_client.http_util import DEFAULT_TIMEOUT_SECONDS


class _Section(BaseModel):
    model_config = ConfigDict(extra="forbid")


class ApiSettings(_Section):
    base_url: AnyHttpUrl = Field(default=DEFAULT_BASE_URL, validate_default=True)
    # "-" selects the default tailnet of the credentials.
    tailnet: str = DEFAULT_TAILNET
    # Empty string keeps the httpx default User-Agent.
    user_agent: str = DEFAULT_USER_AGENT
    timeout_seconds: float = Field(default=DEFAULT_TIMEOUT_SECONDS, gt=0)
    verify_tls: bool = True

    @field_validator("tailnet")
    @classmethod
    def _strip_tailnet(cls, value: str) -> str:
        if value.strip():
            return value.strip()
        raise ValueError("api.tailnet must not be empty (use '-' for the default tailnet)")


class OAuthSettings(_Section):
    client_id: str | None = None
    client_secret: SecretStr | None = None
    scopes: list[str] = Field(default_factory=list)

    @field_validator("scopes", mode="before")
    @classmethod
    def _scopes_from_csv(cls, value: Any) -> Any:
        # TAILSCALE_OAUTH_SCOPES=devices:core,dns
        if not isinstance(value, str):
            return value
        return [scope for scope in map(str.strip, value.split(",")) if scope]


class AuthSettings(_Section):
    """Either `api_key` or a complete `oauth` client; `validate_settings` enforces that."""

    api_key: SecretStr | None = None
    oauth: OAuthSettings = Field(default_factory=OAuthSettings)


class ObservabilitySettings(_Section):
    log_level: str = "INFO"
    # "json" or "human"; when set it beats LOG_FORMAT and json_logs.
    log_format: str | None = None
    json_logs: bool = False

    @field_validator("log_format")
    @classmethod
    def _known_log_format(cls, value: str | None) -> str | None:
        if value is None:
            return None
        if value.strip().lower() in ("json", "human"):
            return value.strip().lower()
        raise ValueError("observability.log_format must be 'json' or 'human'")


class HardeningSettings(_Section):
    # http:// base URLs, for local mock servers.
    allow_insecure_http: bool = False
    # Permits api.verify_tls=false.
    allow_insecure_tls: bool = False
    # Lets httpx pick up proxy and CA bundle variables from the environment.
    trust_env: bool = False


class Settings(BaseSettings):
    """
    Client configuration.

    Sources, highest priority first: nested env vars (`API__TAILNET`), flat
    aliases (`TAILSCALE_TAILNET`), then keyword arguments such as parsed YAML.
    """

    model_config = SettingsConfigDict(env_nested_delimiter="__", extra="forbid")

    api: ApiSettings = Field(default_factory=ApiSettings)
    auth: AuthSettings = Field(default_factory=AuthSettings)
    observability: ObservabilitySettings = Field(default_factory=ObservabilitySettings)
    hardening: HardeningSettings = Field(default_factory=HardeningSettings)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[Any, ...]:
        return (
            env_settings,
            get_flat_env_settings_source,
            init_settings,
            dotenv_settings,
            file_secret_settings,
        )

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> Settings:
        """Build Settings from nested dicts only; the environment and .env are ignored."""
        return _MappingOnlySettings(**dict(data))


class _MappingOnlySettings(Settings):
    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[Any, ...]:
        return (init_settings,)
