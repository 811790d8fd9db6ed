from __future__ import annotations

from datetime import datetime
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from tailscale_client.types import NullableDict, NullableList, Time


class _TailscaleModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


# --- Devices -----------------------------------------------------------------


class Device(_TailscaleModel):
    addresses: NullableList[str] = Field(default_factory=list)
    name: str = ""
    # Legacy numeric identifier; prefer node_id.
    id: str = ""
    node_id: str = Field(default="", alias="nodeId")
    authorized: bool = False
    user: str = ""
    tags: NullableList[str] = Field(default_factory=list)
    key_expiry_disabled: bool = Field(default=False, alias="keyExpiryDisabled")
    blocks_incoming_connections: bool = Field(default=False, alias="blocksIncomingConnections")
    client_version: str = Field(default="", alias="clientVersion")
    created: Time = None
    expires: Time = None
    hostname: str = ""
    is_external: bool = Field(default=False, alias="isExternal")
    last_seen: Time = Field(default=None, alias="lastSeen")
    machine_key: str = Field(default="", alias="machineKey")
    node_key: str = Field(default="", alias="nodeKey")
    os: str = ""
    tailnet_lock_error: str = Field(default="", alias="tailnetLockError")
    tailnet_lock_key: str = Field(default="", alias="tailnetLockKey")
    update_available: bool = Field(default=False, alias="updateAvailable")


class DeviceRoutes(_TailscaleModel):
    advertised: NullableList[str] = Field(default_factory=list, alias="advertisedRoutes")
    enabled: NullableList[str] = Field(default_factory=list, alias="enabledRoutes")


class DeviceKey(_TailscaleModel):
    key_expiry_disabled: bool = Field(default=False, alias="keyExpiryDisabled")


class DevicePostureAttributes(_TailscaleModel):
    attributes: NullableDict[str, Any] = Field(default_factory=dict)
    expiries: NullableDict[str, Time] = Field(default_factory=dict)


class DevicePostureAttributeRequest(_TailscaleModel):
    value: Any
    expiry: Time = None
    comment: str | None = None


# --- Keys --------------------------------------------------------------------


class KeyDeviceCreateCapabilities(_TailscaleModel):
    reusable: bool = False
    ephemeral: bool = False
    tags: NullableList[str] = Field(default_factory=list)
    preauthorized: bool = False


class KeyDeviceCapabilities(_TailscaleModel):
    create: KeyDeviceCreateCapabilities = Field(default_factory=KeyDeviceCreateCapabilities)


class KeyCapabilities(_TailscaleModel):
    devices: KeyDeviceCapabilities = Field(default_factory=KeyDeviceCapabilities)


class CreateKeyRequest(_TailscaleModel):
    capabilities: KeyCapabilities
    expiry_seconds: int | None = Field(default=None, alias="expirySeconds")
    description: str | None = None


class Key(_TailscaleModel):
    id: str = ""
    key: str = ""
    description: str = ""
    created: Time = None
    expires: Time = None
    revoked: Time = None
    invalid: bool = False
    capabilities: KeyCapabilities = Field(default_factory=KeyCapabilities)


# --- DNS ---------------------------------------------------------------------


class DNSPreferences(_TailscaleModel):
    magic_dns: bool = Field(default=False, alias="magicDNS")


# Domain -> nameservers. An empty list (or None) for a domain clears it on PATCH.
SplitDNSRequest = dict[str, list[str] | None]
SplitDNSResponse = dict[str, list[str]]


# --- Webhooks ----------------------------------------------------------------


class WebhookProviderType(StrEnum):
    EMPTY = ""
    SLACK = "slack"
    MATTERMOST = "mattermost"
    GOOGLE_CHAT = "googlechat"
    DISCORD = "discord"


class WebhookSubscriptionType(StrEnum):
    CATEGORY_TAILNET_MANAGEMENT = "categoryTailnetManagement"
    NODE_CREATED = "nodeCreated"
    NODE_NEEDS_APPROVAL = "nodeNeedsApproval"
    NODE_APPROVED = "nodeApproved"
    NODE_KEY_EXPIRING_IN_ONE_DAY = "nodeKeyExpiringInOneDay"
    NODE_KEY_EXPIRED = "nodeKeyExpired"
    NODE_DELETED = "nodeDeleted"
    POLICY_UPDATE = "policyUpdate"
    USER_CREATED = "userCreated"
    USER_NEEDS_APPROVAL = "userNeedsApproval"
    USER_SUSPENDED = "userSuspended"
    USER_RESTORED = "userRestored"
    USER_DELETED = "userDeleted"
    USER_APPROVED = "userApproved"
    USER_ROLE_UPDATED = "userRoleUpdated"
    CATEGORY_DEVICE_MISCONFIGURATIONS = "categoryDeviceMisconfigurations"
    SUBNET_IP_FORWARDING_NOT_ENABLED = "subnetIPForwardingNotEnabled"
    EXIT_NODE_IP_FORWARDING_NOT_ENABLED = "exitNodeIPForwardingNotEnabled"


class Webhook(_TailscaleModel):
    endpoint_id: str = Field(default="", alias="endpointId")
    endpoint_url: str = Field(default="", alias="endpointUrl")
    provider_type: str = Field(default="", alias="providerType")
    creator_login_name: str = Field(default="", alias="creatorLoginName")
    created: Time = None
    last_modified: Time = Field(default=None, alias="lastModified")
    subscriptions: NullableList[str] = Field(default_factory=list)
    # Only populated on create and rotate.
    secret: str | None = None


class CreateWebhookRequest(_TailscaleModel):
    endpoint_url: str = Field(alias="endpointUrl")
    provider_type: str = Field(default=WebhookProviderType.EMPTY, alias="providerType")
    subscriptions: list[str] = Field(default_factory=list)


# --- Users -------------------------------------------------------------------


class UserType(StrEnum):
    MEMBER = "member"
    SHARED = "shared"


class UserRole(StrEnum):
    OWNER = "owner"
    MEMBER = "member"
    ADMIN = "admin"
    IT_ADMIN = "it-admin"
    NETWORK_ADMIN = "network-admin"
    BILLING_ADMIN = "billing-admin"
    AUDITOR = "auditor"


class UserStatus(StrEnum):
    ACTIVE = "active"
    IDLE = "idle"
    SUSPENDED = "suspended"
    NEEDS_APPROVAL = "needs-approval"
    OVER_BILLING_LIMIT = "over-billing-limit"


class User(_TailscaleModel):
    id: str = ""
    display_name: str = Field(default="", alias="displayName")
    login_name: str = Field(default="", alias="loginName")
    profile_pic_url: str = Field(default="", alias="profilePicUrl")
    tailnet_id: str = Field(default="", alias="tailnetId")
    created: datetime | None = None
    type: str = ""
    role: str = ""
    status: str = ""
    device_count: int = Field(default=0, alias="deviceCount")
    last_seen: datetime | None = Field(default=None, alias="lastSeen")
    currently_connected: bool = Field(default=False, alias="currentlyConnected")


# --- Contacts ----------------------------------------------------------------


class ContactType(StrEnum):
    ACCOUNT = "account"
    SUPPORT = "support"
    SECURITY = "security"


class Contact(_TailscaleModel):
    email: str = ""
    # Used while `email` is unverified.
    fallback_email: str | None = Field(default=None, alias="fallbackEmail")
    needs_verification: bool = Field(default=False, alias="needsVerification")


class Contacts(_TailscaleModel):
    account: Contact = Field(default_factory=Contact)
    support: Contact = Field(default_factory=Contact)
    security: Contact = Field(default_factory=Contact)


class UpdateContactRequest(_TailscaleModel):
    email: str | None = None


# --- Device posture ----------------------------------------------------------


class PostureIntegrationProvider(StrEnum):
    FALCON = "falcon"
    INTUNE = "intune"
    JAMF_PRO = "jamfpro"
    KANDJI = "kandji"
    KOLIDE = "kolide"
    SENTINEL_ONE = "sentinelone"


class PostureIntegration(_TailscaleModel):
    id: str = ""
    provider: str = ""
    cloud_id: str = Field(default="", alias="cloudId")
    client_id: str = Field(default="", alias="clientId")
    tenant_id: str = Field(default="", alias="tenantId")


class CreatePostureIntegrationRequest(_TailscaleModel):
    provider: str
    cloud_id: str | None = Field(default=None, alias="cloudId")
    client_id: str | None = Field(default=None, alias="clientId")
    tenant_id: str | None = Field(default=None, alias="tenantId")
    client_secret: str | None = Field(default=None, alias="clientSecret")


class UpdatePostureIntegrationRequest(_TailscaleModel):
    cloud_id: str | None = Field(default=None, alias="cloudId")
    client_id: str | None = Field(default=None, alias="clientId")
    tenant_id: str | None = Field(default=None, alias="tenantId")
    # None keeps the stored secret.
    client_secret: str | None = Field(default=None, alias="clientSecret")


# --- Logging -----------------------------------------------------------------


class LogstreamEndpointType(StrEnum):
    SPLUNK = "splunk"
    ELASTIC = "elastic"
    PANTHER = "panther"
    CRIBL = "cribl"
    DATADOG = "datadog"
    AXIOM = "axiom"
    S3 = "s3"


class LogType(StrEnum):
    CONFIGURATION = "configuration"
    NETWORK = "network"


class S3AuthenticationType(StrEnum):
    ACCESS_KEY = "accesskey"
    ROLE_ARN = "rolearn"


class LogstreamConfiguration(_TailscaleModel):
    log_type: str = Field(default="", alias="logType")
    destination_type: str = Field(default="", alias="destinationType")
    url: str = ""
    user: str = ""
    s3_bucket: str = Field(default="", alias="s3Bucket")
    s3_region: str = Field(default="", alias="s3Region")
    s3_key_prefix: str = Field(default="", alias="s3KeyPrefix")
    s3_authentication_type: str = Field(default="", alias="s3AuthenticationType")
    s3_access_key_id: str = Field(default="", alias="s3AccessKeyId")
    s3_role_arn: str = Field(default="", alias="s3RoleArn")
    s3_external_id: str = Field(default="", alias="s3ExternalId")


class SetLogstreamConfigurationRequest(_TailscaleModel):
    destination_type: str = Field(alias="destinationType")
    url: str | None = None
    user: str | None = None
    token: str | None = None
    s3_bucket: str | None = Field(default=None, alias="s3Bucket")
    s3_region: str | None = Field(default=None, alias="s3Region")
    s3_key_prefix: str | None = Field(default=None, alias="s3KeyPrefix")
    s3_authentication_type: str | None = Field(default=None, alias="s3AuthenticationType")
    s3_access_key_id: str | None = Field(default=None, alias="s3AccessKeyId")
    s3_secret_access_key: str | None = Field(default=None, alias="s3SecretAccessKey")
    s3_role_arn: str | None = Field(default=None, alias="s3RoleArn")
    s3_external_id: str | None = Field(default=None, alias="s3ExternalId")


class AWSExternalID(_TailscaleModel):
    external_id: str = Field(default="", alias="externalId")
    tailscale_aws_account_id: str = Field(default="", alias="tailscaleAwsAccountId")


# --- Tailnet settings --------------------------------------------------------


class RoleAllowedToJoinExternalTailnets(StrEnum):
    NONE = "none"
    ADMIN = "admin"
    MEMBER = "member"


class TailnetSettings(_TailscaleModel):
    devices_approval_on: bool = Field(default=False, alias="devicesApprovalOn")
    devices_auto_updates_on: bool = Field(default=False, alias="devicesAutoUpdatesOn")
    devices_key_duration_days: int = Field(default=0, alias="devicesKeyDurationDays")
    users_approval_on: bool = Field(default=False, alias="usersApprovalOn")
    users_role_allowed_to_join_external_tailnets: str = Field(
        default="", alias="usersRoleAllowedToJoinExternalTailnets"
    )
    network_flow_logging_on: bool = Field(default=False, alias="networkFlowLoggingOn")
    regional_routing_on: bool = Field(default=False, alias="regionalRoutingOn")
    posture_identity_collection_on: bool = Field(
        default=False, alias="postureIdentityCollectionOn"
    )


class UpdateTailnetSettingsRequest(_TailscaleModel):
    """Partial update; fields left as None are not sent and keep their current value."""

    devices_approval_on: bool | None = Field(default=None, alias="devicesApprovalOn")
    devices_auto_updates_on: bool | None = Field(default=None, alias="devicesAutoUpdatesOn")
    devices_key_duration_days: int | None = Field(default=None, alias="devicesKeyDurationDays")
    users_approval_on: bool | None = Field(default=None, alias="usersApprovalOn")
    users_role_allowed_to_join_external_tailnets: str | None = Field(
        default=None, alias="usersRoleAllowedToJoinExternalTailnets"
    )
    network_flow_logging_on: bool | None = Field(default=None, alias="networkFlowLoggingOn")
    regional_routing_on: bool | None = Field(default=None, alias="regionalRoutingOn")
    posture_identity_collection_on: bool | None = Field(
        default=None, alias="postureIdentityCollectionOn"
    )
