"""Models of the tailnet policy file (ACL document).

Every field is optional and omitted from the encoded document when unset, so a
round trip through the API does not introduce keys the author never wrote.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from tailscale_client.types import Duration, NullableDict, NullableList


class _PolicyModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class ACLAutoApprovers(_PolicyModel):
    routes: dict[str, list[str]] | None = None
    exit_node: list[str] | None = Field(default=None, alias="exitNode")


class ACLEntry(_PolicyModel):
    action: str | None = None
    ports: list[str] | None = None
    users: list[str] | None = None
    source: list[str] | None = Field(default=None, alias="src")
    destination: list[str] | None = Field(default=None, alias="dst")
    protocol: str | None = Field(default=None, alias="proto")
    source_posture: list[str] | None = Field(default=None, alias="srcPosture")


class ACLTest(_PolicyModel):
    user: str | None = None
    allow: list[str] | None = None
    deny: list[str] | None = None
    source: str | None = Field(default=None, alias="src")
    accept: list[str] | None = None


class ACLDERPNode(_PolicyModel):
    name: str = ""
    region_id: int = Field(default=0, alias="regionID")
    host_name: str = Field(default="", alias="hostName")
    cert_name: str | None = Field(default=None, alias="certName")
    ipv4: str | None = None
    ipv6: str | None = None
    stun_port: int | None = Field(default=None, alias="stunPort")
    stun_only: bool | None = Field(default=None, alias="stunOnly")
    derp_port: int | None = Field(default=None, alias="derpPort")
    # The API spells this key "insecureForRests".
    insecure_for_tests: bool | None = Field(default=None, alias="insecureForRests")
    stun_test_ip: str | None = Field(default=None, alias="stunTestIP")


class ACLDERPRegion(_PolicyModel):
    region_id: int = Field(default=0, alias="regionID")
    region_code: str = Field(default="", alias="regionCode")
    region_name: str = Field(default="", alias="regionName")
    avoid: bool | None = None
    nodes: NullableList[ACLDERPNode] = Field(default_factory=list)


class ACLDERPMap(_PolicyModel):
    regions: NullableDict[int, ACLDERPRegion] = Field(default_factory=dict)
    omit_default_regions: bool | None = Field(default=None, alias="omitDefaultRegions")


class ACLSSH(_PolicyModel):
    action: str | None = None
    users: list[str] | None = None
    source: list[str] | None = Field(default=None, alias="src")
    destination: list[str] | None = Field(default=None, alias="dst")
    check_period: Duration | None = Field(default=None, alias="checkPeriod")
    recorder: list[str] | None = None
    enforce_recorder: bool | None = Field(default=None, alias="enforceRecorder")


class NodeAttrGrantApp(_PolicyModel):
    name: str | None = None
    connectors: list[str] | None = None
    domains: list[str] | None = None


class NodeAttrGrant(_PolicyModel):
    target: list[str] | None = None
    attr: list[str] | None = None
    app: dict[str, list[NodeAttrGrantApp]] | None = None


class ACL(_PolicyModel):
    acls: list[ACLEntry] | None = None
    auto_approvers: ACLAutoApprovers | None = Field(default=None, alias="autoApprovers")
    groups: dict[str, list[str]] | None = None
    hosts: dict[str, str] | None = None
    tag_owners: dict[str, list[str]] | None = Field(default=None, alias="tagOwners")
    derp_map: ACLDERPMap | None = Field(default=None, alias="derpMap")
    tests: list[ACLTest] | None = None
    ssh: list[ACLSSH] | None = None
    node_attrs: list[NodeAttrGrant] | None = Field(default=None, alias="nodeAttrs")
    disable_ipv4: bool | None = Field(default=None, alias="disableIPv4")
    one_cgnat_route: str | None = Field(default=None, alias="oneCGNATRoute")
    randomize_client_port: bool | None = Field(default=None, alias="randomizeClientPort")
    # Experimental in the API.
    postures: dict[str, list[str]] | None = None
    default_source_posture: list[str] | None = Field(default=None, alias="defaultSrcPosture")
