"""Pydantic models for the acceptance-test configuration file.

Mirrors the JSON layout of ``vcd_test_config.json``::

    {
      "provider":   {"user": ..., "password": ..., "url": ..., "sysOrg": ...,
                     "allowInsecure": false, "tfAcceptanceTests": false},
      "vcd":        {"org": ..., "vdc": ...,
                     "catalog": {"name": ..., "catalogItem": ...}},
      "networking": {"externalIp": ..., "internalIp": ..., "edgeGateway": ...,
                     "sharedSecret": ...,
                     "local": {"localIp": ..., "localSubnetGw": ...},
                     "peer":  {"peerIp": ...,  "peerSubnetGw": ...}},
      "logging":    {"enabled": false, "logFileName": ..., ...}
    }

Every section and field may be omitted or set to ``null``; either way it
loads as its default.  Unknown keys are ignored, wrong types are rejected.
All models are frozen: a loaded config is shared read-only by every test
in the run.
"""

from __future__ import annotations

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr, model_validator

#: Placeholder shown instead of secrets in :meth:`VcdTestConfig.redacted`.
REDACTED = "********"


class _Section(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def _null_is_default(cls, data: Any) -> Any:
        """``null`` sections and fields load as their defaults."""
        if data is None:
            return {}
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


# ---------------------------------------------------------------------------
# provider
# ---------------------------------------------------------------------------


class ProviderConfig(_Section):
    """Credentials and endpoint handed to the provider under test."""

    user: StrictStr = ""
    password: StrictStr = ""
    url: StrictStr = ""
    sys_org: StrictStr = Field(default="", alias="sysOrg")
    allow_insecure: StrictBool = Field(default=False, alias="allowInsecure")
    tf_acceptance_tests: StrictBool = Field(default=False, alias="tfAcceptanceTests")


# ---------------------------------------------------------------------------
# vcd
# ---------------------------------------------------------------------------


class CatalogConfig(_Section):
    name: StrictStr = ""
    catalog_item: StrictStr = Field(default="", alias="catalogItem")


class VcdConfig(_Section):
    """Organization and virtual datacenter the tests run against."""

    org: StrictStr = ""
    vdc: StrictStr = ""
    catalog: CatalogConfig = Field(default_factory=CatalogConfig)


# ---------------------------------------------------------------------------
# networking
# ---------------------------------------------------------------------------


class LocalEndpoint(_Section):
    local_ip: StrictStr = Field(default="", alias="localIp")
    local_subnet_gateway: StrictStr = Field(default="", alias="localSubnetGw")


class PeerEndpoint(_Section):
    peer_ip: StrictStr = Field(default="", alias="peerIp")
    peer_subnet_gateway: StrictStr = Field(default="", alias="peerSubnetGw")


class NetworkingConfig(_Section):
    """Addresses used by edge gateway and VPN tests."""

    external_ip: StrictStr = Field(default="", alias="externalIp")
    internal_ip: StrictStr = Field(default="", alias="internalIp")
    edge_gateway: StrictStr = Field(default="", alias="edgeGateway")
    shared_secret: StrictStr = Field(default="", alias="sharedSecret")
    local: LocalEndpoint = Field(default_factory=LocalEndpoint)
    peer: PeerEndpoint = Field(default_factory=PeerEndpoint)


# ---------------------------------------------------------------------------
# logging
# ---------------------------------------------------------------------------


class LoggingConfig(_Section):
    """Optional file logging for the test run."""

    enabled: StrictBool = False
    log_file_name: StrictStr = Field(default="", alias="logFileName")
    log_http_request: StrictBool = Field(default=False, alias="logHttpRequest")
    log_http_response: StrictBool = Field(default=False, alias="logHttpResponse")
    verbose_cleanup: StrictBool = Field(default=False, alias="verboseCleanup")


# ---------------------------------------------------------------------------
# root
# ---------------------------------------------------------------------------


class VcdTestConfig(_Section):
    """Root model of the configuration file."""

    provider: ProviderConfig = Field(default_factory=ProviderConfig)
    vcd: VcdConfig = Field(default_factory=VcdConfig)
    networking: NetworkingConfig = Field(default_factory=NetworkingConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    def redacted(self) -> Dict[str, Any]:
        """Return the config as a JSON-ready dict with secrets masked."""
        data = self.model_dump(mode="json", by_alias=True)
        if data["provider"]["password"]:
            data["provider"]["password"] = REDACTED
        if data["networking"]["sharedSecret"]:
            data["networking"]["sharedSecret"] = REDACTED
        return data
