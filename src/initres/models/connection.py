# src/initres/models/connection.py
"""
Immutable connection settings produced once when a usage source is created.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class CredentialSource(str, Enum):
    """Which link of the credential chain configured the connection."""

    SERVICE_ACCOUNT = "service_account"
    AUTH_FILE = "auth_file"
    DEFAULT = "default"


class TLSSettings(BaseModel):
    """
    TLS material used by the HTTP client. File paths are handed to the ssl
    module as-is.
    """

    model_config = ConfigDict(frozen=True)

    insecure_skip_verify: bool = False
    ca_file: Optional[str] = None
    cert_file: Optional[str] = None
    key_file: Optional[str] = None


class ConnectionConfig(BaseModel):
    """
    Everything needed to talk to the metrics backend.
    """

    model_config = ConfigDict(frozen=True)

    url: str = Field(..., description="Backend base URL without query parameters")
    tenant: str
    token: Optional[str] = Field(None, repr=False)
    tls: TLSSettings = Field(default_factory=TLSSettings)
    use_namespace: bool = False
    credential_source: CredentialSource = CredentialSource.DEFAULT
