"""
Configuration domain models.

Connection details for the ESM release catalog and up to three Banner
instances, plus the catalog query variant switch.
"""

from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator

from pendingreleases.domain.comparison import MAX_INSTANCES
from pendingreleases.domain.errors import ConfigurationError

REQUIRED_FIELDS = ("port", "name", "user", "password")


class Dialect(Enum):
    """Connection string style for a source database."""

    ORACLE = "oracle"
    PGWIRE = "pgwire"  # ESM's H2 server in PostgreSQL mode


class ConnectionDetails(BaseModel):
    """
    Connection details for one database.

    An entry with an empty host is inactive. An active entry must also
    supply port, name, user and password.
    """

    model_config = ConfigDict(extra="ignore")

    host: Optional[str] = Field(None, description="Database host")
    port: Optional[int] = Field(None, description="Listener port")
    name: Optional[str] = Field(None, description="Database / service name")
    user: Optional[str] = Field(None, description="Username")
    password: Optional[SecretStr] = Field(None, description="Password")
    driver: Optional[str] = Field(None, description="Explicit ODBC driver name")
    dialect: Dialect = Field(Dialect.ORACLE, description="Connection string style")
    connect_timeout: int = Field(30, description="Seconds to wait for a connection")
    label: Optional[str] = Field(None, description="Column heading in the report")

    @field_validator("host", "name", "user", "driver", "label", mode="before")
    @classmethod
    def strip_text(cls, v):
        """Trim whitespace; blank values count as missing."""
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v

    @field_validator("password", mode="before")
    @classmethod
    def strip_password(cls, v):
        if isinstance(v, str):
            return v.strip() or None
        return v

    @field_validator("port", mode="before")
    @classmethod
    def blank_port(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("port")
    @classmethod
    def validate_port(cls, v: Optional[int]) -> Optional[int]:
        """Validate port number."""
        if v is not None and (v < 1 or v > 65535):
            raise ValueError("Port must be between 1 and 65535")
        return v

    @property
    def is_active(self) -> bool:
        return bool(self.host)

    @property
    def display_name(self) -> str:
        return self.label or self.name or self.host or ""

    def missing_fields(self) -> List[str]:
        return [f for f in REQUIRED_FIELDS if getattr(self, f) is None]


class CatalogConnection(ConnectionDetails):
    """Connection to the ESM release catalog."""

    dialect: Dialect = Field(Dialect.PGWIRE, description="Connection string style")


class AppConfig(BaseModel):
    """Complete runtime configuration."""

    model_config = ConfigDict(extra="ignore")

    ga_releases_only: bool = Field(
        False, description="Only count GA releases (otherwise everything not OBSOLETE)"
    )
    catalog: CatalogConnection = Field(..., description="ESM release catalog connection")
    instances: List[Optional[ConnectionDetails]] = Field(
        default_factory=list, description="Up to three Banner instance connections"
    )

    @field_validator("instances")
    @classmethod
    def validate_instance_count(cls, v):
        if len(v) > MAX_INSTANCES:
            raise ValueError(f"At most {MAX_INSTANCES} instances can be compared")
        return v

    def active_instances(self) -> List[ConnectionDetails]:
        """Active instances in configured order."""
        return [i for i in self.instances if i is not None and i.is_active]

    def check_connections(self) -> None:
        """
        Verify every active connection is complete.

        Raises:
            ConfigurationError: On the first incomplete connection, or when
                no instance is configured at all.
        """
        if not self.catalog.is_active:
            raise ConfigurationError("Missing host for the release catalog. Please check the config.")
        missing = self.catalog.missing_fields()
        if missing:
            raise ConfigurationError(
                f"Missing connection detail for the release catalog ({', '.join(missing)}). "
                "Please check the config."
            )

        for number, instance in enumerate(self.instances, start=1):
            if instance is None or not instance.is_active:
                continue
            missing = instance.missing_fields()
            if missing:
                raise ConfigurationError(
                    f"Missing connection detail for instance {number} ({', '.join(missing)}). "
                    "Please check the config."
                )

        if not self.active_instances():
            raise ConfigurationError("No Banner instance configured. Please check the config.")
