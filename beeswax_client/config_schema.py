"""Beeswax client configuration schemas.

Defines the entity table and the connection configuration models.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_API_ROOT = "https://stingersbx.api.beeswax.com"


@dataclass(frozen=True)
class EntityConfig:
    """REST location of one Beeswax entity kind."""

    endpoint: str
    id_field: str
    upload_field: str = "creative_content"

    @property
    def strict_endpoint(self) -> str:
        """Write path; Beeswax validates strictly under /strict."""
        return f"{self.endpoint}/strict"


# Each client composes one entity manager per entry
BEESWAX_ENTITIES: dict[str, EntityConfig] = {
    "advertisers": EntityConfig("/rest/advertiser", "advertiser_id"),
    "campaigns": EntityConfig("/rest/campaign", "campaign_id"),
    "creatives": EntityConfig("/rest/creative", "creative_id"),
    "creative_add_ons": EntityConfig("/rest/creative_addon", "creative_addon_id"),
    "creative_assets": EntityConfig("/rest/creative_asset", "creative_asset_id"),
    "creative_assets_upload": EntityConfig("/rest/creative_asset/upload", "creative_asset_id"),
    "line_items": EntityConfig("/rest/line_item", "line_item_id"),
    "line_item_flights": EntityConfig("/rest/line_item_flight", "line_item_flight_id"),
    "targeting_templates": EntityConfig("/rest/targeting_template", "targeting_template_id"),
    "segment_uploads": EntityConfig("/rest/segment_upload", "segment_upload_id", upload_field="segment_file"),
    "segment_category_sharings": EntityConfig("/rest/segment_category_sharing", "segment_category_sharing_id"),
    "segment_sharings": EntityConfig("/rest/segment_sharing", "segment_sharing_id"),
    "segment_category_associations": EntityConfig(
        "/rest/segment_category_association", "segment_category_association_id"
    ),
    "segments": EntityConfig("/rest/segment", "segment_id"),
    "segment_categories": EntityConfig("/rest/segment_category", "segment_category_id"),
}


def get_entity_config(name: str) -> EntityConfig:
    """Get the entity config by name.

    Raises:
        KeyError: If the entity is not configured
    """
    try:
        return BEESWAX_ENTITIES[name]
    except KeyError:
        raise KeyError(f"Unknown Beeswax entity '{name}'. Known: {', '.join(sorted(BEESWAX_ENTITIES))}") from None


class BeeswaxConnectionConfig(BaseModel):
    """Connection configuration for the Beeswax API."""

    model_config = ConfigDict(extra="forbid")

    email: str = Field(
        ...,
        min_length=1,
        description="Beeswax login email",
        json_schema_extra={"ui_order": 1},
    )
    password: SecretStr = Field(
        ...,
        description="Beeswax login password",
        json_schema_extra={"secret": True, "ui_order": 2},
    )
    api_root: str = Field(
        default=DEFAULT_API_ROOT,
        description="Beeswax API root URL",
        json_schema_extra={"ui_order": 3},
    )
    timeout: float = Field(
        default=30.0,
        gt=0,
        description="Request timeout in seconds",
    )
    ca_bundle: Path | None = Field(
        default=None,
        description="Extra CA certificates (PEM) to trust for the API host",
    )

    @field_validator("api_root")
    @classmethod
    def validate_api_root(cls, v: str) -> str:
        """Require an http(s) URL and strip the trailing slash."""
        if not v.startswith(("https://", "http://")):
            raise ValueError(f"api_root must be an http(s) URL, got '{v}'")
        return v.rstrip("/")

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: SecretStr) -> SecretStr:
        if not v.get_secret_value():
            raise ValueError("password must not be empty")
        return v


class BeeswaxSettings(BaseSettings):
    """Beeswax connection settings read from BEESWAX_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="BEESWAX_",
        extra="ignore",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    email: str = Field(default="", description="Beeswax login email")
    password: SecretStr = Field(default=SecretStr(""), description="Beeswax login password")
    api_root: str = Field(default=DEFAULT_API_ROOT, description="Beeswax API root URL")
    timeout: float = Field(default=30.0, gt=0, description="Request timeout in seconds")
    ca_bundle: Path | None = Field(default=None, description="Extra CA certificates (PEM)")

    def to_connection_config(self) -> BeeswaxConnectionConfig:
        """Validate the settings as a connection config.

        Raises:
            pydantic.ValidationError: If credentials are missing
        """
        return BeeswaxConnectionConfig(
            email=self.email,
            password=self.password,
            api_root=self.api_root,
            timeout=self.timeout,
            ca_bundle=self.ca_bundle,
        )


def parse_connection_config(config: dict[str, Any] | None) -> BeeswaxConnectionConfig:
    """Parse a stored connection config dict.

    Args:
        config: Raw config dict (e.g. loaded from JSON)

    Returns:
        Validated BeeswaxConnectionConfig

    Raises:
        pydantic.ValidationError: If the config is missing credentials or invalid
    """
    return BeeswaxConnectionConfig(**(config or {}))
