"""
Service settings for the World Imagery Wayback client.

``WaybackSettings`` holds everything the client needs to know about the remote
services (subdomains, URL templates, configuration file location, request
limits) and builds the concrete URLs from it.
"""

import random
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator


WAYBACK_SERVICE_URL_TEMPLATE = (
    "https://{subDomain}.maptiles.arcgis.com/arcgis/rest/services/World_Imagery/MapServer"
)

WAYBACK_SERVICE_SUB_DOMAINS_PROD = ["wayback", "wayback-a", "wayback-b"]
WAYBACK_SERVICE_SUB_DOMAINS_DEV = ["waybackdev"]

WAYBACK_CONFIG_FILE_PROD = (
    "https://s3-us-west-2.amazonaws.com/config.maptiles.arcgis.com/waybackconfig.json"
)
WAYBACK_CONFIG_FILE_DEV = (
    "https://s3-us-west-2.amazonaws.com/config.maptiles.arcgis.com/dev/waybackconfig.json"
)

# Tile URLs on this host get their subdomain rotated
DEFAULT_TILE_HOST_PREFIX = "https://wayback.maptiles.arcgis.com"
DEFAULT_TILE_SUB_DOMAIN = "wayback"


class WaybackSettings(BaseModel):
    """Resolved settings for one environment, plus caller overrides.

    Attributes:
        environment: Environment name the defaults were taken from
        sub_domains: Environment default subdomains of the tile service
        custom_sub_domains: Caller supplied subdomains, used when non-empty
        service_url_template: Service root template with a ``{subDomain}`` placeholder
        config_file_url: Environment default location of the wayback configuration
        custom_config_file_url: Caller supplied configuration location
        config_data: Pre-supplied configuration document, skips the download
        request_timeout_seconds: Per-request timeout of the HTTP client
        max_image_fetch_workers: Size of the thread pool used for tile downloads
        strict_image_fetch: Fail the whole query when any tile download fails
    """

    environment: str = Field("production", description="Environment name")
    sub_domains: List[str] = Field(
        default_factory=lambda: list(WAYBACK_SERVICE_SUB_DOMAINS_PROD),
        min_length=1,
        description="Default subdomains of the wayback tile service"
    )
    custom_sub_domains: Optional[List[str]] = Field(
        None, description="Subdomains overriding the environment defaults"
    )
    service_url_template: str = Field(
        WAYBACK_SERVICE_URL_TEMPLATE,
        description="Root URL template of the wayback map service"
    )
    config_file_url: str = Field(
        WAYBACK_CONFIG_FILE_PROD, description="Default wayback configuration file URL"
    )
    custom_config_file_url: Optional[str] = Field(
        None, description="Configuration file URL overriding the default"
    )
    config_data: Optional[Dict[str, Any]] = Field(
        None, description="Wayback configuration used instead of downloading it"
    )
    request_timeout_seconds: float = Field(
        30.0, gt=0, description="Timeout applied to every HTTP request"
    )
    max_image_fetch_workers: int = Field(
        8, ge=1, le=64, description="Concurrent tile image downloads"
    )
    strict_image_fetch: bool = Field(
        True, description="Raise when any tile image download fails"
    )

    model_config = {"frozen": True}

    @field_validator('service_url_template')
    @classmethod
    def validate_service_url_template(cls, v: str) -> str:
        """The service template must carry the subdomain placeholder."""
        if "{subDomain}" not in v:
            raise ValueError("service_url_template must contain '{subDomain}'")
        return v.rstrip("/")

    def get_sub_domains(self) -> List[str]:
        """Subdomains tiles are served from; custom ones win when non-empty."""
        if self.custom_sub_domains:
            return list(self.custom_sub_domains)
        return list(self.sub_domains)

    def get_random_sub_domain(self) -> str:
        return random.choice(self.get_sub_domains())

    def get_service_base_url(self) -> str:
        """Root URL of the wayback map service on a randomly picked subdomain."""
        return self.service_url_template.replace("{subDomain}", self.get_random_sub_domain())

    def get_config_file_url(self) -> str:
        return self.custom_config_file_url or self.config_file_url

    def get_tile_image_url(self, url_template: str, level: int, row: int, column: int) -> str:
        """
        Fill a release's tile URL template for one tile.

        Templates pointing at the default ``wayback`` host are spread over the
        configured subdomains; any other host is left untouched.

        Args:
            url_template: Template with ``{level}``, ``{row}`` and ``{col}`` placeholders
            level: Tile level
            row: Tile row
            column: Tile column

        Returns:
            Complete tile image URL
        """
        url = (
            url_template
            .replace("{level}", str(level))
            .replace("{row}", str(row))
            .replace("{col}", str(column))
        )

        if not url.startswith(DEFAULT_TILE_HOST_PREFIX):
            return url

        return url.replace(DEFAULT_TILE_SUB_DOMAIN, self.get_random_sub_domain(), 1)
