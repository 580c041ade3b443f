"""
Shared configuration management for the GraphQL query gateway.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class GatewaySettings(BaseSettings):
    """Gateway configuration read from the environment or a ``.env`` file."""

    model_config = SettingsConfigDict(
        env_prefix="GRAPHQL_GATEWAY_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore"
    )

    # Endpoint
    url: str = Field(default="", description="GraphQL endpoint URL")

    # Logging
    log_level: str = Field(default="info")

    # Transport
    request_timeout: float = Field(default=10.0, gt=0)
    raise_for_status: bool = Field(default=False)

    # Behaviour
    isolate_observer_failures: bool = Field(default=False)
    typename_field: str = Field(default="__typename", min_length=1)

    # Observability
    enable_metrics: bool = Field(default=True)


def get_settings(**overrides) -> GatewaySettings:
    """Get gateway settings, applying explicit overrides over the environment."""
    return GatewaySettings(**overrides)
