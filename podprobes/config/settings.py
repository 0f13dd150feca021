"""
Pod Identity Probes Settings
Pydantic-based configuration with support for env vars and config files.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from podprobes.domain.exceptions import ConfigurationError


class AppSettings(BaseSettings):
    """Application-level settings."""

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env.local",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    name: str = Field(default="podprobes", alias="APP_NAME")
    env: str = Field(default="development", alias="APP_ENV")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_json: bool = Field(default=False, alias="LOG_JSON")

    # API settings
    api_host: str = Field(default="0.0.0.0", alias="API_HOST")
    api_port: int = Field(default=8080, alias="API_PORT")

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v):
        if isinstance(v, str):
            return v.strip().upper()
        return v


class ProbeSettings(BaseSettings):
    """IMDS token probe and NMI liveness probe settings."""

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env.local",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Instance metadata (IMDS) token endpoint
    imds_endpoint: str = Field(
        default="http://169.254.169.254/metadata/identity/oauth2/token",
        alias="IMDS_ENDPOINT",
    )
    imds_api_version: str = Field(default="2018-02-01", alias="IMDS_API_VERSION")
    token_resource: str = Field(
        default="https://management.azure.com/",
        alias="TOKEN_RESOURCE",
    )

    timeout_seconds: float = Field(default=5.0, alias="PROBE_TIMEOUT_SECONDS")

    # NMI node agent
    host_ip: Optional[str] = Field(default=None, alias="HOST_IP")
    nmi_port: int = Field(default=8085, alias="NMI_PORT")
    nmi_path: str = Field(default="/healthz", alias="NMI_PATH")
    nmi_expected_body: Optional[str] = Field(default=None, alias="NMI_EXPECTED_BODY")

    @field_validator("timeout_seconds")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError(f"Probe timeout must be positive, got {v}")
        return v

    @field_validator("nmi_path", mode="before")
    @classmethod
    def ensure_leading_slash(cls, v):
        if isinstance(v, str) and not v.startswith("/"):
            return f"/{v}"
        return v


class Settings(BaseSettings):
    """
    Main settings class that aggregates all config sections.

    Usage:
        from podprobes.config import get_settings

        settings = get_settings()
        print(settings.app.log_level)
        print(settings.probe.nmi_port)
    """

    model_config = SettingsConfigDict(
        env_file=".env.local",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Sub-settings
    app: AppSettings = Field(default_factory=AppSettings)
    probe: ProbeSettings = Field(default_factory=ProbeSettings)


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings: The application settings
    """
    return Settings()


def reload_settings() -> Settings:
    """
    Reload settings (clears cache).

    Returns:
        Settings: Fresh settings instance
    """
    get_settings.cache_clear()
    return get_settings()


def load_settings() -> Settings:
    """
    Get cached settings, reporting invalid values as a configuration error.

    Raises:
        ConfigurationError: if any setting fails validation
    """
    try:
        return get_settings()
    except ValidationError as e:
        fields = ", ".join(
            str(error["loc"][0]) if error["loc"] else e.title for error in e.errors()
        )
        raise ConfigurationError(f"Invalid configuration for: {fields}") from e
