"""Archiver configuration loaded from auth env vars + optional config.yaml."""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict, YamlConfigSettingsSource

DEFAULT_DOMAIN = "api.pipedrive.com"


# ---------------------------------------------------------------------------
# Nested sub-models for YAML config
# ---------------------------------------------------------------------------


class FetchSettings(BaseModel):
    """Pagination settings for listing mail threads."""

    page_size: int = Field(default=100, gt=0)
    folder: str = "inbox"


class ArchiveSettings(BaseModel):
    """Pacing of archive requests."""

    request_delay_ms: int = Field(default=100, ge=0)


class LoggingSettings(BaseModel):
    """Logging configuration."""

    level: str = "warning"


# ---------------------------------------------------------------------------
# Main settings class
# ---------------------------------------------------------------------------


def _resolve_config_path() -> str | None:
    """Resolve config.yaml path from PIPEDRIVE_ARCHIVER_CONFIG or cwd default.

    Returns None when the file does not exist -- the YAML file is optional,
    every section has defaults.
    """
    path = Path(os.environ.get("PIPEDRIVE_ARCHIVER_CONFIG", "config.yaml"))
    if not path.exists():
        return None
    return str(path)


class ArchiverSettings(BaseSettings):
    """Application settings.

    Credentials come from PIPEDRIVE_-prefixed environment variables (a .env
    file is loaded into the environment by the entry point). Tuning knobs
    live in an optional config.yaml.
    """

    model_config = SettingsConfigDict(
        env_prefix="PIPEDRIVE_",
        case_sensitive=False,
    )

    # Required credential -- from env vars
    api_token: str
    domain: str = DEFAULT_DOMAIN

    # Nested sections -- from config.yaml
    fetch: FetchSettings = FetchSettings()
    archive: ArchiveSettings = ArchiveSettings()
    logging: LoggingSettings = LoggingSettings()

    @field_validator("api_token")
    @classmethod
    def token_must_not_be_empty(cls, v: str) -> str:
        """Strip whitespace and reject an empty token."""
        stripped = v.strip()
        if not stripped:
            raise ValueError("PIPEDRIVE_API_TOKEN must not be empty")
        return stripped

    @field_validator("domain")
    @classmethod
    def normalize_domain(cls, v: str) -> str:
        """Accept 'mycompany.pipedrive.com' with or without scheme/slashes."""
        domain = v.strip().removeprefix("https://").removeprefix("http://").strip("/")
        return domain or DEFAULT_DOMAIN

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Configure source priority: init > env vars > YAML config file."""
        config_path = _resolve_config_path()
        if config_path is None:
            return (init_settings, env_settings)
        return (
            init_settings,
            env_settings,
            YamlConfigSettingsSource(settings_cls, yaml_file=config_path),
        )

    @property
    def base_url(self) -> str:
        """Return the Pipedrive REST API v1 root for the configured domain."""
        return f"https://{self.domain}/api/v1"

    @property
    def request_delay_seconds(self) -> float:
        """Return the inter-request archive delay in seconds."""
        return self.archive.request_delay_ms / 1000
