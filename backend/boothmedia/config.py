# backend/boothmedia/config.py
from typing import List, Optional, Union

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .enums import BoothMode, LogLevel, OutputRatio


def _split_csv(value: Union[str, List[str]]) -> List[str]:
    if isinstance(value, str):
        return [item.strip() for item in value.split(",") if item.strip()]
    return value


class Settings(BaseSettings):
    environment: str = "development"

    # API
    api_host: str = Field(default="0.0.0.0", description="API host to bind to")
    api_port: int = Field(
        default=8000, ge=1, le=65535, description="API port to bind to"
    )

    # CORS - the kiosk front end may be served from any origin
    # Can be set via CORS_ORIGINS env var as comma-separated string
    cors_origins: Union[str, List[str]] = Field(
        default=["*"],
        description="Allowed CORS origins. Can be comma-separated string.",
    )

    @property
    def cors_origins_list(self) -> List[str]:
        """Convert cors_origins to a list of strings"""
        return _split_csv(self.cors_origins)

    # Upstream generation (BytePlus ModelArk)
    ark_base_url: str = Field(
        default="https://ark.ap-southeast.bytepluses.com/api/v3",
        description="Base URL of the generation API",
    )
    ark_api_key: str = Field(default="", description="Bearer token for the generation API")
    image_model: str = Field(
        default="seedream-4-0-250828", description="Model used for photo generation"
    )
    video_model: str = Field(
        default="seedance-1-0-pro-fast-251015",
        description="Default model used for video tasks",
    )
    video_model_prefixes: Union[str, List[str]] = Field(
        default=["seedance-"],
        description="Allowed video model name prefixes. Can be comma-separated string.",
    )

    @property
    def video_model_prefix_list(self) -> List[str]:
        """Convert video_model_prefixes to a list of strings"""
        return _split_csv(self.video_model_prefixes)

    # Remote storage / settings collaborator (Apps Script web app)
    apps_script_base_url: str = Field(
        default="", description="Apps Script web app URL for storage and settings"
    )

    # External video task queue
    video_tick_url: str = Field(
        default="http://localhost:3000/api/video/tick",
        description="Poll endpoint that advances external video tasks",
    )

    # Booth defaults (overridden by the settings collaborator at runtime)
    booth_mode: BoothMode = Field(default=BoothMode.PHOTO)
    output_ratio: OutputRatio = Field(default=OutputRatio.PORTRAIT)

    # Worker settings
    http_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        le=300,
        description="Timeout applied to every outbound HTTP request",
    )
    settings_refresh_interval: int = Field(
        default=300,
        ge=10,
        le=86400,
        description="Seconds between settings collaborator refreshes",
    )

    # Logging
    log_level: LogLevel = Field(
        default=LogLevel.INFO,
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    log_file: Optional[str] = Field(
        default=None, description="Log file path (optional)"
    )

    @field_validator("ark_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v) -> LogLevel:
        """Validate log level is one of the allowed values"""
        if isinstance(v, LogLevel):
            return v
        allowed_levels = LogLevel.__members__.keys()
        v_upper = str(v).upper()
        if v_upper not in allowed_levels:
            raise ValueError(
                f"Invalid log level '{v}'. Must be one of: {', '.join(allowed_levels)}"
            )
        return LogLevel[v_upper]

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment is one of the allowed values"""
        allowed_envs = ["development", "staging", "production", "test"]
        v_lower = v.lower()
        if v_lower not in allowed_envs:
            raise ValueError(
                f"Invalid environment '{v}'. Must be one of: {', '.join(allowed_envs)}"
            )
        return v_lower

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )


# Global settings instance
settings = Settings()
