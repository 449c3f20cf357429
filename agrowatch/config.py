"""
Application configuration using Pydantic settings.
"""
from typing import Optional
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Reverse Geocoding (OpenStreetMap Nominatim)
    geocoding_base_url: str = Field(
        default="https://nominatim.openstreetmap.org",
        description="Base URL for the reverse geocoding service"
    )
    geocoding_user_agent: str = Field(
        default="agrowatch-field-mapping/1.0",
        description="User-Agent sent to the geocoding service (required by Nominatim)"
    )

    # Weather Lookup (OpenWeatherMap)
    weather_base_url: str = Field(
        default="https://api.openweathermap.org",
        description="Base URL for the weather lookup service"
    )
    weather_api_key: str = Field(
        default="",
        description="OpenWeatherMap API key"
    )

    # Dashboard Conditions (Open-Meteo)
    conditions_base_url: str = Field(
        default="https://api.open-meteo.com",
        description="Base URL for the dashboard conditions service"
    )
    dashboard_latitude: float = Field(
        default=37.7749,
        description="Latitude of the monitored dashboard site"
    )
    dashboard_longitude: float = Field(
        default=-122.4194,
        description="Longitude of the monitored dashboard site"
    )

    # Retry Configuration (dashboard conditions only)
    max_retry_attempts: int = Field(
        default=3,
        description="Maximum number of attempts for dashboard conditions calls"
    )
    retry_backoff_multiplier: int = Field(
        default=1,
        description="Multiplier for exponential backoff"
    )
    retry_min_wait: int = Field(
        default=1,
        description="Minimum wait time in seconds between retries"
    )
    retry_max_wait: int = Field(
        default=10,
        description="Maximum wait time in seconds between retries"
    )

    # Field Mapping
    random_seed: Optional[int] = Field(
        default=None,
        description="Seed for the placeholder soil and health generators (unset = entropy)"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)"
    )

    # CORS Configuration
    cors_origins: list[str] = Field(
        default=["*"],
        description="Allowed CORS origins (use specific origins in production)"
    )

    # Rate Limiting
    rate_limit_requests: int = Field(
        default=100,
        description="Maximum map placements per minute per client"
    )

    # Application Settings
    app_name: str = Field(
        default="AgroWatch Field Mapping",
        description="Application name"
    )
    app_version: str = Field(
        default="1.0.0",
        description="Application version"
    )

    class Config:
        env_file = ".env"
        case_sensitive = False


# Global settings instance
settings = Settings()
