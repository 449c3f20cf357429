"""
API endpoint constants and configuration.

This module contains all external API endpoint paths and related constants.
Centralizing these values makes it easy to swap out providers or update API versions.
"""


# Reverse Geocoding (Nominatim) Endpoints
class GeocodingEndpoints:
    """Nominatim endpoint paths."""

    REVERSE = "/reverse"

    @classmethod
    def reverse_params(cls, latitude: float, longitude: float) -> dict:
        """
        Build query parameters for a reverse geocoding lookup.

        Args:
            latitude: Latitude in degrees
            longitude: Longitude in degrees

        Returns:
            Query parameter mapping
        """
        return {"format": "json", "lat": latitude, "lon": longitude}


# Weather (OpenWeatherMap) Endpoints
class WeatherEndpoints:
    """OpenWeatherMap endpoint paths."""

    CURRENT = "/data/2.5/weather"
    UNITS = "metric"

    @classmethod
    def current_params(cls, latitude: float, longitude: float, api_key: str) -> dict:
        """
        Build query parameters for a current weather lookup.

        Args:
            latitude: Latitude in degrees
            longitude: Longitude in degrees
            api_key: OpenWeatherMap application id

        Returns:
            Query parameter mapping
        """
        return {
            "lat": latitude,
            "lon": longitude,
            "appid": api_key,
            "units": cls.UNITS,
        }


# Dashboard Conditions (Open-Meteo) Endpoints
class ConditionsEndpoints:
    """Open-Meteo endpoint paths."""

    FORECAST = "/v1/forecast"

    @classmethod
    def forecast_params(cls, latitude: float, longitude: float) -> dict:
        return {
            "latitude": latitude,
            "longitude": longitude,
            "current_weather": "true",
            "hourly": "relativehumidity_2m",
        }


# API Configuration Constants
class APIConstants:
    """General API configuration constants."""

    # HTTP Headers
    CONTENT_TYPE_JSON = "application/json"

    # Timeouts (in seconds)
    CONDITIONS_TIMEOUT = 30.0
