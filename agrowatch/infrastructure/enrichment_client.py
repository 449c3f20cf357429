"""
Infrastructure layer: Site enrichment client for placed map points.

Combines reverse geocoding and current weather into one site profile.
Lookups are single-attempt and never raise; failures degrade to sentinels.
"""
import asyncio
import logging
from typing import Optional, Tuple

import httpx
import numpy as np
from pydantic import BaseModel, FiniteFloat

from agrowatch.config import settings
from agrowatch.domain.models import (
    SOIL_TYPES,
    UNAVAILABLE,
    UNKNOWN_LOCATION,
    Coordinate,
    SiteProfile,
)
from agrowatch.infrastructure.api_constants import (
    APIConstants,
    GeocodingEndpoints,
    WeatherEndpoints,
)

logger = logging.getLogger(__name__)


# Pydantic models for API responses
class ReverseGeocodeResponse(BaseModel):
    """Subset of the Nominatim reverse lookup payload."""
    display_name: Optional[str] = None


class WeatherMain(BaseModel):
    """The 'main' block of an OpenWeatherMap current weather payload."""
    temp: FiniteFloat
    humidity: FiniteFloat


class WeatherResponse(BaseModel):
    """Subset of the OpenWeatherMap current weather payload."""
    main: WeatherMain


class EnrichmentClient:
    """
    Client that builds a SiteProfile for a coordinate.

    Issues the geocoding and weather lookups concurrently. Each lookup is
    attempted once with no timeout; any failure is logged and replaced by
    its sentinel value.
    """

    def __init__(
        self,
        geocoding_client: Optional[httpx.AsyncClient] = None,
        weather_client: Optional[httpx.AsyncClient] = None,
        rng: Optional[np.random.Generator] = None,
    ):
        """
        Initialize the client with configuration.

        Args:
            geocoding_client: HTTP client for the geocoding service
            weather_client: HTTP client for the weather service
            rng: Random source for the synthetic soil readings
        """
        self.geocoding_base_url = settings.geocoding_base_url
        self.weather_base_url = settings.weather_base_url
        self.weather_api_key = settings.weather_api_key
        self.rng = rng if rng is not None else np.random.default_rng(settings.random_seed)
        self.geocoding_client = geocoding_client or httpx.AsyncClient(
            base_url=self.geocoding_base_url,
            headers={
                "User-Agent": settings.geocoding_user_agent,
                "accept": APIConstants.CONTENT_TYPE_JSON,
            },
            timeout=None,
        )
        self.weather_client = weather_client or httpx.AsyncClient(
            base_url=self.weather_base_url,
            headers={"accept": APIConstants.CONTENT_TYPE_JSON},
            timeout=None,
        )

    async def __aenter__(self) -> "EnrichmentClient":
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()

    async def close(self):
        """Close the HTTP clients."""
        await self.geocoding_client.aclose()
        await self.weather_client.aclose()

    async def reverse_geocode(self, coordinate: Coordinate) -> str:
        """
        Look up a human-readable place label for a coordinate.

        Args:
            coordinate: Point to look up

        Returns:
            The place label, or "Unknown Location" if the lookup fails
        """
        try:
            response = await self.geocoding_client.get(
                GeocodingEndpoints.REVERSE,
                params=GeocodingEndpoints.reverse_params(
                    coordinate.latitude, coordinate.longitude
                ),
            )
            response.raise_for_status()
            payload = ReverseGeocodeResponse.model_validate(response.json())
        except (httpx.HTTPError, ValueError) as e:
            # ValidationError and JSON decode errors are both ValueErrors
            logger.warning(f"Reverse geocoding failed for {coordinate}: {e}")
            return UNKNOWN_LOCATION

        if not payload.display_name or not payload.display_name.strip():
            logger.warning(f"Reverse geocoding returned no place for {coordinate}")
            return UNKNOWN_LOCATION
        return payload.display_name

    async def fetch_weather(self, coordinate: Coordinate) -> Tuple[str, str]:
        """
        Look up current temperature and humidity for a coordinate.

        Args:
            coordinate: Point to look up

        Returns:
            (temperature, humidity) display strings such as ("23.4°C", "55%"),
            or ("N/A", "N/A") if the lookup fails
        """
        try:
            response = await self.weather_client.get(
                WeatherEndpoints.CURRENT,
                params=WeatherEndpoints.current_params(
                    coordinate.latitude, coordinate.longitude, self.weather_api_key
                ),
            )
            response.raise_for_status()
            payload = WeatherResponse.model_validate(response.json())
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"Weather lookup failed for {coordinate}: {e}")
            return UNAVAILABLE, UNAVAILABLE

        return (
            f"{payload.main.temp:.1f}°C",
            f"{round(payload.main.humidity)}%",
        )

    def sample_soil(self) -> Tuple[str, str]:
        """
        Draw placeholder soil readings.

        Returns:
            (moisture, soil_type) with moisture uniform in [10, 90] percent
        """
        moisture = self.rng.uniform(10.0, 90.0)
        soil_type = SOIL_TYPES[int(self.rng.integers(len(SOIL_TYPES)))]
        return f"{moisture:.0f}%", soil_type

    async def enrich(self, coordinate: Coordinate) -> SiteProfile:
        """
        Build the site profile for a coordinate.

        Both lookups run concurrently and the profile is returned only once
        both have settled.

        Args:
            coordinate: Point to enrich

        Returns:
            A fully populated SiteProfile (real values or sentinels)
        """
        place, (temperature, humidity) = await asyncio.gather(
            self.reverse_geocode(coordinate),
            self.fetch_weather(coordinate),
        )
        moisture, soil_type = self.sample_soil()

        return SiteProfile(
            place=place,
            temperature=temperature,
            humidity=humidity,
            moisture=moisture,
            soil_type=soil_type,
        )


# Singleton instance
_enrichment_client: Optional[EnrichmentClient] = None


def get_enrichment_client() -> EnrichmentClient:
    """
    Get or create the singleton enrichment client instance.

    Returns:
        EnrichmentClient instance
    """
    global _enrichment_client
    if _enrichment_client is None:
        _enrichment_client = EnrichmentClient()
    return _enrichment_client
