"""
Infrastructure layer: Dashboard conditions client with retry logic.
"""
import logging
from typing import Any, Dict, List, Optional

import httpx
from pydantic import BaseModel, FiniteFloat
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
)

from agrowatch.config import settings
from agrowatch.domain.models import Coordinate, CurrentConditions
from agrowatch.infrastructure.api_constants import APIConstants, ConditionsEndpoints

logger = logging.getLogger(__name__)


# Pydantic models for API responses
class CurrentWeather(BaseModel):
    """The 'current_weather' block of an Open-Meteo forecast."""
    temperature: FiniteFloat


class HourlySeries(BaseModel):
    """The 'hourly' block of an Open-Meteo forecast."""
    relativehumidity_2m: List[Optional[FiniteFloat]] = []


class ForecastResponse(BaseModel):
    """Subset of the Open-Meteo forecast payload."""
    latitude: float
    longitude: float
    current_weather: CurrentWeather
    hourly: Optional[HourlySeries] = None


class ExternalAPIError(Exception):
    """Raised when an upstream service cannot be reached or answers with an error."""

    def __init__(self, message: str, status_code: int = 502):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ConditionsClient:
    """
    Client for the Open-Meteo forecast API.
    Implements retry logic with exponential backoff.
    """

    def __init__(self):
        """Initialize the API client with configuration."""
        self.base_url = settings.conditions_base_url
        self.client = httpx.AsyncClient(
            base_url=self.base_url,
            headers={"accept": APIConstants.CONTENT_TYPE_JSON},
            timeout=APIConstants.CONDITIONS_TIMEOUT,
        )

    async def __aenter__(self) -> "ConditionsClient":
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()

    async def close(self):
        """Close the HTTP client."""
        await self.client.aclose()

    @retry(
        stop=stop_after_attempt(settings.max_retry_attempts),
        wait=wait_exponential(
            multiplier=settings.retry_backoff_multiplier,
            min=settings.retry_min_wait,
            max=settings.retry_max_wait,
        ),
        retry=retry_if_exception_type((httpx.HTTPStatusError, httpx.RequestError)),
        reraise=True,
    )
    async def _make_request(
        self,
        method: str,
        endpoint: str,
        **kwargs
    ) -> Dict[str, Any]:
        """
        Make an HTTP request with retry logic.

        Server errors (5xx) and transport errors are retried; client errors
        (4xx) fail immediately.

        Args:
            method: HTTP method (GET, POST, etc.)
            endpoint: API endpoint path
            **kwargs: Additional arguments for the request

        Returns:
            Response data as dictionary

        Raises:
            ExternalAPIError: If the request is rejected by the service
            httpx.HTTPStatusError: On a 5xx once retries are exhausted
            httpx.RequestError: On a transport failure once retries are exhausted
        """
        try:
            response = await self.client.request(method, endpoint, **kwargs)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            if e.response.status_code >= 500:
                logger.warning(f"Conditions API returned {e.response.status_code}, retrying")
                raise
            raise ExternalAPIError(
                f"API request failed: {e.response.status_code} - {e.response.text}",
                status_code=e.response.status_code,
            )

    async def get_current_conditions(self, coordinate: Coordinate) -> CurrentConditions:
        """
        Fetch current weather for a site.

        Args:
            coordinate: Site to query

        Returns:
            CurrentConditions instance

        Raises:
            ExternalAPIError: If the service fails or returns an unusable payload
        """
        try:
            data = await self._make_request(
                "GET",
                ConditionsEndpoints.FORECAST,
                params=ConditionsEndpoints.forecast_params(
                    coordinate.latitude, coordinate.longitude
                ),
            )
        except httpx.HTTPStatusError as e:
            raise ExternalAPIError(
                f"Conditions API unavailable: {e.response.status_code}",
                status_code=e.response.status_code,
            ) from e
        except httpx.RequestError as e:
            raise ExternalAPIError(f"Conditions API request error: {str(e)}") from e
        except ValueError as e:
            raise ExternalAPIError(f"Conditions API returned invalid JSON: {str(e)}") from e

        try:
            forecast = ForecastResponse.model_validate(data)
        except ValueError as e:
            raise ExternalAPIError(f"Malformed conditions payload: {str(e)}") from e

        humidity = None
        if forecast.hourly and forecast.hourly.relativehumidity_2m:
            humidity = forecast.hourly.relativehumidity_2m[0]

        return CurrentConditions(
            latitude=forecast.latitude,
            longitude=forecast.longitude,
            temperature=forecast.current_weather.temperature,
            humidity=humidity,
        )


# Singleton instance
_conditions_client: Optional[ConditionsClient] = None


def get_conditions_client() -> ConditionsClient:
    """
    Get or create the singleton conditions client instance.

    Returns:
        ConditionsClient instance
    """
    global _conditions_client
    if _conditions_client is None:
        _conditions_client = ConditionsClient()
    return _conditions_client
