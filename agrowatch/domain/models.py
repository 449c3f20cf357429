"""
Domain models for field mapping and zone health data.

These models represent the core domain entities and should be independent
of any infrastructure concerns (API clients, HTTP routing, etc.).
"""
from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, model_validator


UNKNOWN_LOCATION = "Unknown Location"
"""Place label used when reverse geocoding fails."""

UNAVAILABLE = "N/A"
"""Reading used when the weather lookup fails."""

SOIL_TYPES = ("Loamy", "Sandy", "Clay", "Silty")


class Coordinate(BaseModel):
    """A WGS84 latitude/longitude pair."""
    model_config = ConfigDict(frozen=True)

    latitude: float = Field(ge=-90.0, le=90.0, allow_inf_nan=False)
    longitude: float = Field(ge=-180.0, le=180.0, allow_inf_nan=False)


class SiteProfile(BaseModel):
    """Enrichment result for one coordinate."""
    model_config = ConfigDict(frozen=True)

    place: str = Field(description="Human-readable place label")
    temperature: str = Field(description="Temperature such as '23.4°C', or 'N/A'")
    humidity: str = Field(description="Relative humidity such as '55%', or 'N/A'")
    moisture: str = Field(description="Synthetic soil moisture such as '42%'")
    soil_type: str = Field(description="Synthetic soil type label")


class Annotation(BaseModel):
    """A user-placed, enriched map point."""
    model_config = ConfigDict(frozen=True)

    id: int
    coordinate: Coordinate
    profile: SiteProfile


class ZoneStatus(str, Enum):
    """Categorical zone health."""
    HEALTHY = "Healthy"
    MODERATE = "Moderate"
    HIGH_RISK = "High-Risk"


def classify_status(score: int) -> ZoneStatus:
    """
    Map a health score onto a zone status.

    Args:
        score: Health score in [0, 100]

    Returns:
        Healthy above 85, Moderate above 70, High-Risk otherwise

    Raises:
        ValueError: If the score is outside [0, 100]
    """
    if not 0 <= score <= 100:
        raise ValueError(f"Health score must be within [0, 100], got {score}")
    if score > 85:
        return ZoneStatus.HEALTHY
    if score > 70:
        return ZoneStatus.MODERATE
    return ZoneStatus.HIGH_RISK


class ZoneRecord(BaseModel):
    """A dashboard-visible agricultural zone."""
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    score: int = Field(ge=0, le=100)
    status: ZoneStatus
    temperature: str
    humidity: str
    moisture: str

    @model_validator(mode="after")
    def _status_matches_score(self) -> "ZoneRecord":
        expected = classify_status(self.score)
        if self.status != expected:
            raise ValueError(
                f"Zone {self.id} has status {self.status.value} but score "
                f"{self.score} classifies as {expected.value}"
            )
        return self


class ZoneSummary(BaseModel):
    """Zone counts per status for the dashboard header."""
    total: int
    healthy: int
    moderate: int
    high_risk: int


class PlacementState(str, Enum):
    """Marker placement mode."""
    IDLE = "Idle"
    ARMED = "Armed"
    PLACING = "Placing"


class Viewport(BaseModel):
    """Map viewport requested from the rendering collaborator."""
    model_config = ConfigDict(frozen=True)

    center: Coordinate
    zoom: int


class CurrentConditions(BaseModel):
    """Current weather at the monitored dashboard site."""
    latitude: float
    longitude: float
    temperature: float = Field(description="Air temperature in °C")
    humidity: Optional[float] = Field(default=None, description="Relative humidity in %")
