"""
API response models using Pydantic.
"""
from typing import List, Optional
from pydantic import BaseModel, Field

from agrowatch.domain.models import (
    Annotation,
    PlacementState,
    Viewport,
    ZoneRecord,
)


class MappingStateResponse(BaseModel):
    """Snapshot of the field mapping screen."""
    placement_state: PlacementState = Field(
        description="Placement mode: Idle, Armed or Placing"
    )
    armed: bool = Field(
        description="Whether the next map click places a marker"
    )
    viewport: Viewport = Field(
        description="Center and zoom requested from the map renderer"
    )
    zones_visible: bool = Field(
        description="Whether the zone overlay layer is shown"
    )
    annotations: List[Annotation] = Field(
        description="Placed markers in placement order"
    )
    focused: Optional[Annotation] = Field(
        default=None,
        description="Marker shown in the inspection overlay"
    )


class PlacementResponse(BaseModel):
    """Result of a map click."""
    placed: bool = Field(
        description="False when placement mode was not armed"
    )
    annotation: Optional[Annotation] = None

    class Config:
        json_schema_extra = {
            "example": {
                "placed": True,
                "annotation": {
                    "id": 1,
                    "coordinate": {"latitude": 37.7749, "longitude": -122.4194},
                    "profile": {
                        "place": "San Francisco, California, United States",
                        "temperature": "17.3°C",
                        "humidity": "72%",
                        "moisture": "44%",
                        "soil_type": "Loamy",
                    },
                },
            }
        }


class RecenterResponse(BaseModel):
    """Result of a recentre request."""
    recentered: bool = Field(
        description="False when the typed coordinates did not parse"
    )
    viewport: Viewport


class OverlayResponse(BaseModel):
    """Zone overlay visibility."""
    zones_visible: bool


class PromotionResponse(BaseModel):
    """Result of promoting the focused marker."""
    promoted: bool = Field(
        description="False when no marker was focused"
    )
    zone: Optional[ZoneRecord] = None


class ZonesResponse(BaseModel):
    """Zone inventory, newest first."""
    count: int
    zones: List[ZoneRecord]


class ZoneDeletionResponse(BaseModel):
    """Result of deleting a zone."""
    zone_id: str
    deleted: bool = Field(
        description="False when no zone had this id"
    )


class ZoneDetailResponse(BaseModel):
    """Zone shown in the detail view."""
    zone: Optional[ZoneRecord] = None
