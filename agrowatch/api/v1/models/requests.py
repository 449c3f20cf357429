"""
API request models using Pydantic.
"""
from pydantic import BaseModel, Field


class MapClickRequest(BaseModel):
    """A click on the map at a coordinate."""
    latitude: float = Field(
        ge=-90.0, le=90.0, allow_inf_nan=False,
        description="Latitude coordinate in degrees",
        examples=[37.7749]
    )
    longitude: float = Field(
        ge=-180.0, le=180.0, allow_inf_nan=False,
        description="Longitude coordinate in degrees",
        examples=[-122.4194]
    )


class RecenterRequest(BaseModel):
    """Free-text coordinates typed into the locate box."""
    latitude: str = Field(
        default="",
        description="Latitude as typed; ignored unless it parses as a number",
        examples=["37.7749"]
    )
    longitude: str = Field(
        default="",
        description="Longitude as typed; ignored unless it parses as a number",
        examples=["-122.4194"]
    )
