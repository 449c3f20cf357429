"""
API router for the zone dashboard.
"""
from fastapi import APIRouter, Path
from typing import Annotated

from agrowatch.api.dependencies import ConditionsClientDep, FieldMappingServiceDep
from agrowatch.api.v1.models.responses import (
    ZoneDeletionResponse,
    ZoneDetailResponse,
    ZonesResponse,
)
from agrowatch.config import settings
from agrowatch.domain.models import Coordinate, CurrentConditions, ZoneSummary


router = APIRouter(
    prefix="/zones",
    tags=["zones"],
)

dashboard_router = APIRouter(
    prefix="/dashboard",
    tags=["dashboard"],
)


@router.get(
    "",
    response_model=ZonesResponse,
    summary="List zones, newest first",
)
async def list_zones(service: FieldMappingServiceDep) -> ZonesResponse:
    zones = list(service.zones)
    return ZonesResponse(count=len(zones), zones=zones)


@router.get(
    "/summary",
    response_model=ZoneSummary,
    summary="Count zones per health status",
)
async def zone_summary(service: FieldMappingServiceDep) -> ZoneSummary:
    return service.zone_summary()


@router.get(
    "/detail",
    response_model=ZoneDetailResponse,
    summary="Get the zone shown in the detail view",
)
async def get_zone_detail(service: FieldMappingServiceDep) -> ZoneDetailResponse:
    return ZoneDetailResponse(zone=service.zone_detail)


@router.put(
    "/detail/{zone_id}",
    response_model=ZoneDetailResponse,
    summary="Open a zone in the detail view",
)
async def open_zone_detail(
    zone_id: Annotated[str, Path(description="Zone identifier")],
    service: FieldMappingServiceDep,
) -> ZoneDetailResponse:
    """
    Show a zone in the detail view. Unknown ids leave the view unchanged.
    """
    service.select_zone_for_detail(zone_id)
    return ZoneDetailResponse(zone=service.zone_detail)


@router.delete(
    "/detail",
    response_model=ZoneDetailResponse,
    summary="Close the detail view",
)
async def close_zone_detail(service: FieldMappingServiceDep) -> ZoneDetailResponse:
    service.close_zone_detail()
    return ZoneDetailResponse(zone=None)


@router.delete(
    "/{zone_id}",
    response_model=ZoneDeletionResponse,
    summary="Delete a zone",
)
async def delete_zone(
    zone_id: Annotated[str, Path(description="Zone identifier")],
    service: FieldMappingServiceDep,
) -> ZoneDeletionResponse:
    """
    Remove a zone; the detail view is closed if it showed this zone.
    Deleting an unknown id is not an error.
    """
    removed = service.delete_zone(zone_id)
    return ZoneDeletionResponse(zone_id=zone_id, deleted=removed is not None)


@dashboard_router.get(
    "/conditions",
    response_model=CurrentConditions,
    summary="Current weather at the monitored site",
    responses={
        502: {
            "description": "Weather service unavailable",
        },
    }
)
async def current_conditions(client: ConditionsClientDep) -> CurrentConditions:
    """
    Fetch current temperature and humidity for the dashboard site.

    Failures are reported through the error handling middleware.
    """
    site = Coordinate(
        latitude=settings.dashboard_latitude,
        longitude=settings.dashboard_longitude,
    )
    return await client.get_current_conditions(site)
