"""
API router for the field mapping screen.
"""
from fastapi import APIRouter, Path, Request
from typing import Annotated

from agrowatch.api.dependencies import FieldMappingServiceDep
from agrowatch.api.v1.models.requests import MapClickRequest, RecenterRequest
from agrowatch.api.v1.models.responses import (
    MappingStateResponse,
    OverlayResponse,
    PlacementResponse,
    PromotionResponse,
    RecenterResponse,
)
from agrowatch.domain.models import Coordinate
from agrowatch.middleware.rate_limit import PLACEMENT_RATE_LIMIT, limiter
from agrowatch.services.application.field_mapping_service import FieldMappingService


router = APIRouter(
    prefix="/mapping",
    tags=["mapping"],
)


def _state(service: FieldMappingService) -> MappingStateResponse:
    snapshot = service.mapping_snapshot()
    return MappingStateResponse(
        placement_state=snapshot.placement_state,
        armed=snapshot.armed,
        viewport=snapshot.viewport,
        zones_visible=snapshot.zones_visible,
        annotations=list(snapshot.annotations),
        focused=snapshot.focused,
    )


@router.get(
    "/state",
    response_model=MappingStateResponse,
    summary="Get the field mapping state",
)
async def get_state(service: FieldMappingServiceDep) -> MappingStateResponse:
    """
    Return placement mode, viewport, markers and the focused marker.
    """
    return _state(service)


@router.post(
    "/placement/arm",
    response_model=MappingStateResponse,
    summary="Arm marker placement",
)
async def arm_placement(service: FieldMappingServiceDep) -> MappingStateResponse:
    service.arm_placement()
    return _state(service)


@router.post(
    "/placement/disarm",
    response_model=MappingStateResponse,
    summary="Disarm marker placement",
)
async def disarm_placement(service: FieldMappingServiceDep) -> MappingStateResponse:
    service.disarm_placement()
    return _state(service)


@router.post(
    "/clicks",
    response_model=PlacementResponse,
    summary="Click on the map",
    description="""
    Forward a map click.

    When placement mode is armed the clicked point is enriched with its
    reverse-geocoded place and current weather (looked up concurrently),
    given a placeholder soil profile, stored as a new marker and focused.
    Placement mode is disarmed afterwards. When placement mode is not armed
    the click is ignored.

    Lookup failures never fail the request: the place falls back to
    "Unknown Location" and the weather readings to "N/A".
    """,
    responses={
        429: {
            "description": "Too many placements from this client",
        },
    }
)
@limiter.limit(PLACEMENT_RATE_LIMIT)
async def click_map(
    request: Request,
    click: MapClickRequest,
    service: FieldMappingServiceDep,
) -> PlacementResponse:
    """
    Handle a map click.

    Args:
        request: Incoming request (used for rate limiting)
        click: Clicked coordinate
        service: Field mapping service (injected dependency)

    Returns:
        PlacementResponse with the new marker when one was placed
    """
    coordinate = Coordinate(latitude=click.latitude, longitude=click.longitude)
    annotation = await service.click_at(coordinate)
    return PlacementResponse(placed=annotation is not None, annotation=annotation)


@router.post(
    "/annotations/{annotation_id}/focus",
    response_model=MappingStateResponse,
    summary="Focus a marker",
)
async def focus_annotation(
    annotation_id: Annotated[int, Path(description="Marker identifier")],
    service: FieldMappingServiceDep,
) -> MappingStateResponse:
    """
    Show a marker in the inspection overlay. Unknown ids are ignored.
    """
    service.select_annotation(annotation_id)
    return _state(service)


@router.delete(
    "/focus",
    response_model=MappingStateResponse,
    summary="Close the inspection overlay",
)
async def clear_focus(service: FieldMappingServiceDep) -> MappingStateResponse:
    service.clear_focus()
    return _state(service)


@router.post(
    "/recenter",
    response_model=RecenterResponse,
    summary="Recentre the map on typed coordinates",
)
async def recenter(
    body: RecenterRequest,
    service: FieldMappingServiceDep,
) -> RecenterResponse:
    """
    Move the map to typed coordinates.

    Input that does not parse as a coordinate leaves the viewport unchanged.
    """
    recentered = service.recenter(body.latitude, body.longitude)
    return RecenterResponse(
        recentered=recentered,
        viewport=service.mapping_snapshot().viewport,
    )


@router.post(
    "/overlay/toggle",
    response_model=OverlayResponse,
    summary="Show or hide the zone overlay",
)
async def toggle_overlay(service: FieldMappingServiceDep) -> OverlayResponse:
    return OverlayResponse(zones_visible=service.toggle_zone_overlay())


@router.post(
    "/focus/promote",
    response_model=PromotionResponse,
    summary="Generate a zone report for the focused marker",
)
async def promote_focused(service: FieldMappingServiceDep) -> PromotionResponse:
    """
    Assess the focused marker and add it to the front of the zone inventory.

    Does nothing when no marker is focused.
    """
    zone = service.promote_focused()
    return PromotionResponse(promoted=zone is not None, zone=zone)
