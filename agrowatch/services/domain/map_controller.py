"""
Domain service: Map interaction controller.

Mediates between raw map events and the annotation store. Placement is a
small state machine:

    Idle --arm--> Armed --click--> Placing --(enrichment settles)--> Idle
    Armed --disarm--> Idle

arm/disarm while Placing are ignored; the in-flight placement is never
cancelled and still focuses its result when it completes.
"""
import logging
import math
from typing import Optional

from pydantic import ValidationError

from agrowatch.domain.models import Annotation, Coordinate, PlacementState, Viewport
from agrowatch.services.domain.annotation_store import AnnotationStore

logger = logging.getLogger(__name__)


INITIAL_CENTER = Coordinate(latitude=37.7749, longitude=-122.4194)
INITIAL_ZOOM = 13
RECENTER_ZOOM = 15


def parse_coordinate_text(lat_text: Optional[str], lng_text: Optional[str]) -> Optional[Coordinate]:
    """
    Parse free-text latitude/longitude inputs.

    Args:
        lat_text: Latitude as typed by the user
        lng_text: Longitude as typed by the user

    Returns:
        The coordinate, or None if either value is not a finite number
        within coordinate range
    """
    try:
        latitude = float(lat_text.strip())
        longitude = float(lng_text.strip())
    except (AttributeError, ValueError):
        return None

    if not (math.isfinite(latitude) and math.isfinite(longitude)):
        return None

    try:
        return Coordinate(latitude=latitude, longitude=longitude)
    except ValidationError:
        return None


class MapInteractionController:
    """
    Controller for placement mode and viewport recentring.
    """

    def __init__(self, store: AnnotationStore):
        """
        Initialize the controller.

        Args:
            store: Annotation store that receives placements
        """
        self.store = store
        self.state = PlacementState.IDLE
        self.center: Optional[Coordinate] = None
        self.zones_visible = True

    @property
    def armed(self) -> bool:
        return self.state is PlacementState.ARMED

    @property
    def viewport(self) -> Viewport:
        if self.center is None:
            return Viewport(center=INITIAL_CENTER, zoom=INITIAL_ZOOM)
        return Viewport(center=self.center, zoom=RECENTER_ZOOM)

    def arm(self) -> None:
        if self.state is PlacementState.PLACING:
            logger.debug("Placement in flight, ignoring arm")
            return
        self.state = PlacementState.ARMED

    def disarm(self) -> None:
        if self.state is PlacementState.PLACING:
            logger.debug("Placement in flight, ignoring disarm")
            return
        self.state = PlacementState.IDLE

    async def handle_map_click(self, coordinate: Coordinate) -> Optional[Annotation]:
        """
        Handle a click on the map.

        Args:
            coordinate: Clicked point

        Returns:
            The placed annotation, or None if placement mode was not armed
        """
        if self.state is not PlacementState.ARMED:
            return None

        self.state = PlacementState.PLACING
        try:
            return await self.store.place(coordinate)
        finally:
            self.state = PlacementState.IDLE

    def recenter(self, lat_text: Optional[str], lng_text: Optional[str]) -> bool:
        """
        Request a viewport transition to typed coordinates.

        Unparseable input leaves the current center unchanged.

        Args:
            lat_text: Latitude as typed by the user
            lng_text: Longitude as typed by the user

        Returns:
            True if the center was updated
        """
        coordinate = parse_coordinate_text(lat_text, lng_text)
        if coordinate is None:
            logger.debug(f"Ignoring recenter to ({lat_text!r}, {lng_text!r})")
            return False
        self.center = coordinate
        return True

    def toggle_zone_overlay(self) -> bool:
        self.zones_visible = not self.zones_visible
        return self.zones_visible
