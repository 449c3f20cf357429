"""
Application service: Orchestration layer for field mapping and the zone dashboard.
"""
from dataclasses import dataclass
from typing import Optional, Tuple

from agrowatch.domain.models import (
    Annotation,
    Coordinate,
    PlacementState,
    Viewport,
    ZoneRecord,
    ZoneSummary,
)
from agrowatch.services.domain.annotation_store import AnnotationStore
from agrowatch.services.domain.assessment_generator import AssessmentGenerator
from agrowatch.services.domain.map_controller import MapInteractionController
from agrowatch.services.domain.zone_inventory import ZoneInventory


@dataclass(frozen=True)
class MappingSnapshot:
    """Read-only view of the field mapping state."""
    placement_state: PlacementState
    armed: bool
    viewport: Viewport
    zones_visible: bool
    annotations: Tuple[Annotation, ...]
    focused: Optional[Annotation]


class FieldMappingService:
    """
    Application state container for the dashboard.

    Owns one annotation store, one map controller and one zone inventory
    and exposes the intents of the presentation shell. No business logic
    here, only coordination between the domain services.
    """

    def __init__(
        self,
        store: AnnotationStore,
        controller: MapInteractionController,
        inventory: ZoneInventory,
        generator: AssessmentGenerator,
    ):
        """
        Initialize the service with dependencies.

        Args:
            store: Annotation store
            controller: Map interaction controller driving the store
            inventory: Zone inventory
            generator: Assessment generator used on promotion
        """
        self.store = store
        self.controller = controller
        self.inventory = inventory
        self.generator = generator

    # Placement

    def arm_placement(self) -> None:
        self.controller.arm()

    def disarm_placement(self) -> None:
        self.controller.disarm()

    async def click_at(self, coordinate: Coordinate) -> Optional[Annotation]:
        return await self.controller.handle_map_click(coordinate)

    def select_annotation(self, annotation_id: int) -> None:
        self.store.select(annotation_id)

    def clear_focus(self) -> None:
        self.store.clear_focus()

    # Viewport

    def recenter(self, lat_text: Optional[str], lng_text: Optional[str]) -> bool:
        return self.controller.recenter(lat_text, lng_text)

    def toggle_zone_overlay(self) -> bool:
        return self.controller.toggle_zone_overlay()

    # Zones

    def promote_focused(self) -> Optional[ZoneRecord]:
        """
        Assess the focused annotation and add it to the zone inventory.

        Returns:
            The new zone, or None if no annotation is focused
        """
        focused = self.store.focused
        if focused is None:
            return None

        zone = self.generator.assess(focused.profile, self.inventory.ids)
        self.inventory.promote(zone)
        return zone

    def delete_zone(self, zone_id: str) -> Optional[ZoneRecord]:
        return self.inventory.remove(zone_id)

    def select_zone_for_detail(self, zone_id: str) -> None:
        self.inventory.select_for_detail(zone_id)

    def close_zone_detail(self) -> None:
        self.inventory.close_detail()

    # Snapshots

    def mapping_snapshot(self) -> MappingSnapshot:
        return MappingSnapshot(
            placement_state=self.controller.state,
            armed=self.controller.armed,
            viewport=self.controller.viewport,
            zones_visible=self.controller.zones_visible,
            annotations=self.store.annotations,
            focused=self.store.focused,
        )

    @property
    def zones(self) -> Tuple[ZoneRecord, ...]:
        return self.inventory.zones

    @property
    def zone_detail(self) -> Optional[ZoneRecord]:
        return self.inventory.detail

    def zone_summary(self) -> ZoneSummary:
        return self.inventory.summary()
