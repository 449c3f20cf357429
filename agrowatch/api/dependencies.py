"""
Dependency injection for FastAPI.
"""
from typing import Annotated, Optional
from fastapi import Depends, Request

from agrowatch.infrastructure.conditions_client import (
    ConditionsClient,
    get_conditions_client,
)
from agrowatch.infrastructure.enrichment_client import EnrichmentClient
from agrowatch.services.application.field_mapping_service import FieldMappingService
from agrowatch.services.domain.annotation_store import AnnotationStore
from agrowatch.services.domain.assessment_generator import AssessmentGenerator
from agrowatch.services.domain.map_controller import MapInteractionController
from agrowatch.services.domain.zone_inventory import SEED_ZONES, ZoneInventory


def build_field_mapping_service(
    enrichment_client: EnrichmentClient,
    generator: Optional[AssessmentGenerator] = None,
) -> FieldMappingService:
    """
    Wire a fresh application state container.

    Args:
        enrichment_client: Client used to enrich placed points
        generator: Assessment generator (seeded from settings when omitted)

    Returns:
        FieldMappingService seeded with the dashboard zones
    """
    store = AnnotationStore(enrichment_client)
    return FieldMappingService(
        store=store,
        controller=MapInteractionController(store),
        inventory=ZoneInventory(SEED_ZONES),
        generator=generator or AssessmentGenerator(),
    )


def get_field_mapping_service(request: Request) -> FieldMappingService:
    """
    Dependency factory for the application state container.

    The container is built once by the application lifespan and kept on
    app.state, so every request sees the same dashboard state.

    Args:
        request: Incoming request

    Returns:
        FieldMappingService instance
    """
    return request.app.state.field_mapping_service


# Type aliases for cleaner route signatures
FieldMappingServiceDep = Annotated[FieldMappingService, Depends(get_field_mapping_service)]
ConditionsClientDep = Annotated[ConditionsClient, Depends(get_conditions_client)]
