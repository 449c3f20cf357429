"""
Domain service: Store of placed map annotations and the focused annotation.
"""
import itertools
import logging
from typing import List, Optional, Tuple

from agrowatch.domain.models import Annotation, Coordinate
from agrowatch.infrastructure.enrichment_client import EnrichmentClient

logger = logging.getLogger(__name__)


class AnnotationStore:
    """
    Owns the placed annotations in insertion order and the single focused one.

    Annotations are only ever added through place(); there is no removal.
    """

    def __init__(self, enrichment_client: EnrichmentClient):
        """
        Initialize the store.

        Args:
            enrichment_client: Client used to build site profiles
        """
        self.enrichment_client = enrichment_client
        self._annotations: List[Annotation] = []
        self._focused_id: Optional[int] = None
        self._ids = itertools.count(1)

    @property
    def annotations(self) -> Tuple[Annotation, ...]:
        return tuple(self._annotations)

    @property
    def focused(self) -> Optional[Annotation]:
        if self._focused_id is None:
            return None
        return self.get(self._focused_id)

    def get(self, annotation_id: int) -> Optional[Annotation]:
        for annotation in self._annotations:
            if annotation.id == annotation_id:
                return annotation
        return None

    async def place(self, coordinate: Coordinate) -> Annotation:
        """
        Enrich a coordinate and add it as the focused annotation.

        The annotation is appended only after enrichment has fully settled.
        Callers gate this on placement mode.

        Args:
            coordinate: Point clicked on the map

        Returns:
            The new annotation
        """
        profile = await self.enrichment_client.enrich(coordinate)
        annotation = Annotation(
            id=next(self._ids),
            coordinate=coordinate,
            profile=profile,
        )
        self._annotations.append(annotation)
        self._focused_id = annotation.id
        logger.info(f"Placed annotation {annotation.id} at {coordinate}: {profile.place}")
        return annotation

    def select(self, annotation_id: int) -> None:
        """Focus an annotation; unknown ids are ignored."""
        if self.get(annotation_id) is None:
            logger.debug(f"Ignoring selection of unknown annotation {annotation_id}")
            return
        self._focused_id = annotation_id

    def clear_focus(self) -> None:
        self._focused_id = None
