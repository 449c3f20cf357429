"""
Domain service: Ordered inventory of dashboard zones.

Zones are kept newest-first. The inventory also owns the reference to the
zone shown in the detail view, so removing a zone and clearing a detail
view that points at it happen in the same call.
"""
import logging
from typing import Iterable, List, Optional, Tuple

from agrowatch.domain.models import ZoneRecord, ZoneStatus, ZoneSummary, classify_status

logger = logging.getLogger(__name__)


def _seed_zone(zone_id: str, name: str, score: int, temperature: str,
               humidity: str, moisture: str) -> ZoneRecord:
    return ZoneRecord(
        id=zone_id,
        name=name,
        score=score,
        status=classify_status(score),
        temperature=temperature,
        humidity=humidity,
        moisture=moisture,
    )


SEED_ZONES: Tuple[ZoneRecord, ...] = (
    _seed_zone("ZN-8842-NP", "North Plateau - Alpha", 72, "32.4°C", "42%", "18%"),
    _seed_zone("ZN-1120-SR", "South River - Delta", 88, "24.1°C", "68%", "72%"),
    _seed_zone("ZN-5491-ER", "East Ridge - Gamma", 61, "28.9°C", "55%", "41%"),
)


class ZoneInventory:
    """
    Authoritative, newest-first collection of promoted zones.
    """

    def __init__(self, zones: Optional[Iterable[ZoneRecord]] = None):
        """
        Initialize the inventory.

        Args:
            zones: Initial zones, newest first

        Raises:
            ValueError: If the initial zones contain duplicate ids
        """
        self._zones: List[ZoneRecord] = list(zones or [])
        ids = [zone.id for zone in self._zones]
        if len(ids) != len(set(ids)):
            raise ValueError("Zone ids must be unique")
        self._detail_id: Optional[str] = None

    @property
    def zones(self) -> Tuple[ZoneRecord, ...]:
        return tuple(self._zones)

    @property
    def ids(self) -> List[str]:
        return [zone.id for zone in self._zones]

    @property
    def detail(self) -> Optional[ZoneRecord]:
        if self._detail_id is None:
            return None
        return self.get(self._detail_id)

    def get(self, zone_id: str) -> Optional[ZoneRecord]:
        for zone in self._zones:
            if zone.id == zone_id:
                return zone
        return None

    def promote(self, zone: ZoneRecord) -> None:
        """
        Add a zone at the front of the inventory.

        Callers supply a fresh id (see generate_zone_id); promote itself
        always succeeds.
        """
        self._zones.insert(0, zone)
        logger.info(f"Promoted zone {zone.id} '{zone.name}'")

    def remove(self, zone_id: str) -> Optional[ZoneRecord]:
        """
        Remove a zone by id, clearing the detail view if it showed that zone.

        Args:
            zone_id: Zone to remove

        Returns:
            The removed zone, or None if no zone had that id
        """
        zone = self.get(zone_id)
        if zone is None:
            return None

        self._zones.remove(zone)
        if self._detail_id == zone_id:
            self._detail_id = None
        logger.info(f"Removed zone {zone_id}")
        return zone

    def select_for_detail(self, zone_id: str) -> None:
        """Show a zone in the detail view; unknown ids are ignored."""
        if self.get(zone_id) is None:
            logger.debug(f"Ignoring detail selection of unknown zone {zone_id}")
            return
        self._detail_id = zone_id

    def close_detail(self) -> None:
        self._detail_id = None

    def summary(self) -> ZoneSummary:
        statuses = [zone.status for zone in self._zones]
        return ZoneSummary(
            total=len(statuses),
            healthy=statuses.count(ZoneStatus.HEALTHY),
            moderate=statuses.count(ZoneStatus.MODERATE),
            high_risk=statuses.count(ZoneStatus.HIGH_RISK),
        )
