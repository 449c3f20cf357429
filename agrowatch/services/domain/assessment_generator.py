"""
Domain service: Placeholder health assessment for promoted map annotations.

Derives a ZoneRecord from a SiteProfile. The score is a randomized
placeholder; only its sampling range and the score-to-status mapping
are fixed. All randomness comes from an injected numpy Generator.
"""
from dataclasses import dataclass
from typing import Iterable, Optional
import logging

import numpy as np

from agrowatch.config import settings
from agrowatch.domain.models import (
    UNKNOWN_LOCATION,
    SiteProfile,
    ZoneRecord,
    classify_status,
)

logger = logging.getLogger(__name__)


FALLBACK_ZONE_NAME = "New Field Zone"


@dataclass
class AssessmentConfig:
    """Configuration for placeholder assessments."""

    score_min: int = 60
    """Lowest score that can be drawn (inclusive)"""

    score_max: int = 100
    """Upper bound of the score draw (exclusive)"""

    max_short_id_attempts: int = 1000
    """Draws from the 4-digit id space before widening to 8 digits"""


def zone_name_from_place(place: Optional[str]) -> str:
    """
    Derive a zone display name from a place label.

    Args:
        place: Reverse-geocoded place label

    Returns:
        Text before the first comma, or "New Field Zone" when the label is
        empty or the unknown-location sentinel
    """
    if not place or place == UNKNOWN_LOCATION:
        return FALLBACK_ZONE_NAME
    name = place.split(",", 1)[0].strip()
    return name or FALLBACK_ZONE_NAME


def generate_zone_id(rng: np.random.Generator, existing_ids: Iterable[str],
                     max_short_attempts: int = 1000) -> str:
    """
    Draw a zone id of the form ZN-1234-NEW not present in existing_ids.

    Args:
        rng: Random source
        existing_ids: Ids already in use
        max_short_attempts: Draws from the 4-digit space before widening

    Returns:
        A fresh zone id
    """
    taken = set(existing_ids)
    for _ in range(max_short_attempts):
        candidate = f"ZN-{int(rng.integers(1000, 10000))}-NEW"
        if candidate not in taken:
            return candidate

    logger.warning("Short zone id space exhausted, widening to 8 digits")
    while True:
        candidate = f"ZN-{int(rng.integers(10_000_000, 100_000_000))}-NEW"
        if candidate not in taken:
            return candidate


def generate_assessment(
    profile: SiteProfile,
    existing_ids: Iterable[str],
    rng: np.random.Generator,
    config: Optional[AssessmentConfig] = None,
) -> ZoneRecord:
    """
    Build a zone record for an enriched site.

    Args:
        profile: Site profile of the promoted annotation
        existing_ids: Zone ids already in the inventory
        rng: Random source for the score and id
        config: Sampling configuration

    Returns:
        ZoneRecord with score in [score_min, score_max) and matching status
    """
    config = config or AssessmentConfig()
    score = int(rng.integers(config.score_min, config.score_max))

    return ZoneRecord(
        id=generate_zone_id(rng, existing_ids, config.max_short_id_attempts),
        name=zone_name_from_place(profile.place),
        score=score,
        status=classify_status(score),
        temperature=profile.temperature,
        humidity=profile.humidity,
        moisture=profile.moisture,
    )


class AssessmentGenerator:
    """
    Domain service that assesses promoted annotations.

    Holds the random source so that callers do not thread it through.
    """

    def __init__(
        self,
        rng: Optional[np.random.Generator] = None,
        config: Optional[AssessmentConfig] = None,
    ):
        """
        Initialize the generator.

        Args:
            rng: Random source (seeded from settings when omitted)
            config: Sampling configuration
        """
        self.rng = rng if rng is not None else np.random.default_rng(settings.random_seed)
        self.config = config or AssessmentConfig()

    def assess(self, profile: SiteProfile, existing_ids: Iterable[str]) -> ZoneRecord:
        zone = generate_assessment(profile, existing_ids, self.rng, self.config)
        logger.info(f"Assessed zone {zone.id} '{zone.name}': {zone.score} ({zone.status.value})")
        return zone
