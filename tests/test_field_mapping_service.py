"""
End-to-end tests for the field mapping application service.

Uses the real enrichment client against mocked lookup services.
"""
import pytest
import httpx
import respx

from agrowatch.api.dependencies import build_field_mapping_service
from agrowatch.config import settings
from agrowatch.domain.models import Coordinate, ZoneStatus
from agrowatch.infrastructure.enrichment_client import EnrichmentClient
from agrowatch.services.domain.assessment_generator import AssessmentGenerator
from conftest import ScriptedRng


@pytest.fixture
async def enrichment_client(seeded_rng):
    async with EnrichmentClient(rng=seeded_rng) as client:
        yield client


@pytest.fixture
def service(enrichment_client, seeded_rng):
    return build_field_mapping_service(
        enrichment_client,
        generator=AssessmentGenerator(rng=seeded_rng),
    )


def mock_lookups_down():
    respx.get(host=httpx.URL(settings.geocoding_base_url).host, path="/reverse").mock(
        side_effect=httpx.ConnectError("geocoder unreachable")
    )
    respx.get(host=httpx.URL(settings.weather_base_url).host, path="/data/2.5/weather").mock(
        return_value=httpx.Response(500)
    )


class TestPlaceAndPromote:
    """Tests for the annotate, promote, delete flow."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_sentinel_annotation_becomes_new_field_zone(self, service):
        mock_lookups_down()
        zone_count = len(service.zones)

        service.arm_placement()
        annotation = await service.click_at(Coordinate(latitude=10.0, longitude=10.0))

        snapshot = service.mapping_snapshot()
        assert snapshot.focused == annotation
        assert snapshot.annotations == (annotation,)
        assert service.controller.armed is False
        assert annotation.profile.place == "Unknown Location"
        assert annotation.profile.temperature == "N/A"
        assert annotation.profile.humidity == "N/A"

        zone = service.promote_focused()

        assert len(service.zones) == zone_count + 1
        assert service.zones[0] == zone
        assert zone.name == "New Field Zone"
        assert 60 <= zone.score < 100
        assert zone.temperature == "N/A"
        assert zone.moisture == annotation.profile.moisture

    @pytest.mark.asyncio
    @respx.mock
    async def test_named_place_and_weather_flow_into_zone(self, enrichment_client):
        respx.get(host=httpx.URL(settings.geocoding_base_url).host, path="/reverse").mock(
            return_value=httpx.Response(200, json={"display_name": "Fresno, Fresno County, California"})
        )
        respx.get(host=httpx.URL(settings.weather_base_url).host, path="/data/2.5/weather").mock(
            return_value=httpx.Response(200, json={"main": {"temp": 31.34, "humidity": 22}})
        )
        service = build_field_mapping_service(
            enrichment_client,
            generator=AssessmentGenerator(rng=ScriptedRng(integers=[86, 2468])),
        )

        service.arm_placement()
        await service.click_at(Coordinate(latitude=36.7378, longitude=-119.7871))
        zone = service.promote_focused()

        assert zone.id == "ZN-2468-NEW"
        assert zone.name == "Fresno"
        assert zone.status is ZoneStatus.HEALTHY
        assert zone.temperature == "31.3°C"
        assert zone.humidity == "22%"

    @pytest.mark.asyncio
    async def test_promote_without_focus_is_noop(self, service):
        before = service.zones

        assert service.promote_focused() is None
        assert service.zones == before

    @pytest.mark.asyncio
    @respx.mock
    async def test_repeated_promotion_gets_fresh_ids(self, enrichment_client):
        """Promoting the same marker twice redraws a colliding id."""
        mock_lookups_down()
        service = build_field_mapping_service(
            enrichment_client,
            generator=AssessmentGenerator(rng=ScriptedRng(integers=[80, 1234, 80, 1234, 5678])),
        )
        service.arm_placement()
        await service.click_at(Coordinate(latitude=10.0, longitude=10.0))

        first = service.promote_focused()
        second = service.promote_focused()

        assert (first.id, second.id) == ("ZN-1234-NEW", "ZN-5678-NEW")
        assert [z.id for z in service.zones[:2]] == ["ZN-5678-NEW", "ZN-1234-NEW"]

    @pytest.mark.asyncio
    @respx.mock
    async def test_deleting_detail_zone_closes_detail(self, service):
        mock_lookups_down()
        service.arm_placement()
        await service.click_at(Coordinate(latitude=10.0, longitude=10.0))
        zone = service.promote_focused()
        service.select_zone_for_detail(zone.id)
        assert service.zone_detail == zone

        service.delete_zone(zone.id)

        assert service.zone_detail is None
        assert zone.id not in [z.id for z in service.zones]

    @pytest.mark.asyncio
    async def test_unarmed_click_does_not_call_lookups(self, service):
        with respx.mock(assert_all_called=False) as router:
            result = await service.click_at(Coordinate(latitude=1.0, longitude=1.0))

        assert result is None
        assert len(router.calls) == 0
        assert service.mapping_snapshot().annotations == ()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
