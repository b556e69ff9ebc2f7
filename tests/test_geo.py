import asyncio
import pytest
from eclinic.exceptions import LocationUnavailable
from eclinic.geo import PUROK_LOCATIONS, Zone, detect_purok, nearest_zone


@pytest.mark.parametrize("zone", PUROK_LOCATIONS, ids=lambda z: z.name)
def test_exact_reference_point_returns_that_zone(zone):
    assert nearest_zone(zone.lat, zone.lng) == zone.name


def test_nearest_by_raw_degrees():
    # Slightly north-west of Purok 6
    assert nearest_zone(11.4300, 122.4800) == "Purok 6"
    # Far away still resolves to some zone
    assert nearest_zone(14.5995, 120.9842) in {z.name for z in PUROK_LOCATIONS}


def test_ties_go_to_first_zone():
    zones = [Zone("A", 0.0, 1.0), Zone("B", 0.0, -1.0)]
    assert nearest_zone(0.0, 0.0, zones) == "A"


def test_empty_zone_list_rejected():
    with pytest.raises(ValueError):
        nearest_zone(0.0, 0.0, [])


@pytest.mark.anyio
async def test_detect_success():
    async def locator():
        return 11.4275, 122.4825

    result = await detect_purok(locator)
    assert result.purok == "Purok 3"
    assert result.error is None
    assert not result.location_unavailable


@pytest.mark.anyio
async def test_detect_permission_denied():
    async def locator():
        raise LocationUnavailable("denied")

    result = await detect_purok(locator)
    assert result.purok is None
    assert result.location_unavailable
    assert "select manually" in result.error


@pytest.mark.anyio
async def test_detect_timeout():
    async def locator():
        await asyncio.sleep(5)
        return 11.4285, 122.4815

    result = await detect_purok(locator, timeout=0.01)
    assert result.location_unavailable


@pytest.mark.anyio
async def test_detect_without_capability():
    result = await detect_purok(None)
    assert result.location_unavailable
    assert "not supported" in result.error


def test_nearest_endpoint(client):
    r = client.post("/api/puroks/nearest", json={"lat": 11.4265, "lng": 122.4835})
    assert r.json() == {"purok": "Purok 7", "error": None}
    assert len(client.get("/api/puroks").json()) == 7
    assert client.post("/api/puroks/nearest", json={"lat": 200, "lng": 0}).status_code == 422


@pytest.mark.anyio
@pytest.mark.parametrize("reading", [RuntimeError("sensor glitch"), (11.4, None), "garbage"])
async def test_detect_unexpected_locator_failure(reading):
    async def locator():
        if isinstance(reading, Exception):
            raise reading
        return reading

    result = await detect_purok(locator)
    assert result.purok is None
    assert result.location_unavailable
