"""
Purok assignment from a device coordinate.

Distances are plain Euclidean distances over raw latitude/longitude degrees.
That is only adequate because the reference points sit a few hundred metres
apart inside one barangay; this is not a geodesy engine.
"""

import asyncio
import logging
import math
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional, Sequence
from eclinic.exceptions import LocationUnavailable

logger = logging.getLogger(__name__)

LOCATION_TIMEOUT_SECONDS = 10.0


@dataclass(frozen=True)
class Zone:
    name: str
    lat: float
    lng: float


# Order matters: ties go to the earlier entry.
PUROK_LOCATIONS: tuple[Zone, ...] = (
    Zone("Purok 1", 11.4285, 122.4815),
    Zone("Purok 2", 11.4290, 122.4820),
    Zone("Purok 3", 11.4275, 122.4825),
    Zone("Purok 4", 11.4270, 122.4810),
    Zone("Purok 5", 11.4280, 122.4830),
    Zone("Purok 6", 11.4295, 122.4805),
    Zone("Purok 7", 11.4265, 122.4835),
)


@dataclass
class PurokDetection:
    """Outcome of a detection attempt. Exactly one of purok/error is set."""
    purok: Optional[str] = None
    error: Optional[str] = None

    @property
    def location_unavailable(self) -> bool:
        return self.purok is None


def nearest_zone(lat: float, lng: float, zones: Sequence[Zone] = PUROK_LOCATIONS) -> str:
    if not zones:
        raise ValueError("at least one zone is required")
    closest = zones[0].name
    min_distance = math.inf
    for zone in zones:
        distance = math.hypot(zone.lat - lat, zone.lng - lng)
        if distance < min_distance:
            min_distance = distance
            closest = zone.name
    return closest


Locator = Callable[[], Awaitable[tuple[float, float]]]


async def detect_purok(
    locator: Optional[Locator],
    timeout: float = LOCATION_TIMEOUT_SECONDS,
    zones: Sequence[Zone] = PUROK_LOCATIONS,
) -> PurokDetection:
    """
    Acquire a coordinate from `locator` and assign the nearest purok.

    `locator` is an async callable returning (latitude, longitude). A missing
    locator, any failure raised by it or a malformed coordinate, or a wait
    longer than `timeout` all resolve to a detection with no purok so the caller can
    fall back to manual selection.
    """
    if locator is None:
        return PurokDetection(error="Geolocation is not supported on this device.")
    try:
        lat, lng = await asyncio.wait_for(locator(), timeout=timeout)
        lat, lng = float(lat), float(lng)
    except asyncio.TimeoutError:
        logger.warning("Location request timed out after %.1fs", timeout)
        return PurokDetection(error=LocationUnavailable().reason)
    except (LocationUnavailable, PermissionError, OSError) as e:
        logger.warning("Geolocation error: %s", e)
        return PurokDetection(error=LocationUnavailable().reason)
    except Exception:
        logger.exception("Locator failed")
        return PurokDetection(error=LocationUnavailable().reason)
    return PurokDetection(purok=nearest_zone(lat, lng, zones))
