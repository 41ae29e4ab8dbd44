import logging

import geocoder
import requests

from . import settings
from .models import Coordinates
from .results import FailureKind, Outcome

logger = logging.getLogger(__name__)


def _coordinatesFrom(g, what):
    if g.ok and g.latlng:
        try:
            lat, lng = g.latlng
            return Outcome.success(Coordinates(float(lat), float(lng)))
        except (TypeError, ValueError) as e:
            return Outcome.failure(FailureKind.DATA, f"{what}: bad coordinates {g.latlng!r} ({e})")
    if g.error: # geocoder keeps request errors here instead of raising
        return Outcome.failure(FailureKind.NETWORK, f"{what}: {g.error}")
    return Outcome.failure(FailureKind.DATA, f"{what}: no results found")


class OsmLocationResolver:
    """Looks a place name up on OpenStreetMap (Nominatim) and keeps the best match."""

    def __init__(self, timeout=settings.HTTP_TIMEOUT):
        self.timeout = timeout

    def resolve(self, name: str) -> Outcome:
        name = (name or "").strip()
        if not name:
            return Outcome.failure(FailureKind.DATA, "Location name is empty")
        try:
            g = geocoder.osm(name, maxRows=1, timeout=self.timeout) # Results are ranked, the first is the most relevant
        except requests.RequestException as e:
            return Outcome.failure(FailureKind.NETWORK, f"{name}: {e}")
        outcome = _coordinatesFrom(g, name)
        if outcome.ok:
            logger.info("Resolved %s to %s", name, outcome.value)
        return outcome


class IpLocationResolver:
    """Uses the current Internet Protocol address to determine the location. The name is ignored."""

    def __init__(self, timeout=settings.HTTP_TIMEOUT):
        self.timeout = timeout

    def resolve(self, name: str = "") -> Outcome:
        try:
            g = geocoder.ip("me", timeout=self.timeout)
        except requests.RequestException as e:
            return Outcome.failure(FailureKind.NETWORK, f"IP lookup: {e}")
        outcome = _coordinatesFrom(g, "IP lookup")
        if outcome.ok:
            logger.info("Located this machine at %s", outcome.value)
        return outcome
