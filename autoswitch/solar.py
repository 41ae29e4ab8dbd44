import logging
from datetime import date, datetime, timedelta

import requests
from suntime import Sun, SunTimeException

from . import settings
from .models import Coordinates, SolarWindow
from .results import FailureKind, Outcome

logger = logging.getLogger(__name__)

SUNRISE_SUNSET_URL = "https://api.sunrise-sunset.org/json"


def _toLocal(stamp: datetime, tz=None) -> datetime:
    return stamp.astimezone(tz).replace(tzinfo=None) # The rest of the app works in naive local time


def _checkedWindow(day: date, sunrise: datetime, sunset: datetime, source: str) -> Outcome:
    if not sunrise < sunset:
        return Outcome.failure(FailureKind.DATA, f"{source}: sunrise {sunrise} is not before sunset {sunset}")
    if abs(sunrise.date() - day) > timedelta(days=1): # Polar day/night comes back as 1970-01-01
        return Outcome.failure(FailureKind.DATA, f"{source}: no sunrise on {day}")
    return Outcome.success(SolarWindow(day, sunrise, sunset))


class SunriseSunsetApi:
    """Sun times from the sunrise-sunset.org web service."""

    def __init__(self, timeout=settings.HTTP_TIMEOUT, session=None, tz=None):
        self.timeout = timeout
        self.session = session or requests.Session()
        self.tz = tz # None = the machine's own timezone

    def fetch(self, coords: Coordinates, day: date) -> Outcome:
        params = {"lat": coords.latitude, "lng": coords.longitude, "date": day.isoformat(), "formatted": 0}
        try:
            response = self.session.get(SUNRISE_SUNSET_URL, params=params, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e: # Timeouts and HTTP errors included
            return Outcome.failure(FailureKind.NETWORK, f"sunrise-sunset.org: {e}")
        try:
            data = response.json()
        except ValueError as e: # requests' JSONDecodeError is a ValueError too

            return Outcome.failure(FailureKind.DATA, f"sunrise-sunset.org: response is not JSON ({e})")

        status = data.get("status") if isinstance(data, dict) else None
        if status != "OK":
            return Outcome.failure(FailureKind.DATA, f"sunrise-sunset.org: status {status!r}")
        try:
            results = data["results"]
            sunrise = _toLocal(datetime.fromisoformat(results["sunrise"]), self.tz) # Times come back in UTC
            sunset = _toLocal(datetime.fromisoformat(results["sunset"]), self.tz)
        except (KeyError, TypeError, ValueError) as e:
            return Outcome.failure(FailureKind.DATA, f"sunrise-sunset.org: unreadable times ({e})")
        return _checkedWindow(day, sunrise, sunset, "sunrise-sunset.org")


class SuntimeProvider:
    """Sun times worked out locally with suntime, for when no web service should be used."""

    def __init__(self, tz=None):
        self.tz = tz

    def fetch(self, coords: Coordinates, day: date) -> Outcome:
        sun = Sun(coords.latitude, coords.longitude)
        try:
            sunrise = _toLocal(sun.get_sunrise_time(day), self.tz) # UTC from suntime, converted here
            sunset = _toLocal(sun.get_sunset_time(day), self.tz)
        except SunTimeException as e: # The sun never rises or never sets there today
            return Outcome.failure(FailureKind.DATA, f"suntime: {e}")
        return _checkedWindow(day, sunrise, sunset, "suntime")
