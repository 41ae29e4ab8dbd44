from dataclasses import dataclass
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Optional


class Phase(Enum):
    LIGHT = "light"
    DARK = "dark"

    @property
    def isLight(self) -> bool:
        return self is Phase.LIGHT


@dataclass(frozen=True)
class Coordinates:
    latitude: float
    longitude: float

    def __post_init__(self):
        if not -90.0 <= self.latitude <= 90.0:
            raise ValueError(f"Latitude out of range: {self.latitude}")
        if not -180.0 <= self.longitude <= 180.0:
            raise ValueError(f"Longitude out of range: {self.longitude}")

    def __str__(self):
        return f"{self.latitude:.4f}, {self.longitude:.4f}"


@dataclass(frozen=True)
class SolarWindow:
    """Light-phase interval [sunrise, sunset) for one calendar day, in naive local time."""
    date: date
    sunrise: datetime
    sunset: datetime

    def shifted(self, sunriseOffset: timedelta, sunsetOffset: timedelta) -> "SolarWindow":
        """Return the effective window with the offsets added to each boundary."""
        return SolarWindow(self.date, self.sunrise + sunriseOffset, self.sunset + sunsetOffset)

    @property
    def isEmpty(self) -> bool:
        return self.sunset <= self.sunrise # Offsets pushed sunset to or past sunrise

    def phaseAt(self, now: datetime) -> Phase:
        if self.sunrise <= now < self.sunset: # Half-open: sunrise is light, sunset is dark
            return Phase.LIGHT
        return Phase.DARK # An empty window falls through here, so the whole day is dark

    def __str__(self):
        return f"{self.date.isoformat()} {self.sunrise:%H:%M}-{self.sunset:%H:%M}"


@dataclass
class SchedulerState:
    location: Optional[Coordinates] = None # Resolved once, kept for the life of the process
    window: Optional[SolarWindow] = None # Effective window (offsets already applied)
    lastRefreshDay: Optional[date] = None # Day the window was fetched for
    lastAttempt: Optional[datetime] = None # Last time a refresh was tried
    lastPhase: Optional[Phase] = None # Last phase written successfully

    def isFresh(self, now: datetime) -> bool:
        return self.window is not None and self.lastRefreshDay == now.date()
