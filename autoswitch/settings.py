from dataclasses import dataclass, fields, replace
from datetime import timedelta
from pathlib import Path
from typing import Optional

import yaml

# ----------- Settings ---------
LOOP_DELAY = 60 # Check every minute (60 seconds) while the sun times are fresh
CHECK_INTERVAL = 20 # Retry quicker than that when something failed
HTTP_TIMEOUT = 10 # Seconds to wait on the geocoding / sun time services
PROBE_TIMEOUT = 2 # Seconds to wait on the connectivity check
PROBE_RETRIES = 3
PROBE_INTERVAL = 1
MAX_OFFSET_MINUTES = 12 * 60 # Anything this large would swap the day for the night

PROVIDERS = ("sunrise-sunset", "suntime")
THEMES = ("windows", "gnome")


class SettingsError(ValueError):
    pass


@dataclass(frozen=True)
class Settings:
    city: str = "" # Empty means: locate the machine by its IP address
    sunriseOffset: int = 0 # Minutes, added to sunrise (negative = earlier)
    sunsetOffset: int = 0 # Minutes, added to sunset
    loopDelay: float = LOOP_DELAY
    checkInterval: float = CHECK_INTERVAL
    httpTimeout: float = HTTP_TIMEOUT
    probeTimeout: float = PROBE_TIMEOUT
    probeRetries: int = PROBE_RETRIES
    probeInterval: float = PROBE_INTERVAL
    provider: str = "sunrise-sunset"
    theme: str = "windows"
    notifications: bool = True
    logLevel: str = "INFO"
    logFile: Optional[str] = None

    def __post_init__(self):
        for name in ("sunriseOffset", "sunsetOffset"):
            minutes = getattr(self, name)
            if abs(minutes) >= MAX_OFFSET_MINUTES:
                raise SettingsError(f"{name} must be within +/-{MAX_OFFSET_MINUTES - 1} minutes, got {minutes}")
        for name in ("loopDelay", "checkInterval", "httpTimeout", "probeTimeout", "probeInterval"):
            if getattr(self, name) <= 0:
                raise SettingsError(f"{name} must be positive")
        if self.probeRetries < 1:
            raise SettingsError("probeRetries must be at least 1")
        if self.provider not in PROVIDERS:
            raise SettingsError(f"Unknown provider {self.provider!r}, expected one of {', '.join(PROVIDERS)}")
        if self.theme not in THEMES:
            raise SettingsError(f"Unknown theme {self.theme!r}, expected one of {', '.join(THEMES)}")

    @property
    def sunriseDelta(self) -> timedelta:
        return timedelta(minutes=self.sunriseOffset)

    @property
    def sunsetDelta(self) -> timedelta:
        return timedelta(minutes=self.sunsetOffset)

    def override(self, **changes) -> "Settings":
        """Copy of these settings with every non-None change applied (CLI flags win over the file)."""
        return replace(self, **{key: value for key, value in changes.items() if value is not None})

    @classmethod
    def fromDict(cls, data: dict) -> "Settings":
        known = {field.name for field in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise SettingsError(f"Unknown setting(s): {', '.join(unknown)}")
        try:
            return cls(**data)
        except TypeError as e:
            raise SettingsError(str(e)) from e

    @classmethod
    def fromYaml(cls, path) -> "Settings":
        try:
            with open(Path(path), "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise SettingsError(f"Could not parse {path}: {e}") from e
        if not isinstance(data, dict):
            raise SettingsError(f"{path} must contain a mapping of settings")
        return cls.fromDict(data)
