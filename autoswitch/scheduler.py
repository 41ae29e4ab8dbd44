"""Day/night scheduling loop.

Every tick either decides the phase from today's sun times and applies it, or
walks the refresh chain (connectivity -> location -> sun times) one step at a
time, backing off by ``checkInterval`` whenever a step fails.
"""
import logging
import time
from datetime import datetime, timedelta
from typing import Optional

from . import settings
from .models import Phase, SchedulerState
from .notify import SilentNotifier
from .results import FailureKind, Outcome

logger = logging.getLogger(__name__)


class DayNightScheduler:

    def __init__(
        self,
        probe,
        resolver,
        provider,
        applier,
        city: str = "",
        sunriseOffset: timedelta = timedelta(0),
        sunsetOffset: timedelta = timedelta(0),
        loopDelay: float = settings.LOOP_DELAY,
        checkInterval: float = settings.CHECK_INTERVAL,
        probeRetries: int = settings.PROBE_RETRIES,
        probeInterval: float = settings.PROBE_INTERVAL,
        probeTimeout: float = settings.PROBE_TIMEOUT,
        notifier=None,
        state: Optional[SchedulerState] = None,
        clock=datetime.now,
        sleep=time.sleep,
    ):
        self.probe = probe
        self.resolver = resolver
        self.provider = provider
        self.applier = applier
        self.notifier = notifier or SilentNotifier()
        self.city = city
        self.sunriseOffset = sunriseOffset
        self.sunsetOffset = sunsetOffset
        self.loopDelay = loopDelay
        self.checkInterval = checkInterval
        self.probeRetries = probeRetries
        self.probeInterval = probeInterval
        self.probeTimeout = probeTimeout
        self.state = state or SchedulerState()
        self.clock = clock
        self.sleep = sleep

    @classmethod
    def fromSettings(cls, config: settings.Settings, probe, resolver, provider, applier, **kwargs):
        return cls(
            probe,
            resolver,
            provider,
            applier,
            city=config.city,
            sunriseOffset=config.sunriseDelta,
            sunsetOffset=config.sunsetDelta,
            loopDelay=config.loopDelay,
            checkInterval=config.checkInterval,
            probeRetries=config.probeRetries,
            probeInterval=config.probeInterval,
            probeTimeout=config.probeTimeout,
            **kwargs,
        )

    # ------------ Loop -----------------------
    def tick(self) -> float:
        """Run one pass of the loop and return how long to sleep before the next one."""
        now = self.clock()
        try:
            if self.state.isFresh(now):
                self.applyPhase(now)
                return self.loopDelay
            return self.refresh(now)
        except Exception:
            logger.exception("Unexpected error during tick, retrying in %ss", self.checkInterval)
            return self.checkInterval

    def runForever(self):
        logger.info("Day/night switching started (loop every %ss, retry every %ss)", self.loopDelay, self.checkInterval)
        while True:
            delay = self.tick()
            if delay > 0: # 0 means fresh sun times just came in, decide right away
                self.sleep(delay)

    def runUntilApplied(self, maxTicks: int = 1000) -> Optional[Phase]:
        """Tick until a phase has been decided and applied once, then stop. Used by ``--once``."""
        for _ in range(maxTicks):
            wasFresh = self.state.isFresh(self.clock())
            delay = self.tick()
            if wasFresh:
                return self.state.lastPhase # None if the theme could not be written
            if delay > 0:
                self.sleep(delay)
        return None

    # ------------ Phase -----------------------
    def phaseAt(self, now: datetime) -> Phase:
        return self.state.window.phaseAt(now)

    def applyPhase(self, now: datetime):
        phase = self.phaseAt(now)
        force = self.state.lastPhase is None # Nothing written yet this run, so don't trust what's there
        outcome = self.applier.apply(phase.isLight, force=force)
        if outcome.kind is FailureKind.PERMISSION:
            logger.error("Not allowed to switch to the %s theme (%s), skipping this tick", phase.value, outcome)
            return
        if not outcome.ok:
            logger.error("Theme store unavailable, could not switch to %s (%s), skipping this tick", phase.value, outcome)
            return
        if phase is not self.state.lastPhase:
            logger.info("Theme is now %s (window %s)", phase.value, self.state.window)
            self.state.lastPhase = phase
            try:
                self.notifier.announce(phase, now)
            except Exception:
                logger.exception("Notifier failed for the %s phase", phase.value)

    # ------------ Refresh -----------------------
    def refresh(self, now: datetime) -> float:
        """Fetch today's sun times. Returns 0 on success, ``checkInterval`` if any step failed."""
        self.state.lastAttempt = now

        if not self.probe.check(self.probeRetries, self.probeInterval, self.probeTimeout):
            logger.warning("No internet connection, checking again in %ss", self.checkInterval)
            return self.checkInterval

        if self.state.location is None:
            outcome = self.resolver.resolve(self.city)
            if not self._succeeded(outcome, "Location lookup"):
                return self.checkInterval
            self.state.location = outcome.value

        outcome = self.provider.fetch(self.state.location, now.date())
        if not self._succeeded(outcome, "Sun time lookup"):
            return self.checkInterval # Location stays resolved

        window = outcome.value.shifted(self.sunriseOffset, self.sunsetOffset)
        if window.isEmpty:
            logger.warning("Offsets leave no daylight on %s (%s), staying dark all day", window.date, window)
        self.state.window = window
        self.state.lastRefreshDay = now.date()
        logger.info("Sun times for %s: sunrise %s, sunset %s (raw %s)", window.date, f"{window.sunrise:%H:%M}", f"{window.sunset:%H:%M}", outcome.value)
        return 0

    def _succeeded(self, outcome: Outcome, what: str) -> bool:
        if outcome.ok:
            return True
        if outcome.retryable: # NETWORK or DATA
            logger.warning("%s failed (%s), retrying in %ss", what, outcome, self.checkInterval)
        else:
            logger.error("%s failed unexpectedly (%s), retrying in %ss", what, outcome, self.checkInterval)
        return False
