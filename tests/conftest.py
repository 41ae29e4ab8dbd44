from datetime import date, datetime, timedelta

import pytest

from autoswitch.models import Coordinates, SolarWindow
from autoswitch.results import FailureKind, Outcome
from autoswitch.scheduler import DayNightScheduler

LONDON = Coordinates(51.5074, -0.1278)


def window(day=date(2024, 6, 21), sunrise=(6, 0), sunset=(20, 0)):
    return SolarWindow(
        day,
        datetime(day.year, day.month, day.day, *sunrise),
        datetime(day.year, day.month, day.day, *sunset),
    )


class FakeClock:
    def __init__(self, now):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


class FakeProbe:
    """Answers from a script, then keeps answering True."""

    def __init__(self, answers=()):
        self.answers = list(answers)
        self.calls = []

    def check(self, retryCount, retryInterval, timeout):
        self.calls.append((retryCount, retryInterval, timeout))
        return self.answers.pop(0) if self.answers else True


class FakeResolver:
    def __init__(self, outcomes=()):
        self.outcomes = list(outcomes)
        self.calls = []

    def resolve(self, name):
        self.calls.append(name)
        return self.outcomes.pop(0) if self.outcomes else Outcome.success(LONDON)


class FakeProvider:
    def __init__(self, outcomes=(), sunrise=(6, 0), sunset=(20, 0)):
        self.outcomes = list(outcomes)
        self.sunrise = sunrise
        self.sunset = sunset
        self.calls = []

    def fetch(self, coords, day):
        self.calls.append((coords, day))
        if self.outcomes:
            return self.outcomes.pop(0)
        return Outcome.success(window(day, self.sunrise, self.sunset))


class FakeApplier:
    def __init__(self, outcomes=()):
        self.outcomes = list(outcomes)
        self.calls = []

    def apply(self, useLight, force=False):
        self.calls.append((useLight, force))
        return self.outcomes.pop(0) if self.outcomes else Outcome.success(True)


class FakeNotifier:
    def __init__(self):
        self.calls = []

    def announce(self, phase, now):
        self.calls.append((phase, now))


NETWORK_DOWN = Outcome.failure(FailureKind.NETWORK, "timed out")
NO_RESULTS = Outcome.failure(FailureKind.DATA, "no results found")
DENIED = Outcome.failure(FailureKind.PERMISSION, "access denied")


@pytest.fixture
def clock():
    return FakeClock(datetime(2024, 6, 21, 12, 0))


@pytest.fixture
def sleeps():
    return []


@pytest.fixture
def makeScheduler(clock, sleeps):
    def build(probe=None, resolver=None, provider=None, applier=None, **kwargs):
        kwargs.setdefault("city", "London")
        kwargs.setdefault("notifier", FakeNotifier())
        return DayNightScheduler(
            probe or FakeProbe(),
            resolver or FakeResolver(),
            provider or FakeProvider(),
            applier or FakeApplier(),
            clock=clock,
            sleep=sleeps.append,
            **kwargs,
        )
    return build
