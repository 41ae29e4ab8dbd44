import logging
from datetime import datetime

from .models import Phase

logger = logging.getLogger(__name__)

APP_ID = "Windows Auto Switch"


def greetingFor(phase: Phase, now: datetime):
    if phase is Phase.LIGHT: # It's now daytime, so it should fire the daytime response
        if now.hour >= 12:
            return "Good Afternoon!", "The theme is now set to the light theme, as it is now daytime. Have a good afternoon! :)"
        if now.hour >= 4:
            return "Good Morning!", "The theme is now set to the light theme, as it is now day-time! Have a good morning! :)"
        return None # Too early to greet anyone
    if 16 <= now.hour < 19:
        return "Good Evening!", "The theme is now set to the dark theme, as it is now night-time. Have a good evening! :D"
    return "Good Night!", "The theme is now set to the dark theme, as it is now night-time. Have a good night! :)" # After 7pm, or before sunrise


def showToast(title, message, icon=None):
    from winotify import Notification # Windows only
    toast = Notification(app_id=APP_ID, title=title, msg=message, icon=icon or "")
    toast.show()


class PhaseNotifier:
    """Greets the user once whenever the theme flips between day and night."""

    def __init__(self, show=showToast, icon=None):
        self.show = show
        self.icon = icon
        self.lastAnnounced = None # Ensures the user only sees each greeting once per switch

    def announce(self, phase: Phase, now: datetime):
        if phase is self.lastAnnounced:
            return
        greeting = greetingFor(phase, now)
        if greeting is None:
            return
        title, message = greeting
        try:
            self.show(title, message, self.icon)
        except (ImportError, OSError) as e:
            logger.warning("Could not show the %s notification: %s", phase.value, e)
            return
        self.lastAnnounced = phase
        logger.debug("Announced %s: %s", phase.value, title)


class SilentNotifier:
    def announce(self, phase: Phase, now: datetime):
        pass
