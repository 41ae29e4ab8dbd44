"""Command line entry point: wires the settings to the real services and starts the loop."""
import logging
import sys

import click

from .connectivity import ConnectivityProbe
from .location import IpLocationResolver, OsmLocationResolver
from .log import setupLogging
from .notify import PhaseNotifier, SilentNotifier
from .scheduler import DayNightScheduler
from .settings import PROVIDERS, THEMES, Settings, SettingsError
from .solar import SunriseSunsetApi, SuntimeProvider
from .theme import GnomeTheme, WindowsTheme

logger = logging.getLogger(__name__)


def buildScheduler(config: Settings, notifier=None) -> DayNightScheduler:
    resolver = OsmLocationResolver(config.httpTimeout) if config.city else IpLocationResolver(config.httpTimeout)
    provider = SunriseSunsetApi(config.httpTimeout) if config.provider == "sunrise-sunset" else SuntimeProvider()
    applier = WindowsTheme() if config.theme == "windows" else GnomeTheme()
    if notifier is None:
        notifier = PhaseNotifier() if config.notifications and sys.platform == "win32" else SilentNotifier() # Toasts are a Windows thing
    return DayNightScheduler.fromSettings(config, ConnectivityProbe(), resolver, provider, applier, notifier=notifier)


@click.command()
@click.option("--config", "configPath", type=click.Path(exists=True, dir_okay=False), help="YAML settings file")
@click.option("--city", help="Place to take sunrise/sunset from (default: locate by IP address)")
@click.option("--sunrise-offset", "sunriseOffset", type=int, help="Minutes to add to sunrise, e.g. 30 or -15")
@click.option("--sunset-offset", "sunsetOffset", type=int, help="Minutes to add to sunset, e.g. -60")
@click.option("--provider", type=click.Choice(PROVIDERS), help="Where sun times come from")
@click.option("--theme", type=click.Choice(THEMES), help="Which desktop to switch")
@click.option("--no-notify", "noNotify", is_flag=True, help="Do not show a notification when the theme changes")
@click.option("--log-level", "logLevel", type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False))
@click.option("--log-file", "logFile", type=click.Path(dir_okay=False), help="Also write the log to this file")
@click.option("--once", is_flag=True, help="Apply the theme for right now and exit")
def main(configPath, city, sunriseOffset, sunsetOffset, provider, theme, noNotify, logLevel, logFile, once):
    """Switch between the light and dark theme at sunrise and sunset.

    Examples:
        # Follow the sun over London, go dark an hour before sunset
        autoswitch --city London --sunset-offset -60

        # Use a settings file and the offline sun calculation
        autoswitch --config autoswitch.yaml --provider suntime
    """
    try:
        config = Settings.fromYaml(configPath) if configPath else Settings()
        config = config.override(
            city=city,
            sunriseOffset=sunriseOffset,
            sunsetOffset=sunsetOffset,
            provider=provider,
            theme=theme,
            notifications=False if noNotify else None,
            logLevel=logLevel,
            logFile=logFile,
        )
    except SettingsError as e:
        raise click.BadParameter(str(e)) from e

    setupLogging(config.logLevel, config.logFile)
    scheduler = buildScheduler(config)
    logger.info("Following the sun over %s", config.city or "this machine's IP location")

    if once:
        phase = scheduler.runUntilApplied()
        if phase is None:
            raise click.ClickException("Could not apply a theme")
        click.echo(f"Theme set to {phase.value}")
        return

    try:
        scheduler.runForever()
    except KeyboardInterrupt:
        logger.info("Stopped by user")


if __name__ == "__main__":
    main()
