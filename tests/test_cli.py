from click.testing import CliRunner

from autoswitch import cli
from autoswitch.models import Phase
from autoswitch.notify import SilentNotifier
from autoswitch.location import IpLocationResolver, OsmLocationResolver
from autoswitch.settings import Settings
from autoswitch.solar import SunriseSunsetApi, SuntimeProvider
from autoswitch.theme import GnomeTheme, WindowsTheme


class FakeScheduler:
    def __init__(self, phase):
        self.phase = phase

    def runUntilApplied(self):
        return self.phase


def run(monkeypatch, args, phase=Phase.DARK):
    seen = {}

    def buildScheduler(config):
        seen["config"] = config
        return FakeScheduler(phase)

    monkeypatch.setattr(cli, "buildScheduler", buildScheduler)
    monkeypatch.setattr(cli, "setupLogging", lambda level, logFile: None)
    result = CliRunner().invoke(cli.main, args)
    return result, seen.get("config")


def test_once_applies_and_exits(monkeypatch):
    result, config = run(monkeypatch, ["--city", "Athens", "--sunset-offset", "-60", "--once"])

    assert result.exit_code == 0, result.output
    assert "Theme set to dark" in result.output
    assert config.city == "Athens"
    assert config.sunsetOffset == -60
    assert config.sunriseOffset == 0


def test_flags_override_config_file(monkeypatch, tmp_path):
    path = tmp_path / "autoswitch.yaml"
    path.write_text("city: London\nsunriseOffset: 30\ntheme: gnome\n")

    result, config = run(monkeypatch, ["--config", str(path), "--city", "Paris", "--no-notify", "--once"])

    assert result.exit_code == 0, result.output
    assert config.city == "Paris"
    assert config.sunriseOffset == 30
    assert config.theme == "gnome"
    assert config.notifications is False


def test_bad_config_is_a_usage_error(monkeypatch, tmp_path):
    path = tmp_path / "autoswitch.yaml"
    path.write_text("sunriseOffset: 900\n")

    result, _ = run(monkeypatch, ["--config", str(path), "--once"])
    assert result.exit_code == 2


def test_once_fails_when_theme_could_not_be_set(monkeypatch):
    result, _ = run(monkeypatch, ["--once"], phase=None)
    assert result.exit_code == 1


def test_build_scheduler_picks_collaborators():
    scheduler = cli.buildScheduler(Settings(city="Oslo", provider="suntime", theme="gnome"), notifier=SilentNotifier())
    assert isinstance(scheduler.resolver, OsmLocationResolver)
    assert isinstance(scheduler.provider, SuntimeProvider)
    assert isinstance(scheduler.applier, GnomeTheme)
    assert scheduler.city == "Oslo"

    scheduler = cli.buildScheduler(Settings(), notifier=SilentNotifier())
    assert isinstance(scheduler.resolver, IpLocationResolver)
    assert isinstance(scheduler.provider, SunriseSunsetApi)
    assert isinstance(scheduler.applier, WindowsTheme)
