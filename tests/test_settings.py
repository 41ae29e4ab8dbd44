from datetime import timedelta

import pytest

from autoswitch.settings import Settings, SettingsError


def test_defaults():
    config = Settings()
    assert config.loopDelay == 60
    assert config.checkInterval == 20
    assert config.httpTimeout == 10
    assert config.sunriseDelta == timedelta(0)


def test_from_yaml(tmp_path):
    path = tmp_path / "autoswitch.yaml"
    path.write_text("city: Athens\nsunriseOffset: 30\nsunsetOffset: -60\nprovider: suntime\n")

    config = Settings.fromYaml(path)
    assert config.city == "Athens"
    assert config.sunriseDelta == timedelta(minutes=30)
    assert config.sunsetDelta == timedelta(minutes=-60)
    assert config.provider == "suntime"


def test_empty_yaml_gives_defaults(tmp_path):
    path = tmp_path / "autoswitch.yaml"
    path.write_text("")
    assert Settings.fromYaml(path) == Settings()


@pytest.mark.parametrize(
    "text",
    [
        "citty: London\n",
        "sunsetOffset: -720\n",
        "theme: kde\n",
        "checkInterval: 0\n",
        "- just\n- a list\n",
        "city: [unclosed\n",
    ],
)
def test_bad_yaml_is_rejected(tmp_path, text):
    path = tmp_path / "autoswitch.yaml"
    path.write_text(text)
    with pytest.raises(SettingsError):
        Settings.fromYaml(path)


def test_override_ignores_unset_values():
    config = Settings(city="Oslo", sunsetOffset=-30).override(city=None, sunsetOffset=15, theme="gnome")
    assert config.city == "Oslo"
    assert config.sunsetOffset == 15
    assert config.theme == "gnome"
