import logging
import subprocess

from .results import FailureKind, Outcome

logger = logging.getLogger(__name__)

PERSONALIZE_KEY = r"SOFTWARE\Microsoft\Windows\CurrentVersion\Themes\Personalize"
APP_VALUE = "AppsUseLightTheme"
SYSTEM_VALUE = "SystemUsesLightTheme"

HWND_BROADCAST = 0xFFFF
WM_SETTINGCHANGE = 0x001A
SMTO_ABORTIFHUNG = 0x0002


def broadcastThemeChange():
    import ctypes
    ctypes.windll.user32.SendMessageTimeoutW(HWND_BROADCAST, WM_SETTINGCHANGE, 0, "ImmersiveColorSet", SMTO_ABORTIFHUNG, 5000, None) # Change the theme immediately - do not wait for Explorer


class WindowsTheme:
    """Flips the app and system light-theme switches in the Windows Registry."""

    def __init__(self, registry=None, broadcast=broadcastThemeChange):
        self.registry = registry
        self.broadcast = broadcast

    def _winreg(self):
        if self.registry is None:
            import winreg # Only exists on Windows
            self.registry = winreg
        return self.registry

    def _current(self, winreg):
        values = []
        try:
            with winreg.OpenKey(winreg.HKEY_CURRENT_USER, PERSONALIZE_KEY, 0, winreg.KEY_READ) as key:
                for name in (APP_VALUE, SYSTEM_VALUE):
                    values.append(winreg.QueryValueEx(key, name)[0])
        except FileNotFoundError:
            return None # Fresh profile, the values get created on first write
        return values

    def apply(self, useLight: bool, force: bool = False) -> Outcome:
        value = 1 if useLight else 0 # 1 is light, 0 is dark
        try:
            winreg = self._winreg()
            if not force and self._current(winreg) == [value, value]:
                return Outcome.success(False) # Both already match, nothing to write
            with winreg.CreateKeyEx(winreg.HKEY_CURRENT_USER, PERSONALIZE_KEY, 0, winreg.KEY_SET_VALUE) as key:
                winreg.SetValueEx(key, APP_VALUE, 0, winreg.REG_DWORD, value) # Set apps to use the light theme
                winreg.SetValueEx(key, SYSTEM_VALUE, 0, winreg.REG_DWORD, value) # Set the system to use the light theme
        except ImportError as e:
            return Outcome.failure(FailureKind.STORE, f"Windows Registry unavailable: {e}")
        except PermissionError as e:
            return Outcome.failure(FailureKind.PERMISSION, f"Registry write denied: {e}")
        except OSError as e:
            return Outcome.failure(FailureKind.STORE, f"Registry error: {e}")

        if self.broadcast is not None:
            try:
                self.broadcast()
            except (AttributeError, OSError) as e: # The values are written, Explorer just picks them up later
                logger.warning("Could not broadcast the theme change: %s", e)
        return Outcome.success(True)


def chooseGtkTheme(baseTheme: str, useLight: bool) -> str:
    if baseTheme.lower().startswith("adwaita"):
        return "Adwaita" if useLight else "Adwaita-dark"
    root = baseTheme.split("-")[0] # "ZorinBlue-Dark" -> "ZorinBlue"
    return f"{root}-Light" if useLight else f"{root}-Dark"


class GnomeTheme:
    """Sets the GNOME colour scheme (and matching GTK theme) through gsettings."""

    SCHEMA = "org.gnome.desktop.interface"

    def __init__(self, changeGtkTheme=True, run=subprocess.run):
        self.changeGtkTheme = changeGtkTheme
        self.run = run

    def _get(self, key):
        result = self.run(["gsettings", "get", self.SCHEMA, key], capture_output=True, text=True, check=True)
        return result.stdout.strip().strip("'")

    def _set(self, key, value):
        self.run(["gsettings", "set", self.SCHEMA, key, value], capture_output=True, text=True, check=True)

    def apply(self, useLight: bool, force: bool = False) -> Outcome:
        scheme = "default" if useLight else "prefer-dark"
        try:
            wanted = {"color-scheme": scheme}
            if self.changeGtkTheme:
                wanted["gtk-theme"] = chooseGtkTheme(self._get("gtk-theme") or "Adwaita", useLight)
            if not force and all(self._get(key) == value for key, value in wanted.items()):
                return Outcome.success(False)
            for key, value in wanted.items():
                self._set(key, value)
        except PermissionError as e:
            return Outcome.failure(FailureKind.PERMISSION, f"gsettings denied: {e}")
        except FileNotFoundError as e:
            return Outcome.failure(FailureKind.STORE, f"gsettings not installed: {e}")
        except subprocess.CalledProcessError as e:
            return Outcome.failure(FailureKind.STORE, f"gsettings failed: {(e.stderr or '').strip() or e}")
        return Outcome.success(True)
