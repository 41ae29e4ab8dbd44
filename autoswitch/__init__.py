"""WindowsAutoSwitch - switch between the light and dark theme at sunrise and sunset."""

__version__ = "2.0.0"
