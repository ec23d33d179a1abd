"""Platform drivers."""

from .android import AndroidDriver
from .base import Driver
from .interfaces import (
    DeviceCommandsCapable,
    ImageCapable,
    Location,
    NetworkConnectionCapable,
    SettingsCapable,
)

__all__ = [
    "Driver",
    "AndroidDriver",
    "Location",
    "ImageCapable",
    "SettingsCapable",
    "NetworkConnectionCapable",
    "DeviceCommandsCapable",
]
