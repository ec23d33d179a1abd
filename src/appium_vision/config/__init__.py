"""Configuration for appium-vision."""

from .image_settings import ImageSettings, split_settings, validate_image_settings
from .recording_options import RecordingOptions, RecordingUploadOptions
from .settings import ClientSettings, get_settings, reset_settings
from .wire_model import UnknownKeyPolicy, WireModel, split_wire, validate_wire

__all__ = [
    "ClientSettings",
    "get_settings",
    "reset_settings",
    "ImageSettings",
    "RecordingOptions",
    "RecordingUploadOptions",
    "UnknownKeyPolicy",
    "WireModel",
    "split_settings",
    "split_wire",
    "validate_image_settings",
    "validate_wire",
]
