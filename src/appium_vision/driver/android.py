"""Android driver.

Adds the Android device commands to the shared driver. They are forwarded
as-is: no retry and no validation beyond argument checks.
"""

import base64
import binascii
from collections.abc import Mapping
from typing import Any

from ..config import (
    RecordingOptions,
    RecordingUploadOptions,
    UnknownKeyPolicy,
    WireModel,
    split_wire,
    validate_wire,
)
from ..exceptions import InvalidArgumentError, MalformedResponseError
from .base import Driver
from .interfaces import DeviceCommandsCapable, Location

CLIPBOARD_CONTENT_TYPES = ("plaintext",)
FINGER_PRINT_IDS = range(1, 11)


class AndroidDriver(Driver, DeviceCommandsCapable):
    """Driver for Android sessions."""

    def open_notifications(self) -> None:
        self.session.call("open_notifications")

    def current_activity(self) -> str:
        return self.session.call("current_activity")

    def current_package(self) -> str:
        return self.session.call("current_package")

    def get_system_bars(self) -> dict[str, Any]:
        return self.session.call("get_system_bars")

    def system_bars(self) -> dict[str, Any]:
        """Alias of get_system_bars."""
        return self.get_system_bars()

    def get_display_density(self) -> int:
        return self.session.call("get_display_density")

    def location(self) -> Location:
        value = self.session.call("get_location")
        if not isinstance(value, dict) or "latitude" not in value or "longitude" not in value:
            raise MalformedResponseError("location needs latitude and longitude", payload=value)
        return Location(
            latitude=value["latitude"],
            longitude=value["longitude"],
            altitude=value.get("altitude", 0.0),
        )

    def set_location(self, location: Location) -> None:
        if not -90 <= location.latitude <= 90 or not -180 <= location.longitude <= 180:
            raise InvalidArgumentError(f"Location out of range: {location}")
        self.session.call(
            "set_location",
            {
                "location": {
                    "latitude": location.latitude,
                    "longitude": location.longitude,
                    "altitude": location.altitude,
                }
            },
        )

    def toggle_location_services(self) -> None:
        self.session.call("toggle_location_services")

    def hide_keyboard(self, close_key: str | None = None) -> None:
        # Android ignores close_key; the server closes the keyboard itself
        self.session.call("hide_keyboard", {})

    def background_app(self, duration: float = 0) -> None:
        """Send the app to the background for ``duration`` seconds.

        A negative duration leaves it in the background.
        """
        self.session.call("background_app", {"seconds": duration})

    def get_clipboard(self, content_type: str = "plaintext") -> str:
        """Return the clipboard text."""
        self._check_content_type(content_type)
        value = self.session.call("get_clipboard", {"contentType": content_type})
        if not isinstance(value, str):
            raise MalformedResponseError("clipboard must be a base64 string", payload=value)
        try:
            return base64.b64decode(value, validate=True).decode("utf-8")
        except (binascii.Error, ValueError) as e:
            raise MalformedResponseError(
                f"clipboard is not base64 encoded UTF-8: {e}", payload=value
            ) from e

    def set_clipboard(
        self, content: str, content_type: str = "plaintext", label: str | None = None
    ) -> None:
        self._check_content_type(content_type)
        params: dict[str, Any] = {
            "content": base64.b64encode(content.encode("utf-8")).decode("ascii"),
            "contentType": content_type,
        }
        if label is not None:
            params["label"] = label
        self.session.call("set_clipboard", params)

    # Screen recording

    def start_recording_screen(
        self,
        options: RecordingOptions | Mapping[str, Any] | None = None,
        unknown_keys: UnknownKeyPolicy = UnknownKeyPolicy.REJECT,
    ) -> str:
        """Start recording the screen.

        Args:
            options: RecordingOptions or a mapping keyed by wire names
            unknown_keys: Reject unrecognized keys or forward them verbatim

        Returns:
            Base64 video of a recording this one replaced, or an empty string
        """
        payload = _options_payload(RecordingOptions, options, unknown_keys)
        return self.session.call("start_recording_screen", {"options": payload})

    def stop_recording_screen(
        self,
        options: RecordingUploadOptions | Mapping[str, Any] | None = None,
        unknown_keys: UnknownKeyPolicy = UnknownKeyPolicy.REJECT,
    ) -> str:
        """Stop recording and return the video.

        Returns:
            Base64 video, or an empty string when it was uploaded to remotePath
        """
        payload = _options_payload(RecordingUploadOptions, options, unknown_keys)
        return self.session.call("stop_recording_screen", {"options": payload})

    # Performance

    def get_performance_data_types(self) -> list[str]:
        return self.session.call("get_performance_data_types")

    def get_performance_data(
        self, package_name: str, data_type: str, data_read_timeout: int | None = None
    ) -> list[list[Any]]:
        """Read resource usage of an app as a table whose first row holds the column names."""
        params: dict[str, Any] = {"packageName": package_name, "dataType": data_type}
        if data_read_timeout is not None:
            params["dataReadTimeout"] = data_read_timeout
        return self.session.call("get_performance_data", params)

    # Emulator and browser

    def finger_print(self, finger_id: int) -> None:
        """Authenticate with a stored emulator finger print (1 to 10)."""
        if isinstance(finger_id, bool) or finger_id not in FINGER_PRINT_IDS:
            raise InvalidArgumentError(f"finger_id must be between 1 and 10, got {finger_id!r}")
        self.session.call("finger_print", {"fingerprintId": finger_id})

    def execute_cdp(self, cmd: str, **params: Any) -> Any:
        """Run a Chrome DevTools protocol command."""
        return self.session.call("execute_cdp", {"cmd": cmd, "params": params})

    @staticmethod
    def _check_content_type(content_type: str) -> None:
        if content_type not in CLIPBOARD_CONTENT_TYPES:
            raise InvalidArgumentError(
                f"Android clipboard supports {', '.join(CLIPBOARD_CONTENT_TYPES)}, got {content_type!r}"
            )


def _options_payload(
    model: type[WireModel],
    options: WireModel | Mapping[str, Any] | None,
    unknown_keys: UnknownKeyPolicy,
) -> dict[str, Any]:
    if options is None:
        return model().to_wire()
    if isinstance(options, WireModel):
        return options.to_wire()
    recognized, unknown = split_wire(model, options, unknown_keys)
    return {**validate_wire(model, recognized).to_wire(), **unknown}
