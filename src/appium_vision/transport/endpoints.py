"""Endpoint table for the remote automation protocol.

Every command the client issues is named here with its HTTP method and its
path relative to the server URL. Placeholders such as ``{session_id}`` and
``{element_id}`` are filled in by the session from the call parameters.
"""

import string
from dataclasses import dataclass


@dataclass(frozen=True)
class Endpoint:
    """A named remote command."""

    method: str
    path: str

    @property
    def path_params(self) -> tuple[str, ...]:
        """Placeholders in the path other than the session id."""
        names = (field for _, field, _, _ in string.Formatter().parse(self.path) if field)
        return tuple(name for name in names if name != "session_id")

    def url_for(self, session_id: str, **path_params: str) -> str:
        return self.path.format(session_id=session_id, **path_params)


_SESSION = "/session/{session_id}"

ENDPOINTS: dict[str, Endpoint] = {
    # Session
    "new_session": Endpoint("POST", "/session"),
    "delete_session": Endpoint("DELETE", _SESSION),
    # Screen
    "screenshot": Endpoint("GET", f"{_SESSION}/screenshot"),
    # Elements
    "find_elements": Endpoint("POST", f"{_SESSION}/elements"),
    "element_rect": Endpoint("GET", f"{_SESSION}/element/{{element_id}}/rect"),
    "element_click": Endpoint("POST", f"{_SESSION}/element/{{element_id}}/click"),
    "element_attribute": Endpoint("GET", f"{_SESSION}/element/{{element_id}}/attribute/{{name}}"),
    # Image comparison
    "compare_images": Endpoint("POST", f"{_SESSION}/appium/compare_images"),
    # Settings
    "get_settings": Endpoint("GET", f"{_SESSION}/appium/settings"),
    "update_settings": Endpoint("POST", f"{_SESSION}/appium/settings"),
    # Network
    "get_network_connection": Endpoint("GET", f"{_SESSION}/network_connection"),
    "set_network_connection": Endpoint("POST", f"{_SESSION}/network_connection"),
    # Location
    "get_location": Endpoint("GET", f"{_SESSION}/location"),
    "set_location": Endpoint("POST", f"{_SESSION}/location"),
    # Device commands
    "open_notifications": Endpoint("POST", f"{_SESSION}/appium/device/open_notifications"),
    "current_activity": Endpoint("GET", f"{_SESSION}/appium/device/current_activity"),
    "current_package": Endpoint("GET", f"{_SESSION}/appium/device/current_package"),
    "get_system_bars": Endpoint("GET", f"{_SESSION}/appium/device/system_bars"),
    "get_display_density": Endpoint("GET", f"{_SESSION}/appium/device/display_density"),
    "toggle_location_services": Endpoint(
        "POST", f"{_SESSION}/appium/device/toggle_location_services"
    ),
    "hide_keyboard": Endpoint("POST", f"{_SESSION}/appium/device/hide_keyboard"),
    "background_app": Endpoint("POST", f"{_SESSION}/appium/app/background"),
    "get_clipboard": Endpoint("POST", f"{_SESSION}/appium/device/get_clipboard"),
    "set_clipboard": Endpoint("POST", f"{_SESSION}/appium/device/set_clipboard"),
    "finger_print": Endpoint("POST", f"{_SESSION}/appium/device/finger_print"),
    # Screen recording
    "start_recording_screen": Endpoint("POST", f"{_SESSION}/appium/start_recording_screen"),
    "stop_recording_screen": Endpoint("POST", f"{_SESSION}/appium/stop_recording_screen"),
    # Performance
    "get_performance_data_types": Endpoint("POST", f"{_SESSION}/appium/performanceData/types"),
    "get_performance_data": Endpoint("POST", f"{_SESSION}/appium/getPerformanceData"),
    # Chrome DevTools
    "execute_cdp": Endpoint("POST", f"{_SESSION}/goog/cdp/execute"),
}
