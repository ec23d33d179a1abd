"""Capability interfaces.

Each platform driver declares what it supports by implementing these
interfaces instead of having commands attached at runtime.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any, TypeVar

from ..config import ImageSettings, RecordingOptions, RecordingUploadOptions, UnknownKeyPolicy
from ..image import EncodedImage, ImageElement, ImageSource
from ..mapping import NetworkConnectionType
from ..model import FindOccurrenceResult, MatchResult, SimilarityResult
from ..wait.engine import IgnoredFailure

T = TypeVar("T")


@dataclass(frozen=True)
class Location:
    """Device geolocation."""

    latitude: float
    longitude: float
    altitude: float = 0.0


class ImageCapable(ABC):
    """Image comparison and image element lookup."""

    @abstractmethod
    def find_element_by_image(self, image: ImageSource | EncodedImage) -> ImageElement:
        """Wait for a template image and return its best match."""

    @abstractmethod
    def find_elements_by_image(self, image: ImageSource | EncodedImage) -> list[ImageElement]:
        """Wait for a template image and return all matches in rank order."""

    @abstractmethod
    def compare_images(
        self, first: ImageSource, second: ImageSource, visualize: bool = False, **options: Any
    ) -> MatchResult:
        """Match features between two images."""

    @abstractmethod
    def find_image_occurrence(
        self, full: ImageSource, partial: ImageSource, visualize: bool = False, **options: Any
    ) -> FindOccurrenceResult:
        """Find a partial image inside a full image."""

    @abstractmethod
    def images_similarity(
        self, first: ImageSource, second: ImageSource, visualize: bool = False
    ) -> SimilarityResult:
        """Score the similarity of two images."""

    @abstractmethod
    def wait(
        self,
        predicate: Callable[[], T],
        timeout: float | None = None,
        interval: float | None = None,
        ignored: Iterable[IgnoredFailure] | None = None,
        message: str | None = None,
    ) -> T:
        """Poll a predicate until it yields a usable value."""

    @abstractmethod
    def screenshot(self) -> bytes:
        """Return the current screen as PNG bytes."""


class SettingsCapable(ABC):
    """Server-side settings."""

    @abstractmethod
    def get_settings(self) -> dict[str, Any]:
        """Return the server's current settings."""

    @abstractmethod
    def update_settings(
        self,
        values: ImageSettings | Mapping[str, Any],
        unknown_keys: UnknownKeyPolicy = UnknownKeyPolicy.REJECT,
    ) -> None:
        """Merge settings into the server's settings."""


class NetworkConnectionCapable(ABC):
    """Device network connection type."""

    @property
    @abstractmethod
    def network_connection_type(self) -> str | Any:
        """Current connection type name, or the raw code if unrecognized."""

    @network_connection_type.setter
    @abstractmethod
    def network_connection_type(self, connection_type: str | NetworkConnectionType) -> None:
        """Switch the connection type."""


class DeviceCommandsCapable(ABC):
    """Pass-through device commands."""

    @abstractmethod
    def open_notifications(self) -> None: ...

    @abstractmethod
    def current_activity(self) -> str: ...

    @abstractmethod
    def current_package(self) -> str: ...

    @abstractmethod
    def get_system_bars(self) -> dict[str, Any]: ...

    @abstractmethod
    def get_display_density(self) -> int: ...

    @abstractmethod
    def location(self) -> Location: ...

    @abstractmethod
    def set_location(self, location: Location) -> None: ...

    @abstractmethod
    def toggle_location_services(self) -> None: ...

    @abstractmethod
    def hide_keyboard(self, close_key: str | None = None) -> None: ...

    @abstractmethod
    def background_app(self, duration: float = 0) -> None: ...

    @abstractmethod
    def get_clipboard(self, content_type: str = "plaintext") -> str: ...

    @abstractmethod
    def set_clipboard(
        self, content: str, content_type: str = "plaintext", label: str | None = None
    ) -> None: ...

    @abstractmethod
    def system_bars(self) -> dict[str, Any]: ...

    @abstractmethod
    def start_recording_screen(
        self,
        options: RecordingOptions | Mapping[str, Any] | None = None,
        unknown_keys: UnknownKeyPolicy = UnknownKeyPolicy.REJECT,
    ) -> str: ...

    @abstractmethod
    def stop_recording_screen(
        self,
        options: RecordingUploadOptions | Mapping[str, Any] | None = None,
        unknown_keys: UnknownKeyPolicy = UnknownKeyPolicy.REJECT,
    ) -> str: ...

    @abstractmethod
    def get_performance_data_types(self) -> list[str]: ...

    @abstractmethod
    def get_performance_data(
        self, package_name: str, data_type: str, data_read_timeout: int | None = None
    ) -> list[list[Any]]: ...

    @abstractmethod
    def finger_print(self, finger_id: int) -> None: ...

    @abstractmethod
    def execute_cdp(self, cmd: str, **params: Any) -> Any: ...
