"""Cross-platform driver.

A Driver wraps one explicit Session and implements the capabilities every
platform shares: image lookup and comparison, settings and the network
connection type.
"""

import base64
import binascii
from collections.abc import Callable, Iterable, Mapping
from typing import Any, TypeVar

from ..config import (
    ClientSettings,
    ImageSettings,
    UnknownKeyPolicy,
    get_settings,
    split_settings,
)
from ..exceptions import MalformedResponseError
from ..image import EncodedImage, ImageComparison, ImageElement, ImageElementFinder, ImageSource
from ..logging import get_logger
from ..mapping import NetworkConnectionType, decode_connection_type, encode_connection_type
from ..model import FindOccurrenceResult, MatchResult, SimilarityResult
from ..transport import Session
from ..wait import Clock, Wait
from ..wait.engine import IgnoredFailure
from .interfaces import ImageCapable, NetworkConnectionCapable, SettingsCapable

logger = get_logger(__name__)

T = TypeVar("T")


class Driver(ImageCapable, SettingsCapable, NetworkConnectionCapable):
    """Driver bound to a single remote session.

    Example:
        session = HttpSession.create({"platformName": "Android"})
        driver = Driver(session)
        driver.update_settings({"imageMatchThreshold": 0.9})
        button = driver.find_element_by_image("button.png")
        button.click()
    """

    def __init__(
        self,
        session: Session,
        settings: ClientSettings | None = None,
        image_settings: ImageSettings | None = None,
        clock: Clock | None = None,
    ) -> None:
        """Initialize the driver.

        Args:
            session: Remote session every command goes through
            settings: Client settings (wait defaults, staleness tolerance)
            image_settings: Known server-side image settings
            clock: Time source for waits
        """
        self.session = session
        self.settings = settings or get_settings()
        self.clock = clock
        self.waiter = Wait(settings=self.settings, clock=clock)
        self.comparison = ImageComparison(session)
        self.finder = ImageElementFinder(
            session,
            image_settings=image_settings,
            waiter=self.waiter,
            settings=self.settings,
        )

    @property
    def image_settings(self) -> ImageSettings:
        return self.finder.image_settings

    # Image capability

    def find_element_by_image(self, image: ImageSource | EncodedImage) -> ImageElement:
        return self.finder.find_element_by_image(image)

    def find_elements_by_image(self, image: ImageSource | EncodedImage) -> list[ImageElement]:
        return self.finder.find_elements_by_image(image)

    def compare_images(
        self, first: ImageSource, second: ImageSource, visualize: bool = False, **options: Any
    ) -> MatchResult:
        return self.comparison.compare_images(first, second, visualize=visualize, **options)

    def find_image_occurrence(
        self, full: ImageSource, partial: ImageSource, visualize: bool = False, **options: Any
    ) -> FindOccurrenceResult:
        return self.comparison.find_image_occurrence(full, partial, visualize=visualize, **options)

    def images_similarity(
        self, first: ImageSource, second: ImageSource, visualize: bool = False
    ) -> SimilarityResult:
        return self.comparison.images_similarity(first, second, visualize=visualize)

    def wait(
        self,
        predicate: Callable[[], T],
        timeout: float | None = None,
        interval: float | None = None,
        ignored: Iterable[IgnoredFailure] | None = None,
        message: str | None = None,
    ) -> T:
        """Poll ``predicate`` with the driver's wait defaults.

        Unset arguments fall back to the client settings and the default
        ignore set.
        """
        waiter = Wait(
            timeout=self.waiter.timeout if timeout is None else timeout,
            interval=self.waiter.interval if interval is None else interval,
            ignored=self.waiter.ignored if ignored is None else ignored,
            clock=self.waiter.clock,
        )
        return waiter.until(predicate, message=message)

    # Settings capability

    def get_settings(self) -> dict[str, Any]:
        value = self.session.call("get_settings")
        if not isinstance(value, dict):
            raise MalformedResponseError("settings must be an object", payload=value)
        return value

    def update_settings(
        self,
        values: ImageSettings | Mapping[str, Any],
        unknown_keys: UnknownKeyPolicy = UnknownKeyPolicy.REJECT,
    ) -> None:
        """Validate and send settings, then update the local image settings.

        Args:
            values: ImageSettings or a mapping keyed by wire names
            unknown_keys: Reject unrecognized keys or forward them verbatim

        Raises:
            InvalidArgumentError: For bad values, or unknown keys under REJECT
        """
        if isinstance(values, ImageSettings):
            recognized, unknown = values.to_wire(only_set=True), {}
        else:
            recognized, unknown = split_settings(values, unknown_keys)

        payload = {**recognized, **unknown}
        if not payload:
            return
        self.session.call("update_settings", {"settings": payload})
        self.finder.image_settings = self.finder.image_settings.merged(recognized)
        logger.info("settings_updated", keys=sorted(payload))

    # Network connection capability

    @property
    def network_connection_type(self) -> str | Any:
        return decode_connection_type(self.session.call("get_network_connection"))

    @network_connection_type.setter
    def network_connection_type(self, connection_type: str | NetworkConnectionType) -> None:
        code = encode_connection_type(connection_type)
        self.session.call("set_network_connection", {"parameters": {"type": code}})

    # Screen

    def screenshot(self) -> bytes:
        """Return the current screen as PNG bytes."""
        value = self.session.call("screenshot")
        if not isinstance(value, str) or not value:
            raise MalformedResponseError("screenshot must be a non-empty base64 string", payload=value)
        try:
            return base64.b64decode(value, validate=True)
        except (binascii.Error, ValueError) as e:
            raise MalformedResponseError(f"screenshot is not valid base64: {e}") from e

    # Lifecycle

    def quit(self) -> None:
        """Invalidate image elements and close the session."""
        self.finder.invalidate_all("session ended")
        self.session.close()
