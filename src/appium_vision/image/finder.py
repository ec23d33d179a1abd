"""Find elements by template image.

One find attempt sends the template to the server's ``-image`` locator and
reads the rectangle of every element it returns. The server applies its
image settings (threshold, template scaling, screenshot fixes) while
matching. The wait engine repeats attempts until some element shows up,
and each one becomes an ImageElement.
"""

import weakref
from collections.abc import Mapping
from typing import Any

from ..base_exceptions import FailureKind
from ..config import ClientSettings, ImageSettings, get_settings
from ..exceptions import (
    ElementNotFoundError,
    MalformedResponseError,
    StaleElementError,
    TransientNotFoundError,
    WaitTimeoutError,
)
from ..logging import get_logger
from ..model import Rect
from ..transport import Session
from ..wait import Wait
from .element import ELEMENT_ID_PREFIX, ImageElement
from .encoding import EncodedImage, ImageSource, encode_image

logger = get_logger(__name__)

IMAGE_LOCATOR = "-image"
W3C_ELEMENT_KEY = "element-6066-11e4-a52e-4f735466cecf"
LEGACY_ELEMENT_KEY = "ELEMENT"


def element_id_of(reference: Any) -> str:
    """Extract the element id from a W3C element reference.

    Raises:
        MalformedResponseError: If the reference is not an image element reference
    """
    if not isinstance(reference, Mapping):
        raise MalformedResponseError("element reference must be an object", payload=reference)
    element_id = reference.get(W3C_ELEMENT_KEY, reference.get(LEGACY_ELEMENT_KEY))
    if not isinstance(element_id, str) or not element_id.startswith(ELEMENT_ID_PREFIX):
        raise MalformedResponseError(
            f"expected an id starting with {ELEMENT_ID_PREFIX}", payload=reference
        )
    return element_id


class ImageElementFinder:
    """Resolves template images to image elements through one session."""

    def __init__(
        self,
        session: Session,
        image_settings: ImageSettings | None = None,
        waiter: Wait | None = None,
        settings: ClientSettings | None = None,
    ) -> None:
        """Initialize the finder.

        Args:
            session: Remote session used for finds, geometry and clicks
            image_settings: Current image settings (staleness flag)
            waiter: Wait configuration; NOT_FOUND failures are always ignored
            settings: Client settings for defaults and staleness tolerance
        """
        settings = settings or get_settings()
        self.session = session
        self.image_settings = image_settings or ImageSettings()
        self.staleness_tolerance = settings.staleness_tolerance
        waiter = waiter or Wait(settings=settings)
        if FailureKind.NOT_FOUND not in waiter.ignored:
            waiter = Wait(
                timeout=waiter.timeout,
                interval=waiter.interval,
                ignored=(*waiter.ignored, FailureKind.NOT_FOUND),
                clock=waiter.clock,
            )
        self.waiter = waiter
        self._elements: "weakref.WeakSet[ImageElement]" = weakref.WeakSet()

    @property
    def staleness_check_enabled(self) -> bool:
        return self.image_settings.check_for_image_element_staleness

    def find_element_ids(self, template: EncodedImage) -> list[str]:
        """Run one find-by-image request and return element ids in rank order.

        Raises:
            MalformedResponseError: If the reply is not a list of element references
        """
        value = self.session.call("find_elements", {"using": IMAGE_LOCATOR, "value": template.data})
        if not isinstance(value, list):
            raise MalformedResponseError("find elements must return a list", payload=value)
        return [element_id_of(reference) for reference in value]

    def element_rect(self, element_id: str) -> Rect:
        """Ask the server for the rectangle of one element."""
        value = self.session.call("element_rect", {"element_id": element_id})
        if not isinstance(value, Mapping):
            raise MalformedResponseError("element rect must be an object", payload=value)
        return Rect.from_wire(value)

    def find_occurrences(self, template: EncodedImage) -> list[tuple[str, Rect]]:
        """Run one find attempt and return (element id, rect) pairs in rank order."""
        return [
            (element_id, self.element_rect(element_id))
            for element_id in self.find_element_ids(template)
        ]

    def _resolve(
        self, image: ImageSource | EncodedImage
    ) -> tuple[EncodedImage, list[tuple[str, Rect]]]:
        template = image if isinstance(image, EncodedImage) else encode_image(image)
        try:
            found = self.waiter.until(
                lambda: self.find_occurrences(template),
                message=f"No occurrence of {template.reference}",
            )
        except WaitTimeoutError as e:
            raise ElementNotFoundError(template.reference, e) from e
        logger.info("image_resolved", template=template.reference, candidates=len(found))
        return template, found

    def _materialize(
        self, template: EncodedImage, rank: int, element_id: str, rect: Rect
    ) -> ImageElement:
        element = ImageElement(self, element_id, template, rank, rect)
        self._elements.add(element)
        return element

    def find_element_by_image(self, image: ImageSource | EncodedImage) -> ImageElement:
        """Wait for the template to appear and return its best match.

        Raises:
            ElementNotFoundError: If nothing matched before the deadline
        """
        template, found = self._resolve(image)
        element_id, rect = found[0]
        return self._materialize(template, 0, element_id, rect)

    def find_elements_by_image(self, image: ImageSource | EncodedImage) -> list[ImageElement]:
        """Wait for the template to appear and return every match in rank order.

        Raises:
            ElementNotFoundError: If nothing matched before the deadline
        """
        template, found = self._resolve(image)
        return [
            self._materialize(template, rank, element_id, rect)
            for rank, (element_id, rect) in enumerate(found)
        ]

    def revalidate(self, element: ImageElement) -> Rect:
        """Re-find ``element`` once and return its fresh rectangle.

        Raises:
            StaleElementError: If the match at the element's rank is gone or moved
        """
        try:
            element_ids = self.find_element_ids(element.template)
        except TransientNotFoundError:
            element_ids = []

        if element.rank >= len(element_ids):
            reason = f"no match at rank {element.rank} ({len(element_ids)} found)"
        else:
            fresh = self.element_rect(element_ids[element.rank])
            if fresh.within_tolerance(element.last_known_rect, self.staleness_tolerance):
                return fresh
            reason = f"match moved from {element.last_known_rect} to {fresh}"

        element.invalidate(reason)
        logger.info("image_element_stale", element_id=element.id, reason=reason)
        raise StaleElementError(element.id, reason)

    def invalidate_all(self, reason: str = "session ended") -> None:
        """Invalidate every element this finder has handed out."""
        for element in list(self._elements):
            element.invalidate(reason)
