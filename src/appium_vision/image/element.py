"""Image element handles.

An image element is what the server's ``-image`` locator returns: an id
bound to one ranked template match. Geometry queries are answered from the
match rectangle, re-checked first when staleness checking is on. Clicks go
to the server, which taps with its configured tap strategy.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..exceptions import StaleElementError
from ..model import Point, Rect, Size
from .encoding import EncodedImage

if TYPE_CHECKING:
    from .finder import ImageElementFinder

ELEMENT_ID_PREFIX = "appium-image-element-"


class ImageElement:
    """Handle to one occurrence of a template image on screen.

    Attributes:
        id: Element id minted by the server
        template: Encoded template the element was found with
        rank: Index of the match in the server's ranked list
    """

    def __init__(
        self,
        finder: ImageElementFinder,
        element_id: str,
        template: EncodedImage,
        rank: int,
        rect: Rect,
    ) -> None:
        self.id = element_id
        self.template = template
        self.rank = rank
        self._rect = rect
        self._finder = finder
        self._stale_reason: str | None = None

    @property
    def is_valid(self) -> bool:
        return self._stale_reason is None

    def invalidate(self, reason: str) -> None:
        """Mark the handle unusable; later queries raise StaleElementError."""
        if self._stale_reason is None:
            self._stale_reason = reason

    def _current_rect(self) -> Rect:
        if self._stale_reason is not None:
            raise StaleElementError(self.id, self._stale_reason)
        if self._finder.staleness_check_enabled:
            self._rect = self._finder.revalidate(self)
        return self._rect

    def _call(self, endpoint_name: str, **params: Any) -> Any:
        try:
            return self._finder.session.call(endpoint_name, {"element_id": self.id, **params})
        except StaleElementError as e:
            self.invalidate(e.message)
            raise

    @property
    def last_known_rect(self) -> Rect:
        """Rectangle from the latest resolution, without any re-check."""
        return self._rect

    @property
    def rect(self) -> Rect:
        return self._current_rect()

    @property
    def location(self) -> Point:
        return self._current_rect().location

    @property
    def size(self) -> Size:
        return self._current_rect().size

    def is_displayed(self) -> bool:
        """An image element is displayed while its match holds."""
        self._current_rect()
        return True

    def click(self) -> None:
        """Ask the server to tap the match."""
        self._current_rect()
        self._call("element_click")

    def get_attribute(self, name: str) -> Any:
        """Read an image element attribute such as ``score`` or ``visual``."""
        if self._stale_reason is not None:
            raise StaleElementError(self.id, self._stale_reason)
        return self._call("element_attribute", name=name)

    @property
    def score(self) -> Any:
        """Match score reported by the server."""
        return self.get_attribute("score")

    def __eq__(self, other: object) -> bool:
        return isinstance(other, ImageElement) and other.id == self.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self) -> str:
        return (
            f"ImageElement(id={self.id!r}, rank={self.rank}, "
            f"rect={self._rect}, template={self.template.reference})"
        )
