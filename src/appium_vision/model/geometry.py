"""Geometry value types as reported by the server.

Fields stay ``None`` when the server omits them so callers can tell missing
data from a zero coordinate. ``to_dict`` leaves missing fields out, so a
value converted back has the keys the server sent.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from ..exceptions import InvalidArgumentError

Number = int | float


def _present(**fields: Any) -> dict[str, Any]:
    """Keep only the fields the server reported."""
    return {name: value for name, value in fields.items() if value is not None}


@dataclass(frozen=True)
class Point:
    """A point in screen coordinates."""

    x: Number | None = None
    y: Number | None = None

    @classmethod
    def from_wire(cls, data: Mapping[str, Any]) -> Point:
        return cls(x=data.get("x"), y=data.get("y"))

    def to_dict(self) -> dict[str, Any]:
        return _present(x=self.x, y=self.y)


@dataclass(frozen=True)
class Size:
    """Width and height of an element."""

    width: Number | None = None
    height: Number | None = None

    def to_dict(self) -> dict[str, Any]:
        return _present(width=self.width, height=self.height)


@dataclass(frozen=True)
class Rect:
    """A rectangle with its top-left corner and dimensions."""

    x: Number | None = None
    y: Number | None = None
    width: Number | None = None
    height: Number | None = None

    @classmethod
    def from_wire(cls, data: Mapping[str, Any]) -> Rect:
        """Create from a wire dict, keeping absent keys as None."""
        return cls(
            x=data.get("x"),
            y=data.get("y"),
            width=data.get("width"),
            height=data.get("height"),
        )

    @property
    def is_complete(self) -> bool:
        """True when all four fields were reported."""
        return None not in (self.x, self.y, self.width, self.height)

    @property
    def location(self) -> Point:
        return Point(self.x, self.y)

    @property
    def size(self) -> Size:
        return Size(self.width, self.height)

    @property
    def center(self) -> Point:
        """Center point of the rectangle.

        Raises:
            InvalidArgumentError: If any field is missing
        """
        if not self.is_complete:
            raise InvalidArgumentError(f"Cannot compute center of incomplete rect {self}")
        return Point(self.x + self.width / 2, self.y + self.height / 2)  # type: ignore[operator]

    def within_tolerance(self, other: Rect, tolerance: float) -> bool:
        """Check every field differs from ``other`` by at most ``tolerance``.

        A field missing on either side counts as a difference.
        """
        for mine, theirs in (
            (self.x, other.x),
            (self.y, other.y),
            (self.width, other.width),
            (self.height, other.height),
        ):
            if mine is None or theirs is None:
                return False
            if abs(mine - theirs) > tolerance:
                return False
        return True

    def to_dict(self) -> dict[str, Any]:
        return _present(x=self.x, y=self.y, width=self.width, height=self.height)
