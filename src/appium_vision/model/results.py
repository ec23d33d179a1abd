"""Image comparison result models and their validators.

The server answers compare-images requests with loosely shaped JSON. The
parsers here check the required fields, decode the optional visualization
payload and keep everything else exactly as reported.
"""

from __future__ import annotations

import base64
import binascii
from collections.abc import Mapping
from dataclasses import dataclass, field
from io import BytesIO
from pathlib import Path
from typing import Any

from PIL import Image as PILImage

from ..exceptions import MalformedResponseError
from .geometry import Point, Rect

MATCH_RESULT_FIELDS = ("points1", "rect1", "points2", "rect2", "totalCount", "count")


@dataclass
class VisualizationMixin:
    """Helpers shared by results that can carry a visualization image."""

    visualization: bytes | None = field(default=None, kw_only=True)

    @property
    def has_visualization(self) -> bool:
        return self.visualization is not None

    def visualization_image(self) -> PILImage.Image:
        """Open the visualization payload as a Pillow image.

        Raises:
            ValueError: If the result carries no visualization
        """
        if self.visualization is None:
            raise ValueError("Result has no visualization; request it with visualize=True")
        return PILImage.open(BytesIO(self.visualization))

    def save_visualization(self, path: str | Path) -> Path:
        """Write the raw visualization bytes to ``path``."""
        if self.visualization is None:
            raise ValueError("Result has no visualization; request it with visualize=True")
        target = Path(path)
        target.write_bytes(self.visualization)
        return target

    def _visualization_dict(self) -> dict[str, Any]:
        if self.visualization is None:
            return {}
        return {"visualization": self.visualization}


@dataclass
class MatchResult(VisualizationMixin):
    """Result of feature matching between two images."""

    points1: list[Point]
    rect1: Rect
    points2: list[Point]
    rect2: Rect
    total_count: int
    count: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "points1": [p.to_dict() for p in self.points1],
            "rect1": self.rect1.to_dict(),
            "points2": [p.to_dict() for p in self.points2],
            "rect2": self.rect2.to_dict(),
            "totalCount": self.total_count,
            "count": self.count,
            **self._visualization_dict(),
        }


@dataclass(frozen=True)
class OccurrenceCandidate:
    """One ranked template match."""

    rect: Rect
    score: float | None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"rect": self.rect.to_dict()}
        if self.score is not None:
            data["score"] = self.score
        return data


@dataclass
class FindOccurrenceResult(VisualizationMixin):
    """Result of searching a partial image inside a full image.

    ``multiple`` is kept in the order the server ranked it.
    """

    multiple: list[OccurrenceCandidate]
    rect: Rect | None = None
    score: float | None = None

    @property
    def found(self) -> bool:
        return len(self.multiple) > 0

    @property
    def best(self) -> OccurrenceCandidate | None:
        return self.multiple[0] if self.multiple else None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.rect is not None:
            data["rect"] = self.rect.to_dict()
        if self.score is not None:
            data["score"] = self.score
        data.update(self._visualization_dict())
        data["multiple"] = [c.to_dict() for c in self.multiple]
        return data


@dataclass
class SimilarityResult(VisualizationMixin):
    """Similarity score between two images of the same size."""

    score: float

    def to_dict(self) -> dict[str, Any]:
        return {"score": self.score, **self._visualization_dict()}


def _require_mapping(raw: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(raw, Mapping):
        raise MalformedResponseError(f"{what} must be an object, got {type(raw).__name__}", payload=raw)
    return raw


def _decode_visualization(raw: Mapping[str, Any]) -> bytes | None:
    encoded = raw.get("visualization")
    if encoded is None:
        return None
    if not isinstance(encoded, (str, bytes)):
        raise MalformedResponseError("visualization must be a base64 string")
    try:
        return base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError) as e:
        raise MalformedResponseError(f"visualization is not valid base64: {e}") from e


def _parse_rect(value: Any, name: str) -> Rect:
    if not isinstance(value, Mapping):
        raise MalformedResponseError(f"{name} must be an object", payload=value)
    return Rect.from_wire(value)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _parse_count(value: Any, name: str) -> int:
    if not isinstance(value, int) or isinstance(value, bool) or value < 0:
        raise MalformedResponseError(f"{name} must be a non-negative integer", payload=value)
    return value


def _parse_score(value: Any, name: str = "score") -> float | None:
    if value is not None and not _is_number(value):
        raise MalformedResponseError(f"{name} must be a number", payload=value)
    return value


def _parse_points(value: Any, name: str) -> list[Point]:
    if not isinstance(value, list):
        raise MalformedResponseError(f"{name} must be a list", payload=value)
    points = []
    for item in value:
        if not isinstance(item, Mapping):
            raise MalformedResponseError(f"{name} entries must be objects", payload=value)
        points.append(Point.from_wire(item))
    return points


def parse_match_result(raw: Any) -> MatchResult:
    """Validate and convert a matchFeatures response.

    Raises:
        MalformedResponseError: If a required field is missing or mistyped
    """
    data = _require_mapping(raw, "match result")
    missing = [name for name in MATCH_RESULT_FIELDS if name not in data]
    if missing:
        raise MalformedResponseError("match result is incomplete", missing=missing, payload=raw)

    total_count = _parse_count(data["totalCount"], "totalCount")
    count = _parse_count(data["count"], "count")
    if count > total_count:
        raise MalformedResponseError(
            f"count {count} exceeds totalCount {total_count}", payload=raw
        )

    return MatchResult(
        points1=_parse_points(data["points1"], "points1"),
        rect1=_parse_rect(data["rect1"], "rect1"),
        points2=_parse_points(data["points2"], "points2"),
        rect2=_parse_rect(data["rect2"], "rect2"),
        total_count=total_count,
        count=count,
        visualization=_decode_visualization(data),
    )


def parse_find_result(raw: Any) -> FindOccurrenceResult:
    """Validate and convert a matchTemplate response.

    A response with no occurrences has no ``rect``/``score`` and an empty
    ``multiple`` list; that is a valid result. A response with a primary
    ``rect`` but no or an empty ``multiple`` gets a one-element list built
    from its primary fields, so ``multiple`` is never empty when ``rect`` is
    present.

    Raises:
        MalformedResponseError: If ``multiple`` is missing or not a list, or a
            score is not a number
    """
    data = _require_mapping(raw, "find result")
    rect = _parse_rect(data["rect"], "rect") if data.get("rect") is not None else None
    score = _parse_score(data.get("score"))

    entries = data.get("multiple")
    if entries is not None and not isinstance(entries, list):
        raise MalformedResponseError("multiple must be a list", payload=raw)
    if not entries:
        if rect is not None:
            entries = [{"rect": data["rect"], "score": score}]
        elif entries is None:
            raise MalformedResponseError(
                "find result is incomplete", missing=["multiple"], payload=raw
            )

    candidates = []
    for entry in entries:
        if not isinstance(entry, Mapping) or "rect" not in entry:
            raise MalformedResponseError("occurrence entries need a rect", payload=raw)
        candidates.append(
            OccurrenceCandidate(
                rect=_parse_rect(entry["rect"], "rect"), score=_parse_score(entry.get("score"))
            )
        )

    return FindOccurrenceResult(
        multiple=candidates,
        rect=rect,
        score=score,
        visualization=_decode_visualization(data),
    )


def parse_similarity_result(raw: Any) -> SimilarityResult:
    """Validate and convert a getSimilarity response.

    Raises:
        MalformedResponseError: If ``score`` is missing or not a number
    """
    data = _require_mapping(raw, "similarity result")
    if "score" not in data:
        raise MalformedResponseError("similarity result is incomplete", missing=["score"], payload=raw)
    if not _is_number(data["score"]):
        raise MalformedResponseError("score must be a number", payload=raw)
    return SimilarityResult(score=data["score"], visualization=_decode_visualization(data))
