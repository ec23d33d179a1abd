"""Response and geometry models."""

from .geometry import Point, Rect, Size
from .results import (
    FindOccurrenceResult,
    MatchResult,
    OccurrenceCandidate,
    SimilarityResult,
    parse_find_result,
    parse_match_result,
    parse_similarity_result,
)

__all__ = [
    "Point",
    "Rect",
    "Size",
    "MatchResult",
    "OccurrenceCandidate",
    "FindOccurrenceResult",
    "SimilarityResult",
    "parse_match_result",
    "parse_find_result",
    "parse_similarity_result",
]
