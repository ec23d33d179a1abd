"""Server-side image comparison commands.

The server offers three comparison modes over one endpoint. This module
builds validated requests for each mode and parses the replies into the
result models.
"""

from typing import Any

from ..exceptions import InvalidArgumentError
from ..logging import get_logger
from ..model import (
    FindOccurrenceResult,
    MatchResult,
    SimilarityResult,
    parse_find_result,
    parse_match_result,
    parse_similarity_result,
)
from ..transport import Session
from .encoding import EncodedImage, ImageSource, encode_image

logger = get_logger(__name__)

MATCH_FEATURES = "matchFeatures"
GET_SIMILARITY = "getSimilarity"
MATCH_TEMPLATE = "matchTemplate"

DETECTOR_NAMES = ("AKAZE", "AGAST", "BRISK", "FAST", "GFTT", "KAZE", "MSER", "SIFT", "ORB")
MATCH_FUNCTIONS = (
    "FlannBased",
    "BruteForce",
    "BruteForceL1",
    "BruteForceHamming",
    "BruteForceHammingLut",
    "BruteForceSL2",
)


def _wire(image: ImageSource | EncodedImage) -> str:
    if isinstance(image, EncodedImage):
        return image.data
    return encode_image(image).data


def _check_choice(value: str | None, choices: tuple[str, ...], name: str) -> None:
    if value is not None and value not in choices:
        raise InvalidArgumentError(
            f"{name} should be one of {', '.join(choices)}, got {value!r}", **{name: value}
        )


def _check_threshold(value: float | None, name: str) -> None:
    if value is not None and not 0.0 <= value <= 1.0:
        raise InvalidArgumentError(f"{name} must be between 0 and 1, got {value}", **{name: value})


class ImageComparison:
    """Image comparison commands bound to one session."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def _compare(
        self,
        mode: str,
        first: ImageSource | EncodedImage,
        second: ImageSource | EncodedImage,
        options: dict[str, Any],
    ) -> Any:
        params = {
            "mode": mode,
            "firstImage": _wire(first),
            "secondImage": _wire(second),
            "options": options,
        }
        logger.debug("compare_images", mode=mode, options=options)
        return self.session.call("compare_images", params)

    def compare_images(
        self,
        first: ImageSource | EncodedImage,
        second: ImageSource | EncodedImage,
        visualize: bool = False,
        detector_name: str | None = None,
        match_func: str | None = None,
        good_matches_factor: int | None = None,
    ) -> MatchResult:
        """Match features between two images.

        Args:
            first: First image
            second: Second image
            visualize: Ask the server for a visualization PNG
            detector_name: Feature detector, one of DETECTOR_NAMES
            match_func: Matching function, one of MATCH_FUNCTIONS
            good_matches_factor: Keep only the best N matches

        Returns:
            Validated MatchResult

        Raises:
            InvalidArgumentError: If an option is out of range
            MalformedResponseError: If the reply is incomplete
        """
        _check_choice(detector_name, DETECTOR_NAMES, "detector_name")
        _check_choice(match_func, MATCH_FUNCTIONS, "match_func")
        if good_matches_factor is not None and good_matches_factor <= 0:
            raise InvalidArgumentError(
                f"good_matches_factor must be positive, got {good_matches_factor}"
            )

        options: dict[str, Any] = {"visualize": visualize}
        if detector_name is not None:
            options["detectorName"] = detector_name
        if match_func is not None:
            options["matchFunc"] = match_func
        if good_matches_factor is not None:
            options["goodMatchesFactor"] = good_matches_factor

        return parse_match_result(self._compare(MATCH_FEATURES, first, second, options))

    def find_image_occurrence(
        self,
        full: ImageSource | EncodedImage,
        partial: ImageSource | EncodedImage,
        visualize: bool = False,
        threshold: float | None = None,
        multiple: bool | None = None,
        match_neighbour_threshold: int | None = None,
    ) -> FindOccurrenceResult:
        """Find occurrences of ``partial`` inside ``full``.

        No occurrence is a valid result with an empty ``multiple`` list.

        Args:
            full: Image to search in
            partial: Template to search for
            visualize: Ask the server for a visualization PNG
            threshold: Minimum similarity in [0, 1]
            multiple: Return every occurrence above the threshold
            match_neighbour_threshold: Pixel distance under which matches merge
        """
        _check_threshold(threshold, "threshold")
        if match_neighbour_threshold is not None and match_neighbour_threshold < 0:
            raise InvalidArgumentError(
                f"match_neighbour_threshold must not be negative, got {match_neighbour_threshold}"
            )

        options: dict[str, Any] = {"visualize": visualize}
        if threshold is not None:
            options["threshold"] = threshold
        if multiple is not None:
            options["multiple"] = multiple
        if match_neighbour_threshold is not None:
            options["matchNeighbourThreshold"] = match_neighbour_threshold

        return parse_find_result(self._compare(MATCH_TEMPLATE, full, partial, options))

    def images_similarity(
        self,
        first: ImageSource | EncodedImage,
        second: ImageSource | EncodedImage,
        visualize: bool = False,
    ) -> SimilarityResult:
        """Score the similarity of two equally sized images."""
        options = {"visualize": visualize}
        return parse_similarity_result(self._compare(GET_SIMILARITY, first, second, options))
