"""Image comparison and image element resolution."""

from .comparison import DETECTOR_NAMES, MATCH_FUNCTIONS, ImageComparison
from .element import ELEMENT_ID_PREFIX, ImageElement
from .encoding import EncodedImage, ImageSource, encode_image
from .finder import ImageElementFinder

__all__ = [
    "DETECTOR_NAMES",
    "MATCH_FUNCTIONS",
    "ELEMENT_ID_PREFIX",
    "EncodedImage",
    "ImageComparison",
    "ImageElement",
    "ImageElementFinder",
    "ImageSource",
    "encode_image",
]
