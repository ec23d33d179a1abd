"""appium-vision: image element lookup and image comparison for Appium servers.

The server does the computer-vision work. This package polls it within
deadlines, validates what it answers and hands back image element handles.
"""

from .base_exceptions import AppiumVisionException, FailureKind
from .config import (
    ClientSettings,
    ImageSettings,
    RecordingOptions,
    RecordingUploadOptions,
    UnknownKeyPolicy,
    get_settings,
)
from .driver import AndroidDriver, Driver, Location
from .exceptions import (
    ElementNotFoundError,
    InvalidArgumentError,
    MalformedResponseError,
    RemoteCommandError,
    RemoteTimeoutError,
    SessionLostError,
    StaleElementError,
    TransientNotFoundError,
    TransportError,
    WaitTimeoutError,
)
from .image import ImageComparison, ImageElement, ImageElementFinder, encode_image
from .mapping import (
    EnumeratedMapping,
    NetworkConnectionType,
    decode_connection_type,
    encode_connection_type,
)
from .model import (
    FindOccurrenceResult,
    MatchResult,
    OccurrenceCandidate,
    Point,
    Rect,
    SimilarityResult,
    Size,
    parse_find_result,
    parse_match_result,
    parse_similarity_result,
)
from .transport import HttpSession, Session
from .wait import SystemClock, VirtualClock, Wait, wait

__version__ = "0.1.0"

__all__ = [
    # Errors
    "AppiumVisionException",
    "FailureKind",
    "ElementNotFoundError",
    "InvalidArgumentError",
    "MalformedResponseError",
    "RemoteCommandError",
    "RemoteTimeoutError",
    "SessionLostError",
    "StaleElementError",
    "TransientNotFoundError",
    "TransportError",
    "WaitTimeoutError",
    # Config
    "ClientSettings",
    "ImageSettings",
    "RecordingOptions",
    "RecordingUploadOptions",
    "UnknownKeyPolicy",
    "get_settings",
    # Drivers
    "Driver",
    "AndroidDriver",
    "Location",
    # Image
    "ImageComparison",
    "ImageElement",
    "ImageElementFinder",
    "encode_image",
    # Mapping
    "EnumeratedMapping",
    "NetworkConnectionType",
    "encode_connection_type",
    "decode_connection_type",
    # Models
    "FindOccurrenceResult",
    "MatchResult",
    "OccurrenceCandidate",
    "Point",
    "Rect",
    "SimilarityResult",
    "Size",
    "parse_find_result",
    "parse_match_result",
    "parse_similarity_result",
    # Transport
    "HttpSession",
    "Session",
    # Wait
    "SystemClock",
    "VirtualClock",
    "Wait",
    "wait",
]
