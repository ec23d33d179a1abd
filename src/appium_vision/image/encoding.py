"""Image payload encoding for the wire.

Images travel as base64 strings. Callers may hand over raw bytes, a file
path or a Pillow image.
"""

import base64
import hashlib
from dataclasses import dataclass
from io import BytesIO
from pathlib import Path
from typing import Union

from PIL import Image as PILImage

from ..exceptions import InvalidArgumentError

ImageSource = Union[bytes, bytearray, str, Path, PILImage.Image]


@dataclass(frozen=True)
class EncodedImage:
    """A base64 image payload plus a short reference for diagnostics."""

    data: str
    reference: str


def _describe_bytes(raw: bytes) -> str:
    digest = hashlib.sha1(raw).hexdigest()[:12]
    return f"<{len(raw)} bytes sha1:{digest}>"


def image_bytes(image: ImageSource) -> tuple[bytes, str]:
    """Return the raw bytes of ``image`` and a reference to it.

    Raises:
        InvalidArgumentError: If the image is empty, missing or of an unknown type
    """
    if isinstance(image, (bytes, bytearray)):
        raw = bytes(image)
        reference = _describe_bytes(raw)
    elif isinstance(image, (str, Path)):
        path = Path(image)
        if not path.is_file():
            raise InvalidArgumentError(f"Image file not found: {path}", path=str(path))
        raw = path.read_bytes()
        reference = str(path)
    elif isinstance(image, PILImage.Image):
        buffer = BytesIO()
        image.save(buffer, format="PNG")
        raw = buffer.getvalue()
        reference = f"<PIL {image.mode} {image.width}x{image.height}>"
    else:
        raise InvalidArgumentError(f"Unsupported image type: {type(image).__name__}")

    if not raw:
        raise InvalidArgumentError("Image is empty", reference=reference)
    return raw, reference


def encode_image(image: ImageSource) -> EncodedImage:
    """Base64-encode ``image`` for transport."""
    raw, reference = image_bytes(image)
    return EncodedImage(data=base64.b64encode(raw).decode("ascii"), reference=reference)
