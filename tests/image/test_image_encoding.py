"""Tests for image payload encoding."""

import base64

import pytest
from PIL import Image as PILImage

from appium_vision.exceptions import InvalidArgumentError
from appium_vision.image import encode_image
from appium_vision.image.encoding import image_bytes


def test_bytes_are_base64_encoded(png_bytes, png_base64):
    encoded = encode_image(png_bytes)

    assert encoded.data == png_base64
    assert encoded.reference.startswith(f"<{len(png_bytes)} bytes sha1:")


def test_bytearray_matches_bytes(png_bytes):
    assert encode_image(bytearray(png_bytes)) == encode_image(png_bytes)


def test_path_reference_is_the_path(tmp_path, png_bytes, png_base64):
    path = tmp_path / "button.png"
    path.write_bytes(png_bytes)

    by_path = encode_image(path)
    by_str = encode_image(str(path))

    assert by_path.data == png_base64
    assert by_path.reference == str(path)
    assert by_str == by_path


def test_pil_image_is_saved_as_png():
    image = PILImage.new("RGB", (4, 3), color="red")

    raw, reference = image_bytes(image)

    assert raw.startswith(b"\x89PNG")
    assert reference == "<PIL RGB 4x3>"
    assert base64.b64decode(encode_image(image).data) == raw


def test_missing_file(tmp_path):
    with pytest.raises(InvalidArgumentError, match="not found"):
        encode_image(tmp_path / "nope.png")


def test_empty_image():
    with pytest.raises(InvalidArgumentError, match="empty"):
        encode_image(b"")


def test_unsupported_type():
    with pytest.raises(InvalidArgumentError, match="Unsupported"):
        encode_image(42)
