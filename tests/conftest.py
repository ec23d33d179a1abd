"""Pytest configuration and fixtures."""

import base64
import uuid
from collections import defaultdict
from collections.abc import Mapping
from io import BytesIO
from typing import Any

import pytest
from PIL import Image as PILImage

from appium_vision.config import ClientSettings, reset_settings
from appium_vision.image.finder import W3C_ELEMENT_KEY
from appium_vision.model import Rect
from appium_vision.transport import Session
from appium_vision.wait import VirtualClock


class FakeSession(Session):
    """Scripted stand-in for a remote session.

    Responses are queued per endpoint. Each call pops the next queued
    response; the last one stays in place and answers every later call.
    A response is returned as-is, raised if it is an exception, or called
    with the params if it is callable.
    """

    def __init__(self) -> None:
        self.responses: dict[str, list[Any]] = defaultdict(list)
        self.calls: list[tuple[str, Mapping[str, Any] | None]] = []
        self.closed = False

    def on(self, endpoint_name: str, *responses: Any) -> "FakeSession":
        self.responses[endpoint_name].extend(responses)
        return self

    def calls_to(self, endpoint_name: str) -> list[Mapping[str, Any] | None]:
        return [params for name, params in self.calls if name == endpoint_name]

    def call(self, endpoint_name: str, params: Mapping[str, Any] | None = None) -> Any:
        self.calls.append((endpoint_name, params))
        queue = self.responses.get(endpoint_name)
        if not queue:
            raise AssertionError(f"Unexpected call to {endpoint_name}")
        response = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(response, BaseException):
            raise response
        if callable(response):
            return response(params)
        return response

    def close(self) -> None:
        self.closed = True


class ImageScreen:
    """Scripts the server side of find-by-image on a FakeSession.

    Each ``show`` queues one find reply: the element rectangles the server
    reports in rank order, or an exception to raise. Element ids are minted
    the way the server mints them and every id answers its rect request
    with the rectangle it was found at.
    """

    def __init__(self, session: FakeSession) -> None:
        self.session = session
        self.rects: dict[str, dict[str, Any]] = {}
        self._minted = 0
        session.on("element_rect", lambda params: self.rects[params["element_id"]])

    def _mint(self, rect: Rect | dict[str, Any]) -> dict[str, str]:
        self._minted += 1
        element_id = f"appium-image-element-{uuid.UUID(int=self._minted)}"
        self.rects[element_id] = rect.to_dict() if isinstance(rect, Rect) else dict(rect)
        return {W3C_ELEMENT_KEY: element_id}

    def show(self, *replies: Any) -> "ImageScreen":
        """Queue find replies; each is a list of rects or an exception."""
        for reply in replies:
            if isinstance(reply, BaseException):
                self.session.on("find_elements", reply)
            else:
                self.session.on("find_elements", lambda params, rects=reply: [self._mint(r) for r in rects])
        return self

    @property
    def finds(self) -> list[Mapping[str, Any] | None]:
        return self.session.calls_to("find_elements")


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Keep the settings singleton and environment out of each test."""
    for name in ("APPIUM_VISION_WAIT_TIMEOUT", "APPIUM_VISION_WAIT_INTERVAL", "APPIUM_VISION_SERVER_URL"):
        monkeypatch.delenv(name, raising=False)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def settings():
    """Client settings with short, round wait values."""
    return ClientSettings(wait_timeout=5.0, wait_interval=1.0, staleness_tolerance=3.0)


@pytest.fixture
def clock():
    return VirtualClock()


@pytest.fixture
def session():
    return FakeSession()


@pytest.fixture
def png_bytes():
    """A small PNG image as raw bytes."""
    buffer = BytesIO()
    PILImage.new("RGB", (8, 8), color="blue").save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def png_base64(png_bytes):
    return base64.b64encode(png_bytes).decode("ascii")


@pytest.fixture
def screen(session):
    """Server-side find-by-image script bound to the fake session."""
    return ImageScreen(session)
