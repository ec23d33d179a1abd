"""Tests for the shared driver capabilities."""

import pytest

from appium_vision.config import ImageSettings, UnknownKeyPolicy
from appium_vision.driver import Driver
from appium_vision.exceptions import (
    InvalidArgumentError,
    MalformedResponseError,
    StaleElementError,
    TransientNotFoundError,
    WaitTimeoutError,
)
from appium_vision.mapping import NetworkConnectionType
from appium_vision.model import Rect


@pytest.fixture
def driver(session, settings, clock):
    session.on("update_settings", None)
    return Driver(session, settings=settings, clock=clock)


class TestUpdateSettings:
    """Test settings validation and propagation."""

    def test_recognized_keys_are_sent(self, driver, session):
        driver.update_settings({"imageMatchThreshold": 0.8, "fixImageTemplateScale": True})

        assert session.calls_to("update_settings") == [
            {"settings": {"imageMatchThreshold": 0.8, "fixImageTemplateScale": True}}
        ]
        assert driver.image_settings.image_match_threshold == 0.8
        assert driver.image_settings.fix_image_template_scale is True

    def test_unknown_key_is_rejected_by_default(self, driver, session):
        with pytest.raises(InvalidArgumentError, match="ignoreUnimportantViews"):
            driver.update_settings({"ignoreUnimportantViews": True, "imageMatchThreshold": 0.8})

        assert session.calls_to("update_settings") == []
        assert driver.image_settings.image_match_threshold == 0.4

    def test_unknown_key_passes_through(self, driver, session):
        driver.update_settings(
            {"ignoreUnimportantViews": True, "imageMatchThreshold": 0.8},
            unknown_keys=UnknownKeyPolicy.PASS_THROUGH,
        )

        assert session.calls_to("update_settings") == [
            {"settings": {"imageMatchThreshold": 0.8, "ignoreUnimportantViews": True}}
        ]
        assert driver.image_settings.image_match_threshold == 0.8

    @pytest.mark.parametrize(
        "values",
        [
            {"imageMatchThreshold": 1.5},
            {"defaultImageTemplateScale": 0},
            {"imageElementTapStrategy": "mouse"},
        ],
    )
    def test_bad_values_are_rejected(self, driver, session, values):
        with pytest.raises(InvalidArgumentError):
            driver.update_settings(values)

        assert session.calls_to("update_settings") == []

    def test_image_settings_object(self, driver, session):
        driver.update_settings(ImageSettings(image_match_threshold=0.6))

        assert session.calls_to("update_settings") == [{"settings": {"imageMatchThreshold": 0.6}}]
        assert driver.image_settings.image_match_threshold == 0.6

    def test_empty_update_sends_nothing(self, driver, session):
        driver.update_settings({})

        assert session.calls_to("update_settings") == []

    def test_find_runs_with_server_settings(self, driver, screen, session, png_bytes, png_base64):
        screen.show([Rect(540, 1170, 200, 100)])

        driver.update_settings({"imageMatchThreshold": 0.95, "defaultImageTemplateScale": 4})
        element = driver.find_element_by_image(png_bytes)

        assert session.calls_to("update_settings") == [
            {"settings": {"imageMatchThreshold": 0.95, "defaultImageTemplateScale": 4}}
        ]
        assert screen.finds == [{"using": "-image", "value": png_base64}]
        assert element.rect == Rect(540, 1170, 200, 100)
        assert session.calls_to("compare_images") == []

    def test_get_settings(self, driver, session):
        session.on("get_settings", {"imageMatchThreshold": 0.4, "ignoreUnimportantViews": False})

        assert driver.get_settings()["ignoreUnimportantViews"] is False

    def test_get_settings_must_be_object(self, driver, session):
        session.on("get_settings", [])

        with pytest.raises(MalformedResponseError):
            driver.get_settings()


class TestNetworkConnection:
    """Test the network connection type property."""

    @pytest.mark.parametrize("code,name", [(1, "airplane_mode"), (2, "wifi"), (4, "data"), (6, "all"), (0, "none")])
    def test_known_codes_decode(self, driver, session, code, name):
        session.on("get_network_connection", code)

        assert driver.network_connection_type == name

    def test_unknown_code_passes_through(self, driver, session):
        session.on("get_network_connection", 3)

        assert driver.network_connection_type == 3

    def test_set_by_name(self, driver, session):
        session.on("set_network_connection", None)

        driver.network_connection_type = "wifi"

        assert session.calls_to("set_network_connection") == [{"parameters": {"type": 2}}]

    def test_set_by_enum(self, driver, session):
        session.on("set_network_connection", None)

        driver.network_connection_type = NetworkConnectionType.AIRPLANE_MODE

        assert session.calls_to("set_network_connection") == [{"parameters": {"type": 1}}]

    def test_set_unknown_name(self, driver, session):
        with pytest.raises(InvalidArgumentError):
            driver.network_connection_type = "bluetooth"

        assert session.calls_to("set_network_connection") == []


class TestWait:
    """Test the driver-level wait."""

    def test_uses_client_defaults(self, driver, clock):
        with pytest.raises(WaitTimeoutError):
            driver.wait(lambda: None)

        assert clock.now == 5
        assert set(clock.sleeps) == {1}

    def test_overrides(self, driver, clock):
        with pytest.raises(WaitTimeoutError):
            driver.wait(lambda: [], timeout=2, interval=0.5, message="never")

        assert clock.now == 2
        assert clock.sleeps[0] == 0.5

    def test_not_found_is_ignored_by_default(self, driver):
        results = [TransientNotFoundError(), "ready"]

        def predicate():
            result = results.pop(0)
            if isinstance(result, Exception):
                raise result
            return result

        assert driver.wait(predicate) == "ready"


class TestImageMethods:
    """Test image delegation and lifecycle."""

    def test_images_similarity(self, driver, session, png_bytes):
        session.on("compare_images", {"score": 0.5})

        assert driver.images_similarity(png_bytes, png_bytes).score == 0.5

    def test_quit_invalidates_elements(self, driver, screen, session, png_bytes):
        screen.show([Rect(0, 0, 10, 10)])
        element = driver.find_element_by_image(png_bytes)

        driver.quit()

        assert session.closed
        with pytest.raises(StaleElementError, match="session ended"):
            element.rect


class TestScreenshot:
    """Test the screenshot command."""

    def test_decodes_png(self, driver, session, png_bytes, png_base64):
        session.on("screenshot", png_base64)

        assert driver.screenshot() == png_bytes

    @pytest.mark.parametrize("reply", ["", None, "not base64!!"])
    def test_malformed(self, driver, session, reply):
        session.on("screenshot", reply)

        with pytest.raises(MalformedResponseError):
            driver.screenshot()
