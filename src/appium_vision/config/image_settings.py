"""Image-related server settings.

The server merges settings as key/value pairs. This model lists the keys the
client knows about, their defaults and their effects, so that a settings
payload is validated before it is sent.
"""

from collections.abc import Mapping
from typing import Any, Literal

from pydantic import Field

from .wire_model import UnknownKeyPolicy, WireModel, split_wire, validate_wire


class ImageSettings(WireModel):
    """Recognized image-matching settings, keyed by their wire names."""

    image_match_threshold: float = Field(
        0.4,
        ge=0.0,
        le=1.0,
        alias="imageMatchThreshold",
        description="Minimum similarity score for a template match",
    )
    fix_image_find_screenshot_dims: bool = Field(
        True,
        alias="fixImageFindScreenshotDims",
        description="Scale the screenshot to the device screen size before matching",
    )
    fix_image_template_size: bool = Field(
        False,
        alias="fixImageTemplateSize",
        description="Shrink the template when it is larger than the screenshot",
    )
    fix_image_template_scale: bool = Field(
        False,
        alias="fixImageTemplateScale",
        description="Rescale the template by the screenshot/screen ratio",
    )
    default_image_template_scale: float = Field(
        1.0,
        gt=0.0,
        alias="defaultImageTemplateScale",
        description="Scale applied to every template before matching",
    )
    check_for_image_element_staleness: bool = Field(
        True,
        alias="checkForImageElementStaleness",
        description="Re-find an image element before each query on it",
    )
    auto_update_image_element_position: bool = Field(
        False,
        alias="autoUpdateImageElementPosition",
        description="Let the server move an element to its re-found position",
    )
    image_element_tap_strategy: Literal["w3cActions", "touchActions"] = Field(
        "w3cActions",
        alias="imageElementTapStrategy",
        description="How the server taps image elements",
    )
    get_matched_image_result: bool = Field(
        False,
        alias="getMatchedImageResult",
        description="Keep the visualized match on the server",
    )

    def merged(self, values: Mapping[str, Any]) -> "ImageSettings":
        """Return a copy with recognized wire keys from ``values`` applied."""
        data = self.to_wire()
        data.update({k: v for k, v in values.items() if k in self.wire_names()})
        return validate_image_settings(data)


def validate_image_settings(values: Mapping[str, Any]) -> ImageSettings:
    """Build ImageSettings from wire keys, raising InvalidArgumentError on bad values."""
    return validate_wire(ImageSettings, values)


def split_settings(
    values: Mapping[str, Any], policy: UnknownKeyPolicy = UnknownKeyPolicy.REJECT
) -> tuple[dict[str, Any], dict[str, Any]]:
    """Split a settings payload into recognized and unknown keys."""
    return split_wire(ImageSettings, values, policy)
