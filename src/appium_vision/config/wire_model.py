"""Option models keyed by their wire names.

Settings payloads and command options travel as flat JSON objects with
camelCase keys. A WireModel lists the keys the client recognizes, and the
helpers here validate a payload against it and decide what happens to keys
it does not recognize.
"""

from collections.abc import Mapping
from enum import Enum
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationError

from ..exceptions import InvalidArgumentError

M = TypeVar("M", bound="WireModel")


class UnknownKeyPolicy(Enum):
    """What to do with payload keys the model does not recognize."""

    REJECT = "reject"
    PASS_THROUGH = "pass_through"


class WireModel(BaseModel):
    """Base for option models whose field aliases are the wire keys."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid", validate_assignment=True)

    @classmethod
    def wire_names(cls) -> set[str]:
        """Return the recognized wire keys."""
        return {field.alias or name for name, field in cls.model_fields.items()}

    def to_wire(self, only_set: bool = False) -> dict[str, Any]:
        """Serialize using wire key names.

        Args:
            only_set: Only include fields explicitly set by the caller
        """
        return self.model_dump(by_alias=True, exclude_unset=only_set)


def validate_wire(model: type[M], values: Mapping[str, Any]) -> M:
    """Build ``model`` from wire keys, raising InvalidArgumentError on bad values."""
    try:
        return model.model_validate(dict(values))
    except ValidationError as e:
        raise InvalidArgumentError(
            f"Invalid {model.__name__}: {e}", values=dict(values)
        ) from e


def split_wire(
    model: type[WireModel],
    values: Mapping[str, Any],
    policy: UnknownKeyPolicy = UnknownKeyPolicy.REJECT,
) -> tuple[dict[str, Any], dict[str, Any]]:
    """Split a payload into keys ``model`` recognizes and unknown keys.

    Recognized values are validated. Unknown keys raise InvalidArgumentError
    under REJECT and are returned untouched under PASS_THROUGH.

    Returns:
        Tuple of (recognized, unknown) dictionaries
    """
    known_names = model.wire_names()
    recognized = {k: v for k, v in values.items() if k in known_names}
    unknown = {k: v for k, v in values.items() if k not in known_names}

    if unknown and policy is UnknownKeyPolicy.REJECT:
        raise InvalidArgumentError(
            f"Unknown {model.__name__} keys: {', '.join(sorted(unknown))}", unknown=sorted(unknown)
        )

    if recognized:
        recognized = validate_wire(model, recognized).to_wire(only_set=True)
    return recognized, unknown
