"""Symbolic name <-> protocol code mappings.

The forward table is the single source of truth; the reverse direction is
derived from it. Encoding rejects unknown names, decoding passes unknown
codes through so that newer server values still reach the caller.
"""

from collections.abc import Hashable, Mapping
from enum import Enum
from typing import Any, Generic, TypeVar

from .exceptions import InvalidArgumentError

C = TypeVar("C", bound=Hashable)


class EnumeratedMapping(Generic[C]):
    """Bidirectional mapping between names and protocol codes."""

    def __init__(self, table: Mapping[str, C], label: str = "value") -> None:
        """Initialize from a forward table.

        Args:
            table: name -> code table
            label: What the names denote, used in error messages

        Raises:
            ValueError: If two names share a code
        """
        self._forward: dict[str, C] = dict(table)
        self._reverse: dict[C, str] = {code: name for name, code in self._forward.items()}
        if len(self._reverse) != len(self._forward):
            raise ValueError(f"{label} table maps several names to one code: {self._forward}")
        self.label = label

    @property
    def names(self) -> list[str]:
        return list(self._forward)

    def encode(self, name: str | Enum) -> C:
        """Return the code for ``name``.

        Raises:
            InvalidArgumentError: If ``name`` is not in the forward table
        """
        key = name.value if isinstance(name, Enum) else name
        if not isinstance(key, str) or key not in self._forward:
            raise InvalidArgumentError(
                f"Invalid {self.label}: {name!r} (expected one of {', '.join(self._forward)})",
                name=key,
            )
        return self._forward[key]

    def decode(self, code: Any) -> str | Any:
        """Return the name for ``code``, or ``code`` itself when unknown.

        A code is known only when it has the exact type of the table entry,
        so ``True`` or ``1.0`` do not decode as ``1``.
        """
        try:
            name = self._reverse.get(code)
        except TypeError:
            # Unhashable codes can never be in the table
            return code
        if name is None or type(code) is not type(self._forward[name]):
            return code
        return name


class NetworkConnectionType(Enum):
    """Device network connection types."""

    AIRPLANE_MODE = "airplane_mode"
    WIFI = "wifi"
    DATA = "data"
    ALL = "all"
    NONE = "none"


NETWORK_CONNECTION_TYPES: EnumeratedMapping[int] = EnumeratedMapping(
    {
        NetworkConnectionType.AIRPLANE_MODE.value: 1,
        NetworkConnectionType.WIFI.value: 2,
        NetworkConnectionType.DATA.value: 4,
        NetworkConnectionType.ALL.value: 6,
        NetworkConnectionType.NONE.value: 0,
    },
    label="connection type",
)


def encode_connection_type(name: str | NetworkConnectionType) -> int:
    """Map a connection type name to its protocol code."""
    return NETWORK_CONNECTION_TYPES.encode(name)


def decode_connection_type(code: Any) -> str | Any:
    """Map a protocol code to its connection type name, passing unknown codes through."""
    return NETWORK_CONNECTION_TYPES.decode(code)
