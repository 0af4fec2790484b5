"""Free-form key/value metadata attached to a WK image."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Iterator, Union

MetadataValue = Union[str, int, float, bool, bytes, list]

SOFTWARE_NAME = "WK Image Format v2.0"

_I64_MIN = -(1 << 63)
_I64_MAX = (1 << 63) - 1


def _normalise(value: Any) -> MetadataValue:
    """Check that a value can be stored and bring it to its canonical type."""
    if isinstance(value, (str, bool, float)):
        return value
    if isinstance(value, int):
        if not _I64_MIN <= value <= _I64_MAX:
            raise ValueError(f"Integer metadata value out of range: {value}")
        return value
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    if isinstance(value, (list, tuple)):
        return [_normalise(item) for item in value]
    raise TypeError(f"Unsupported metadata value type: {type(value).__name__}")


@dataclass
class CustomMetadata:
    """Descriptive fields plus arbitrary typed key/value pairs."""

    created_at: str | None = None
    software: str | None = None
    author: str | None = None
    description: str | None = None
    fields: dict[str, MetadataValue] = field(default_factory=dict)

    @classmethod
    def create(cls) -> CustomMetadata:
        """Metadata stamped with the current time and the software name."""
        return cls(created_at=str(int(time.time())), software=SOFTWARE_NAME)

    def set(self, key: str, value: MetadataValue) -> None:
        """Store a value under a key, replacing any previous one."""
        if not isinstance(key, str):
            raise TypeError("Metadata keys must be strings")
        self.fields[key] = _normalise(value)

    def get(self, key: str) -> MetadataValue | None:
        """The value stored under key, or None."""
        return self.fields.get(key)

    def get_string(self, key: str) -> str | None:
        """The value under key if it is a string."""
        value = self.fields.get(key)
        return value if isinstance(value, str) else None

    def get_int(self, key: str) -> int | None:
        """The value under key if it is an integer."""
        value = self.fields.get(key)
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        return None

    def get_float(self, key: str) -> float | None:
        """The value under key if it is a float."""
        value = self.fields.get(key)
        return value if isinstance(value, float) else None

    def get_bool(self, key: str) -> bool | None:
        """The value under key if it is a boolean."""
        value = self.fields.get(key)
        return value if isinstance(value, bool) else None

    def remove(self, key: str) -> MetadataValue | None:
        """Remove key and return its value, or None if it was absent."""
        return self.fields.pop(key, None)

    def __contains__(self, key: object) -> bool:
        return key in self.fields

    def keys(self) -> Iterator[str]:
        """Iterate over the stored keys."""
        return iter(self.fields)

    def items(self) -> Iterator[tuple[str, MetadataValue]]:
        """Iterate over (key, value) pairs."""
        return iter(self.fields.items())