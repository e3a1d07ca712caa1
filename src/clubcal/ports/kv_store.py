"""Key-value persistence interface."""

from typing import Protocol


class KeyValueStore(Protocol):
    """String-keyed get/set store used for scheduled events."""

    def read(self, key: str) -> str | None:
        """Read a value. Returns None if the key is not set."""
        ...

    def write(self, key: str, value: str) -> None:
        """Write/overwrite a value."""
        ...
