"""Key-value store port - local persistence substrate."""

from typing import Protocol


class KeyValueStore(Protocol):
    """Synchronous same-device string store.

    Implementations raise PersistenceError when the substrate fails.
    """

    def get(self, key: str) -> str | None:
        """Return stored value or None when the key is absent."""
        ...

    def set(self, key: str, value: str) -> None:
        """Overwrite the value stored under key."""
        ...
