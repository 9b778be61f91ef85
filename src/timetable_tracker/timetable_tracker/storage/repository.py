from __future__ import annotations

from typing import Any, Optional, Protocol


class BlobStore(Protocol):
    """Key-value store of JSON-serializable blobs."""

    def load(self, key: str) -> Optional[Any]:
        """Return the stored value, or None when the key was never saved."""

        raise NotImplementedError

    def save(self, key: str, value: Any) -> None:
        raise NotImplementedError

    def delete(self, key: str) -> None:
        raise NotImplementedError
