from __future__ import annotations

import copy
import json
from typing import Any, Optional

from .repository import BlobStore


class InMemoryBlobStore(BlobStore):
    """Process-local store. Values round-trip through JSON like the file store."""

    def __init__(self, initial: Optional[dict[str, Any]] = None):
        self._blobs: dict[str, str] = {}
        for key, value in (initial or {}).items():
            self.save(key, value)

    def load(self, key: str) -> Optional[Any]:
        raw = self._blobs.get(key)
        return json.loads(raw) if raw is not None else None

    def save(self, key: str, value: Any) -> None:
        self._blobs[key] = json.dumps(copy.deepcopy(value))

    def delete(self, key: str) -> None:
        self._blobs.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._blobs)
