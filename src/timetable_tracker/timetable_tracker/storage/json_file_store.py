from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Optional

from ..core.exceptions import StorageError
from .repository import BlobStore

logger = logging.getLogger(__name__)


class JsonFileBlobStore(BlobStore):
    """One `<key>.json` file per key inside `directory`.

    Saves write a temporary file and rename it over the target, so readers
    only ever see a whole previous or whole new blob.
    """

    def __init__(self, directory: str | os.PathLike):
        self._dir = Path(directory)
        self._dir.mkdir(parents=True, exist_ok=True)

    @property
    def directory(self) -> Path:
        return self._dir

    def path_for(self, key: str) -> Path:
        return self._dir / f"{key}.json"

    def load(self, key: str) -> Optional[Any]:
        path = self.path_for(key)
        if not path.exists():
            return None
        try:
            with path.open("r", encoding="utf-8") as f:
                value = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise StorageError(f"Cannot read stored {key!r} from {path}") from e
        logger.debug("Loaded %s from %s", key, path)
        return value

    def save(self, key: str, value: Any) -> None:
        path = self.path_for(key)
        fd, tmp = tempfile.mkstemp(prefix=f".{key}.", suffix=".tmp", dir=self._dir)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(value, f, ensure_ascii=False, indent=2)
            os.replace(tmp, path)
        except Exception:
            if os.path.exists(tmp):
                os.unlink(tmp)
            raise
        logger.debug("Saved %s to %s", key, path)

    def delete(self, key: str) -> None:
        path = self.path_for(key)
        if path.exists():
            path.unlink()
            logger.debug("Deleted %s", path)
