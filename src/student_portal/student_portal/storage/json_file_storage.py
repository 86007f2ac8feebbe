from __future__ import annotations

import json
import logging
import os
import re
import tempfile
from pathlib import Path
from typing import Any, Optional

from ..core.exceptions import StorageError
from .repository import KeyValueStorage

logger = logging.getLogger(__name__)

_SAFE_KEY = re.compile(r"^[A-Za-z0-9_.-]+$")


class JSONFileStorage(KeyValueStorage):
    """One ``<key>.json`` file per key under ``base_dir``.

    Writes go to a temp file in the same directory and are then swapped in,
    so a crash mid-write leaves the previous blob intact.
    """

    def __init__(self, base_dir: str | os.PathLike):
        self._base_dir = Path(base_dir)

    def _path_for(self, key: str) -> Path:
        if not _SAFE_KEY.match(key):
            raise StorageError(f"Invalid storage key: {key!r}")
        return self._base_dir / f"{key}.json"

    def get_item(self, key: str) -> Optional[dict[str, Any]]:
        path = self._path_for(key)
        if not path.exists():
            return None
        try:
            with open(path, "r", encoding="utf-8") as f:
                return json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise StorageError(f"Failed to load {key} from {path}: {e}") from e

    def set_item(self, key: str, value: dict[str, Any]) -> None:
        path = self._path_for(key)
        tmp_path: Optional[Path] = None
        try:
            self._base_dir.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                mode="w", dir=self._base_dir, suffix=".tmp", delete=False, encoding="utf-8"
            ) as tf:
                tmp_path = Path(tf.name)
                json.dump(value, tf, indent=2, ensure_ascii=False)
            os.replace(tmp_path, path)
        except (OSError, TypeError, ValueError) as e:
            if tmp_path is not None and tmp_path.exists():
                tmp_path.unlink()
            logger.error("Failed to save %s to %s: %s", key, path, e)
            raise StorageError(f"Failed to save {key} to {path}: {e}") from e

    def remove_item(self, key: str) -> None:
        path = self._path_for(key)
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            raise StorageError(f"Failed to remove {key} at {path}: {e}") from e
