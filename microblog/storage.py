"""A small JSON-file key/value store standing in for browser local storage."""

from __future__ import annotations

import json
import pathlib
from typing import Any

__all__ = ["LocalStore", "POSTS_KEY", "LANGUAGE_KEY"]

POSTS_KEY = "microblog_posts"
LANGUAGE_KEY = "microblog_language"


class LocalStore:
    """Persist JSON-serialisable values under fixed keys in one file.

    The file is read once on construction; every :meth:`set` rewrites it.
    A missing or corrupt file reads as an empty store.
    """

    def __init__(self, path: pathlib.Path) -> None:
        self.path = pathlib.Path(path)
        self._data = self._load()

    def _load(self) -> dict[str, Any]:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except (OSError, json.JSONDecodeError) as exc:
            print(f"[WARN] Ignoring unreadable store {self.path}: {exc}")
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(self._data, ensure_ascii=False, indent=2) + "\n", encoding="utf-8")
        tmp_path.replace(self.path)

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._data[key] = value
        self._write()

    def remove(self, key: str) -> None:
        if key in self._data:
            del self._data[key]
            self._write()

    def __contains__(self, key: object) -> bool:
        return key in self._data
