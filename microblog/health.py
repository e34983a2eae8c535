"""Heartbeat file for the post fetcher.

``<health_dir>/<name>.json`` answers two questions for whoever watches the
site: when did the last successful fetch happen, and why have the posts not
changed since.
"""

from __future__ import annotations

import datetime as _dt
import json
import pathlib

__all__ = ["HealthReport", "MAX_ERRORS"]

MAX_ERRORS = 20


def _utc_now_iso() -> str:
    """Return a second-precision UTC timestamp with a ``Z`` suffix."""

    return _dt.datetime.now(_dt.timezone.utc).replace(microsecond=0, tzinfo=None).isoformat() + "Z"


class HealthReport:
    """Fetch errors since the last success, persisted as JSON.

    Messages are stripped and deduplicated in arrival order; only the first
    :data:`MAX_ERRORS` are kept.
    """

    def __init__(self, name: str, *, health_dir: pathlib.Path) -> None:
        self.name = name
        self.health_dir = pathlib.Path(health_dir)
        self.errors: list[str] = []

    @property
    def path(self) -> pathlib.Path:
        return self.health_dir / f"{self.name}.json"

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    def record_error(self, message: str) -> None:
        text = str(message or "").strip()
        if text and text not in self.errors and len(self.errors) < MAX_ERRORS:
            self.errors.append(text)

    def clear(self) -> None:
        self.errors.clear()

    def _previous(self) -> dict:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (FileNotFoundError, json.JSONDecodeError):
            return {}
        return data if isinstance(data, dict) else {}

    def write(self, *, posts_count: int | None = None, last_fetch: str | None = None) -> pathlib.Path:
        """Write the heartbeat; ``posts_count`` and ``last_fetch`` carry over when omitted."""

        previous = self._previous()
        if posts_count is None:
            posts_count = previous.get("posts_count") if isinstance(previous.get("posts_count"), int) else 0

        payload = {
            "last_fetch": last_fetch or previous.get("last_fetch"),
            "last_attempt": _utc_now_iso(),
            "posts_count": max(0, posts_count),
            "errors": list(self.errors),
        }
        self.health_dir.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(payload, ensure_ascii=False, indent=2) + "\n", encoding="utf-8")
        return self.path
