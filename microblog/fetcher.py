"""Fetch the published post file and turn it into :class:`Post` records."""

from __future__ import annotations

import codecs
import http.client
import socket
import threading
import time
import urllib.error
import urllib.request
from typing import Sequence
from urllib.parse import urlsplit

from .config import DEFAULT_AUTHOR, DEFAULT_HTTP_TIMEOUT, DEFAULT_READ_TIME, DEFAULT_USER_AGENT
from .health import HealthReport, _utc_now_iso
from .payload import PayloadError, parse_embedded_payload
from .posts import FALLBACK_LANGUAGES, Post, normalize_posts

__all__ = ["ContentFetcher", "decode_body"]


def decode_body(raw: bytes) -> str:
    """Decode UTF-8, or UTF-16 when the body starts with a byte order mark.

    Bytes that are not valid UTF-8 become U+FFFD instead of failing the
    whole body.
    """

    if raw.startswith((codecs.BOM_UTF16_LE, codecs.BOM_UTF16_BE)):
        try:
            return raw.decode("utf-16")
        except UnicodeDecodeError:
            pass
    return raw.decode("utf-8-sig", "replace")


class ContentFetcher:
    """Download the remote Markdown file and parse its embedded posts.

    ``fetch`` never raises for transport or parse problems: it logs them,
    records them on the health report and returns ``None`` so the caller keeps
    its previous state.
    """

    def __init__(
        self,
        source_url: str,
        *,
        timeout: int = DEFAULT_HTTP_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
        default_author: str = DEFAULT_AUTHOR,
        default_read_time: int = DEFAULT_READ_TIME,
        languages: Sequence[str] = FALLBACK_LANGUAGES,
        health: HealthReport | None = None,
    ) -> None:
        self.source_url = source_url
        self.timeout = timeout
        self.user_agent = user_agent
        self.default_author = default_author
        self.default_read_time = default_read_time
        self.languages = tuple(languages)
        self.health = health
        self._last_stamp = 0
        self._stamp_lock = threading.Lock()

    def _next_stamp(self) -> int:
        with self._stamp_lock:
            stamp = time.time_ns() // 1_000_000
            if stamp <= self._last_stamp:
                stamp = self._last_stamp + 1
            self._last_stamp = stamp
            return stamp

    def cache_busted_url(self) -> str:
        separator = "&" if urlsplit(self.source_url).query else "?"
        return f"{self.source_url}{separator}t={self._next_stamp()}"

    def fetch_text(self) -> str | None:
        url = self.cache_busted_url()
        req = urllib.request.Request(url, headers={"User-Agent": self.user_agent})
        try:
            with urllib.request.urlopen(req, timeout=self.timeout) as r:
                status = getattr(r, "status", 200)
                if not 200 <= status < 300:
                    raise urllib.error.HTTPError(url, status, f"HTTP error! status: {status}", r.headers, None)
                return decode_body(r.read())
        except (urllib.error.URLError, http.client.HTTPException, socket.timeout, OSError, ValueError) as e:
            print("[WARN] Fetch error:", self.source_url, "->", e)
            self._record_error(f"fetch failed: {self.source_url} -> {e}")
            return None

    def fetch(self) -> list[Post] | None:
        text = self.fetch_text()
        if text is None:
            return None
        try:
            raw_posts = parse_embedded_payload(text)
        except PayloadError as e:
            print("[WARN] Could not parse posts from", self.source_url, "->", e)
            self._record_error(str(e))
            return None
        if raw_posts is None:
            print("[INFO] No JSON payload found at", self.source_url)
            return None

        posts = normalize_posts(
            raw_posts,
            default_author=self.default_author,
            default_read_time=self.default_read_time,
            languages=self.languages,
        )
        if self.health is not None:
            self.health.clear()
            try:
                self.health.write(posts_count=len(posts), last_fetch=_utc_now_iso())
            except OSError as exc:
                print(f"[WARN] Failed to write fetch health: {exc}")
        return posts

    def _record_error(self, message: str) -> None:
        if self.health is None:
            return
        self.health.record_error(message)
        try:
            self.health.write()
        except OSError as exc:
            print(f"[WARN] Failed to write fetch health: {exc}")

