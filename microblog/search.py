"""Search posts by case-insensitive substring across their localized fields."""

from __future__ import annotations

import dataclasses
import re
from typing import Iterable

from .posts import Post, resolve_field

__all__ = ["Match", "SEARCH_FIELDS", "search_posts", "make_snippet", "highlight_segments"]

# Priority order; the first field containing the query is reported.
SEARCH_FIELDS = ("author", "title", "description", "content")
SNIPPET_RADIUS = 40
ELLIPSIS = "…"

_WS_RE = re.compile(r"\s+")


@dataclasses.dataclass(slots=True)
class Match:
    post: Post
    matched_field: str
    title: str
    author: str
    snippet: str | None = None


def make_snippet(text: str, query: str, radius: int = SNIPPET_RADIUS) -> str:
    """Return a whitespace-collapsed window around the first ``query`` hit."""

    index = text.lower().find(query.lower())
    if index < 0:
        return ""
    start = max(0, index - radius)
    end = min(len(text), index + len(query) + radius)
    window = _WS_RE.sub(" ", text[start:end]).strip()
    if start > 0:
        window = ELLIPSIS + window
    if end < len(text):
        window = window + ELLIPSIS
    return window


def search_posts(posts: Iterable[Post], query: str, language: str) -> list[Match]:
    needle = (query or "").strip().lower()
    if not needle:
        return []

    matches: list[Match] = []
    for post in posts:
        values = {
            "author": post.author or "",
            "title": resolve_field(post, "title", language),
            "description": resolve_field(post, "description", language),
            "content": resolve_field(post, "content", language),
        }
        matched = next((field for field in SEARCH_FIELDS if needle in values[field].lower()), None)
        if matched is None:
            continue
        snippet = make_snippet(values["content"], needle) if matched == "content" else None
        matches.append(
            Match(
                post=post,
                matched_field=matched,
                title=values["title"],
                author=values["author"],
                snippet=snippet,
            )
        )
    return matches


def highlight_segments(text: str, query: str) -> list[tuple[str, bool]]:
    """Split ``text`` into ``(segment, is_match)`` pairs for highlighting."""

    needle = (query or "").strip()
    if not needle or not text:
        return [(text or "", False)] if text else []
    parts = re.split(f"({re.escape(needle)})", text, flags=re.I)
    return [(part, part.lower() == needle.lower()) for part in parts if part]
