"""Extract the JSON post payload embedded in a Markdown document.

The published source is a Markdown file whose only meaningful content is a
JSON document, usually (but not always) inside a fenced code block::

    # Posts
    ```json
    [{"id": "1", "title": "..."}]
    ```

:func:`parse_embedded_payload` accepts three shapes once the JSON is found: a
list of posts, an object with a ``posts`` list, or a single post object.
"""

from __future__ import annotations

import json
import re
from typing import Any

__all__ = ["PayloadError", "parse_embedded_payload", "extract_json_span"]

FENCE_RE = re.compile(r"```(?:json)?\s*([\s\S]*?)\s*```", re.I)
SPAN_RE = re.compile(r"[{\[][\s\S]*[}\]]")


class PayloadError(ValueError):
    """Raised when the embedded JSON span cannot be decoded."""


def extract_json_span(text: str) -> str | None:
    """Return the substring that should hold the JSON document, if any."""

    clean = (text or "").strip()
    fence = FENCE_RE.search(clean)
    if fence:
        clean = fence.group(1)
    span = SPAN_RE.search(clean)
    if not span:
        return None
    return span.group(0)


def _as_post_list(data: Any) -> list[Any] | None:
    # Non-dict entries are kept so positional ids stay aligned with the
    # source list; the normalizer skips them.
    if isinstance(data, list):
        return list(data)
    if isinstance(data, dict):
        posts = data.get("posts")
        if isinstance(posts, list):
            return list(posts)
        return [data]
    return None


def parse_embedded_payload(text: str) -> list[Any] | None:
    """Return the raw post entries embedded in ``text``.

    ``None`` means there was nothing that looked like JSON; callers treat it as
    "no update".  A bracket span that is not valid JSON raises
    :class:`PayloadError`.
    """

    span = extract_json_span(text)
    if span is None:
        return None
    try:
        data = json.loads(span)
    except json.JSONDecodeError as exc:
        raise PayloadError(f"Embedded JSON is malformed: {exc}") from exc
    return _as_post_list(data)
