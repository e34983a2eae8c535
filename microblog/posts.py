"""Canonical post records and the helpers that read them.

The remote payload is loosely typed: ids may be numbers or missing, the read
time may be a string, and any of ``title``/``description``/``content``/
``excerpt`` may come as language-suffixed variants (``title_en``,
``content_fr``...).  :func:`normalize_posts` maps every entry onto a
:class:`Post` with all fields populated, and :func:`resolve_field` picks the
text to display for a given language.
"""

from __future__ import annotations

import dataclasses
import re
from typing import Any, Iterable, Sequence

from .config import DEFAULT_AUTHOR, DEFAULT_BLOG_IMAGES, DEFAULT_READ_TIME

__all__ = [
    "Post",
    "LOCALIZED_FIELDS",
    "normalize_posts",
    "resolve_field",
    "localize",
    "hash_post_id",
    "post_image",
]

DEFAULT_TITLE = "Untitled Post"
LOCALIZED_FIELDS = ("title", "description", "content", "excerpt")
FALLBACK_LANGUAGES = ("fr", "en")

_LOCALIZED_KEY_RE = re.compile(r"^(title|description|content|excerpt)_([A-Za-z]{2,3}(?:-[A-Za-z0-9]+)?)$")


def _coerce_string(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return ""
    if isinstance(value, str):
        return value.strip()
    try:
        text = str(value)
    except Exception:
        return ""
    return text.strip()


def _first_string(item: dict[str, Any], keys: Iterable[str]) -> str:
    for key in keys:
        if key not in item:
            continue
        text = _coerce_string(item.get(key))
        if text:
            return text
    return ""


def _coerce_positive_int(value: object, default: int) -> int:
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value if value > 0 else default
    if isinstance(value, float):
        return int(value) if value >= 1 else default
    if isinstance(value, str):
        # "7", "7 min", "7 min read"
        match = re.match(r"\s*(\d+)", value)
        if not match:
            return default
        parsed = int(match.group(1))
        return parsed if parsed > 0 else default
    return default


def _coerce_bool(value: object, default: bool) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    if isinstance(value, str):
        text = value.strip().lower()
        if text in {"true", "1", "yes", "on"}:
            return True
        if text in {"false", "0", "no", "off"}:
            return False
    return default


def _clean_translations(value: Any) -> dict[str, dict[str, str]]:
    if not isinstance(value, dict):
        return {}
    cleaned: dict[str, dict[str, str]] = {}
    for raw_lang, raw_entry in value.items():
        lang = _coerce_string(raw_lang)
        if not lang or not isinstance(raw_entry, dict):
            continue
        entry = {
            _coerce_string(key): text if isinstance(text, str) else _coerce_string(text)
            for key, text in raw_entry.items()
            if _coerce_string(key)
        }
        cleaned[lang] = entry
    return cleaned


@dataclasses.dataclass(slots=True)
class Post:
    """A blog article with language-resolvable text fields."""

    id: str
    author: str = DEFAULT_AUTHOR
    publication_date: str = ""
    read_time_minutes: int = DEFAULT_READ_TIME
    title: str = DEFAULT_TITLE
    description: str = ""
    content: str = ""
    image_url: str = ""
    excerpt: str = ""
    category: str = ""
    is_published: bool = True
    translations: dict[str, dict[str, str]] = dataclasses.field(default_factory=dict)
    localized: dict[str, str] = dataclasses.field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Return the camelCase form used by the remote payload and the store."""

        data: dict[str, Any] = {
            "id": self.id,
            "author": self.author,
            "publicationDate": self.publication_date,
            "readTimeMinutes": self.read_time_minutes,
            "title": self.title,
            "description": self.description,
            "content": self.content,
            "imageUrl": self.image_url,
            "excerpt": self.excerpt,
            "category": self.category,
            "isPublished": self.is_published,
            "translations": {lang: dict(entry) for lang, entry in self.translations.items()},
        }
        data.update(self.localized)
        return data

    @classmethod
    def from_dict(
        cls,
        item: dict[str, Any],
        *,
        index: int = 0,
        default_author: str = DEFAULT_AUTHOR,
        default_read_time: int = DEFAULT_READ_TIME,
        languages: Sequence[str] = FALLBACK_LANGUAGES,
    ) -> "Post":
        localized: dict[str, str] = {}
        for key, value in item.items():
            if not isinstance(key, str) or not _LOCALIZED_KEY_RE.match(key):
                continue
            if isinstance(value, str) and value.strip():
                localized[key] = value

        def _text(field: str, default: str = "") -> str:
            base = item.get(field)
            if isinstance(base, str) and base.strip():
                return base
            base_text = _coerce_string(base)
            if base_text:
                return base_text
            for lang in languages:
                variant = localized.get(f"{field}_{lang}")
                if variant:
                    return variant
            return default

        return cls(
            id=_coerce_string(item.get("id")) or f"post-{index}",
            author=_coerce_string(item.get("author")) or default_author,
            publication_date=_first_string(item, ("publicationDate", "publication_date", "date")),
            read_time_minutes=_coerce_positive_int(
                item.get("readTimeMinutes", item.get("readingTime")), default_read_time
            ),
            title=_text("title", DEFAULT_TITLE),
            description=_text("description"),
            content=_text("content"),
            image_url=_first_string(item, ("imageUrl", "image_url", "image", "cover")),
            excerpt=_text("excerpt"),
            category=_coerce_string(item.get("category")),
            is_published=_coerce_bool(item.get("isPublished"), True),
            translations=_clean_translations(item.get("translations")),
            localized=localized,
        )


def normalize_posts(
    raw_list: Iterable[Any] | None,
    *,
    default_author: str = DEFAULT_AUTHOR,
    default_read_time: int = DEFAULT_READ_TIME,
    languages: Sequence[str] = FALLBACK_LANGUAGES,
) -> list[Post]:
    """Map loosely typed entries onto :class:`Post` records.

    Output order matches input order.  Entries without an id get
    ``post-<index>`` where ``index`` is the position in ``raw_list``; entries
    that are neither dicts nor posts are dropped but still consume an index.
    """

    posts: list[Post] = []
    for index, entry in enumerate(raw_list or ()):
        if isinstance(entry, Post):
            entry = entry.to_dict()
        if not isinstance(entry, dict):
            continue
        posts.append(
            Post.from_dict(
                entry,
                index=index,
                default_author=default_author,
                default_read_time=default_read_time,
                languages=languages,
            )
        )
    return posts


def resolve_field(post: Post, field: str, language: str) -> str:
    """Return the text of ``field`` for ``language``.

    Order: ``<field>_<language>``, then the admin translation for
    ``language``, then the base field, then ``""``.
    """

    if field not in LOCALIZED_FIELDS:
        return ""
    localized = getattr(post, "localized", None) or {}
    value = localized.get(f"{field}_{language}")
    if isinstance(value, str) and value:
        return value

    translations = getattr(post, "translations", None) or {}
    entry = translations.get(language)
    if isinstance(entry, dict):
        keys = (field, "excerpt") if field == "description" else (field,)
        for key in keys:
            value = entry.get(key)
            if isinstance(value, str) and value:
                return value

    value = getattr(post, field, "")
    return value if isinstance(value, str) else ""


def hash_post_id(text: str) -> int:
    """Java-style ``hash*31 + unit`` over UTF-16 code units, as signed 32-bit."""

    data = (text or "").encode("utf-16-le")
    value = 0
    for offset in range(0, len(data), 2):
        unit = data[offset] | (data[offset + 1] << 8)
        value = (value * 31 + unit) & 0xFFFFFFFF
    if value >= 0x80000000:
        value -= 0x100000000
    return value


def post_image(post: Post, fallback_images: Sequence[str] = DEFAULT_BLOG_IMAGES) -> str:
    """Return the post image or a fallback picked deterministically from the id."""

    if post.image_url and post.image_url.strip():
        return post.image_url
    index = abs(hash_post_id(post.id or "0")) % len(fallback_images)
    return fallback_images[index]


def localize(
    post: Post,
    language: str,
    fallback_images: Sequence[str] = DEFAULT_BLOG_IMAGES,
) -> dict[str, Any]:
    """Return the display view of ``post`` used by cards and article pages."""

    return {
        "id": post.id,
        "author": post.author,
        "publication_date": post.publication_date,
        "read_time_minutes": post.read_time_minutes,
        "title": resolve_field(post, "title", language),
        "description": resolve_field(post, "description", language),
        "content": resolve_field(post, "content", language),
        "excerpt": resolve_field(post, "excerpt", language),
        "image": post_image(post, fallback_images),
        "category": post.category,
        "is_published": post.is_published,
    }
