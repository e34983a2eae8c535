"""Order posts by publication date and slice them into pages."""

from __future__ import annotations

import dataclasses
import datetime as _dt
import math
from email.utils import parsedate_to_datetime
from typing import Any, Sequence, TypeVar

from .posts import Post

__all__ = ["Page", "SORT_ORDERS", "parse_date", "sort_posts", "paginate", "sort_and_page"]

SORT_ORDERS = ("newest", "oldest")

DATE_FORMATS = (
    "%Y-%m-%d",
    "%Y/%m/%d",
    "%m/%d/%Y",
    "%d %b %Y",
    "%d %B %Y",
    "%b %d, %Y",
    "%B %d, %Y",
)

T = TypeVar("T")


@dataclasses.dataclass(slots=True)
class Page:
    items: list[Any]
    total_pages: int
    page: int

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages


def _parse_datetime(value: object) -> _dt.datetime | None:
    text = value.strip() if isinstance(value, str) else ""
    if not text:
        return None

    iso_candidate = text
    if iso_candidate.endswith("Z"):
        iso_candidate = iso_candidate[:-1] + "+00:00"
    try:
        dt = _dt.datetime.fromisoformat(iso_candidate)
    except ValueError:
        dt = None
    if dt is None:
        try:
            dt = parsedate_to_datetime(text)
        except (TypeError, ValueError, IndexError):
            dt = None
    if dt is None:
        for fmt in DATE_FORMATS:
            try:
                dt = _dt.datetime.strptime(text, fmt)
                break
            except ValueError:
                continue
    if dt is None:
        return None

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=_dt.timezone.utc)
    return dt


def parse_date(value: object) -> float:
    """Return ``value`` as epoch seconds, or ``0.0`` when it cannot be parsed."""

    dt = _parse_datetime(value)
    if dt is None:
        return 0.0
    try:
        return dt.timestamp()
    except (OverflowError, OSError, ValueError):
        return 0.0


def sort_posts(posts: Sequence[Post], order: str = "newest") -> list[Post]:
    if order not in SORT_ORDERS:
        raise ValueError(f"Unknown sort order {order!r}; expected one of {SORT_ORDERS}")
    # ``sorted`` is stable with ``reverse=True`` too, so ties keep input order.
    return sorted(posts, key=lambda post: parse_date(post.publication_date), reverse=order == "newest")


def paginate(items: Sequence[T], page: int, page_size: int) -> Page:
    if page_size < 1:
        raise ValueError(f"page_size must be positive, got {page_size}")
    total_pages = max(1, math.ceil(len(items) / page_size))
    page = min(max(1, page), total_pages)
    start = (page - 1) * page_size
    return Page(items=list(items[start:start + page_size]), total_pages=total_pages, page=page)


def sort_and_page(posts: Sequence[Post], order: str, page: int, page_size: int) -> Page:
    return paginate(sort_posts(posts, order), page, page_size)
