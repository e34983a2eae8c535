"""State owner for the public blog views.

:class:`BlogController` holds the post list and every piece of UI state that
the home and article pages are derived from.  Nothing else keeps a writable
reference to that state: fetch completion and user input both go through the
controller's methods.
"""

from __future__ import annotations

import datetime as _dt
import pathlib
import re
import time
from typing import Any, Callable

from .config import SiteConfig
from .fetcher import ContentFetcher
from .health import HealthReport
from .listing import SORT_ORDERS, Page, sort_and_page
from .poller import Poller
from .posts import Post, localize
from .search import Match, search_posts
from .share import share_post

__all__ = ["BlogController", "TOAST_SECONDS", "article_filename"]

TOAST_SECONDS = 3.0


def article_filename(post_id: str) -> str:
    name = re.sub(r"[^A-Za-z0-9_-]+", "-", post_id or "").strip("-")
    return f"{name or 'post'}.html"


def _default_fetcher(config: SiteConfig) -> ContentFetcher:
    health = None
    if config.health_dir is not None:
        health = HealthReport("fetcher", health_dir=pathlib.Path(config.health_dir))
    return ContentFetcher(
        config.source_url,
        timeout=config.http_timeout,
        user_agent=config.user_agent,
        default_author=config.default_author,
        default_read_time=config.default_read_time,
        languages=(config.default_language, *config.languages),
        health=health,
    )


class BlogController:
    def __init__(
        self,
        config: SiteConfig,
        *,
        fetcher: ContentFetcher | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.config = config
        self.fetcher = fetcher if fetcher is not None else _default_fetcher(config)
        self.clock = clock

        self.posts: list[Post] = []
        self.language = config.default_language
        self.query = ""
        self.sort_order = "newest"
        self.page = 1
        self.view = "home"
        self.selected_post_id: str | None = None
        self.last_updated: _dt.datetime | None = None
        self.is_loading = False

        self._toast: str | None = None
        self._toast_expires = 0.0
        self._poller = Poller(lambda: self.refresh(silent=True), config.poll_interval)

    # Lifecycle ----------------------------------------------------------
    def start(self) -> None:
        """Load posts once, then keep refreshing them in the background."""

        self.refresh()
        self._poller.start()

    def stop(self) -> None:
        self._poller.stop()

    @property
    def polling(self) -> bool:
        return self._poller.running

    def refresh(self, silent: bool = False) -> bool:
        """Fetch the remote posts; on failure the current list is kept."""

        if not silent:
            self.is_loading = True
        try:
            posts = self.fetcher.fetch()
        finally:
            if not silent:
                self.is_loading = False
        if posts is None:
            return False
        self.apply_posts(posts)
        return True

    def apply_posts(self, posts: list[Post]) -> None:
        self.posts = list(posts)
        self.last_updated = _dt.datetime.now()
        total = self.current_page().total_pages
        if self.page > total:
            self.page = total

    # User input ---------------------------------------------------------
    def set_query(self, query: str) -> None:
        query = query or ""
        if query != self.query:
            self.query = query
            self.page = 1

    def set_sort_order(self, order: str) -> None:
        if order not in SORT_ORDERS:
            raise ValueError(f"Unknown sort order {order!r}; expected one of {SORT_ORDERS}")
        if order != self.sort_order:
            self.sort_order = order
            self.page = 1

    def set_language(self, language: str) -> None:
        if language not in self.config.languages:
            raise ValueError(f"Unsupported language {language!r}")
        if language != self.language:
            self.language = language
            self.page = 1

    def go_to_page(self, page: int) -> int:
        total = self.current_page().total_pages
        self.page = min(max(1, int(page)), total)
        return self.page

    def next_page(self) -> int:
        return self.go_to_page(self.page + 1)

    def previous_page(self) -> int:
        return self.go_to_page(self.page - 1)

    def open_article(self, post_id: str) -> Post | None:
        post = self.find_post(post_id)
        if post is None:
            return None
        self.selected_post_id = post.id
        self.view = "article"
        self.set_query("")
        return post

    def close_article(self) -> None:
        self.view = "home"
        self.selected_post_id = None

    # Derived views ------------------------------------------------------
    @property
    def search_active(self) -> bool:
        return bool(self.query.strip())

    def search_results(self) -> list[Match]:
        return search_posts(self.posts, self.query, self.language)

    def working_set(self) -> list[Post]:
        if not self.search_active:
            return list(self.posts)
        return [match.post for match in self.search_results()]

    def current_page(self) -> Page:
        return sort_and_page(self.working_set(), self.sort_order, self.page, self.config.page_size)

    def find_post(self, post_id: str) -> Post | None:
        return next((post for post in self.posts if post.id == post_id), None)

    def selected_post(self) -> Post | None:
        if self.selected_post_id is None:
            return None
        return self.find_post(self.selected_post_id)

    def suggested_posts(self, limit: int = 3) -> list[Post]:
        """Newest posts other than the open article."""

        others = [post for post in self.posts if post.id != self.selected_post_id]
        return sort_and_page(others, "newest", 1, max(1, limit)).items

    def localized(self, post: Post) -> dict[str, Any]:
        return localize(post, self.language, self.config.fallback_images)

    def text(self, key: str) -> str:
        return self.config.text(self.language, key)

    # Toast --------------------------------------------------------------
    def show_toast(self, message: str) -> None:
        self._toast = message
        self._toast_expires = self.clock() + TOAST_SECONDS

    @property
    def toast(self) -> str | None:
        if self._toast is not None and self.clock() >= self._toast_expires:
            self._toast = None
        return self._toast

    # Sharing ------------------------------------------------------------
    def article_url(self, post_id: str, root: str = "") -> str:
        """Absolute when ``config.site_url`` is set, else relative to ``root``."""

        filename = article_filename(post_id)
        if self.config.site_url:
            return f"{self.config.site_url}/{self.language}/article/{filename}"
        return f"{root}article/{filename}"

    def share(self, platform: str, post_id: str, **actions: Any) -> str | None:
        """Share a post and show the resulting message as a toast.

        ``actions`` are passed through to :func:`microblog.share.share_post`
        (``native_share``, ``clipboard``, ``opener``, ``mobile``).
        """

        post = self.find_post(post_id)
        if post is None:
            return None
        message = share_post(
            platform,
            self.article_url(post.id),
            self.localized(post)["title"],
            self.language,
            site_name=self.config.site_name,
            **actions,
        )
        if message:
            self.show_toast(message)
        return message
