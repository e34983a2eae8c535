"""Admin dashboard: demo login, post CRUD, AI drafts and AI translations.

Posts edited here live in a :class:`~microblog.storage.LocalStore`.  The
store is read once when the dashboard is created and written after every
change to the post list or the selected language.
"""

from __future__ import annotations

import datetime as _dt
import time
import uuid
from typing import Any, Mapping, Protocol

from .ai import AIServiceError, GeminiWriter
from .config import SiteConfig
from .posts import Post, normalize_posts
from .storage import LANGUAGE_KEY, POSTS_KEY, LocalStore

__all__ = ["authenticate", "Dashboard", "DraftWriter"]


class DraftWriter(Protocol):
    async def generate_draft(self, topic: str) -> Mapping[str, str]: ...

    async def translate(self, post: Mapping[str, Any], target_language: str) -> Mapping[str, str]: ...


def authenticate(username: str, password: str, *, expected_username: str, expected_password: str) -> bool:
    """Demo credential check; the username is case-insensitive."""

    clean_username = (username or "").strip().lower()
    clean_password = (password or "").strip()
    return clean_username == expected_username.strip().lower() and clean_password == expected_password.strip()


def _today() -> str:
    return _dt.date.today().isoformat()


class Dashboard:
    def __init__(self, store: LocalStore, writer: DraftWriter, *, config: SiteConfig) -> None:
        self.store = store
        self.writer = writer
        self.config = config

        self.posts: list[Post] = normalize_posts(
            store.get(POSTS_KEY) or [],
            default_author=config.default_author,
            default_read_time=config.default_read_time,
            languages=config.languages,
        )
        language = store.get(LANGUAGE_KEY)
        self.language = language if language in config.languages else config.default_language

        self.user: str | None = None
        self.alert: str | None = None
        self.is_generating = False
        self.translating_id: str | None = None

    @classmethod
    def from_config(cls, config: SiteConfig) -> "Dashboard":
        """Dashboard backed by ``config.store_path`` and the Gemini writer."""

        return cls(LocalStore(config.store_path), GeminiWriter.from_config(config), config=config)

    # Session ------------------------------------------------------------
    @property
    def logged_in(self) -> bool:
        return self.user is not None

    def login(self, username: str, password: str) -> str | None:
        """Return ``None`` on success, otherwise the inline form error."""

        if authenticate(
            username,
            password,
            expected_username=self.config.admin_username,
            expected_password=self.config.admin_password,
        ):
            self.user = username.strip()
            return None
        return self.config.text(self.language, "invalidCredentials")

    def logout(self) -> None:
        self.user = None

    def set_language(self, language: str) -> None:
        if language not in self.config.languages:
            raise ValueError(f"Unsupported language {language!r}")
        self.language = language
        self.store.set(LANGUAGE_KEY, language)

    def dismiss_alert(self) -> None:
        self.alert = None

    # Posts --------------------------------------------------------------
    def _save(self) -> None:
        self.store.set(POSTS_KEY, [post.to_dict() for post in self.posts])

    def get(self, post_id: str) -> Post | None:
        return next((post for post in self.posts if post.id == post_id), None)

    def new_post_template(self) -> Post:
        return Post(
            id="",
            author=self.config.default_author,
            publication_date=_today(),
            read_time_minutes=self.config.default_read_time,
            title="",
            image_url="https://picsum.photos/800/600",
            is_published=True,
        )

    def add_post(self, post: Post) -> Post:
        if not post.id:
            post.id = str(time.time_ns() // 1_000_000)
        # Newest first, like the dashboard list.
        self.posts.insert(0, post)
        self._save()
        return post

    def update_post(self, post: Post) -> Post:
        for index, existing in enumerate(self.posts):
            if existing.id == post.id:
                self.posts[index] = post
                self._save()
                return post
        raise KeyError(post.id)

    def delete_post(self, post_id: str) -> bool:
        remaining = [post for post in self.posts if post.id != post_id]
        if len(remaining) == len(self.posts):
            return False
        self.posts = remaining
        self._save()
        return True

    def toggle_publish(self, post_id: str) -> Post:
        post = self.get(post_id)
        if post is None:
            raise KeyError(post_id)
        post.is_published = not post.is_published
        self._save()
        return post

    def published_posts(self) -> list[Post]:
        return [post for post in self.posts if post.is_published]

    # AI -----------------------------------------------------------------
    async def generate_draft(self, topic: str) -> Post | None:
        """Create and publish a post drafted from ``topic``.

        Returns ``None`` for an empty topic or when the AI call fails; in the
        latter case :attr:`alert` holds the message to show.
        """

        topic = (topic or "").strip()
        if not topic:
            return None
        self.is_generating = True
        try:
            generated = await self.writer.generate_draft(topic)
        except AIServiceError:
            self.alert = self.config.text(self.language, "generationFailed")
            return None
        finally:
            self.is_generating = False

        post = Post(
            id=str(time.time_ns() // 1_000_000),
            author=self.config.default_author,
            publication_date=_today(),
            read_time_minutes=self.config.default_read_time,
            title=generated.get("title") or "",
            description=generated.get("description") or "",
            content=generated.get("content") or "",
            excerpt=generated.get("excerpt") or "",
            image_url=f"https://picsum.photos/seed/{uuid.uuid4().hex}/800/600",
            is_published=True,
        )
        return self.add_post(post)

    async def auto_translate(self, post_id: str) -> Post | None:
        """Fill in every missing translation, one language at a time.

        A failed call stops the loop, discards what was translated so far and
        sets :attr:`alert`; the stored post is left unchanged.
        """

        post = self.get(post_id)
        if post is None:
            return None
        self.translating_id = post.id
        try:
            translations = {lang: dict(entry) for lang, entry in post.translations.items()}
            source = {"title": post.title, "excerpt": post.excerpt, "content": post.content}
            for lang in self.config.translation_languages:
                if translations.get(lang):
                    continue
                try:
                    result = await self.writer.translate(source, lang)
                except AIServiceError:
                    self.alert = self.config.text(self.language, "translationFailed")
                    return None
                translations[lang] = dict(result)
        finally:
            self.translating_id = None

        post.translations = translations
        self._save()
        return post
