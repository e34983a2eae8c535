"""Runtime configuration for the blog front end and the admin dashboard.

Everything the controller and the dashboard need (source URL, paging, UI
strings, demo credentials, AI settings) lives on :class:`SiteConfig` and is
passed in at construction time.  ``SiteConfig.from_env`` reads the optional
environment knobs listed below.

Env knobs (optional):
  MICROBLOG_SOURCE_URL, MICROBLOG_SITE_URL, POLL_INTERVAL, POSTS_PER_PAGE, HTTP_TIMEOUT,
  DEFAULT_LANGUAGE, DEFAULT_AUTHOR, ADMIN_USERNAME, ADMIN_PASSWORD,
  MICROBLOG_STORE, MICROBLOG_HEALTH_DIR, GEMINI_API_KEY, GEMINI_DRAFT_MODEL,
  GEMINI_TRANSLATE_MODEL, AP_USER_AGENT
"""

from __future__ import annotations

import dataclasses
import os
import pathlib
from typing import Any, Mapping

from .i18n import LANGUAGES, TRANSLATIONS

DEFAULT_SOURCE_URL = "https://raw.githubusercontent.com/logik101/micro-blog/main/public/post.md"
DEFAULT_POLL_INTERVAL = 10
DEFAULT_PAGE_SIZE = 6
DEFAULT_HTTP_TIMEOUT = 15
DEFAULT_READ_TIME = 5
DEFAULT_AUTHOR = "Admin"
DEFAULT_LANGUAGE = "fr"
DEFAULT_USER_AGENT = "Mozilla/5.0 (microblog reader)"
SITE_NAME = "MicroFormS"

DEFAULT_BLOG_IMAGES = (
    "https://raw.githubusercontent.com/logik101/microF/main/d1.jpg",
    "https://raw.githubusercontent.com/logik101/microF/main/d2.jpg",
    "https://raw.githubusercontent.com/logik101/microF/main/d3.jpg",
    "https://raw.githubusercontent.com/logik101/microF/main/d4.png",
)

# Languages the dashboard asks the AI service to fill in.
TRANSLATION_LANGUAGES = ("en", "fr", "ht")

GEMINI_ENDPOINT = "https://generativelanguage.googleapis.com/v1beta/models"
GEMINI_DRAFT_MODEL = "gemini-3-pro-preview"
GEMINI_TRANSLATE_MODEL = "gemini-3-flash-preview"

ROOT = pathlib.Path.cwd()


def _env_int(name: str, default: int, environ: Mapping[str, str] | None = None) -> int:
    """Return an integer from the environment or ``default`` on failure."""

    env = os.environ if environ is None else environ
    raw = env.get(name)
    if raw is None:
        return default
    raw = raw.strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        print(f"[WARN] Invalid {name}={raw!r}; falling back to {default}")
        return default


def _env_str(name: str, default: str, environ: Mapping[str, str] | None = None) -> str:
    env = os.environ if environ is None else environ
    raw = env.get(name)
    if raw is None:
        return default
    return raw.strip() or default


@dataclasses.dataclass(slots=True)
class SiteConfig:
    """Explicit settings shared by the controller, the renderer and the admin."""

    source_url: str = DEFAULT_SOURCE_URL
    poll_interval: int = DEFAULT_POLL_INTERVAL
    page_size: int = DEFAULT_PAGE_SIZE
    http_timeout: int = DEFAULT_HTTP_TIMEOUT
    user_agent: str = DEFAULT_USER_AGENT
    site_name: str = SITE_NAME
    site_url: str = ""
    default_language: str = DEFAULT_LANGUAGE
    languages: tuple[str, ...] = tuple(code for code, _label, _flag in LANGUAGES)
    translation_languages: tuple[str, ...] = TRANSLATION_LANGUAGES
    default_author: str = DEFAULT_AUTHOR
    default_read_time: int = DEFAULT_READ_TIME
    fallback_images: tuple[str, ...] = DEFAULT_BLOG_IMAGES
    translations: dict[str, dict[str, str]] = dataclasses.field(
        default_factory=lambda: {lang: dict(table) for lang, table in TRANSLATIONS.items()}
    )
    admin_username: str = "admin"
    admin_password: str = "admin"
    store_path: pathlib.Path = ROOT / ".microblog" / "store.json"
    health_dir: pathlib.Path | None = None
    gemini_api_key: str = ""
    gemini_endpoint: str = GEMINI_ENDPOINT
    draft_model: str = GEMINI_DRAFT_MODEL
    translate_model: str = GEMINI_TRANSLATE_MODEL

    def __post_init__(self) -> None:
        if self.page_size < 1:
            raise ValueError(f"page_size must be positive, got {self.page_size}")
        if not self.fallback_images:
            raise ValueError("fallback_images must not be empty")
        if self.default_language not in self.languages:
            self.default_language = self.languages[0] if self.languages else DEFAULT_LANGUAGE

    def text(self, language: str, key: str) -> str:
        """Return the UI string ``key`` for ``language`` (English as fallback)."""

        table = self.translations.get(language) or {}
        if key in table:
            return table[key]
        return self.translations.get("en", {}).get(key, key)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None, **overrides: Any) -> "SiteConfig":
        health_raw = _env_str("MICROBLOG_HEALTH_DIR", "", environ)
        values: dict[str, Any] = {
            "source_url": _env_str("MICROBLOG_SOURCE_URL", DEFAULT_SOURCE_URL, environ),
            "site_url": _env_str("MICROBLOG_SITE_URL", "", environ).rstrip("/"),
            "poll_interval": max(1, _env_int("POLL_INTERVAL", DEFAULT_POLL_INTERVAL, environ)),
            "page_size": max(1, _env_int("POSTS_PER_PAGE", DEFAULT_PAGE_SIZE, environ)),
            "http_timeout": max(1, _env_int("HTTP_TIMEOUT", DEFAULT_HTTP_TIMEOUT, environ)),
            "user_agent": _env_str("AP_USER_AGENT", DEFAULT_USER_AGENT, environ),
            "default_language": _env_str("DEFAULT_LANGUAGE", DEFAULT_LANGUAGE, environ),
            "default_author": _env_str("DEFAULT_AUTHOR", DEFAULT_AUTHOR, environ),
            "admin_username": _env_str("ADMIN_USERNAME", "admin", environ),
            "admin_password": _env_str("ADMIN_PASSWORD", "admin", environ),
            "store_path": pathlib.Path(
                _env_str("MICROBLOG_STORE", str(ROOT / ".microblog" / "store.json"), environ)
            ),
            "health_dir": pathlib.Path(health_raw) if health_raw else None,
            "gemini_api_key": _env_str("GEMINI_API_KEY", "", environ),
            "draft_model": _env_str("GEMINI_DRAFT_MODEL", GEMINI_DRAFT_MODEL, environ),
            "translate_model": _env_str("GEMINI_TRANSLATE_MODEL", GEMINI_TRANSLATE_MODEL, environ),
        }
        values.update(overrides)
        return cls(**values)
