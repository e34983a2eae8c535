"""Blog front end pipeline: fetch, normalize, localize, search, sort, paginate.

``BlogController`` drives the public pages, ``Dashboard`` the admin side.
"""

from .admin import Dashboard
from .ai import GeminiWriter
from .config import SiteConfig
from .controller import BlogController
from .listing import Page, sort_and_page
from .payload import parse_embedded_payload
from .posts import Post, normalize_posts, post_image, resolve_field
from .search import Match, search_posts

__all__ = [
    "BlogController",
    "Dashboard",
    "GeminiWriter",
    "Match",
    "Page",
    "Post",
    "SiteConfig",
    "normalize_posts",
    "parse_embedded_payload",
    "post_image",
    "resolve_field",
    "search_posts",
    "sort_and_page",
]
