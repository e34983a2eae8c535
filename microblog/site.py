#!/usr/bin/env python3
"""Render the blog views with Jinja2 and write a static snapshot.

``render_home`` and ``render_article`` turn a :class:`BlogController` into
HTML.  ``build_site`` renders every page for every UI language into an
output directory::

    dist/<lang>/index.html
    dist/<lang>/page/<n>.html        (n >= 2)
    dist/<lang>/article/<id>.html

Run:
  microblog-build --output dist
"""

from __future__ import annotations

import argparse
import pathlib
from typing import Any, Sequence

import mistune
from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup, escape

from .config import SiteConfig
from .controller import BlogController, article_filename
from .i18n import LANGUAGES
from .posts import Post
from .search import highlight_segments
from .share import share_links

TEMPLATES_DIR = pathlib.Path(__file__).resolve().parent / "templates"
DEFAULT_OUTPUT = pathlib.Path("dist")


def _highlight(text: str, query: str = "") -> Markup:
    parts = []
    for segment, matched in highlight_segments(text or "", query or ""):
        if matched:
            parts.append(Markup("<mark>{}</mark>").format(segment))
        else:
            parts.append(escape(segment))
    return Markup("").join(parts)


def _markdown(text: str) -> Markup:
    return Markup(mistune.html(text or ""))


def make_environment() -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(TEMPLATES_DIR)),
        autoescape=select_autoescape(["html"]),
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["highlight"] = _highlight
    env.filters["markdown"] = _markdown
    env.globals["article_filename"] = article_filename
    return env


_ENV: Environment | None = None


def _env() -> Environment:
    global _ENV
    if _ENV is None:
        _ENV = make_environment()
    return _ENV


def _post_view(controller: BlogController, post: Post, root: str) -> dict[str, Any]:
    view = controller.localized(post)
    view["url"] = controller.article_url(post.id, root)
    view["share"] = share_links(view["url"], f"{view['title']} - {controller.config.site_name}")
    return view


def _page_href(root: str, number: int) -> str:
    return f"{root}index.html" if number <= 1 else f"{root}page/{number}.html"


def _base_context(controller: BlogController, root: str) -> dict[str, Any]:
    return {
        "t": controller.config.translations.get(controller.language, {}),
        "language": controller.language,
        "languages": [entry for entry in LANGUAGES if entry[0] in controller.config.languages],
        "site_name": controller.config.site_name,
        "root": root,
        "toast": controller.toast,
    }


def render_home(controller: BlogController, *, root: str = "") -> str:
    page = controller.current_page()
    context = _base_context(controller, root)
    context.update(
        {
            "query": controller.query,
            "search_active": controller.search_active,
            "results": controller.search_results(),
            "sort_order": controller.sort_order,
            "cards": [_post_view(controller, post, root) for post in page.items],
            "page": page,
            "page_links": [(n, _page_href(root, n)) for n in range(1, page.total_pages + 1)],
            "prev_href": _page_href(root, page.page - 1) if page.has_previous else None,
            "next_href": _page_href(root, page.page + 1) if page.has_next else None,
            "last_updated": controller.last_updated,
        }
    )
    return _env().get_template("home.html").render(**context)


def render_article(controller: BlogController, *, root: str = "") -> str | None:
    post = controller.selected_post()
    if post is None:
        return None
    context = _base_context(controller, root)
    context.update(
        {
            "article": _post_view(controller, post, root),
            "suggested": [_post_view(controller, p, root) for p in controller.suggested_posts()],
        }
    )
    return _env().get_template("article.html").render(**context)


def _write(path: pathlib.Path, html: str, written: list[pathlib.Path]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(html, encoding="utf-8")
    written.append(path)


def build_site(
    posts: Sequence[Post],
    output_dir: pathlib.Path,
    config: SiteConfig,
    *,
    languages: Sequence[str] | None = None,
) -> list[pathlib.Path]:
    """Render every listing page and article for each language."""

    written: list[pathlib.Path] = []
    for language in languages or config.languages:
        controller = BlogController(config)
        controller.set_language(language)
        controller.apply_posts(list(posts))
        lang_dir = output_dir / language

        total_pages = controller.current_page().total_pages
        for number in range(1, total_pages + 1):
            controller.go_to_page(number)
            root = "" if number == 1 else "../"
            target = lang_dir / ("index.html" if number == 1 else f"page/{number}.html")
            _write(target, render_home(controller, root=root), written)

        for post in controller.posts:
            controller.open_article(post.id)
            html = render_article(controller, root="../")
            if html is not None:
                _write(lang_dir / "article" / article_filename(post.id), html, written)
            controller.close_article()
    return written


def main(argv: list[str] | None = None) -> int:
    config = SiteConfig.from_env()
    parser = argparse.ArgumentParser(description="Render the blog into static HTML pages.")
    parser.add_argument("--source", default=config.source_url, help="URL of the Markdown file holding the posts")
    parser.add_argument("--output", type=pathlib.Path, default=DEFAULT_OUTPUT, help="Output directory")
    parser.add_argument(
        "--language",
        action="append",
        choices=list(config.languages),
        help="Language to render (repeatable; default: all)",
    )
    args = parser.parse_args(argv)

    config.source_url = args.source
    controller = BlogController(config)
    if not controller.refresh() or not controller.posts:
        print("ERROR: no posts could be loaded from", args.source)
        return 1

    written = build_site(controller.posts, args.output, config, languages=args.language)
    print(f"Wrote {len(written)} pages to {args.output}")
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
