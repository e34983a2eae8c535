"""Share actions for post cards: native share, social intents, copy link."""

from __future__ import annotations

from typing import Callable
from urllib.parse import quote

from .i18n import TRANSLATIONS

__all__ = ["PLATFORMS", "share_links", "share_post"]

PLATFORMS = ("facebook", "twitter", "linkedin", "whatsapp", "instagram", "tiktok", "copy")


def share_links(url: str, text: str, *, mobile: bool = False) -> dict[str, str]:
    encoded_url = quote(url, safe="")
    encoded_text = quote(text, safe="")
    whatsapp_base = "whatsapp://send" if mobile else "https://api.whatsapp.com/send"
    return {
        "facebook": f"https://www.facebook.com/sharer/sharer.php?u={encoded_url}",
        "twitter": f"https://twitter.com/intent/tweet?url={encoded_url}&text={encoded_text}",
        "linkedin": f"https://www.linkedin.com/sharing/share-offsite/?url={encoded_url}",
        "whatsapp": f"{whatsapp_base}?text={encoded_text}%20{encoded_url}",
    }


def share_post(
    platform: str,
    url: str,
    title: str,
    language: str,
    *,
    site_name: str = "",
    mobile: bool = False,
    native_share: Callable[[str, str], object] | None = None,
    clipboard: Callable[[str], object] | None = None,
    opener: Callable[[str], bool] | None = None,
) -> str | None:
    """Share ``url`` and return the toast message to show, if any.

    ``native_share`` is tried first for ``"native"``; when it is missing or
    raises, the link is copied.  Copying is best effort.  ``opener`` returns
    ``False`` when the share window could not be opened.
    """

    copied = TRANSLATIONS.get(language, TRANSLATIONS["en"])["linkCopied"]

    if platform == "native" and native_share is not None:
        try:
            native_share(title, url)
            return None
        except Exception as exc:
            print(f"[INFO] Native share unavailable, copying link instead: {exc}")

    if clipboard is not None:
        try:
            clipboard(url)
        except Exception as exc:
            print(f"[WARN] Could not copy link to clipboard: {exc}")

    text = f"{title} - {site_name}" if site_name else title
    target = share_links(url, text, mobile=mobile).get(platform)
    if target is None:
        # instagram, tiktok, copy and an unavailable native share
        return copied
    if opener is None:
        return copied
    opened = opener(target)
    if not opened and platform != "whatsapp":
        return copied
    return None
