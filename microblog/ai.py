"""Draft and translate posts with the Gemini ``generateContent`` endpoint.

Only the admin dashboard uses this module; readers never trigger a model
call.  Both operations request a JSON response with a declared schema, and
the decoded object is validated again locally with ``jsonschema`` before it
is handed back.  Any failure surfaces as a single :class:`AIServiceError`
subclass with no partial result.
"""

from __future__ import annotations

import asyncio
import http.client
import json
import socket
import urllib.error
import urllib.request
from typing import Any, Mapping
from urllib.parse import quote

from jsonschema import ValidationError, validate

from .config import GEMINI_DRAFT_MODEL, GEMINI_ENDPOINT, GEMINI_TRANSLATE_MODEL, SiteConfig

__all__ = [
    "AIServiceError",
    "GenerationError",
    "TranslationError",
    "GeminiWriter",
    "DRAFT_FIELDS",
    "TRANSLATION_FIELDS",
]

DRAFT_FIELDS = ("title", "excerpt", "description", "content")
TRANSLATION_FIELDS = ("title", "excerpt", "content")
DEFAULT_AI_TIMEOUT = 120


class AIServiceError(RuntimeError):
    """The generative text service could not produce a usable answer."""


class GenerationError(AIServiceError):
    pass


class TranslationError(AIServiceError):
    pass


def _response_schema(fields: tuple[str, ...]) -> dict[str, Any]:
    """Schema in the shape the Gemini API expects (upper-case type names)."""

    return {
        "type": "OBJECT",
        "properties": {name: {"type": "STRING"} for name in fields},
        "required": list(fields),
    }


def _json_schema(fields: tuple[str, ...]) -> dict[str, Any]:
    return {
        "type": "object",
        "properties": {name: {"type": "string"} for name in fields},
        "required": list(fields),
    }


DRAFT_SCHEMA = _json_schema(DRAFT_FIELDS)
TRANSLATION_SCHEMA = _json_schema(TRANSLATION_FIELDS)

# Failures of the HTTP round trip and of decoding or validating the answer.
_CALL_ERRORS = (
    urllib.error.URLError,
    http.client.HTTPException,
    socket.timeout,
    OSError,
    ValueError,
    TypeError,
    KeyError,
    AttributeError,
    ValidationError,
)


def _extract_text(data: Mapping[str, Any]) -> str:
    candidates = data.get("candidates") or []
    if not candidates:
        raise ValueError("response has no candidates")
    parts = (candidates[0].get("content") or {}).get("parts") or []
    text = "".join(part.get("text", "") for part in parts if isinstance(part, dict))
    if not text.strip():
        raise ValueError("response text is empty")
    return text


class GeminiWriter:
    """Async client for the two admin operations.

    The HTTP round trip is blocking ``urllib`` code run through
    :func:`asyncio.to_thread`, so the dashboard's event loop stays free while
    a request is in flight.
    """

    def __init__(
        self,
        api_key: str,
        *,
        draft_model: str = GEMINI_DRAFT_MODEL,
        translate_model: str = GEMINI_TRANSLATE_MODEL,
        endpoint: str = GEMINI_ENDPOINT,
        timeout: int = DEFAULT_AI_TIMEOUT,
    ) -> None:
        self.api_key = api_key
        self.draft_model = draft_model
        self.translate_model = translate_model
        self.endpoint = endpoint.rstrip("/")
        self.timeout = timeout

    @classmethod
    def from_config(cls, config: SiteConfig) -> "GeminiWriter":
        return cls(
            config.gemini_api_key,
            draft_model=config.draft_model,
            translate_model=config.translate_model,
            endpoint=config.gemini_endpoint,
        )

    def _url(self, model: str) -> str:
        return f"{self.endpoint}/{quote(model)}:generateContent?key={quote(self.api_key)}"

    def _post(self, model: str, prompt: str, fields: tuple[str, ...]) -> str:
        payload = {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": {
                "responseMimeType": "application/json",
                "responseSchema": _response_schema(fields),
            },
        }
        req = urllib.request.Request(
            self._url(model),
            data=json.dumps(payload).encode("utf-8"),
            headers={"Content-Type": "application/json"},
            method="POST",
        )
        with urllib.request.urlopen(req, timeout=self.timeout) as r:
            return r.read().decode("utf-8")

    def _call(self, model: str, prompt: str, fields: tuple[str, ...], schema: dict[str, Any]) -> dict[str, str]:
        if not self.api_key:
            raise AIServiceError("GEMINI_API_KEY is not set")
        body = self._post(model, prompt, fields)
        text = _extract_text(json.loads(body))
        result = json.loads(text.strip())
        validate(instance=result, schema=schema)
        return {name: result[name] for name in fields}

    async def generate_draft(self, topic: str) -> dict[str, str]:
        """Return ``title``, ``excerpt``, ``description`` and Markdown ``content``."""

        prompt = (
            f"Write a compelling and professional blog post about: {topic}.\n"
            "Return ONLY a JSON object with the following fields: "
            "title, excerpt, description, and content (Markdown)."
        )
        try:
            return await asyncio.to_thread(self._call, self.draft_model, prompt, DRAFT_FIELDS, DRAFT_SCHEMA)
        except AIServiceError as exc:
            print(f"[ERROR] AI blog generation failed: {exc}")
            raise GenerationError(str(exc)) from exc
        except _CALL_ERRORS as exc:
            print(f"[ERROR] AI blog generation failed: {exc}")
            raise GenerationError(f"Draft generation failed: {exc}") from exc

    async def translate(self, post: Mapping[str, Any], target_language: str) -> dict[str, str]:
        """Translate ``title``, ``excerpt`` and ``content`` into ``target_language``."""

        prompt = (
            f"Translate the following blog post content to {target_language}:\n"
            f"Title: {post.get('title') or ''}\n"
            f"Excerpt: {post.get('excerpt') or ''}\n"
            f"Content: {post.get('content') or ''}\n"
            "Return ONLY a JSON object with the following fields: title, excerpt, content."
        )
        try:
            return await asyncio.to_thread(
                self._call, self.translate_model, prompt, TRANSLATION_FIELDS, TRANSLATION_SCHEMA
            )
        except AIServiceError as exc:
            print(f"[ERROR] AI translation failed: {exc}")
            raise TranslationError(str(exc)) from exc
        except _CALL_ERRORS as exc:
            print(f"[ERROR] AI translation failed: {exc}")
            raise TranslationError(f"Translation to {target_language} failed: {exc}") from exc
