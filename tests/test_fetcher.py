import http.client
import json
import pathlib
import tempfile
import unittest
import urllib.error
from unittest import mock

from microblog.fetcher import ContentFetcher, decode_body
from microblog.health import HealthReport


class FakeResponse:
    def __init__(self, body: str, status: int = 200) -> None:
        self.body = body.encode("utf-8")
        self.status = status
        self.headers = {}

    def read(self) -> bytes:
        return self.body

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        return False


POST_FILE = """# Blog posts

```json
{"posts": [
  {"id": "a", "title": "First", "publicationDate": "2024-01-01"},
  {"title_fr": "Deuxième", "readTimeMinutes": 0}
]}
```
"""


class TruncatedResponse(FakeResponse):
    def read(self) -> bytes:
        raise http.client.IncompleteRead(b"[{")


class DecodeBodyTests(unittest.TestCase):
    def test_stray_latin1_byte_keeps_the_payload(self):
        raw = '[{"id": "a", "title": "caf\xe9"}]'.encode("latin-1")
        text = decode_body(raw)
        self.assertTrue(text.startswith('[{"id": "a"'))
        self.assertIn("caf\ufffd", text)

    def test_utf16_with_bom(self):
        raw = '[{"id": "a"}]'.encode("utf-16")
        self.assertEqual(decode_body(raw), '[{"id": "a"}]')

    def test_utf8_bom_is_dropped(self):
        self.assertEqual(decode_body(b"\xef\xbb\xbf[1]"), "[1]")


class CacheBusterTests(unittest.TestCase):
    def test_query_parameter_always_increases(self):
        fetcher = ContentFetcher("https://example.com/post.md")
        first = fetcher.cache_busted_url()
        second = fetcher.cache_busted_url()
        self.assertTrue(first.startswith("https://example.com/post.md?t="))
        self.assertGreater(int(second.rsplit("=", 1)[1]), int(first.rsplit("=", 1)[1]))

    def test_existing_query_uses_ampersand(self):
        fetcher = ContentFetcher("https://example.com/post.md?ref=main")
        self.assertIn("?ref=main&t=", fetcher.cache_busted_url())


class FetchTests(unittest.TestCase):
    def test_fetch_parses_and_normalizes(self):
        fetcher = ContentFetcher("https://example.com/post.md")
        with mock.patch("urllib.request.urlopen", return_value=FakeResponse(POST_FILE)) as urlopen:
            posts = fetcher.fetch()

        self.assertEqual([post.id for post in posts], ["a", "post-1"])
        self.assertEqual(posts[1].title, "Deuxième")
        self.assertEqual(posts[1].read_time_minutes, 5)
        request = urlopen.call_args[0][0]
        self.assertIn("?t=", request.full_url)
        self.assertTrue(request.get_header("User-agent"))

    def test_http_error_returns_none_and_logs(self):
        fetcher = ContentFetcher("https://example.com/post.md")
        error = urllib.error.HTTPError("https://example.com/post.md", 500, "boom", None, None)
        with mock.patch("urllib.request.urlopen", side_effect=error), mock.patch("builtins.print") as fake_print:
            self.assertIsNone(fetcher.fetch())
        logged = " ".join(str(arg) for call in fake_print.call_args_list for arg in call.args)
        self.assertIn("Fetch error", logged)

    def test_non_2xx_status_is_a_failure(self):
        fetcher = ContentFetcher("https://example.com/post.md")
        with mock.patch("urllib.request.urlopen", return_value=FakeResponse(POST_FILE, status=204)), \
                mock.patch("builtins.print"):
            self.assertIsNone(fetcher.fetch())

    def test_network_error_returns_none(self):
        fetcher = ContentFetcher("https://example.com/post.md")
        with mock.patch("urllib.request.urlopen", side_effect=urllib.error.URLError("offline")), \
                mock.patch("builtins.print"):
            self.assertIsNone(fetcher.fetch())

    def test_truncated_body_returns_none(self):
        fetcher = ContentFetcher("https://example.com/post.md")
        with mock.patch("urllib.request.urlopen", return_value=TruncatedResponse("")), \
                mock.patch("builtins.print") as fake_print:
            self.assertIsNone(fetcher.fetch())
        self.assertIn("[WARN] Fetch error:", fake_print.call_args[0][0])

    def test_invalid_url_returns_none(self):
        fetcher = ContentFetcher("https://example.com/post.md")
        with mock.patch("urllib.request.urlopen", side_effect=http.client.InvalidURL("bad host")), \
                mock.patch("builtins.print"):
            self.assertIsNone(fetcher.fetch())
        with mock.patch("urllib.request.urlopen", side_effect=ValueError("unknown url type")), \
                mock.patch("builtins.print"):
            self.assertIsNone(fetcher.fetch())

    def test_non_utf8_byte_still_loads_posts(self):
        fetcher = ContentFetcher("https://example.com/post.md")
        response = FakeResponse("")
        response.body = '[{"id": "a", "title": "caf\xe9"}]'.encode("latin-1")
        with mock.patch("urllib.request.urlopen", return_value=response):
            posts = fetcher.fetch()
        self.assertEqual([post.id for post in posts], ["a"])

    def test_body_without_json_is_a_silent_no_op(self):
        fetcher = ContentFetcher("https://example.com/post.md")
        with mock.patch("urllib.request.urlopen", return_value=FakeResponse("# nothing yet")), \
                mock.patch("builtins.print"):
            self.assertIsNone(fetcher.fetch())

    def test_malformed_json_returns_none(self):
        fetcher = ContentFetcher("https://example.com/post.md")
        with mock.patch("urllib.request.urlopen", return_value=FakeResponse("```json\n[{\"id\": }]\n```")), \
                mock.patch("builtins.print"):
            self.assertIsNone(fetcher.fetch())


class HealthTests(unittest.TestCase):
    def test_failures_and_success_are_recorded(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            health = HealthReport("fetcher", health_dir=pathlib.Path(tmpdir))
            fetcher = ContentFetcher("https://example.com/post.md", health=health)

            with mock.patch("urllib.request.urlopen", side_effect=urllib.error.URLError("offline")), \
                    mock.patch("builtins.print"):
                fetcher.fetch()
            payload = json.loads(health.path.read_text(encoding="utf-8"))
            self.assertEqual(len(payload["errors"]), 1)
            self.assertIn("offline", payload["errors"][0])

            with mock.patch("urllib.request.urlopen", return_value=FakeResponse(POST_FILE)):
                fetcher.fetch()
            payload = json.loads(health.path.read_text(encoding="utf-8"))
            self.assertEqual(payload["errors"], [])
            self.assertEqual(payload["posts_count"], 2)
            self.assertTrue(payload["last_fetch"].endswith("Z"))


if __name__ == "__main__":
    unittest.main()
