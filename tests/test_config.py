import pathlib

import pytest

from microblog.config import DEFAULT_PAGE_SIZE, DEFAULT_SOURCE_URL, SiteConfig


def test_defaults():
    config = SiteConfig()
    assert config.source_url == DEFAULT_SOURCE_URL
    assert config.page_size == 6
    assert config.poll_interval == 10
    assert config.default_language == "fr"
    assert config.languages == ("en", "fr")
    assert len(config.fallback_images) == 4


def test_from_env_reads_knobs():
    config = SiteConfig.from_env(
        {
            "MICROBLOG_SOURCE_URL": "https://example.com/posts.md",
            "POSTS_PER_PAGE": "9",
            "POLL_INTERVAL": "30",
            "DEFAULT_LANGUAGE": "en",
            "MICROBLOG_HEALTH_DIR": "/tmp/health",
        }
    )
    assert config.source_url == "https://example.com/posts.md"
    assert config.page_size == 9
    assert config.poll_interval == 30
    assert config.default_language == "en"
    assert config.health_dir == pathlib.Path("/tmp/health")


def test_invalid_int_falls_back_with_warning(capsys):
    config = SiteConfig.from_env({"POSTS_PER_PAGE": "lots"})
    assert config.page_size == DEFAULT_PAGE_SIZE
    assert "[WARN] Invalid POSTS_PER_PAGE='lots'; falling back to 6" in capsys.readouterr().out


def test_overrides_win_over_environment():
    config = SiteConfig.from_env({"POSTS_PER_PAGE": "9"}, page_size=2)
    assert config.page_size == 2


def test_unknown_default_language_is_replaced():
    config = SiteConfig(default_language="de")
    assert config.default_language == "en"


def test_invalid_values_raise():
    with pytest.raises(ValueError):
        SiteConfig(page_size=0)
    with pytest.raises(ValueError):
        SiteConfig(fallback_images=())


def test_text_falls_back_to_english_then_key():
    config = SiteConfig()
    assert config.text("fr", "continueReading") != config.text("en", "continueReading")
    config.translations["fr"].pop("continueReading")
    assert config.text("fr", "continueReading") == config.translations["en"]["continueReading"]
    assert config.text("fr", "noSuchKey") == "noSuchKey"


def test_translation_tables_are_copied():
    first = SiteConfig()
    first.translations["en"]["continueReading"] = "changed"
    assert SiteConfig().translations["en"]["continueReading"] != "changed"
