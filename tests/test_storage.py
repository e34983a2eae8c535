from microblog.storage import LANGUAGE_KEY, POSTS_KEY, LocalStore


def test_values_survive_a_reload(tmp_path):
    path = tmp_path / "store" / "store.json"
    store = LocalStore(path)
    store.set(POSTS_KEY, [{"id": "1", "title": "Saved"}])
    store.set(LANGUAGE_KEY, "en")

    reloaded = LocalStore(path)
    assert reloaded.get(POSTS_KEY) == [{"id": "1", "title": "Saved"}]
    assert reloaded.get(LANGUAGE_KEY) == "en"
    assert LANGUAGE_KEY in reloaded


def test_missing_file_is_empty(tmp_path):
    store = LocalStore(tmp_path / "nothing.json")
    assert store.get(POSTS_KEY) is None
    assert store.get(POSTS_KEY, []) == []


def test_corrupt_file_reads_as_empty(tmp_path, capsys):
    path = tmp_path / "store.json"
    path.write_text("{not json", encoding="utf-8")
    store = LocalStore(path)
    assert store.get(POSTS_KEY) is None
    assert "[WARN] Ignoring unreadable store" in capsys.readouterr().out


def test_remove(tmp_path):
    path = tmp_path / "store.json"
    store = LocalStore(path)
    store.set(LANGUAGE_KEY, "fr")
    store.remove(LANGUAGE_KEY)
    store.remove(LANGUAGE_KEY)
    assert LANGUAGE_KEY not in LocalStore(path)
