from pathlib import Path
import pytest
from backend.engine import Engine

def _seed(tmp: Path) -> str:
    root = tmp / "Vault"
    root.mkdir()
    (root / "q.md").write_text("Questions deserve questionable answers.\n", encoding="utf-8")
    return str(root)

@pytest.mark.e2e
def test_persist_sqlite_and_reload(tmp_path: Path):
    roots = _seed(tmp_path)
    db = tmp_path / "words.sqlite"

    e1 = Engine()
    e1.build(roots=[roots], db_dsn=f"sqlite:///{db}")
    e1.shutdown()
    assert db.exists()

    # the scanned folder is gone; words must come from the store
    for f in Path(roots).iterdir():
        f.unlink()

    e2 = Engine()
    try:
        e2.load(db_dsn=f"sqlite:///{db}")
        rows = e2.complete("quest")
        assert [r.display_text for r in rows] == ["Questions", "questionable"]
    finally:
        e2.shutdown()

@pytest.mark.e2e
def test_scan_document_persists_new_words(tmp_path: Path):
    db = tmp_path / "words.sqlite"
    wl = tmp_path / "list.txt"
    wl.write_text("zebra\n", encoding="utf-8")

    e1 = Engine()
    e1.build(wordlists=[str(wl)], db_dsn=f"sqlite:///{db}")
    assert e1.scan_document("A zeppelin, Zurich", source="today.md") == 2
    assert e1.scan_document("zeppelin again", source="today.md") == 1  # only "again" is new
    e1.shutdown()

    e2 = Engine()
    try:
        e2.load(db_dsn=f"sqlite:///{db}")
        assert [r.display_text for r in e2.complete("zep")] == ["zeppelin"]
    finally:
        e2.shutdown()

@pytest.mark.e2e
def test_load_requires_dsn():
    with pytest.raises(ValueError):
        Engine().load(db_dsn=None)

@pytest.mark.e2e
def test_unsupported_dsn(tmp_path: Path):
    wl = tmp_path / "list.txt"
    wl.write_text("zebra\n", encoding="utf-8")
    with pytest.raises(ValueError):
        Engine().build(wordlists=[str(wl)], db_dsn="postgres://nowhere")

@pytest.mark.e2e
def test_forget_is_persisted(tmp_path: Path):
    roots = _seed(tmp_path)
    db = tmp_path / "words.sqlite"

    e1 = Engine()
    e1.build(roots=[roots], db_dsn=f"sqlite:///{db}")
    assert e1.forget(["questionable", "nothing"]) == 1
    assert [r.display_text for r in e1.complete("quest")] == ["Questions"]
    e1.shutdown()

    e2 = Engine()
    try:
        e2.load(db_dsn=f"sqlite:///{db}")
        assert [r.display_text for r in e2.complete("quest")] == ["Questions"]
    finally:
        e2.shutdown()
