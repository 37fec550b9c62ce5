from pathlib import Path
import pytest
from backend.engine import Engine

def _seed(tmp: Path) -> str:
    root = tmp / "Vault"
    root.mkdir()
    (root / "notes.md").write_text(
        "Completion engines are fun.\n"
        "Complete the sentence, see https://compiler.example.org for more.\n",
        encoding="utf-8",
    )
    return str(root)

@pytest.mark.e2e
def test_build_memory_complete(tmp_path: Path):
    roots = _seed(tmp_path)
    eng = Engine()
    try:
        eng.build(roots=[roots], db_dsn="memory://")
        rows = eng.complete("comp")
        # URL words are never scanned; shorter suggestion first
        assert [r.display_text for r in rows] == ["Complete", "Completion"]
        assert all(r.insertion_text == r.display_text for r in rows)
    finally:
        eng.shutdown()

@pytest.mark.e2e
def test_build_requires_a_source():
    eng = Engine()
    with pytest.raises(ValueError):
        eng.build(roots=[], wordlists=[])

@pytest.mark.e2e
def test_build_missing_root_raises(tmp_path: Path):
    eng = Engine()
    try:
        with pytest.raises(FileNotFoundError):
            eng.build(roots=[str(tmp_path / "nope")])
    finally:
        eng.shutdown()

@pytest.mark.e2e
def test_complete_before_build_raises():
    with pytest.raises(RuntimeError):
        Engine().complete("anything")

@pytest.mark.e2e
def test_front_matter_tags_come_first(tmp_path: Path):
    root = tmp_path / "Vault"
    root.mkdir()
    (root / "plan.md").write_text(
        "---\ntags: [roadmap]\n---\nThe roadmap and the road ahead.\n", encoding="utf-8"
    )
    eng = Engine()
    try:
        eng.build(roots=[str(root)])
        rows = eng.complete("road")
        assert [(r.display_text, r.insertion_text) for r in rows] == [
            ("roadmap", "roadmap, "), ("road", "road"),
        ]
        # tags of the edited note are picked up too
        eng.scan_document("---\ntags: [roadtrip]\n---\n", source="new.md")
        assert ("roadtrip", "roadtrip, ") in [(r.display_text, r.insertion_text) for r in eng.complete("road")]
    finally:
        eng.shutdown()
