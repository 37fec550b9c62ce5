from pathlib import Path
import pytest
from backend.engine import Engine
from backend.models import Settings

def _seed(tmp: Path) -> str:
    root = tmp / "Vault"; root.mkdir()
    (root / "short.md").write_text("cobalt copper cotton\n", encoding="utf-8")
    return str(root)

@pytest.mark.e2e
def test_empty_and_short_query(tmp_path: Path):
    roots = _seed(tmp_path)
    eng = Engine()
    try:
        eng.build(roots=[roots], db_dsn="memory://")
        assert eng.complete("") == []
        # default trigger length is 3
        assert eng.complete("co") == []
        assert len(eng.complete("cop")) == 1
    finally:
        eng.shutdown()

@pytest.mark.e2e
def test_trigger_length_is_configurable(tmp_path: Path):
    roots = _seed(tmp_path)
    eng = Engine(Settings(min_word_trigger_length=1))
    try:
        eng.build(roots=[roots])
        assert [r.display_text for r in eng.complete("c")] == ["cobalt", "copper", "cotton"]
    finally:
        eng.shutdown()
