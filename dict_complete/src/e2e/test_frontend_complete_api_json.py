from pathlib import Path
import pytest
from backend.engine import Engine
from frontend.web import app as flask_app
import frontend.web as webmod

def _seed(tmp: Path) -> str:
    root = tmp / "Vault"; root.mkdir()
    (root / "h.md").write_text("Complete completion compendium\n", encoding="utf-8")
    return str(root)

@pytest.fixture
def client(tmp_path: Path, monkeypatch):
    eng = Engine(); eng.build(roots=[_seed(tmp_path)], db_dsn="memory://")
    monkeypatch.setattr(webmod, "_engine", eng)
    yield flask_app.test_client()
    eng.shutdown()

@pytest.mark.e2e
def test_frontend_complete_api_json(client):
    rv = client.get("/api/complete?q=comp&k=2")
    assert rv.status_code == 200
    data = rv.get_json()
    assert data == [
        {"display_text": "Complete", "insertion_text": "Complete"},
        {"display_text": "completion", "insertion_text": "completion"},
    ]

@pytest.mark.e2e
def test_frontend_mode_override_append(client):
    rv = client.get("/api/complete?q=COMP&mode=IGNORE_CASE_APPEND&k=1")
    assert rv.status_code == 200
    assert rv.get_json() == [{"display_text": "COMPlete", "insertion_text": "COMPlete"}]

@pytest.mark.e2e
def test_frontend_match_case_mode(client):
    rv = client.get("/api/complete", query_string={"q": "Comp", "mode": "Match-Case & Replace"})
    assert [r["display_text"] for r in rv.get_json()] == ["Complete"]

@pytest.mark.e2e
def test_frontend_line_and_cursor(client):
    rv = client.get("/api/complete", query_string={"line": "I like compend", "cursor": 14})
    assert [r["display_text"] for r in rv.get_json()] == ["compendium"]

@pytest.mark.e2e
def test_frontend_empty_query_and_bad_mode(client):
    assert client.get("/api/complete?q=").get_json() == []
    assert client.get("/api/complete?q=comp&mode=shout").status_code == 400

@pytest.mark.e2e
def test_frontend_line_mode_reports_span(client):
    # "é" is not a word character by default, so the query is "compend" only
    rv = client.get("/api/complete", query_string={"line": "écompend", "cursor": 8})
    assert rv.get_json() == [
        {"display_text": "compendium", "insertion_text": "compendium", "start": 1, "end": 8},
    ]
    # plain q has no span
    assert "start" not in client.get("/api/complete?q=compend").get_json()[0]
