from pathlib import Path
import pytest
from backend.engine import Engine
from frontend.web import app as flask_app
import frontend.web as webmod

def _seed(tmp: Path) -> str:
    root = tmp / "Vault"; root.mkdir()
    (root / "y.md").write_text("health check line\n", encoding="utf-8")
    return str(root)

@pytest.mark.e2e
def test_frontend_health(tmp_path: Path, monkeypatch):
    client = flask_app.test_client()

    monkeypatch.setattr(webmod, "_engine", None)
    r = client.get("/api/health")
    assert r.status_code == 503
    assert client.get("/api/complete?q=heal").status_code == 503

    eng = Engine(); eng.build(roots=[_seed(tmp_path)], db_dsn="memory://")
    monkeypatch.setattr(webmod, "_engine", eng)
    r = client.get("/api/health")
    assert r.status_code == 200
    assert r.get_json() == {"ok": True}
    eng.shutdown()

@pytest.mark.e2e
def test_frontend_home_page_renders():
    r = flask_app.test_client().get("/")
    assert r.status_code == 200
    html = r.data.decode("utf-8", errors="ignore").lower()
    assert "word completion" in html and "/api/complete" in html
