from __future__ import annotations
import argparse
from dataclasses import asdict
from flask import Flask, request, jsonify, Response
from backend.engine import Engine
from backend.config import TOP_K, MAX_TOP_K
from backend.context import extract_query
from backend.models import Settings

app = Flask(__name__)
_engine: Engine | None = None

# query-string keys that may override the engine settings per request
_SETTING_PARAMS = {
    "mode": "word_insertion_mode",
    "ignore_diacritics": "ignore_diacritics_when_filtering",
    "min_trigger": "min_word_trigger_length",
}


def _request_settings(base: Settings) -> Settings:
    overrides = {field: request.args[key] for key, field in _SETTING_PARAMS.items() if key in request.args}
    if not overrides:
        return base
    merged = asdict(base)
    merged.update(overrides)
    return Settings.from_dict(merged)


# ---------- API ----------
@app.get("/api/complete")
def api_complete():
    if _engine is None:
        return jsonify({"error": "engine not initialized"}), 503
    try:
        settings = _request_settings(_engine.settings)
    except ValueError as exc:
        return jsonify({"error": str(exc)}), 400

    q = request.args.get("q", "", type=str)
    line = request.args.get("line", None, type=str)
    span = None
    if not q and line is not None:
        cursor = request.args.get("cursor", len(line), type=int)
        ctx = extract_query(line, cursor, settings)
        if ctx is not None:
            q, span = ctx.query, {"start": ctx.start, "end": ctx.end}
    if not q:
        return jsonify([])

    k = max(1, min(MAX_TOP_K, request.args.get("k", TOP_K, type=int)))
    rows = _engine.complete(q, settings)[:k]
    # line mode: every row carries the [start, end) span of the line it replaces
    return jsonify([{**r.to_dict(), **(span or {})} for r in rows])


@app.get("/api/health")
def api_health():
    ok = _engine is not None
    return jsonify({"ok": ok}), (200 if ok else 503)


# ---------- UI ----------
_PAGE = r"""
<!doctype html>
<html lang="en">
<head>
<meta charset="utf-8" />
<title>Word completion</title>
<style>
body{ margin:0; font:15px/1.5 system-ui,sans-serif; background:#101418; color:#dde3ea; }
main{ display:grid; grid-template-columns:3fr 1fr; gap:12px; padding:16px; height:calc(100vh - 32px); }
textarea{ font:15px/1.5 ui-monospace,Menlo,Consolas,monospace; background:#0a0d10; color:inherit;
          border:1px solid #26303a; border-radius:8px; padding:12px; resize:none; }
aside{ border:1px solid #26303a; border-radius:8px; padding:8px 12px; overflow:auto; }
aside h2{ font-size:14px; margin:4px 0 8px; color:#8d99a6; }
aside ol{ margin:0; padding-left:20px; }
aside li:first-child{ color:#7fd6ff; }
header{ padding:12px 16px 0; display:flex; gap:16px; align-items:center; }
</style>
</head>
<body>
<header>
  <strong>Word completion</strong>
  <select id="mode">
    <option value="IGNORE_CASE_REPLACE">Ignore-Case &amp; Replace</option>
    <option value="MATCH_CASE_REPLACE">Match-Case &amp; Replace</option>
    <option value="IGNORE_CASE_APPEND">Ignore-Case &amp; Append</option>
  </select>
  <label><input id="dia" type="checkbox" /> ignore diacritics</label>
  <label><input id="tab" type="checkbox" /> Tab inserts</label>
  <span id="info">Enter inserts the first suggestion, Esc hides the list.</span>
</header>
<main>
  <textarea id="note" spellcheck="false" autofocus placeholder="Write here…"></textarea>
  <aside><h2>Suggestions</h2><ol id="list"></ol></aside>
</main>
<script>
const note = document.getElementById("note"), list = document.getElementById("list");
const mode = document.getElementById("mode"), dia = document.getElementById("dia");
const tab = document.getElementById("tab");
let best = null, bestLine = null, timer = null;

function caretLine(){
  const pos = note.selectionStart, text = note.value;
  const start = text.lastIndexOf("\n", pos - 1) + 1;
  let end = text.indexOf("\n", pos); if(end < 0) end = text.length;
  return {start, end, line: text.slice(start, end), cursor: pos - start};
}

async function refresh(){
  const c = caretLine();
  const params = new URLSearchParams({line: c.line, cursor: c.cursor, mode: mode.value,
                                      ignore_diacritics: dia.checked ? "1" : "0", k: "10"});
  const resp = await fetch("/api/complete?" + params);
  const rows = resp.ok ? await resp.json() : [];
  best = rows.length ? rows[0] : null; bestLine = c.line;
  list.replaceChildren(...rows.map(r => { const li = document.createElement("li"); li.textContent = r.display_text; return li; }));
}

note.addEventListener("keydown", ev => {
  const accept = ev.key === "Enter" || (ev.key === "Tab" && tab.checked);
  if(!accept || !best) return;
  const c = caretLine();
  if(c.line !== bestLine || c.cursor !== best.end) return;
  ev.preventDefault();
  note.setRangeText(best.insertion_text, c.start + best.start, c.start + best.end, "end");
  best = null; list.replaceChildren();
});
note.addEventListener("keyup", ev => { if(ev.key === "Escape"){ best = null; list.replaceChildren(); } });
note.addEventListener("input", () => { clearTimeout(timer); timer = setTimeout(refresh, 120); });
mode.addEventListener("change", refresh);
dia.addEventListener("change", refresh);
</script>
</body>
</html>
"""


@app.get("/")
def home():
    return Response(_PAGE, mimetype="text/html")


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Run Flask UI on top of Engine")
    mode = ap.add_mutually_exclusive_group(required=True)
    mode.add_argument("--build", action="store_true")
    mode.add_argument("--load", action="store_true")
    ap.add_argument("--roots", nargs="+", default=[])
    ap.add_argument("--wordlist", nargs="+", default=[])
    ap.add_argument("--db", dest="db", default=None)  # DSN: "sqlite:///path" or "memory://"
    ap.add_argument("--host", default="127.0.0.1")
    ap.add_argument("--port", type=int, default=8000)
    ap.add_argument("--verbose", action="store_true")
    args = ap.parse_args(argv)

    global _engine
    _engine = Engine()
    if args.build:
        if not args.roots and not args.wordlist:
            ap.error("--build requires --roots and/or --wordlist")
        _engine.build(roots=args.roots, wordlists=args.wordlist, db_dsn=args.db, verbose=args.verbose)
    else:
        _engine.load(db_dsn=args.db, wordlists=args.wordlist, verbose=args.verbose)

    try:
        app.run(host=args.host, port=args.port, debug=args.verbose)
    finally:
        _engine.shutdown()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
