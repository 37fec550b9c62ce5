from __future__ import annotations
import argparse, json, sys
from backend import Engine, Settings, WordInsertionMode


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Word completion CLI (Engine-backed)")
    g = p.add_mutually_exclusive_group(required=True)
    g.add_argument("--build", action="store_true", help="Scan --roots and/or load --wordlist")
    g.add_argument("--load", action="store_true", help="Restore scanned words from --db")

    p.add_argument("--roots", nargs="+", default=[], help="Folders to scan for .md/.txt")
    p.add_argument("--wordlist", nargs="+", default=[], help="Word list files or folders")
    p.add_argument("--db", default=None, help='Word store DSN: "sqlite:///path" or "memory://"')
    p.add_argument("--repl", action="store_true", help="Interactive loop after init")
    p.add_argument("--q", default=None, help="Single query to run once")
    p.add_argument("--forget", nargs="+", default=[], metavar="WORD",
                   help="Remove scanned words (also from --db) before querying")
    p.add_argument("--mode", choices=[m.name for m in WordInsertionMode], default=None,
                   help="Word insertion mode")
    p.add_argument("--ignore-diacritics", action="store_true", help="Match 'cafe' against 'café'")
    p.add_argument("--min-trigger", type=int, default=None, help="Shortest query that triggers suggestions")
    p.add_argument("--json", action="store_true", help="Emit JSON rows")
    p.add_argument("--verbose", action="store_true")

    args = p.parse_args(argv)

    settings = Settings.from_dict({
        "word_insertion_mode": args.mode,
        "ignore_diacritics_when_filtering": args.ignore_diacritics or None,
        "min_word_trigger_length": args.min_trigger,
    })
    eng = Engine(settings)
    try:
        if args.build:
            if not args.roots and not args.wordlist:
                p.error("--build requires --roots and/or --wordlist")
            eng.build(roots=args.roots, wordlists=args.wordlist, db_dsn=args.db, verbose=args.verbose)
        else:
            eng.load(db_dsn=args.db, wordlists=args.wordlist, verbose=args.verbose)

        def run_query(q: str):
            rows = eng.complete(q)
            if args.json:
                print(json.dumps([r.to_dict() for r in rows], ensure_ascii=False, indent=2))
            else:
                if not rows:
                    print("(no matches)"); return
                for i, r in enumerate(rows, 1):
                    extra = f"  -> {r.insertion_text}" if r.insertion_text != r.display_text else ""
                    print(f"{i:<3} {r.display_text}{extra}")

        if args.forget:
            n = eng.forget(args.forget)
            print(f"forgot {n} of {len(args.forget)} word(s)", file=sys.stderr)

        if args.q:
            run_query(args.q)

        if args.repl:
            print("Type a partial word (empty line to exit).")
            while True:
                try:
                    q = input("> ").strip()
                except (EOFError, KeyboardInterrupt):
                    break
                if not q:
                    break
                run_query(q)

        return 0
    finally:
        eng.shutdown()


if __name__ == "__main__":
    raise SystemExit(main())
