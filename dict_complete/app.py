# app.py
# CustomTkinter note editor with live word completion (dark theme).
# - Build the dictionary from a notes folder and/or a word list file.
# - Loading runs on a background thread; results come back via after().
# - Suggestions follow the word under the cursor; Enter (and Tab, if enabled)
#   inserts the first one, Esc hides them.

from __future__ import annotations
import threading
from typing import List, Optional, Sequence

import tkinter.filedialog as fd
import tkinter.messagebox as mb
import customtkinter as ctk

# Project imports (pip install -e . or PYTHONPATH=src)
import frontend
from backend.context import QueryContext, apply_suggestion, extract_query
from backend.models import Settings, Suggestion, WordInsertionMode

MAX_SHOWN = 12
DEBOUNCE_MS = 120


class EditorApp(ctk.CTk):
    """Plain-text editor; a side panel lists completions for the current word."""

    def __init__(self) -> None:
        super().__init__()

        ctk.set_appearance_mode("dark")
        ctk.set_default_color_theme("blue")

        self.title("Notes with completion")
        self.geometry("900x560")
        self.minsize(700, 420)

        self.settings = Settings()
        self._ready = False
        self._loader: Optional[threading.Thread] = None
        self._pending: Optional[str] = None
        self._ctx: Optional[QueryContext] = None
        self._shown: List[Suggestion] = []

        mono = ctk.CTkFont(family="Cascadia Mono, Menlo, Consolas, Courier New", size=14)

        self.grid_columnconfigure(0, weight=3)
        self.grid_columnconfigure(1, weight=1)
        self.grid_rowconfigure(1, weight=1)

        self._toolbar()

        self.editor = ctk.CTkTextbox(self, wrap="word", font=mono, undo=True)
        self.editor.grid(row=1, column=0, sticky="nsew", padx=(10, 5), pady=5)
        self.editor.bind("<KeyRelease>", self._on_key)
        self.editor.bind("<Return>", self._accept_first)
        self.editor.bind("<Tab>", self._on_tab)
        self.editor.bind("<ButtonRelease-1>", self._on_key)

        self.panel = ctk.CTkTextbox(self, wrap="none", font=mono, state="disabled")
        self.panel.grid(row=1, column=1, sticky="nsew", padx=(5, 10), pady=5)

        self.status = ctk.CTkLabel(self, text="Open a notes folder or a word list to start.", anchor="w")
        self.status.grid(row=2, column=0, columnspan=2, sticky="ew", padx=12, pady=(0, 8))

        self.protocol("WM_DELETE_WINDOW", self._on_close)

    def _toolbar(self) -> None:
        bar = ctk.CTkFrame(self, corner_radius=8)
        bar.grid(row=0, column=0, columnspan=2, sticky="ew", padx=10, pady=(10, 5))

        buttons = (
            ("Notes folder", self._pick_folder),
            ("Word list", self._pick_wordlist),
            ("Learn this note", self._learn_note),
        )
        for col, (label, cmd) in enumerate(buttons):
            ctk.CTkButton(bar, text=label, width=110, command=cmd).grid(row=0, column=col, padx=(8, 0), pady=8)

        self.mode_menu = ctk.CTkOptionMenu(
            bar, values=[m.value for m in WordInsertionMode], command=lambda _v: self._options_changed()
        )
        self.mode_menu.set(self.settings.word_insertion_mode.value)
        self.mode_menu.grid(row=0, column=3, padx=(16, 0), pady=8)

        self.diacritics = ctk.CTkCheckBox(bar, text="Ignore diacritics", command=self._options_changed)
        self.diacritics.grid(row=0, column=4, padx=8, pady=8)

        self.tab_inserts = ctk.CTkCheckBox(bar, text="Tab inserts", command=self._options_changed)
        if self.settings.enable_tab_key_for_completion_insertion:
            self.tab_inserts.select()
        self.tab_inserts.grid(row=0, column=5, padx=8, pady=8)

        self.spinner = ctk.CTkProgressBar(bar, mode="indeterminate", width=80)
        self.spinner.grid(row=0, column=6, padx=8, pady=8)

    # ---- dictionary loading ----

    def _pick_folder(self) -> None:
        path = fd.askdirectory(title="Notes folder")
        if path:
            self._load(roots=[path])

    def _pick_wordlist(self) -> None:
        path = fd.askopenfilename(title="Word list", filetypes=[("Text files", "*.txt"), ("All files", "*.*")])
        if path:
            self._load(wordlists=[path])

    def _load(self, roots: Sequence[str] = (), wordlists: Sequence[str] = ()) -> None:
        if self._loader is not None and self._loader.is_alive():
            mb.showinfo("Busy", "Still building the previous dictionary.")
            return
        self._ready = False
        self.status.configure(text="Building dictionary…")
        self.spinner.start()

        def work() -> None:
            try:
                n = frontend.initialize(roots=roots, wordlists=wordlists, settings=self.settings)
            except (OSError, ValueError) as exc:
                self.after(0, lambda e=exc: self._loaded(None, e))
            else:
                self.after(0, lambda: self._loaded(n, None))

        self._loader = threading.Thread(target=work, daemon=True)
        self._loader.start()

    def _loaded(self, n_words: Optional[int], error: Optional[Exception]) -> None:
        self.spinner.stop()
        if error is not None:
            self.status.configure(text=f"Load failed: {error}")
            mb.showerror("Load error", str(error))
            return
        self._ready = True
        self.status.configure(text=f"{n_words:,} words in the dictionary.")
        self.editor.focus_set()

    def _learn_note(self) -> None:
        if not self._ready:
            return
        n = frontend.scan_document(self.editor.get("1.0", "end"), source="<editor>")
        self.status.configure(text=f"Learned {n} new word(s) from the note.")

    # ---- completion ----

    def _options_changed(self) -> None:
        self.settings.word_insertion_mode = WordInsertionMode.parse(self.mode_menu.get())
        self.settings.ignore_diacritics_when_filtering = bool(self.diacritics.get())
        self.settings.enable_tab_key_for_completion_insertion = bool(self.tab_inserts.get())
        self._refresh()

    def _on_key(self, ev=None) -> None:
        if self._pending is not None:
            self.after_cancel(self._pending)
            self._pending = None
        if ev is not None and getattr(ev, "keysym", "") in ("Return", "Tab", "Escape"):
            self._dismiss()
            return
        self._pending = self.after(DEBOUNCE_MS, self._refresh)

    def _cursor_line(self) -> tuple[int, int, str]:
        row, col = (int(x) for x in self.editor.index("insert").split("."))
        return row, col, self.editor.get(f"{row}.0", f"{row}.end")

    def _refresh(self) -> None:
        self._pending = None
        self._ctx, self._shown = None, []
        if self._ready:
            _row, col, line = self._cursor_line()
            self._ctx = extract_query(line, col, self.settings)
            if self._ctx is not None:
                self._shown = frontend.complete(self._ctx.query, self.settings)[:MAX_SHOWN]
        self._show(self._shown)

    def _show(self, items: List[Suggestion]) -> None:
        self.panel.configure(state="normal")
        self.panel.delete("1.0", "end")
        for i, s in enumerate(items):
            hint = "\u23ce " if i == 0 else "  "
            self.panel.insert("end", f"{hint}{s.display_text}\n")
        self.panel.configure(state="disabled")

    def _on_tab(self, ev=None):
        if not self.settings.enable_tab_key_for_completion_insertion:
            return None  # plain tab
        return self._accept_first(ev)

    def _accept_first(self, _ev=None):
        row, col, line = self._cursor_line()
        if self._ctx is None or not self._shown or col != self._ctx.end:
            return None  # plain key

        new_line, cursor = apply_suggestion(line, self._ctx, self._shown[0])
        self.editor.delete(f"{row}.0", f"{row}.end")
        self.editor.insert(f"{row}.0", new_line)
        self.editor.mark_set("insert", f"{row}.{cursor}")
        self._dismiss()
        return "break"

    def _dismiss(self) -> None:
        self._ctx, self._shown = None, []
        self._show([])

    def _on_close(self) -> None:
        frontend.shutdown()
        self.destroy()


if __name__ == "__main__":
    EditorApp().mainloop()
