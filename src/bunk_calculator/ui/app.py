from __future__ import annotations

import customtkinter as ctk

from loguru import logger

from bunk_calculator.config.session_store import SessionStore
from bunk_calculator.config.settings import settings
from bunk_calculator.services import SessionService
from bunk_calculator.ui.planner_view import PlannerView
from bunk_calculator.ui.theme import VS_BG


class BunkCalculatorApp:
    def __init__(self, store: SessionStore | None = None) -> None:
        try:
            from ctypes import windll
            windll.shcore.SetProcessDpiAwareness(1)
        except (ImportError, AttributeError):
            pass

        ctk.set_appearance_mode("dark")

        self._root = ctk.CTk()
        self._root.title(settings.app_name)
        self._root.geometry("1280x760")
        self._root.minsize(1080, 640)
        self._root.configure(fg_color=VS_BG)
        self._root.grid_rowconfigure(0, weight=1)
        self._root.grid_columnconfigure(0, weight=1)

        self._store = store or SessionStore(settings.session_file)
        self._service = SessionService(self._store)
        logger.info(f"Session file: {self._store.session_file}")

        self._view = PlannerView(self._root, self._service)
        self._view.grid(row=0, column=0, sticky="nsew")

        self._root.protocol("WM_DELETE_WINDOW", self._on_close)

    def _on_close(self) -> None:
        self._store.save(self._service.state)
        self._root.destroy()

    def run(self) -> None:
        self._root.mainloop()
