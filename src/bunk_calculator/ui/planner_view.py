from __future__ import annotations

from tkinter import StringVar
from typing import Any, Callable

import customtkinter as ctk
import tkinter.messagebox as messagebox
from loguru import logger

from bunk_calculator.models import DurationMode
from bunk_calculator.services import (
    EmptySubjectNameError,
    Projection,
    SessionService,
    SubjectInputError,
    SubjectMetrics,
)
from bunk_calculator.services.calculator import (
    FIELD_CRITERION,
    FIELD_DURATION,
    FIELD_LECTURES,
    FIELD_SUBJECT_NAME,
    FIELD_WORKING_DAYS,
    STATUS_SAFE,
)
from bunk_calculator.ui.theme import (
    VS_ACCENT,
    VS_ACCENT_HOVER,
    VS_BG,
    VS_BORDER,
    VS_CARD,
    VS_DANGER,
    VS_DIVIDER,
    VS_SAFE,
    VS_SURFACE,
    VS_SURFACE_ALT,
    VS_TEXT,
    VS_TEXT_MUTED,
    VS_WARNING,
)
from bunk_calculator.ui.row_edit import PendingRename
from bunk_calculator.ui.weightage_chart import WeightageChart

TOAST_DURATION_MS = 3000
MODE_LABELS = {"Weeks": DurationMode.WEEKS, "Days": DurationMode.DAYS, "Months": DurationMode.MONTHS}
RESULT_COLUMNS = (
    ("Subject", 3),
    ("Total lectures", 2),
    ("Min. required", 2),
    ("Max bunks", 2),
    ("Weekly skip limit", 2),
    ("", 1),
)


class PlannerView(ctk.CTkFrame):
    """Configuration form, subject table, and weightage chart for one session."""

    def __init__(self, master: Any, service: SessionService) -> None:
        super().__init__(master, fg_color=VS_BG)
        self._service = service

        state = service.state
        configuration = state.configuration
        self._criterion_var = StringVar(value=configuration.attendance_criterion)
        self._working_days_var = StringVar(value=configuration.working_days)
        self._duration_var = StringVar(value=configuration.duration_value)
        self._mode_var = StringVar(value=self._mode_label(configuration.duration_mode))
        self._duration_label_var = StringVar(value=configuration.duration_mode.label)
        self._subject_name_var = StringVar()
        self._lectures_var = StringVar(value=str(state.last_lectures_per_week))
        self._toast_var = StringVar(value="")

        self._error_labels: dict[str, ctk.CTkLabel] = {}
        self._entries: dict[str, ctk.CTkEntry] = {}
        self._result_rows: list[ctk.CTkFrame] = []
        self._toast_job: str | None = None
        self._suspend_traces = False

        self._build_layout()

        self._criterion_var.trace_add("write", self._on_config_write(service.set_attendance_criterion, self._criterion_var))
        self._working_days_var.trace_add("write", self._on_config_write(service.set_working_days, self._working_days_var))
        self._duration_var.trace_add("write", self._on_config_write(service.set_duration_value, self._duration_var))

        self.render()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def render(self, projection: Projection | None = None) -> None:
        projection = projection if projection is not None else self._service.projection()

        for field in (FIELD_CRITERION, FIELD_DURATION, FIELD_WORKING_DAYS):
            self._set_field_error(field, projection.error_for(field))

        self._render_rows(projection)
        self._chart.render(self._service.chart_data())

    # ------------------------------------------------------------------
    # Layout helpers
    # ------------------------------------------------------------------
    def _build_layout(self) -> None:
        self.grid_columnconfigure(0, weight=3)
        self.grid_columnconfigure(1, weight=2)
        self.grid_rowconfigure(1, weight=1)

        self._build_config_card().grid(row=0, column=0, sticky="nsew", padx=(24, 12), pady=(24, 12))
        self._build_subject_card().grid(row=0, column=1, sticky="nsew", padx=(12, 24), pady=(24, 12))
        self._build_results_card().grid(row=1, column=0, sticky="nsew", padx=(24, 12), pady=(12, 12))

        self._chart = WeightageChart(self)
        self._chart.grid(row=1, column=1, sticky="nsew", padx=(12, 24), pady=(12, 12))

        self._toast_label = ctk.CTkLabel(
            self,
            textvariable=self._toast_var,
            text_color=VS_TEXT,
            fg_color=VS_SURFACE_ALT,
            corner_radius=10,
        )

    def _build_config_card(self) -> ctk.CTkFrame:
        card = ctk.CTkFrame(self, fg_color=VS_SURFACE, corner_radius=18)
        card.grid_columnconfigure((0, 1, 2), weight=1)

        ctk.CTkLabel(
            card,
            text="Semester setup",
            font=ctk.CTkFont(size=22, weight="bold"),
            text_color=VS_TEXT,
        ).grid(row=0, column=0, columnspan=3, sticky="w", padx=20, pady=(18, 8))

        ctk.CTkSegmentedButton(
            card,
            values=list(MODE_LABELS),
            variable=self._mode_var,
            command=self._handle_mode_change,
            selected_color=VS_ACCENT,
            selected_hover_color=VS_ACCENT_HOVER,
        ).grid(row=1, column=0, columnspan=3, sticky="w", padx=20, pady=(0, 12))

        self._build_field(card, column=0, label="Attendance criterion (%)", variable=self._criterion_var, field=FIELD_CRITERION)
        self._build_field(card, column=1, label="Working days / week", variable=self._working_days_var, field=FIELD_WORKING_DAYS)
        self._build_field(card, column=2, label=self._duration_label_var, variable=self._duration_var, field=FIELD_DURATION)
        return card

    def _build_subject_card(self) -> ctk.CTkFrame:
        card = ctk.CTkFrame(self, fg_color=VS_SURFACE, corner_radius=18)
        card.grid_columnconfigure((0, 1), weight=1)

        ctk.CTkLabel(
            card,
            text="Add subject",
            font=ctk.CTkFont(size=22, weight="bold"),
            text_color=VS_TEXT,
        ).grid(row=0, column=0, columnspan=2, sticky="w", padx=20, pady=(18, 8))

        name_entry = self._build_field(card, column=0, label="Subject name", variable=self._subject_name_var, field=FIELD_SUBJECT_NAME, row=2)
        lectures_entry = self._build_field(card, column=1, label="Lectures / week", variable=self._lectures_var, field=FIELD_LECTURES, row=2)
        name_entry.bind("<Return>", lambda _event: self._handle_add_subject())
        lectures_entry.bind("<Return>", lambda _event: self._handle_add_subject())

        ctk.CTkButton(
            card,
            text="Add subject",
            text_color=VS_TEXT,
            fg_color=VS_ACCENT,
            hover_color=VS_ACCENT_HOVER,
            command=self._handle_add_subject,
        ).grid(row=5, column=0, columnspan=2, sticky="ew", padx=20, pady=(4, 18))
        return card

    def _build_results_card(self) -> ctk.CTkFrame:
        card = ctk.CTkFrame(self, fg_color=VS_SURFACE, corner_radius=18)
        card.grid_columnconfigure(0, weight=1)
        card.grid_rowconfigure(2, weight=1)

        header = ctk.CTkFrame(card, fg_color="transparent")
        header.grid(row=0, column=0, sticky="ew", padx=20, pady=(18, 8))
        header.grid_columnconfigure(0, weight=1)

        ctk.CTkLabel(
            header,
            text="Bunk budget",
            font=ctk.CTkFont(size=22, weight="bold"),
            text_color=VS_TEXT,
        ).grid(row=0, column=0, sticky="w")

        self._clear_button = ctk.CTkButton(
            header,
            text="Clear all",
            width=120,
            text_color=VS_TEXT,
            fg_color=VS_SURFACE_ALT,
            hover_color=VS_DIVIDER,
            command=self._handle_clear_all,
        )
        self._clear_button.grid(row=0, column=1, sticky="e")

        column_header = ctk.CTkFrame(card, fg_color="transparent")
        column_header.grid(row=1, column=0, sticky="ew", padx=28, pady=(0, 4))
        header_font = ctk.CTkFont(size=14, weight="bold")
        for index, (title, weight) in enumerate(RESULT_COLUMNS):
            column_header.grid_columnconfigure(index, weight=weight, uniform="result_cols")
            ctk.CTkLabel(column_header, text=title, font=header_font, text_color=VS_TEXT_MUTED).grid(
                row=0, column=index, sticky="w" if index == 0 else "ew"
            )

        self._results_list = ctk.CTkScrollableFrame(card, label_text="", fg_color=VS_SURFACE_ALT)
        self._results_list.grid(row=2, column=0, sticky="nsew", padx=20, pady=(0, 18))
        self._results_list.grid_columnconfigure(0, weight=1)

        self._empty_label = ctk.CTkLabel(
            self._results_list,
            text="No subjects yet. Add one to see how many lectures you can skip.",
            text_color=VS_TEXT_MUTED,
        )
        return card

    def _build_field(
        self,
        parent: ctk.CTkFrame,
        *,
        column: int,
        label: str | StringVar,
        variable: StringVar,
        field: str,
        row: int = 2,
    ) -> ctk.CTkEntry:
        label_kwargs = {"textvariable": label} if isinstance(label, StringVar) else {"text": label}
        ctk.CTkLabel(parent, text_color=VS_TEXT, font=ctk.CTkFont(size=15), **label_kwargs).grid(
            row=row, column=column, sticky="w", padx=20, pady=(0, 4)
        )

        entry = ctk.CTkEntry(
            parent,
            textvariable=variable,
            fg_color=VS_BG,
            border_color=VS_BORDER,
            text_color=VS_TEXT,
        )
        entry.grid(row=row + 1, column=column, sticky="ew", padx=20)

        error_label = ctk.CTkLabel(parent, text="", text_color=VS_WARNING, font=ctk.CTkFont(size=13))
        error_label.grid(row=row + 2, column=column, sticky="w", padx=20, pady=(0, 8))

        self._entries[field] = entry
        self._error_labels[field] = error_label
        return entry

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------
    def _render_rows(self, projection: Projection) -> None:
        for row_frame in self._result_rows:
            row_frame.destroy()
        self._result_rows.clear()

        has_subjects = bool(self._service.state.subjects)
        if has_subjects:
            self._clear_button.grid()
        else:
            self._clear_button.grid_remove()

        if not has_subjects:
            self._empty_label.grid(row=0, column=0, sticky="w", padx=12, pady=12)
            return
        self._empty_label.grid_remove()

        if not projection.is_valid:
            return

        for index, metrics in enumerate(projection.metrics):
            self._result_rows.append(self._build_result_row(index, metrics))

    def _build_result_row(self, index: int, metrics: SubjectMetrics) -> ctk.CTkFrame:
        subject = metrics.subject
        projection = metrics.projection

        row_frame = ctk.CTkFrame(self._results_list, fg_color=VS_CARD, corner_radius=10)
        row_frame.grid(row=index, column=0, sticky="ew", padx=8, pady=4)
        for column, (_title, weight) in enumerate(RESULT_COLUMNS):
            row_frame.grid_columnconfigure(column, weight=weight, uniform="result_cols")

        name_var = StringVar(value=subject.name)
        name_entry = ctk.CTkEntry(
            row_frame,
            textvariable=name_var,
            fg_color=VS_CARD,
            border_width=0,
            text_color=VS_TEXT,
        )
        name_entry.grid(row=0, column=0, sticky="ew", padx=(8, 4), pady=8)

        pending = PendingRename(subject.subject_id, subject.name)

        def commit(_event: Any = None) -> None:
            if pending.claim(name_var.get()):
                self._handle_rename(pending.subject_id, name_var.get())

        name_entry.bind("<Return>", commit)
        name_entry.bind("<FocusOut>", commit)
        name_entry.bind("<Escape>", lambda _event: self._cancel_rename(name_var, subject.name))

        cells = (
            (projection.total_lectures, VS_TEXT),
            (projection.required_lectures, VS_TEXT),
            (projection.max_bunkable, self._status_color(projection.bunkable_status)),
            (projection.weekly_skip_limit, self._status_color(projection.skip_limit_status)),
        )
        for column, (value, color) in enumerate(cells, start=1):
            ctk.CTkLabel(row_frame, text=str(value), text_color=color).grid(row=0, column=column, sticky="ew")

        ctk.CTkButton(
            row_frame,
            text="×",
            width=32,
            text_color=VS_TEXT,
            fg_color=VS_SURFACE_ALT,
            hover_color=VS_DANGER,
            command=lambda: self._handle_remove(subject.subject_id),
        ).grid(row=0, column=len(cells) + 1, padx=(4, 8))
        return row_frame

    @staticmethod
    def _status_color(status: str) -> str:
        return VS_SAFE if status == STATUS_SAFE else VS_DANGER

    @staticmethod
    def _mode_label(mode: DurationMode) -> str:
        return next(label for label, value in MODE_LABELS.items() if value is mode)

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------
    def _on_config_write(self, setter: Callable[[str], Projection], variable: StringVar) -> Callable[..., None]:
        def _handler(*_args: Any) -> None:
            if self._suspend_traces:
                return
            self.render(setter(variable.get()))

        return _handler

    def _handle_mode_change(self, label: str) -> None:
        mode = MODE_LABELS[label]
        restored = self._service.set_duration_mode(mode)
        self._duration_label_var.set(mode.label)

        self._suspend_traces = True
        try:
            self._duration_var.set(restored)
        finally:
            self._suspend_traces = False
        self.render()

    def _handle_add_subject(self) -> None:
        self._set_field_error(FIELD_SUBJECT_NAME, None)
        self._set_field_error(FIELD_LECTURES, None)
        try:
            projection = self._service.add_subject(self._subject_name_var.get(), self._lectures_var.get())
        except SubjectInputError as exc:
            for error in exc.errors:
                self._set_field_error(error.field, error.message)
            return

        self._subject_name_var.set("")
        self._lectures_var.set(str(self._service.state.last_lectures_per_week))
        self.render(projection)
        self._show_toast("Subject added!")
        self._entries[FIELD_SUBJECT_NAME].focus_set()

    def _handle_rename(self, subject_id: str, new_name: str) -> None:
        try:
            index = self._service.index_of(subject_id)
        except KeyError:
            return

        try:
            projection = self._service.rename_subject(index, new_name)
        except EmptySubjectNameError as exc:
            self._show_toast(str(exc), error=True)
            self.after(0, self.render)
            return

        self._show_toast("Subject updated!")
        self.after(0, lambda: self.render(projection))

    def _cancel_rename(self, variable: StringVar, previous: str) -> None:
        variable.set(previous)
        self.focus_set()

    def _handle_remove(self, subject_id: str) -> None:
        try:
            index = self._service.index_of(subject_id)
        except KeyError:
            return
        self.render(self._service.remove_subject(index))
        self._show_toast("Subject removed.")

    def _handle_clear_all(self) -> None:
        if not self._service.state.subjects:
            return
        confirmed = messagebox.askyesno(
            title="Clear all subjects",
            message="Are you sure you want to clear all subjects? This action cannot be undone.",
        )
        if not confirmed:
            return
        self.render(self._service.clear_subjects())
        self._show_toast("All subjects cleared.")

    def _set_field_error(self, field: str, message: str | None) -> None:
        label = self._error_labels.get(field)
        entry = self._entries.get(field)
        if label is None or entry is None:
            return
        label.configure(text=message or "")
        entry.configure(border_color=VS_WARNING if message else VS_BORDER)

    def _show_toast(self, message: str, *, error: bool = False) -> None:
        if self._toast_job is not None:
            self.after_cancel(self._toast_job)
        logger.info(message)
        self._toast_var.set(message)
        self._toast_label.configure(text_color=VS_DANGER if error else VS_TEXT)
        self._toast_label.place(relx=0.98, rely=0.98, anchor="se")
        self._toast_label.lift()
        self._toast_job = self.after(TOAST_DURATION_MS, self._hide_toast)

    def _hide_toast(self) -> None:
        self._toast_job = None
        self._toast_label.place_forget()
        self._toast_var.set("")
