from __future__ import annotations

from itertools import cycle, islice
from typing import Any

import customtkinter as ctk
from matplotlib.backends.backend_tkagg import FigureCanvasTkAgg
from matplotlib.figure import Figure

from bunk_calculator.services import ChartData
from bunk_calculator.ui.theme import (
    CHART_EDGE,
    CHART_FACE,
    CHART_PALETTE,
    VS_SURFACE,
    VS_TEXT,
    VS_TEXT_MUTED,
)


def slice_colors(count: int) -> list[str]:
    return list(islice(cycle(CHART_PALETTE), count))


def legend_labels(data: ChartData) -> list[str]:
    return [
        f"{item.label}: {item.value} lectures/week ({item.share:.1f}%)"
        for item in data.slices()
    ]


class WeightageChart(ctk.CTkFrame):
    """Pie chart of weekly lectures per subject.

    Each render tears down the previous figure and canvas and builds a new one.
    """

    def __init__(self, master: Any) -> None:
        super().__init__(master, fg_color=VS_SURFACE, corner_radius=18)
        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(1, weight=1)

        ctk.CTkLabel(
            self,
            text="Lecture weightage",
            font=ctk.CTkFont(size=20, weight="bold"),
            text_color=VS_TEXT,
        ).grid(row=0, column=0, sticky="w", padx=20, pady=(16, 4))

        self._figure: Figure | None = None
        self._canvas: FigureCanvasTkAgg | None = None

    def render(self, data: ChartData | None) -> None:
        self._teardown()
        if data is None:
            self.grid_remove()
            return

        figure = Figure(figsize=(5, 4), dpi=100, facecolor=CHART_FACE)
        axes = figure.add_subplot(111)
        axes.set_facecolor(CHART_FACE)
        wedges, _ = axes.pie(
            data.values,
            colors=slice_colors(len(data.values)),
            startangle=90,
            counterclock=False,
            wedgeprops={"edgecolor": CHART_EDGE, "linewidth": 1},
        )
        axes.axis("equal")
        legend = axes.legend(
            wedges,
            legend_labels(data),
            loc="upper center",
            bbox_to_anchor=(0.5, 0.0),
            frameon=False,
            fontsize=9,
        )
        for text in legend.get_texts():
            text.set_color(VS_TEXT_MUTED)
        figure.tight_layout()

        canvas = FigureCanvasTkAgg(figure, master=self)
        canvas.draw()
        canvas.get_tk_widget().grid(row=1, column=0, sticky="nsew", padx=12, pady=(0, 12))

        self._figure = figure
        self._canvas = canvas
        self.grid()

    def _teardown(self) -> None:
        if self._canvas is not None:
            self._canvas.get_tk_widget().destroy()
            self._canvas = None
        if self._figure is not None:
            self._figure.clear()
            self._figure = None

    def destroy(self) -> None:  # pragma: no cover - lifecycle hook
        self._teardown()
        super().destroy()
