from __future__ import annotations

# Core surfaces
VS_BG = "#1E1E1E"
VS_SURFACE = "#252526"
VS_SURFACE_ALT = "#2D2D30"
VS_CARD = "#2F2F33"

# Borders and outlines
VS_BORDER = "#3C3C3C"
VS_DIVIDER = "#2F2F2F"

# Accent colors
VS_ACCENT = "#0E639C"
VS_ACCENT_HOVER = "#1177BB"

# Text colors
VS_TEXT = "#F3F3F3"
VS_TEXT_MUTED = "#9DA5B4"

# Status colors
VS_SAFE = "#22D3EE"
VS_DANGER = "#F87171"
VS_WARNING = "#F48771"

# Weightage chart
CHART_FACE = "#252526"
CHART_EDGE = "#1F2937"
CHART_PALETTE: tuple[str, ...] = (
    "#4C5C96",
    "#22D3EE",
    "#F87171",
    "#9CA3AF",
    "#B08A4A",
    "#3C8A8A",
    "#6F8A4A",
    "#8A4A6B",
    "#7C3AED",
    "#FB923C",
    "#FDE047",
    "#10B981",
)
