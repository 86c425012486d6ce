from __future__ import annotations

from attendance_dashboard.utils.records import Emphasis, IconKind

# Core surfaces
DASH_BG = "#1E1E1E"
DASH_SURFACE = "#252526"
DASH_SURFACE_ALT = "#2D2D30"
DASH_CARD = "#2F2F33"
DASH_SIDEBAR = "#252526"

# Borders and outlines
DASH_BORDER = "#3C3C3C"
DASH_DIVIDER = "#2F2F2F"

# Accent colors
DASH_ACCENT = "#4F46E5"
DASH_ACCENT_HOVER = "#6366F1"

# Text colors
DASH_TEXT = "#F3F3F3"
DASH_TEXT_MUTED = "#9DA5B4"

# Status colors
DASH_SUCCESS = "#4ADE80"
DASH_DANGER = "#F87171"
DASH_WARNING = "#F48771"
DASH_NEUTRAL = "#9CA3AF"

STATUS_ICONS: dict[IconKind, str] = {
    IconKind.POSITIVE: "✔",
    IconKind.NEGATIVE: "✖",
    IconKind.NEUTRAL: "•",
}

STATUS_COLORS: dict[IconKind, str] = {
    IconKind.POSITIVE: DASH_SUCCESS,
    IconKind.NEGATIVE: DASH_DANGER,
    IconKind.NEUTRAL: DASH_NEUTRAL,
}

EMPHASIS_WEIGHTS: dict[Emphasis, str] = {
    Emphasis.NORMAL: "normal",
    Emphasis.HIGH: "bold",
}
