from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, Sequence

import customtkinter as ctk

from attendance_dashboard.i18n import TranslateFn
from attendance_dashboard.ui.theme import (
    DASH_ACCENT,
    DASH_ACCENT_HOVER,
    DASH_BORDER,
    DASH_SIDEBAR,
    DASH_SURFACE_ALT,
    DASH_TEXT,
)

EXPANDED_WIDTH = 220
COLLAPSED_WIDTH = 84
ENTRY_HEIGHT = 44
SIDE_PADDING = 24


@dataclass(frozen=True)
class NavigationItem:
    key: str
    label_key: str
    icon_text: str
    pinned_bottom: bool = False


class CollapsibleNav(ctk.CTkFrame):
    """Sidebar of page entries; collapses to short text icons."""

    def __init__(
        self,
        master,
        items: Iterable[NavigationItem],
        on_select: Callable[[str], None],
        *,
        translate: TranslateFn,
    ) -> None:
        super().__init__(
            master,
            width=EXPANDED_WIDTH,
            corner_radius=0,
            fg_color=DASH_SIDEBAR,
            border_width=1,
            border_color=DASH_BORDER,
        )
        self._entries = tuple(items)
        self._on_select = on_select
        self._t = translate
        self._collapsed = False
        self._active: str | None = None
        self._buttons: dict[str, ctk.CTkButton] = {}

        self.grid_columnconfigure(0, weight=1)
        self.grid_propagate(False)

        self._collapse_toggle = ctk.CTkButton(
            self,
            text="☰",
            height=36,
            corner_radius=6,
            fg_color=DASH_SURFACE_ALT,
            hover_color=DASH_ACCENT_HOVER,
            text_color=DASH_TEXT,
            font=ctk.CTkFont(size=20, weight="bold"),
            border_width=1,
            border_color=DASH_BORDER,
            command=lambda: self.set_collapsed(not self._collapsed),
        )
        self._collapse_toggle.grid(row=0, column=0, padx=8, pady=(12, 6), sticky="ew")

        top = [entry for entry in self._entries if not entry.pinned_bottom]
        bottom = [entry for entry in self._entries if entry.pinned_bottom]
        next_row = self._place_entries(top, first_row=1, pady=4)
        # Spacer row pushes pinned entries to the bottom edge.
        self.grid_rowconfigure(next_row, weight=1)
        self._place_entries(bottom, first_row=next_row + 1, pady=12)

        self._apply_layout()

    @property
    def active(self) -> str | None:
        return self._active

    def select(self, key: str) -> None:
        button = self._buttons.get(key)
        if button is None:
            return
        if self._active is not None:
            self._buttons[self._active].configure(fg_color=DASH_SIDEBAR)
        button.configure(fg_color=DASH_ACCENT)
        self._active = key
        self._on_select(key)

    def set_collapsed(self, collapsed: bool) -> None:
        if collapsed == self._collapsed:
            return
        self._collapsed = collapsed
        self._apply_layout()
        self.update_idletasks()

    def _place_entries(self, entries: Sequence[NavigationItem], *, first_row: int, pady: int) -> int:
        font = ctk.CTkFont(size=16, weight="bold")
        row = first_row
        for entry in entries:
            button = ctk.CTkButton(
                self,
                text="",
                height=ENTRY_HEIGHT,
                fg_color=DASH_SIDEBAR,
                hover_color=DASH_SURFACE_ALT,
                text_color=DASH_TEXT,
                font=font,
                border_width=1,
                border_color=DASH_BORDER,
                command=lambda key=entry.key: self.select(key),
            )
            button.grid(row=row, column=0, padx=12, pady=pady, sticky="ew")
            self._buttons[entry.key] = button
            row += 1
        return row

    def _apply_layout(self) -> None:
        width = COLLAPSED_WIDTH if self._collapsed else EXPANDED_WIDTH
        self.configure(width=width)
        self._collapse_toggle.configure(text="➤" if self._collapsed else "☰", width=width - SIDE_PADDING)
        for entry in self._entries:
            if self._collapsed:
                options = {"text": entry.icon_text, "anchor": "center", "border_spacing": 0}
            else:
                options = {"text": self._t(entry.label_key), "anchor": "w", "border_spacing": 6}
            self._buttons[entry.key].configure(width=width - SIDE_PADDING, **options)
