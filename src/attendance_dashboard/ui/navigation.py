from __future__ import annotations

from attendance_dashboard.ui.components.collapsible_nav import NavigationItem


NAV_ITEMS: tuple[NavigationItem, ...] = (
    NavigationItem(
        key="courses",
        label_key="nav.courses",
        icon_text="MC",
    ),
    NavigationItem(
        key="attendance",
        label_key="nav.attendance",
        icon_text="AT",
    ),
    NavigationItem(
        key="settings",
        label_key="nav.settings",
        icon_text="ST",
        pinned_bottom=True,
    ),
)
