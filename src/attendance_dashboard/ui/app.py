from __future__ import annotations

import logging
from typing import Any

import customtkinter as ctk

from attendance_dashboard.config import settings as settings_module
from attendance_dashboard.config.settings import refresh_settings_from_store, user_settings_store
from attendance_dashboard.i18n import Translator
from attendance_dashboard.services import ApiClient, ApiIdentityProvider, ProfileService
from attendance_dashboard.ui.attendance_view import AttendanceView
from attendance_dashboard.ui.components.collapsible_nav import CollapsibleNav
from attendance_dashboard.ui.courses_view import CoursesView
from attendance_dashboard.ui.navigation import NAV_ITEMS
from attendance_dashboard.ui.settings_view import SettingsView
from attendance_dashboard.ui.theme import DASH_BG
from attendance_dashboard.utils.workers import spawn_worker

logger = logging.getLogger(__name__)


class DashboardApp:
    def __init__(self) -> None:
        settings = settings_module.settings
        ctk.set_appearance_mode(settings.appearance_mode)

        self._root = ctk.CTk()
        self._root.title(settings.app_name)
        self._root.geometry("1280x720")
        self._root.minsize(1080, 640)
        self._root.configure(fg_color=DASH_BG)

        self._root.grid_rowconfigure(0, weight=1)
        self._root.grid_columnconfigure(1, weight=1)

        self._nav: CollapsibleNav | None = None
        self._content: ctk.CTkFrame | None = None
        self._views: dict[str, ctk.CTkFrame] = {}
        self._current_view = "attendance"

        self._build()

    def _build(self) -> None:
        settings = settings_module.settings
        logger.info("Building dashboard with %r", settings)

        self._translate = Translator(settings.language)
        self._client = ApiClient(settings.api_base_url, timeout=settings.request_timeout)
        self._provider = ApiIdentityProvider(self._client, settings.access_token)
        self._profile_service = ProfileService(self._client, self._provider)

        self._nav = CollapsibleNav(
            self._root,
            items=NAV_ITEMS,
            on_select=self._show_view,
            translate=self._translate,
        )
        self._nav.grid(row=0, column=0, sticky="nsw")

        self._content = ctk.CTkFrame(self._root, corner_radius=0, fg_color=DASH_BG)
        self._content.grid(row=0, column=1, sticky="nsew")
        self._content.grid_rowconfigure(0, weight=1)
        self._content.grid_columnconfigure(0, weight=1)

        view_kwargs: dict[str, Any] = {
            "provider": self._provider,
            "translate": self._translate,
        }
        self._views = {
            "courses": CoursesView(self._content, client=self._client, **view_kwargs),
            "attendance": AttendanceView(self._content, client=self._client, **view_kwargs),
            "settings": SettingsView(
                self._content,
                store=user_settings_store,
                profile_service=self._profile_service,
                on_settings_saved=self._handle_settings_saved,
                **view_kwargs,
            ),
        }
        for view in self._views.values():
            view.grid(row=0, column=0, sticky="nsew")

        self._nav.select(self._current_view)

        spawn_worker(self._provider.refresh)

    def _teardown(self) -> None:
        for view in self._views.values():
            view.destroy()
        self._views = {}
        if self._content is not None:
            self._content.destroy()
        if self._nav is not None:
            self._nav.destroy()

    def _show_view(self, key: str) -> None:
        for view in self._views.values():
            view.grid_remove()
        if key in self._views:
            self._current_view = key
            self._views[key].grid()
            if key == "settings":
                self._views[key].refresh()

    def _handle_settings_saved(self, _updated: dict[str, object]) -> None:
        refresh_settings_from_store()
        self._current_view = "settings"
        # Views hold the old client and translator; rebuild after the current callback returns.
        self._root.after(0, self._rebuild)

    def _rebuild(self) -> None:
        self._teardown()
        self._build()

    def run(self) -> None:
        self._root.mainloop()
