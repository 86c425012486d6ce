from __future__ import annotations

from tkinter import StringVar
from typing import Any, Callable
from urllib.parse import urlparse

import customtkinter as ctk

from attendance_dashboard.config.user_settings_store import DEFAULT_SETTINGS, UserSettingsStore
from attendance_dashboard.i18n import SUPPORTED_LANGUAGES, TranslateFn
from attendance_dashboard.models import UserProfile
from attendance_dashboard.services import ApiError, IdentityProvider, NotAuthenticatedError, ProfileService
from attendance_dashboard.ui.theme import (
    DASH_ACCENT,
    DASH_ACCENT_HOVER,
    DASH_BG,
    DASH_BORDER,
    DASH_DIVIDER,
    DASH_SUCCESS,
    DASH_SURFACE,
    DASH_SURFACE_ALT,
    DASH_TEXT,
    DASH_TEXT_MUTED,
    DASH_WARNING,
)
from attendance_dashboard.utils.workers import TkDispatcher, spawn_worker


class SettingsView(ctk.CTkFrame):
    """Profile form gated on identity readiness, plus connection preferences."""

    def __init__(
        self,
        master: Any,
        *,
        store: UserSettingsStore,
        provider: IdentityProvider,
        profile_service: ProfileService,
        translate: TranslateFn,
        on_settings_saved: Callable[[dict[str, Any]], None] | None = None,
    ) -> None:
        super().__init__(master, fg_color=DASH_BG)
        self._store = store
        self._provider = provider
        self._profile_service = profile_service
        self._t = translate
        self._on_settings_saved = on_settings_saved
        self._dispatch = TkDispatcher(self)
        self._saving = False

        self._first_name_var = StringVar()
        self._last_name_var = StringVar()
        self._api_url_var = StringVar()
        self._language_var = StringVar()

        self._profile_status_label: ctk.CTkLabel | None = None
        self._connection_status_label: ctk.CTkLabel | None = None

        self._build_layout()
        self.refresh()

        self._unsubscribe = provider.subscribe(
            lambda user, _token: self._dispatch(lambda: self._apply_user(user))
        )
        if provider.is_ready:
            self._apply_user(provider.user)

    def destroy(self) -> None:
        self._unsubscribe()
        super().destroy()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def refresh(self) -> None:
        """Reload the connection inputs from the underlying store."""

        data = self._store.data
        self._api_url_var.set(str(data.get("api_url") or DEFAULT_SETTINGS["api_url"]))
        self._language_var.set(str(data.get("language") or DEFAULT_SETTINGS["language"]))
        self._set_status(self._connection_status_label, "")

    # ------------------------------------------------------------------
    # Layout helpers
    # ------------------------------------------------------------------
    def _build_layout(self) -> None:
        self.grid_rowconfigure(0, weight=1)
        self.grid_columnconfigure(0, weight=1)

        container = ctk.CTkScrollableFrame(self, fg_color=DASH_SURFACE, corner_radius=18)
        container.grid(row=0, column=0, padx=24, pady=24, sticky="nsew")
        container.grid_columnconfigure(1, weight=1)

        title = ctk.CTkLabel(
            container,
            text=self._t("settings.title"),
            font=ctk.CTkFont(size=28, weight="bold"),
            text_color=DASH_TEXT,
        )
        title.grid(row=0, column=0, columnspan=2, sticky="w", padx=28, pady=(28, 16))

        row_index = self._section_heading(container, row=1, text=self._t("settings.profileTitle"))

        self._profile_loading_label = ctk.CTkLabel(
            container,
            text=self._t("loading"),
            text_color=DASH_TEXT_MUTED,
        )
        self._profile_loading_label.grid(row=row_index, column=0, columnspan=2, sticky="w", padx=28, pady=(0, 12))
        row_index += 1

        self._profile_widgets: list[Any] = []
        row_index = self._build_text_field(
            container,
            row=row_index,
            label=self._t("settings.label.firstName"),
            variable=self._first_name_var,
            widgets=self._profile_widgets,
        )
        row_index = self._build_text_field(
            container,
            row=row_index,
            label=self._t("settings.label.lastName"),
            variable=self._last_name_var,
            widgets=self._profile_widgets,
        )

        self._save_profile_button = ctk.CTkButton(
            container,
            text=self._t("settings.button.save"),
            width=180,
            text_color=DASH_TEXT,
            fg_color=DASH_ACCENT,
            hover_color=DASH_ACCENT_HOVER,
            command=self._handle_save_profile,
        )
        self._save_profile_button.grid(row=row_index, column=1, sticky="e", padx=28, pady=(6, 8))
        self._profile_widgets.append(self._save_profile_button)
        row_index += 1

        self._profile_status_label = ctk.CTkLabel(container, text="", text_color=DASH_TEXT_MUTED, wraplength=640, justify="left")
        self._profile_status_label.grid(row=row_index, column=0, columnspan=2, sticky="w", padx=28, pady=(0, 12))
        row_index += 1

        self._set_profile_enabled(False)

        row_index = self._section_heading(container, row=row_index, text=self._t("settings.connectionTitle"))
        row_index = self._build_text_field(
            container,
            row=row_index,
            label=self._t("settings.label.apiUrl"),
            variable=self._api_url_var,
            width=420,
        )

        language_label = ctk.CTkLabel(container, text=self._t("settings.label.language"), text_color=DASH_TEXT, font=ctk.CTkFont(size=18))
        language_label.grid(row=row_index, column=0, sticky="w", padx=28, pady=(0, 14))
        language_menu = ctk.CTkOptionMenu(
            container,
            values=list(SUPPORTED_LANGUAGES),
            variable=self._language_var,
            width=120,
            fg_color=DASH_SURFACE_ALT,
            button_color=DASH_ACCENT,
            button_hover_color=DASH_ACCENT_HOVER,
            text_color=DASH_TEXT,
        )
        language_menu.grid(row=row_index, column=1, sticky="w", padx=(0, 28), pady=(0, 14))
        row_index += 1

        buttons_row = ctk.CTkFrame(container, fg_color=DASH_SURFACE)
        buttons_row.grid(row=row_index, column=0, columnspan=2, sticky="ew", padx=28, pady=(6, 8))
        buttons_row.grid_columnconfigure(0, weight=1)

        reset_button = ctk.CTkButton(
            buttons_row,
            text="↺",
            width=48,
            text_color=DASH_TEXT,
            fg_color=DASH_SURFACE_ALT,
            hover_color=DASH_DIVIDER,
            command=self._handle_reset_connection,
        )
        reset_button.grid(row=0, column=1, padx=(0, 8))

        save_button = ctk.CTkButton(
            buttons_row,
            text=self._t("settings.button.saveConnection"),
            width=180,
            text_color=DASH_TEXT,
            fg_color=DASH_ACCENT,
            hover_color=DASH_ACCENT_HOVER,
            command=self._handle_save_connection,
        )
        save_button.grid(row=0, column=2)
        row_index += 1

        self._connection_status_label = ctk.CTkLabel(container, text="", text_color=DASH_TEXT_MUTED, wraplength=640, justify="left")
        self._connection_status_label.grid(row=row_index, column=0, columnspan=2, sticky="w", padx=28, pady=(0, 24))

    def _section_heading(self, parent: Any, *, row: int, text: str) -> int:
        heading = ctk.CTkLabel(parent, text=text, text_color=DASH_TEXT, font=ctk.CTkFont(size=20, weight="bold"))
        heading.grid(row=row, column=0, columnspan=2, sticky="w", padx=28, pady=(12, 10))
        return row + 1

    def _build_text_field(
        self,
        parent: Any,
        *,
        row: int,
        label: str,
        variable: StringVar,
        width: int = 280,
        widgets: list[Any] | None = None,
    ) -> int:
        field_label = ctk.CTkLabel(parent, text=label, text_color=DASH_TEXT, font=ctk.CTkFont(size=18))
        field_label.grid(row=row, column=0, sticky="w", padx=28, pady=(0, 14))

        entry = ctk.CTkEntry(
            parent,
            textvariable=variable,
            width=width,
            fg_color=DASH_BG,
            border_color=DASH_BORDER,
            text_color=DASH_TEXT,
        )
        entry.grid(row=row, column=1, sticky="w", padx=(0, 28), pady=(0, 14))
        if widgets is not None:
            widgets.append(entry)
        return row + 1

    # ------------------------------------------------------------------
    # Profile
    # ------------------------------------------------------------------
    def _apply_user(self, user: UserProfile | None) -> None:
        if self._saving:
            return
        self._profile_loading_label.grid_remove()
        if user is None:
            self._set_profile_enabled(False)
            self._set_status(self._profile_status_label, self._t("settings.error.notAuthenticated"), tone="warning")
            return
        self._first_name_var.set(user.first_name)
        self._last_name_var.set(user.last_name)
        self._set_profile_enabled(True)

    def _set_profile_enabled(self, enabled: bool) -> None:
        state = "normal" if enabled else "disabled"
        for widget in self._profile_widgets:
            widget.configure(state=state)

    def _handle_save_profile(self) -> None:
        errors: list[str] = []
        first_name = self._required(self._first_name_var.get(), self._t("settings.label.firstName"), errors)
        last_name = self._required(self._last_name_var.get(), self._t("settings.label.lastName"), errors)
        if errors:
            self._set_status(self._profile_status_label, "\n".join(errors), tone="warning")
            return

        self._saving = True
        self._set_profile_enabled(False)
        self._set_status(self._profile_status_label, self._t("loading"))

        def _worker() -> None:
            error_message: str | None = None
            try:
                self._profile_service.update_profile(first_name, last_name)
            except NotAuthenticatedError:
                error_message = self._t("settings.error.notAuthenticated")
            except ApiError as exc:
                error_message = exc.detail or self._t("settings.error.updateFailed")

            def _finalize() -> None:
                self._saving = False
                self._apply_user(self._provider.user)
                if error_message:
                    self._set_profile_enabled(self._provider.credential is not None)
                    self._set_status(self._profile_status_label, error_message, tone="warning")
                else:
                    self._set_status(self._profile_status_label, self._t("settings.success.updateMessage"), tone="success")

            self._dispatch(_finalize)

        spawn_worker(_worker)

    def _required(self, raw: str, field_name: str, errors: list[str]) -> str:
        value = raw.strip()
        if not value:
            errors.append(self._t("settings.error.required", field=field_name))
        return value

    # ------------------------------------------------------------------
    # Connection
    # ------------------------------------------------------------------
    def _handle_reset_connection(self) -> None:
        self._api_url_var.set(str(DEFAULT_SETTINGS["api_url"]))
        self._language_var.set(str(DEFAULT_SETTINGS["language"]))

    def _handle_save_connection(self) -> None:
        api_url = self._api_url_var.get().strip()
        parsed = urlparse(api_url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            self._set_status(self._connection_status_label, f"{self._t('settings.label.apiUrl')}: {api_url!r}", tone="warning")
            return

        updated = self._store.update(api_url=api_url, language=self._language_var.get())
        self.refresh()
        self._set_status(self._connection_status_label, self._t("settings.success.connectionSaved"), tone="success")

        if self._on_settings_saved is not None:
            self._on_settings_saved(updated)

    def _set_status(self, label: ctk.CTkLabel | None, message: str, *, tone: str = "info") -> None:
        if label is None:
            return
        color_map = {
            "info": DASH_TEXT_MUTED,
            "success": DASH_SUCCESS,
            "warning": DASH_WARNING,
        }
        label.configure(text=message, text_color=color_map.get(tone, DASH_TEXT_MUTED))
