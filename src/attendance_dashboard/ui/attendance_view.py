from __future__ import annotations

from typing import Any, Callable

import customtkinter as ctk

from attendance_dashboard.i18n import TranslateFn
from attendance_dashboard.models import AttendanceRecord, CourseOption, LoadState
from attendance_dashboard.services import ApiClient, AttendancePipeline, IdentityProvider
from attendance_dashboard.ui.theme import (
    DASH_ACCENT,
    DASH_ACCENT_HOVER,
    DASH_BG,
    DASH_BORDER,
    DASH_CARD,
    DASH_DANGER,
    DASH_SURFACE,
    DASH_SURFACE_ALT,
    DASH_TEXT,
    DASH_TEXT_MUTED,
    EMPHASIS_WEIGHTS,
    STATUS_COLORS,
    STATUS_ICONS,
)
from attendance_dashboard.utils.records import classify_status
from attendance_dashboard.utils.workers import TkDispatcher


class AttendanceView(ctk.CTkFrame):
    """Course picker plus the attendance records of the selected course."""

    def __init__(
        self,
        master: Any,
        *,
        client: ApiClient,
        provider: IdentityProvider,
        translate: TranslateFn,
    ) -> None:
        super().__init__(master, fg_color=DASH_BG)
        self._t = translate
        self._provider = provider
        self._dispatch = TkDispatcher(self)
        self._options_by_label: dict[str, CourseOption] = {}

        self.pipeline = AttendancePipeline(
            client,
            translate=translate,
            dispatch=self._dispatch,
            on_courses=self._render_courses,
            on_attendance=self._render_attendance,
            on_selection=self._render_selection,
        )

        self._build_layout()
        self._render_courses(self.pipeline.courses.state)
        self._render_attendance(self.pipeline.attendance.state)

        self._unsubscribe = provider.subscribe(
            lambda user, token: self._dispatch(lambda: self.pipeline.update_identity(user, token))
        )
        if provider.is_ready:
            self.pipeline.update_identity(provider.user, provider.credential)

    def destroy(self) -> None:
        self._unsubscribe()
        super().destroy()

    # ------------------------------------------------------------------
    # Layout helpers
    # ------------------------------------------------------------------
    def _build_layout(self) -> None:
        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(2, weight=1)

        title = ctk.CTkLabel(
            self,
            text=self._t("attendance.title"),
            font=ctk.CTkFont(size=28, weight="bold"),
            text_color=DASH_TEXT,
        )
        title.grid(row=0, column=0, sticky="w", padx=28, pady=(28, 12))

        picker = ctk.CTkFrame(self, fg_color=DASH_SURFACE, corner_radius=12)
        picker.grid(row=1, column=0, sticky="ew", padx=24, pady=(0, 12))
        picker.grid_columnconfigure(1, weight=1)

        ctk.CTkLabel(
            picker,
            text=self._t("attendance.selectCourseLabel"),
            text_color=DASH_TEXT,
            font=ctk.CTkFont(size=16),
        ).grid(row=0, column=0, sticky="w", padx=(20, 12), pady=16)

        self._course_status_label = ctk.CTkLabel(picker, text="", text_color=DASH_TEXT_MUTED, justify="left")

        self._course_menu = ctk.CTkOptionMenu(
            picker,
            values=[],
            width=360,
            fg_color=DASH_SURFACE_ALT,
            button_color=DASH_ACCENT,
            button_hover_color=DASH_ACCENT_HOVER,
            text_color=DASH_TEXT,
            command=self._handle_course_chosen,
        )
        self._clear_button = ctk.CTkButton(
            picker,
            text="✕",
            width=36,
            fg_color=DASH_SURFACE_ALT,
            hover_color=DASH_BORDER,
            text_color=DASH_TEXT,
            command=self.pipeline.clear_selection,
        )

        self._courses_retry_button = self._retry_button(picker, self.pipeline.reload_courses)

        self._records_panel = ctk.CTkFrame(self, fg_color=DASH_SURFACE, corner_radius=12)
        self._records_panel.grid(row=2, column=0, sticky="nsew", padx=24, pady=(0, 24))
        self._records_panel.grid_columnconfigure(0, weight=1)
        self._records_panel.grid_rowconfigure(1, weight=1)

        self._records_title = ctk.CTkLabel(
            self._records_panel,
            text="",
            font=ctk.CTkFont(size=20, weight="bold"),
            text_color=DASH_TEXT,
        )
        self._records_title.grid(row=0, column=0, sticky="w", padx=20, pady=(16, 8))

        self._records_body = ctk.CTkScrollableFrame(self._records_panel, fg_color=DASH_SURFACE)
        self._records_body.grid(row=1, column=0, sticky="nsew", padx=12, pady=(0, 12))
        self._records_body.grid_columnconfigure((0, 1, 2), weight=1)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------
    def _render_courses(self, state: LoadState[Any]) -> None:
        self._course_menu.grid_remove()
        self._clear_button.grid_remove()
        self._course_status_label.grid_remove()
        self._courses_retry_button.grid_remove()

        if state.is_loading:
            self._show_course_message(self._t("attendance.loadingCourses"), DASH_TEXT_MUTED)
            return
        if state.is_failed:
            self._show_course_message(f"⚠ {state.error}", DASH_DANGER, columnspan=1)
            if self.pipeline.identity is not None:
                self._courses_retry_button.grid(row=0, column=2, sticky="e", padx=(8, 20), pady=16)
            return
        if state.is_idle:
            self._show_course_message(self._t("loading"), DASH_TEXT_MUTED)
            return

        options: tuple[CourseOption, ...] = state.value or ()
        self._options_by_label = {option.label: option for option in options}
        if not options:
            self._show_course_message(self._t("attendance.noCoursesFound"), DASH_TEXT_MUTED)
            return

        self._course_menu.configure(values=list(self._options_by_label))
        self._render_selection(self.pipeline.selection.current)
        self._course_menu.grid(row=0, column=1, sticky="w", pady=16)
        self._clear_button.grid(row=0, column=2, sticky="w", padx=(8, 20), pady=16)

    def _show_course_message(self, message: str, color: str, *, columnspan: int = 2) -> None:
        self._course_status_label.configure(text=message, text_color=color)
        self._course_status_label.grid(row=0, column=1, columnspan=columnspan, sticky="w", pady=16)

    def _render_selection(self, option: CourseOption | None) -> None:
        if option is None:
            self._course_menu.set(self._t("attendance.selectCoursePlaceholder"))
            self._records_panel.grid_remove()
            return
        self._course_menu.set(option.label)
        self._records_title.configure(text=f"{option.label} - {self._t('attendance.listTitle')}")
        self._records_panel.grid()

    def _render_attendance(self, state: LoadState[Any]) -> None:
        for child in self._records_body.winfo_children():
            child.destroy()

        if self.pipeline.selection.current is None:
            return
        if state.is_loading:
            self._records_message(self._t("attendance.loadingAttendance"), DASH_TEXT_MUTED)
            return
        if state.is_failed:
            self._records_message(f"⚠ {state.error}", DASH_DANGER)
            self._retry_button(self._records_body, self.pipeline.reload_attendance).grid(
                row=1, column=0, sticky="w", padx=12, pady=(0, 12)
            )
            return

        records: tuple[AttendanceRecord, ...] = state.value or ()
        if not records:
            self._records_message(self._t("attendance.noAttendanceData"), DASH_TEXT_MUTED)
            return

        headers = ("attendance.table.date", "attendance.table.lesson", "attendance.table.status")
        for column, key in enumerate(headers):
            ctk.CTkLabel(
                self._records_body,
                text=self._t(key).upper(),
                text_color=DASH_TEXT_MUTED,
                font=ctk.CTkFont(size=12, weight="bold"),
            ).grid(row=0, column=column, sticky="w", padx=12, pady=(4, 8))

        for row, record in enumerate(records, start=1):
            presentation = classify_status(record.status, self._t)
            row_color = DASH_CARD if row % 2 else DASH_SURFACE
            cells = (
                (record.date.isoformat(), DASH_TEXT, "normal"),
                (str(record.lesson_number), DASH_TEXT_MUTED, "normal"),
                (
                    f"{STATUS_ICONS[presentation.icon]}  {presentation.text}",
                    STATUS_COLORS[presentation.icon],
                    EMPHASIS_WEIGHTS[presentation.emphasis],
                ),
            )
            for column, (text, color, weight) in enumerate(cells):
                ctk.CTkLabel(
                    self._records_body,
                    text=text,
                    text_color=color,
                    fg_color=row_color,
                    anchor="w",
                    font=ctk.CTkFont(size=14, weight=weight),
                ).grid(row=row, column=column, sticky="ew", padx=0, pady=1, ipadx=12)

    def _records_message(self, message: str, color: str) -> None:
        ctk.CTkLabel(
            self._records_body,
            text=message,
            text_color=color,
            wraplength=640,
            justify="left",
        ).grid(row=0, column=0, columnspan=3, sticky="w", padx=12, pady=12)

    def _retry_button(self, parent: Any, command: Callable[[], None]) -> ctk.CTkButton:
        return ctk.CTkButton(
            parent,
            text=self._t("retry"),
            width=120,
            fg_color=DASH_ACCENT,
            hover_color=DASH_ACCENT_HOVER,
            text_color=DASH_TEXT,
            command=command,
        )

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------
    def _handle_course_chosen(self, label: str) -> None:
        option = self._options_by_label.get(label)
        if option is not None:
            self.pipeline.select(option)
