from __future__ import annotations

from typing import Any

import customtkinter as ctk

from attendance_dashboard.i18n import TranslateFn
from attendance_dashboard.models import Course, Identity, LoadState, UserProfile
from attendance_dashboard.services import (
    ApiClient,
    ApiError,
    CollectionLoader,
    CourseCatalog,
    IdentityProvider,
    MissingIdentityError,
    resolve_identity,
)
from attendance_dashboard.ui.theme import (
    DASH_ACCENT,
    DASH_ACCENT_HOVER,
    DASH_BG,
    DASH_BORDER,
    DASH_CARD,
    DASH_DANGER,
    DASH_SUCCESS,
    DASH_SURFACE,
    DASH_TEXT,
    DASH_TEXT_MUTED,
)
from attendance_dashboard.utils.workers import TkDispatcher, spawn_worker


class CoursesView(ctk.CTkFrame):
    """Enrolled courses and the courses the student can still enrol in."""

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
        self._catalog = CourseCatalog(client)
        self._dispatch = TkDispatcher(self)
        self._identity: Identity | None = None
        self._credential: str | None = None
        self._enrolling_course_id: int | None = None

        self._enrolled = CollectionLoader(
            self._catalog.enrolled_courses,
            failure_key="courses.error.fetchEnrolled",
            translate=translate,
            dispatch=self._dispatch,
            on_change=lambda _state: self._render(),
        )
        self._all = CollectionLoader(
            self._catalog.all_courses,
            failure_key="courses.error.fetchAll",
            translate=translate,
            dispatch=self._dispatch,
            on_change=lambda _state: self._render(),
        )

        self._build_layout()
        self._render()

        self._unsubscribe = provider.subscribe(
            lambda user, token: self._dispatch(lambda: self._handle_identity(user, token))
        )
        if provider.is_ready:
            self._handle_identity(provider.user, provider.credential)

    def destroy(self) -> None:
        self._unsubscribe()
        super().destroy()

    def refresh(self) -> None:
        self._enrolled.reload()
        self._all.reload()

    # ------------------------------------------------------------------
    # Layout helpers
    # ------------------------------------------------------------------
    def _build_layout(self) -> None:
        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(0, weight=1)

        self._body = ctk.CTkScrollableFrame(self, fg_color=DASH_BG)
        self._body.grid(row=0, column=0, sticky="nsew", padx=12, pady=12)
        self._body.grid_columnconfigure(0, weight=1)

        self._feedback_label = ctk.CTkLabel(self, text="", text_color=DASH_TEXT_MUTED)
        self._feedback_label.grid(row=1, column=0, sticky="w", padx=28, pady=(0, 12))

    # ------------------------------------------------------------------
    # Identity
    # ------------------------------------------------------------------
    def _handle_identity(self, user: UserProfile | None, credential: str | None) -> None:
        try:
            identity = resolve_identity(user)
        except MissingIdentityError:
            self._identity, self._credential = None, None
            self._fail_both(self._t("attendance.error.missingStudentId"))
            return

        if identity is None or not credential:
            self._identity, self._credential = None, None
            self._fail_both(self._t("courses.error.missingAuth"))
            return

        if (identity, credential) == (self._identity, self._credential):
            return
        self._identity = identity
        self._credential = credential
        self._enrolled.load(identity, credential)
        self._all.load(identity, credential)

    def _fail_both(self, message: str) -> None:
        self._enrolled.fail(message)
        self._all.fail(message)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------
    def _render(self) -> None:
        for child in self._body.winfo_children():
            child.destroy()

        enrolled_state: LoadState[Any] = self._enrolled.state
        all_state: LoadState[Any] = self._all.state

        row = self._section_title(0, self._t("courses.myCoursesTitle"))
        enrolled: tuple[Course, ...] = tuple(enrolled_state.value or ()) if enrolled_state.is_ready else ()
        row = self._render_section(
            row,
            enrolled_state,
            enrolled,
            empty_key="courses.noCourses",
            enrollable=False,
        )

        row = self._section_title(row, self._t("courses.enroll.title"))
        if all_state.is_ready and enrolled_state.is_ready:
            available = tuple(CourseCatalog.available_courses(all_state.value or (), enrolled))
        else:
            available = ()
        self._render_section(
            row,
            all_state if not all_state.is_ready else enrolled_state,
            available,
            empty_key="courses.enroll.noAvailableCourses",
            enrollable=True,
        )

    def _section_title(self, row: int, text: str) -> int:
        ctk.CTkLabel(
            self._body,
            text=text,
            font=ctk.CTkFont(size=22, weight="bold"),
            text_color=DASH_TEXT,
        ).grid(row=row, column=0, sticky="w", padx=16, pady=(20, 8))
        return row + 1

    def _render_section(
        self,
        row: int,
        state: LoadState[Any],
        courses: tuple[Course, ...],
        *,
        empty_key: str,
        enrollable: bool,
    ) -> int:
        if state.is_loading or state.is_idle:
            return self._message(row, self._t("loading"), DASH_TEXT_MUTED)
        if state.is_failed:
            row = self._message(row, f"⚠ {state.error}", DASH_DANGER)
            if self._identity is not None:
                ctk.CTkButton(
                    self._body,
                    text=self._t("retry"),
                    width=120,
                    fg_color=DASH_ACCENT,
                    hover_color=DASH_ACCENT_HOVER,
                    text_color=DASH_TEXT,
                    command=self.refresh,
                ).grid(row=row, column=0, sticky="w", padx=16, pady=(0, 6))
                row += 1
            return row
        if not courses:
            return self._message(row, self._t(empty_key), DASH_TEXT_MUTED)

        for course in courses:
            self._course_card(row, course, enrollable=enrollable)
            row += 1
        return row

    def _message(self, row: int, text: str, color: str) -> int:
        ctk.CTkLabel(self._body, text=text, text_color=color, wraplength=640, justify="left").grid(
            row=row, column=0, sticky="w", padx=16, pady=6
        )
        return row + 1

    def _course_card(self, row: int, course: Course, *, enrollable: bool) -> None:
        card = ctk.CTkFrame(self._body, fg_color=DASH_CARD, corner_radius=10, border_width=1, border_color=DASH_BORDER)
        card.grid(row=row, column=0, sticky="ew", padx=16, pady=6)
        card.grid_columnconfigure(0, weight=1)

        ctk.CTkLabel(
            card,
            text=course.name,
            font=ctk.CTkFont(size=17, weight="bold"),
            text_color=DASH_TEXT,
        ).grid(row=0, column=0, sticky="w", padx=16, pady=(12, 2))

        details = course.code
        if course.semester:
            details = f"{course.code} · {self._t('courses.semester')}: {course.semester}"
        ctk.CTkLabel(card, text=details, text_color=DASH_TEXT_MUTED).grid(
            row=1, column=0, sticky="w", padx=16, pady=(0, 12)
        )

        if enrollable:
            busy = self._enrolling_course_id == course.id
            ctk.CTkButton(
                card,
                text=self._t("courses.enroll.loadingButton" if busy else "courses.enroll.button"),
                width=140,
                fg_color=DASH_ACCENT,
                hover_color=DASH_ACCENT_HOVER,
                text_color=DASH_TEXT,
                state="disabled" if busy else "normal",
                command=lambda course_id=course.id: self._handle_enroll(course_id),
            ).grid(row=0, column=1, rowspan=2, padx=16, pady=12)

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------
    def _handle_enroll(self, course_id: int) -> None:
        identity, credential = self._identity, self._credential
        if identity is None or not credential:
            self._set_feedback(self._t("courses.error.missingAuth"), DASH_DANGER)
            return

        self._enrolling_course_id = course_id
        self._set_feedback("", DASH_TEXT_MUTED)
        self._render()

        def _worker() -> None:
            error_message: str | None = None
            course_code: str | None = None
            try:
                course_code = self._catalog.enroll(course_id, identity, credential)
            except ApiError as exc:
                error_message = exc.detail or self._t("courses.enroll.error.generic")

            def _finalize() -> None:
                self._enrolling_course_id = None
                if error_message:
                    self._set_feedback(f"⚠ {error_message}", DASH_DANGER)
                    self._render()
                    return
                self._set_feedback(
                    self._t("courses.enroll.success", course_code=course_code or course_id),
                    DASH_SUCCESS,
                )
                self._enrolled.reload()

            self._dispatch(_finalize)

        spawn_worker(_worker)

    def _set_feedback(self, message: str, color: str) -> None:
        self._feedback_label.configure(text=message, text_color=color)
