"""
Dependency graph behind the attendance view.

    identity, credential ──► courses (CollectionLoader)
    identity, credential ──► selection.clear()
    selection, identity, credential ──► attendance (DetailLoader)

Only the loaders whose declared inputs changed are re-evaluated.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from attendance_dashboard.i18n import TranslateFn, Translator
from attendance_dashboard.models import CourseOption, Identity, LoadState, UserProfile
from attendance_dashboard.services.api_client import ApiClient
from attendance_dashboard.services.courses import CourseCatalog
from attendance_dashboard.services.identity import MissingIdentityError, resolve_identity
from attendance_dashboard.services.loaders import CollectionLoader, DetailLoader
from attendance_dashboard.services.selection import SelectionState
from attendance_dashboard.utils.workers import Dispatcher, Executor

logger = logging.getLogger(__name__)

StateListener = Callable[[LoadState[Any]], None]
SelectionListener = Callable[[Optional[CourseOption]], None]


class AttendancePipeline:
    def __init__(
        self,
        client: ApiClient,
        *,
        translate: TranslateFn | None = None,
        executor: Executor | None = None,
        dispatch: Dispatcher | None = None,
        on_courses: StateListener | None = None,
        on_attendance: StateListener | None = None,
        on_selection: SelectionListener | None = None,
    ) -> None:
        self._translate = translate or Translator()
        catalog = CourseCatalog(client)
        self.courses = CollectionLoader(
            catalog.course_options,
            failure_key="attendance.error.fetchCourses",
            translate=self._translate,
            executor=executor,
            dispatch=dispatch,
            on_change=on_courses,
        )
        self.attendance = DetailLoader(
            client,
            translate=self._translate,
            executor=executor,
            dispatch=dispatch,
            on_change=on_attendance,
        )
        self.selection = SelectionState(on_change=on_selection)
        self._identity: Identity | None = None
        self._credential: str | None = None
        self._identity_error: str | None = None

    @property
    def identity(self) -> Identity | None:
        return self._identity

    @property
    def credential(self) -> str | None:
        return self._credential

    def update_identity(self, user: UserProfile | None, credential: str | None) -> None:
        """React to the provider publishing a (possibly new) user and credential."""
        identity_error: str | None = None
        try:
            identity = resolve_identity(user)
        except MissingIdentityError as exc:
            logger.warning("Cannot resolve identity: %s", exc)
            identity = None
            identity_error = self._translate("attendance.error.missingStudentId")

        credential = credential or None
        if (identity, credential, identity_error) == (self._identity, self._credential, self._identity_error):
            return

        self._identity = identity
        self._credential = credential
        self._identity_error = identity_error

        self.selection.clear()
        if identity_error is not None:
            self.courses.fail(identity_error)
        else:
            self.courses.load(identity, credential)
        self.attendance.load(None, identity, credential)

    def select(self, option: CourseOption | None) -> None:
        available = self.courses.state.value if self.courses.state.is_ready else None
        if self.selection.select(option, available=available if option is not None else None):
            self.attendance.load(self.selection.current, self._identity, self._credential)

    def clear_selection(self) -> None:
        if self.selection.clear():
            self.attendance.load(None, self._identity, self._credential)

    def reload_courses(self) -> None:
        if self._identity_error is None:
            self.courses.reload()

    def reload_attendance(self) -> None:
        self.attendance.reload()
