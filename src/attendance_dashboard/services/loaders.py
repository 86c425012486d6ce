"""
Background loaders for the attendance view.

Each loader owns one ``LoadState`` and a generation counter. Every new load
bumps the generation; a worker's outcome is committed only if its generation
is still current when it arrives, so responses from superseded inputs are
dropped instead of overwriting newer state.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Generic, Iterable, Optional, TypeVar

from attendance_dashboard.i18n import TranslateFn, Translator
from attendance_dashboard.models import AttendanceRecord, CourseOption, Identity, LoadState
from attendance_dashboard.services.api_client import ApiClient, ApiError, decode_items
from attendance_dashboard.utils.records import sort_records
from attendance_dashboard.utils.workers import Dispatcher, Executor, run_inline, spawn_worker

logger = logging.getLogger(__name__)

T = TypeVar("T")
StateListener = Callable[[LoadState[Any]], None]


class _GenerationalLoader(Generic[T]):
    failure_key = ""

    def __init__(
        self,
        *,
        translate: TranslateFn | None = None,
        executor: Executor | None = None,
        dispatch: Dispatcher | None = None,
        on_change: StateListener | None = None,
    ) -> None:
        self._translate = translate or Translator()
        # No dispatcher means no main loop to return to: run work inline.
        if dispatch is None:
            dispatch = run_inline
            executor = executor or run_inline
        self._executor = executor or spawn_worker
        self._dispatch = dispatch
        self._lock = threading.RLock()
        self.on_change = on_change
        self._state: LoadState[T] = LoadState.idle()
        self._generation = 0

    @property
    def state(self) -> LoadState[T]:
        return self._state

    @property
    def generation(self) -> int:
        return self._generation

    def _next_generation(self) -> int:
        with self._lock:
            self._generation += 1
            return self._generation

    def _reset(self, state: LoadState[T]) -> LoadState[T]:
        """Supersede any in-flight request and settle on ``state`` without fetching."""
        with self._lock:
            self._next_generation()
            self._set_state(state)
            return self._state

    def _set_state(self, state: LoadState[T]) -> None:
        self._state = state
        if self.on_change is not None:
            self.on_change(state)

    def _generic_reason(self) -> str:
        return self._translate(self.failure_key)

    def _submit(self, fetch: Callable[[], T]) -> LoadState[T]:
        with self._lock:
            generation = self._next_generation()
            self._set_state(LoadState.loading())

        def _job() -> None:
            try:
                outcome: LoadState[T] = LoadState.ready(fetch())
            except ApiError as exc:
                outcome = LoadState.failed(exc.detail or self._generic_reason())
            except Exception:
                logger.exception("%s fetch failed unexpectedly", type(self).__name__)
                outcome = LoadState.failed(self._generic_reason())

            self._dispatch(lambda: self._commit(generation, outcome))

        self._executor(_job)
        return self._state

    def _commit(self, generation: int, outcome: LoadState[T]) -> None:
        with self._lock:
            if generation != self._generation:
                logger.debug(
                    "%s discarding stale result (generation %s, current %s)",
                    type(self).__name__,
                    generation,
                    self._generation,
                )
                return
            if outcome.is_failed:
                logger.warning("%s failed: %s", type(self).__name__, outcome.error)
            self._set_state(outcome)


class CollectionLoader(_GenerationalLoader[tuple]):
    """Loads the ordered collection of selectable items for an identity."""

    def __init__(
        self,
        fetch: Callable[[Identity, str], Iterable[Any]],
        *,
        failure_key: str = "attendance.error.fetchCourses",
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self._fetch = fetch
        self.failure_key = failure_key
        self._inputs: tuple[Optional[Identity], Optional[str]] = (None, None)

    def load(self, identity: Identity | None, credential: str | None) -> LoadState[tuple]:
        self._inputs = (identity, credential)
        if identity is None or not credential:
            return self._reset(LoadState.idle())
        return self._submit(lambda: tuple(self._fetch(identity, credential)))

    def reload(self) -> LoadState[tuple]:
        return self.load(*self._inputs)

    def fail(self, reason: str) -> None:
        """Mark the collection as failed without fetching; in-flight results are dropped."""
        self._reset(LoadState.failed(reason))


class DetailLoader(_GenerationalLoader[tuple]):
    """Loads the attendance records of the selected course for an identity."""

    failure_key = "attendance.error.fetchAttendance"

    def __init__(self, client: ApiClient, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._client = client
        self._inputs: tuple[Optional[CourseOption], Optional[Identity], Optional[str]] = (None, None, None)

    def load(
        self,
        selection: CourseOption | None,
        identity: Identity | None,
        credential: str | None,
    ) -> LoadState[tuple[AttendanceRecord, ...]]:
        self._inputs = (selection, identity, credential)
        if selection is None or identity is None or not credential:
            # No selection is not an error: show an empty list.
            return self._reset(LoadState.ready(()))
        return self._submit(lambda: self._fetch_records(selection.value, identity.id, credential))

    def reload(self) -> LoadState[tuple[AttendanceRecord, ...]]:
        return self.load(*self._inputs)

    def _fetch_records(self, course_id: int, student_id: int, credential: str) -> tuple[AttendanceRecord, ...]:
        details = self._client.fetch_course_attendance(course_id, student_id, credential)
        return sort_records(decode_items(details, AttendanceRecord.from_payload))
