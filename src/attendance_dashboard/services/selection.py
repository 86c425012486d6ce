from __future__ import annotations

from typing import Callable, Iterable, Optional

from attendance_dashboard.models import CourseOption

SelectionListener = Callable[[Optional[CourseOption]], None]


class SelectionState:
    """Holds the course currently chosen for detail viewing, if any."""

    def __init__(self, on_change: SelectionListener | None = None) -> None:
        self._current: CourseOption | None = None
        self.on_change = on_change

    @property
    def current(self) -> CourseOption | None:
        return self._current

    def select(
        self,
        option: CourseOption | None,
        *,
        available: Iterable[CourseOption] | None = None,
    ) -> bool:
        """Select ``option``; returns True when the selection changed.

        When ``available`` is given, an option outside it raises ``ValueError``.
        """
        if option is not None and available is not None:
            if option.value not in {item.value for item in available}:
                raise ValueError(f"Course {option.value} is not in the loaded collection.")
        if option == self._current:
            return False
        self._current = option
        if self.on_change is not None:
            self.on_change(option)
        return True

    def clear(self) -> bool:
        return self.select(None)
