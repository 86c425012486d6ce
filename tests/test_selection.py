from __future__ import annotations

import pytest

from attendance_dashboard.models import CourseOption
from attendance_dashboard.services.selection import SelectionState

ALGORITHMS = CourseOption(1, "CS301 - Algorithms")
DATABASES = CourseOption(2, "CS302 - Databases")


def test_select_reports_change_once():
    changes = []
    selection = SelectionState(on_change=changes.append)

    assert selection.select(ALGORITHMS)
    assert not selection.select(ALGORITHMS)
    assert changes == [ALGORITHMS]


def test_clear_returns_to_absent():
    selection = SelectionState()
    selection.select(ALGORITHMS)

    assert selection.clear()
    assert selection.current is None
    assert not selection.clear()


def test_select_must_come_from_available_options():
    selection = SelectionState()

    with pytest.raises(ValueError):
        selection.select(DATABASES, available=(ALGORITHMS,))
    assert selection.current is None
    assert selection.select(ALGORITHMS, available=(ALGORITHMS, DATABASES))
