from __future__ import annotations

from datetime import date, datetime, timezone

import pytest

from attendance_dashboard.models import AttendanceRecord, Course, CourseOption, UserProfile

from conftest import attendance_detail


def test_course_option_label():
    course = Course.from_payload({"id": 1, "name": "Algorithms", "code": "CS301", "semester": "Fall"})

    assert course.option() == CourseOption(1, "CS301 - Algorithms")
    assert course.option().id == 1
    assert course.semester == "Fall"


def test_attendance_record_from_payload():
    record = AttendanceRecord.from_payload(attendance_detail(8, "2024-01-10", 1, "PRESENT"))

    assert record.date == date(2024, 1, 10)
    assert record.lesson_number == 1
    assert record.confidence == pytest.approx(0.93)
    assert record.emotion is None
    assert record.created_at == datetime(2024, 1, 10, 9, 0, 0)
    assert record.updated_at == datetime(2024, 1, 10, 9, 0, 0, tzinfo=timezone.utc)


def test_attendance_record_keeps_unknown_status():
    record = AttendanceRecord.from_payload(attendance_detail(1, "2024-01-10", 1, "REMOTE"))

    assert record.status == "REMOTE"


def test_attendance_record_accepts_space_separated_timestamps():
    payload = attendance_detail(1, "2024-01-10", 1, "LATE")
    payload["created_at"] = "2024-01-10 09:15:00"

    assert AttendanceRecord.from_payload(payload).created_at == datetime(2024, 1, 10, 9, 15)


def test_attendance_record_rejects_bad_date():
    payload = attendance_detail(1, "10/01/2024", 1, "PRESENT")

    with pytest.raises(ValueError):
        AttendanceRecord.from_payload(payload)



@pytest.mark.parametrize("payload", [None, [], "ok", 3])
@pytest.mark.parametrize("model", [UserProfile, Course, AttendanceRecord])
def test_non_object_payloads_are_type_errors(model, payload):
    with pytest.raises(TypeError):
        model.from_payload(payload)
