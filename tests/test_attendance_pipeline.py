from __future__ import annotations

import pytest

from attendance_dashboard.models import CourseOption, Identity, LoadState, UserProfile
from attendance_dashboard.services.attendance_pipeline import AttendancePipeline

from conftest import attendance_detail, attendance_payload, make_response

STUDENT = UserProfile(id=5, email="ayse@example.test", first_name="Ayşe", last_name="Yılmaz", role="STUDENT", student_id=42)
ALGORITHMS = CourseOption(1, "CS301 - Algorithms")


@pytest.fixture
def routes(session):
    session.add(
        "GET",
        "/api/students/42/courses",
        make_response(
            200,
            [
                {"id": 1, "name": "Algorithms", "code": "CS301"},
                {"id": 2, "name": "Databases", "code": "CS302"},
            ],
        ),
    )
    session.add(
        "GET",
        "/api/attendance/course/1/student/42",
        make_response(
            200,
            attendance_payload(
                attendance_detail(9, "2024-01-10", 2, "ABSENT"),
                attendance_detail(8, "2024-01-10", 1, "PRESENT"),
                attendance_detail(7, "2024-01-05", 1, "PRESENT"),
            ),
        ),
    )
    session.add("GET", "/api/attendance/course/2/student/42", make_response(200, attendance_payload()))
    return session


def test_identity_drives_course_loading(client, routes, translate):
    pipeline = AttendancePipeline(client, translate=translate)

    pipeline.update_identity(STUDENT, "token-abc")

    assert pipeline.identity == Identity(42)
    assert pipeline.courses.state.value[0] == ALGORITHMS
    assert pipeline.attendance.state == LoadState.ready(())


def test_missing_student_id_fails_courses_without_request(client, session, translate):
    pipeline = AttendancePipeline(client, translate=translate)
    instructor = UserProfile(id=6, role="TEACHER")

    pipeline.update_identity(instructor, "token-abc")

    assert pipeline.courses.state == LoadState.failed(translate("attendance.error.missingStudentId"))
    assert session.calls == []


def test_no_user_keeps_courses_idle(client, session, translate):
    pipeline = AttendancePipeline(client, translate=translate)

    pipeline.update_identity(None, None)

    assert pipeline.courses.state.is_idle
    assert session.calls == []


def test_selecting_course_loads_sorted_attendance(client, routes, translate):
    pipeline = AttendancePipeline(client, translate=translate)
    pipeline.update_identity(STUDENT, "token-abc")

    pipeline.select(ALGORITHMS)

    assert pipeline.selection.current == ALGORITHMS
    assert [record.id for record in pipeline.attendance.state.value] == [9, 8, 7]


def test_clearing_selection_empties_attendance(client, routes, translate):
    pipeline = AttendancePipeline(client, translate=translate)
    pipeline.update_identity(STUDENT, "token-abc")
    pipeline.select(ALGORITHMS)
    calls_before = len(routes.calls)

    pipeline.clear_selection()

    assert pipeline.selection.current is None
    assert pipeline.attendance.state == LoadState.ready(())
    assert len(routes.calls) == calls_before


def test_switching_course_replaces_records(client, routes, translate):
    pipeline = AttendancePipeline(client, translate=translate)
    pipeline.update_identity(STUDENT, "token-abc")
    pipeline.select(ALGORITHMS)

    pipeline.select(CourseOption(2, "CS302 - Databases"))

    assert pipeline.attendance.state == LoadState.ready(())


def test_credential_change_clears_selection_and_refetches(client, routes, translate):
    pipeline = AttendancePipeline(client, translate=translate)
    pipeline.update_identity(STUDENT, "token-abc")
    pipeline.select(ALGORITHMS)

    pipeline.update_identity(STUDENT, "token-xyz")

    assert pipeline.selection.current is None
    assert pipeline.attendance.state == LoadState.ready(())
    assert routes.calls[-1]["headers"]["Authorization"] == "Bearer token-xyz"
    assert pipeline.courses.state.is_ready


def test_unchanged_identity_does_not_refetch(client, routes, translate):
    pipeline = AttendancePipeline(client, translate=translate)
    pipeline.update_identity(STUDENT, "token-abc")
    pipeline.select(ALGORITHMS)
    calls_before = len(routes.calls)

    pipeline.update_identity(STUDENT, "token-abc")

    assert len(routes.calls) == calls_before
    assert pipeline.selection.current == ALGORITHMS


def test_reselecting_same_course_does_not_refetch(client, routes, translate):
    pipeline = AttendancePipeline(client, translate=translate)
    pipeline.update_identity(STUDENT, "token-abc")
    pipeline.select(ALGORITHMS)
    calls_before = len(routes.calls)

    pipeline.select(ALGORITHMS)

    assert len(routes.calls) == calls_before


def test_selecting_unknown_course_is_rejected(client, routes, translate):
    pipeline = AttendancePipeline(client, translate=translate)
    pipeline.update_identity(STUDENT, "token-abc")

    with pytest.raises(ValueError):
        pipeline.select(CourseOption(99, "XX999 - Unknown"))

    assert pipeline.selection.current is None


def test_rapid_identity_changes_commit_latest_only(client, session, translate, executor):
    session.add("GET", "/api/students/41/courses", make_response(200, [{"id": 3, "name": "Old", "code": "OLD1"}]))
    session.add("GET", "/api/students/42/courses", make_response(200, [{"id": 1, "name": "Algorithms", "code": "CS301"}]))
    pipeline = AttendancePipeline(client, translate=translate, executor=executor)

    pipeline.update_identity(UserProfile(id=1, student_id=41), "token-abc")
    pipeline.update_identity(STUDENT, "token-abc")
    executor.jobs.reverse()
    executor.run_all()

    assert pipeline.courses.state == LoadState.ready((ALGORITHMS,))


def test_stages_fail_independently(client, session, translate):
    session.add("GET", "/api/students/42/courses", make_response(200, [{"id": 1, "name": "Algorithms", "code": "CS301"}]))
    session.add("GET", "/api/attendance/course/1/student/42", make_response(500, {}))
    pipeline = AttendancePipeline(client, translate=translate)
    pipeline.update_identity(STUDENT, "token-abc")

    pipeline.select(ALGORITHMS)

    assert pipeline.attendance.state == LoadState.failed(translate("attendance.error.fetchAttendance"))
    assert pipeline.courses.state.is_ready


def test_listeners_receive_updates(client, routes, translate):
    courses, attendance, selections = [], [], []
    pipeline = AttendancePipeline(
        client,
        translate=translate,
        on_courses=courses.append,
        on_attendance=attendance.append,
        on_selection=selections.append,
    )

    pipeline.update_identity(STUDENT, "token-abc")
    pipeline.select(ALGORITHMS)
    pipeline.clear_selection()

    assert courses[-1].is_ready
    assert selections == [ALGORITHMS, None]
    assert attendance[-1] == LoadState.ready(())


def test_reload_courses_retries_after_failure(client, session, translate):
    session.add("GET", "/api/students/42/courses", make_response(503, {"message": "Service unavailable"}))
    pipeline = AttendancePipeline(client, translate=translate)
    pipeline.update_identity(STUDENT, "token-abc")
    assert pipeline.courses.state == LoadState.failed("Service unavailable")

    session.add("GET", "/api/students/42/courses", make_response(200, [{"id": 1, "name": "Algorithms", "code": "CS301"}]))
    pipeline.reload_courses()

    assert pipeline.courses.state == LoadState.ready((ALGORITHMS,))


def test_reload_courses_skipped_without_student_id(client, session, translate):
    pipeline = AttendancePipeline(client, translate=translate)
    pipeline.update_identity(UserProfile(id=6, role="TEACHER"), "token-abc")

    pipeline.reload_courses()

    assert pipeline.courses.state.is_failed
    assert session.calls == []


def test_reload_attendance_refetches_selected_course(client, session, translate):
    session.add("GET", "/api/students/42/courses", make_response(200, [{"id": 1, "name": "Algorithms", "code": "CS301"}]))
    session.add("GET", "/api/attendance/course/1/student/42", make_response(500, {}))
    pipeline = AttendancePipeline(client, translate=translate)
    pipeline.update_identity(STUDENT, "token-abc")
    pipeline.select(ALGORITHMS)
    assert pipeline.attendance.state.is_failed

    session.add(
        "GET",
        "/api/attendance/course/1/student/42",
        make_response(200, attendance_payload(attendance_detail(7, "2024-01-05", 1, "PRESENT"))),
    )
    pipeline.reload_attendance()

    assert [record.id for record in pipeline.attendance.state.value] == [7]
