from __future__ import annotations

from attendance_dashboard.models import Course, Identity
from attendance_dashboard.services.courses import CourseCatalog

from conftest import make_response


def test_available_courses_excludes_enrolled():
    algorithms = Course(1, "Algorithms", "CS301")
    databases = Course(2, "Databases", "CS302")
    networks = Course(3, "Networks", "CS303")

    available = CourseCatalog.available_courses([algorithms, databases, networks], [databases])

    assert available == [algorithms, networks]


def test_all_courses_decodes_listing(client, session):
    session.add("GET", "/api/courses/", make_response(200, [{"id": 3, "name": "Networks", "code": "CS303"}]))

    courses = CourseCatalog(client).all_courses(Identity(42), "token-abc")

    assert courses == [Course(3, "Networks", "CS303")]


def test_enroll_returns_course_code(client, session):
    session.add("POST", "/api/courses/3/students", make_response(200, {"course_code": "CS303"}))

    assert CourseCatalog(client).enroll(3, Identity(42), "token-abc") == "CS303"
    assert session.calls[0]["json"] == {"student_id": 42}


def test_enroll_without_course_code(client, session):
    session.add("POST", "/api/courses/3/students", make_response(200, {"message": "ok"}))

    assert CourseCatalog(client).enroll(3, Identity(42), "token-abc") is None
