from __future__ import annotations

import pytest
import requests

from attendance_dashboard.services.api_client import (
    ApiClient,
    DecodeError,
    RemoteError,
    TransportError,
    decode_items,
    extract_error_message,
)
from attendance_dashboard.models import Course

from conftest import BASE_URL, make_response


def test_base_url_trailing_slash_is_trimmed(session):
    client = ApiClient(BASE_URL + "/", session=session)

    assert client.url_for("/api/courses/") == BASE_URL + "/api/courses/"


def test_requests_carry_timeout_and_headers(client, session):
    session.add("GET", "/api/students/42/courses", make_response(200, []))

    client.fetch_student_courses(42, "token-abc")

    call = session.calls[0]
    assert call["timeout"] == 5
    assert call["json"] is None
    assert "Content-Type" not in call["headers"]


def test_post_sends_json_body(client, session):
    session.add("POST", "/api/courses/3/students", make_response(200, {"course_code": "CS303"}))

    client.enroll_student(3, 42, "token-abc")

    call = session.calls[0]
    assert call["json"] == {"student_id": 42}
    assert call["headers"]["Content-Type"] == "application/json"


def test_connection_failure_is_transport_error(client, session):
    session.add("GET", "/api/courses/", requests.ConnectionError("refused"))

    with pytest.raises(TransportError):
        client.fetch_all_courses("token-abc")


def test_non_ok_status_is_remote_error_with_detail(client, session):
    session.add("GET", "/api/courses/", make_response(403, {"message": "Forbidden for students"}))

    with pytest.raises(RemoteError) as excinfo:
        client.fetch_all_courses("token-abc")

    assert excinfo.value.status == 403
    assert excinfo.value.detail == "Forbidden for students"
    assert "403" in str(excinfo.value)


def test_non_ok_status_with_unparseable_body_has_no_detail(client, session):
    session.add("GET", "/api/courses/", make_response(500, invalid_json=True))

    with pytest.raises(RemoteError) as excinfo:
        client.fetch_all_courses("token-abc")

    assert excinfo.value.detail is None


def test_ok_status_with_invalid_json_is_decode_error(client, session):
    session.add("GET", "/api/auth/me", make_response(200, invalid_json=True))

    with pytest.raises(DecodeError):
        client.fetch_current_user("token-abc")


def test_courses_must_be_a_list(client, session):
    session.add("GET", "/api/students/42/courses", make_response(200, {"items": []}))

    with pytest.raises(DecodeError):
        client.fetch_student_courses(42, "token-abc")


def test_attendance_details_are_unwrapped(client, session):
    session.add(
        "GET",
        "/api/attendance/course/1/student/42",
        make_response(200, {"attendance_details": [{"id": 1}], "course_info": {}}),
    )

    assert client.fetch_course_attendance(1, 42, "token-abc") == [{"id": 1}]


def test_attendance_response_must_be_an_object(client, session):
    session.add("GET", "/api/attendance/course/1/student/42", make_response(200, []))

    with pytest.raises(DecodeError):
        client.fetch_course_attendance(1, 42, "token-abc")


@pytest.mark.parametrize(
    "payload,expected",
    [
        ({"message": "Course is full"}, "Course is full"),
        ({"detail": "Not Found"}, "Not Found"),
        ({"message": "  ", "detail": "Fallback"}, "Fallback"),
        ({"detail": [{"loc": ["body"], "msg": "field required"}]}, None),
        ([], None),
        (None, None),
    ],
)
def test_extract_error_message(payload, expected):
    assert extract_error_message(payload) == expected


def test_decode_items_wraps_shape_errors():
    with pytest.raises(DecodeError):
        decode_items([{"id": 1, "name": "Algorithms"}], Course.from_payload)
