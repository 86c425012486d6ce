from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping

from attendance_dashboard.models import Course, CourseOption, Identity
from attendance_dashboard.services.api_client import ApiClient, decode_items

logger = logging.getLogger(__name__)


class CourseCatalog:
    """Course listing and enrolment for the signed-in student."""

    def __init__(self, client: ApiClient) -> None:
        self._client = client

    def enrolled_courses(self, identity: Identity, token: str) -> list[Course]:
        payload = self._client.fetch_student_courses(identity.id, token)
        return decode_items(payload, Course.from_payload)

    def course_options(self, identity: Identity, token: str) -> list[CourseOption]:
        return [course.option() for course in self.enrolled_courses(identity, token)]

    def all_courses(self, _identity: Identity, token: str) -> list[Course]:
        payload = self._client.fetch_all_courses(token)
        return decode_items(payload, Course.from_payload)

    def enroll(self, course_id: int, identity: Identity, token: str) -> str | None:
        """Enrol the student; returns the course code reported by the server, if any."""
        result: Any = self._client.enroll_student(course_id, identity.id, token)
        logger.info("Enrolled student %s in course %s", identity.id, course_id)
        if isinstance(result, Mapping) and result.get("course_code"):
            return str(result["course_code"])
        return None

    @staticmethod
    def available_courses(all_courses: Iterable[Course], enrolled: Iterable[Course]) -> list[Course]:
        enrolled_ids = {course.id for course in enrolled}
        return [course for course in all_courses if course.id not in enrolled_ids]
