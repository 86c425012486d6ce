from __future__ import annotations

from typing import Any, Callable
from unittest.mock import Mock

import pytest

from attendance_dashboard.i18n import Translator
from attendance_dashboard.services.api_client import ApiClient

BASE_URL = "https://api.example.test"


def make_response(status: int = 200, body: Any = None, *, invalid_json: bool = False) -> Mock:
    response = Mock()
    response.status_code = status
    response.ok = 200 <= status < 300
    if invalid_json:
        response.json.side_effect = ValueError("Expecting value")
    else:
        response.json.return_value = body
    return response


class FakeSession:
    """Routes ``request(method, url)`` calls to canned responses keyed by path."""

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], Any] = {}
        self.calls: list[dict[str, Any]] = []

    def add(self, method: str, path: str, response: Any) -> None:
        self.routes[(method, BASE_URL + path)] = response

    def request(self, method: str, url: str, **kwargs: Any) -> Any:
        self.calls.append({"method": method, "url": url, **kwargs})
        outcome = self.routes.get((method, url))
        if outcome is None:
            return make_response(404, {"detail": "Not Found"})
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


class ManualExecutor:
    """Collects submitted jobs so tests decide when (and in which order) they run."""

    def __init__(self) -> None:
        self.jobs: list[Callable[[], None]] = []

    def __call__(self, job: Callable[[], None]) -> None:
        self.jobs.append(job)

    def run(self, index: int) -> None:
        self.jobs.pop(index)()

    def run_all(self) -> None:
        while self.jobs:
            self.jobs.pop(0)()


@pytest.fixture
def session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def client(session: FakeSession) -> ApiClient:
    return ApiClient(BASE_URL, timeout=5, session=session)


@pytest.fixture
def translate() -> Translator:
    return Translator("en")


@pytest.fixture
def executor() -> ManualExecutor:
    return ManualExecutor()


def attendance_payload(*details: dict[str, Any]) -> dict[str, Any]:
    return {
        "attendance_details": list(details),
        "course_info": {"id": 1, "name": "Algorithms", "code": "CS301"},
        "student_info": {"id": 42},
    }


def attendance_detail(record_id: int, day: str, lesson: int, status: str) -> dict[str, Any]:
    return {
        "id": record_id,
        "date": day,
        "lesson_number": lesson,
        "status": status,
        "confidence": 0.93,
        "emotion": None,
        "estimated_age": 21,
        "estimated_gender": "F",
        "created_at": "2024-01-10T09:00:00",
        "updated_at": "2024-01-10T09:00:00Z",
    }
