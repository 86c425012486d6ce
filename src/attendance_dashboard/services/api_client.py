from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping

import requests

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 15.0


class ApiError(RuntimeError):
    """Base class for failures talking to the attendance API.

    ``detail`` holds a display-ready message when the server supplied one.
    """

    def __init__(self, message: str, *, detail: str | None = None) -> None:
        super().__init__(message)
        self.detail = detail


class TransportError(ApiError):
    """Raised when the endpoint cannot be reached or the request times out."""


class RemoteError(ApiError):
    """Raised for any non-2xx response."""

    def __init__(self, status: int, detail: str | None = None) -> None:
        super().__init__(f"HTTP error! status: {status}", detail=detail)
        self.status = status


class DecodeError(ApiError):
    """Raised when a response body is not JSON or does not have the expected shape."""


def extract_error_message(payload: Any) -> str | None:
    if not isinstance(payload, Mapping):
        return None
    for key in ("message", "detail"):
        value = payload.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None


class ApiClient:
    """Thin JSON-over-HTTP fetcher for the attendance platform."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = session or requests.Session()

    def url_for(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def get_json(self, path: str, *, token: str) -> Any:
        return self._request("GET", path, token=token)

    def put_json(self, path: str, payload: Mapping[str, Any], *, token: str) -> Any:
        return self._request("PUT", path, token=token, payload=payload)

    def post_json(self, path: str, payload: Mapping[str, Any], *, token: str) -> Any:
        return self._request("POST", path, token=token, payload=payload)

    # ------------------------------------------------------------------
    # Attendance platform endpoints
    # ------------------------------------------------------------------
    def fetch_current_user(self, token: str) -> Any:
        return self.get_json("/api/auth/me", token=token)

    def update_current_user(self, token: str, *, first_name: str, last_name: str) -> Any:
        return self.put_json(
            "/api/auth/me",
            {"first_name": first_name, "last_name": last_name},
            token=token,
        )

    def fetch_student_courses(self, student_id: int, token: str) -> list[Any]:
        payload = self.get_json(f"/api/students/{student_id}/courses", token=token)
        return _expect_list(payload, "courses")

    def fetch_all_courses(self, token: str) -> list[Any]:
        payload = self.get_json("/api/courses/", token=token)
        return _expect_list(payload, "courses")

    def enroll_student(self, course_id: int, student_id: int, token: str) -> Any:
        return self.post_json(
            f"/api/courses/{course_id}/students",
            {"student_id": student_id},
            token=token,
        )

    def fetch_course_attendance(self, course_id: int, student_id: int, token: str) -> list[Any]:
        payload = self.get_json(
            f"/api/attendance/course/{course_id}/student/{student_id}",
            token=token,
        )
        if not isinstance(payload, Mapping):
            raise DecodeError("Attendance response is not an object.")
        return _expect_list(payload.get("attendance_details"), "attendance_details")

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _request(
        self,
        method: str,
        path: str,
        *,
        token: str,
        payload: Mapping[str, Any] | None = None,
    ) -> Any:
        url = self.url_for(path)
        headers = {
            "Authorization": f"Bearer {token}",
            "Accept": "application/json",
        }
        if payload is not None:
            headers["Content-Type"] = "application/json"

        logger.debug("%s %s", method, url)
        try:
            response = self._session.request(
                method,
                url,
                headers=headers,
                json=payload,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.warning("%s %s failed: %s", method, url, exc)
            raise TransportError(f"Unable to reach {url}: {exc}") from exc

        if not response.ok:
            try:
                body = response.json()
            except ValueError:
                body = None
            logger.warning("%s %s returned %s", method, url, response.status_code)
            raise RemoteError(response.status_code, extract_error_message(body))

        try:
            return response.json()
        except ValueError as exc:
            raise DecodeError(f"Response from {url} is not valid JSON.") from exc


def _expect_list(payload: Any, field_name: str) -> list[Any]:
    if not isinstance(payload, list):
        raise DecodeError(f"Expected a list for {field_name}, got {type(payload).__name__}.")
    return payload


def decode_items(items: Iterable[Any], decoder) -> list[Any]:
    """Apply ``decoder`` to each payload entry, converting shape errors to DecodeError."""
    try:
        return [decoder(item) for item in items]
    except (KeyError, TypeError, ValueError) as exc:
        raise DecodeError(f"Malformed item in response: {exc}") from exc
