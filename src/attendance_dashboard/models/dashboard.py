from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any, Callable, Mapping, Optional, TypeVar

T = TypeVar("T")


class AttendanceStatus(str, Enum):
    PRESENT = "PRESENT"
    ABSENT = "ABSENT"
    LATE = "LATE"
    EXCUSED = "EXCUSED"


@dataclass(frozen=True, slots=True)
class Identity:
    id: int


@dataclass(frozen=True, slots=True)
class UserProfile:
    id: int
    email: str = ""
    first_name: str = ""
    last_name: str = ""
    role: str = ""
    student_id: Optional[int] = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "UserProfile":
        _require_mapping(payload, "user")
        student_id = payload.get("student_id")
        return cls(
            id=int(payload["id"]),
            email=str(payload.get("email") or ""),
            first_name=str(payload.get("first_name") or ""),
            last_name=str(payload.get("last_name") or ""),
            role=str(payload.get("role") or ""),
            student_id=int(student_id) if student_id is not None else None,
        )


@dataclass(frozen=True, slots=True)
class CourseOption:
    """A selectable course as shown in the course picker."""

    value: int
    label: str

    @property
    def id(self) -> int:
        return self.value


@dataclass(frozen=True, slots=True)
class Course:
    id: int
    name: str
    code: str
    semester: Optional[str] = None

    def option(self) -> CourseOption:
        return CourseOption(value=self.id, label=f"{self.code} - {self.name}")

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "Course":
        _require_mapping(payload, "course")
        semester = payload.get("semester")
        return cls(
            id=int(payload["id"]),
            name=str(payload["name"]),
            code=str(payload["code"]),
            semester=str(semester) if semester is not None else None,
        )


def _require_mapping(payload: Any, what: str) -> None:
    if not isinstance(payload, Mapping):
        raise TypeError(f"Expected an object for {what}, got {type(payload).__name__}.")


def _parse_timestamp(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    candidate = str(value).strip()
    if candidate.endswith("Z"):
        candidate = candidate[:-1] + "+00:00"
    return datetime.fromisoformat(candidate.replace(" ", "T", 1))


def _optional(value: Any, cast: Callable[[Any], T]) -> Optional[T]:
    return cast(value) if value is not None else None


@dataclass(frozen=True, slots=True)
class AttendanceRecord:
    id: int
    date: date
    lesson_number: int
    status: str
    created_at: datetime
    updated_at: datetime
    confidence: Optional[float] = None
    emotion: Optional[str] = None
    estimated_age: Optional[int] = None
    estimated_gender: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "AttendanceRecord":
        """Decode one entry of ``attendance_details``.

        Raises ``KeyError``, ``TypeError`` or ``ValueError`` on malformed input.
        """
        _require_mapping(payload, "attendance record")
        return cls(
            id=int(payload["id"]),
            date=date.fromisoformat(str(payload["date"])),
            lesson_number=int(payload["lesson_number"]),
            status=str(payload["status"]),
            created_at=_parse_timestamp(payload["created_at"]),
            updated_at=_parse_timestamp(payload["updated_at"]),
            confidence=_optional(payload.get("confidence"), float),
            emotion=_optional(payload.get("emotion"), str),
            estimated_age=_optional(payload.get("estimated_age"), int),
            estimated_gender=_optional(payload.get("estimated_gender"), str),
        )
