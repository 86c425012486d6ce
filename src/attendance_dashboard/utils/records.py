from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable

from attendance_dashboard.i18n import TranslateFn
from attendance_dashboard.models import AttendanceRecord, AttendanceStatus


class IconKind(Enum):
    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"


class Emphasis(Enum):
    NORMAL = "normal"
    HIGH = "high"


@dataclass(frozen=True, slots=True)
class StatusPresentation:
    icon: IconKind
    text: str
    emphasis: Emphasis


def sort_records(records: Iterable[AttendanceRecord]) -> tuple[AttendanceRecord, ...]:
    """Newest first: descending date, then descending lesson number.

    ``sorted`` is stable with ``reverse=True`` too, so records sharing both keys
    keep their input order.
    """
    return tuple(sorted(records, key=lambda record: (record.date, record.lesson_number), reverse=True))


def classify_status(status: str, translate: TranslateFn) -> StatusPresentation:
    if status == AttendanceStatus.PRESENT.value:
        return StatusPresentation(
            IconKind.POSITIVE,
            translate("attendance.status.present", "Present"),
            Emphasis.NORMAL,
        )
    if status == AttendanceStatus.ABSENT.value:
        return StatusPresentation(
            IconKind.NEGATIVE,
            translate("attendance.status.absent", "Absent"),
            Emphasis.HIGH,
        )
    # LATE, EXCUSED and anything the server adds later
    key = f"attendance.status.{str(status).lower()}"
    return StatusPresentation(IconKind.NEUTRAL, translate(key, str(status)), Emphasis.NORMAL)
