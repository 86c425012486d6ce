from .dashboard import AttendanceRecord, AttendanceStatus, Course, CourseOption, Identity, UserProfile
from .load_state import LoadPhase, LoadState

__all__ = [
	"AttendanceRecord",
	"AttendanceStatus",
	"Course",
	"CourseOption",
	"Identity",
	"LoadPhase",
	"LoadState",
	"UserProfile",
]
