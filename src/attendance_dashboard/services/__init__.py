from .api_client import ApiClient, ApiError, DecodeError, RemoteError, TransportError
from .attendance_pipeline import AttendancePipeline
from .courses import CourseCatalog
from .identity import ApiIdentityProvider, IdentityProvider, MissingIdentityError, resolve_identity
from .loaders import CollectionLoader, DetailLoader
from .profile import NotAuthenticatedError, ProfileService
from .selection import SelectionState

__all__ = [
	"ApiClient",
	"ApiError",
	"ApiIdentityProvider",
	"AttendancePipeline",
	"CollectionLoader",
	"CourseCatalog",
	"DecodeError",
	"DetailLoader",
	"IdentityProvider",
	"MissingIdentityError",
	"NotAuthenticatedError",
	"ProfileService",
	"RemoteError",
	"SelectionState",
	"TransportError",
	"resolve_identity",
]
