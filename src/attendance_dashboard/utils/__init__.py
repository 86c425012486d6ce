from .records import Emphasis, IconKind, StatusPresentation, classify_status, sort_records
from .workers import TkDispatcher, run_inline, spawn_worker

__all__ = [
    "Emphasis",
    "IconKind",
    "StatusPresentation",
    "classify_status",
    "sort_records",
    "TkDispatcher",
    "run_inline",
    "spawn_worker",
]
