from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, Optional, TypeVar

T = TypeVar("T")


class LoadPhase(Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


@dataclass(frozen=True)
class LoadState(Generic[T]):
    """Lifecycle of one loader: idle, loading, ready with a value, or failed with a reason."""

    phase: LoadPhase
    value: Optional[T] = None
    error: Optional[str] = None

    @classmethod
    def idle(cls) -> "LoadState[Any]":
        return cls(LoadPhase.IDLE)

    @classmethod
    def loading(cls) -> "LoadState[Any]":
        return cls(LoadPhase.LOADING)

    @classmethod
    def ready(cls, value: T) -> "LoadState[T]":
        return cls(LoadPhase.READY, value=value)

    @classmethod
    def failed(cls, reason: str) -> "LoadState[Any]":
        return cls(LoadPhase.FAILED, error=reason)

    @property
    def is_idle(self) -> bool:
        return self.phase is LoadPhase.IDLE

    @property
    def is_loading(self) -> bool:
        return self.phase is LoadPhase.LOADING

    @property
    def is_ready(self) -> bool:
        return self.phase is LoadPhase.READY

    @property
    def is_failed(self) -> bool:
        return self.phase is LoadPhase.FAILED
