from __future__ import annotations

import threading
from typing import Any, Callable

Job = Callable[[], None]
Executor = Callable[[Job], None]
Dispatcher = Callable[[Job], None]


def spawn_worker(job: Job) -> None:
    """Run ``job`` on a daemon thread so the Tk main loop keeps responding."""
    threading.Thread(target=job, daemon=True).start()


def run_inline(job: Job) -> None:
    job()


class TkDispatcher:
    """Marshal callbacks from worker threads back onto the Tk main loop."""

    def __init__(self, widget: Any) -> None:
        self._widget = widget

    def __call__(self, job: Job) -> None:
        try:
            self._widget.after(0, job)
        except RuntimeError:
            # Main loop already torn down; nothing left to update.
            pass
