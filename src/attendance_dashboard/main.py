from __future__ import annotations

from attendance_dashboard.config.settings import settings
from attendance_dashboard.logging_setup import configure_logging
from attendance_dashboard.ui.app import DashboardApp


def main() -> None:
    configure_logging(settings.log_level, settings.log_file)
    app = DashboardApp()
    app.run()


if __name__ == "__main__":
    main()
