"""Example: use the service layer directly (no Flask).

Controllers are a thin layer; attendance rules live in the ledger and report builders.
"""

import importlib

from config import get_settings_module

from src.fellowship_attendance.fellowship_attendance.container import AttendanceSettings, build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(
        db_config=settings.DB_CONFIG,
        settings=AttendanceSettings(frontend_url=settings.FRONTEND_URL),
    )
    stats = container.cohort_stats.build("demo-cohort")
    print(f"{stats.cohort_name}: {stats.overall_attendance_rate}% over {stats.total_sessions} sessions")


if __name__ == "__main__":
    main()
