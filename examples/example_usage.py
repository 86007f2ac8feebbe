"""Example: drive the service layer directly (no Flask).

Controllers are a thin layer; the stores hold all the behavior.
"""

from config import get_settings_module

from src.student_portal.student_portal.container import build_container
from src.student_portal.student_portal.main import load_settings


def main():
    settings = load_settings(get_settings_module())
    settings["STORAGE_BACKEND"] = "memory"
    container = build_container(settings=settings)

    sessions = container.session_service
    sessions.signup(name="Jane Doe", email="jane@x.com", password="password1", role="student")
    token = next(iter(sessions.verification_tokens()))
    sessions.verify_email(token)
    user = sessions.login("jane@x.com", "password1")

    dashboard = container.dashboard_service
    dashboard.mark_attendance(user.id, "2024-01-01", True)
    dashboard.mark_attendance(user.id, "2024-01-02", False)
    print(user, dashboard.attendance_stats(user.id))


if __name__ == "__main__":
    main()
