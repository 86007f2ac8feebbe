from __future__ import annotations

import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.student_portal.student_portal.auth.bootstrap import ensure_demo_users
from src.student_portal.student_portal.container import build_container
from src.student_portal.student_portal.main import load_settings


def main() -> None:
    settings = load_settings(get_settings_module())
    container = build_container(settings=settings)

    created = ensure_demo_users(container.session_service)

    print(
        "OK: Seeded demo users -> "
        f"{settings.get('STORAGE_BACKEND')}:{settings.get('STORAGE_DIR')} (created={created})"
    )


if __name__ == "__main__":
    main()
