from __future__ import annotations

from functools import wraps
from typing import Callable

from flask import flash, redirect, render_template, url_for

from ..auth.service import SessionService
from ..core.enums import Role
from ..navigation.menu import links_for_role


def make_guards(sessions: SessionService) -> tuple[Callable, Callable]:
    """Build ``login_required`` and ``role_required`` bound to the session store."""

    def login_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if not sessions.is_authenticated:
                flash("Please log in to continue!", "warning")
                return redirect(url_for("login"))
            return view(*args, **kwargs)

        return wrapper

    def role_required(*roles: Role):
        def decorator(view):
            @wraps(view)
            def wrapper(*args, **kwargs):
                if not sessions.is_authenticated:
                    return redirect(url_for("login"))

                user = sessions.current_user
                if user.role not in roles:
                    return render_page("403.html", sessions, status_code=403)

                return view(*args, **kwargs)

            return wrapper

        return decorator

    return login_required, role_required


def render_page(template: str, sessions: SessionService, *, status_code: int = 200, **context):
    """render_template with the current user and their sidebar links filled in."""
    user = sessions.current_user
    context.setdefault("current_user", user)
    context.setdefault("nav_links", links_for_role(user.role if user else None) if user else ())
    html = render_template(template, **context)
    return (html, status_code) if status_code != 200 else html
