from __future__ import annotations

import traceback

from flask import Flask, flash, redirect, request, url_for

from ..common.web import make_guards, render_page
from ..core.enums import Role
from ..core.exceptions import DomainError, StorageError, ValidationError
from ..container import Container
from .stats import chart_rows

EDITABLE_FIELDS = ("title", "description", "subject", "due_date")


def register(app: Flask, container: Container) -> None:
    sessions = container.session_service
    dashboard_svc = container.dashboard_service
    login_required, role_required = make_guards(sessions)

    def students():
        return [u for u in sessions.list_users() if u.role == Role.STUDENT]

    @app.route("/", endpoint="index")
    def index():
        if sessions.is_authenticated:
            return redirect(url_for("dashboard"))
        return redirect(url_for("login"))

    @app.route("/dashboard", endpoint="dashboard")
    @login_required
    def dashboard():
        user = sessions.current_user
        context = {
            "notifications": dashboard_svc.list_notifications(),
            "unread_count": dashboard_svc.unread_count(),
            "assignment_total": len(dashboard_svc.list_assignments()),
        }
        if user.role == Role.STUDENT:
            att = dashboard_svc.attendance_stats(user.id)
            asg = dashboard_svc.assignment_stats(user.id)
            context.update(attendance_stats=att, assignment_stats=asg, chart=chart_rows(att, asg))

        return render_page("dashboard/dashboard.html", sessions, active_page="dashboard", **context)

    @app.route("/attendance", methods=["GET", "POST"], endpoint="attendance")
    @login_required
    def attendance():
        user = sessions.current_user

        if request.method == "POST":
            if user.role == Role.STUDENT:
                return render_page("403.html", sessions, status_code=403)
            try:
                student_id = request.form.get("student_id", "")
                day = request.form.get("date", "")
                if not student_id or not day:
                    raise ValidationError("Student and date are required")
                present = request.form.get("present") in {"1", "true", "on", "yes"}
                dashboard_svc.mark_attendance(student_id, day, present)
                flash("Attendance saved", "success")
            except DomainError as e:
                flash(str(e), "danger")
            except StorageError:
                flash("Attendance marked, but it could not be saved", "warning")
            return redirect(url_for("attendance"))

        if user.role == Role.STUDENT:
            records = sorted(dashboard_svc.attendance_for(user.id).items())
            return render_page(
                "dashboard/attendance.html",
                sessions,
                active_page="attendance",
                records=records,
                stats=dashboard_svc.attendance_stats(user.id),
            )

        rows = [(s, dashboard_svc.attendance_stats(s.id)) for s in students()]
        return render_page("dashboard/attendance.html", sessions, active_page="attendance", student_rows=rows)

    @app.route("/assignments", methods=["GET", "POST"], endpoint="assignments")
    @login_required
    def assignments():
        user = sessions.current_user

        if request.method == "POST":
            if user.role != Role.FACULTY:
                return render_page("403.html", sessions, status_code=403)
            try:
                title = request.form.get("title", "").strip()
                if not title:
                    raise ValidationError("Title is required")
                dashboard_svc.create_assignment(
                    title=title,
                    description=request.form.get("description", ""),
                    subject=request.form.get("subject", ""),
                    due_date=request.form.get("due_date", ""),
                    faculty_id=user.id,
                )
                flash("Assignment added", "success")
            except DomainError as e:
                flash(str(e), "danger")
            except StorageError:
                flash("Assignment added, but it could not be saved", "warning")
            except Exception:
                traceback.print_exc()
                flash("System error while adding the assignment", "danger")
            return redirect(url_for("assignments"))

        return render_page(
            "dashboard/assignments.html",
            sessions,
            active_page="assignments",
            assignments=dashboard_svc.list_assignments(),
        )

    @app.route("/assignments/<assignment_id>", methods=["POST"], endpoint="update_assignment")
    @role_required(Role.FACULTY, Role.ADMIN)
    def update_assignment(assignment_id: str):
        updates = {f: request.form[f] for f in EDITABLE_FIELDS if request.form.get(f)}
        try:
            if dashboard_svc.update_assignment(assignment_id, **updates) is None:
                flash("Assignment not found", "warning")
            else:
                flash("Assignment updated", "success")
        except DomainError as e:
            flash(str(e), "danger")
        except StorageError:
            flash("Assignment updated, but it could not be saved", "warning")
        return redirect(url_for("assignments"))

    @app.route("/assignments/<assignment_id>/submit", methods=["POST"], endpoint="submit_assignment")
    @role_required(Role.STUDENT)
    def submit_assignment(assignment_id: str):
        try:
            if dashboard_svc.submit_assignment(assignment_id, sessions.current_user.id) is None:
                flash("Assignment not found", "warning")
            else:
                flash("Assignment submitted", "success")
        except StorageError:
            flash("Assignment submitted, but it could not be saved", "warning")
        return redirect(url_for("assignments"))

    @app.route("/notifications/<notification_id>/read", methods=["POST"], endpoint="read_notification")
    @login_required
    def read_notification(notification_id: str):
        try:
            dashboard_svc.mark_notification_as_read(notification_id)
        except StorageError:
            flash("Notification could not be saved", "warning")
        return redirect(url_for("dashboard"))

    @app.route("/timetable", endpoint="timetable")
    @role_required(Role.STUDENT)
    def timetable():
        return render_page("dashboard/timetable.html", sessions, active_page="timetable")

    @app.route("/students", endpoint="students")
    @role_required(Role.FACULTY, Role.ADMIN)
    def students_page():
        return render_page(
            "dashboard/people.html", sessions, active_page="students", title="Students", people=students()
        )

    @app.route("/users", endpoint="users")
    @role_required(Role.ADMIN)
    def users_page():
        return render_page(
            "dashboard/people.html", sessions, active_page="users", title="Users", people=sessions.list_users()
        )
