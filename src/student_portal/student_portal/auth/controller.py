from __future__ import annotations

import traceback

from flask import Flask, flash, jsonify, redirect, request, url_for

from ..common.password_strength import password_strength
from ..common.web import make_guards, render_page
from ..core.exceptions import (
    DomainError,
    EmailNotVerifiedError,
    InvalidTokenError,
    StorageError,
    ValidationError,
)
from ..container import Container


def register(app: Flask, container: Container) -> None:
    sessions = container.session_service
    login_required, _ = make_guards(sessions)

    def flash_unexpected(action: str, e: Exception) -> None:
        traceback.print_exc()
        if bool(app.config.get("DEBUG", False)):
            flash(f"System error while {action}: {e}", "danger")
        else:
            flash(f"System error while {action}", "danger")

    @app.route("/login", methods=["GET", "POST"], endpoint="login")
    def login():
        if sessions.is_authenticated:
            return redirect(url_for("dashboard"))

        if request.method == "POST":
            email = request.form.get("email", "").strip()
            password = request.form.get("password", "")

            try:
                sessions.login(email, password)
                flash("Logged in successfully", "success")
                return redirect(url_for("dashboard"))
            except EmailNotVerifiedError as e:
                flash(str(e), "warning")
            except DomainError as e:
                flash(str(e), "danger")
            except StorageError:
                flash("Logged in, but the session could not be saved", "warning")
                return redirect(url_for("dashboard"))
            except Exception as e:
                flash_unexpected("logging in", e)

        return render_page("auth/login.html", sessions)

    @app.route("/signup", methods=["GET", "POST"], endpoint="signup")
    def signup():
        if sessions.is_authenticated:
            return redirect(url_for("dashboard"))

        signup_roles = tuple(app.config.get("SIGNUP_ROLES", ("student", "faculty")))
        form = {"name": "", "email": "", "role": ""}

        if request.method == "POST":
            form = {
                "name": request.form.get("name", ""),
                "email": request.form.get("email", "").strip(),
                "role": request.form.get("role", ""),
            }
            try:
                if form["role"] not in signup_roles:
                    raise ValidationError("Please select a role")

                sessions.signup(
                    name=form["name"],
                    email=form["email"],
                    password=request.form.get("password", ""),
                    role=form["role"],
                )
                flash("Verification email sent! Please check your inbox.", "success")
                return redirect(url_for("login"))
            except DomainError as e:
                flash(str(e), "danger")
            except StorageError:
                flash("Account created, but it could not be saved", "warning")
                return redirect(url_for("login"))
            except Exception as e:
                flash_unexpected("signing up", e)

        return render_page("auth/signup.html", sessions, form=form, signup_roles=signup_roles)

    @app.route("/logout", endpoint="logout")
    def logout():
        try:
            sessions.logout()
        except StorageError:
            flash("Logged out, but the session could not be saved", "warning")
            return redirect(url_for("login"))
        flash("Logged out", "info")
        return redirect(url_for("login"))

    @app.route("/forgot-password", methods=["GET", "POST"], endpoint="forgot_password")
    def forgot_password():
        if request.method == "POST":
            email = request.form.get("email", "").strip()
            try:
                sessions.request_password_reset(email)
            except StorageError:
                traceback.print_exc()
            # Same answer whether or not the account exists.
            flash("If that email is registered, a reset link has been sent.", "success")
            return redirect(url_for("login"))

        return render_page("auth/forgot_password.html", sessions)

    @app.route("/reset-password/<token>", methods=["GET", "POST"], endpoint="reset_password")
    def reset_password(token: str):
        if request.method == "POST":
            try:
                sessions.reset_password(token, request.form.get("password", ""))
                flash("Password has been reset. Please log in.", "success")
                return redirect(url_for("login"))
            except InvalidTokenError as e:
                flash(str(e), "danger")
                return redirect(url_for("forgot_password"))
            except DomainError as e:
                flash(str(e), "danger")
            except StorageError:
                flash("Password changed, but it could not be saved", "warning")
                return redirect(url_for("login"))
            except Exception as e:
                flash_unexpected("resetting the password", e)

        return render_page("auth/reset_password.html", sessions, token=token)

    @app.route("/verify-email/<token>", endpoint="verify_email")
    def verify_email(token: str):
        try:
            sessions.verify_email(token)
            flash("Email verified. You can now log in.", "success")
        except InvalidTokenError as e:
            flash(str(e), "danger")
        except StorageError:
            flash("Email verified, but it could not be saved", "warning")
        return redirect(url_for("login"))

    @app.route("/settings", methods=["GET", "POST"], endpoint="settings")
    @login_required
    def settings():
        user = sessions.current_user
        if request.method == "POST":
            name = request.form.get("name", "").strip()
            try:
                if name:
                    sessions.update_profile(user.id, name=name)
                flash("Profile updated", "success")
                return redirect(url_for("settings"))
            except DomainError as e:
                flash(str(e), "danger")
            except StorageError:
                flash("Profile updated, but it could not be saved", "warning")
            except Exception as e:
                flash_unexpected("updating the profile", e)

        return render_page("auth/settings.html", sessions, active_page="settings")

    @app.route("/api/password-strength", methods=["POST"], endpoint="api_password_strength")
    def api_password_strength():
        data = request.get_json(silent=True) or {}
        result = password_strength(str(data.get("password", "")))
        return jsonify({"score": result.score, "label": result.label, "warning": result.warning})
