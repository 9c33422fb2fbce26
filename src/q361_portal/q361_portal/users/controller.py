from __future__ import annotations

from datetime import timedelta

from flask import Flask, flash, g, jsonify, redirect, render_template, request, session, url_for

from ..container import Container
from ..core.exceptions import AuthenticationError, ValidationError
from ..core.logging import get_logger

logger = get_logger(__name__)


def register(app: Flask, container: Container) -> None:
    app.jinja_env.globals["csrf_token"] = lambda: ""
    app.permanent_session_lifetime = timedelta(days=container.settings.session_days)

    def start_session(principal, *, remember: bool) -> None:
        session.clear()
        session.permanent = bool(remember)
        session["user_id"] = principal.id

    def end_session() -> None:
        user_id = session.get("user_id")
        if user_id is not None:
            container.badge_registry.discard(int(user_id))
        session.clear()

    @app.route("/auth", methods=["GET", "POST"], endpoint="login")
    def login():
        if g.get("principal") is not None:
            return redirect(url_for("home"))

        if request.method == "POST":
            username = request.form.get("username", "")
            password = request.form.get("password", "")
            remember = request.form.get("remember_me")

            try:
                principal = container.auth_service.authenticate(username, password)
                start_session(principal, remember=bool(remember))
                flash("Signed in successfully.", "success")
                return redirect(url_for("home"))
            except (AuthenticationError, ValidationError) as e:
                flash(str(e), "danger")
            except Exception as e:
                logger.exception("Login failed unexpectedly")
                if bool(app.config.get("DEBUG", False)):
                    flash(f"System error while signing in: {e}", "danger")
                else:
                    flash("System error while signing in", "danger")

        return render_template("login.html")

    @app.route("/logout", endpoint="logout")
    def logout():
        end_session()
        flash("You have been signed out.", "info")
        return redirect(url_for("home"))

    @app.route("/api/login", methods=["POST"], endpoint="api_login")
    def api_login():
        data = request.get_json(silent=True) or {}
        try:
            principal = container.auth_service.authenticate(data.get("username", ""), data.get("password", ""))
        except (AuthenticationError, ValidationError) as e:
            return jsonify({"message": str(e)}), 401
        start_session(principal, remember=bool(data.get("rememberMe")))
        return jsonify(principal.to_payload())

    @app.route("/api/logout", methods=["POST"], endpoint="api_logout")
    def api_logout():
        end_session()
        return "", 200

    @app.route("/api/user", endpoint="api_user")
    def api_user():
        principal = g.get("principal")
        if principal is None:
            return jsonify({"message": "Unauthorized"}), 401
        return jsonify(principal.to_payload())
