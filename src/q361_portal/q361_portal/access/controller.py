from __future__ import annotations

from flask import Flask, g, jsonify, redirect, request, session

from ..container import Container
from ..core.logging import get_logger
from .landing import LANDING_ROUTE, anonymous_may_view

logger = get_logger(__name__)


def register(app: Flask, container: Container) -> None:
    """Load the principal for each request and keep anonymous visitors on public pages."""

    @app.before_request
    def load_principal():
        g.principal = None
        user_id = session.get("user_id")
        if user_id is None:
            return None

        try:
            principal = container.session_service.load(int(user_id))
        except Exception:
            logger.exception("Failed to load session user %s", user_id)
            principal = None

        if principal is None:
            # Stale or revoked session.
            container.badge_registry.discard(int(user_id))
            session.clear()
            return None

        g.principal = principal
        return None

    @app.before_request
    def guard_anonymous():
        if g.get("principal") is not None or request.endpoint == "static":
            return None
        if anonymous_may_view(request.path):
            return None
        if request.path.startswith("/api/"):
            return jsonify({"message": "Unauthorized"}), 401
        # Unknown and protected paths look the same from outside.
        return redirect(LANDING_ROUTE)
