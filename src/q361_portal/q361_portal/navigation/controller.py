from __future__ import annotations

from flask import Flask, g, jsonify, request

from ..container import Container
from ..core.enums import Role
from .visibility import role_display_name, visible_navigation


def register(app: Flask, container: Container) -> None:
    def navigation_for(principal, *, focus: bool = False) -> tuple:
        badges = container.badge_registry.for_principal(principal)
        if badges is not None and focus:
            badges.refetch_all()
        return visible_navigation(principal, badges=badges)

    @app.context_processor
    def inject_navigation():
        principal = g.get("principal")
        if principal is None:
            return {"navigation": (), "current_user": None, "role_display_name": role_display_name}
        return {
            "navigation": navigation_for(principal),
            "current_user": principal,
            "role_display_name": role_display_name,
        }

    @app.route("/api/navigation", endpoint="api_navigation")
    def api_navigation():
        principal = g.get("principal")
        focus = request.args.get("focus", "").lower() in {"1", "true", "yes"}
        categories = navigation_for(principal, focus=focus)
        role = principal.role if principal is not None else None
        return jsonify(
            {
                "role": role.value if isinstance(role, Role) else None,
                "roleDisplayName": role_display_name(role),
                "categories": [c.to_dict() for c in categories],
            }
        )
